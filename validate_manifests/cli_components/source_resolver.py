"""Resolution of command-line input into validation sources.

A run validates either standard input, when data is piped in and no file
arguments were given, or an ordered list of file paths made of the explicit
arguments followed by every ``*.yaml`` file found under the requested
directories.
"""

import logging
import os
import sys
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import List, Optional, Sequence, TextIO, Tuple

from validate_manifests.globals.errors import (
    AggregateError,
    DirectoryWalkError,
    ErrorAccumulator,
    UsageError,
)

logger = logging.getLogger(__name__)

STDIN_TOKEN = "-"
YAML_SUFFIX = ".yaml"


@dataclass(frozen=True)
class ResolvedSources:
    """
    Sources selected for one run.

    Attributes:
        use_stdin: Whether standard input is the only source
        files: Paths to validate, in order; empty when ``use_stdin`` is set
        error: Combined directory walk failures, or None
    """

    use_stdin: bool = False
    files: List[str] = field(default_factory=list)
    error: Optional[AggregateError] = None


class SourceResolver(ABC):
    """Interface for turning arguments and directories into sources."""

    @abstractmethod
    def resolve(self, args: Sequence[str], directories: Sequence[str]) -> ResolvedSources:
        """
        Resolve the sources for a run.

        Raises:
            UsageError: If neither files nor directories were given and
                nothing is piped on standard input.
        """
        pass


class StandardSourceResolver(SourceResolver):
    """
    Resolves sources from the process arguments and standard input.

    Args:
        stdin: Stream probed for piped input (defaults to ``sys.stdin``)
    """

    def __init__(self, stdin: Optional[TextIO] = None):
        self.stdin = stdin if stdin is not None else sys.stdin

    def resolve(self, args: Sequence[str], directories: Sequence[str]) -> ResolvedSources:
        wants_stdin = not args or (len(args) == 1 and args[0] == STDIN_TOKEN)
        if wants_stdin and self.stdin_is_piped():
            return ResolvedSources(use_stdin=True)

        if not args and not directories:
            raise UsageError(
                "You must pass at least one file as an argument, "
                "or at least one directory to the directories flag"
            )

        files, error = aggregate_files(args, directories)
        return ResolvedSources(files=files, error=error)

    def stdin_is_piped(self) -> bool:
        """
        Whether standard input is a non-interactive stream.

        Some platforms cannot answer this for a console with nothing piped
        in; in that case input is treated as interactive so the run falls
        back to file arguments instead of blocking on the terminal.
        """
        if self.stdin is None:
            return False
        try:
            return not self.stdin.isatty()
        except (AttributeError, OSError, ValueError) as e:
            logger.debug("Could not determine whether stdin is interactive: %s", e)
            return False


def aggregate_files(
    args: Sequence[str], directories: Sequence[str]
) -> Tuple[List[str], Optional[AggregateError]]:
    """
    Collect explicit file arguments followed by ``*.yaml`` files under each directory.

    Each directory is walked independently. A directory that cannot be
    walked is reported in the returned error and does not stop the others.

    Returns:
        The files found and the combined walk failures, if any.
    """
    files = list(args)
    errors = ErrorAccumulator()

    for directory in directories:
        try:
            walk_directory(directory, files)
        except DirectoryWalkError as e:
            logger.debug("%s", e)
            errors.append(e)

    return files, errors.error_or_none()


def walk_directory(directory: str, found: Optional[List[str]] = None) -> List[str]:
    """
    Recursively collect regular files under ``directory`` named ``*.yaml``.

    Entries are visited in lexical order, descending into each
    subdirectory where its name sorts. Matches are appended to ``found`` as
    they are seen, so they are kept even when the walk fails later on.

    Raises:
        DirectoryWalkError: On the first entry that cannot be read.
    """
    found = [] if found is None else found
    try:
        if not os.path.isdir(directory):
            os.stat(directory)
            if directory.endswith(YAML_SUFFIX):
                found.append(directory)
            return found
        _walk(directory, found)
    except OSError as e:
        raise DirectoryWalkError(directory, e) from e
    return found


def _walk(path: str, found: List[str]) -> None:
    with os.scandir(path) as entries:
        children = sorted(entries, key=lambda entry: entry.name)
    for entry in children:
        if entry.is_dir(follow_symlinks=False):
            _walk(entry.path, found)
        elif entry.name.endswith(YAML_SUFFIX):
            found.append(entry.path)

import logging
import os
import sys
from abc import ABC, abstractmethod
from typing import Optional, Sequence, TextIO

from rich.console import Console
from rich.progress import Progress, SpinnerColumn, TextColumn

from validate_manifests.cli_components.result_reporter import (
    ResultReporter,
    StandardResultReporter,
)
from validate_manifests.cli_components.source_resolver import (
    SourceResolver,
    StandardSourceResolver,
)
from validate_manifests.cli_components.validation_service import (
    StandardValidationService,
    ValidationService,
)
from validate_manifests.globals.cli_config import RunConfig
from validate_manifests.globals.errors import (
    SourceReadError,
    UsageError,
    ValidationInvocationError,
)
from validate_manifests.globals.schema_cache import SchemaCache

logger = logging.getLogger(__name__)


class CLI(ABC):
    """Interface for CLI implementations."""

    @abstractmethod
    def run(self, args: Sequence[str], directories: Sequence[str]) -> int:
        """
        Run the CLI and return exit code.

        Returns:
            int: Exit code (0=success, 1=failures)
        """
        pass


class StandardCLI(CLI):
    """
    Standard CLI implementation with separated concerns.

    Coordinates validation using pluggable components:
    - SourceResolver: picks stdin or the list of files to validate
    - ValidationService: validates the documents of one source
    - ResultReporter: classifies and displays each result

    A single SchemaCache is created per run and shared by every
    validation call.
    """

    def __init__(
        self,
        config: RunConfig,
        resolver: Optional[SourceResolver] = None,
        validation_service: Optional[ValidationService] = None,
        reporter: Optional[ResultReporter] = None,
        schema_cache: Optional[SchemaCache] = None,
        stdin: Optional[TextIO] = None,
    ):
        """
        Initialize CLI with configuration and optional component overrides.

        Args:
            config: Run configuration, shared by reference
            resolver: Source resolver (defaults to StandardSourceResolver)
            validation_service: Validation engine (defaults to StandardValidationService)
            reporter: Result reporter (defaults to StandardResultReporter)
            schema_cache: Cache for the run (a new one is created when omitted)
            stdin: Stream read when validating piped input (defaults to sys.stdin)
        """
        self.config = config
        self.stdin = stdin if stdin is not None else sys.stdin
        self.resolver = resolver or StandardSourceResolver(self.stdin)
        self.validation_service = validation_service or StandardValidationService()
        self.reporter = reporter or StandardResultReporter(
            console=Console(highlight=False, force_terminal=config.force_color or None),
            error_console=Console(
                stderr=True, highlight=False, force_terminal=config.force_color or None
            ),
        )
        self.schema_cache = schema_cache
        self.success = True

    def run(self, args: Sequence[str], directories: Sequence[str]) -> int:
        """Main CLI execution method.

        Resolves the sources, validates each in order with the shared schema
        cache, and reports every result.

        A source that cannot be read, or that the validation engine cannot
        process, fails the run and, when ``exit_on_error`` is set, stops it
        immediately. Documents that violate their schema fail the run but
        never stop it.

        Returns:
            int: 0 when every source and document passed, 1 otherwise.
        """
        self.success = True
        try:
            sources = self.resolver.resolve(args, directories)
        except UsageError as e:
            self.reporter.report_error(e)
            return 1

        if self.schema_cache is None:
            self.schema_cache = SchemaCache()

        if sources.use_stdin:
            self._run_stdin()
            return self.exit_code()

        if sources.error is not None:
            self.reporter.report_error(sources.error)
            self.success = False

        for file_name in sources.files:
            if not self._run_file(file_name) and self.config.exit_on_error:
                logger.debug("Stopping early after failure in %s", file_name)
                return 1

        return self.exit_code()

    def exit_code(self) -> int:
        return 0 if self.success else 1

    def _run_stdin(self) -> None:
        """Validate everything piped on standard input as one source."""
        stream = getattr(self.stdin, "buffer", self.stdin)
        data = stream.read()
        if isinstance(data, str):
            data = data.encode("utf-8")
        lines = data.split(b"\n")
        if lines and lines[-1] == b"":
            lines.pop()
        buffer = b"".join((line[:-1] if line.endswith(b"\r") else line) + b"\n" for line in lines)
        try:
            results = self.validation_service.validate(buffer, self.schema_cache, self.config)
        except ValidationInvocationError as e:
            self.reporter.report_error(e)
            self.success = False
            return
        self.success = self.reporter.report_all(results, self.success)

    def _run_file(self, file_name: str) -> bool:
        """
        Validate one file.

        Returns:
            bool: False if the file could not be read or processed.
        """
        try:
            content = self._read(file_name)
        except SourceReadError as e:
            self.reporter.report_error(e)
            self.success = False
            return False

        self.config.file_name = file_name
        try:
            with Progress(
                SpinnerColumn(),
                TextColumn("[progress.description]{task.description}"),
                transient=True,
            ) as progress:
                progress.add_task(
                    description=f"Validating {os.path.basename(file_name)}...", total=None
                )
                results = self.validation_service.validate(
                    content, self.schema_cache, self.config
                )
        except ValidationInvocationError as e:
            self.reporter.report_error(e)
            self.success = False
            return False

        self.success = self.reporter.report_all(results, self.success)
        return True

    def _read(self, file_name: str) -> bytes:
        path = os.path.abspath(file_name)
        logger.debug("Reading %s", path)
        try:
            with open(path, "rb") as f:
                return f.read()
        except OSError as e:
            raise SourceReadError(file_name, e) from e


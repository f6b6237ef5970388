"""Error taxonomy for manifest validation runs.

Every error raised while resolving or validating sources derives from
``ManifestValidationError``. Errors collected from independent operations,
such as walking several directories, are merged with ``ErrorAccumulator``.
"""

from typing import Iterator, List, Optional


class ManifestValidationError(Exception):
    """Base class for all errors raised by validate-manifests."""


class UsageError(ManifestValidationError):
    """No sources were given on the command line."""


class SourceReadError(ManifestValidationError):
    """A resolved source file could not be opened or read."""

    def __init__(self, path: str, cause: Optional[BaseException] = None):
        self.path = path
        self.cause = cause
        super().__init__(f"Could not open file {path}")


class DirectoryWalkError(ManifestValidationError):
    """A directory passed with --directories could not be walked."""

    def __init__(self, directory: str, cause: OSError):
        self.directory = directory
        self.cause = cause
        reason = cause.strerror or str(cause)
        failed_path = cause.filename
        if failed_path and str(failed_path) != str(directory):
            reason = f"{reason}: {failed_path}"
        super().__init__(f"Could not walk directory {directory}: {reason}")


class ValidationInvocationError(ManifestValidationError):
    """The validation engine could not process a source as a whole."""


class AggregateError(ManifestValidationError):
    """Several independent errors combined into one value.

    The original errors are kept in the order they were raised.
    """

    def __init__(self, errors: List[BaseException]):
        self.errors = list(errors)
        super().__init__(str(self))

    def __str__(self) -> str:
        count = len(self.errors)
        noun = "error" if count == 1 else "errors"
        lines = [f"{count} {noun} occurred:"]
        lines.extend(f"\t* {err}" for err in self.errors)
        return "\n".join(lines)

    def __iter__(self) -> Iterator[BaseException]:
        return iter(self.errors)


class ErrorAccumulator:
    """Append-only collection of errors from unrelated sub-operations."""

    def __init__(self) -> None:
        self._errors: List[BaseException] = []

    def append(self, error: BaseException) -> None:
        self._errors.append(error)

    def __len__(self) -> int:
        return len(self._errors)

    def error_or_none(self) -> Optional[AggregateError]:
        """Return the combined error, or None if nothing was accumulated."""
        if not self._errors:
            return None
        return AggregateError(self._errors)

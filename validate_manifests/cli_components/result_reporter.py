from abc import ABC, abstractmethod
from enum import Enum
from typing import Iterable, Optional

from rich.console import Console

from validate_manifests.cli_components.output_formatter import ColoredFormatter, OutputFormatter
from validate_manifests.globals.validation_result import ValidationResult


class ResultCategory(Enum):
    INVALID = "invalid"
    EMPTY_DOCUMENT = "empty_document"
    SKIPPED_NO_SCHEMA = "skipped_no_schema"
    VALID = "valid"

    @property
    def is_failure(self) -> bool:
        return self is ResultCategory.INVALID


def classify(result: ValidationResult) -> ResultCategory:
    """Map a result to its category. Earlier checks take priority."""
    if result.errors:
        return ResultCategory.INVALID
    if not result.kind:
        return ResultCategory.EMPTY_DOCUMENT
    if not result.validated_against_schema:
        return ResultCategory.SKIPPED_NO_SCHEMA
    return ResultCategory.VALID


class ResultReporter(ABC):
    """Interface for classifying and reporting validation results."""

    @abstractmethod
    def report(self, result: ValidationResult) -> ResultCategory:
        """Report a single result and return its category."""
        pass

    @abstractmethod
    def report_error(self, error: Exception) -> None:
        """Report an error affecting a whole source."""
        pass

    def report_all(self, results: Iterable[ValidationResult], success: bool) -> bool:
        """
        Report every result in order.

        Returns:
            bool: ``success``, or False if any result was invalid.
        """
        for result in results:
            if self.report(result).is_failure:
                success = False
        return success


class StandardResultReporter(ResultReporter):
    """
    Prints one report per result through a rich console.

    Args:
        console: Console for result lines (defaults to stdout)
        error_console: Console for source errors (defaults to stderr)
        formatter: Output formatter (defaults to ColoredFormatter)
    """

    def __init__(
        self,
        console: Optional[Console] = None,
        error_console: Optional[Console] = None,
        formatter: Optional[OutputFormatter] = None,
    ):
        self.console = console or Console(highlight=False)
        self.error_console = error_console or Console(stderr=True, highlight=False)
        self.formatter = formatter or ColoredFormatter()

    def report(self, result: ValidationResult) -> ResultCategory:
        category = classify(result)
        if category is ResultCategory.INVALID:
            for line in self.formatter.format_invalid(result):
                self._emit(line)
        elif category is ResultCategory.EMPTY_DOCUMENT:
            self._emit(self.formatter.format_empty(result))
        elif category is ResultCategory.SKIPPED_NO_SCHEMA:
            self._emit(self.formatter.format_skipped(result))
        else:
            self._emit(self.formatter.format_valid(result))
        return category

    def report_error(self, error: Exception) -> None:
        self.error_console.print(self.formatter.format_error(str(error)), soft_wrap=True)

    def _emit(self, line: str) -> None:
        self.console.print(line, soft_wrap=True)

from abc import ABC, abstractmethod
from typing import List

from rich.markup import escape

from validate_manifests.globals.validation_result import ValidationResult


class OutputFormatter(ABC):
    """Interface for formatting CLI output."""

    @abstractmethod
    def format_invalid(self, result: ValidationResult) -> List[str]:
        """Format a document that failed schema validation, one line per error."""
        pass

    @abstractmethod
    def format_empty(self, result: ValidationResult) -> str:
        """Format a document with no kind."""
        pass

    @abstractmethod
    def format_skipped(self, result: ValidationResult) -> str:
        """Format a document that was not checked against a schema."""
        pass

    @abstractmethod
    def format_valid(self, result: ValidationResult) -> str:
        """Format a document that passed validation."""
        pass

    @abstractmethod
    def format_error(self, message: str) -> str:
        """Format a source-level error."""
        pass


class ColoredFormatter(OutputFormatter):
    """
    Rich markup formatter.

    Output is rendered through a ``rich.console.Console``, which drops the
    styles when writing to something other than a terminal unless color
    is forced.
    """

    STYLE = {
        "pass": "green",
        "warn": "yellow",
        "error": "bold red",
        "detail": "dim",
    }

    def format_invalid(self, result: ValidationResult) -> List[str]:
        lines = [
            self._tag("warn", "WARN")
            + f" - {escape(result.file_name)} contains an invalid {escape(result.kind)}"
        ]
        for desc in result.errors:
            lines.append(f'  [{self.STYLE["detail"]}]--->[/] {escape(desc)}')
        return lines

    def format_empty(self, result: ValidationResult) -> str:
        return (
            self._tag("pass", "PASS")
            + f" - {escape(result.file_name)} contains an empty YAML document"
        )

    def format_skipped(self, result: ValidationResult) -> str:
        return (
            self._tag("warn", "WARN")
            + f" - {escape(result.file_name)} containing a {escape(result.kind)}"
            " was not validated against a schema"
        )

    def format_valid(self, result: ValidationResult) -> str:
        return (
            self._tag("pass", "PASS")
            + f" - {escape(result.file_name)} contains a valid {escape(result.kind)}"
        )

    def format_error(self, message: str) -> str:
        return self._tag("error", "ERR ") + f" - {escape(message)}"

    def _tag(self, style: str, label: str) -> str:
        return f"[{self.STYLE[style]}]{label}[/]"

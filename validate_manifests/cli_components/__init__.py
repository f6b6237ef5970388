"""CLI components for source resolution, validation, and result reporting.

This module provides the building blocks for the CLI interface: the source
resolver that picks what to validate, the validation service that checks
documents against schemas, and the reporter that classifies and displays
each result.
"""

from .output_formatter import ColoredFormatter, OutputFormatter
from .result_reporter import ResultCategory, ResultReporter, StandardResultReporter, classify
from .source_resolver import ResolvedSources, SourceResolver, StandardSourceResolver
from .validation_service import StandardValidationService, ValidationService

__all__ = [
    "ColoredFormatter",
    "OutputFormatter",
    "ResolvedSources",
    "ResultCategory",
    "ResultReporter",
    "SourceResolver",
    "StandardResultReporter",
    "StandardSourceResolver",
    "StandardValidationService",
    "ValidationService",
    "classify",
]

from .cli_config import RunConfig
from .errors import (
    AggregateError,
    DirectoryWalkError,
    ErrorAccumulator,
    ManifestValidationError,
    SourceReadError,
    UsageError,
    ValidationInvocationError,
)
from .schema_cache import SchemaCache
from .validation_result import ValidationResult
from .web_fetcher import SchemaFetcher, WebSchemaFetcher

__all__ = [
    "AggregateError",
    "DirectoryWalkError",
    "ErrorAccumulator",
    "ManifestValidationError",
    "RunConfig",
    "SchemaCache",
    "SchemaFetcher",
    "SourceReadError",
    "UsageError",
    "ValidationInvocationError",
    "ValidationResult",
    "WebSchemaFetcher",
]

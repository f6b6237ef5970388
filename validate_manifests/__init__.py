"""validate-manifests: Kubernetes manifest validation CLI tool.

This package validates YAML manifests against the JSON schemas published
for each Kubernetes kind and version. It can be used both as a CLI tool and
as a Python library.

Example:
    CLI usage:
        $ validate-manifests deployment.yaml     # Validate specific files
        $ validate-manifests -d manifests/       # Validate a directory tree
        $ cat pod.yaml | validate-manifests      # Validate piped input

    Library usage:
        from validate_manifests import validate_manifest

        for result in validate_manifest('deployment.yaml'):
            print(result.kind, result.errors)
"""

import dataclasses
from typing import List, Optional

__version__ = "0.1.0"

from .cli import CLI, StandardCLI
from .cli_components import ResultCategory, classify
from .globals import (
    AggregateError,
    ErrorAccumulator,
    ManifestValidationError,
    RunConfig,
    SchemaCache,
    ValidationResult,
)


def validate_manifest(
    filepath: str,
    config: Optional[RunConfig] = None,
    cache: Optional[SchemaCache] = None,
) -> List[ValidationResult]:
    """Validate every document in a manifest file.

    Args:
        filepath: Path to the YAML manifest
        config: Run configuration (defaults to RunConfig())
        cache: Schema cache to reuse across calls

    Returns:
        List[ValidationResult]: One result per document

    Raises:
        OSError: If the file cannot be read
        ValidationInvocationError: If the file cannot be processed at all
    """
    from .cli_components import StandardValidationService

    config = dataclasses.replace(config or RunConfig(), file_name=filepath)
    with open(filepath, "rb") as f:
        content = f.read()
    return StandardValidationService().validate(content, cache or SchemaCache(), config)


__all__ = [
    "validate_manifest",
    "AggregateError",
    "ErrorAccumulator",
    "ManifestValidationError",
    "ResultCategory",
    "RunConfig",
    "SchemaCache",
    "ValidationResult",
    "classify",
    "CLI",
    "StandardCLI",
]

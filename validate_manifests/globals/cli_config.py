from dataclasses import dataclass, field
from typing import List, Optional

DEFAULT_SCHEMA_LOCATION = "https://kubernetesjsonschema.dev"
OPENSHIFT_SCHEMA_LOCATION = "https://raw.githubusercontent.com/garethr/openshift-json-schema/master"
STDIN_FILE_NAME = "stdin"


@dataclass
class RunConfig:
    """
    Configuration for one validation run.

    Built once at startup and shared by reference with the orchestrator and
    the validation service. Only ``file_name`` changes during a run.

    Attributes:
        schema_location: Base URL or directory for schemas, or None for the default
        additional_schema_locations: Fallback bases tried after the primary one
        kubernetes_version: Version of the schemas to validate against
        strict: Use strict schemas that reject additional properties
        ignore_missing_schemas: Skip documents without a schema instead of failing
        kinds_to_skip: Kinds that are never checked against a schema
        openshift: Use the OpenShift schema layout
        exit_on_error: Stop at the first source that cannot be read or validated
        file_name: Name reported for the source currently being validated
        force_color: Colored output even when stdout is not a terminal
    """

    schema_location: Optional[str] = None
    additional_schema_locations: List[str] = field(default_factory=list)
    kubernetes_version: str = "master"
    strict: bool = False
    ignore_missing_schemas: bool = False
    kinds_to_skip: List[str] = field(default_factory=list)
    openshift: bool = False
    exit_on_error: bool = False
    file_name: str = STDIN_FILE_NAME
    force_color: bool = False

    def schema_locations(self) -> List[str]:
        """Base locations to search for schemas, in priority order."""
        if self.schema_location:
            primary = self.schema_location
        elif self.openshift:
            primary = OPENSHIFT_SCHEMA_LOCATION
        else:
            primary = DEFAULT_SCHEMA_LOCATION
        return [primary] + [loc for loc in self.additional_schema_locations if loc]

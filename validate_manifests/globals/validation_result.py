from dataclasses import dataclass, field
from typing import List


@dataclass(frozen=True)
class ValidationResult:
    """
    Outcome of validating one document.

    Attributes:
        file_name: Name of the source the document came from
        kind: Document kind, empty when the document declares none
        errors: Schema violations in the order reported by the engine
        validated_against_schema: Whether a schema was actually applied
        api_version: Declared apiVersion, empty when absent
    """

    file_name: str
    kind: str = ""
    errors: List[str] = field(default_factory=list)
    validated_against_schema: bool = False
    api_version: str = ""

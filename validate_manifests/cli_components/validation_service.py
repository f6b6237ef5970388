import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, List

import jsonschema
import yaml

from validate_manifests.globals.cli_config import RunConfig
from validate_manifests.globals.errors import ValidationInvocationError
from validate_manifests.globals.schema_cache import SchemaCache
from validate_manifests.globals.validation_result import ValidationResult

logger = logging.getLogger(__name__)


class ValidationService(ABC):
    """Interface for engines that validate the documents of one source."""

    @abstractmethod
    def validate(
        self, content: bytes, cache: SchemaCache, config: RunConfig
    ) -> List[ValidationResult]:
        """
        Validate every document in ``content``.

        Args:
            content: Raw bytes of the source, possibly holding several documents
            cache: Schema cache shared by every call in the run
            config: Run configuration; ``config.file_name`` names the source

        Returns:
            List[ValidationResult]: One result per document, in document order.

        Raises:
            ValidationInvocationError: If the source as a whole cannot be processed.
        """
        pass


class StandardValidationService(ValidationService):
    """
    Validates Kubernetes-style manifests against JSON schemas.

    Each document's ``kind`` and ``apiVersion`` select a schema file under
    the configured schema locations. Schemas are looked up through the
    shared ``SchemaCache``.
    """

    def validate(
        self, content: bytes, cache: SchemaCache, config: RunConfig
    ) -> List[ValidationResult]:
        try:
            text = content.decode("utf-8")
            documents = list(yaml.safe_load_all(text))
        except UnicodeDecodeError as e:
            raise ValidationInvocationError(f"{config.file_name} is not valid UTF-8: {e}") from e
        except yaml.YAMLError as e:
            raise ValidationInvocationError(f"Failed to decode YAML from {config.file_name}: {e}") from e

        if not documents:
            return [ValidationResult(file_name=config.file_name)]

        results: List[ValidationResult] = []
        for document in documents:
            results.extend(self._validate_document(document, cache, config))
        return results

    def _validate_document(
        self, document: Any, cache: SchemaCache, config: RunConfig
    ) -> List[ValidationResult]:
        file_name = config.file_name
        if document is None or document == {}:
            return [ValidationResult(file_name=file_name)]
        if not isinstance(document, dict):
            return [ValidationResult(file_name=file_name, errors=["Document is not a mapping"])]

        kind = document.get("kind")
        if kind is None:
            return [ValidationResult(file_name=file_name)]
        kind = str(kind)

        api_version = document.get("apiVersion")
        if api_version is None:
            return [
                ValidationResult(
                    file_name=file_name, kind=kind, errors=["Missing 'apiVersion' key"]
                )
            ]
        api_version = str(api_version)

        if kind == "List":
            return self._validate_list(document, kind, api_version, cache, config)

        if kind in config.kinds_to_skip:
            logger.debug("Skipping %s in %s", kind, file_name)
            return [ValidationResult(file_name=file_name, kind=kind, api_version=api_version)]

        schema = self._resolve_schema(kind, api_version, cache, config)
        if schema is None:
            return [ValidationResult(file_name=file_name, kind=kind, api_version=api_version)]

        return [
            ValidationResult(
                file_name=file_name,
                kind=kind,
                api_version=api_version,
                errors=self._check(document, schema),
                validated_against_schema=True,
            )
        ]

    def _validate_list(
        self,
        document: Dict[str, Any],
        kind: str,
        api_version: str,
        cache: SchemaCache,
        config: RunConfig,
    ) -> List[ValidationResult]:
        items = document.get("items")
        if not isinstance(items, list):
            return [
                ValidationResult(
                    file_name=config.file_name,
                    kind=kind,
                    api_version=api_version,
                    errors=["items: List must contain a sequence of items"],
                )
            ]

        results: List[ValidationResult] = []
        for item in items:
            results.extend(self._validate_document(item, cache, config))
        return results

    def _resolve_schema(
        self, kind: str, api_version: str, cache: SchemaCache, config: RunConfig
    ) -> Any:
        tried = []
        for base in config.schema_locations():
            url = schema_url(base, kind, api_version, config)
            schema = cache.get(url)
            if schema is not None:
                return schema
            tried.append(url)

        if config.ignore_missing_schemas:
            return None
        raise ValidationInvocationError(
            f"Failed initializing schema for {kind} ({api_version}) in {config.file_name}; "
            f"tried: {', '.join(tried)}"
        )

    def _check(self, document: Dict[str, Any], schema: Dict[str, Any]) -> List[str]:
        validator_cls = jsonschema.validators.validator_for(
            schema, default=jsonschema.Draft4Validator
        )
        validator = validator_cls(schema)

        errors = []
        for error in validator.iter_errors(document):
            path = ".".join(str(p) for p in error.absolute_path) or "(root)"
            errors.append(f"{path}: {error.message}")
        return sorted(errors)


def schema_url(base: str, kind: str, api_version: str, config: RunConfig) -> str:
    """
    Build the location of the schema for ``kind`` at ``api_version``.

    Examples:
        apps/v1 Deployment, master -> {base}/master-standalone/deployment-apps-v1.json
        v1 Pod, 1.18.0, strict     -> {base}/v1.18.0-standalone-strict/pod-v1.json
    """
    version = config.kubernetes_version
    if version != "master":
        version = "v" + version.lstrip("v")
    strict_suffix = "-strict" if config.strict else ""
    prefix = f"{base.rstrip('/')}/{version}-standalone{strict_suffix}"

    if config.openshift:
        return f"{prefix}/{kind.lower()}.json"

    group_parts = api_version.split("/")
    kind_suffix = "-" + group_parts[0].split(".")[0].lower()
    if len(group_parts) > 1:
        kind_suffix += "-" + group_parts[1].lower()
    return f"{prefix}/{kind.lower()}{kind_suffix}.json"

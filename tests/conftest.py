"""Shared test configuration and fixtures for validate-manifests tests."""

import json
from pathlib import Path

import pytest

from tests.helper import DEPLOYMENT_SCHEMA, POD_SCHEMA, CountingSchemaFetcher
from validate_manifests.globals.cli_config import RunConfig


@pytest.fixture
def schema_dir(tmp_path: Path) -> Path:
    """Local schema location holding Pod and Deployment schemas."""
    root = tmp_path / "schemas"
    for flavour in ("master-standalone", "master-standalone-strict"):
        directory = root / flavour
        directory.mkdir(parents=True)
        (directory / "pod-v1.json").write_text(json.dumps(POD_SCHEMA))
        (directory / "deployment-apps-v1.json").write_text(json.dumps(DEPLOYMENT_SCHEMA))
    return root


@pytest.fixture
def run_config(schema_dir: Path) -> RunConfig:
    return RunConfig(schema_location=str(schema_dir))


@pytest.fixture
def counting_fetcher() -> CountingSchemaFetcher:
    return CountingSchemaFetcher()


@pytest.fixture
def write_manifest(tmp_path: Path):
    """Write a manifest under the temporary directory and return its path."""

    def _write(name: str, content: str) -> Path:
        path = tmp_path / "manifests" / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content)
        return path

    return _write

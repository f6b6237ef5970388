"""Unit tests for the validation orchestrator."""

import io
from pathlib import Path
from typing import List

import pytest
from rich.console import Console

from tests.helper import INVALID_POD, VALID_POD, CountingSchemaFetcher
from validate_manifests.cli import StandardCLI
from validate_manifests.cli_components.result_reporter import StandardResultReporter
from validate_manifests.cli_components.source_resolver import StandardSourceResolver
from validate_manifests.cli_components.validation_service import (
    StandardValidationService,
    ValidationService,
)
from validate_manifests.globals.cli_config import RunConfig
from validate_manifests.globals.errors import ValidationInvocationError
from validate_manifests.globals.schema_cache import SchemaCache
from validate_manifests.globals.validation_result import ValidationResult


class InteractiveStream(io.StringIO):
    def isatty(self) -> bool:
        return True


class PipedStream(io.StringIO):
    def isatty(self) -> bool:
        return False


class PipedBytes(io.TextIOWrapper):
    """Text stream over raw bytes, as sys.stdin is when input is piped."""

    def isatty(self) -> bool:
        return False


class RecordingValidationService(ValidationService):
    """Validation service that records every call and returns canned results."""

    def __init__(self, fail_on: str = "", invalid_on: str = ""):
        self.fail_on = fail_on
        self.invalid_on = invalid_on
        self.file_names: List[str] = []
        self.contents: List[bytes] = []
        self.caches: List[SchemaCache] = []

    def validate(self, content, cache, config):
        self.file_names.append(config.file_name)
        self.contents.append(content)
        self.caches.append(cache)
        if self.fail_on and config.file_name.endswith(self.fail_on):
            raise ValidationInvocationError(f"cannot parse {config.file_name}")
        errors = ["spec: bad"] if self.invalid_on and config.file_name.endswith(self.invalid_on) else []
        return [
            ValidationResult(
                config.file_name, kind="Pod", errors=errors, validated_against_schema=True
            )
        ]


def _make_cli(config, service, stdin=None, cache=None):
    out = io.StringIO()
    err = io.StringIO()
    stdin = stdin if stdin is not None else InteractiveStream()
    cli = StandardCLI(
        config,
        resolver=StandardSourceResolver(stdin),
        validation_service=service,
        reporter=StandardResultReporter(
            console=Console(file=out, highlight=False, color_system=None),
            error_console=Console(file=err, highlight=False, color_system=None),
        ),
        schema_cache=cache,
        stdin=stdin,
    )
    return cli, out, err


@pytest.fixture
def three_files(write_manifest):
    """Three file arguments where the second does not exist."""
    first = write_manifest("first.yaml", VALID_POD)
    second = first.parent / "second.yaml"
    third = write_manifest("third.yaml", VALID_POD)
    return [str(first), str(second), str(third)]


class TestStandardCLI:
    """Unit tests for StandardCLI."""

    def test_no_sources_is_usage_error(self):
        service = RecordingValidationService()
        cli, out, err = _make_cli(RunConfig(), service)

        assert cli.run([], []) == 1
        assert "You must pass at least one file" in err.getvalue()
        assert service.file_names == []

    def test_valid_files_succeed(self, write_manifest):
        files = [str(write_manifest("a.yaml", VALID_POD)), str(write_manifest("b.yaml", VALID_POD))]
        service = RecordingValidationService()
        cli, out, _ = _make_cli(RunConfig(), service)

        assert cli.run(files, []) == 0
        assert service.file_names == files
        assert service.contents == [VALID_POD.encode(), VALID_POD.encode()]
        assert out.getvalue().count("contains a valid Pod") == 2

    def test_file_name_context_is_set_per_source(self, write_manifest):
        """The current file name is updated right before each validation."""
        files = [str(write_manifest("a.yaml", "x")), str(write_manifest("b.yaml", "y"))]
        config = RunConfig()
        service = RecordingValidationService()
        cli, _, _ = _make_cli(config, service)

        cli.run(files, [])

        assert service.file_names == files
        assert config.file_name == files[-1]

    def test_one_cache_shared_by_every_call(self, write_manifest):
        files = [str(write_manifest(f"{n}.yaml", VALID_POD)) for n in "abc"]
        service = RecordingValidationService()
        cli, _, _ = _make_cli(RunConfig(), service)

        cli.run(files, [])

        assert len(service.caches) == 3
        assert all(cache is service.caches[0] for cache in service.caches)
        assert cli.schema_cache is service.caches[0]

    def test_schema_violation_does_not_stop_run(self, write_manifest):
        """Invalid documents fail the run but never trigger the early exit."""
        files = [
            str(write_manifest("bad.yaml", INVALID_POD)),
            str(write_manifest("good.yaml", VALID_POD)),
        ]
        service = RecordingValidationService(invalid_on="bad.yaml")
        cli, out, _ = _make_cli(RunConfig(exit_on_error=True), service)

        assert cli.run(files, []) == 1
        assert service.file_names == files
        assert "contains an invalid Pod" in out.getvalue()
        assert "good.yaml contains a valid Pod" in out.getvalue()

    def test_missing_file_with_early_exit(self, three_files):
        """With exit_on_error the third file is never read or validated."""
        service = RecordingValidationService()
        cli, out, err = _make_cli(RunConfig(exit_on_error=True), service)

        assert cli.run(three_files, []) == 1
        assert service.file_names == [three_files[0]]
        assert f"Could not open file {three_files[1]}" in err.getvalue()
        assert "third.yaml" not in out.getvalue()

    def test_missing_file_without_early_exit(self, three_files):
        service = RecordingValidationService()
        cli, out, err = _make_cli(RunConfig(exit_on_error=False), service)

        assert cli.run(three_files, []) == 1
        assert service.file_names == [three_files[0], three_files[2]]
        assert f"Could not open file {three_files[1]}" in err.getvalue()
        assert f"{three_files[2]} contains a valid Pod" in out.getvalue()

    def test_invocation_error_with_early_exit(self, write_manifest):
        files = [str(write_manifest(f"{n}.yaml", VALID_POD)) for n in ("a", "broken", "c")]
        service = RecordingValidationService(fail_on="broken.yaml")
        cli, _, err = _make_cli(RunConfig(exit_on_error=True), service)

        assert cli.run(files, []) == 1
        assert service.file_names == files[:2]
        assert "cannot parse" in err.getvalue()

    def test_invocation_error_without_early_exit(self, write_manifest):
        files = [str(write_manifest(f"{n}.yaml", VALID_POD)) for n in ("a", "broken", "c")]
        service = RecordingValidationService(fail_on="broken.yaml")
        cli, out, _ = _make_cli(RunConfig(), service)

        assert cli.run(files, []) == 1
        assert service.file_names == files
        assert out.getvalue().count("contains a valid Pod") == 2

    def test_directory_errors_still_validate_found_files(self, tmp_path: Path):
        d1 = tmp_path / "d1"
        d3 = tmp_path / "d3"
        d1.mkdir()
        d3.mkdir()
        (d1 / "one.yaml").write_text(VALID_POD)
        (d3 / "three.yaml").write_text(VALID_POD)
        (d3 / "pod.yml").write_text(VALID_POD)
        service = RecordingValidationService()
        cli, _, err = _make_cli(RunConfig(exit_on_error=True), service)

        exit_code = cli.run([], [str(d1), str(tmp_path / "d2"), str(d3)])

        assert exit_code == 1
        assert service.file_names == [str(d1 / "one.yaml"), str(d3 / "three.yaml")]
        assert str(tmp_path / "d2") in err.getvalue()

    def test_stdin_is_validated_once(self):
        stdin = PipedStream("apiVersion: v1\r\nkind: Pod\n")
        service = RecordingValidationService()
        cli, out, _ = _make_cli(RunConfig(file_name="from-pipe"), service, stdin=stdin)

        assert cli.run([], []) == 0
        assert service.contents == [b"apiVersion: v1\nkind: Pod\n"]
        assert service.file_names == ["from-pipe"]
        assert "from-pipe contains a valid Pod" in out.getvalue()

    def test_stdin_is_read_as_bytes(self):
        """Input lines are newline-terminated and one trailing CR is dropped."""
        stdin = PipedBytes(io.BytesIO(b"kind: Pod\r\r\napiVersion: v1"), encoding="utf-8")
        service = RecordingValidationService()
        cli, _, _ = _make_cli(RunConfig(), service, stdin=stdin)

        assert cli.run([], []) == 0
        assert service.contents == [b"kind: Pod\r\napiVersion: v1\n"]

    def test_stdin_invocation_error(self):
        stdin = PipedStream("::")
        service = RecordingValidationService(fail_on="stdin")
        cli, _, err = _make_cli(RunConfig(), service, stdin=stdin)

        assert cli.run(["-"], []) == 1
        assert "cannot parse stdin" in err.getvalue()


class TestStandardCLIWithSchemas:
    """Orchestrator tests against the real validation service and local schemas."""

    def test_schema_resolved_once_per_run(self, write_manifest, run_config):
        fetcher = CountingSchemaFetcher()
        files = [
            str(write_manifest("a.yaml", VALID_POD)),
            str(write_manifest("b.yaml", VALID_POD)),
            str(write_manifest("c.yaml", INVALID_POD)),
        ]
        cli, out, _ = _make_cli(
            run_config, StandardValidationService(), cache=SchemaCache(fetcher)
        )

        assert cli.run(files, []) == 1
        assert list(fetcher.calls.values()) == [1]
        assert "c.yaml contains an invalid Pod" in out.getvalue()

    def test_document_without_kind_on_stdin_succeeds(self, run_config):
        cli, out, _ = _make_cli(
            run_config, StandardValidationService(), stdin=PipedStream("a: 1\n")
        )

        assert cli.run([], []) == 0
        assert out.getvalue() == "PASS - stdin contains an empty YAML document\n"

    def test_unknown_kind_is_skipped_without_failing(self, write_manifest, run_config):
        run_config.ignore_missing_schemas = True
        crd = write_manifest("widget.yaml", "apiVersion: example.com/v1\nkind: Widget\n")
        cli, out, _ = _make_cli(run_config, StandardValidationService())

        assert cli.run([str(crd)], []) == 0
        assert "containing a Widget was not validated against a schema" in out.getvalue()

    def test_non_utf8_stdin_is_reported(self, run_config):
        """Undecodable input fails the run through the error report."""
        stdin = PipedBytes(io.BytesIO(b"kind: \xff\n"), encoding="utf-8")
        cli, out, err = _make_cli(run_config, StandardValidationService(), stdin=stdin)

        assert cli.run([], []) == 1
        assert "stdin is not valid UTF-8" in err.getvalue()
        assert out.getvalue() == ""

import logging
import sys
from typing import Iterable, List, Optional

import typer
from dotenv import load_dotenv

from validate_manifests import __version__
from validate_manifests.cli import CLI, StandardCLI
from validate_manifests.globals.cli_config import STDIN_FILE_NAME, RunConfig

ENV_PREFIX = "VALIDATE_MANIFESTS_"

app = typer.Typer()


def _env(name: str) -> str:
    return ENV_PREFIX + name


def _split_list(values: Optional[Iterable[str]]) -> List[str]:
    """Flatten repeated and comma-separated option values."""
    items: List[str] = []
    for value in values or []:
        items.extend(part.strip() for part in value.split(",") if part.strip())
    return items


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"Version: {__version__}")
        raise typer.Exit()


@app.command()
def main(
    files: Optional[List[str]] = typer.Argument(
        default=None, help="Files to validate, or - to read from standard input"
    ),
    directories: Optional[List[str]] = typer.Option(
        None,
        "--directories",
        "-d",
        help="A comma-separated list of directories to recursively search for YAML documents",
        envvar=_env("DIRECTORIES"),
    ),
    force_color: bool = typer.Option(
        False,
        "--force-color",
        help="Force colored output even if stdout is not a TTY",
        envvar=_env("FORCE_COLOR"),
    ),
    filename: str = typer.Option(
        STDIN_FILE_NAME,
        "--filename",
        "-f",
        help="Filename to be displayed when testing manifests read from stdin",
        envvar=_env("FILENAME"),
    ),
    schema_location: Optional[str] = typer.Option(
        None,
        "--schema-location",
        "-s",
        help="Base URL or directory used to download schemas",
        envvar=_env("SCHEMA_LOCATION"),
    ),
    additional_schema_locations: Optional[List[str]] = typer.Option(
        None,
        "--additional-schema-locations",
        help="Comma-separated list of secondary base URLs or directories used to download schemas",
        envvar=_env("ADDITIONAL_SCHEMA_LOCATIONS"),
    ),
    kubernetes_version: str = typer.Option(
        "master",
        "--kubernetes-version",
        "-v",
        help="Version of Kubernetes to validate against",
        envvar=_env("KUBERNETES_VERSION"),
    ),
    strict: bool = typer.Option(
        False,
        "--strict",
        help="Disallow additional properties not in schema",
        envvar=_env("STRICT"),
    ),
    ignore_missing_schemas: bool = typer.Option(
        False,
        "--ignore-missing-schemas",
        help="Skip validation for resources without a schema",
        envvar=_env("IGNORE_MISSING_SCHEMAS"),
    ),
    skip_kinds: Optional[List[str]] = typer.Option(
        None,
        "--skip-kinds",
        help="Comma-separated list of case-sensitive kinds to skip when validating",
        envvar=_env("SKIP_KINDS"),
    ),
    openshift: bool = typer.Option(
        False,
        "--openshift",
        help="Use OpenShift schemas instead of upstream Kubernetes",
        envvar=_env("OPENSHIFT"),
    ),
    exit_on_error: bool = typer.Option(
        False,
        "--exit-on-error",
        help="Immediately stop execution when the first error is encountered",
        envvar=_env("EXIT_ON_ERROR"),
    ),
    verbose: bool = typer.Option(False, "--verbose", help="Enable debug logging"),
    version: bool = typer.Option(
        False,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show the version and exit",
    ),
):
    """Validate Kubernetes YAML manifests against the relevant schemas.

    Files are validated in the order given, followed by every *.yaml file
    found under the directories passed with --directories. With no file
    arguments, or a single -, manifests piped on standard input are
    validated instead.

    Every option can also be set through an environment variable prefixed
    with VALIDATE_MANIFESTS_, e.g. VALIDATE_MANIFESTS_EXIT_ON_ERROR=true.

    Examples:
        Validate files:
            $ validate-manifests deployment.yaml service.yaml

        Validate a directory tree:
            $ validate-manifests -d manifests/,charts/rendered

        Validate piped input:
            $ helm template . | validate-manifests --filename chart
    """
    logging.basicConfig(level=logging.DEBUG if verbose else logging.WARNING)

    config = RunConfig(
        schema_location=schema_location,
        additional_schema_locations=_split_list(additional_schema_locations),
        kubernetes_version=kubernetes_version,
        strict=strict,
        ignore_missing_schemas=ignore_missing_schemas,
        kinds_to_skip=_split_list(skip_kinds),
        openshift=openshift,
        exit_on_error=exit_on_error,
        file_name=filename,
        force_color=force_color,
    )

    cli: CLI = StandardCLI(config)
    exit_code = cli.run(files or [], _split_list(directories))
    sys.exit(exit_code)


def run() -> None:
    """Console script entry point; loads a .env file before parsing options."""
    load_dotenv()
    app()

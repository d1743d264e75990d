from __future__ import annotations

import asyncio
import json
import logging

import typer

from extstate.api_client import ExtensionsAPIClient
from extstate.exceptions import ExtstateError
from extstate.internal_config import DEFAULT_CONFIG_NAME
from extstate.models import Deployable
from extstate.planner import collect_want, have
from extstate.project_config import load_extensions

app: typer.Typer = typer.Typer(
    help="Read the observed and desired extension instances of a project."
)
logger: logging.Logger = logging.getLogger(__name__)


def _configure_logging(log_level: str) -> None:
    logging.basicConfig(
        level=(getattr(logging, log_level.upper())),
        format="%(relativeCreated)d [%(levelname)s] %(message)s",
    )


def _echo_deployables(deployables: list[Deployable]) -> None:
    typer.echo(json.dumps([d.to_dict() for d in deployables], indent=2))


@app.command("have")
def have_command(
    project_id: str = typer.Argument(..., help="Project to read instances from."),
    access_token: str = typer.Option(
        "", envvar="EXTSTATE_ACCESS_TOKEN", help="OAuth bearer token."
    ),
    log_level: str = "info",
) -> None:
    """Print the extension instances installed in PROJECT_ID."""
    _configure_logging(log_level)
    client = ExtensionsAPIClient(access_token=access_token)
    try:
        deployables = asyncio.run(have(project_id, client))
    except ExtstateError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1) from e
    _echo_deployables(deployables)


@app.command("want")
def want_command(
    project_dir: str = typer.Option(".", help="Directory holding the project files."),
    config_name: str = typer.Option(
        DEFAULT_CONFIG_NAME, help="Project configuration file name."
    ),
    allow_partial: bool = typer.Option(
        False, help="Print the entries that resolved even if others failed."
    ),
    access_token: str = typer.Option(
        "", envvar="EXTSTATE_ACCESS_TOKEN", help="OAuth bearer token."
    ),
    log_level: str = "info",
) -> None:
    """Print the extension instances declared in the project configuration."""
    _configure_logging(log_level)
    try:
        extensions = load_extensions(project_dir, config_name)
    except ExtstateError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1) from e

    client = ExtensionsAPIClient(access_token=access_token)
    result = asyncio.run(collect_want(extensions, project_dir, client))
    if not result.ok:
        typer.echo(
            f"Errors while reading 'extensions' in '{config_name}'", err=True
        )
        for failure in result.failures:
            typer.echo(f"- {failure.instance_id}: {failure.message}", err=True)
        if not allow_partial:
            raise typer.Exit(code=1)
    _echo_deployables(result.deployables)


def main() -> None:
    app()


if __name__ == "__main__":
    main()

from __future__ import annotations

import asyncio

import typer

from machineid.config.loader import load_config
from machineid.platforms import COMMANDS
from machineid.service import MachineIdService
from machineid.utils.logging import configure_logging, get_logger

cli = typer.Typer(add_completion=False, no_args_is_help=True)


def _exit_with_error(exc: Exception) -> None:
    logger = get_logger()
    logger.exception("command failed")
    typer.echo(f"ERROR: {exc}")
    raise typer.Exit(code=1)


def _build_service(config: str | None, env_file: str) -> MachineIdService:
    runtime = load_config(config, env_file)
    configure_logging(runtime.log_level, runtime.logs_dir_path)
    return MachineIdService(config=runtime)


@cli.command("show")
def show_command(
    original: bool = typer.Option(False, "--original", help="Print the raw identifier instead of its SHA-256"),
    use_async: bool = typer.Option(False, "--async", help="Resolve the identifier through asyncio"),
    config: str | None = typer.Option(None, "--config", help="Path to a YAML config file"),
    env_file: str = typer.Option(".env", "--env-file", help="Path to .env"),
) -> None:
    try:
        service = _build_service(config, env_file)
        if use_async:
            value = asyncio.run(service.get(original))
        else:
            value = service.get_sync(original)
        typer.echo(value)
    except Exception as exc:
        _exit_with_error(exc)


@cli.command("diagnose")
def diagnose_command(
    config: str | None = typer.Option(None, "--config", help="Path to a YAML config file"),
    env_file: str = typer.Option(".env", "--env-file", help="Path to .env"),
) -> None:
    try:
        service = _build_service(config, env_file)
        report = service.diagnose()
        typer.echo(f"platform={report.platform}")
        typer.echo(f"command={report.command}")
        typer.echo(f"identifier={report.identifier}")
        if report.valid_format is not None:
            typer.echo(f"valid_format={report.valid_format}")
        if report.registry_identifier is not None:
            typer.echo(f"registry_identifier={report.registry_identifier}")
            typer.echo(f"match={report.match}")
        if report.match is False or report.valid_format is False:
            raise typer.Exit(code=1)
    except typer.Exit:
        raise
    except Exception as exc:
        _exit_with_error(exc)


@cli.command("platforms")
def platforms_command() -> None:
    for name, spec in COMMANDS.items():
        typer.echo(f"{name}: {spec.command}")


def run() -> None:
    cli()

"""CLI principal (Typer).

Comandos:
- `check`: una llamada de moderación, resultado en tabla Rich o JSON.
- `doctor`: diagnóstico y configuración (ver `cli.doctor`).

Códigos de salida de `check`: 0 limpio, 1 marcado, 2 error.
"""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.logging import RichHandler

from adapters.json_exporter import export_verdict_json
from adapters.moderation import build_moderation_client
from cli import doctor
from cli.ui_components import build_results_table
from core.config import AppSettings
from core.domain.errors import ModerationError, StatusError
from core.domain.models import ModerationRequest

app = typer.Typer(no_args_is_help=True, help="Content moderation API client.")
app.add_typer(doctor.app, name="doctor")

_console = Console()
_err_console = Console(stderr=True)

EXIT_FLAGGED = 1
EXIT_ERROR = 2


def _configure_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=_err_console, rich_tracebacks=True)],
        force=True,
    )


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log HTTP activity (DEBUG)."),
) -> None:
    _configure_logging(verbose)


@app.command()
def check(
    text: str = typer.Argument(..., help="Text to classify."),
    model: Optional[str] = typer.Option(None, "--model", "-m", help="Model override."),
    endpoint: Optional[str] = typer.Option(None, "--endpoint", help="Create endpoint override."),
    timeout: Optional[float] = typer.Option(None, "--timeout", min=0.001, help="Per-call timeout (seconds)."),
    as_json: bool = typer.Option(False, "--json", help="Print the raw response as JSON."),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Also save the response as JSON."),
) -> None:
    """Classify TEXT with the moderation API."""

    settings = AppSettings()
    try:
        client = build_moderation_client(settings)
        if endpoint:
            client.create_endpoint = endpoint
        request = ModerationRequest(model=model or "", input=text)
        response = asyncio.run(client.create(request, timeout=timeout))
    except ModerationError as exc:
        _err_console.print(f"[red]{exc.code}[/red] {exc.message}")
        if isinstance(exc, StatusError) and exc.status_code == 401:
            _err_console.print("[yellow]Hint:[/yellow] check the API key (`doctor run`).")
        raise typer.Exit(code=EXIT_ERROR) from exc

    if as_json:
        typer.echo(response.model_dump_json(indent=2))
    else:
        _console.print(build_results_table(response))

    if output is not None:
        saved = export_verdict_json(
            request=request.with_default_model(client.model),
            response=response,
            output_path=output,
        )
        _err_console.print(f"[green]Saved response to:[/green] {saved}")

    if response.flagged:
        raise typer.Exit(code=EXIT_FLAGGED)


def run() -> None:
    app()

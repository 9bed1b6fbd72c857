"""Doctor command for environment diagnostics."""

from __future__ import annotations

import typer
from rich.console import Console
from rich.table import Table

from cli.ui_components import print_banner
from core.config import AppSettings, get_user_env_file, write_user_env_vars

app = typer.Typer(no_args_is_help=True, help="Environment diagnostics and configuration checks.")

_console = Console()


def _mask(secret: str) -> str:
    if len(secret) <= 8:
        return "***"
    return f"{secret[:3]}…{secret[-4:]}"


@app.command()
def run() -> None:
    """Show the effective configuration and what is missing."""

    settings = AppSettings()
    print_banner(_console)

    table = Table(title="moderation-client doctor")
    table.add_column("Check", style="bright_green", no_wrap=True)
    table.add_column("Status", style="white")
    table.add_column("Details", style="dim")

    if settings.api_key:
        table.add_row("API key", "OK", _mask(settings.api_key))
    else:
        table.add_row("API key", "MISSING", "Set MODERATION_API_KEY or run `doctor setup`")
    endpoint_ok = settings.create_endpoint.lower().startswith("https://")
    table.add_row("Endpoint", "OK" if endpoint_ok else "WARN", settings.create_endpoint)
    table.add_row("Default model", "OK", settings.default_model)
    table.add_row("HTTP timeout", "OK", f"{settings.http_timeout_seconds:g}s")
    table.add_row("User config", "OK" if get_user_env_file().exists() else "NONE", str(get_user_env_file()))

    _console.print(table)

    if not settings.api_key:
        raise typer.Exit(code=1)


@app.command(name="setup")
def setup() -> None:
    """Interactive setup (stores config in the user config .env)."""

    current = AppSettings()

    api_key = typer.prompt("API key", hide_input=True, confirmation_prompt=False).strip()
    model = typer.prompt("Default model", default=current.default_model, show_default=True).strip()
    endpoint = typer.prompt("Create endpoint", default=current.create_endpoint, show_default=True).strip()

    if not api_key or not model or not endpoint:
        raise typer.BadParameter("api key, model and endpoint are required")

    env_path = write_user_env_vars(
        {
            "MODERATION_API_KEY": api_key,
            "MODERATION_DEFAULT_MODEL": model,
            "MODERATION_CREATE_ENDPOINT": endpoint,
        }
    )

    _console.print(f"[green]Saved config to:[/green] {env_path}")

"""Componentes de UI para CLI (Rich).

Por qué separar componentes:
- Evita mezclar lógica de comandos con detalles visuales.
- Permite reutilizar tablas/paneles en múltiples comandos.
"""

from __future__ import annotations

from rich.align import Align
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from core.domain.models import ModerationResponse, ModerationResult


def print_banner(console: Console) -> None:
    title = Text("moderation-client", style="bold cyan")
    subtitle = Text("Content moderation • OpenAI-compatible API", style="dim")
    body = Align.center(Text.assemble(title, "\n", subtitle), vertical="middle")
    console.print(Panel(body, border_style="cyan", padding=(1, 4)))


def _category_names(result: ModerationResult) -> list[str]:
    names = set(result.categories) | set(result.category_scores)
    return sorted(names, key=lambda name: (-result.category_scores.get(name, 0.0), name))


def build_results_table(response: ModerationResponse) -> Table:
    """Tabla Rich con una fila por (resultado, categoría), ordenada por score."""

    table = Table(title=f"Moderation {response.id or '-'} ({response.model or 'unknown model'})")
    table.add_column("#", style="dim", no_wrap=True)
    table.add_column("Category", style="cyan")
    table.add_column("Flagged", style="white")
    table.add_column("Score", style="magenta", justify="right")

    for index, result in enumerate(response.results):
        for name in _category_names(result):
            hit = result.categories.get(name, False)
            score = result.category_scores.get(name)
            table.add_row(
                str(index),
                name,
                "[red]yes[/red]" if hit else "no",
                f"{score:.4f}" if score is not None else "-",
            )
        verdict = "[bold red]FLAGGED[/bold red]" if result.flagged else "[green]clean[/green]"
        table.add_row(str(index), "[bold]overall[/bold]", verdict, "", end_section=True)
    return table

"""Componentes de UI para CLI (Rich).

Por qué separar componentes:
- Evita mezclar lógica de comandos con detalles visuales.
- Permite reutilizar tablas/paneles en múltiples comandos.
"""

from __future__ import annotations

from collections.abc import Iterable

from rich.align import Align
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from core.domain.models import Diagnostic
from core.domain.schema import ResourceSchema
from core.interfaces.resource import DeletableBinding, ResourceKind


def print_banner(console: Console) -> None:
    """Imprime el banner de bienvenida.

    Por qué aquí:
    - Evita dependencias circulares (main <-> doctor).
    - Permite desactivar banner en modos no interactivos (JSON/pipelines).
    """

    title = Text("medusa-sync", style="bold cyan")
    subtitle = Text("Regions • Channels • Catalog • Store", style="dim")
    body = Align.center(Text.assemble(title, "\n", subtitle), vertical="middle")
    console.print(Panel(body, border_style="cyan", padding=(1, 4)))


def build_kinds_table(kinds: Iterable[ResourceKind]) -> Table:
    table = Table(title="Resource kinds")
    table.add_column("Kind", style="cyan", no_wrap=True)
    table.add_column("Type", style="white")
    table.add_column("Delete", style="green")
    table.add_column("Description", style="dim")
    for kind in kinds:
        delete = "endpoint" if isinstance(kind.endpoints, DeletableBinding) else "update (reset)"
        table.add_row(kind.name, kind.schema.type_name, delete, kind.schema.description)
    return table


def build_schema_table(schema: ResourceSchema) -> Table:
    table = Table(title=schema.type_name)
    table.add_column("Attribute", style="cyan", no_wrap=True)
    table.add_column("Type", style="white")
    table.add_column("Modifiers", style="magenta")
    table.add_column("Description", style="dim")
    for a in schema.attributes:
        table.add_row(a.name, a.type.value, ", ".join(sorted(m.value for m in a.modifiers)), a.description)
    return table


def build_diagnostic_panel(diagnostic: Diagnostic) -> Panel:
    """Panel rojo con summary + detail (status code y body crudo incluidos)."""

    title = Text(diagnostic.summary, style="bold red")
    return Panel(Text(diagnostic.detail), title=title, border_style="red")

"""Componentes de UI para CLI (Rich).

Por qué separar componentes:
- Evita mezclar lógica de comandos con detalles visuales.
- Permite reutilizar tablas/paneles en múltiples comandos.
"""

from __future__ import annotations

import json
from typing import Any

from pydantic import BaseModel
from rich.align import Align
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from core.domain.errors import ClassifiedError, ResponseValidationError

_PAYLOAD_PREVIEW_CHARS = 2_000


def print_banner(console: Console) -> None:
    title = Text("authwire", style="bold cyan")
    subtitle = Text("Identity backend RPC • diagnostics", style="dim")
    body = Align.center(Text.assemble(title, "\n", subtitle), vertical="middle")
    console.print(Panel(body, border_style="cyan", padding=(1, 4)))


def build_response_table(response: BaseModel) -> Table:
    """Tabla campo/valor para cualquier response tipada."""

    table = Table(title=type(response).__name__)
    table.add_column("Field", style="cyan", no_wrap=True)
    table.add_column("Value", style="white")
    for name, value in response.model_dump(mode="json").items():
        table.add_row(name, "-" if value is None else str(value))
    return table


def _payload_preview(payload: Any) -> str:
    if isinstance(payload, bytes):
        text = payload.decode("utf-8", errors="replace")
    else:
        text = json.dumps(payload, indent=2, ensure_ascii=False, default=str)
    if len(text) > _PAYLOAD_PREVIEW_CHARS:
        text = text[:_PAYLOAD_PREVIEW_CHARS] + "\n…"
    return text


def build_error_panel(error: ClassifiedError) -> Panel:
    """Panel para presentar un `ClassifiedError` con su payload de diagnóstico."""

    body = Text()
    body.append("Kind: ", style="bold")
    body.append(f"{error.kind.value}\n")
    body.append("Message: ", style="bold")
    body.append(f"{error.message}\n")
    if error.underlying is not None:
        body.append("Cause: ", style="bold")
        body.append(type(error.underlying).__name__)
        if isinstance(error.underlying, ResponseValidationError):
            body.append(f" at {error.underlying.missing_field}")
        body.append("\n")
    if error.deserialized_response is not None:
        body.append("\nDeserialized response:\n", style="bold")
        body.append(_payload_preview(error.deserialized_response), style="dim")

    return Panel(body, title=Text("RPC error", style="bold red"), border_style="red")

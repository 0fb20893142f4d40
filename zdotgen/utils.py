"""Shared utility functions for zdotgen.

Provides document loading (YAML and JSON), zsh value encoding helpers, and
Rich-based console reporting used by the CLI.
"""

from __future__ import annotations

import json
import shlex
from pathlib import Path
from typing import Any

import yaml
from rich.console import Console
from rich.table import Table

from zdotgen.errors import SchemaError

console = Console()

# ---------------------------------------------------------------------------
# Document I/O
# ---------------------------------------------------------------------------


def load_document(path: str | Path) -> dict[str, Any]:
    """Load a YAML or JSON mapping from *path*.

    The format is chosen by extension: ``.json`` is parsed as JSON,
    everything else as YAML (a superset of JSON).

    Raises:
        SchemaError: If the file is missing, unparsable, or not a mapping.
    """
    p = Path(path)
    try:
        text = p.read_text(encoding="utf-8")
    except FileNotFoundError as exc:
        raise SchemaError(f"Configuration file not found: {p}") from exc
    except OSError as exc:
        raise SchemaError(f"Cannot read configuration file {p}: {exc}") from exc

    try:
        if p.suffix.lower() == ".json":
            data = json.loads(text)
        else:
            data = yaml.safe_load(text)
    except (json.JSONDecodeError, yaml.YAMLError) as exc:
        raise SchemaError(f"Cannot parse {p}: {exc}") from exc

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise SchemaError(f"Expected a mapping at the top of {p}, got {type(data).__name__}")
    return data


# ---------------------------------------------------------------------------
# zsh value encoding
# ---------------------------------------------------------------------------


def shell_quote(value: str) -> str:
    """Quote *value* for use as a single shell word."""
    return shlex.quote(value)


def zsh_value(value: Any) -> str:
    """Encode a Python value as a zsh assignment right-hand side.

    Booleans become ``true``/``false``, strings and numbers are wrapped in
    double quotes, and lists become arrays: ``["a", 1]`` -> ``("a" "1")``.
    """
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, str):
        return f'"{value}"'
    if isinstance(value, (list, tuple)):
        return "(" + " ".join(zsh_value(v) for v in value) + ")"
    return f'"{value}"'


def define_all(variables: dict[str, Any]) -> str:
    """Render ``NAME=value`` lines sorted by name."""
    return "\n".join(f"{name}={zsh_value(variables[name])}" for name in sorted(variables))


def export_all(variables: dict[str, Any]) -> str:
    """Render ``export NAME=value`` lines sorted by name."""
    return "\n".join(
        f"export {name}={zsh_value(variables[name])}" for name in sorted(variables)
    )


# ---------------------------------------------------------------------------
# Rich output helpers
# ---------------------------------------------------------------------------


def print_summary_table(data: dict[str, str], title: str = "Summary") -> None:
    """Print a two-column key/value summary table.

    Args:
        data: Mapping of label -> value.
        title: Table title.
    """
    table = Table(title=title, show_header=True, header_style="bold cyan")
    table.add_column("Item", style="dim", no_wrap=True)
    table.add_column("Value")

    for key, value in data.items():
        table.add_row(key, str(value))

    console.print(table)
    console.print()


def print_success(message: str) -> None:
    """Print a green success message."""
    console.print(f"[bold green]{message}[/bold green]")


def print_error(message: str) -> None:
    """Print a red error message."""
    console.print(f"[bold red]{message}[/bold red]")


def print_warning(message: str) -> None:
    """Print a yellow warning message."""
    console.print(f"[bold yellow]{message}[/bold yellow]")

"""Command-line entry point.

Usage::

    zdotgen zsh.yaml --dry-run
    zdotgen zsh.yaml --home ~ --host host.yaml
    python -m zdotgen zsh.json --json
"""

from __future__ import annotations

import asyncio
import logging
import sys
from pathlib import Path

from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

from zdotgen.assembler import RenderResult, render_files
from zdotgen.config import HostContext
from zdotgen.errors import SchemaError, WriteError
from zdotgen.schema.loader import load_config_file
from zdotgen.utils import (
    console,
    print_error,
    print_success,
    print_summary_table,
    print_warning,
)
from zdotgen.writer import write_result

EXIT_WRITE_ERROR = 1
EXIT_SCHEMA_ERROR = 2


def configure_logging(verbose: bool = False) -> None:
    """Route log records through Rich on stderr."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[
            RichHandler(console=Console(stderr=True), show_path=False, rich_tracebacks=True)
        ],
        force=True,
    )


def build_host(host_file: str | None) -> HostContext:
    """Host context from a file when given, else from the environment."""
    if host_file:
        return HostContext.load(host_file).with_prezto_runcoms()
    return HostContext.from_env()


def summarize(result: RenderResult) -> dict[str, str]:
    """Summary table rows: one per file plus the package list."""
    rows: dict[str, str] = {}
    for output in result.files:
        if output.is_reference:
            rows[output.path] = f"-> {output.content.source}"
        else:
            lines = output.content.text.count("\n")
            rows[output.path] = f"{lines} line(s)"
    rows["packages"] = ", ".join(result.packages) or "-"
    return rows


def main(argv: list[str] | None = None) -> int:
    """CLI entry point for ``zdotgen`` / ``python -m zdotgen``."""
    import argparse

    parser = argparse.ArgumentParser(
        prog="zdotgen",
        description="Render zsh dotfiles from a declarative configuration",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            "  zdotgen zsh.yaml --dry-run\n"
            "  zdotgen zsh.yaml --home ~ --host host.yaml\n"
            "  zdotgen zsh.json --json\n"
        ),
    )
    parser.add_argument("config", help="Path to the YAML or JSON zsh configuration")
    parser.add_argument(
        "--host",
        default=None,
        help="Host context file (default: read ZDOTGEN_* environment variables)",
    )
    parser.add_argument(
        "--home",
        default=str(Path.home()),
        help="Home directory to write into (default: your home directory)",
    )
    parser.add_argument(
        "--dry-run", action="store_true", help="Render only; do not write files"
    )
    parser.add_argument(
        "--json", action="store_true", help="Print the render result as JSON"
    )
    parser.add_argument(
        "--no-backup",
        action="store_true",
        help="Fail instead of backing up files that would be replaced",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")

    args = parser.parse_args(argv)
    configure_logging(args.verbose)

    try:
        host = build_host(args.host)
        config = load_config_file(args.config, host)
        result = render_files(config, host)
    except SchemaError as exc:
        location = f" at [bold]{escape(exc.path)}[/bold]" if exc.path else ""
        print_error(f"Invalid configuration{location}: {escape(exc.message)}")
        for path, message in exc.errors[1:]:
            console.print(f"  [dim]{escape(path or '-')}:[/dim] {escape(message)}")
        return EXIT_SCHEMA_ERROR

    if args.json:
        console.print_json(result.model_dump_json())
    elif not result.files:
        print_warning("zsh configuration is disabled; nothing to write")
        return 0
    else:
        print_summary_table(summarize(result), title="zsh dotfiles")

    if args.dry_run:
        return 0

    try:
        written = asyncio.run(
            write_result(result, args.home, backup=not args.no_backup)
        )
    except WriteError as exc:
        print_error(escape(str(exc)))
        return EXIT_WRITE_ERROR

    print_success(f"Wrote {len(written)} file(s) under {args.home}")
    return 0


if __name__ == "__main__":
    sys.exit(main())

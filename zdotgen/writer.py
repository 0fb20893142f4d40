"""Materialize a render result inside a home directory.

Inline content is written atomically (temp file + rename); references
become symlinks.  A regular file already sitting at a target path is moved
aside to a timestamped backup before being replaced, unless its content
already matches.  File operations run in worker threads so the event loop
stays responsive.
"""

from __future__ import annotations

import asyncio
import logging
import os
from datetime import datetime
from pathlib import Path

from zdotgen.assembler import OutputFile, Reference, RenderResult
from zdotgen.errors import WriteError

logger = logging.getLogger(__name__)


async def write_result(
    result: RenderResult,
    home: str | Path,
    *,
    backup: bool = True,
) -> list[Path]:
    """Write every file of *result* below *home*.

    Args:
        result: Output of ``render_files``.
        home: Home directory the relative output paths are resolved against.
        backup: Move conflicting regular files to ``<name>.backup.<stamp>``
            instead of failing.

    Returns:
        The written paths, in result order.

    Raises:
        WriteError: If a target is a directory, or a conflicting file
            exists and *backup* is false.
    """
    home_path = Path(home)
    written: list[Path] = []
    for output in result.files:
        target = home_path / output.path
        try:
            await asyncio.to_thread(_place, output, target, backup)
        except OSError as exc:
            raise WriteError(f"Cannot write file ({exc.strerror or exc})", str(target)) from exc
        written.append(target)
    logger.info("Wrote %d file(s) under %s", len(written), home_path)
    return written


def _place(output: OutputFile, target: Path, backup: bool) -> None:
    if target.is_dir() and not target.is_symlink():
        raise WriteError("Refusing to replace a directory", str(target))

    target.parent.mkdir(parents=True, exist_ok=True)
    content = output.content

    if isinstance(content, Reference):
        if target.is_symlink():
            if os.readlink(target) == content.source:
                return
            target.unlink()
        elif target.exists():
            _move_aside(target, backup)
        target.symlink_to(content.source)
        logger.debug("Linked %s -> %s", target, content.source)
        return

    if target.is_symlink():
        target.unlink()
    elif target.exists():
        if target.read_bytes() == content.text.encode("utf-8"):
            return
        _move_aside(target, backup)
    write_text_atomic(target, content.text)
    logger.debug("Wrote %s (%d bytes)", target, len(content.text))


def _move_aside(target: Path, backup: bool) -> Path:
    if not backup:
        raise WriteError("File exists", str(target))
    backup_path = create_backup(target)
    logger.info("Moved existing %s to %s", target, backup_path)
    return backup_path


def create_backup(path: Path) -> Path:
    """Rename *path* to a timestamped backup next to it."""
    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    backup_path = path.with_name(f"{path.name}.backup.{timestamp}")
    path.replace(backup_path)
    return backup_path


def write_text_atomic(path: Path, text: str) -> None:
    """Write *text* to *path* using a temp file and an atomic rename."""
    temp_path = path.with_name(path.name + ".tmp")
    try:
        temp_path.write_text(text, encoding="utf-8")
        temp_path.replace(path)
    except OSError:
        if temp_path.exists():
            temp_path.unlink()
        raise

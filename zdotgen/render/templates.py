"""Jinja2 template rendering for zsh fragments.

Provides the TemplateRenderer class which loads Jinja2 templates from the
``zdotgen/render/templates/`` directory and renders them with block-specific
context data.  Rendering is pure: templates never touch the filesystem
beyond being loaded.
"""

from __future__ import annotations

from enum import Enum
from pathlib import Path
from typing import Any

from jinja2 import Environment, FileSystemLoader, StrictUndefined

from zdotgen.utils import shell_quote, zsh_value


# ---------------------------------------------------------------------------
# Template directory discovery
# ---------------------------------------------------------------------------

_DEFAULT_TEMPLATE_DIR = Path(__file__).parent / "templates"


# ---------------------------------------------------------------------------
# TemplateRenderer
# ---------------------------------------------------------------------------


class TemplateRenderer:
    """Renders Jinja2 templates for zsh dotfile fragments.

    The renderer discovers ``.j2`` template files under a configurable
    template directory.  Output never carries trailing newlines so that
    fragments can be joined with a fixed separator.
    """

    def __init__(self, template_dir: str | Path | None = None) -> None:
        if template_dir is None:
            template_dir = _DEFAULT_TEMPLATE_DIR
        self.template_dir = Path(template_dir)
        self.env = Environment(
            loader=FileSystemLoader(str(self.template_dir)),
            autoescape=False,
            keep_trailing_newline=True,
            trim_blocks=True,
            lstrip_blocks=True,
            undefined=StrictUndefined,
        )
        # Register custom filters
        self.env.filters["shell_quote"] = shell_quote
        self.env.filters["zsh_value"] = zsh_value
        self.env.filters["toggle"] = _toggle_filter
        self.env.filters["text"] = _text_filter

    def render(self, template_path: str, context: dict[str, Any]) -> str:
        """Render a single template with the provided context.

        Args:
            template_path: Path relative to the template directory (e.g.
                ``"zshrc/history.zsh.j2"``).
            context: Dictionary of variables available inside the template.

        Returns:
            The rendered text without trailing newlines.
        """
        template = self.env.get_template(template_path)
        return template.render(**context).rstrip("\n")

    def render_string(self, template_string: str, context: dict[str, Any]) -> str:
        """Render an inline template string with the provided context."""
        template = self.env.from_string(template_string)
        return template.render(**context).rstrip("\n")

    def list_templates(self, prefix: str = "") -> list[str]:
        """Return a sorted list of all ``.j2`` template paths under *prefix*."""
        search_dir = self.template_dir / prefix if prefix else self.template_dir
        if not search_dir.is_dir():
            return []
        return sorted(
            p.relative_to(self.template_dir).as_posix()
            for p in search_dir.rglob("*.j2")
        )


# ---------------------------------------------------------------------------
# Jinja2 custom filters
# ---------------------------------------------------------------------------

def _toggle_filter(enabled: bool) -> str:
    """``setopt`` for true, ``unsetopt`` for false."""
    return "setopt" if enabled else "unsetopt"


def _text_filter(value: Any) -> str:
    """Plain text of a value, unwrapping enum members."""
    if isinstance(value, Enum):
        return str(value.value)
    return str(value)

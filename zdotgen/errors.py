"""Exception types raised by zdotgen.

Validation problems surface as :class:`SchemaError` before any rendering
happens.  Rendering a validated configuration never fails; only the writer
that materializes files can raise :class:`WriteError`.
"""

from __future__ import annotations

from typing import Any


class ZdotgenError(Exception):
    """Base class for every error raised by this package."""


class SchemaError(ZdotgenError):
    """Raised when raw configuration input does not match the option schema.

    Attributes:
        message: Human-readable description of the first problem.
        path: Dotted path of the offending option (e.g.
            ``"prezto.editor.keymap"``).  Empty for document-level errors.
        errors: Every ``(path, message)`` pair found during validation.
    """

    def __init__(
        self,
        message: str,
        path: str = "",
        errors: list[tuple[str, str]] | None = None,
    ) -> None:
        self.message = message
        self.path = path
        self.errors = errors if errors is not None else [(path, message)]
        super().__init__(self._format())

    def _format(self) -> str:
        text = f"{self.path}: {self.message}" if self.path else self.message
        extra = len(self.errors) - 1
        if extra > 0:
            text += f" (and {extra} more)"
        return text

    @classmethod
    def from_validation_error(cls, exc: Any, prefix: str = "") -> "SchemaError":
        """Build a ``SchemaError`` from a pydantic ``ValidationError``."""
        errors: list[tuple[str, str]] = []
        for err in exc.errors():
            path = format_loc(err.get("loc", ()))
            if prefix:
                path = f"{prefix}.{path}" if path else prefix
            errors.append((path, err.get("msg", "invalid value")))
        if not errors:
            return cls(str(exc), prefix)
        first_path, first_msg = errors[0]
        return cls(first_msg, first_path, errors)


class WriteError(ZdotgenError):
    """Raised when a rendered file cannot be placed in the home directory."""

    def __init__(self, message: str, path: str = "") -> None:
        self.message = message
        self.path = path
        super().__init__(f"{message}: {path}" if path else message)


def format_loc(loc: tuple[Any, ...] | list[Any]) -> str:
    """Join a pydantic error location into a dotted option path.

    List indices are rendered in brackets: ``("plugins", 0, "name")``
    becomes ``"plugins[0].name"``.
    """
    out = ""
    for part in loc:
        if isinstance(part, int):
            out += f"[{part}]"
        elif out:
            out += f".{part}"
        else:
            out = str(part)
    return out

"""Prezto settings (``.zpreztorc``) as a declarative directive table.

Each :class:`Directive` maps one prezto option to one ``zstyle`` line.  A
row is emitted only when its option is set: ``None`` and empty collections
leave prezto's own default in effect.  Rows are evaluated in table order,
so the output order never depends on the input.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from operator import attrgetter
from typing import Any, Callable, Optional

from zdotgen.schema.models import Prezto, ZshConfig
from zdotgen.utils import shell_quote

HEADER = "# Generated by zdotgen"

_BREAK = "\\\n  "
_CONTINUATION = " " + _BREAK


# ---------------------------------------------------------------------------
# Value formatters
# ---------------------------------------------------------------------------

def yes_no(value: bool) -> str:
    return "'yes'" if value else "'no'"


def quoted(value: Any) -> str:
    """Always single-quoted; embedded quotes become ``'\\''``."""
    if isinstance(value, Enum):
        value = value.value
    escaped = str(value).replace("'", "'\\''")
    return f"'{escaped}'"


def raw_words(values: list[str]) -> str:
    return " ".join(values)


def words(values: list[str]) -> str:
    return " ".join(shell_quote(v) for v in values)


def continued_words(values: list[str]) -> str:
    """Words on a continuation line after the key."""
    return _BREAK + words(values)


def continued_lines(values: list[str]) -> str:
    """One word per continuation line."""
    return _BREAK + _CONTINUATION.join(shell_quote(v) for v in values)


def pairs(mapping: dict[str, str]) -> str:
    """``'key' 'value'`` pairs, one per continuation line, sorted by key."""
    return _BREAK + _CONTINUATION.join(
        f"{shell_quote(k)} {shell_quote(mapping[k])}" for k in sorted(mapping)
    )


# ---------------------------------------------------------------------------
# Directive table
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Directive:
    """One ``zstyle '<context>' <key> <value>`` emission."""

    context: str
    key: str
    option: str
    formatter: Callable[[Any], str]

    def value_of(self, prezto: Prezto) -> Any:
        return attrgetter(self.option)(prezto)

    def is_set(self, prezto: Prezto) -> bool:
        value = self.value_of(prezto)
        if value is None:
            return False
        if isinstance(value, (list, dict)) and not value:
            return False
        return True

    def render(self, prezto: Prezto) -> Optional[str]:
        if not self.is_set(prezto):
            return None
        return f"zstyle '{self.context}' {self.key} {self.formatter(self.value_of(prezto))}"


_MODULE = ":prezto:module"

DIRECTIVES: tuple[Directive, ...] = (
    Directive(":prezto:*:*", "case-sensitive", "case_sensitive", yes_no),
    Directive(":prezto:*:*", "color", "color", yes_no),
    Directive(":prezto:load", "pmodule-dirs", "pmodule_dirs", raw_words),
    Directive(":prezto:load", "zmodule", "extra_modules", words),
    Directive(":prezto:load", "zfunction", "extra_functions", words),
    Directive(":prezto:load", "pmodule", "pmodules", continued_lines),
    Directive(f"{_MODULE}:autosuggestions:color", "found", "autosuggestions.color", quoted),
    Directive(
        f"{_MODULE}:completion:*:hosts",
        "etc-host-ignores",
        "completions.ignored_hosts",
        continued_words,
    ),
    Directive(f"{_MODULE}:editor", "key-bindings", "editor.keymap", quoted),
    Directive(f"{_MODULE}:editor", "dot-expansion", "editor.dot_expansion", yes_no),
    Directive(f"{_MODULE}:editor", "ps-context", "editor.prompt_context", yes_no),
    Directive(f"{_MODULE}:git:status:ignore", "submodules", "git.submodule_ignore", quoted),
    Directive(f"{_MODULE}:gnu-utility", "prefix", "gnu_utility.prefix", quoted),
    Directive(
        f"{_MODULE}:history-substring-search:color",
        "found",
        "history_substring.found_color",
        quoted,
    ),
    Directive(
        f"{_MODULE}:history-substring-search:color",
        "not-found",
        "history_substring.not_found_color",
        quoted,
    ),
    Directive(
        f"{_MODULE}:history-substring-search:color",
        "globbing-flags",
        "history_substring.globbing_flags",
        quoted,
    ),
    Directive(f"{_MODULE}:osx:man", "dash-keyword", "mac_os.dash_keyword", quoted),
    Directive(f"{_MODULE}:prompt", "theme", "prompt.theme", quoted),
    Directive(f"{_MODULE}:prompt", "pwd-length", "prompt.pwd_length", quoted),
    Directive(f"{_MODULE}:prompt", "show-return-val", "prompt.show_return_val", yes_no),
    Directive(
        f"{_MODULE}:python:virtualenv", "auto-switch", "python.virtualenv_auto_switch", yes_no
    ),
    Directive(
        f"{_MODULE}:python:virtualenv", "initialize", "python.virtualenv_initialize", yes_no
    ),
    Directive(f"{_MODULE}:ruby:chruby", "auto-switch", "ruby.chruby_auto_switch", yes_no),
    Directive(f"{_MODULE}:screen:auto-start", "local", "screen.auto_start_local", yes_no),
    Directive(f"{_MODULE}:screen:auto-start", "remote", "screen.auto_start_remote", yes_no),
    Directive(f"{_MODULE}:ssh:load", "identities", "ssh.identities", continued_words),
    Directive(
        f"{_MODULE}:syntax-highlighting",
        "highlighters",
        "syntax_highlighting.highlighters",
        continued_lines,
    ),
    Directive(f"{_MODULE}:syntax-highlighting", "styles", "syntax_highlighting.styles", pairs),
    Directive(f"{_MODULE}:syntax-highlighting", "pattern", "syntax_highlighting.pattern", pairs),
    Directive(f"{_MODULE}:terminal", "auto-title", "terminal.auto_title", yes_no),
    Directive(
        f"{_MODULE}:terminal:window-title", "format", "terminal.window_title_format", quoted
    ),
    Directive(f"{_MODULE}:terminal:tab-title", "format", "terminal.tab_title_format", quoted),
    Directive(
        f"{_MODULE}:terminal:multiplexer-title",
        "format",
        "terminal.multiplexer_title_format",
        quoted,
    ),
    Directive(f"{_MODULE}:tmux:auto-start", "local", "tmux.auto_start_local", yes_no),
    Directive(f"{_MODULE}:tmux:auto-start", "remote", "tmux.auto_start_remote", yes_no),
    Directive(f"{_MODULE}:tmux:iterm", "integrate", "tmux.iterm_integration", yes_no),
    Directive(f"{_MODULE}:tmux:session", "name", "tmux.default_session_name", quoted),
    Directive(f"{_MODULE}:utility", "safe-ops", "utility.safe_ops", yes_no),
)


def render_directives(prezto: Prezto) -> list[str]:
    """Every emitted ``zstyle`` line, in table order."""
    lines = (directive.render(prezto) for directive in DIRECTIVES)
    return [line for line in lines if line is not None]


def render_zpreztorc(config: ZshConfig) -> Optional[str]:
    """Render ``.zpreztorc``, or ``None`` when prezto is disabled."""
    prezto = config.prezto
    if not prezto.enable:
        return None
    lines = [HEADER, *render_directives(prezto)]
    extra = prezto.extra_config.rstrip("\n")
    if extra:
        lines.append(extra)
    return "\n".join(lines) + "\n"

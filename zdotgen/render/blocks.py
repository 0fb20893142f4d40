"""Conditional content blocks for the generated zsh files.

Every block is a pure function ``(config, host) -> str | None``.  ``None``
means the block is omitted.  ``ZSHRC_BLOCKS`` fixes the order in which the
blocks appear in ``.zshrc``; the order is significant to zsh (completion
must see the final ``fpath``, history options must follow framework init,
aliases come last so nothing overrides them).

Blocks expect a normalized config (see ``zdotgen.schema.normalize``).
"""

from __future__ import annotations

from typing import Callable, Iterable, Optional

from zdotgen.config import HostContext
from zdotgen.render.templates import TemplateRenderer
from zdotgen.schema.models import ZshConfig
from zdotgen.utils import define_all, export_all

Block = Callable[[ZshConfig, HostContext], Optional[str]]

_renderer = TemplateRenderer()

BINDKEY_COMMANDS: dict[str, str] = {
    "emacs": "bindkey -e",
    "viins": "bindkey -v",
    "vicmd": "bindkey -a",
}


def _extra_text(text: str) -> Optional[str]:
    text = text.rstrip("\n")
    return text or None


# ---------------------------------------------------------------------------
# .zshrc blocks
# ---------------------------------------------------------------------------


def path_setup(config: ZshConfig, host: HostContext) -> str:
    """Deduplicate search paths and register profile function directories."""
    return _renderer.render("zshrc/path_setup.zsh.j2", {"help_dir": host.help_dir})


def keymap(config: ZshConfig, host: HostContext) -> Optional[str]:
    if config.default_keymap is None:
        return None
    name = str(getattr(config.default_keymap, "value", config.default_keymap))
    return _renderer.render(
        "zshrc/keymap.zsh.j2",
        {"keymap": name, "command": BINDKEY_COMMANDS[name]},
    )


def local_variables(config: ZshConfig, host: HostContext) -> Optional[str]:
    return define_all(config.local_variables) or None


def init_before_compinit(config: ZshConfig, host: HostContext) -> Optional[str]:
    return _extra_text(config.init_extra_before_comp_init)


def plugin_paths(config: ZshConfig, host: HostContext) -> Optional[str]:
    """Add every plugin directory to ``path`` and ``fpath``."""
    if not config.plugins:
        return None
    return _renderer.render(
        "zshrc/plugin_paths.zsh.j2",
        {"plugins": config.plugins, "plugins_dir": config.plugins_dir},
    )


def compinit(config: ZshConfig, host: HostContext) -> Optional[str]:
    # oh-my-zsh and prezto call compinit themselves; a second call walks
    # every fpath entry again.
    if not config.runs_compinit:
        return None
    return "autoload -U compinit && compinit"


def autosuggestions(config: ZshConfig, host: HostContext) -> Optional[str]:
    if not config.enable_autosuggestions:
        return None
    return f"source {host.autosuggestions_script}"


def environment(config: ZshConfig, host: HostContext) -> str:
    """Source the host's session variables, then export our own."""
    return _renderer.render(
        "zshrc/environment.zsh.j2",
        {
            "session_script": host.session_script,
            "exports": export_all(config.session_variables),
        },
    )


def oh_my_zsh(config: ZshConfig, host: HostContext) -> Optional[str]:
    omz = config.oh_my_zsh
    if not omz.enable:
        return None
    return _renderer.render(
        "zshrc/oh_my_zsh.zsh.j2",
        {
            "extra_config": omz.extra_config.rstrip("\n"),
            "plugins": omz.plugins,
            "custom": omz.custom,
            "theme": omz.theme,
        },
    )


def prezto_init(config: ZshConfig, host: HostContext) -> Optional[str]:
    if not config.prezto.enable:
        return None
    return _extra_text(host.prezto.runcoms["zshrc"])


def plugin_sources(config: ZshConfig, host: HostContext) -> Optional[str]:
    """Source each plugin script, checking for it when the shell starts."""
    if not config.plugins:
        return None
    return _renderer.render(
        "zshrc/plugin_sources.zsh.j2",
        {"plugins": config.plugins, "plugins_dir": config.plugins_dir},
    )


HISTORY_OPTIONS: tuple[tuple[str, str], ...] = (
    ("HIST_IGNORE_DUPS", "ignore_dups"),
    ("HIST_IGNORE_SPACE", "ignore_space"),
    ("HIST_EXPIRE_DUPS_FIRST", "expire_duplicates_first"),
    ("SHARE_HISTORY", "share"),
    ("EXTENDED_HISTORY", "extended"),
)


def history(config: ZshConfig, host: HostContext) -> str:
    policy = config.history
    path = policy.path or "$HOME/.zsh_history"
    histfile = path if host.history_in_home else f"$HOME/{path}"
    return _renderer.render(
        "zshrc/history.zsh.j2",
        {
            "history": policy,
            "histfile": histfile,
            "options": [(opt, getattr(policy, attr)) for opt, attr in HISTORY_OPTIONS],
            "autocd": config.autocd,
        },
    )


def init_extra(config: ZshConfig, host: HostContext) -> Optional[str]:
    return _extra_text(config.init_extra)


def aliases(config: ZshConfig, host: HostContext) -> Optional[str]:
    if not config.shell_aliases:
        return None
    items = sorted(config.shell_aliases.items())
    return _renderer.render("zshrc/aliases.zsh.j2", {"aliases": items})


ZSHRC_BLOCKS: tuple[Block, ...] = (
    path_setup,
    keymap,
    local_variables,
    init_before_compinit,
    plugin_paths,
    compinit,
    autosuggestions,
    environment,
    oh_my_zsh,
    prezto_init,
    plugin_sources,
    history,
    init_extra,
    aliases,
)


def render_zshrc(config: ZshConfig, host: HostContext) -> str:
    """Render ``.zshrc``: every emitted block, blank-line separated."""
    return join_blocks(block(config, host) for block in ZSHRC_BLOCKS)


# ---------------------------------------------------------------------------
# .zshenv contributions
# ---------------------------------------------------------------------------


def oh_my_zsh_env(config: ZshConfig, host: HostContext) -> Optional[str]:
    if not config.oh_my_zsh.enable:
        return None
    return _renderer.render(
        "zshenv/oh_my_zsh.zsh.j2",
        {"root": host.oh_my_zsh_root, "cache_home": host.cache_home},
    )


def prezto_env(config: ZshConfig, host: HostContext) -> Optional[str]:
    if not config.prezto.enable:
        return None
    return _extra_text(host.prezto.runcoms["zshenv"])


def zdotdir(config: ZshConfig, host: HostContext) -> Optional[str]:
    if config.dot_dir is None:
        return None
    return f"ZDOTDIR=$HOME/{config.dot_dir}"


def env_extra(config: ZshConfig, host: HostContext) -> Optional[str]:
    return _extra_text(config.env_extra)


ZSHENV_BLOCKS: tuple[Block, ...] = (
    env_extra,
    oh_my_zsh_env,
    prezto_env,
    zdotdir,
)


def render_zshenv(config: ZshConfig, host: HostContext) -> Optional[str]:
    """Render the full ``.zshenv`` body, or ``None`` when nothing contributes."""
    parts = [part for part in (block(config, host) for block in ZSHENV_BLOCKS) if part]
    if not parts:
        return None
    return join_blocks(parts)


def join_blocks(blocks: Iterable[Optional[str]]) -> str:
    """Join emitted blocks with one blank line and end with a newline."""
    return "\n\n".join(block for block in blocks if block) + "\n"

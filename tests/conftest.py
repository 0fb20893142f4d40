"""Shared pytest fixtures for the zdotgen test suite.

Provides reusable fixtures for:
- Host contexts (plain, legacy state version, with prezto runcoms)
- Raw configuration documents
- A clean ``ZDOTGEN_*`` environment
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

import pytest

from zdotgen.config import HostContext


PREZTO_RUNCOMS: dict[str, str] = {
    "zshrc": "# prezto zshrc\nsource \"${ZDOTDIR:-$HOME}/.zprezto/init.zsh\"\n",
    "zshenv": "# prezto zshenv\n",
    "zprofile": "# prezto zprofile\nexport EDITOR='nano'\n",
    "zlogin": "# prezto zlogin\n",
    "zlogout": "# prezto zlogout\n",
}


# ---------------------------------------------------------------------------
# Environment
# ---------------------------------------------------------------------------

@pytest.fixture(autouse=True)
def clean_zdotgen_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Remove ZDOTGEN_* variables so host defaults are predictable."""
    for name in list(os.environ):
        if name.startswith("ZDOTGEN_"):
            monkeypatch.delenv(name, raising=False)


# ---------------------------------------------------------------------------
# Host contexts
# ---------------------------------------------------------------------------

@pytest.fixture
def host() -> HostContext:
    """Default host context with explicit, test-friendly package paths."""
    return HostContext(
        state_version="24.05",
        zsh_package="/pkgs/zsh",
        autosuggestions_package="/pkgs/zsh-autosuggestions",
        oh_my_zsh_package="/pkgs/oh-my-zsh",
    )


@pytest.fixture
def legacy_host(host: HostContext) -> HostContext:
    """Host predating the move of the history file into $HOME."""
    return host.model_copy(update={"state_version": "19.09"})


@pytest.fixture
def prezto_host(host: HostContext) -> HostContext:
    """Host with a prezto distribution and all runcom texts loaded."""
    return HostContext(
        **{
            **host.model_dump(),
            "prezto": {"root": "/pkgs/zsh-prezto", "runcoms": dict(PREZTO_RUNCOMS)},
        }
    )


@pytest.fixture
def prezto_dist(tmp_path: Path) -> Path:
    """A prezto distribution directory on disk with runcom files."""
    root = tmp_path / "zsh-prezto"
    runcoms = root / "runcoms"
    runcoms.mkdir(parents=True)
    for name, text in PREZTO_RUNCOMS.items():
        (runcoms / name).write_text(text, encoding="utf-8")
    return root


# ---------------------------------------------------------------------------
# Raw configuration documents
# ---------------------------------------------------------------------------

@pytest.fixture
def plugin_config() -> dict[str, Any]:
    """A configuration with two plugins, one with a custom script name."""
    return {
        "plugins": [
            {"name": "zsh-autosuggestions", "src": "/store/zsh-autosuggestions"},
            {"name": "enhancd", "file": "init.sh", "src": "/store/enhancd"},
        ],
    }


@pytest.fixture
def full_config() -> dict[str, Any]:
    """A configuration touching most top-level options."""
    return {
        "autocd": True,
        "defaultKeymap": "viins",
        "enableAutosuggestions": True,
        "shellAliases": {"ll": "ls -l", "..": "cd .."},
        "sessionVariables": {"EDITOR": "vim", "MAILCHECK": 30},
        "localVariables": {"POWERLEVEL9K_LEFT_PROMPT_ELEMENTS": ["dir", "vcs"]},
        "history": {"size": 5000, "extended": True},
        "initExtraBeforeCompInit": "zmodload zsh/complist",
        "initExtra": "bindkey '^R' history-incremental-search-backward",
        "envExtra": "export LESS=-R",
        "plugins": [{"name": "foo", "src": "/store/foo"}],
    }

"""Pydantic v2 models for the zsh option tree.

Every configurable knob is declared here with its type, default and
documentation.  Input keys use camelCase (``dotDir``, ``shellAliases``) as
written in user configuration files; the snake_case attribute names are
accepted as well.  Models are frozen and reject unknown keys.

Booleans and integers are strict: ``"yes"`` or ``1`` for a flag and
``true`` for a count are rejected instead of coerced.

A value of ``None`` means *unset*: the corresponding directive is omitted
and the downstream tool keeps its own default.
"""

from __future__ import annotations

import re
from enum import Enum
from typing import Optional, Union

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    StrictBool,
    StrictFloat,
    StrictInt,
    StrictStr,
    field_validator,
    model_validator,
)
from pydantic.alias_generators import to_camel


# ---------------------------------------------------------------------------
# Enumerations
# ---------------------------------------------------------------------------

class Keymap(str, Enum):
    """Default base keymap selectable with ``bindkey``."""
    EMACS = "emacs"
    VIINS = "viins"
    VICMD = "vicmd"


class EditorKeymap(str, Enum):
    """Key mapping style for prezto's editor module."""
    EMACS = "emacs"
    VI = "vi"


class SubmoduleIgnore(str, Enum):
    """When git submodules are ignored by prezto's git status."""
    DIRTY = "dirty"
    UNTRACKED = "untracked"
    ALL = "all"
    NONE = "none"


class PwdLength(str, Enum):
    """Working directory display length in prezto prompts."""
    SHORT = "short"
    LONG = "long"
    FULL = "full"


ZshScalar = Union[StrictBool, StrictInt, StrictFloat, StrictStr]
ZshValue = Union[ZshScalar, list[ZshScalar]]

DEFAULT_PMODULES: list[str] = [
    "environment",
    "terminal",
    "editor",
    "history",
    "directory",
    "spectrum",
    "utility",
    "completion",
    "prompt",
]

_VARIABLE_NAME_RE = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")


class OptionModel(BaseModel):
    """Base for every option record: camelCase input, frozen, strict keys."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="forbid",
        frozen=True,
        use_enum_values=True,
    )


# ---------------------------------------------------------------------------
# History and plugins
# ---------------------------------------------------------------------------

class HistoryPolicy(OptionModel):
    """Options related to command history configuration."""

    size: StrictInt = Field(default=10000, ge=0, description="Number of history lines to keep.")
    save: Optional[StrictInt] = Field(
        default=None, ge=0, description="Number of history lines to save (defaults to size)."
    )
    path: Optional[str] = Field(
        default=None,
        description="History file location (default depends on the host state version).",
    )
    ignore_dups: StrictBool = Field(
        default=True,
        description="Do not record a command that duplicates the previous event.",
    )
    ignore_space: StrictBool = Field(
        default=True,
        description="Do not record commands that start with a space.",
    )
    expire_duplicates_first: StrictBool = Field(
        default=False, description="Expire duplicates first."
    )
    extended: StrictBool = Field(
        default=False, description="Save timestamps into the history file."
    )
    share: StrictBool = Field(default=True, description="Share history between zsh sessions.")

    @model_validator(mode="before")
    @classmethod
    def _save_defaults_to_size(cls, data):
        if isinstance(data, dict) and data.get("save") is None:
            size = data.get("size", cls.model_fields["size"].default)
            data = {k: v for k, v in data.items() if k != "save"}
            data["save"] = size
        return data


class Plugin(OptionModel):
    """A zsh plugin linked into the plugins directory and sourced from .zshrc."""

    name: str = Field(..., min_length=1, description="The name of the plugin.")
    src: str = Field(..., min_length=1, description="Path to the plugin folder.")
    file: str = Field(default="", description="The plugin script to source.")

    @field_validator("name")
    @classmethod
    def _name_is_path_segment(cls, value: str) -> str:
        if "/" in value or value in (".", ".."):
            raise ValueError(f"plugin name must be a single path segment, got {value!r}")
        return value

    @model_validator(mode="before")
    @classmethod
    def _default_file(cls, data):
        if isinstance(data, dict) and not data.get("file") and data.get("name"):
            data = {**data, "file": f"{data['name']}.plugin.zsh"}
        return data


# ---------------------------------------------------------------------------
# oh-my-zsh
# ---------------------------------------------------------------------------

class OhMyZsh(OptionModel):
    """Options to configure oh-my-zsh."""

    enable: StrictBool = Field(default=False)
    plugins: list[str] = Field(default_factory=list, description="List of oh-my-zsh plugins.")
    custom: str = Field(default="", description="Path to a custom oh-my-zsh package.")
    theme: str = Field(default="", description="Name of the theme to be used by oh-my-zsh.")
    extra_config: str = Field(default="", description="Extra settings for plugins.")


# ---------------------------------------------------------------------------
# prezto
# ---------------------------------------------------------------------------

class PreztoAutosuggestions(OptionModel):
    color: Optional[str] = Field(default=None, description="Set the query found color.")


class PreztoCompletions(OptionModel):
    ignored_hosts: list[str] = Field(
        default_factory=list,
        description="Entries to ignore in static /etc/hosts for host completion.",
    )


class PreztoEditor(OptionModel):
    keymap: Optional[EditorKeymap] = Field(default="emacs")
    dot_expansion: Optional[StrictBool] = Field(
        default=None, description="Auto convert .... to ../.."
    )
    prompt_context: Optional[StrictBool] = Field(default=None)


class PreztoGit(OptionModel):
    submodule_ignore: Optional[SubmoduleIgnore] = Field(default=None)


class PreztoGnuUtility(OptionModel):
    prefix: Optional[str] = Field(default=None, description="Command prefix on non-GNU systems.")


class PreztoHistorySubstring(OptionModel):
    found_color: Optional[str] = Field(default=None)
    not_found_color: Optional[str] = Field(default=None)
    globbing_flags: Optional[str] = Field(default=None)


class PreztoMacOS(OptionModel):
    dash_keyword: Optional[str] = Field(default=None)


class PreztoPrompt(OptionModel):
    theme: Optional[str] = Field(default="sorin", description="Prompt theme to load.")
    pwd_length: Optional[PwdLength] = Field(default=None)
    show_return_val: Optional[StrictBool] = Field(default=None)


class PreztoPython(OptionModel):
    virtualenv_auto_switch: Optional[StrictBool] = Field(default=None)
    virtualenv_initialize: Optional[StrictBool] = Field(default=None)


class PreztoRuby(OptionModel):
    chruby_auto_switch: Optional[StrictBool] = Field(default=None)


class PreztoAutoStart(OptionModel):
    auto_start_local: Optional[StrictBool] = Field(default=None)
    auto_start_remote: Optional[StrictBool] = Field(default=None)


class PreztoTmux(PreztoAutoStart):
    iterm_integration: Optional[StrictBool] = Field(default=None)
    default_session_name: Optional[str] = Field(default=None)


class PreztoSsh(OptionModel):
    identities: list[str] = Field(default_factory=list)


class PreztoSyntaxHighlighting(OptionModel):
    highlighters: list[str] = Field(default_factory=list)
    styles: dict[str, str] = Field(default_factory=dict)
    pattern: dict[str, str] = Field(default_factory=dict)


class PreztoTerminal(OptionModel):
    auto_title: Optional[StrictBool] = Field(default=None)
    window_title_format: Optional[str] = Field(default=None)
    tab_title_format: Optional[str] = Field(default=None)
    multiplexer_title_format: Optional[str] = Field(default=None)


class PreztoUtility(OptionModel):
    safe_ops: Optional[StrictBool] = Field(default=None)


class Prezto(OptionModel):
    """Options to configure prezto."""

    enable: StrictBool = Field(default=False)
    case_sensitive: Optional[StrictBool] = Field(default=None)
    color: Optional[StrictBool] = Field(default=True)
    pmodule_dirs: list[str] = Field(default_factory=list)
    extra_config: str = Field(default="", description="Appended to .zpreztorc.")
    extra_modules: list[str] = Field(default_factory=list)
    extra_functions: list[str] = Field(default_factory=list)
    pmodules: list[str] = Field(default_factory=lambda: list(DEFAULT_PMODULES))
    autosuggestions: PreztoAutosuggestions = Field(default_factory=PreztoAutosuggestions)
    completions: PreztoCompletions = Field(default_factory=PreztoCompletions)
    editor: PreztoEditor = Field(default_factory=PreztoEditor)
    git: PreztoGit = Field(default_factory=PreztoGit)
    gnu_utility: PreztoGnuUtility = Field(default_factory=PreztoGnuUtility)
    history_substring: PreztoHistorySubstring = Field(default_factory=PreztoHistorySubstring)
    mac_os: PreztoMacOS = Field(default_factory=PreztoMacOS, alias="macOS")
    prompt: PreztoPrompt = Field(default_factory=PreztoPrompt)
    python: PreztoPython = Field(default_factory=PreztoPython)
    ruby: PreztoRuby = Field(default_factory=PreztoRuby)
    screen: PreztoAutoStart = Field(default_factory=PreztoAutoStart)
    ssh: PreztoSsh = Field(default_factory=PreztoSsh)
    syntax_highlighting: PreztoSyntaxHighlighting = Field(
        default_factory=PreztoSyntaxHighlighting
    )
    terminal: PreztoTerminal = Field(default_factory=PreztoTerminal)
    tmux: PreztoTmux = Field(default_factory=PreztoTmux)
    utility: PreztoUtility = Field(default_factory=PreztoUtility)


# ---------------------------------------------------------------------------
# Root
# ---------------------------------------------------------------------------

class ZshConfig(OptionModel):
    """The complete zsh configuration.

    Instances straight out of validation may still hold unset derived
    values (``history.path``, ``enable_completion``).  ``normalize`` in
    :mod:`zdotgen.schema.loader` resolves them against a host context.
    """

    enable: StrictBool = Field(default=True)
    autocd: Optional[StrictBool] = Field(
        default=None,
        description="Enter a directory when its name is typed as a command.",
    )
    dot_dir: Optional[str] = Field(
        default=None,
        description="Directory for the zsh configuration, relative to home.",
    )
    shell_aliases: dict[str, str] = Field(default_factory=dict)
    enable_completion: Optional[StrictBool] = Field(default=None)
    enable_autosuggestions: StrictBool = Field(default=False)
    history: HistoryPolicy = Field(default_factory=HistoryPolicy)
    default_keymap: Optional[Keymap] = Field(default=None)
    session_variables: dict[str, ZshValue] = Field(default_factory=dict)
    local_variables: dict[str, ZshValue] = Field(default_factory=dict)
    init_extra_before_comp_init: str = Field(default="")
    init_extra: str = Field(default="")
    env_extra: str = Field(default="")
    profile_extra: str = Field(default="")
    login_extra: str = Field(default="")
    logout_extra: str = Field(default="")
    plugins: list[Plugin] = Field(default_factory=list)
    oh_my_zsh: OhMyZsh = Field(default_factory=OhMyZsh, alias="oh-my-zsh")
    prezto: Prezto = Field(default_factory=Prezto)

    @field_validator("dot_dir")
    @classmethod
    def _relative_dot_dir(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return None
        if value.startswith("/"):
            raise ValueError("dotDir must be relative to the home directory")
        value = value.rstrip("/")
        if not value:
            raise ValueError("dotDir must not be empty")
        return value

    @field_validator("shell_aliases")
    @classmethod
    def _alias_names(cls, value: dict[str, str]) -> dict[str, str]:
        for name in value:
            if not name or "=" in name or any(ch.isspace() for ch in name):
                raise ValueError(f"invalid alias name {name!r}")
        return value

    @field_validator("session_variables", "local_variables")
    @classmethod
    def _variable_names(cls, value: dict[str, object]) -> dict[str, object]:
        for name in value:
            if not _VARIABLE_NAME_RE.match(name):
                raise ValueError(f"invalid variable name {name!r}")
        return value

    @model_validator(mode="after")
    def _unique_plugin_names(self) -> "ZshConfig":
        seen: set[str] = set()
        for plugin in self.plugins:
            if plugin.name in seen:
                raise ValueError(f"duplicate plugin name {plugin.name!r}")
            seen.add(plugin.name)
        return self

    # ------------------------------------------------------------------
    # Derived values
    # ------------------------------------------------------------------

    @property
    def framework_enabled(self) -> bool:
        """Whether oh-my-zsh or prezto takes over shell initialization."""
        return self.oh_my_zsh.enable or self.prezto.enable

    @property
    def runs_compinit(self) -> bool:
        """Whether .zshrc calls ``compinit`` itself."""
        return bool(self.enable_completion) and not self.framework_enabled

    @property
    def plugins_dir(self) -> str:
        """Plugins directory relative to home."""
        return self.rel_to_dot_dir("plugins") if self.dot_dir else ".zsh/plugins"

    def rel_to_dot_dir(self, name: str) -> str:
        """Path of *name* inside the configuration root, relative to home."""
        return f"{self.dot_dir}/{name}" if self.dot_dir else name

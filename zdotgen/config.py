"""Host context for rendering.

The generated dotfiles reference things zdotgen does not own: install
prefixes of zsh and its frameworks, the host's state version, the profile
directory that provides session variables, and the text of prezto's runcom
files.  All of it is collected in :class:`HostContext`, a typed pydantic
model that can be built from defaults, a YAML/JSON document, or
environment variables.
"""

from __future__ import annotations

import logging
import os
import re
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator
from pydantic.alias_generators import to_camel

from zdotgen.errors import SchemaError

logger = logging.getLogger(__name__)

# Runcom files shipped by prezto that may be inlined or referenced.
PREZTO_RUNCOMS: tuple[str, ...] = ("zshrc", "zshenv", "zprofile", "zlogin", "zlogout")

# History files moved out of the config root starting with this state version.
HISTORY_PATH_STATE_VERSION = "20.03"

_VERSION_RE = re.compile(r"^\d+(\.\d+)*$")


class _HostModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="forbid",
        frozen=True,
    )


class PreztoDistribution(_HostModel):
    """Location and runcom texts of the installed prezto distribution."""

    root: str = Field(default="/usr/share/zsh-prezto")
    runcoms: dict[str, str] = Field(
        default_factory=dict,
        description="Runcom name (zshrc, zprofile, ...) to file text",
    )

    @field_validator("runcoms")
    @classmethod
    def _known_runcoms(cls, value: dict[str, str]) -> dict[str, str]:
        unknown = sorted(set(value) - set(PREZTO_RUNCOMS))
        if unknown:
            raise ValueError(f"unknown prezto runcoms: {', '.join(unknown)}")
        return value

    def runcom_path(self, name: str) -> str:
        """Path of a runcom file inside the distribution."""
        return f"{self.root.rstrip('/')}/runcoms/{name}"


class HostContext(_HostModel):
    """Facts about the host the dotfiles are rendered for."""

    state_version: str = Field(default="24.05")
    profile_directory: str = Field(default="$HOME/.nix-profile")
    session_variables_script: str | None = Field(
        default=None,
        description="Script sourced before exporting session variables",
    )
    cache_home: str = Field(default=".cache", description="Relative to the home directory")
    zsh_package: str = Field(default="/usr")
    autosuggestions_package: str = Field(default="/usr")
    oh_my_zsh_package: str = Field(default="/usr")
    prezto: PreztoDistribution = Field(default_factory=PreztoDistribution)

    @field_validator("state_version")
    @classmethod
    def _version_format(cls, value: str) -> str:
        if not _VERSION_RE.match(value):
            raise ValueError(f"state version must look like '24.05', got {value!r}")
        return value

    @field_validator("cache_home")
    @classmethod
    def _relative_cache(cls, value: str) -> str:
        if value.startswith("/") or not value.strip("/"):
            raise ValueError("cacheHome must be a non-empty path relative to home")
        return value.strip("/")

    # ------------------------------------------------------------------
    # Derived values
    # ------------------------------------------------------------------

    @property
    def session_script(self) -> str:
        """Script sourced at the top of the environment block."""
        if self.session_variables_script:
            return self.session_variables_script
        return f"{self.profile_directory}/etc/profile.d/hm-session-vars.sh"

    @property
    def help_dir(self) -> str:
        return f"{self.zsh_package}/share/zsh/$ZSH_VERSION/help"

    @property
    def autosuggestions_script(self) -> str:
        return (
            f"{self.autosuggestions_package}"
            "/share/zsh-autosuggestions/zsh-autosuggestions.zsh"
        )

    @property
    def oh_my_zsh_root(self) -> str:
        return f"{self.oh_my_zsh_package}/share/oh-my-zsh"

    @property
    def history_in_home(self) -> bool:
        """Whether the default history file lives directly in ``$HOME``."""
        return version_at_least(self.state_version, HISTORY_PATH_STATE_VERSION)

    # ------------------------------------------------------------------
    # Construction helpers
    # ------------------------------------------------------------------

    @classmethod
    def from_mapping(cls, data: dict[str, Any]) -> "HostContext":
        """Validate a raw mapping, raising ``SchemaError`` on failure."""
        try:
            return cls.model_validate(data)
        except ValidationError as exc:
            raise SchemaError.from_validation_error(exc, prefix="host") from exc

    @classmethod
    def load(cls, path: str | Path) -> "HostContext":
        """Load a host context from a YAML or JSON document."""
        from zdotgen.utils import load_document

        return cls.from_mapping(load_document(path))

    @classmethod
    def from_env(cls) -> "HostContext":
        """Build a ``HostContext`` from environment variables.

        Recognised variables (all optional):
            ZDOTGEN_STATE_VERSION, ZDOTGEN_PROFILE_DIRECTORY,
            ZDOTGEN_CACHE_HOME, ZDOTGEN_ZSH_PACKAGE,
            ZDOTGEN_AUTOSUGGESTIONS_PACKAGE, ZDOTGEN_OH_MY_ZSH_PACKAGE,
            ZDOTGEN_PREZTO_ROOT.

        When ``ZDOTGEN_PREZTO_ROOT`` points at an existing directory, its
        runcom files are read as well.
        """
        kwargs: dict[str, Any] = {}
        env_map = {
            "ZDOTGEN_STATE_VERSION": "state_version",
            "ZDOTGEN_PROFILE_DIRECTORY": "profile_directory",
            "ZDOTGEN_CACHE_HOME": "cache_home",
            "ZDOTGEN_ZSH_PACKAGE": "zsh_package",
            "ZDOTGEN_AUTOSUGGESTIONS_PACKAGE": "autosuggestions_package",
            "ZDOTGEN_OH_MY_ZSH_PACKAGE": "oh_my_zsh_package",
        }
        for var, field_name in env_map.items():
            if os.environ.get(var):
                kwargs[field_name] = os.environ[var]

        prezto_root = os.environ.get("ZDOTGEN_PREZTO_ROOT")
        if prezto_root:
            kwargs["prezto"] = {
                "root": prezto_root,
                "runcoms": load_prezto_runcoms(prezto_root),
            }

        return cls.from_mapping(kwargs)

    def with_prezto_runcoms(self) -> "HostContext":
        """Return a copy whose prezto runcoms are read from ``prezto.root``.

        Runcoms already present are kept.
        """
        loaded = load_prezto_runcoms(self.prezto.root)
        merged = {**loaded, **self.prezto.runcoms}
        prezto = self.prezto.model_copy(update={"runcoms": merged})
        return self.model_copy(update={"prezto": prezto})


def load_prezto_runcoms(root: str | Path) -> dict[str, str]:
    """Read the prezto runcom files found under ``<root>/runcoms``.

    Missing files are skipped; a missing directory yields an empty mapping.
    """
    runcoms_dir = Path(root) / "runcoms"
    if not runcoms_dir.is_dir():
        logger.debug("No prezto runcoms directory at %s", runcoms_dir)
        return {}

    texts: dict[str, str] = {}
    for name in PREZTO_RUNCOMS:
        candidate = runcoms_dir / name
        if candidate.is_file():
            texts[name] = candidate.read_text(encoding="utf-8")
    logger.debug("Loaded prezto runcoms %s from %s", sorted(texts), runcoms_dir)
    return texts


def version_at_least(version: str, minimum: str) -> bool:
    """Compare dotted numeric versions (``"20.09" >= "20.03"``)."""
    return _version_tuple(version) >= _version_tuple(minimum)


def _version_tuple(version: str) -> tuple[int, ...]:
    return tuple(int(part) for part in version.split("."))

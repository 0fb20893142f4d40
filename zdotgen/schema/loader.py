"""Validation and normalization of raw zsh configuration input.

``load_config`` is the single entry point turning user-supplied data into a
rendered-ready :class:`ZshConfig`.  Pydantic validation errors are
converted into :class:`SchemaError` carrying the offending option path.
Cross-option policy (derived defaults, framework interactions) lives in
``normalize`` so the renderer can stay a set of independent blocks.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from zdotgen.config import HostContext
from zdotgen.errors import SchemaError
from zdotgen.schema.models import ZshConfig
from zdotgen.utils import load_document

logger = logging.getLogger(__name__)

# Prezto runcoms whose text ends up inline in generated files.
_INLINED_ALWAYS = ("zshrc", "zshenv")
_INLINED_WITH_EXTRA = {
    "zprofile": "profile_extra",
    "zlogin": "login_extra",
    "zlogout": "logout_extra",
}


def validate_config(raw: dict[str, Any] | ZshConfig) -> ZshConfig:
    """Validate *raw* against the option schema without normalizing it.

    Raises:
        SchemaError: On type mismatches, enum violations, unknown keys, or
            broken invariants.  ``path`` names the first offending option.
    """
    if isinstance(raw, ZshConfig):
        return raw
    if not isinstance(raw, dict):
        raise SchemaError(
            f"Configuration must be a mapping, got {type(raw).__name__}"
        )
    try:
        return ZshConfig.model_validate(raw)
    except ValidationError as exc:
        raise SchemaError.from_validation_error(exc) from exc


def normalize(config: ZshConfig, host: HostContext) -> ZshConfig:
    """Resolve derived defaults and cross-option policy.

    - ``history.save`` falls back to ``history.size``.
    - ``history.path`` defaults to ``$HOME/.zsh_history`` for recent state
      versions, otherwise to ``.zsh_history`` inside the config root.
    - ``enable_completion`` left unset resolves to ``True``.  An explicit
      value always wins, including ``False`` with plugins configured.
    - With prezto enabled the host must supply every runcom text that will
      be inlined.

    The pass is idempotent: normalizing twice yields an equal config.
    """
    history_updates: dict[str, Any] = {}
    if config.history.save is None:
        history_updates["save"] = config.history.size
    if config.history.path is None:
        if host.history_in_home:
            history_updates["path"] = "$HOME/.zsh_history"
        else:
            history_updates["path"] = config.rel_to_dot_dir(".zsh_history")

    updates: dict[str, Any] = {}
    if history_updates:
        updates["history"] = config.history.model_copy(update=history_updates)

    if config.enable_completion is None:
        if config.plugins:
            logger.debug(
                "Enabling completion by default for %d configured plugin(s)",
                len(config.plugins),
            )
        updates["enable_completion"] = True

    if config.enable and config.prezto.enable:
        _check_prezto_runcoms(config, host)

    completion = updates.get("enable_completion", config.enable_completion)
    if config.enable and config.framework_enabled and completion:
        logger.debug("Skipping standalone compinit: framework initializes completion")

    return config.model_copy(update=updates) if updates else config


def load_config(
    raw: dict[str, Any] | ZshConfig,
    host: HostContext | None = None,
) -> ZshConfig:
    """Validate and normalize *raw* into a render-ready configuration."""
    host = host or HostContext()
    return normalize(validate_config(raw), host)


def load_config_file(path: str | Path, host: HostContext | None = None) -> ZshConfig:
    """Load a YAML or JSON configuration file and normalize it."""
    return load_config(load_document(path), host)


def _check_prezto_runcoms(config: ZshConfig, host: HostContext) -> None:
    needed = list(_INLINED_ALWAYS)
    for runcom, extra_field in _INLINED_WITH_EXTRA.items():
        if getattr(config, extra_field):
            needed.append(runcom)

    missing = [name for name in needed if name not in host.prezto.runcoms]
    if missing:
        errors = [
            (f"host.prezto.runcoms.{name}", "runcom text required when prezto is enabled")
            for name in missing
        ]
        first_path, first_msg = errors[0]
        raise SchemaError(first_msg, first_path, errors)

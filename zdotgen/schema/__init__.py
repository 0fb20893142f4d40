"""Option schema: typed models, validation and normalization.

Quick usage::

    from zdotgen.schema import load_config

    config = load_config({"history": {"size": 5000}, "plugins": [...]})
"""

from zdotgen.schema.loader import load_config, load_config_file, normalize, validate_config
from zdotgen.schema.models import (
    HistoryPolicy,
    Keymap,
    OhMyZsh,
    Plugin,
    Prezto,
    ZshConfig,
)

__all__ = [
    "HistoryPolicy",
    "Keymap",
    "OhMyZsh",
    "Plugin",
    "Prezto",
    "ZshConfig",
    "load_config",
    "load_config_file",
    "normalize",
    "validate_config",
]

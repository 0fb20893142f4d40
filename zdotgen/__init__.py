"""zdotgen -- declarative zsh dotfile generation.

Package structure:
- zdotgen.schema: Option models, validation and normalization
- zdotgen.render: Conditional blocks, prezto directive table, templates
- zdotgen.assembler: Output files and required packages
- zdotgen.writer: Materializing output files in a home directory

Quick usage::

    from zdotgen import HostContext, load_config, render_files

    host = HostContext()
    config = load_config({"history": {"size": 5000}}, host)
    result = render_files(config, host)
"""

from zdotgen.assembler import Inline, OutputFile, Reference, RenderResult, render_files
from zdotgen.config import HostContext
from zdotgen.errors import SchemaError, WriteError, ZdotgenError
from zdotgen.schema import ZshConfig, load_config

__version__ = "0.1.0"

__all__ = [
    "HostContext",
    "Inline",
    "OutputFile",
    "Reference",
    "RenderResult",
    "SchemaError",
    "WriteError",
    "ZdotgenError",
    "ZshConfig",
    "load_config",
    "render_files",
]

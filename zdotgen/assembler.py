"""File assembly: rendered blocks grouped into home-directory entries.

``render_files`` is the main entry point.  It turns a configuration into a
:class:`RenderResult`: an ordered list of :class:`OutputFile` values plus
the runtime packages the generated files rely on.  Each file's content is
either :class:`Inline` text or a :class:`Reference` to an existing path,
which the writer materializes as a symlink instead of copying it.
"""

from __future__ import annotations

import logging
from typing import Annotated, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

from zdotgen.config import HostContext
from zdotgen.render.blocks import render_zshenv, render_zshrc
from zdotgen.render.prezto import render_zpreztorc
from zdotgen.schema.loader import normalize
from zdotgen.schema.models import ZshConfig

logger = logging.getLogger(__name__)

# Package identifiers declared in the result.
ZSH_PACKAGE = "zsh"
COMPLETIONS_PACKAGE = "nix-zsh-completions"
OH_MY_ZSH_PACKAGE = "oh-my-zsh"
PREZTO_PACKAGE = "zsh-prezto"
AUTOSUGGESTIONS_PACKAGE = "zsh-autosuggestions"

# Login-shell runcoms: (runcom name, config field with the user's extra text).
LOGIN_RUNCOMS: tuple[tuple[str, str], ...] = (
    ("zprofile", "profile_extra"),
    ("zlogin", "login_extra"),
    ("zlogout", "logout_extra"),
)


# ---------------------------------------------------------------------------
# Output model
# ---------------------------------------------------------------------------


class Inline(BaseModel):
    """File content written out as text."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["inline"] = "inline"
    text: str


class Reference(BaseModel):
    """File content taken from an existing path by reference."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["reference"] = "reference"
    source: str


Content = Annotated[Union[Inline, Reference], Field(discriminator="kind")]


class OutputFile(BaseModel):
    """One generated entry, addressed relative to the home directory."""

    model_config = ConfigDict(frozen=True)

    path: str
    content: Content

    @property
    def is_reference(self) -> bool:
        return isinstance(self.content, Reference)


class RenderResult(BaseModel):
    """Everything a configuration renders to."""

    model_config = ConfigDict(frozen=True)

    files: list[OutputFile] = Field(default_factory=list)
    packages: list[str] = Field(default_factory=list)

    @property
    def paths(self) -> list[str]:
        return [f.path for f in self.files]

    def get(self, path: str) -> Optional[OutputFile]:
        """Return the file at *path*, or ``None``."""
        for output in self.files:
            if output.path == path:
                return output
        return None

    def text(self, path: str) -> Optional[str]:
        """Inline text at *path*; ``None`` if absent or a reference."""
        output = self.get(path)
        if output is None or not isinstance(output.content, Inline):
            return None
        return output.content.text


# ---------------------------------------------------------------------------
# Assembly
# ---------------------------------------------------------------------------


def render_files(config: ZshConfig, host: HostContext | None = None) -> RenderResult:
    """Render *config* into output files and the required package list.

    The configuration is normalized against *host* first.  That is a no-op
    for a config that ``load_config`` produced with the same host; pass the
    same host to both so derived values such as the history path agree.
    The function is pure: equal inputs produce equal results, and nothing
    is read from or written to disk.

    Raises:
        SchemaError: If *host* lacks prezto runcom texts the config needs.
            This only happens when the config was validated against a
            different host or not normalized at all.
    """
    host = host or HostContext()
    config = normalize(config, host)
    if not config.enable:
        logger.debug("zsh configuration disabled; nothing to render")
        return RenderResult()

    files: list[OutputFile] = []
    files.extend(_zshenv_files(config, host))
    files.extend(_login_files(config, host))

    zpreztorc = render_zpreztorc(config)
    if zpreztorc is not None:
        files.append(_inline(config.rel_to_dot_dir(".zpreztorc"), zpreztorc))

    files.append(_inline(config.rel_to_dot_dir(".zshrc"), render_zshrc(config, host)))

    if config.oh_my_zsh.enable:
        # Some oh-my-zsh plugins expect the cache directory to exist.
        files.append(_inline(f"{host.cache_home}/oh-my-zsh/.keep", ""))

    for plugin in config.plugins:
        files.append(_reference(f"{config.plugins_dir}/{plugin.name}", plugin.src))

    result = RenderResult(files=files, packages=required_packages(config))
    logger.debug("Rendered %d file(s): %s", len(result.files), ", ".join(result.paths))
    return result


def required_packages(config: ZshConfig) -> list[str]:
    """Runtime packages the generated files depend on."""
    packages = [ZSH_PACKAGE]
    if config.enable_completion:
        packages.append(COMPLETIONS_PACKAGE)
    if config.oh_my_zsh.enable:
        packages.append(OH_MY_ZSH_PACKAGE)
    if config.prezto.enable:
        packages.append(PREZTO_PACKAGE)
    if config.enable_autosuggestions:
        packages.append(AUTOSUGGESTIONS_PACKAGE)
    return packages


def _zshenv_files(config: ZshConfig, host: HostContext) -> list[OutputFile]:
    body = render_zshenv(config, host)
    if body is None:
        return []
    if config.dot_dir is None:
        return [_inline(".zshenv", body)]
    # ~/.zshenv only forwards to the relocated one, even if ZDOTDIR is set.
    return [
        _inline(".zshenv", f"source $HOME/{config.dot_dir}/.zshenv\n"),
        _inline(config.rel_to_dot_dir(".zshenv"), body),
    ]


def _login_files(config: ZshConfig, host: HostContext) -> list[OutputFile]:
    files: list[OutputFile] = []
    prezto = config.prezto.enable
    for runcom, extra_field in LOGIN_RUNCOMS:
        path = config.rel_to_dot_dir(f".{runcom}")
        extra: str = getattr(config, extra_field)
        if extra:
            prefix = host.prezto.runcoms[runcom] if prezto else ""
            files.append(_inline(path, prefix + extra))
        elif prezto:
            files.append(_reference(path, host.prezto.runcom_path(runcom)))
    return files


def _inline(path: str, text: str) -> OutputFile:
    return OutputFile(path=path, content=Inline(text=text))


def _reference(path: str, source: str) -> OutputFile:
    return OutputFile(path=path, content=Reference(source=source))

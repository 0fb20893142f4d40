"""Conditional renderer: pure text blocks for each generated zsh file."""

from zdotgen.render.blocks import ZSHRC_BLOCKS, ZSHENV_BLOCKS, render_zshenv, render_zshrc
from zdotgen.render.prezto import DIRECTIVES, Directive, render_zpreztorc
from zdotgen.render.templates import TemplateRenderer

__all__ = [
    "DIRECTIVES",
    "Directive",
    "TemplateRenderer",
    "ZSHENV_BLOCKS",
    "ZSHRC_BLOCKS",
    "render_zpreztorc",
    "render_zshenv",
    "render_zshrc",
]

"""
``prettydump.highlight``: Colourised output
===========================================

A :mod:`pygments` lexer for the text produced by
:class:`~prettydump.Renderer`, and helpers to show renderings in a terminal or
in IPython.
"""

from __future__ import annotations

import functools
from typing import Any, Callable

bygroups: Callable[..., Any]

import pygments  # noqa: E402
import pygments.formatters  # noqa: E402
from pygments.lexer import RegexLexer, bygroups, words  # noqa: E402
from pygments.token import (  # noqa: E402
    Comment,
    Keyword,
    Name,
    Number,
    Operator,
    Punctuation,
    String,
    Text,
    Whitespace,
)

from .renderer import Renderer  # noqa: E402

__all__ = (
    "PrettyDumpLexer",
    "highlight",
    "get_highlight_style",
    "Dumped",
)

CSS_CLASS = "prettydump-highlight"


class PrettyDumpLexer(RegexLexer):
    name = "PrettyDump"
    aliases = ["prettydump"]
    filenames: list[str] = []

    tokens = {
        "root": [
            (r"\s+", Whitespace),
            (r"\(Unhandled [^)]*\)", Comment.Special),
            # (TypeName): text
            (
                r"(\()(\w+)(\))(:)",
                bygroups(Punctuation, Name.Class, Punctuation, Operator),
            ),
            (
                r"(\w+)(\.new)(\()",
                bygroups(Name.Class, Keyword, Punctuation),
            ),
            (r"<-?\d+/\d+>", Number),
            (
                r"(:!?)([^\s(),\]}]+)",
                bygroups(Operator, Name.Attribute),
            ),
            (r"\$[\[({]|[()\]}]", Punctuation),
            (r"\^?\.\.\^?", Operator),
            (r"b?'(\\.|[^'\\])*'", String.Single),
            (r'b?"(\\.|[^"\\])*"', String.Double),
            (r"-?(Inf|inf|nan)\b", Number.Float),
            (r"-?\d+(\.\d+)?([eE][+-]?\d+)?j?", Number),
            (
                words(("True", "False", "None", "Mu"), suffix=r"\b"),
                Keyword.Constant,
            ),
            (r"\w+", Text),
            (r",", Punctuation),
            (r".", Text),
        ],
    }


@functools.lru_cache()
def get_highlight_style() -> str:
    formatter = pygments.formatters.HtmlFormatter(cssclass=CSS_CLASS)
    styles: str = formatter.get_style_defs(f".{CSS_CLASS}")
    return styles


def highlight(text: str, *, html: bool = False) -> str:
    """Colourise the output of a renderer.

    Args:
      text(str): A rendered value
      html(bool): Produce html instead of terminal escape sequences.
    """
    formatter = (
        pygments.formatters.HtmlFormatter(cssclass=CSS_CLASS)
        if html
        else pygments.formatters.TerminalFormatter()
    )
    res: str = pygments.highlight(text, PrettyDumpLexer(), formatter)
    return res


class Dumped:
    """Wraps a value so it shows up rendered.

    ``str()`` gives the plain rendering, IPython shows it highlighted.
    """

    __slots__ = ("value", "renderer")

    value: Any
    renderer: Renderer

    def __init__(self, value: Any, renderer: Renderer | None = None) -> None:
        self.value = value
        self.renderer = Renderer() if renderer is None else renderer

    def __str__(self) -> str:
        return self.renderer.render(self.value)

    def __pretty_dump__(self, renderer: Renderer, depth: int) -> str:
        return renderer.render(self.value)

    def _repr_html_(self) -> str:
        return (
            f"<style>{get_highlight_style()}</style>"
            f"{highlight(str(self), html=True)}"
        )

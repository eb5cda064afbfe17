"""Human readable renderings of arbitrary python values"""
from __future__ import annotations

from importlib import metadata

from .errors import CyclicStructureError, RenderWarning, SignatureMismatchError
from .registry import Handler, HandlerRegistry
from .renderer import Renderer, pretty_dump
from .settings import COMPACT, PRETTY, Format, Settings
from .values import MU, Interval, Mu, Pair, PrettyDumpable

# https://packaging.python.org/en/latest/guides/single-sourcing-package-version/
__version__ = metadata.version(__name__)

__all__ = (
    "Renderer",
    "pretty_dump",
    "Settings",
    "Format",
    "COMPACT",
    "PRETTY",
    "Handler",
    "HandlerRegistry",
    "Pair",
    "Interval",
    "Mu",
    "MU",
    "PrettyDumpable",
    "SignatureMismatchError",
    "CyclicStructureError",
    "RenderWarning",
)

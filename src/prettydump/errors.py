"""
``prettydump.errors``: Exceptions and warnings
==============================================
"""
from __future__ import annotations

__all__ = (
    "SignatureMismatchError",
    "CyclicStructureError",
    "RenderWarning",
)


class SignatureMismatchError(TypeError):
    """A handler doesn't match ``handler(renderer, value, depth) -> str``"""


class CyclicStructureError(ValueError):
    """A value contains itself"""


class RenderWarning(UserWarning):
    """A value could only be rendered as a placeholder"""

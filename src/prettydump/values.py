"""``prettydump.values``: Values with a dedicated rendering
========================================================

Python doesn't have builtin types for some of the things we want to show, this
module fills the gaps:

+ :class:`Pair`: a single key/value association. The entries of a
  :class:`dict` are rendered as pairs::

    >>> from prettydump import pretty_dump, COMPACT
    >>> pretty_dump(Pair("verbose", True))
    ':verbose'
    >>> pretty_dump(Pair("limit", 10))
    ':limit(10)'

+ :class:`Interval`: a range of values with optional bounds::

    >>> pretty_dump(Interval(0, 1, excludes_max=True))
    '0..^1'
    >>> pretty_dump(Interval(max=5))
    '-Inf..5'

+ :data:`MU`: marks a value that was never set::

    >>> pretty_dump({"name": MU}, COMPACT)
    '${:name(Mu)}'

:class:`PrettyDumpable` describes objects that know how to render themselves.
"""

from __future__ import annotations

import dataclasses
import typing
from typing import Any, ClassVar, Final, Protocol

if typing.TYPE_CHECKING:  # pragma: no cover
    from .renderer import Renderer

__all__ = ("Pair", "Interval", "Mu", "MU", "PrettyDumpable")


@dataclasses.dataclass(slots=True, frozen=True, order=True)
class Pair:
    """A key associated with a value.

    Pairs are ordered by key first, this is what keeps the entries of a
    mapping in a stable order.
    """

    key: Any
    value: Any


@dataclasses.dataclass(slots=True, frozen=True)
class Interval:
    """All the values between *min* and *max*

    ``None`` stands for an unbounded side.
    """

    min: Any = None
    max: Any = None
    excludes_min: bool = False
    excludes_max: bool = False


class Mu:
    """Type of :data:`MU`, there is only ever one instance."""

    __slots__ = ()

    _instance: ClassVar[Mu | None] = None

    def __new__(cls) -> Mu:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "Mu"

    def __reduce__(self) -> tuple[type[Mu], tuple[()]]:
        return Mu, ()


#: The uninitialised value
MU: Final = Mu()


@typing.runtime_checkable
class PrettyDumpable(Protocol):
    """Objects that control how they are rendered.

    The hook receives the renderer (to render nested values) and the depth
    the object is rendered at. The text it returns is indented by the
    renderer, nested values should be requested at depth ``1`` to sit one
    level in::

        class Point:
            def __pretty_dump__(self, renderer, depth):
                x = renderer.render(self.x)
                y = renderer.render(self.y)
                return f"Point({x}, {y})"
    """

    def __pretty_dump__(
        self, renderer: Renderer, depth: int
    ) -> str:  # pragma: no cover
        ...

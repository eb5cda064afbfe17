"""
``prettydump.renderer``: Turn any value into readable text
==========================================================

:class:`Renderer` picks how to show a value by going down a fixed chain, the
first strategy that applies wins:

1. a handler registered on the renderer for the name of the value's type (see
   :meth:`Renderer.add_handler`),
2. the value's own ``__pretty_dump__`` method (see
   :class:`~prettydump.PrettyDumpable`),
3. numbers (:class:`numbers.Number`, but not :class:`bool`),
4. a built-in strategy for the value's type,
5. a built-in strategy for one of the classes the type inherits from; the
   output is then wrapped in ``TypeName.new(...)``,
6. ``str(value)`` if the type knows how to convert itself to text,
7. a placeholder naming the type.

Containers are sorted before they are rendered so the output doesn't depend
on insertion order::

  >>> r = Renderer(COMPACT)
  >>> print(r.render({"b": [3, 1, 2], "a": True}))
  ${:a, :b($[1, 2, 3])}
  >>> print(r.render(collections.OrderedDict(x=(2, 1))))
  OrderedDict.new(${:x($(1, 2))})
  >>> print(r.render(object()))
  (Unhandled object)

"""

from __future__ import annotations

import collections
import collections.abc
import dataclasses
import functools
import itertools
import logging
import numbers
import operator
import textwrap
import types
import typing
import warnings
from typing import (
    Any,
    Callable,
    ClassVar,
    Iterable,
    Mapping,
    TypeAlias,
    TypeVar,
)

from .errors import CyclicStructureError, RenderWarning
from .registry import Handler, HandlerRegistry
from .settings import COMPACT, Format, Settings  # noqa: F401
from .values import Interval, Mu, Pair

__all__ = ("Renderer", "pretty_dump", "Strategy")

logger = logging.getLogger(__name__)

#: ``strategy(renderer, value, depth) -> str``
Strategy: TypeAlias = Callable[[Any, Any, int], str]

S = TypeVar("S", bound=Strategy)

# name -> (type, strategy). The type is kept to make sure we don't pick up an
# unrelated class that happens to share the name of a builtin.
_STRATEGIES: dict[str, tuple[type, Strategy]] = {}


def builtin(*classes: type) -> Callable[[S], S]:
    """Use the decorated function to render values of the given classes."""

    def wrapper(fn: S) -> S:
        for cls in classes:
            _STRATEGIES[cls.__name__] = cls, fn
        return fn

    return wrapper


def _pairs(items: Iterable[tuple[Any, Any]]) -> list[Pair]:
    return [Pair(k, v) for k, v in items]


@builtin(list, collections.deque)
def _render_array(renderer: Renderer, value: Iterable[Any], depth: int) -> str:
    return renderer.bracketed("$[", value, "]")


@builtin(
    tuple, set, frozenset, collections.abc.Sequence, collections.abc.Set
)
def _render_list(renderer: Renderer, value: Iterable[Any], depth: int) -> str:
    return renderer.bracketed("$(", value, ")")


@builtin(dict, collections.abc.Mapping)
def _render_hash(
    renderer: Renderer, value: Mapping[Any, Any], depth: int
) -> str:
    return renderer.bracketed("${", _pairs(value.items()), "}")


@builtin(types.MappingProxyType, types.SimpleNamespace)
def _render_object(renderer: Renderer, value: Any, depth: int) -> str:
    # Already named after the actual type, subclasses are not wrapped again.
    if isinstance(value, collections.abc.Mapping):
        items = value.items()
    else:
        items = vars(value).items()
    return renderer.bracketed(
        f"{type(value).__name__}.new(", _pairs(items), ")"
    )


@builtin(Pair)
def _render_pair(renderer: Renderer, pair: Pair, depth: int) -> str:
    match pair.value:
        case True:
            return f":{pair.key}"
        case False:
            return f":!{pair.key}"
        case Mu():
            return f":{pair.key}(Mu)"
    # The value is laid out on its own, not relative to the enclosing
    # structure.
    return f":{pair.key}({renderer.render(pair.value).strip()})"


def _endpoint(renderer: Renderer, value: Any, unbounded: str) -> str:
    if value is None:
        return unbounded
    return renderer.render(value).strip()


@builtin(Interval)
def _render_interval(renderer: Renderer, value: Interval, depth: int) -> str:
    return "".join(
        (
            _endpoint(renderer, value.min, "-Inf"),
            "^" if value.excludes_min else "",
            "..",
            "^" if value.excludes_max else "",
            _endpoint(renderer, value.max, "Inf"),
        )
    )


@builtin(range)
def _render_range(renderer: Renderer, value: range, depth: int) -> str:
    if value.step != 1:
        return repr(value)
    return f"{value.start}..^{value.stop}"


@builtin(str, bytes)
def _render_text(renderer: Renderer, value: str | bytes, depth: int) -> str:
    # Subclasses (e.g. StrEnum) often override __repr__, show the raw text.
    if isinstance(value, bytes):
        return bytes.__repr__(value)
    return str.__repr__(value)


@builtin(bool)
def _render_bool(renderer: Renderer, value: bool, depth: int) -> str:
    return str(value)


@builtin(types.NoneType)
def _render_none(renderer: Renderer, value: None, depth: int) -> str:
    return "None"


@builtin(Mu)
def _render_mu(renderer: Renderer, value: Mu, depth: int) -> str:
    return "Mu"


def _every_line(line: str) -> bool:
    return True


def _compare(a: tuple[Any, str], b: tuple[Any, str]) -> int:
    """Order by value, then by rendered text between equal values.

    Raises :class:`TypeError` for values that are not ordered with respect to
    each other (``nan``, sets that are not subsets of one another...).
    """
    (x, x_text), (y, y_text) = a, b
    if x < y:
        return -1
    if y < x:
        return 1
    if x == y:
        return (x_text > y_text) - (x_text < y_text)
    raise TypeError("Values are not ordered")


_natural_order = functools.cmp_to_key(_compare)


class Renderer:
    """Convert values to human readable text.

    The layout is picked with *format* (:data:`~prettydump.PRETTY` by
    default); the keyword arguments override individual
    :class:`~prettydump.Settings`.

    Args:
      format: A :class:`~prettydump.Format` preset
      indent: repeated once per nesting level at the start of each line
      pre_item_spacing: after an opening bracket
      post_item_spacing: before a closing bracket
      pre_separator_spacing: before the ``,`` between items
      post_separator_spacing: after the ``,`` between items
      intra_group_spacing: the content of an empty container
    """

    #: Built-in strategies, by type name
    strategies: ClassVar[Mapping[str, tuple[type, Strategy]]] = (
        types.MappingProxyType(_STRATEGIES)
    )

    _settings: Settings
    _handlers: HandlerRegistry
    # ids of the values we are currently rendering
    _visiting: set[int]

    def __init__(
        self,
        format: Format | None = None,
        *,
        indent: str | None = None,
        pre_item_spacing: str | None = None,
        post_item_spacing: str | None = None,
        pre_separator_spacing: str | None = None,
        post_separator_spacing: str | None = None,
        intra_group_spacing: str | None = None,
    ) -> None:
        self._settings = Settings.for_format(
            format,
            indent=indent,
            pre_item_spacing=pre_item_spacing,
            post_item_spacing=post_item_spacing,
            pre_separator_spacing=pre_separator_spacing,
            post_separator_spacing=post_separator_spacing,
            intra_group_spacing=intra_group_spacing,
        )
        self._handlers = HandlerRegistry()
        self._visiting = set()
        self._chain: tuple[
            tuple[Callable[[Any], bool], Callable[[Any, int], str]], ...
        ] = (
            (self._has_handler, self._render_with_handler),
            (self._describes_itself, self._render_self_described),
            (self._is_numeric, self._render_numeric),
            (self._has_strategy, self._render_with_strategy),
            (self._has_ancestor_strategy, self._render_as_ancestor),
            (self._has_text_form, self._render_text_form),
        )

    @classmethod
    def from_settings(cls, settings: Settings) -> Renderer:
        return cls(**dataclasses.asdict(settings))

    @property
    def settings(self) -> Settings:
        return self._settings

    @property
    def handlers(self) -> HandlerRegistry:
        return self._handlers

    def __repr__(self) -> str:
        return f"{type(self).__name__}.from_settings({self._settings!r})"

    # Handlers

    @typing.overload
    def add_handler(
        self, type_name: str | type, handler: Handler, /
    ) -> Handler:  # pragma: no cover
        ...

    @typing.overload
    def add_handler(
        self, type_name: str | type, /
    ) -> Callable[[Handler], Handler]:  # pragma: no cover
        ...

    def add_handler(
        self, type_name: str | type, handler: Handler | None = None, /
    ) -> Handler | Callable[[Handler], Handler]:
        """Render values whose type is named *type_name* with *handler*

        *handler* is called as ``handler(renderer, value, depth)`` and must
        return a :class:`str`. It replaces any handler previously registered
        for that name. When *handler* is omitted this works as a decorator::

            >>> r = Renderer()
            >>> @r.add_handler(complex)
            ... def _complex(renderer, value, depth):
            ...     return f"{value.real}+{value.imag}i"
            >>> r.render(1+2j)
            '1.0+2.0i'

        Raises:
          SignatureMismatchError: *handler* doesn't have the right signature.
        """
        if handler is None:
            return functools.partial(self._handlers.add, type_name)
        return self._handlers.add(type_name, handler)

    def remove_handler(self, type_name: str | type) -> bool:
        """Returns whether a handler was registered for *type_name*"""
        return self._handlers.remove(type_name)

    def handles(self, type_name: str | type) -> bool:
        return type_name in self._handlers

    # Dispatch

    def render(self, value: Any, depth: int = 0) -> str:
        """Render *value* indented *depth* levels

        Raises:
          CyclicStructureError: if *value* contains itself

        Warns:
          RenderWarning: if converting a nested value to text fails. Values
            can be nested arbitrarily deep so the warning is reported from
            this module rather than from the caller's code.
        """
        # Values being rendered are alive until we are done with them so their
        # ids can't be reused in the meantime.
        key = id(value)
        if key in self._visiting:
            raise CyclicStructureError(
                f"Cannot render a {type(value).__name__!r} that contains "
                "itself"
            )
        self._visiting.add(key)
        try:
            text = self._dispatch(value, depth)
        finally:
            self._visiting.discard(key)
        return self.indent(text, depth)

    def _dispatch(self, value: Any, depth: int) -> str:
        for applies, strategy in self._chain:
            if applies(value):
                logger.debug(
                    "%s at depth %d: %s",
                    type(value).__name__,
                    depth,
                    strategy.__name__,
                )
                return strategy(value, depth)
        logger.debug("%s at depth %d: unhandled", type(value).__name__, depth)
        return self._render_unhandled(value, depth)

    def _has_handler(self, value: Any) -> bool:
        return type(value).__name__ in self._handlers

    def _render_with_handler(self, value: Any, depth: int) -> str:
        return self._handlers[type(value).__name__](self, value, depth)

    @staticmethod
    def _describes_itself(value: Any) -> bool:
        return callable(getattr(type(value), "__pretty_dump__", None))

    def _render_self_described(self, value: Any, depth: int) -> str:
        res: str = value.__pretty_dump__(self, depth)
        return res

    @staticmethod
    def _is_numeric(value: Any) -> bool:
        return isinstance(value, numbers.Number) and not isinstance(
            value, bool
        )

    def _render_numeric(self, value: numbers.Number, depth: int) -> str:
        if isinstance(value, numbers.Rational) and not isinstance(
            value, numbers.Integral
        ):
            return f"<{value.numerator}/{value.denominator}>"
        return str(value)

    def _strategy_for(self, cls: type) -> Strategy | None:
        entry = self.strategies.get(cls.__name__)
        if entry is None or entry[0] is not cls:
            return None
        return entry[1]

    def _ancestor_strategy(self, cls: type) -> Strategy | None:
        for base in cls.__mro__[1:]:
            strategy = self._strategy_for(base)
            if strategy is not None:
                return strategy
        return None

    def _has_strategy(self, value: Any) -> bool:
        return self._strategy_for(type(value)) is not None

    def _render_with_strategy(self, value: Any, depth: int) -> str:
        strategy = self._strategy_for(type(value))
        assert strategy is not None
        return strategy(self, value, depth)

    def _has_ancestor_strategy(self, value: Any) -> bool:
        return self._ancestor_strategy(type(value)) is not None

    def _render_as_ancestor(self, value: Any, depth: int) -> str:
        strategy = self._ancestor_strategy(type(value))
        assert strategy is not None
        if strategy is _render_object:
            return strategy(self, value, depth)
        return f"{type(value).__name__}.new({strategy(self, value, depth)})"

    @staticmethod
    def _has_text_form(value: Any) -> bool:
        ty = type(value)
        if ty.__str__ is not object.__str__:
            return True
        return ty.__repr__ is not object.__repr__

    def _render_text_form(self, value: Any, depth: int) -> str:
        name = type(value).__name__
        try:
            text = str(value)
        except Exception as e:
            warnings.warn(
                f"Converting a {name!r} to text failed ({type(e).__name__}: "
                f"{e}), rendering it as unhandled",
                RenderWarning,
            )
            return self._render_unhandled(value, depth)
        return f"({name}): {text}"

    def _render_unhandled(self, value: Any, depth: int) -> str:
        return f"(Unhandled {type(value).__name__})"

    # Layout

    def indent(self, text: str, depth: int) -> str:
        """Prefix every line of *text* with *depth* indentations."""
        prefix = self._settings.indent * depth
        if not prefix:
            return text
        return textwrap.indent(text, prefix, predicate=_every_line)

    def structure(self, items: Iterable[Any], depth: int = 0) -> str:
        """Render the content of a container.

        Strategies return text that sits at level 0, :meth:`render` moves it
        to the requested depth. This means the items are rendered one level
        below *depth* (and not one level below the depth the container is
        rendered at).
        """
        settings = self._settings
        rendered = self._render_sorted(list(items), depth + 1)
        if not rendered:
            return settings.intra_group_spacing
        separator = (
            f"{settings.pre_separator_spacing},"
            f"{settings.post_separator_spacing}"
        )
        return (
            settings.pre_item_spacing
            + separator.join(rendered)
            + settings.post_item_spacing
        )

    def bracketed(
        self, start: str, items: Iterable[Any], end: str, depth: int = 0
    ) -> str:
        return start + self.structure(items, depth) + end

    def _render_sorted(self, items: list[Any], depth: int) -> list[str]:
        rendered = [(item, self.render(item, depth)) for item in items]
        try:
            rendered.sort(key=_natural_order)
            ordered = all(
                _compare(a, b) <= 0 for a, b in itertools.pairwise(rendered)
            )
        except Exception:
            # Comparing the items failed (e.g. a signaling NaN or a custom
            # __lt__ that raises)
            ordered = False
        if not ordered:
            # No total order: order by the rendered text instead.
            rendered.sort(key=operator.itemgetter(1))
        return [text for _, text in rendered]


def pretty_dump(
    value: Any,
    format: Format | None = None,
    *,
    indent: str | None = None,
    pre_item_spacing: str | None = None,
    post_item_spacing: str | None = None,
    pre_separator_spacing: str | None = None,
    post_separator_spacing: str | None = None,
    intra_group_spacing: str | None = None,
) -> str:
    r"""Render *value* with a fresh :class:`Renderer`.

    The arguments are the same as the ones for :class:`Renderer`:

      >>> pretty_dump({"a": 1})
      '${\n\t:a(1)\n}'
      >>> pretty_dump([3, 2, 1], COMPACT)
      '$[1, 2, 3]'
      >>> print(pretty_dump({"a": [1, 2]}, indent="  "))
      ${
        :a($[
          1,
          2
        ])
      }

    Args:
      value: What to render
      format: :data:`~prettydump.PRETTY` (the default) or
        :data:`~prettydump.COMPACT`
    """
    renderer = Renderer(
        format,
        indent=indent,
        pre_item_spacing=pre_item_spacing,
        post_item_spacing=post_item_spacing,
        pre_separator_spacing=pre_separator_spacing,
        post_separator_spacing=post_separator_spacing,
        intra_group_spacing=intra_group_spacing,
    )
    return renderer.render(value)


"""
``prettydump.registry``: Per renderer overrides
===============================================

Every :class:`~prettydump.Renderer` owns a :class:`HandlerRegistry`. A
handler is registered under the name of a type and takes precedence over
everything else the renderer knows about values of that type. Lookups are by
exact name: registering ``"list"`` does not change how subclasses of
:class:`list` are rendered.

Registries are not thread safe.
"""

from __future__ import annotations

import inspect
import logging
from typing import Any, Callable, Iterator, TypeAlias

from .errors import SignatureMismatchError

__all__ = ("Handler", "HandlerRegistry", "check_signature", "type_name")

logger = logging.getLogger(__name__)

#: ``handler(renderer, value, depth) -> str``
Handler: TypeAlias = Callable[[Any, Any, int], str]


def type_name(key: str | type) -> str:
    """Name a handler is registered under"""
    if isinstance(key, type):
        return key.__name__
    if isinstance(key, str):
        return key
    raise TypeError(
        f"Expected a type or the name of a type, got {type(key).__name__!r}"
    )


def _describe(fn: Any) -> str:
    return getattr(fn, "__qualname__", None) or repr(fn)


def check_signature(fn: Any) -> None:
    """Check that *fn* can be used as a :data:`Handler`.

    *fn* has to accept ``(renderer, value, depth)`` as positional arguments
    and, if its return value is annotated, return a :class:`str`.

    Raises:
      SignatureMismatchError:
    """
    if not callable(fn):
        raise SignatureMismatchError(f"Handler {fn!r} is not callable")
    try:
        sig = inspect.signature(fn)
    except (TypeError, ValueError):
        raise SignatureMismatchError(
            f"Cannot read the signature of handler {_describe(fn)}"
        ) from None
    try:
        sig = inspect.signature(fn, eval_str=True)
    except Exception:
        # The annotations can't be evaluated (unknown names, bad syntax...),
        # keep them as strings.
        pass
    try:
        sig.bind(None, None, None)
    except TypeError:
        raise SignatureMismatchError(
            f"Handler {_describe(fn)}{sig} should take exactly three "
            "arguments: (renderer, value, depth)"
        ) from None
    ret = sig.return_annotation
    if ret is not inspect.Signature.empty and ret not in (str, "str"):
        raise SignatureMismatchError(
            f"Handler {_describe(fn)} should return a str, not {ret!r}"
        )


class HandlerRegistry:
    """Mapping from type names to :data:`Handler`"""

    __slots__ = ("_handlers",)

    _handlers: dict[str, Handler]

    def __init__(self) -> None:
        self._handlers = {}

    def add(self, key: str | type, handler: Handler) -> Handler:
        """Register *handler*, replacing the previous one for *key*"""
        name = type_name(key)
        check_signature(handler)
        if name in self._handlers:
            logger.debug("Replacing the handler for %r", name)
        else:
            logger.debug("Adding a handler for %r", name)
        self._handlers[name] = handler
        return handler

    def remove(self, key: str | type) -> bool:
        """Remove the handler for *key*.

        Returns:
          bool: whether there was a handler to remove
        """
        name = type_name(key)
        found = self._handlers.pop(name, None) is not None
        if found:
            logger.debug("Removed the handler for %r", name)
        return found

    def get(self, name: str) -> Handler | None:
        return self._handlers.get(name)

    def __getitem__(self, name: str) -> Handler:
        return self._handlers[name]

    def __contains__(self, key: object) -> bool:
        if not isinstance(key, str | type):
            return False
        return type_name(key) in self._handlers

    def __iter__(self) -> Iterator[str]:
        return iter(self._handlers)

    def __len__(self) -> int:
        return len(self._handlers)

    def __repr__(self) -> str:
        return f"HandlerRegistry({sorted(self._handlers)!r})"

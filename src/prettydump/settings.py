"""
``prettydump.settings``: Layout configuration
=============================================

A renderer's layout is controlled by six strings:

+ *indent*: repeated once per nesting level at the start of every line
+ *pre_item_spacing*: between an opening bracket and the first item
+ *post_item_spacing*: between the last item and the closing bracket
+ *pre_separator_spacing*: before the ``,`` that separates items
+ *post_separator_spacing*: after the ``,`` that separates items
+ *intra_group_spacing*: the whole content of an empty container

:class:`Format` names the two presets. Settings never change once a renderer
is created.
"""

from __future__ import annotations

import dataclasses
import enum
from typing import Final

__all__ = ("Format", "Settings", "COMPACT", "PRETTY")


class Format(enum.Enum):
    """Preset layouts"""

    #: One item per line, nested levels are indented with a tab.
    PRETTY = enum.auto()

    #: Everything on one line.
    COMPACT = enum.auto()


PRETTY: Final = Format.PRETTY
COMPACT: Final = Format.COMPACT


@dataclasses.dataclass(slots=True, frozen=True)
class Settings:
    indent: str = "\t"
    pre_item_spacing: str = "\n"
    post_item_spacing: str = "\n"
    pre_separator_spacing: str = ""
    post_separator_spacing: str = "\n"
    intra_group_spacing: str = ""

    def __post_init__(self) -> None:
        for field in dataclasses.fields(self):
            value = getattr(self, field.name)
            if not isinstance(value, str):
                raise TypeError(
                    f"Setting {field.name!r} should be a string, got "
                    f"{type(value).__name__!r}"
                )

    @classmethod
    def for_format(
        cls, format: Format | None = None, **overrides: str | None
    ) -> Settings:
        """Get the settings for *format* (:data:`PRETTY` if it's ``None``)

        Overrides that are ``None`` are ignored.

          >>> Settings.for_format(COMPACT, indent="  ").indent
          '  '
        """
        if format is None:
            format = Format.PRETTY
        changes = {k: v for k, v in overrides.items() if v is not None}
        return dataclasses.replace(_PRESETS[format], **changes)


_PRESETS: Final[dict[Format, Settings]] = {
    Format.PRETTY: Settings(),
    Format.COMPACT: Settings(
        indent="",
        pre_item_spacing="",
        post_item_spacing="",
        post_separator_spacing=" ",
    ),
}

from __future__ import annotations

import dataclasses

import pytest

from prettydump import COMPACT, PRETTY, Format, Renderer, Settings


def test_presets():
    assert Settings() == Settings.for_format(PRETTY) == Settings.for_format()
    assert Settings() == Settings(
        indent="\t",
        pre_item_spacing="\n",
        post_item_spacing="\n",
        pre_separator_spacing="",
        post_separator_spacing="\n",
        intra_group_spacing="",
    )
    compact = Settings.for_format(Format.COMPACT)
    assert compact.indent == ""
    assert compact.pre_item_spacing == compact.post_item_spacing == ""
    assert compact.post_separator_spacing == " "


def test_overrides():
    settings = Settings.for_format(COMPACT, indent="  ", pre_item_spacing=None)
    assert settings.indent == "  "
    assert settings.pre_item_spacing == ""


def test_validation():
    with pytest.raises(TypeError, match="'indent' should be a string"):
        Settings(indent=4)
    with pytest.raises(TypeError):
        Settings.for_format(PRETTY, width="80")
    with pytest.raises(TypeError):
        Renderer(indent=2)


def test_frozen():
    settings = Settings()
    with pytest.raises(dataclasses.FrozenInstanceError):
        settings.indent = " "


def test_renderer_settings():
    renderer = Renderer(COMPACT, indent="  ")
    assert renderer.settings == Settings.for_format(COMPACT, indent="  ")

# Copyright (c) 2026 Nate Tritle. Licensed under the MIT License.
"""Tests for the theme document model and field coordinates."""

from __future__ import annotations

import pytest

from comfytheme.core.models import (
    BASELINE_KEYS,
    CATEGORY_ORDER,
    Category,
    FieldRef,
    ThemeDocument,
    is_color_editable,
)
from comfytheme.utils.error_handler import ThemeFormatError

# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _raw(**overrides):
    data = {
        "id": "t",
        "name": "Test",
        "colors": {"node_slot": {"CLIP": "#FFD500"}, "litegraph_base": {}, "comfy_base": {}},
    }
    data.update(overrides)
    return data


class TestCategory:
    def test_coerce_string(self):
        assert Category.coerce("comfy_base") is Category.COMFY_BASE

    def test_coerce_passthrough(self):
        assert Category.coerce(Category.NODE_SLOT) is Category.NODE_SLOT

    def test_coerce_unknown(self):
        with pytest.raises(ValueError, match="Unknown theme category"):
            Category.coerce("palette")

    def test_order(self):
        assert [c.value for c in CATEGORY_ORDER] == ["node_slot", "litegraph_base", "comfy_base"]


class TestFieldRef:
    def test_of_accepts_string_category(self):
        assert FieldRef.of("node_slot", "CLIP") == FieldRef(Category.NODE_SLOT, "CLIP")

    def test_str(self):
        assert str(FieldRef.of("comfy_base", "fg-color")) == "comfy_base.fg-color"

    def test_hashable(self):
        refs = {FieldRef.of("node_slot", "CLIP"), FieldRef.of("node_slot", "CLIP")}
        assert len(refs) == 1


class TestIsColorEditable:
    def test_color_string(self):
        assert is_color_editable("LINK_COLOR", "#9A9")

    def test_numeric_value(self):
        assert not is_color_editable("NODE_TEXT_SIZE", 14)

    @pytest.mark.parametrize("key", ["NODE_DEFAULT_SHAPE", "BACKGROUND_IMAGE"])
    def test_excluded_fields(self, key):
        assert not is_color_editable(key, "2")


class TestThemeDocument:
    def test_accessors(self, dark_theme):
        assert dark_theme.node_slot is dark_theme.category("node_slot")
        assert dark_theme.litegraph_base is dark_theme.category(Category.LITEGRAPH_BASE)
        assert dark_theme.comfy_base["fg-color"] == "#fff"

    def test_get_and_has_field(self, dark_theme):
        ref = FieldRef.of("node_slot", "CLIP")
        assert dark_theme.has_field(ref)
        assert dark_theme.get(ref) == "#FFD500"
        missing = FieldRef.of("node_slot", "NOT_A_TYPE")
        assert not dark_theme.has_field(missing)
        assert dark_theme.get(missing, "x") == "x"

    def test_presets_have_no_missing_keys(self, dark_theme):
        assert dark_theme.missing_required_keys() == []

    def test_missing_required_keys_in_baseline_order(self):
        doc = ThemeDocument.from_dict(_raw())
        missing = doc.missing_required_keys()
        assert missing[0] == FieldRef(Category.LITEGRAPH_BASE, BASELINE_KEYS[Category.LITEGRAPH_BASE][0])
        # node_slot is open-ended and never required
        assert all(ref.category is not Category.NODE_SLOT for ref in missing)

    def test_deep_copy_is_unaliased(self, dark_theme):
        copy = dark_theme.deep_copy()
        copy.node_slot["CLIP"] = "#000000"
        assert dark_theme.node_slot["CLIP"] == "#FFD500"

    def test_to_dict_key_order(self, dark_theme):
        data = dark_theme.to_dict()
        assert list(data) == ["id", "name", "colors"]
        assert list(data["colors"]) == ["node_slot", "litegraph_base", "comfy_base"]


class TestFromDict:
    def test_valid(self):
        doc = ThemeDocument.from_dict(_raw())
        assert doc.id == "t"
        assert doc.node_slot == {"CLIP": "#FFD500"}

    def test_extra_node_slot_keys_kept(self):
        raw = _raw()
        raw["colors"]["node_slot"]["MY_TYPE"] = "#123456"
        assert "MY_TYPE" in ThemeDocument.from_dict(raw).node_slot

    def test_not_an_object(self):
        with pytest.raises(ThemeFormatError):
            ThemeDocument.from_dict(["not", "a", "theme"])

    def test_missing_name(self):
        raw = _raw()
        del raw["name"]
        with pytest.raises(ThemeFormatError, match="'id' and 'name'"):
            ThemeDocument.from_dict(raw)

    def test_missing_colors(self):
        with pytest.raises(ThemeFormatError, match="'colors'"):
            ThemeDocument.from_dict(_raw(colors=None))

    def test_missing_category(self):
        raw = _raw()
        del raw["colors"]["comfy_base"]
        with pytest.raises(ThemeFormatError, match="missing categories"):
            ThemeDocument.from_dict(raw)

    def test_unknown_category(self):
        raw = _raw()
        raw["colors"]["extras"] = {}
        with pytest.raises(ThemeFormatError, match="unknown categories"):
            ThemeDocument.from_dict(raw)

    def test_category_not_object(self):
        raw = _raw()
        raw["colors"]["node_slot"] = ["#fff"]
        with pytest.raises(ThemeFormatError, match="must be an object"):
            ThemeDocument.from_dict(raw)

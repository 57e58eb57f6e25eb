"""Tests for canonical preset validation and foreign preset conversion."""

import json

import pytest

from theme_toolkit.models import ThemeImportError
from theme_toolkit.presets import (
    UNNAMED_PRESET,
    convert_foreign_preset,
    convert_foreign_presets,
    parse_canonical_presets,
)


# =============================================================================
# Canonical presets
# =============================================================================

def test_canonical_presets_bare_array(valid_preset):
    presets = parse_canonical_presets(json.dumps([valid_preset]))
    assert len(presets) == 1
    assert presets[0].name == "Light"
    assert presets[0].colors.accent == "#0066cc"


def test_canonical_presets_wrapped_object(valid_preset):
    dark = {
        "name": "Dark",
        "appearance": "dark",
        "colors": {
            "background": "#000",
            "foreground": "#eee",
            "accent": "#f90",
            "codeBackground": "#111",
            "accents": ["#f00", "#0f0"],
        },
        "fonts": {"title": "Inter"},
    }
    presets = parse_canonical_presets(json.dumps({"presets": [valid_preset, dark]}))
    assert [p.name for p in presets] == ["Light", "Dark"]
    assert presets[1].colors.code_background == "#111"
    assert presets[1].colors.accents == ["#f00", "#0f0"]
    assert presets[1].to_json_dict()["colors"]["codeBackground"] == "#111"


def test_canonical_presets_empty_list():
    assert parse_canonical_presets('{"presets": []}') == []


def test_canonical_presets_one_invalid_entry_fails_all(valid_preset):
    broken = {"name": "Broken", "appearance": "light",
              "colors": {"background": "#fff", "foreground": "#000"}}
    content = json.dumps([valid_preset, dict(valid_preset, name="Second"), broken])

    with pytest.raises(ThemeImportError) as exc_info:
        parse_canonical_presets(content)

    error = exc_info.value.error
    assert error.type == "invalid_presets"
    assert error.message == "Invalid preset definitions in presets.json"
    assert any(m.startswith("Preset 3:") and "accent" in m for m in error.errors)
    assert not any(m.startswith("Preset 1:") for m in error.errors)


def test_canonical_presets_reports_every_failing_field():
    content = json.dumps([{"appearance": "sepia", "colors": {}}])
    with pytest.raises(ThemeImportError) as exc_info:
        parse_canonical_presets(content)
    messages = " ".join(exc_info.value.error.errors)
    assert "name" in messages
    assert "appearance" in messages
    assert "colors.background" in messages


def test_canonical_presets_too_many_accents(valid_preset):
    preset = json.loads(json.dumps(valid_preset))
    preset["colors"]["accents"] = ["#000"] * 6
    with pytest.raises(ThemeImportError):
        parse_canonical_presets(json.dumps([preset]))


def test_canonical_presets_not_an_array():
    with pytest.raises(ThemeImportError) as exc_info:
        parse_canonical_presets('{"name": "x"}')
    error = exc_info.value.error
    assert error.type == "invalid_presets"
    assert error.message == "presets.json must contain an array of presets"
    assert error.errors == ["Expected an array of presets"]


def test_canonical_presets_bad_json():
    with pytest.raises(ThemeImportError) as exc_info:
        parse_canonical_presets("[{")
    assert exc_info.value.error.type == "invalid_presets"
    assert exc_info.value.error.message == "Failed to parse presets.json"


# =============================================================================
# Foreign presets
# =============================================================================

def test_foreign_preset_aliases():
    preset = convert_foreign_preset({
        "title": "Ocean",
        "backgroundColor": "#001122",
        "textColor": "#ddeeff",
        "primary": "#33aaff",
        "headingColor": "#ffffff",
        "links": "#66ccff",
        "codeBg": "#000811",
    })
    assert preset.name == "Ocean"
    assert preset.appearance == "dark"
    assert preset.colors.background == "#001122"
    assert preset.colors.foreground == "#ddeeff"
    assert preset.colors.accent == "#33aaff"
    assert preset.colors.heading == "#ffffff"
    assert preset.colors.link == "#66ccff"
    assert preset.colors.code_background == "#000811"


def test_foreign_preset_nested_colors():
    preset = convert_foreign_preset({
        "name": "Paper",
        "colors": {"bg": "#fafafa", "fg": "#222", "highlight": "#c00"},
    })
    assert preset.colors.background == "#fafafa"
    assert preset.colors.foreground == "#222"
    assert preset.colors.accent == "#c00"
    assert preset.appearance == "light"


def test_foreign_preset_accent_defaults_to_foreground():
    preset = convert_foreign_preset({"bg": "#fff", "fg": "#123456"})
    assert preset.colors.accent == "#123456"
    assert preset.name == UNNAMED_PRESET


def test_foreign_preset_extra_accents_and_fonts():
    preset = convert_foreign_preset({
        "bg": "#fff", "fg": "#000",
        "accent2": "#f00", "accent3": "#0f0", "accent7": "#00f",
        "headingFont": "Playfair Display", "body_font": "Inter",
    })
    assert preset.colors.accents == ["#f00", "#0f0"]
    assert preset.fonts.title == "Playfair Display"
    assert preset.fonts.body == "Inter"


def test_foreign_preset_explicit_appearance_wins():
    preset = convert_foreign_preset({"bg": "#ffffff", "fg": "#000", "mode": "dark"})
    assert preset.appearance == "dark"


def test_foreign_preset_without_background_is_dropped():
    assert convert_foreign_preset({"name": "x", "fg": "#000"}) is None
    assert convert_foreign_preset({"name": "x", "bg": "#000"}) is None
    assert convert_foreign_preset("not a preset") is None


def test_foreign_presets_drop_unmappable_entries():
    content = json.dumps({"themes": [
        {"name": "A", "bg": "#fff", "fg": "#000"},
        {"name": "B", "fg": "#000"},
        {"name": "C", "background": "#111", "color": "#eee"},
    ]})
    presets = convert_foreign_presets(content)
    assert [p.name for p in presets] == ["A", "C"]
    assert presets[1].appearance == "dark"


def test_foreign_presets_wrapper_key_order():
    content = json.dumps({
        "colors": [{"name": "FromColors", "bg": "#fff", "fg": "#000"}],
        "presets": [{"name": "FromPresets", "bg": "#fff", "fg": "#000"}],
    })
    assert [p.name for p in convert_foreign_presets(content)] == ["FromPresets"]


@pytest.mark.parametrize("content", ["not json", '"a string"', '{"presets": {}}', "42"])
def test_foreign_presets_malformed_payload_yields_nothing(content):
    assert convert_foreign_presets(content) == []


def test_foreign_presets_deeply_nested_payload_yields_nothing():
    content = "[" * 100000 + "]" * 100000
    assert convert_foreign_presets(content) == []


def test_canonical_presets_deeply_nested_payload():
    with pytest.raises(ThemeImportError) as exc_info:
        parse_canonical_presets("[" * 100000 + "]" * 100000)
    assert exc_info.value.error.type == "invalid_presets"
    assert exc_info.value.error.message == "Failed to parse presets.json"

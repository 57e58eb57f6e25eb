"""
Preset Resolver

Two deliberately separate operations:

- ``parse_canonical_presets`` validates a first-party presets.json strictly.
  One invalid entry fails the whole upload with an aggregated error list.
- ``convert_foreign_presets`` maps loosely shaped third-party color schemes
  onto the Preset schema through alias lookups. Entries that cannot be
  mapped are dropped; a malformed payload yields no presets at all.

The alias tables below are the converter's contract. Field names outside
them are not recognized.
"""

import json
import logging
from typing import Any, List, Mapping, Optional, Sequence

from .models import Preset, PresetColors, PresetFonts, ThemeImportError
from .utils import classify_appearance
from .validation import validate_preset

logger = logging.getLogger(__name__)

NAME_ALIASES = ('name', 'title', 'label')
APPEARANCE_ALIASES = ('appearance', 'mode')

BACKGROUND_ALIASES = ('background', 'backgroundColor', 'bg')
FOREGROUND_ALIASES = ('foreground', 'color', 'text', 'textColor', 'fg')
ACCENT_ALIASES = ('accent', 'accentColor', 'primary', 'highlight')

HEADING_ALIASES = ('heading', 'headingColor', 'headings')
LINK_ALIASES = ('link', 'linkColor', 'links')
CODE_BACKGROUND_ALIASES = ('codeBackground', 'code_background', 'codeBg')

EXTRA_ACCENT_KEYS = ('accent2', 'accent3', 'accent4', 'accent5', 'accent6')

TITLE_FONT_ALIASES = ('titleFont', 'headingFont', 'title_font')
BODY_FONT_ALIASES = ('bodyFont', 'textFont', 'body_font')

# Object keys that may wrap the preset array in a foreign payload, in order
FOREIGN_ARRAY_KEYS = ('presets', 'colors', 'themes')

UNNAMED_PRESET = 'Unnamed'


# ============================================================
# CANONICAL (STRICT)
# ============================================================

def parse_canonical_presets(content: str) -> List[Preset]:
    """Parse and validate a canonical presets.json.

    Accepts a bare array or an object with a ``presets`` array.

    Args:
        content: Raw presets.json text

    Returns:
        Validated presets in file order

    Raises:
        ThemeImportError: invalid_presets, listing every failing field of
            every failing entry as 'Preset <n>: <field> - <message>'
    """
    try:
        payload = json.loads(content)
    except (ValueError, RecursionError) as e:
        raise ThemeImportError.invalid_presets("Failed to parse presets.json", [str(e)])

    entries = payload.get('presets') if isinstance(payload, dict) else payload
    if not isinstance(entries, list):
        raise ThemeImportError.invalid_presets(
            "presets.json must contain an array of presets",
            ["Expected an array of presets"],
        )

    presets = []
    errors = []
    for index, entry in enumerate(entries, start=1):
        preset, messages = validate_preset(entry)
        if preset is None:
            errors.extend(f"Preset {index}: {message}" for message in messages)
        else:
            presets.append(preset)

    if errors:
        raise ThemeImportError.invalid_presets("Invalid preset definitions in presets.json", errors)

    return presets


# ============================================================
# FOREIGN (LENIENT)
# ============================================================

def lookup(obj: Mapping[str, Any], aliases: Sequence[str]) -> Optional[str]:
    """First non-empty string value among ``aliases`` on ``obj``."""
    for key in aliases:
        value = obj.get(key)
        if isinstance(value, str) and value.strip():
            return value.strip()
    return None


def lookup_color(obj: Mapping[str, Any], aliases: Sequence[str]) -> Optional[str]:
    """Alias lookup on the object, then on its nested ``colors`` object."""
    value = lookup(obj, aliases)
    if value is None:
        nested = obj.get('colors')
        if isinstance(nested, dict):
            value = lookup(nested, aliases)
    return value


def infer_appearance(obj: Mapping[str, Any], background: Optional[str]) -> str:
    """Explicit 'dark'/'light' field, otherwise the background's luminance."""
    for key in APPEARANCE_ALIASES:
        value = obj.get(key)
        if value in ('dark', 'light'):
            return value
    if background is None:
        return 'light'
    return classify_appearance(background)


def convert_foreign_preset(raw: Any) -> Optional[Preset]:
    """Convert one loosely shaped foreign preset.

    Args:
        raw: Untyped entry from a foreign presets payload

    Returns:
        Preset, or None if background or foreground cannot be resolved
    """
    if not isinstance(raw, dict):
        return None

    background = lookup_color(raw, BACKGROUND_ALIASES)
    foreground = lookup_color(raw, FOREGROUND_ALIASES)
    if background is None or foreground is None:
        return None
    accent = lookup_color(raw, ACCENT_ALIASES) or foreground

    accents = [raw[key].strip() for key in EXTRA_ACCENT_KEYS
               if isinstance(raw.get(key), str) and raw[key].strip()]

    colors = PresetColors(
        background=background,
        foreground=foreground,
        accent=accent,
        accents=accents or None,
        heading=lookup(raw, HEADING_ALIASES),
        link=lookup(raw, LINK_ALIASES),
        code_background=lookup(raw, CODE_BACKGROUND_ALIASES),
    )

    title_font = lookup(raw, TITLE_FONT_ALIASES)
    body_font = lookup(raw, BODY_FONT_ALIASES)
    fonts = PresetFonts(title=title_font, body=body_font) if (title_font or body_font) else None

    return Preset(
        name=lookup(raw, NAME_ALIASES) or UNNAMED_PRESET,
        appearance=infer_appearance(raw, background),
        colors=colors,
        fonts=fonts,
    )


def extract_foreign_entries(payload: Any) -> List[Any]:
    """Find the preset array in a foreign payload ([] if there is none)."""
    if isinstance(payload, list):
        return payload
    if isinstance(payload, dict):
        for key in FOREIGN_ARRAY_KEYS:
            value = payload.get(key)
            if isinstance(value, list):
                return value
    return []


def convert_foreign_presets(content: str) -> List[Preset]:
    """Best-effort conversion of a foreign presets file.

    Never raises for bad input: unparseable JSON or an unexpected shape
    yields an empty list, and entries the converter rejects are dropped.
    """
    try:
        payload = json.loads(content)
    except (ValueError, RecursionError) as e:
        logger.debug("Ignoring unparseable foreign presets: %s", e)
        return []

    presets = []
    for index, entry in enumerate(extract_foreign_entries(payload), start=1):
        preset = convert_foreign_preset(entry)
        if preset is None:
            logger.debug("Dropping foreign preset %d: no background/foreground color", index)
            continue
        presets.append(preset)
    return presets

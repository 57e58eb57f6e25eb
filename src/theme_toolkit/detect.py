"""
Format Detector

Classifies an archive as one of the supported theme package formats. Each
format is an independent detect/parse strategy; strategies are tried in
the order of ``THEME_FORMATS`` and the first match wins.

The order matters: a template bundle may also ship JSON files, and a
presenter bundle's template.json only counts when no theme.json is present.
"""

from typing import Callable, NamedTuple, Optional, Tuple

from .archive import ThemeArchive
from .config import ImportConfig
from .formats import (
    detect_canonical,
    detect_legacy,
    detect_presenter_bundle,
    parse_canonical,
    parse_legacy_bundle,
    parse_presenter_bundle,
)
from .models import ParsedTheme


class ThemeFormat(NamedTuple):
    name: str
    detect: Callable[[ThemeArchive], Optional[str]]
    parse: Callable[[ThemeArchive, str, ImportConfig], ParsedTheme]


LEGACY_BUNDLE = ThemeFormat('legacy_bundle', detect_legacy, parse_legacy_bundle)
PRESENTER_BUNDLE = ThemeFormat('presenter_bundle', detect_presenter_bundle, parse_presenter_bundle)
CANONICAL = ThemeFormat('canonical', detect_canonical, parse_canonical)

THEME_FORMATS: Tuple[ThemeFormat, ...] = (
    LEGACY_BUNDLE,
    PRESENTER_BUNDLE,
    CANONICAL,
)


def detect_format(archive: ThemeArchive) -> Optional[Tuple[ThemeFormat, str]]:
    """Find the first format whose manifest is present.

    Args:
        archive: Open theme archive

    Returns:
        (format, anchor path) or None if no manifest was recognized
    """
    for theme_format in THEME_FORMATS:
        anchor = theme_format.detect(archive)
        if anchor is not None:
            return theme_format, anchor
    return None

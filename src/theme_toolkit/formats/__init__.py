"""Format-specific theme parsers."""

from .canonical import detect_canonical, parse_canonical
from .foreign import detect_presenter_bundle, parse_presenter_bundle
from .legacy import detect_legacy, parse_legacy_bundle, parse_plist_strings

__all__ = [
    'detect_canonical',
    'parse_canonical',
    'detect_presenter_bundle',
    'parse_presenter_bundle',
    'detect_legacy',
    'parse_legacy_bundle',
    'parse_plist_strings',
]

"""
Theme Toolkit

Imports user-supplied theme archives (canonical theme.json packages,
template bundles and presenter themes) into a single sanitized theme
record, and exports themes back to the canonical format.
"""

__version__ = "0.1.0"

from .config import (
    ImportConfig,
    DEFAULT_CONFIG,
    load_config,
    save_config,
)

from .models import (
    ParsedTheme,
    ParseResult,
    Preset,
    PresetColors,
    PresetFonts,
    ThemeAsset,
    ThemeImportError,
    ThemeUploadError,
)

from .upload import (
    parse_theme_zip,
    parse_theme_file,
)

from .detect import (
    THEME_FORMATS,
    detect_format,
)

from .presets import (
    parse_canonical_presets,
    convert_foreign_preset,
    convert_foreign_presets,
)

from .sanitize import (
    sanitize_css,
    sanitize_html,
)

from .utils import (
    classify_appearance,
)

from .export import (
    export_theme,
)

__all__ = [
    # Config
    'ImportConfig',
    'DEFAULT_CONFIG',
    'load_config',
    'save_config',
    # Models
    'ParsedTheme',
    'ParseResult',
    'Preset',
    'PresetColors',
    'PresetFonts',
    'ThemeAsset',
    'ThemeImportError',
    'ThemeUploadError',
    # Import
    'parse_theme_zip',
    'parse_theme_file',
    'THEME_FORMATS',
    'detect_format',
    # Presets
    'parse_canonical_presets',
    'convert_foreign_preset',
    'convert_foreign_presets',
    # Sanitization
    'sanitize_css',
    'sanitize_html',
    # Colors
    'classify_appearance',
    # Export
    'export_theme',
]

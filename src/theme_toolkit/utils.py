"""
Theme Utility Helpers

MIME-type tables, the luminance based dark/light classifier, path helpers
for archive entries, and HTML/CSS escaping.
"""

import html
import posixpath
import re
from typing import Dict, Optional

# Font and image MIME types keyed by lowercase file extension
FONT_MIME_TYPES = {
    'woff2': 'font/woff2',
    'woff': 'font/woff',
    'ttf': 'font/ttf',
    'otf': 'font/otf',
}

IMAGE_MIME_TYPES = {
    'png': 'image/png',
    'jpg': 'image/jpeg',
    'jpeg': 'image/jpeg',
    'gif': 'image/gif',
    'webp': 'image/webp',
    'svg': 'image/svg+xml',
}

DEFAULT_FONT_MIME_TYPE = 'font/woff2'
DEFAULT_IMAGE_MIME_TYPE = 'image/png'

# Reverse lookup used when writing assets back out
MIME_EXTENSIONS: Dict[str, str] = {
    'font/woff2': '.woff2',
    'font/woff': '.woff',
    'font/ttf': '.ttf',
    'font/otf': '.otf',
    'image/png': '.png',
    'image/jpeg': '.jpg',
    'image/gif': '.gif',
    'image/webp': '.webp',
    'image/svg+xml': '.svg',
}

_HEX_RE = re.compile(r'^[0-9a-fA-F]{6}$')
_UNSAFE_FILENAME_RE = re.compile(r'[^\w\-. ]+')


def get_extension(path: str) -> str:
    """Return the lowercase extension of a path without the dot."""
    name = posixpath.basename(path)
    if '.' not in name:
        return ''
    return name.rsplit('.', 1)[1].lower()


def get_font_mime_type(path: str) -> str:
    """Infer a font MIME type from a file extension (defaults to woff2)."""
    return FONT_MIME_TYPES.get(get_extension(path), DEFAULT_FONT_MIME_TYPE)


def get_image_mime_type(path: str) -> str:
    """Infer an image MIME type from a file extension (defaults to png)."""
    return IMAGE_MIME_TYPES.get(get_extension(path), DEFAULT_IMAGE_MIME_TYPE)


def get_extension_for_mime_type(mime_type: str) -> str:
    return MIME_EXTENSIONS.get(mime_type, '')


def is_font_file(path: str) -> bool:
    """Check if a path has one of the supported font extensions."""
    return get_extension(path) in FONT_MIME_TYPES


# ============================================================
# COLOR CLASSIFICATION
# ============================================================

def normalize_hex(color: str) -> Optional[str]:
    """Normalize a hex color to six lowercase digits without '#'.

    Three digit shorthand is expanded by doubling each digit.

    Args:
        color: Color string such as '#abc' or 'AABBCC'

    Returns:
        Six digit hex string, or None if the color is not plain hex
    """
    if not isinstance(color, str):
        return None
    value = color.strip()
    if value.startswith('#'):
        value = value[1:]
    if len(value) == 3:
        value = ''.join(ch * 2 for ch in value)
    if not _HEX_RE.match(value):
        return None
    return value.lower()


def relative_luminance(color: str) -> Optional[float]:
    """Perceived luminance (0..1) of a hex color, or None if unparseable."""
    value = normalize_hex(color)
    if value is None:
        return None
    r = int(value[0:2], 16)
    g = int(value[2:4], 16)
    b = int(value[4:6], 16)
    return (0.299 * r + 0.587 * g + 0.114 * b) / 255


def classify_appearance(color: str) -> str:
    """Classify a color as 'dark' or 'light'.

    Colors that are not plain hex (rgb(), named colors, etc.) are treated
    as light.
    """
    luminance = relative_luminance(color)
    if luminance is None:
        return 'light'
    return 'dark' if luminance < 0.5 else 'light'


# ============================================================
# ARCHIVE PATHS
# ============================================================

def dirname_of(path: str) -> str:
    """Directory part of an archive path, with trailing slash ('' at root)."""
    if '/' not in path:
        return ''
    return path[:path.rindex('/') + 1]


def join_path(base: str, relative: str) -> str:
    """Join an archive base path and a relative reference.

    The result is normalized ('./' and '../' collapsed) and never starts
    with a slash.
    """
    joined = posixpath.normpath(posixpath.join(base, relative.lstrip('/')))
    if joined in ('.', ''):
        return ''
    return joined.lstrip('/')


def sanitize_filename(name: str, default: str = 'theme') -> str:
    """Turn a theme name into a safe download filename (without extension)."""
    cleaned = _UNSAFE_FILENAME_RE.sub('', name or '').strip().strip('.')
    cleaned = re.sub(r'\s+', '-', cleaned)
    return cleaned[:100] or default


# ============================================================
# ESCAPING
# ============================================================

def escape_html(text: str) -> str:
    """Escape text for inclusion in HTML markup."""
    return html.escape(text or '', quote=True)


def escape_css_comment(text: str) -> str:
    """Make text safe to embed inside a /* ... */ CSS comment."""
    return (text or '').replace('*/', '* /').replace('/*', '/ *')

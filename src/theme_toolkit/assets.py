"""
Asset Extractor

Copies font and thumbnail files out of a theme archive. MIME types are
inferred from file extensions, never taken from the archive. Every read is
best-effort: a missing or unreadable asset is logged and skipped.
"""

import logging
import posixpath
from typing import Iterable, List, Optional

from .archive import ArchiveError, ThemeArchive
from .models import ThemeAsset
from .utils import get_font_mime_type, get_image_mime_type, is_font_file, join_path

logger = logging.getLogger(__name__)

THUMBNAIL_NAME = 'thumbnail'


def _read_optional(archive: ThemeArchive, path: str) -> Optional[bytes]:
    if not archive.is_file(path):
        logger.debug("Optional file not in archive: %s", path)
        return None
    try:
        return archive.read_bytes(path)
    except (KeyError, ArchiveError) as e:
        logger.debug("Skipping unreadable file %s: %s", path, e)
        return None


def read_font_asset(archive: ThemeArchive, path: str, name: Optional[str] = None) -> Optional[ThemeAsset]:
    """Read one font file.

    Args:
        archive: Open theme archive
        path: Full archive path of the font
        name: Asset name (defaults to the file's basename)

    Returns:
        ThemeAsset, or None if the file is missing or unreadable
    """
    data = _read_optional(archive, path)
    if data is None:
        return None
    return ThemeAsset(
        name=name or posixpath.basename(path),
        mime_type=get_font_mime_type(path),
        file=data,
    )


def collect_font_assets(archive: ThemeArchive, prefix: str) -> List[ThemeAsset]:
    """Every font-extension file anywhere under ``prefix``, in path order."""
    assets = []
    for path in sorted(p for p in archive.files() if p.startswith(prefix)):
        if not is_font_file(path):
            continue
        asset = read_font_asset(archive, path)
        if asset is not None:
            assets.append(asset)
    return assets


def read_thumbnail(archive: ThemeArchive, path: str) -> Optional[ThemeAsset]:
    """Read a thumbnail image, or None if missing or unreadable."""
    data = _read_optional(archive, path)
    if data is None:
        return None
    return ThemeAsset(name=THUMBNAIL_NAME, mime_type=get_image_mime_type(path), file=data)


def find_thumbnail(archive: ThemeArchive, base: str, candidates: Iterable[str]) -> Optional[ThemeAsset]:
    """First candidate thumbnail under ``base`` that can be read."""
    for name in candidates:
        path = join_path(base, name)
        if not archive.is_file(path):
            continue
        thumbnail = read_thumbnail(archive, path)
        if thumbnail is not None:
            return thumbnail
    return None

"""
Theme Upload Pipeline

Single entry point for importing a theme archive: open the zip, detect its
format, run the matching parser, and report either the parsed theme or
exactly one upload error.
"""

import logging
from pathlib import Path
from typing import BinaryIO, Optional, Union

from .archive import ArchiveError, ThemeArchive
from .config import DEFAULT_CONFIG, ImportConfig
from .detect import detect_format
from .models import ParseResult, ThemeImportError

logger = logging.getLogger(__name__)

MISSING_MANIFEST_MESSAGE = (
    "No theme manifest found. A valid theme must include a theme.json manifest "
    "(or be a template bundle with Contents/Info.plist, or a presenter theme with template.json)."
)


def _archive_size(data: Union[bytes, bytearray, BinaryIO]) -> Optional[int]:
    if isinstance(data, (bytes, bytearray)):
        return len(data)
    try:
        position = data.tell()
        size = data.seek(0, 2)
        data.seek(position)
        return size - position
    except (AttributeError, OSError):
        return None


def parse_theme_zip(
    data: Union[bytes, bytearray, BinaryIO],
    config: Optional[ImportConfig] = None,
) -> ParseResult:
    """Import a theme archive.

    Args:
        data: Zip archive bytes or a seekable binary file object
        config: Import limits (defaults to DEFAULT_CONFIG)

    Returns:
        ParseResult holding the theme, or the single error that stopped the import
    """
    config = config or DEFAULT_CONFIG

    size = _archive_size(data)
    if size is not None and not config.allows_archive(size):
        return ParseResult.failure(ThemeImportError.invalid_zip(
            f"Theme archive is too large ({size} bytes, limit {config.max_archive_bytes})."
        ).error)

    try:
        archive = ThemeArchive.open(data, config)
    except ArchiveError as e:
        logger.info("Rejected theme upload: %s", e)
        return ParseResult.failure(ThemeImportError.invalid_zip().error)

    with archive:
        try:
            detected = detect_format(archive)
            if detected is None:
                raise ThemeImportError.missing_manifest(MISSING_MANIFEST_MESSAGE)
            theme_format, anchor = detected
            logger.info("Detected %s theme at %s", theme_format.name, anchor)
            theme = theme_format.parse(archive, anchor, config)
        except ThemeImportError as e:
            logger.info("Theme import failed (%s): %s", e.error.type, e.error.message)
            return ParseResult.failure(e.error)

    logger.info(
        "Imported theme %r: %d preset(s), %d asset(s)",
        theme.name, len(theme.presets or []), len(theme.assets),
    )
    return ParseResult.success(theme)


def parse_theme_file(path: Union[str, Path], config: Optional[ImportConfig] = None) -> ParseResult:
    """Import a theme archive from a file on disk.

    Raises:
        FileNotFoundError: If the file doesn't exist
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Theme archive not found: {path}")
    with open(path, 'rb') as f:
        return parse_theme_zip(f, config)

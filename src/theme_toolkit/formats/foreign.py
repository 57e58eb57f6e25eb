"""
Presenter Bundle Format

Third-party slideshow themes described by a ``template.json`` next to a
single stylesheet and an optional presets file. Everything beyond the name
and the stylesheet is imported best-effort: presets that do not map onto
the Preset schema are dropped without failing the upload.
"""

import logging
from typing import List, Optional

from ..archive import ArchiveError, ThemeArchive
from ..assets import collect_font_assets, find_thumbnail
from ..config import ImportConfig
from ..css import read_first_stylesheet
from ..models import ParsedTheme, Preset, ThemeImportError
from ..presets import convert_foreign_presets
from ..sanitize import clean_css
from ..utils import dirname_of, join_path
from ..validation import validate_foreign_manifest

logger = logging.getLogger(__name__)

MANIFEST_NAME = 'template.json'
CANONICAL_MANIFEST_NAME = 'theme.json'
DEFAULT_PRESETS_FILE = 'presets.json'
STYLESHEET_CANDIDATES = ('styles.css', 'theme.css', 'style.css')
THUMBNAIL_CANDIDATES = ('thumbnail.png', 'thumbnail.jpg', 'preview.png', 'preview.jpg')


def detect_presenter_bundle(archive: ThemeArchive) -> Optional[str]:
    """template.json near the top, provided no theme.json exists anywhere."""
    anchor = archive.find_file(MANIFEST_NAME)
    if anchor is None:
        return None
    for path in archive.files():
        if path.rsplit('/', 1)[-1] == CANONICAL_MANIFEST_NAME:
            return None
    return anchor


def _read_presets(archive: ThemeArchive, path: str) -> List[Preset]:
    if not archive.is_file(path):
        return []
    try:
        content = archive.read_text(path)
    except (KeyError, ArchiveError) as e:
        logger.debug("Skipping unreadable presets %s: %s", path, e)
        return []
    return convert_foreign_presets(content)


def parse_presenter_bundle(archive: ThemeArchive, anchor: str, config: ImportConfig) -> ParsedTheme:
    """Build a slideshow theme from a presenter bundle.

    Args:
        archive: Open theme archive
        anchor: Archive path of template.json
        config: Import limits and switches

    Returns:
        ParsedTheme of type 'slideshow'

    Raises:
        ThemeImportError: invalid_manifest or missing_css
    """
    base = dirname_of(anchor)

    try:
        manifest_text = archive.read_text(anchor)
    except (KeyError, ArchiveError):
        raise ThemeImportError.invalid_manifest(
            "Failed to read template.json",
            ["Could not read file contents"],
        )
    manifest = validate_foreign_manifest(manifest_text)

    found = read_first_stylesheet(archive, base, (manifest.css,) + STYLESHEET_CANDIDATES)
    if found is None or not found[1].strip():
        raise ThemeImportError.missing_css(
            "No stylesheet found. Expected one of: " + ', '.join(STYLESHEET_CANDIDATES)
        )
    css_path, raw_css = found
    logger.debug("Using stylesheet %s", css_path)

    presets = _read_presets(archive, join_path(base, manifest.presets or DEFAULT_PRESETS_FILE))

    return ParsedTheme(
        name=manifest.name,
        author=manifest.author,
        description=manifest.description,
        type='slideshow',
        css=clean_css(raw_css, config.sanitize),
        presets=presets or None,
        assets=collect_font_assets(archive, base),
        thumbnail=find_thumbnail(archive, base, THUMBNAIL_CANDIDATES),
    )

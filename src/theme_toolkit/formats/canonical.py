"""
Canonical Theme Format

First-party layout: a ``theme.json`` manifest plus the files it names. The
manifest and presets are validated strictly; template, fonts and thumbnail
are optional and skipped silently when they cannot be read.
"""

import logging
from typing import Optional

from ..archive import ArchiveError, ThemeArchive
from ..assets import read_font_asset, read_thumbnail
from ..config import ImportConfig
from ..models import ParsedTheme, ThemeImportError
from ..presets import parse_canonical_presets
from ..sanitize import clean_css, clean_html
from ..utils import dirname_of, join_path
from ..validation import validate_theme_json

logger = logging.getLogger(__name__)

MANIFEST_NAME = 'theme.json'


def detect_canonical(archive: ThemeArchive) -> Optional[str]:
    """theme.json at the root or inside exactly one top-level folder."""
    return archive.find_file(MANIFEST_NAME)


def parse_canonical(archive: ThemeArchive, anchor: str, config: ImportConfig) -> ParsedTheme:
    """Build a theme from a theme.json manifest.

    Args:
        archive: Open theme archive
        anchor: Archive path of theme.json
        config: Import limits and switches

    Returns:
        ParsedTheme with the manifest's declared type

    Raises:
        ThemeImportError: invalid_manifest, missing_css or invalid_presets
    """
    base = dirname_of(anchor)

    try:
        manifest_text = archive.read_text(anchor)
    except (KeyError, ArchiveError):
        raise ThemeImportError.invalid_manifest(
            "Failed to read theme.json",
            ["Could not read file contents"],
        )
    manifest = validate_theme_json(manifest_text)

    # Stylesheet (required)
    css_path = join_path(base, manifest.css)
    if not archive.is_file(css_path):
        raise ThemeImportError.missing_css(f"CSS file not found: {manifest.css}")
    try:
        css = clean_css(archive.read_text(css_path), config.sanitize)
    except (KeyError, ArchiveError):
        raise ThemeImportError.missing_css(f"Failed to read CSS file: {manifest.css}")
    if not css.strip():
        raise ThemeImportError.missing_css(f"CSS file is empty: {manifest.css}")

    # Template (optional)
    template = None
    if manifest.template:
        template_path = join_path(base, manifest.template)
        try:
            template = clean_html(archive.read_text(template_path), config.sanitize)
        except (KeyError, ArchiveError) as e:
            logger.debug("Skipping template %s: %s", template_path, e)

    # Presets (optional, but strict once present)
    presets = None
    if manifest.presets:
        presets_path = join_path(base, manifest.presets)
        if archive.is_file(presets_path):
            try:
                presets_text = archive.read_text(presets_path)
            except (KeyError, ArchiveError) as e:
                raise ThemeImportError.invalid_presets("Failed to read presets.json", [str(e)])
            presets = parse_canonical_presets(presets_text)
        else:
            logger.debug("Declared presets file not in archive: %s", presets_path)

    # Fonts (optional, each one best-effort)
    assets = []
    for font in manifest.fonts or []:
        asset = read_font_asset(archive, join_path(base, font.path), name=font.name)
        if asset is not None:
            assets.append(asset)

    thumbnail = None
    if manifest.thumbnail:
        thumbnail = read_thumbnail(archive, join_path(base, manifest.thumbnail))

    return ParsedTheme(
        name=manifest.name,
        author=manifest.author,
        description=manifest.description,
        type=manifest.type,
        css=css,
        template=template,
        presets=presets,
        assets=assets,
        thumbnail=thumbnail,
    )

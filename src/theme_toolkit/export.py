"""
Canonical Theme Export

Writes a ParsedTheme back out as a canonical theme zip (theme.json plus the
files it names), so that themes imported from any supported format can be
shared and re-imported.
"""

import io
import json
import zipfile
from pathlib import Path
from typing import Any, Dict, Union

from .models import ParsedTheme
from .utils import get_extension_for_mime_type, sanitize_filename

STYLESHEET_FILE = 'styles.css'
TEMPLATE_FILE = 'template.html'
PRESETS_FILE = 'presets.json'
FONTS_DIR = 'fonts/'


def build_manifest(theme: ParsedTheme) -> Dict[str, Any]:
    """theme.json content for a theme, without fonts or thumbnail."""
    manifest: Dict[str, Any] = {
        'version': 1,
        'name': theme.name,
        'type': theme.type,
        'css': STYLESHEET_FILE,
    }
    if theme.author:
        manifest['author'] = theme.author
    if theme.description:
        manifest['description'] = theme.description
    if theme.template:
        manifest['template'] = TEMPLATE_FILE
    if theme.presets:
        manifest['presets'] = PRESETS_FILE
    return manifest


def export_theme(theme: ParsedTheme) -> bytes:
    """Serialize a theme as a canonical theme zip.

    Layout: theme.json, styles.css, template.html (if any), presets.json
    as ``{"presets": [...]}`` (if any), fonts/<name><ext>, thumbnail<ext>.

    Args:
        theme: Parsed theme

    Returns:
        Zip archive bytes
    """
    manifest = build_manifest(theme)
    buffer = io.BytesIO()

    with zipfile.ZipFile(buffer, 'w', zipfile.ZIP_DEFLATED) as zf:
        zf.writestr(STYLESHEET_FILE, theme.css)

        if theme.template:
            zf.writestr(TEMPLATE_FILE, theme.template)

        if theme.presets:
            payload = {'presets': [p.to_json_dict() for p in theme.presets]}
            zf.writestr(PRESETS_FILE, json.dumps(payload, indent=2))

        fonts = []
        used_paths = set()
        for asset in theme.assets:
            stem = sanitize_filename(asset.name, default='font')
            extension = get_extension_for_mime_type(asset.mime_type)
            if extension and stem.lower().endswith(extension):
                stem = stem[:-len(extension)]
            path = f"{FONTS_DIR}{stem}{extension}"
            counter = 2
            while path in used_paths:
                path = f"{FONTS_DIR}{stem}-{counter}{extension}"
                counter += 1
            used_paths.add(path)
            zf.writestr(path, asset.file)
            fonts.append({'name': asset.name, 'path': path})
        if fonts:
            manifest['fonts'] = fonts

        if theme.thumbnail is not None:
            thumbnail_file = 'thumbnail' + get_extension_for_mime_type(theme.thumbnail.mime_type)
            zf.writestr(thumbnail_file, theme.thumbnail.file)
            manifest['thumbnail'] = thumbnail_file

        zf.writestr('theme.json', json.dumps(manifest, indent=2))

    return buffer.getvalue()


def export_theme_file(theme: ParsedTheme, output_path: Union[str, Path]) -> Path:
    """Write a canonical theme zip to disk.

    If ``output_path`` is a directory, the file is named after the theme.

    Returns:
        Path of the written archive
    """
    output_path = Path(output_path)
    if output_path.is_dir():
        output_path = output_path / f"{sanitize_filename(theme.name)}.zip"
    output_path.write_bytes(export_theme(theme))
    return output_path

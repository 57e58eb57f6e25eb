"""
Legacy Template Bundle Format

Writer-style template bundles: ``<Name>.bundle/Contents/Info.plist`` with
the HTML template, stylesheets and fonts under ``Contents/Resources/``.
Stylesheets linked from the template are combined with their relative
``@import`` chains. These bundles always import as preview themes.
"""

import logging
from typing import Dict, Optional

from lxml import etree

from ..archive import ArchiveError, ThemeArchive
from ..assets import collect_font_assets
from ..config import ImportConfig
from ..css import extract_stylesheet_links, inline_stylesheets
from ..models import ParsedTheme, ThemeImportError
from ..sanitize import clean_css, clean_html

logger = logging.getLogger(__name__)

PLIST_SUFFIX = 'Contents/Info.plist'
RESOURCES_DIR = 'Contents/Resources/'

NAME_KEY = 'CFBundleName'
TEMPLATE_KEY = 'IATemplateDocumentFile'
AUTHOR_KEY = 'IATemplateAuthor'
DESCRIPTION_KEY = 'CFBundleGetInfoString'
REQUIRED_KEYS = (NAME_KEY, TEMPLATE_KEY)


def detect_legacy(archive: ThemeArchive) -> Optional[str]:
    """Contents/Info.plist at the root or inside one bundle folder."""
    for path in archive.files():
        if path == PLIST_SUFFIX:
            return path
        if path.endswith('/' + PLIST_SUFFIX) and path.count('/') == 2:
            return path
    return None


def parse_plist_strings(data: bytes) -> Dict[str, str]:
    """Flat <key>/<string> pairs of a property list.

    Only keys directly followed by a <string> value are returned; arrays,
    nested dictionaries and other value types are ignored. Unparseable input
    yields an empty dict.

    Args:
        data: Raw Info.plist bytes

    Returns:
        Mapping of key to string value
    """
    parser = etree.XMLParser(recover=True, resolve_entities=False, no_network=True)
    try:
        root = etree.fromstring(data, parser=parser)
    except etree.XMLSyntaxError:
        return {}
    if root is None:
        return {}

    top = root.find('dict')
    container = top if top is not None else root

    values = {}
    for key in container.findall('key'):
        value = key.getnext()
        while value is not None and not isinstance(value.tag, str):
            value = value.getnext()
        if value is None or value.tag != 'string':
            continue
        name = (key.text or '').strip()
        if name:
            values[name] = value.text or ''
    return values


def parse_legacy_bundle(archive: ThemeArchive, anchor: str, config: ImportConfig) -> ParsedTheme:
    """Build a preview theme from a template bundle.

    Args:
        archive: Open theme archive
        anchor: Archive path of Contents/Info.plist
        config: Import limits and switches

    Returns:
        ParsedTheme of type 'preview' with no presets

    Raises:
        ThemeImportError: invalid_manifest, missing_file or missing_css
    """
    bundle_dir = anchor[:-len(PLIST_SUFFIX)]
    resources = bundle_dir + RESOURCES_DIR

    try:
        info = parse_plist_strings(archive.read_bytes(anchor))
    except (KeyError, ArchiveError):
        raise ThemeImportError.invalid_manifest(
            "Failed to read Info.plist",
            ["Could not read file contents"],
        )

    missing = [key for key in REQUIRED_KEYS if not info.get(key, '').strip()]
    if missing:
        raise ThemeImportError.invalid_manifest(
            "Info.plist validation failed",
            [f"{key}: Required" for key in missing],
        )

    template_file = info[TEMPLATE_KEY].strip() + '.html'
    template_path = resources + template_file
    try:
        template_html = archive.read_text(template_path)
    except (KeyError, ArchiveError):
        raise ThemeImportError.missing_file(
            f"Template file not found: {template_file}",
            template_path,
        )

    links = extract_stylesheet_links(template_html)
    logger.debug("Template %s links %d stylesheet(s)", template_path, len(links))
    combined = inline_stylesheets(archive, resources, links)
    if not combined.strip():
        raise ThemeImportError.missing_css("No stylesheet found in template bundle")

    return ParsedTheme(
        name=info[NAME_KEY].strip(),
        author=info.get(AUTHOR_KEY) or None,
        description=info.get(DESCRIPTION_KEY) or None,
        type='preview',
        css=clean_css(combined, config.sanitize),
        template=clean_html(template_html, config.sanitize) or None,
        assets=collect_font_assets(archive, resources),
    )

"""
Theme Sanitizer

Removes script execution vectors from uploaded CSS and HTML before they are
handed to the rendering layer.

CSS is cleaned with a fixed list of dangerous patterns, each replaced by a
``/* removed: ... */`` marker. HTML goes through lxml-html-clean's Cleaner,
configured to keep template markup (``data-*`` attributes, ``<style>``,
``<meta>``) while dropping scripts, event handlers, embedded objects,
frames, forms and stylesheet links. ``http-equiv``, ``srcdoc`` and
``xlink:href`` attributes are removed afterwards.
"""

import logging
import re
from typing import List, NamedTuple, Tuple

import lxml.html
from lxml.etree import ParserError
from lxml_html_clean import Cleaner

from .utils import escape_css_comment, escape_html

logger = logging.getLogger(__name__)


class SanitizeResult(NamedTuple):
    sanitized: str
    removed_count: int
    removed_patterns: List[str]


# ============================================================
# CSS
# ============================================================

DANGEROUS_CSS_PATTERNS: Tuple[Tuple[re.Pattern, str], ...] = (
    # Script execution
    (re.compile(r'javascript\s*:', re.IGNORECASE), 'javascript:'),
    (re.compile(r'expression\s*\(', re.IGNORECASE), 'expression()'),
    (re.compile(r'-moz-binding\s*:', re.IGNORECASE), '-moz-binding'),
    # Legacy IE vectors
    (re.compile(r'behavior\s*:', re.IGNORECASE), 'behavior:'),
    (re.compile(r'vbscript\s*:', re.IGNORECASE), 'vbscript:'),
    # External resource loading
    (re.compile(r'''@import\s+(?:url\s*\()?['"]?https?://''', re.IGNORECASE), '@import external URL'),
    (re.compile(r'''@import\s+(?:url\s*\()?['"]?//''', re.IGNORECASE), '@import protocol-relative URL'),
    # HTML smuggled through data URLs
    (re.compile(r'''url\s*\(\s*['"]?\s*data\s*:\s*text/html''', re.IGNORECASE), 'data:text/html URL'),
)


def _marker(name: str) -> str:
    # Marker labels must not match any pattern in DANGEROUS_CSS_PATTERNS
    return f'/* removed: {escape_css_comment(name.rstrip(":()"))} */'


def sanitize_css(css: str) -> SanitizeResult:
    """Replace dangerous CSS constructs with comment markers.

    Args:
        css: Raw stylesheet text

    Returns:
        SanitizeResult with the cleaned stylesheet and the pattern names removed
    """
    sanitized = css
    removed_patterns = []

    for pattern, name in DANGEROUS_CSS_PATTERNS:
        sanitized, count = pattern.subn(_marker(name), sanitized)
        if count:
            removed_patterns.append(name)

    return SanitizeResult(sanitized, len(removed_patterns), removed_patterns)


# ============================================================
# HTML
# ============================================================

FORBIDDEN_TAGS = frozenset([
    'script', 'iframe', 'object', 'embed', 'form', 'button', 'frame',
    'frameset', 'portal', 'applet', 'base', 'noscript',
])

# Attributes the Cleaner keeps but templates must not carry
FORBIDDEN_ATTRIBUTES = frozenset(['http-equiv', 'srcdoc', 'xlink:href'])

_URL_ATTRIBUTES = ('href', 'src', 'action', 'formaction', 'xlink:href')
_SCRIPT_URL_RE = re.compile(r'^\s*(?:javascript|vbscript)\s*:', re.IGNORECASE)
# lxml refuses str input that carries an encoding declaration
_XML_DECL_RE = re.compile(r'^\s*<\?xml[^>]*\?>', re.IGNORECASE)


def _make_cleaner() -> Cleaner:
    return Cleaner(
        scripts=True,
        javascript=True,
        comments=False,
        style=False,
        inline_style=False,
        links=False,
        meta=False,
        page_structure=False,
        processing_instructions=True,
        embedded=True,
        frames=True,
        forms=True,
        annoying_tags=False,
        remove_unknown_tags=True,
        safe_attrs_only=False,
        kill_tags=['noscript', 'portal', 'base'],
    )


def _scan_removals(html: str) -> List[str]:
    """List the constructs the cleaner is about to drop, for reporting."""
    found = []
    try:
        root = lxml.html.document_fromstring(html)
    except (ParserError, ValueError):
        return found

    for el in root.iter():
        tag = el.tag if isinstance(el.tag, str) else ''
        if tag.lower() in FORBIDDEN_TAGS:
            found.append(f'<{tag.lower()}>')
        for attr, value in el.attrib.items():
            name = attr.lower()
            if name.startswith('on') or name in FORBIDDEN_ATTRIBUTES:
                found.append(name)
            elif name in _URL_ATTRIBUTES and _SCRIPT_URL_RE.match(value or ''):
                found.append(f'{name}="javascript:..."')
    return found


def sanitize_html(html: str) -> SanitizeResult:
    """Strip scripts and event handlers from an HTML template.

    Input lxml cannot parse as HTML (e.g. empty markup) is returned escaped
    so that it renders as inert text.

    Args:
        html: Raw template markup

    Returns:
        SanitizeResult with the cleaned markup and the constructs removed
    """
    if not html.strip():
        return SanitizeResult('', 0, [])

    html = _XML_DECL_RE.sub('', html, count=1)

    removed = _scan_removals(html)
    try:
        doc = lxml.html.fromstring(html)
    except (ParserError, ValueError):
        return SanitizeResult(escape_html(html), len(removed), sorted(set(removed)))

    _make_cleaner()(doc)
    for el in doc.iter():
        if not isinstance(el.tag, str):
            continue
        for attr in [a for a in el.attrib if a.lower() in FORBIDDEN_ATTRIBUTES]:
            del el.attrib[attr]
    sanitized = lxml.html.tostring(doc, encoding='unicode')

    return SanitizeResult(sanitized, len(removed), sorted(set(removed)))


# ============================================================
# PIPELINE HELPERS
# ============================================================

def clean_css(css: str, enabled: bool = True) -> str:
    """Sanitized stylesheet text, logging what was removed."""
    if not enabled:
        return css
    result = sanitize_css(css)
    if result.removed_count:
        logger.info("Removed from CSS: %s", ', '.join(result.removed_patterns))
    return result.sanitized


def clean_html(html: str, enabled: bool = True) -> str:
    """Sanitized template markup, logging what was removed."""
    if not enabled:
        return html
    result = sanitize_html(html)
    if result.removed_count:
        logger.info("Removed from template: %s", ', '.join(result.removed_patterns))
    return result.sanitized

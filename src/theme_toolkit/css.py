"""
CSS Resolution Pipeline

Locates stylesheet entry points inside a theme archive, follows relative
``@import`` references between archive files, and concatenates the result
into a single stylesheet.

Import inlining is cycle-safe: every resolved file is recorded in a visited
set keyed by its normalized archive path, so circular imports terminate and
no file is inlined twice.
"""

import logging
import re
from typing import Iterable, List, Optional, Set, Tuple
from urllib.parse import urlsplit

import lxml.html
from lxml.etree import ParserError

from .archive import ArchiveError, ThemeArchive
from .utils import dirname_of, escape_css_comment, join_path

logger = logging.getLogger(__name__)

# @import "a.css"; @import 'a.css' screen; @import url(a.css); @import url("a.css");
# Only statements at the start of a line or right after a ';' count, and a
# statement never runs past the end of its line.
IMPORT_RE = re.compile(
    r'''(?:^|(?<=;))[ \t]*@import[ \t]+'''
    r'''(?:url\(\s*(['"]?)(?P<url>[^'")\n]*?)\1\s*\)|(['"])(?P<str>[^'"\n]*?)\3)'''
    r'''[^;\n]*;?''',
    re.IGNORECASE | re.MULTILINE,
)
# Any @import statement, including forms IMPORT_RE cannot resolve
_IMPORT_STATEMENT_RE = re.compile(
    r'(?:^|(?<=;))[ \t]*@import\b[^;\n]*;?',
    re.IGNORECASE | re.MULTILINE,
)

FALLBACK_STYLESHEET = 'style.css'


# ============================================================
# REFERENCE EXTRACTION
# ============================================================

def is_external_reference(href: str) -> bool:
    """Check if an href points outside the archive."""
    value = href.strip().lower()
    if value.startswith('//'):
        return True
    return bool(urlsplit(value).scheme)


def clean_reference(href: str) -> str:
    """Drop query string and fragment from a relative reference."""
    parts = urlsplit(href.strip())
    return parts.path


def extract_stylesheet_links(html: str) -> List[str]:
    """Relative hrefs of every <link rel="stylesheet"> in a template.

    Absolute http(s) and protocol-relative links are skipped. Order follows
    the document; duplicates are kept once.

    Args:
        html: Template markup

    Returns:
        List of relative stylesheet paths
    """
    if not html.strip():
        return []
    try:
        root = lxml.html.document_fromstring(html)
    except (ParserError, ValueError):
        logger.debug("Template is not parseable HTML, no stylesheet links found")
        return []

    hrefs = []
    for link in root.iter('link'):
        rel_tokens = (link.get('rel') or '').lower().split()
        if 'stylesheet' not in rel_tokens:
            continue
        href = link.get('href')
        if not href or is_external_reference(href):
            continue
        cleaned = clean_reference(href)
        if cleaned and cleaned not in hrefs:
            hrefs.append(cleaned)
    return hrefs


def find_imports(css: str) -> List[str]:
    """Relative targets of the @import statements in a stylesheet."""
    targets = []
    for match in IMPORT_RE.finditer(css):
        target = match.group('url') if match.group('url') is not None else match.group('str')
        if not target or is_external_reference(target):
            continue
        cleaned = clean_reference(target)
        if cleaned:
            targets.append(cleaned)
    return targets


def strip_imports(css: str) -> str:
    """Remove every @import statement from a stylesheet body."""
    return _IMPORT_STATEMENT_RE.sub('', css)


# ============================================================
# IMPORT INLINING
# ============================================================

class StylesheetInliner:
    """Concatenates stylesheets depth-first, inlining relative @imports.

    One instance serves one import run; the visited set lives on the
    instance.
    """

    def __init__(self, archive: ThemeArchive, root: str):
        self.archive = archive
        self.root = root
        self.visited: Set[str] = set()
        self.chunks: List[str] = []

    def resolve(self, reference: str, importer_dir: Optional[str] = None) -> Optional[str]:
        """Map a reference to an existing archive path.

        Tried relative to the importing file first, then relative to root.
        """
        candidates = []
        if importer_dir is not None:
            candidates.append(join_path(importer_dir, reference))
        candidates.append(join_path(self.root, reference))
        for candidate in candidates:
            if self.archive.is_file(candidate):
                return candidate
        return None

    def include(self, reference: str, importer_dir: Optional[str] = None) -> bool:
        """Inline a stylesheet and everything it imports.

        Returns:
            True if the file resolved and had not been processed yet
        """
        path = self.resolve(reference, importer_dir)
        if path is None:
            logger.debug("Stylesheet not found in archive: %s", reference)
            return False
        if path in self.visited:
            return False
        self.visited.add(path)

        try:
            body = self.archive.read_text(path)
        except (KeyError, ArchiveError) as e:
            logger.debug("Skipping unreadable stylesheet %s: %s", path, e)
            return False

        for target in find_imports(body):
            self.include(target, dirname_of(path))

        body = strip_imports(body).strip()
        if body:
            label = path[len(self.root):] if path.startswith(self.root) else path
            self.chunks.append(f"/* {escape_css_comment(label)} */\n{body}")
        return True

    def include_all(self, references: Iterable[str]) -> None:
        for reference in references:
            self.include(reference)

    @property
    def css(self) -> str:
        return '\n\n'.join(self.chunks)


def inline_stylesheets(archive: ThemeArchive, root: str, links: Iterable[str]) -> str:
    """Combine linked stylesheets (plus the style.css fallback) into one.

    Args:
        archive: Open theme archive
        root: Archive directory the links are relative to
        links: Relative stylesheet paths in document order

    Returns:
        Concatenated stylesheet text with imports inlined and stripped
    """
    inliner = StylesheetInliner(archive, root)
    inliner.include_all(links)
    inliner.include(FALLBACK_STYLESHEET)
    return inliner.css


# ============================================================
# SINGLE FILE LOOKUP
# ============================================================

def read_first_stylesheet(
    archive: ThemeArchive,
    base: str,
    candidates: Iterable[Optional[str]],
) -> Optional[Tuple[str, str]]:
    """Read the first candidate stylesheet that exists under ``base``.

    Returns:
        (path, text) of the first readable candidate, or None
    """
    seen = set()
    for name in candidates:
        if not name or name in seen:
            continue
        seen.add(name)
        path = join_path(base, name)
        if not archive.is_file(path):
            continue
        try:
            return path, archive.read_text(path)
        except (KeyError, ArchiveError) as e:
            logger.debug("Skipping unreadable stylesheet %s: %s", path, e)
    return None

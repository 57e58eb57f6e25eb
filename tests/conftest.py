"""Shared fixtures for theme toolkit tests."""

import io
import json
import zipfile

import pytest


def build_zip(files):
    """Create zip bytes from a mapping of archive path -> str/bytes/dict.

    Dict and list values are written as JSON. Paths ending in '/' become
    directory entries.
    """
    buffer = io.BytesIO()
    with zipfile.ZipFile(buffer, 'w', zipfile.ZIP_DEFLATED) as zf:
        for path, content in files.items():
            if path.endswith('/'):
                zf.writestr(zipfile.ZipInfo(path), b'')
                continue
            if isinstance(content, (dict, list)):
                content = json.dumps(content)
            zf.writestr(path, content)
    return buffer.getvalue()


@pytest.fixture
def make_zip():
    return build_zip


@pytest.fixture
def canonical_manifest():
    return {
        "version": 1,
        "name": "Test Theme",
        "author": "Test Author",
        "description": "A test theme",
        "type": "preview",
        "css": "styles.css",
    }


@pytest.fixture
def valid_preset():
    return {
        "name": "Light",
        "appearance": "light",
        "colors": {
            "background": "#ffffff",
            "foreground": "#111111",
            "accent": "#0066cc",
        },
    }


INFO_PLIST = """<?xml version="1.0" encoding="UTF-8"?>
<!DOCTYPE plist PUBLIC "-//Apple//DTD PLIST 1.0//EN" "http://www.apple.com/DTDs/PropertyList-1.0.dtd">
<plist version="1.0">
<dict>
    <key>CFBundleName</key>
    <string>{name}</string>
    <key>IATemplateDocumentFile</key>
    <string>{document}</string>
    <key>CFBundleVersion</key>
    <string>1</string>
    <key>IATemplateTitleFontSize</key>
    <integer>12</integer>
</dict>
</plist>
"""


@pytest.fixture
def info_plist():
    def _plist(name='X', document='doc'):
        return INFO_PLIST.format(name=name, document=document)
    return _plist

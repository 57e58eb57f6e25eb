"""Tests for stylesheet discovery and @import inlining."""

from theme_toolkit.archive import ThemeArchive
from theme_toolkit.css import (
    StylesheetInliner,
    extract_stylesheet_links,
    find_imports,
    inline_stylesheets,
    is_external_reference,
    read_first_stylesheet,
    strip_imports,
)


# =============================================================================
# Reference extraction
# =============================================================================

def test_extract_stylesheet_links_skips_external_and_duplicates():
    html = (
        '<html><head>'
        '<link rel="stylesheet" href="main.css">'
        '<link rel="Alternate Stylesheet" href="alt.css?v=2">'
        '<link rel="icon" href="favicon.png">'
        '<link rel="stylesheet" href="https://cdn.example/reset.css">'
        '<link rel="stylesheet" href="//cdn.example/grid.css">'
        '<link rel="stylesheet" href="main.css">'
        '</head><body></body></html>'
    )
    assert extract_stylesheet_links(html) == ["main.css", "alt.css"]


def test_extract_stylesheet_links_empty_template():
    assert extract_stylesheet_links("") == []


def test_is_external_reference():
    assert is_external_reference("https://example.com/a.css")
    assert is_external_reference("//example.com/a.css")
    assert is_external_reference("data:text/css,body{}")
    assert not is_external_reference("css/a.css")
    assert not is_external_reference("../a.css")


def test_find_imports_all_forms():
    css = (
        '@import "a.css";\n'
        "@import 'b.css' screen;\n"
        '@import url(c.css);\n'
        '@import url("d.css");\n'
        '@import url("https://fonts.example/e.css");\n'
        'body { color: red; }'
    )
    assert find_imports(css) == ["a.css", "b.css", "c.css", "d.css"]


def test_strip_imports_leaves_rules():
    css = '@import "a.css";\n@import url(https://x.example/y.css);\nbody { color: red; }'
    stripped = strip_imports(css)
    assert "@import" not in stripped
    assert "body { color: red; }" in stripped


# =============================================================================
# Inlining
# =============================================================================

def test_inliner_places_imports_before_importer(make_zip):
    data = make_zip({
        "Res/a.css": '@import "b.css";\n.a { color: red; }',
        "Res/b.css": ".b { color: blue; }",
    })
    with ThemeArchive.open(data) as archive:
        inliner = StylesheetInliner(archive, "Res/")
        inliner.include("a.css")
        css = inliner.css

    assert css.index(".b { color: blue; }") < css.index(".a { color: red; }")
    assert "/* b.css */" in css
    assert "/* a.css */" in css
    assert "@import" not in css


def test_inliner_terminates_on_cycles(make_zip):
    data = make_zip({
        "a.css": '@import "b.css";\na { }',
        "b.css": '@import "a.css";\nb { }',
    })
    with ThemeArchive.open(data) as archive:
        inliner = StylesheetInliner(archive, "")
        assert inliner.include("a.css") is True
        assert inliner.include("a.css") is False
        css = inliner.css

    assert css == "/* b.css */\nb { }\n\n/* a.css */\na { }"
    assert inliner.visited == {"a.css", "b.css"}


def test_inliner_resolves_relative_to_importer_then_root(make_zip):
    data = make_zip({
        "Res/css/main.css": '@import "parts/x.css";\n@import "shared.css";\nmain { }',
        "Res/css/parts/x.css": "x { }",
        "Res/shared.css": "shared { }",
    })
    with ThemeArchive.open(data) as archive:
        inliner = StylesheetInliner(archive, "Res/")
        inliner.include("css/main.css")

    assert inliner.visited == {"Res/css/main.css", "Res/css/parts/x.css", "Res/shared.css"}


def test_inliner_skips_missing_files(make_zip):
    data = make_zip({"a.css": '@import "missing.css";\na { }'})
    with ThemeArchive.open(data) as archive:
        inliner = StylesheetInliner(archive, "")
        assert inliner.include("nope.css") is False
        inliner.include("a.css")
    assert inliner.css == "/* a.css */\na { }"


def test_inline_stylesheets_adds_style_css_fallback(make_zip):
    data = make_zip({
        "Res/main.css": "main { }",
        "Res/style.css": "fallback { }",
    })
    with ThemeArchive.open(data) as archive:
        css = inline_stylesheets(archive, "Res/", ["main.css"])
    assert css.index("main { }") < css.index("fallback { }")


def test_inline_stylesheets_fallback_only(make_zip):
    data = make_zip({"Res/style.css": "fallback { }"})
    with ThemeArchive.open(data) as archive:
        assert inline_stylesheets(archive, "Res/", []) == "/* style.css */\nfallback { }"


def test_inline_stylesheets_nothing_found(make_zip):
    data = make_zip({"Res/readme.txt": "hi"})
    with ThemeArchive.open(data) as archive:
        assert inline_stylesheets(archive, "Res/", ["main.css"]) == ""


# =============================================================================
# Candidate lookup
# =============================================================================

def test_read_first_stylesheet_order(make_zip):
    data = make_zip({
        "bundle/theme.css": "theme { }",
        "bundle/style.css": "style { }",
    })
    with ThemeArchive.open(data) as archive:
        found = read_first_stylesheet(archive, "bundle/", [None, "styles.css", "theme.css", "style.css"])
        missing = read_first_stylesheet(archive, "bundle/", ["styles.css"])
    assert found == ("bundle/theme.css", "theme { }")
    assert missing is None


# =============================================================================
# Import statement boundaries
# =============================================================================

def test_strip_imports_ignores_import_text_inside_rules():
    css = '.x::before { content: "@import is cool"; }\n.y { color: red; }'
    assert strip_imports(css) == css


def test_strip_imports_without_semicolon_stops_at_line_end():
    css = '@import "b.css"\n.a { color: red; }\n.c { color: blue; }'
    stripped = strip_imports(css)
    assert ".a { color: red; }" in stripped
    assert ".c { color: blue; }" in stripped
    assert "@import" not in stripped


def test_strip_imports_same_line_statements():
    css = '@import "a.css"; @import url(b.css);\nbody { }'
    assert strip_imports(css).strip() == "body { }"


def test_find_imports_only_statements():
    css = '@import "a.css"\n.x::before { content: "@import \'b.css\'"; }\n@import url(c.css);'
    assert find_imports(css) == ["a.css", "c.css"]

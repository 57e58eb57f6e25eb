"""
Theme Data Model

Pydantic models for the canonical theme record produced by an import, the
preset schema shared by every format, and the upload error taxonomy.
"""

from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

ThemeType = Literal['preview', 'slideshow']
Appearance = Literal['light', 'dark']
ErrorType = Literal[
    'invalid_zip',
    'missing_manifest',
    'invalid_manifest',
    'missing_css',
    'invalid_presets',
    'missing_file',
]

THEME_TYPES = ('preview', 'slideshow')
MAX_EXTRA_ACCENTS = 5


# ============================================================
# PRESETS
# ============================================================

class PresetColors(BaseModel):
    """Colors of a preset. Values are any CSS color syntax."""
    model_config = ConfigDict(populate_by_name=True)

    background: str
    foreground: str
    accent: str
    accents: Optional[List[str]] = Field(None, max_length=MAX_EXTRA_ACCENTS)
    heading: Optional[str] = None
    link: Optional[str] = None
    code_background: Optional[str] = Field(None, alias='codeBackground')


class PresetFonts(BaseModel):
    """Font families a preset prefers for titles and body text."""
    title: Optional[str] = None
    body: Optional[str] = None


class Preset(BaseModel):
    """A named light/dark color scheme belonging to a theme."""
    name: str = Field(min_length=1)
    appearance: Appearance
    colors: PresetColors
    fonts: Optional[PresetFonts] = None

    def to_json_dict(self) -> dict:
        """Serialize with the camelCase keys used in presets.json."""
        return self.model_dump(by_alias=True, exclude_none=True)


# ============================================================
# PARSED THEME
# ============================================================

class ThemeAsset(BaseModel):
    """A binary file copied out of the archive."""
    name: str
    mime_type: str
    file: bytes = Field(repr=False)

    @property
    def size(self) -> int:
        return len(self.file)


class ParsedTheme(BaseModel):
    """Canonical, sanitized theme record ready to be stored and rendered."""
    name: str = Field(min_length=1)
    author: Optional[str] = None
    description: Optional[str] = None
    type: ThemeType
    css: str = Field(min_length=1)
    template: Optional[str] = None
    presets: Optional[List[Preset]] = None
    assets: List[ThemeAsset] = Field(default_factory=list)
    thumbnail: Optional[ThemeAsset] = None

    def summary(self) -> dict:
        """JSON-friendly description without binary content."""
        return {
            'name': self.name,
            'author': self.author,
            'description': self.description,
            'type': self.type,
            'css_length': len(self.css),
            'has_template': self.template is not None,
            'presets': [p.to_json_dict() for p in self.presets or []],
            'assets': [
                {'name': a.name, 'mime_type': a.mime_type, 'size': a.size}
                for a in self.assets
            ],
            'thumbnail': (
                {'mime_type': self.thumbnail.mime_type, 'size': self.thumbnail.size}
                if self.thumbnail else None
            ),
        }


# ============================================================
# ERRORS
# ============================================================

class ThemeUploadError(BaseModel):
    """Terminal failure of an import. Exactly one is reported per run."""
    type: ErrorType
    message: str
    errors: Optional[List[str]] = None
    path: Optional[str] = None


class ThemeImportError(Exception):
    """Raised inside the pipeline to abort with a ThemeUploadError."""

    def __init__(self, error: ThemeUploadError):
        super().__init__(error.message)
        self.error = error

    @classmethod
    def invalid_zip(cls, message: str = "Failed to read zip file. Make sure it's a valid zip archive.") -> 'ThemeImportError':
        return cls(ThemeUploadError(type='invalid_zip', message=message))

    @classmethod
    def missing_manifest(cls, message: str) -> 'ThemeImportError':
        return cls(ThemeUploadError(type='missing_manifest', message=message))

    @classmethod
    def invalid_manifest(cls, message: str, errors: List[str]) -> 'ThemeImportError':
        return cls(ThemeUploadError(type='invalid_manifest', message=message, errors=list(errors)))

    @classmethod
    def missing_css(cls, message: str) -> 'ThemeImportError':
        return cls(ThemeUploadError(type='missing_css', message=message))

    @classmethod
    def invalid_presets(cls, message: str, errors: List[str]) -> 'ThemeImportError':
        return cls(ThemeUploadError(type='invalid_presets', message=message, errors=list(errors)))

    @classmethod
    def missing_file(cls, message: str, path: str) -> 'ThemeImportError':
        return cls(ThemeUploadError(type='missing_file', message=message, path=path))


class ParseResult(BaseModel):
    """Outcome of one import: a theme on success, otherwise one error."""
    ok: bool
    theme: Optional[ParsedTheme] = None
    error: Optional[ThemeUploadError] = None

    @classmethod
    def success(cls, theme: ParsedTheme) -> 'ParseResult':
        return cls(ok=True, theme=theme)

    @classmethod
    def failure(cls, error: ThemeUploadError) -> 'ParseResult':
        return cls(ok=False, error=error)

"""
Schema Validators

Structural validation of the canonical ``theme.json`` manifest, the foreign
``template.json`` manifest and individual presets. Every validator reports
field-qualified messages instead of raising on the first problem.
"""

import json
from typing import Any, List, Optional, Tuple, Type, TypeVar

from pydantic import BaseModel, Field, ValidationError, field_validator

from .models import Preset, ThemeImportError, ThemeType

M = TypeVar('M', bound=BaseModel)


class ManifestFont(BaseModel):
    """A font declared in theme.json."""
    name: str
    path: str


class ThemeManifest(BaseModel):
    """Schema of the canonical theme.json manifest."""
    version: int
    name: str = Field(min_length=1)
    author: Optional[str] = None
    description: Optional[str] = None
    type: ThemeType
    css: str = Field(min_length=1)
    template: Optional[str] = None
    presets: Optional[str] = None
    fonts: Optional[List[ManifestFont]] = None
    thumbnail: Optional[str] = None

    @field_validator('version', mode='before')
    @classmethod
    def require_version_one(cls, v):
        """Only schema version 1 exists; booleans and strings are rejected."""
        if isinstance(v, bool) or v != 1:
            raise ValueError('Input should be 1')
        return v


class ForeignManifest(BaseModel):
    """Schema of a presenter bundle's template.json."""
    name: str = Field(min_length=1)
    author: Optional[str] = None
    description: Optional[str] = None
    css: Optional[str] = None
    presets: Optional[str] = None


def format_issue_path(loc: Tuple[Any, ...]) -> str:
    """Dotted field path for a pydantic error location."""
    return '.'.join(str(part) for part in loc)


def validation_messages(exc: ValidationError) -> List[str]:
    """One '<field.path>: <description>' message per violated field."""
    return [f"{format_issue_path(err['loc'])}: {err['msg']}" for err in exc.errors()]


def _validate_manifest(content: str, model: Type[M], filename: str) -> M:
    try:
        data = json.loads(content)
    except (ValueError, RecursionError):
        raise ThemeImportError.invalid_manifest(
            f"{filename} is not valid JSON",
            ["Failed to parse JSON"],
        )

    if not isinstance(data, dict):
        raise ThemeImportError.invalid_manifest(
            f"{filename} validation failed",
            ["Expected a JSON object"],
        )

    try:
        return model.model_validate(data)
    except ValidationError as e:
        raise ThemeImportError.invalid_manifest(
            f"{filename} validation failed",
            validation_messages(e),
        )


def validate_theme_json(content: str) -> ThemeManifest:
    """Parse and validate a canonical theme.json.

    Args:
        content: Raw manifest text

    Returns:
        ThemeManifest instance

    Raises:
        ThemeImportError: invalid_manifest with one message per violated field
    """
    return _validate_manifest(content, ThemeManifest, 'theme.json')


def validate_foreign_manifest(content: str) -> ForeignManifest:
    """Parse and validate a presenter bundle's template.json."""
    return _validate_manifest(content, ForeignManifest, 'template.json')


def validate_preset(data: Any) -> Tuple[Optional[Preset], List[str]]:
    """Validate one preset entry.

    Returns:
        (preset, []) on success, (None, messages) on failure where each
        message is '<field.path> - <description>'
    """
    try:
        return Preset.model_validate(data), []
    except ValidationError as e:
        messages = [
            f"{format_issue_path(err['loc'])} - {err['msg']}" if err['loc'] else err['msg']
            for err in e.errors()
        ]
        return None, messages

"""
Configuration Schema for Theme Toolkit

Pydantic model defining the import limits applied to uploaded theme archives.
"""

from pydantic import BaseModel, Field

MIB = 1024 * 1024


class ImportConfig(BaseModel):
    """Limits and switches for a theme import run."""

    version: str = Field("1.0", description="Configuration schema version")

    max_archive_bytes: int = Field(
        50 * MIB,
        gt=0,
        description="Archives larger than this are rejected as invalid_zip"
    )
    max_entry_bytes: int = Field(
        20 * MIB,
        gt=0,
        description="Archive entries larger than this are treated as unreadable"
    )
    sanitize: bool = Field(
        True,
        description="Run CSS/HTML sanitization (disable only for trusted internal imports)"
    )

    def allows_archive(self, size: int) -> bool:
        """Check if an archive of the given size may be opened."""
        return size <= self.max_archive_bytes

    def allows_entry(self, size: int) -> bool:
        """Check if an archive entry of the given uncompressed size may be read."""
        return size <= self.max_entry_bytes


DEFAULT_CONFIG = ImportConfig()

"""
Theme Archive Reader

Thin wrapper around ``zipfile`` exposing the four operations the import
pipeline needs: open raw bytes, test for a file entry, enumerate entries,
and read an entry as text or bytes.
"""

import io
import zipfile
import zlib
from typing import BinaryIO, Iterator, List, Optional, Tuple, Union

from .config import DEFAULT_CONFIG, ImportConfig


class ArchiveError(Exception):
    """Raised when archive bytes cannot be opened or an entry cannot be read."""


class ThemeArchive:
    """Read-only index over an uploaded theme zip."""

    def __init__(self, zf: zipfile.ZipFile, config: ImportConfig = DEFAULT_CONFIG):
        self._zf = zf
        self.config = config
        self._infos = {}
        for info in zf.infolist():
            # First entry wins on duplicate names, matching directory listing order
            self._infos.setdefault(info.filename, info)

    @classmethod
    def open(
        cls,
        data: Union[bytes, bytearray, BinaryIO],
        config: ImportConfig = DEFAULT_CONFIG,
    ) -> 'ThemeArchive':
        """Open raw zip bytes (or a binary file object) into an entry index.

        Raises:
            ArchiveError: If the data is not a readable zip archive
        """
        stream = io.BytesIO(bytes(data)) if isinstance(data, (bytes, bytearray)) else data
        try:
            zf = zipfile.ZipFile(stream, 'r')
        except (zipfile.BadZipFile, zipfile.LargeZipFile, OSError, ValueError) as e:
            raise ArchiveError(f"Not a readable zip archive: {e}") from e
        return cls(zf, config)

    def close(self) -> None:
        self._zf.close()

    def __enter__(self) -> 'ThemeArchive':
        return self

    def __exit__(self, *exc) -> None:
        self.close()

    def entries(self) -> List[Tuple[str, bool]]:
        """All (path, is_directory) pairs in archive order."""
        return [(name, info.is_dir()) for name, info in self._infos.items()]

    def files(self) -> Iterator[str]:
        """Paths of all non-directory entries in archive order."""
        for path, is_dir in self.entries():
            if not is_dir:
                yield path

    def is_file(self, path: str) -> bool:
        """Check whether ``path`` exists and is a file entry."""
        info = self._infos.get(path)
        return info is not None and not info.is_dir()

    def find_file(self, filename: str) -> Optional[str]:
        """Find ``filename`` at the archive root or inside one top-level folder.

        Returns:
            The matching entry path, or None
        """
        if self.is_file(filename):
            return filename
        for path in self.files():
            parts = path.split('/')
            if len(parts) == 2 and parts[1] == filename:
                return path
        return None

    def read_bytes(self, path: str) -> bytes:
        """Read an entry's content.

        Raises:
            KeyError: If the entry does not exist or is a directory
            ArchiveError: If the entry is too large or corrupt
        """
        info = self._infos.get(path)
        if info is None or info.is_dir():
            raise KeyError(path)
        if not self.config.allows_entry(info.file_size):
            raise ArchiveError(
                f"{path}: entry size {info.file_size} exceeds limit {self.config.max_entry_bytes}"
            )
        try:
            return self._zf.read(info)
        except (zipfile.BadZipFile, zipfile.LargeZipFile, OSError, ValueError,
                NotImplementedError, RuntimeError, zlib.error) as e:
            raise ArchiveError(f"{path}: {e}") from e

    def read_text(self, path: str) -> str:
        """Read an entry as UTF-8 text (a leading BOM is dropped)."""
        data = self.read_bytes(path)
        try:
            return data.decode('utf-8-sig')
        except UnicodeDecodeError as e:
            raise ArchiveError(f"{path}: not valid UTF-8 text") from e

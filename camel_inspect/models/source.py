"""Integration source documents."""

from __future__ import annotations

import base64
import binascii
import gzip
import zlib
from dataclasses import dataclass
from pathlib import Path

# Language detection by file extension
_EXTENSION_TO_LANGUAGE: dict[str, str] = {
    ".java": "java",
    ".groovy": "groovy",
    ".js": "js",
    ".kts": "kotlin",
    ".xml": "xml",
    ".yaml": "yaml",
    ".yml": "yaml",
}


@dataclass(frozen=True)
class SourceDocument:
    """One integration source file as read from disk.

    Compressed content is gzip data wrapped in base64.
    """

    name: str
    content: bytes
    compressed: bool = False

    @property
    def language(self) -> str | None:
        return _EXTENSION_TO_LANGUAGE.get(Path(self.name).suffix.lower())

    def text(self) -> str:
        """Decoded content.

        Raises:
            ValueError: compressed content that is not valid base64 gzip data.
        """
        data = self.content
        if self.compressed:
            try:
                data = gzip.decompress(base64.b64decode(data, validate=True))
            except (binascii.Error, OSError, EOFError, zlib.error) as e:
                raise ValueError(f"Cannot decompress {self.name}: {e}") from e
        return data.decode("utf-8", errors="replace")

    @classmethod
    def from_path(cls, path: str | Path) -> SourceDocument:
        p = Path(path)
        return cls(name=p.name, content=p.read_bytes(), compressed=False)

"""
Exceptions raised while loading TMX maps and TSX tilesets.

Every parse error is fatal: the whole document is rejected and no partially
built map or tileset is handed back. Lookups that simply find nothing (an
unknown GID, a tile outside its tileset) return None instead of raising.

Missing or unreadable files are not wrapped - the FileNotFoundError/OSError
raised while reading the file reaches the caller unchanged.
"""

from typing import Optional


class TiledError(Exception):
    """
    Base class for all TMX/TSX loading errors.

    Attributes:
    -----------
    message : str
        What went wrong
    document : str or None
        Path or label of the document being parsed, filled in by the
        top-level parse functions once the error leaves the document
    """

    def __init__(self, message: str, document: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.document = document

    def __str__(self):
        if self.document:
            return f"{self.document}: {self.message}"
        return self.message


class UnsupportedFormatError(TiledError):
    """File does not have the extension expected for its document type."""


class MalformedDocumentError(TiledError):
    """XML is broken, or a required attribute/element is missing or invalid."""


class UnsupportedEncodingError(TiledError):
    """Tile layer data uses an encoding other than plain CSV."""

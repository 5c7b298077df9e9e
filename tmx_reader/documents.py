"""
Reading TMX/TSX documents from disk and turning XML text into a root element.

Both document types go through the same steps:

    path ──[extension check]──> read_text ──> ET.fromstring ──> builder(root)

Any TiledError escaping the builder is tagged with the document label so
the caller can tell which file (of a map and its tilesets) was broken.
"""

import xml.etree.ElementTree as ET
from pathlib import Path
from typing import Callable, Optional, TypeVar, Union

from .errors import MalformedDocumentError, TiledError, UnsupportedFormatError

MAP_EXTENSION = '.tmx'
TILESET_EXTENSION = '.tsx'

T = TypeVar('T')


def read_document(path: Union[str, Path], extension: str) -> str:
    """
    Read a document after checking its extension.

    Raises:
    -------
    UnsupportedFormatError : path does not end with extension
    FileNotFoundError / OSError : file missing or unreadable (not wrapped)
    """
    path = Path(path)
    # Reject files with the WRONG extension, accept the right one
    if path.suffix.lower() != extension:
        raise UnsupportedFormatError(
            f"Unsupported file format, expected a {extension} file", str(path)
        )
    return path.read_text(encoding='utf-8')


def parse_document(text: Union[str, bytes], root_tag: str,
                   builder: Callable[[ET.Element], T],
                   document: Optional[str] = None) -> T:
    """
    Parse XML text and hand its root element to builder.

    Parameters:
    -----------
    text : str or bytes
        Full document content
    root_tag : str
        Expected root element ('map' or 'tileset')
    builder : callable
        Turns the root element into the model object
    document : str, optional
        Label used in error messages (usually the file path)
    """
    try:
        root = ET.fromstring(text)
    except ET.ParseError as exc:
        raise MalformedDocumentError(f"XML is not well-formed: {exc}", document) from exc

    try:
        if root.tag != root_tag:
            raise MalformedDocumentError(
                f"Expected <{root_tag}> root element, found <{root.tag}>"
            )
        return builder(root)
    except TiledError as exc:
        if exc.document is None:
            exc.document = document
        raise

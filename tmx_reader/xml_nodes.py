"""
Attribute and child lookup helpers over xml.etree.ElementTree elements.

ElementTree already gives us everything we need to walk a TMX document
(elem.get, elem.find, elem.findall with 'properties/property' style paths).
These helpers only add one thing: a missing or non-numeric value in a
required attribute becomes a MalformedDocumentError that names the element
and attribute, instead of a bare TypeError/ValueError from int(None).
"""

import xml.etree.ElementTree as ET
from typing import Any, Callable, Optional

from .errors import MalformedDocumentError


def describe(elem: ET.Element) -> str:
    """Short human-readable label for an element, e.g. <layer id="3">."""
    for key in ('id', 'name'):
        if elem.get(key) is not None:
            return f'<{elem.tag} {key}="{elem.get(key)}">'
    return f'<{elem.tag}>'


def _convert(elem: ET.Element, name: str, raw: str, convert: Callable[[str], Any]) -> Any:
    try:
        return convert(raw)
    except ValueError as exc:
        raise MalformedDocumentError(
            f"Attribute '{name}' of {describe(elem)} has invalid value {raw!r}"
        ) from exc


def required(elem: ET.Element, name: str, convert: Callable[[str], Any] = str) -> Any:
    """
    Read a mandatory attribute.

    Raises:
    -------
    MalformedDocumentError : attribute absent or not convertible
    """
    raw = elem.get(name)
    if raw is None:
        raise MalformedDocumentError(
            f"Missing required attribute '{name}' on {describe(elem)}"
        )
    return _convert(elem, name, raw, convert)


def optional(elem: ET.Element, name: str, convert: Callable[[str], Any] = str,
             default: Any = None) -> Any:
    """Read an attribute that may be absent; a present value must convert."""
    raw = elem.get(name)
    if raw is None:
        return default
    return _convert(elem, name, raw, convert)


def lenient(elem: ET.Element, name: str, convert: Callable[[str], Any],
            default: Any) -> Any:
    """Read an attribute, falling back to default when absent or unparsable."""
    raw = elem.get(name)
    if raw is None:
        return default
    try:
        return convert(raw)
    except ValueError:
        return default


def require_child(elem: ET.Element, path: str) -> ET.Element:
    """Return the first child matching path or fail the parse."""
    found: Optional[ET.Element] = elem.find(path)
    if found is None:
        raise MalformedDocumentError(
            f"Missing required element <{path}> in {describe(elem)}"
        )
    return found


def inner_text(elem: ET.Element) -> str:
    """All text content below elem, concatenated (like DOM innerText)."""
    return ''.join(elem.itertext())

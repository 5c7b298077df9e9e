"""
Custom properties attached to maps, layers, tilesets, tiles and objects.
"""

import xml.etree.ElementTree as ET
from dataclasses import dataclass
from typing import Any, Iterable, Optional, Tuple

from .xml_nodes import inner_text, required


@dataclass(frozen=True)
class Property:
    """
    Custom property attached to any TMX element.

    Tiled allows adding custom properties to maps, layers, tiles, objects, etc.
    The value is kept exactly as written in the document; 'type' is the type
    name Tiled declared for it (None when the attribute is absent, which Tiled
    treats as string).

    ==========================================================================
    XML FORMAT
    ==========================================================================

        <property name="solid" type="bool" value="true"/>
        <property name="health" type="int" value="100"/>
        <property name="description">A wooden
        door</property>                      (multi-line: value is the text)

    ==========================================================================
    USE CASES
    ==========================================================================

    On tiles:
        solid=true         → Mark tiles as collision
        damage=10          → Damage dealt by hazard tiles

    On objects:
        spawn_type="enemy" → What to spawn here
        dialogue_id=42     → NPC dialogue reference

    ==========================================================================
    """
    name: str                        # Property name (key)
    type: Optional[str] = None       # Declared type, not enforced
    value: str = ""                  # Raw value as written

    def converted(self) -> Any:
        """
        Convert the raw string value according to the declared type.

        int/object → int, float → float, bool → True/False,
        anything else (string, color, file, class...) → raw string.

        Raises:
        -------
        ValueError : value does not match its declared numeric type
        """
        if self.type in ('int', 'object'):
            return int(self.value)
        elif self.type == 'float':
            return float(self.value)
        elif self.type == 'bool':
            # XML stores as "true"/"false" strings
            return self.value.lower() == 'true'
        return self.value


def parse_property(elem: ET.Element) -> Property:
    """Parse a single <property> element; 'name' is mandatory."""
    value = elem.get('value')
    if value is None:
        value = inner_text(elem)
    return Property(name=required(elem, 'name'), type=elem.get('type'), value=value)


def parse_properties(elems: Iterable[ET.Element]) -> Tuple[Property, ...]:
    """Parse <property> elements, keeping document order."""
    return tuple(parse_property(elem) for elem in elems)


def find_property(properties: Iterable[Property], name: str) -> Optional[Property]:
    """First property called name, or None."""
    for prop in properties:
        if prop.name == name:
            return prop
    return None

"""
Objects placed in object layers (and collision shapes inside tiles).
"""

import xml.etree.ElementTree as ET
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Optional, Tuple

from .gid import decode_gid
from .properties import Property, parse_properties
from .xml_nodes import lenient, optional, required


class ObjectShape(Enum):
    RECTANGLE = 'rectangle'
    POINT = 'point'
    ELLIPSE = 'ellipse'


@dataclass(frozen=True)
class MapObject:
    """
    Object in an object layer.

    Objects are vector shapes placed on the map, used for:
    - Collision shapes (rectangles, ellipses)
    - Spawn points (position only)
    - Trigger areas
    - Entity placement (tile objects)

    ==========================================================================
    OBJECT TYPES
    ==========================================================================

    Rectangle (default):
        x, y, width, height define the bounds

    Point:
        <object id="3" x="10" y="20"><point/></object>
        Just x, y (width and height are 0)

    Ellipse:
        <object id="4" x="0" y="0" width="16" height="8"><ellipse/></object>
        Ellipse inscribed in the x, y, width, height box

    Tile object:
        Has a gid - displays a tile graphic at this position. The gid may
        carry flip bits like layer cells; they are split off into
        flip_flags and gid holds the clean value (0 = no tile).

    ==========================================================================
    """
    id: int                                          # Unique object ID
    x: float                                         # X position (pixels)
    y: float                                         # Y position (pixels)
    name: Optional[str] = None                       # Object name
    type: Optional[str] = None                       # Object type/class
    width: float = 0                                 # Width (0 for points)
    height: float = 0                                # Height (0 for points)
    rotation: int = 0                                # Rotation in degrees
    gid: int = 0                                     # Tile GID (0 = none)
    flip_flags: int = 0                              # Flip bits of the gid
    shape: ObjectShape = ObjectShape.RECTANGLE
    properties: Tuple[Property, ...] = ()


def _shape_of(elem: ET.Element) -> ObjectShape:
    if elem.find('ellipse') is not None:
        return ObjectShape.ELLIPSE
    if elem.find('point') is not None:
        return ObjectShape.POINT
    return ObjectShape.RECTANGLE


def parse_object(elem: ET.Element) -> MapObject:
    """
    Parse an <object> element.

    id, x and y are mandatory. width/height fall back to 0 and gid to
    "no tile" when absent or unparsable; rotation must be an integer when
    present.
    """
    gid, flip_flags = lenient(elem, 'gid', lambda raw: decode_gid(int(raw)), (0, 0))

    return MapObject(
        id=required(elem, 'id', int),
        x=required(elem, 'x', float),
        y=required(elem, 'y', float),
        name=elem.get('name'),
        # Tiled 1.9 renamed 'type' to 'class'
        type=elem.get('type', elem.get('class')),
        width=lenient(elem, 'width', float, 0.0),
        height=lenient(elem, 'height', float, 0.0),
        rotation=optional(elem, 'rotation', int, 0),
        gid=gid,
        flip_flags=flip_flags,
        shape=_shape_of(elem),
        properties=parse_properties(elem.findall('properties/property')),
    )


def parse_objects(elems: Iterable[ET.Element]) -> Tuple[MapObject, ...]:
    return tuple(parse_object(elem) for elem in elems)

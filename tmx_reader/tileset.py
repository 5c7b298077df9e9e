"""
TSX tileset documents

=============================================================================
TILESET STRUCTURE
=============================================================================

A TSX file describes one reusable tileset: a single atlas image cut into a
grid of equally sized tiles, plus optional metadata for individual tiles.

    <tileset version="1.2" tiledversion="1.3.1" name="terrain"
             tilewidth="32" tileheight="32" tilecount="64" columns="8">
        <image source="terrain.png" width="256" height="256"/>
        <terraintypes>
            <terrain name="Grass" tile="0"/>
        </terraintypes>
        <tile id="4" terrain="0,0,,0" type="water">
            <animation>
                <frame tileid="4" duration="100"/>
                <frame tileid="5" duration="100"/>
            </animation>
            <objectgroup>
                <object id="1" x="0" y="16" width="32" height="16"/>
            </objectgroup>
        </tile>
    </tileset>

Only tiles carrying metadata (properties, terrain, animation, collision
shapes, an own image) get a <tile> element, so Tileset.tiles is sparse.
Tile ids are LOCAL to the tileset (0-based); the map decides the GID of
tile 0 through the firstgid of its reference.

=============================================================================
"""

import xml.etree.ElementTree as ET
from dataclasses import dataclass
from datetime import timedelta
from enum import Enum
from pathlib import Path
from typing import Optional, Tuple, Union

from .documents import TILESET_EXTENSION, parse_document, read_document
from .errors import MalformedDocumentError
from .logging_config import get_logger
from .objects import MapObject, parse_objects
from .properties import Property, parse_properties
from .xml_nodes import describe, optional, required

logger = get_logger('tileset')

# Terrain slot without a terrain (empty token in the terrain attribute)
NO_TERRAIN = -1
TERRAIN_CORNERS = 4


class ObjectAlignment(Enum):
    TOP_LEFT = 'topleft'
    TOP = 'top'
    TOP_RIGHT = 'topright'
    CENTER = 'center'
    CENTER_LEFT = 'centerleft'
    CENTER_RIGHT = 'centerright'
    BOTTOM = 'bottom'
    BOTTOM_LEFT = 'bottomleft'
    BOTTOM_RIGHT = 'bottomright'
    UNSPECIFIED = 'unspecified'


# Tiled writes "left"/"right" for the middle anchors
_ALIGNMENT_ALIASES = {
    'left': ObjectAlignment.CENTER_LEFT,
    'right': ObjectAlignment.CENTER_RIGHT,
}


def to_object_alignment(value: Optional[str]) -> ObjectAlignment:
    """Case-insensitive lookup; unknown or missing values are UNSPECIFIED."""
    if value is None:
        return ObjectAlignment.UNSPECIFIED
    key = value.lower()
    if key in _ALIGNMENT_ALIASES:
        return _ALIGNMENT_ALIASES[key]
    try:
        return ObjectAlignment(key)
    except ValueError:
        return ObjectAlignment.UNSPECIFIED


@dataclass(frozen=True)
class TileImage:
    """
    Image reference (tileset atlas or a single tile's own image).

    source: Path to image file (relative to the TSX file)
    width:  Image width in pixels
    height: Image height in pixels
    """
    source: str
    width: int
    height: int


@dataclass(frozen=True)
class AnimationFrame:
    tile_id: int                                     # Local tile ID shown
    duration: timedelta                              # How long it is shown


@dataclass(frozen=True)
class Terrain:
    name: str
    tile: int                                        # Representative tile ID


@dataclass(frozen=True)
class Tile:
    """
    Metadata for one tile of a tileset.

    terrain holds the terrain index of each corner (top-left, top-right,
    bottom-left, bottom-right), NO_TERRAIN (-1) where the corner has none,
    or is None when the tile declares no terrain at all.
    """
    id: int                                          # Local tile ID
    terrain: Optional[Tuple[int, int, int, int]] = None
    animation: Tuple[AnimationFrame, ...] = ()
    objects: Tuple[MapObject, ...] = ()              # Collision shapes
    type: Optional[str] = None
    properties: Tuple[Property, ...] = ()
    image: Optional[TileImage] = None                # Per-tile image


@dataclass(frozen=True)
class Tileset:
    """
    Tileset collection - a set of tile graphics cut from one atlas image.

    ==========================================================================
    SPACING AND MARGIN
    ==========================================================================

    margin = pixels around the EDGE of the entire image
    spacing = pixels BETWEEN tiles

    Both are recorded but lookup.get_source_rect does not apply them.

    ==========================================================================
    """
    tiled_version: str                               # Tiled editor version
    name: Optional[str]                              # Tileset name
    tile_width: int                                  # Tile width in pixels
    tile_height: int                                 # Tile height in pixels
    tile_count: int                                  # Total number of tiles
    columns: int                                     # Tiles per row
    object_alignment: ObjectAlignment = ObjectAlignment.UNSPECIFIED
    image: Optional[TileImage] = None                # Atlas image
    spacing: int = 0                                 # Pixels between tiles
    margin: int = 0                                  # Pixels around edge
    tiles: Tuple[Tile, ...] = ()                     # Sparse tile metadata
    terrains: Tuple[Terrain, ...] = ()
    properties: Tuple[Property, ...] = ()

    @property
    def image_width(self) -> int:
        return self.image.width if self.image else 0

    @property
    def image_height(self) -> int:
        return self.image.height if self.image else 0

    def get_tile(self, tile_id: int) -> Optional[Tile]:
        """Metadata for a local tile ID, or None if it has none."""
        for tile in self.tiles:
            if tile.id == tile_id:
                return tile
        return None


# =============================================================================
# PARSING
# =============================================================================

def parse_image(elem: ET.Element) -> TileImage:
    return TileImage(
        source=required(elem, 'source'),
        width=required(elem, 'width', int),
        height=required(elem, 'height', int),
    )


def parse_terrain_corners(elem: ET.Element, value: str) -> Tuple[int, int, int, int]:
    """
    Parse terrain="0,0,,1" into four corner slots.

    Tiled leaves a token empty when that corner has no terrain; those
    become NO_TERRAIN.
    """
    tokens = value.split(',')
    if len(tokens) != TERRAIN_CORNERS:
        raise MalformedDocumentError(
            f"Attribute 'terrain' of {describe(elem)} must have {TERRAIN_CORNERS} "
            f"comma-separated slots, got {value!r}"
        )

    corners = []
    for token in tokens:
        token = token.strip()
        if not token:
            corners.append(NO_TERRAIN)
            continue
        try:
            corners.append(int(token))
        except ValueError as exc:
            raise MalformedDocumentError(
                f"Attribute 'terrain' of {describe(elem)} has invalid value {value!r}"
            ) from exc
    return tuple(corners)


def parse_animation(elems) -> Tuple[AnimationFrame, ...]:
    return tuple(
        AnimationFrame(
            tile_id=required(frame, 'tileid', int),
            duration=timedelta(milliseconds=required(frame, 'duration', int)),
        )
        for frame in elems
    )


def parse_tile(elem: ET.Element) -> Tile:
    terrain = elem.get('terrain')
    img_elem = elem.find('image')

    return Tile(
        id=required(elem, 'id', int),
        terrain=parse_terrain_corners(elem, terrain) if terrain is not None else None,
        animation=parse_animation(elem.findall('animation/frame')),
        # Collision shapes are local to the tile, their gid is never resolved
        objects=parse_objects(elem.findall('objectgroup/object')),
        type=elem.get('type', elem.get('class')),
        properties=parse_properties(elem.findall('properties/property')),
        image=parse_image(img_elem) if img_elem is not None else None,
    )


def parse_terrain(elem: ET.Element) -> Terrain:
    return Terrain(name=required(elem, 'name'), tile=required(elem, 'tile', int))


def _build_tileset(root: ET.Element) -> Tileset:
    img_elem = root.find('image')

    tileset = Tileset(
        tiled_version=required(root, 'tiledversion'),
        name=root.get('name'),
        object_alignment=to_object_alignment(root.get('objectalignment')),
        tile_width=required(root, 'tilewidth', int),
        tile_height=required(root, 'tileheight', int),
        tile_count=required(root, 'tilecount', int),
        columns=required(root, 'columns', int),
        margin=optional(root, 'margin', int, 0),
        spacing=optional(root, 'spacing', int, 0),
        image=parse_image(img_elem) if img_elem is not None else None,
        tiles=tuple(parse_tile(tile_elem) for tile_elem in root.findall('tile')),
        terrains=tuple(parse_terrain(t) for t in root.findall('terraintypes/terrain')),
        properties=parse_properties(root.findall('properties/property')),
    )

    logger.debug(
        f"Parsed tileset '{tileset.name}': {tileset.tile_count} tiles, "
        f"{len(tileset.tiles)} with metadata, {len(tileset.terrains)} terrains"
    )
    return tileset


def parse_tileset(text: Union[str, bytes], document: Optional[str] = None) -> Tileset:
    """
    Parse the content of a TSX file.

    Parameters:
    -----------
    text : str or bytes
        TSX document content
    document : str, optional
        Label for error messages (e.g. the file path)

    Raises:
    -------
    MalformedDocumentError : broken XML, missing/invalid required attribute
    """
    return parse_document(text, 'tileset', _build_tileset, document)


def load_tileset(filepath: Union[str, Path]) -> Tileset:
    """
    Load a TSX file from disk.

    Raises:
    -------
    UnsupportedFormatError : file is not a .tsx file
    FileNotFoundError : file doesn't exist
    MalformedDocumentError : content is not a valid tileset
    """
    text = read_document(filepath, TILESET_EXTENSION)
    return parse_tileset(text, str(filepath))

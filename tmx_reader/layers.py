"""
Tile layers and object groups

=============================================================================
LAYER KINDS
=============================================================================

A map holds two kinds of layers:

- TileLayer: a dense width×height grid of cells. Each cell is a clean GID
  (0 = empty) plus a flag byte recording how the tile was flipped.
- ObjectGroup: free-form positioned objects (rectangles, points, ellipses,
  tile objects).

A layer is exactly one of the two: tile layers have cells and flip flags
but no objects, object groups have objects but no cells.

=============================================================================
CELL STORAGE
=============================================================================

cells is a tuple of clean GIDs and flip_flags a bytes object of the same
length, so a parsed layer cannot be changed in place. Index calculation is
row-major:

    index = column + row * width

=============================================================================
"""

import xml.etree.ElementTree as ET
from dataclasses import dataclass
from enum import Enum
from typing import ClassVar, Optional, Tuple

import numpy as np

from .errors import MalformedDocumentError, UnsupportedEncodingError
from .gid import (
    EMPTY_GID, FLIP_DIAGONAL, FLIP_HORIZONTAL, FLIP_VERTICAL,
    decode_csv, has_flag,
)
from .objects import MapObject, parse_objects
from .properties import Property, parse_properties
from .xml_nodes import describe, inner_text, require_child, required


class LayerType(Enum):
    TILE_LAYER = 'tilelayer'
    OBJECT_GROUP = 'objectgroup'


@dataclass(frozen=True)
class TileLayer:
    """
    Tile layer - a grid of tile references.

    ==========================================================================
    TILE ACCESS
    ==========================================================================

        gid = layer.get_gid(5, 10)                   # column 5, row 10
        layer.is_flipped_horizontally(5, 10)         # by column/row
        layer.is_flipped_horizontally(325)           # by cell index

    GID 0 = empty (no tile)
    GID > 0 = reference to tileset tile (see lookup.get_tileset_reference)

    ==========================================================================
    """
    id: int                                          # Unique layer ID
    name: str                                        # Layer name
    width: int                                       # Width in tiles
    height: int                                      # Height in tiles
    visible: bool                                    # visible="1" in the file
    cells: Tuple[int, ...]                           # Clean GIDs, row-major
    flip_flags: bytes                                # Flag byte per cell
    properties: Tuple[Property, ...] = ()

    type: ClassVar[LayerType] = LayerType.TILE_LAYER

    def cell_index(self, column: int, row: Optional[int] = None) -> int:
        """Linear cell index; with row=None, column already is the index."""
        if row is None:
            return column
        return column + row * self.width

    def get_gid(self, x: int, y: int) -> int:
        """
        Get the clean GID of the tile at position (x, y).

        Returns:
        --------
        int : Global tile ID (0 = empty or out of bounds)
        """
        if 0 <= x < self.width and 0 <= y < self.height:
            return self.cells[self.cell_index(x, y)]
        return EMPTY_GID

    def get_flags(self, column: int, row: Optional[int] = None) -> int:
        index = self.cell_index(column, row)
        # Negative indexes would otherwise wrap around to the last cells
        if not 0 <= index < len(self.flip_flags):
            raise IndexError(f"Cell {index} is outside layer '{self.name}'")
        return self.flip_flags[index]

    def is_flipped_horizontally(self, column: int, row: Optional[int] = None) -> bool:
        return has_flag(self.get_flags(column, row), FLIP_HORIZONTAL)

    def is_flipped_vertically(self, column: int, row: Optional[int] = None) -> bool:
        return has_flag(self.get_flags(column, row), FLIP_VERTICAL)

    def is_flipped_diagonally(self, column: int, row: Optional[int] = None) -> bool:
        return has_flag(self.get_flags(column, row), FLIP_DIAGONAL)

    def cell_grid(self) -> np.ndarray:
        """GIDs as a (height, width) uint32 array, grid[row, column]."""
        return np.array(self.cells, dtype=np.uint32).reshape(self.height, self.width)

    def flip_grid(self) -> np.ndarray:
        """Flag bytes as a (height, width) uint8 array."""
        return np.frombuffer(self.flip_flags, dtype=np.uint8).reshape(self.height, self.width)


@dataclass(frozen=True)
class ObjectGroup:
    """
    Object layer - contains vector objects.

    Objects are stored in document order (order may matter for some games).
    Object groups always report visible=True and take their width/height
    from the map.
    """
    id: int                                          # Unique layer ID
    name: str                                        # Layer name
    width: int                                       # Map width in tiles
    height: int                                      # Map height in tiles
    objects: Tuple[MapObject, ...] = ()
    properties: Tuple[Property, ...] = ()
    visible: bool = True

    type: ClassVar[LayerType] = LayerType.OBJECT_GROUP


def parse_tile_layer(elem: ET.Element) -> TileLayer:
    """
    Parse a <layer> element.

    Only <data encoding="csv"> is understood; base64 (with or without
    compression) and the old one-<tile>-per-cell XML form raise
    UnsupportedEncodingError before any cell is decoded.
    """
    layer_id = required(elem, 'id', int)
    name = required(elem, 'name')
    width = required(elem, 'width', int)
    height = required(elem, 'height', int)

    data_elem = require_child(elem, 'data')
    encoding = data_elem.get('encoding')
    compression = data_elem.get('compression')

    if encoding != 'csv' or compression:
        described = encoding or 'xml'
        if compression:
            described += f'+{compression}'
        raise UnsupportedEncodingError(
            f"Layer '{name}': unsupported encoding '{described}', only csv is supported"
        )

    try:
        cells, flip_flags = decode_csv(inner_text(data_elem))
    except ValueError as exc:
        raise MalformedDocumentError(f"Invalid cell data in {describe(elem)}: {exc}") from exc

    if len(cells) != width * height:
        raise MalformedDocumentError(
            f"{describe(elem)} has {len(cells)} cells, expected {width}x{height}"
        )

    return TileLayer(
        id=layer_id,
        name=name,
        width=width,
        height=height,
        # Only an explicit "1" counts as visible
        visible=elem.get('visible') == '1',
        cells=cells,
        flip_flags=flip_flags,
        properties=parse_properties(elem.findall('properties/property')),
    )


def parse_object_group(elem: ET.Element, width: int, height: int) -> ObjectGroup:
    """Parse an <objectgroup> element; its visible attribute is not read."""
    return ObjectGroup(
        id=required(elem, 'id', int),
        name=required(elem, 'name'),
        width=width,
        height=height,
        objects=parse_objects(elem.findall('object')),
        properties=parse_properties(elem.findall('properties/property')),
    )

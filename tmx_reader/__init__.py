"""
TMX Reader - loads Tiled maps (TMX) and tilesets (TSX)

Parses both XML dialects into immutable records, decodes flip flags out of
tile cells, finds the tileset owning a GID and computes where a tile sits in
its atlas image.
"""

from .errors import (
    TiledError, UnsupportedFormatError, MalformedDocumentError,
    UnsupportedEncodingError,
)
from .gid import (
    FLIP_HORIZONTAL, FLIP_VERTICAL, FLIP_DIAGONAL,
    decode_gid, encode_gid, decode_csv,
)
from .properties import Property, find_property
from .objects import MapObject, ObjectShape
from .layers import LayerType, TileLayer, ObjectGroup
from .tileset import (
    Tileset, Tile, TileImage, Terrain, AnimationFrame, ObjectAlignment,
    parse_tileset, load_tileset,
)
from .tiled_map import TiledMap, TilesetReference, parse_map, load_map, load_tilesets
from .lookup import (
    SourceRect, get_tileset_reference, get_source_rect, get_tile,
    is_flipped_horizontally, is_flipped_vertically, is_flipped_diagonally,
)

__version__ = "0.1.0"
__all__ = [
    "TiledError",
    "UnsupportedFormatError",
    "MalformedDocumentError",
    "UnsupportedEncodingError",
    "FLIP_HORIZONTAL",
    "FLIP_VERTICAL",
    "FLIP_DIAGONAL",
    "decode_gid",
    "encode_gid",
    "decode_csv",
    "Property",
    "find_property",
    "MapObject",
    "ObjectShape",
    "LayerType",
    "TileLayer",
    "ObjectGroup",
    "Tileset",
    "Tile",
    "TileImage",
    "Terrain",
    "AnimationFrame",
    "ObjectAlignment",
    "parse_tileset",
    "load_tileset",
    "TiledMap",
    "TilesetReference",
    "parse_map",
    "load_map",
    "load_tilesets",
    "SourceRect",
    "get_tileset_reference",
    "get_source_rect",
    "get_tile",
    "is_flipped_horizontally",
    "is_flipped_vertically",
    "is_flipped_diagonally",
]

"""
TMX map documents

=============================================================================
TMX FILE STRUCTURE
=============================================================================

    <map version="1.2" tiledversion="1.3.1" orientation="orthogonal"
         renderorder="right-down" width="100" height="100"
         tilewidth="32" tileheight="32">

        <properties>
            <property name="music" value="forest.ogg"/>
        </properties>

        <tileset firstgid="1" source="terrain.tsx"/>
        <tileset firstgid="65" source="props.tsx"/>

        <layer id="1" name="Ground" width="100" height="100" visible="1">
            <data encoding="csv">
                1,2,3,4,5,...
            </data>
        </layer>

        <objectgroup id="2" name="Collisions">
            <object id="1" x="100" y="200" width="32" height="32"/>
        </objectgroup>
    </map>

Tilesets are always external: the map only records where each TSX lives
and which GID its tile 0 gets (firstgid). load_tilesets() reads them.

=============================================================================
LAYER ORDER
=============================================================================

TiledMap.layers lists every tile layer first (document order), followed by
every object group (document order), whatever the interleaving in the file.

=============================================================================
"""

import xml.etree.ElementTree as ET
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Iterable, Optional, Tuple, Union

from .documents import MAP_EXTENSION, parse_document, read_document
from .layers import ObjectGroup, TileLayer, parse_object_group, parse_tile_layer
from .logging_config import get_logger
from .lookup import get_tileset_reference
from .properties import Property, parse_properties
from .tileset import Tileset, load_tileset
from .xml_nodes import required

logger = get_logger('tiled_map')

Layer = Union[TileLayer, ObjectGroup]


@dataclass(frozen=True)
class TilesetReference:
    """
    A <tileset firstgid="..." source="..."/> entry of a map.

    Example:
        Tileset A (firstgid=1):   tiles 1-64
        Tileset B (firstgid=65):  tiles 65-...

        GID 70 → tileset B, local tile 70 - 65 = 5
    """
    firstgid: int                                    # GID of local tile 0
    source: Optional[str] = None                     # TSX path, relative to the map


@dataclass(frozen=True)
class TiledMap:
    """
    Complete Tiled map - the root object for TMX files.

    ==========================================================================
    USAGE
    ==========================================================================

    Loading:
        tmx_map = load_map("level1.tmx")
        tilesets = tmx_map.load_tilesets("level1.tmx")

    Drawing a cell:
        layer = tmx_map.get_layer_by_name("Ground")
        gid = layer.get_gid(5, 10)
        if gid:
            ref = tmx_map.get_tileset_reference(gid)
            rect = get_source_rect(ref, tilesets[ref.firstgid], gid)

    ==========================================================================
    """
    tiled_version: str                               # Tiled editor version
    orientation: str                                 # Map orientation
    render_order: str                                # Render order
    width: int                                       # Map width in tiles
    height: int                                      # Map height in tiles
    tile_width: int                                  # Tile width in pixels
    tile_height: int                                 # Tile height in pixels
    properties: Tuple[Property, ...] = ()
    tilesets: Tuple[TilesetReference, ...] = ()      # Ascending firstgid
    layers: Tuple[Layer, ...] = ()

    @property
    def tile_layers(self) -> Tuple[TileLayer, ...]:
        return tuple(layer for layer in self.layers if isinstance(layer, TileLayer))

    @property
    def object_groups(self) -> Tuple[ObjectGroup, ...]:
        return tuple(layer for layer in self.layers if isinstance(layer, ObjectGroup))

    def get_layer_by_name(self, name: str) -> Optional[Layer]:
        for layer in self.layers:
            if layer.name == name:
                return layer
        return None

    def get_tileset_reference(self, gid: int) -> Optional[TilesetReference]:
        """Tileset reference owning gid (see lookup.get_tileset_reference)."""
        return get_tileset_reference(gid, self.tilesets)

    def load_tilesets(self, base_dir: Union[str, Path]) -> Dict[int, Tileset]:
        """Load this map's external tilesets (see load_tilesets)."""
        return load_tilesets(base_dir, self.tilesets)


# =============================================================================
# PARSING
# =============================================================================

def parse_tileset_reference(elem: ET.Element) -> TilesetReference:
    return TilesetReference(
        firstgid=required(elem, 'firstgid', int),
        source=required(elem, 'source'),
    )


def _build_map(root: ET.Element) -> TiledMap:
    width = required(root, 'width', int)
    height = required(root, 'height', int)

    # Tile layers first, then object groups, each in document order
    layers = [parse_tile_layer(elem) for elem in root.findall('layer')]
    layers.extend(parse_object_group(elem, width, height)
                  for elem in root.findall('objectgroup'))

    tmx_map = TiledMap(
        tiled_version=required(root, 'tiledversion'),
        orientation=required(root, 'orientation'),
        render_order=required(root, 'renderorder'),
        width=width,
        height=height,
        tile_width=required(root, 'tilewidth', int),
        tile_height=required(root, 'tileheight', int),
        properties=parse_properties(root.findall('properties/property')),
        tilesets=tuple(parse_tileset_reference(elem) for elem in root.findall('tileset')),
        layers=tuple(layers),
    )

    logger.debug(
        f"Parsed map {tmx_map.width}x{tmx_map.height}: "
        f"{len(tmx_map.tilesets)} tilesets, {len(tmx_map.layers)} layers"
    )
    return tmx_map


def parse_map(text: Union[str, bytes], document: Optional[str] = None) -> TiledMap:
    """
    Parse the content of a TMX file.

    Parameters:
    -----------
    text : str or bytes
        TMX document content
    document : str, optional
        Label for error messages (e.g. the file path)

    Raises:
    -------
    MalformedDocumentError : broken XML, missing/invalid required attribute
    UnsupportedEncodingError : a layer's data is not CSV
    """
    return parse_document(text, 'map', _build_map, document)


def load_map(filepath: Union[str, Path]) -> TiledMap:
    """
    Load a TMX file from disk.

    Raises:
    -------
    UnsupportedFormatError : file is not a .tmx file
    FileNotFoundError : file doesn't exist
    MalformedDocumentError, UnsupportedEncodingError : see parse_map
    """
    text = read_document(filepath, MAP_EXTENSION)
    return parse_map(text, str(filepath))


def load_tilesets(base_dir: Union[str, Path],
                  references: Iterable[TilesetReference]) -> Dict[int, Tileset]:
    """
    Load the external tilesets referenced by a map.

    Parameters:
    -----------
    base_dir : str or Path
        Directory the TSX paths are relative to. Passing the map file itself
        is allowed; its directory is used.
    references : iterable of TilesetReference
        Usually TiledMap.tilesets

    Returns:
    --------
    Dict[int, Tileset] : loaded tilesets keyed by firstgid. References whose
    file does not exist are skipped (with a warning); a file that exists but
    fails to parse raises.
    """
    base_dir = Path(base_dir)
    if base_dir.is_file():
        base_dir = base_dir.parent

    tilesets: Dict[int, Tileset] = {}
    for reference in references:
        if not reference.source:
            continue

        tsx_path = base_dir / reference.source
        if not tsx_path.is_file():
            logger.warning(f"External tileset not found: {tsx_path}")
            continue

        tilesets[reference.firstgid] = load_tileset(tsx_path)

    return tilesets

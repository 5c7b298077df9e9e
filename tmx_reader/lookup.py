"""
GID resolution, atlas geometry and flip queries

=============================================================================
FROM A CELL TO PIXELS
=============================================================================

Drawing a cell takes three steps:

    gid ──[get_tileset_reference]──> TilesetReference (firstgid, source)
        ──[caller: tilesets[ref.firstgid]]──> Tileset
        ──[get_source_rect]──> SourceRect inside the atlas image

GID 0 means "empty cell"; callers skip it before resolving.

=============================================================================
ATLAS LAYOUT
=============================================================================

Tiles are numbered row by row across the atlas image:

   +---+---+---+---+---+---+---+---+
   | 0 | 1 | 2 | 3 | 4 | 5 | 6 | 7 |   <- Row 0: tiles 0-7
   +---+---+---+---+---+---+---+---+
   | 8 | 9 |10 |11 |12 |13 |14 |15 |   <- Row 1: tiles 8-15
   +---+---+---+---+---+---+---+---+

The number of columns is image_width // tile_width. Margin and spacing are
NOT taken into account, so atlases with gaps between tiles come out shifted.

=============================================================================
"""

from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional, Sequence, Union

from .layers import ObjectGroup, TileLayer

if TYPE_CHECKING:
    from .tiled_map import TilesetReference
    from .tileset import Tile, Tileset


@dataclass(frozen=True)
class SourceRect:
    """Rectangle of a tile inside its atlas image, in pixels."""
    x: int
    y: int
    width: int
    height: int


def get_tileset_reference(gid: int,
                          references: Sequence['TilesetReference']) -> Optional['TilesetReference']:
    """
    Find the tileset reference owning a GID.

    Parameters:
    -----------
    gid : int
        Clean global tile ID (not 0)
    references : sequence of TilesetReference
        Ascending by firstgid, as Tiled writes them (not re-sorted here)

    Returns:
    --------
    TilesetReference or None : None only when references is empty

    =======================================================================
    ALGORITHM
    =======================================================================

    Reference i owns [firstgid[i], firstgid[i+1]). The last reference owns
    everything from its firstgid up, with no upper bound, and is also the
    answer when no range matched at all: as long as the map has a tileset,
    every GID resolves to one.

        [(1, A), (10, B), (50, C)]

        GID 9     → A
        GID 10    → B
        GID 10000 → C
    =======================================================================
    """
    last = len(references) - 1
    for i, reference in enumerate(references):
        if i == last:
            return reference
        if reference.firstgid <= gid < references[i + 1].firstgid:
            return reference
    return None


def get_source_rect(reference: 'TilesetReference', tileset: 'Tileset',
                    gid: int) -> Optional[SourceRect]:
    """
    Compute where a tile sits in its tileset's atlas image.

    Parameters:
    -----------
    reference : TilesetReference
        The reference that owns gid
    tileset : Tileset
        The tileset loaded from reference.source
    gid : int
        Clean global tile ID

    Returns:
    --------
    SourceRect or None : None when gid - firstgid is outside 0..tile_count-1
    """
    local_id = gid - reference.firstgid
    if not 0 <= local_id < tileset.tile_count:
        return None

    columns = tileset.image_width // tileset.tile_width if tileset.tile_width else 0
    if columns > 0:
        col, row = local_id % columns, local_id // columns
    else:
        # Narrower than a tile (or no image): everything stays on row 0
        col, row = local_id, 0

    return SourceRect(
        x=col * tileset.tile_width,
        y=row * tileset.tile_height,
        width=tileset.tile_width,
        height=tileset.tile_height,
    )


def get_tile(reference: 'TilesetReference', tileset: 'Tileset',
             gid: int) -> Optional['Tile']:
    """Metadata record (properties, animation...) for a GID, if the tile has any."""
    return tileset.get_tile(gid - reference.firstgid)


# =============================================================================
# FLIP QUERIES
# =============================================================================

def _tile_layer(layer: Union[TileLayer, ObjectGroup]) -> TileLayer:
    if not isinstance(layer, TileLayer):
        raise TypeError(f"Flip flags only exist on tile layers, not {type(layer).__name__}")
    return layer


def is_flipped_horizontally(layer: TileLayer, column: int, row: Optional[int] = None) -> bool:
    """
    Was the cell mirrored horizontally?

    Call with a cell index (row=None) or with column and row, which map to
    index column + row * layer.width.
    """
    return _tile_layer(layer).is_flipped_horizontally(column, row)


def is_flipped_vertically(layer: TileLayer, column: int, row: Optional[int] = None) -> bool:
    return _tile_layer(layer).is_flipped_vertically(column, row)


def is_flipped_diagonally(layer: TileLayer, column: int, row: Optional[int] = None) -> bool:
    return _tile_layer(layer).is_flipped_diagonally(column, row)

"""
Cutting tiles out of a tileset's atlas image (uses PIL).

This only slices images; drawing them is up to the game. Image paths in a
TSX file are relative to the TSX file, so base_dir must be the directory
the tileset was loaded from, not the map's.
"""

from pathlib import Path
from typing import TYPE_CHECKING, Optional, Union

from PIL import Image

from .lookup import SourceRect, get_source_rect

if TYPE_CHECKING:
    from .tiled_map import TilesetReference
    from .tileset import Tileset


def open_atlas(tileset: 'Tileset', base_dir: Union[str, Path]) -> Image.Image:
    """
    Load a tileset's atlas image as RGBA.

    Raises:
    -------
    ValueError : the tileset has no <image>
    FileNotFoundError : image file missing
    """
    if tileset.image is None:
        raise ValueError(f"Tileset '{tileset.name}' has no atlas image")

    image_path = Path(base_dir) / tileset.image.source
    # Ensure RGBA format for transparency
    return Image.open(str(image_path)).convert('RGBA')


def crop_tile(atlas: Image.Image, rect: SourceRect) -> Image.Image:
    # PIL crop() takes (left, top, right, bottom)
    return atlas.crop((rect.x, rect.y, rect.x + rect.width, rect.y + rect.height))


def tile_image(atlas: Image.Image, reference: 'TilesetReference', tileset: 'Tileset',
               gid: int) -> Optional[Image.Image]:
    """Image of one GID cut from atlas, or None if the tileset has no such tile."""
    rect = get_source_rect(reference, tileset, gid)
    if rect is None:
        return None
    return crop_tile(atlas, rect)

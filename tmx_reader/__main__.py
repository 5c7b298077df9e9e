#!/usr/bin/env python3

"""
TMX Reader - print a summary of a Tiled map or tileset

Usage:
    python -m tmx_reader <map.tmx | tileset.tsx> [-v] [-d]
"""

import argparse
import sys
from pathlib import Path

from .documents import TILESET_EXTENSION
from .errors import TiledError
from .layers import LayerType
from .logging_config import setup_logging
from .tiled_map import TiledMap, load_map
from .tileset import Tileset, load_tileset


def print_map(tmx_map: TiledMap):
    print(f"Map: {tmx_map.width}x{tmx_map.height} tiles of "
          f"{tmx_map.tile_width}x{tmx_map.tile_height} px "
          f"({tmx_map.orientation}, {tmx_map.render_order}, Tiled {tmx_map.tiled_version})")

    print(f"Tilesets: {len(tmx_map.tilesets)}")
    for reference in tmx_map.tilesets:
        print(f"  firstgid={reference.firstgid} source={reference.source}")

    print(f"Layers: {len(tmx_map.layers)}")
    for layer in tmx_map.layers:
        if layer.type is LayerType.TILE_LAYER:
            used = sum(1 for gid in layer.cells if gid)
            print(f"  [{layer.id}] {layer.name} (tiles, {used}/{len(layer.cells)} cells used)")
        else:
            print(f"  [{layer.id}] {layer.name} (objects, {len(layer.objects)} objects)")


def print_tileset(tileset: Tileset):
    print(f"Tileset: {tileset.name} (Tiled {tileset.tiled_version})")
    print(f"Tiles: {tileset.tile_count} of {tileset.tile_width}x{tileset.tile_height} px, "
          f"{tileset.columns} columns")
    if tileset.image:
        print(f"Image: {tileset.image.source} ({tileset.image.width}x{tileset.image.height})")
    print(f"Tiles with metadata: {len(tileset.tiles)}")
    print(f"Terrains: {len(tileset.terrains)}")


def main(argv=None):
    parser = argparse.ArgumentParser(
        description="Print a summary of a Tiled map (.tmx) or tileset (.tsx)"
    )
    parser.add_argument("path", help="TMX or TSX file")
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Show detailed progress information"
    )
    parser.add_argument(
        "--debug", "-d",
        action="store_true",
        help="Show debug information (implies verbose)"
    )
    args = parser.parse_args(argv)

    logger = setup_logging(args.verbose, args.debug)
    source_path = Path(args.path)

    try:
        if source_path.suffix.lower() == TILESET_EXTENSION:
            print_tileset(load_tileset(source_path))
        else:
            print_map(load_map(source_path))
    except FileNotFoundError:
        logger.error(f"File '{source_path}' not found")
        return 1
    except TiledError as e:
        logger.error(f"Error: {e}")
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())

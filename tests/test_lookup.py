import pytest

from tmx_reader.lookup import (
    SourceRect, get_source_rect, get_tile, get_tileset_reference,
    is_flipped_diagonally, is_flipped_horizontally, is_flipped_vertically,
)
from tmx_reader.tiled_map import TilesetReference, parse_map
from tmx_reader.tileset import Tileset, TileImage, parse_tileset

A = TilesetReference(1, "a.tsx")
B = TilesetReference(10, "b.tsx")
C = TilesetReference(50, "c.tsx")


def _atlas(image_width=256, tile_width=32, tile_count=40):
    return Tileset(
        tiled_version="1.3.1", name="atlas", tile_width=tile_width, tile_height=32,
        tile_count=tile_count, columns=image_width // tile_width,
        image=TileImage("atlas.png", image_width, 160),
    )


@pytest.mark.parametrize("gid, expected", [
    (1, A), (9, A), (10, B), (49, B), (50, C), (10000, C),
])
def test_get_tileset_reference(gid, expected):
    assert get_tileset_reference(gid, [A, B, C]) == expected


def test_gid_below_first_range_falls_back_to_last_reference():
    assert get_tileset_reference(0, [B, C]) == C


def test_single_reference_owns_everything():
    assert get_tileset_reference(123456, [A]) == A


def test_no_references():
    assert get_tileset_reference(5, []) is None


def test_map_resolves_through_its_references(map_text):
    tmx_map = parse_map(map_text)

    assert tmx_map.get_tileset_reference(40).firstgid == 1
    assert tmx_map.get_tileset_reference(41).firstgid == 41


@pytest.mark.parametrize("local_id, expected", [
    (0, SourceRect(0, 0, 32, 32)),
    (1, SourceRect(32, 0, 32, 32)),
    (7, SourceRect(224, 0, 32, 32)),
    (8, SourceRect(0, 32, 32, 32)),
    (39, SourceRect(224, 128, 32, 32)),
])
def test_get_source_rect(local_id, expected):
    reference = TilesetReference(1, "atlas.tsx")

    assert get_source_rect(reference, _atlas(), reference.firstgid + local_id) == expected


def test_get_source_rect_uses_firstgid():
    assert get_source_rect(C, _atlas(), 58) == SourceRect(0, 32, 32, 32)


@pytest.mark.parametrize("gid", [0, 41, 500])
def test_get_source_rect_outside_tileset(gid):
    assert get_source_rect(TilesetReference(1), _atlas(), gid) is None


def test_get_source_rect_ignores_spacing_and_margin(tileset_text):
    tileset = parse_tileset(tileset_text)

    assert tileset.spacing == 1
    assert get_source_rect(TilesetReference(1), tileset, 10) == SourceRect(32, 32, 32, 32)


def test_get_source_rect_without_image_stays_on_first_row():
    tileset = Tileset(tiled_version="1.3.1", name="none", tile_width=16, tile_height=16,
                      tile_count=10, columns=0)

    assert get_source_rect(TilesetReference(1), tileset, 10) == SourceRect(144, 0, 16, 16)


def test_get_tile(tileset_text):
    tileset = parse_tileset(tileset_text)
    reference = TilesetReference(41, "terrain.tsx")

    assert get_tile(reference, tileset, 45).type == "shore"
    assert get_tile(reference, tileset, 41) is None


def test_flip_queries_by_index_and_position(map_text):
    ground = parse_map(map_text).get_layer_by_name("Ground")
    # flags: [4, 0, 0, 2, 1, 7]

    assert is_flipped_horizontally(ground, 0)
    assert not is_flipped_vertically(ground, 0)
    assert not is_flipped_diagonally(ground, 0)

    assert not is_flipped_horizontally(ground, 1)

    assert is_flipped_vertically(ground, 0, 1)
    assert is_flipped_diagonally(ground, 1, 1)
    assert not is_flipped_horizontally(ground, 1, 1)

    assert is_flipped_horizontally(ground, 2, 1)
    assert is_flipped_vertically(ground, 5)
    assert is_flipped_diagonally(ground, 5)


def test_flip_query_methods_match_functions(map_text):
    ground = parse_map(map_text).get_layer_by_name("Ground")

    for index in range(len(ground.cells)):
        assert ground.is_flipped_horizontally(index) == is_flipped_horizontally(ground, index)
        assert ground.is_flipped_vertically(index) == is_flipped_vertically(ground, index)
        assert ground.is_flipped_diagonally(index) == is_flipped_diagonally(ground, index)


def test_flip_query_on_object_group_is_an_error(map_text):
    spawns = parse_map(map_text).get_layer_by_name("Spawns")

    with pytest.raises(TypeError):
        is_flipped_horizontally(spawns, 0)


def test_flip_query_out_of_range(map_text):
    ground = parse_map(map_text).get_layer_by_name("Ground")

    with pytest.raises(IndexError):
        is_flipped_horizontally(ground, 6)


@pytest.mark.parametrize("position", [(-1,), (-6,), (0, -1), (2, -1)])
def test_flip_query_negative_position_does_not_wrap(map_text, position):
    ground = parse_map(map_text).get_layer_by_name("Ground")

    with pytest.raises(IndexError):
        is_flipped_horizontally(ground, *position)
    with pytest.raises(IndexError):
        ground.is_flipped_diagonally(*position)

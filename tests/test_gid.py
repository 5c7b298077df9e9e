import pytest

from tmx_reader.gid import (
    FLIP_DIAGONAL, FLIP_HORIZONTAL, FLIP_VERTICAL, UINT32_MAX,
    decode_csv, decode_gid, encode_gid, has_flag,
)


def test_flag_byte_positions():
    assert FLIP_HORIZONTAL == 0b100
    assert FLIP_VERTICAL == 0b010
    assert FLIP_DIAGONAL == 0b001


@pytest.mark.parametrize("raw, expected", [
    (0, (0, 0)),
    (5, (5, 0)),
    (0x80000005, (5, 4)),
    (0x40000005, (5, 2)),
    (0x20000005, (5, 1)),
    (0xE0000000, (0, 7)),
    (UINT32_MAX, (0x1FFFFFFF, 7)),
])
def test_decode_gid(raw, expected):
    assert decode_gid(raw) == expected


@pytest.mark.parametrize("raw", [0, 1, 0x1FFFFFFF, 0x20000000, 0x80000001, 0xA0000123, UINT32_MAX])
def test_decode_then_encode_reproduces_value(raw):
    assert encode_gid(*decode_gid(raw)) == raw


@pytest.mark.parametrize("raw", [-1, UINT32_MAX + 1])
def test_decode_gid_rejects_values_outside_uint32(raw):
    with pytest.raises(ValueError):
        decode_gid(raw)


def test_has_flag():
    assert has_flag(0b101, FLIP_HORIZONTAL)
    assert not has_flag(0b101, FLIP_VERTICAL)
    assert has_flag(0b101, FLIP_DIAGONAL)


def test_decode_csv_horizontal_flip_example():
    cells, flags = decode_csv("2147483653,5,0")

    assert cells == (5, 5, 0)
    assert flags == bytes([4, 0, 0])


def test_decode_csv_ignores_newlines_and_trailing_comma():
    cells, flags = decode_csv("\n1,2,\n3,4,\n")

    assert list(cells) == [1, 2, 3, 4]
    assert flags == bytes(4)


@pytest.mark.parametrize("text", [
    "1,x,3", "1,-2", "4294967296", "1_0", "+5", "\u0663", "2,\u00b3",
])
def test_decode_csv_rejects_bad_tokens(text):
    with pytest.raises(ValueError):
        decode_csv(text)


def test_decode_csv_returns_immutable_cells():
    cells, _ = decode_csv("1,2")

    assert isinstance(cells, tuple)
    with pytest.raises(TypeError):
        cells[0] = 999

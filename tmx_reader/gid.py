"""
Decoding of packed tile cells (GIDs with flip flags)

=============================================================================
GIDs AND FLIP FLAGS
=============================================================================

Every cell of a tile layer is stored as an unsigned 32-bit integer. The low
29 bits are the Global tile ID (GID), the top three bits record how the tile
was mirrored when it was placed:

    bit 31  bit 30  bit 29  bits 28..0
    +-----+-------+-------+------------------+
    |  H  |   V   |   D   |       GID        |
    +-----+-------+-------+------------------+

    H = flipped horizontally
    V = flipped vertically
    D = flipped diagonally (anti-diagonal transpose, used for rotations)

Example:
    2147483653 = 0x80000005 → GID 5, flipped horizontally

=============================================================================
FLAG BYTE
=============================================================================

The three flag bits are shifted down by 29 into a single byte so that a
layer can keep one byte per cell next to the clean GIDs:

    0b10100000_00000000_00000000_00000000 >> 29 = 0b00000101

    bit 2 = horizontal (FLIP_HORIZONTAL = 4)
    bit 1 = vertical   (FLIP_VERTICAL   = 2)
    bit 0 = diagonal   (FLIP_DIAGONAL   = 1)

=============================================================================
"""

from typing import Tuple

FLIPPED_HORIZONTALLY_FLAG = 0x80000000
FLIPPED_VERTICALLY_FLAG = 0x40000000
FLIPPED_DIAGONALLY_FLAG = 0x20000000
FLIPPED_FLAGS_MASK = (FLIPPED_HORIZONTALLY_FLAG | FLIPPED_VERTICALLY_FLAG
                      | FLIPPED_DIAGONALLY_FLAG)

# How far the flags are shifted right to fit in a byte
FLIP_FLAG_SHIFT = 29

FLIP_HORIZONTAL = FLIPPED_HORIZONTALLY_FLAG >> FLIP_FLAG_SHIFT
FLIP_VERTICAL = FLIPPED_VERTICALLY_FLAG >> FLIP_FLAG_SHIFT
FLIP_DIAGONAL = FLIPPED_DIAGONALLY_FLAG >> FLIP_FLAG_SHIFT

UINT32_MAX = 0xFFFFFFFF

# GID 0 = empty cell (no tile)
EMPTY_GID = 0


def decode_gid(raw: int) -> Tuple[int, int]:
    """
    Split a raw cell value into (clean GID, flag byte).

    Parameters:
    -----------
    raw : int
        Cell value as read from the document (0 to 2**32 - 1)

    Returns:
    --------
    (int, int) : GID with the flip bits cleared, flag byte (0-7)

    Raises:
    -------
    ValueError : raw is outside the unsigned 32-bit range
    """
    if not 0 <= raw <= UINT32_MAX:
        raise ValueError(f"Cell value {raw} is not an unsigned 32-bit integer")
    return raw & ~FLIPPED_FLAGS_MASK, (raw & FLIPPED_FLAGS_MASK) >> FLIP_FLAG_SHIFT


def encode_gid(gid: int, flags: int) -> int:
    """Inverse of decode_gid: pack a clean GID and a flag byte into a cell."""
    return gid | ((flags & 0b111) << FLIP_FLAG_SHIFT)


def has_flag(flags: int, flag: int) -> bool:
    """Test one of FLIP_HORIZONTAL/FLIP_VERTICAL/FLIP_DIAGONAL in a flag byte."""
    return (flags & flag) > 0


def decode_csv(text: str) -> Tuple[Tuple[int, ...], bytes]:
    """
    Decode the text of a <data encoding="csv"> element.

    Cells come out in document order (row-major: left to right, top to
    bottom). Tiled writes one row per line with a trailing comma, so
    whitespace around tokens is ignored and blank tokens are skipped.

    Returns:
    --------
    (tuple, bytes) : clean GIDs and the parallel flag bytes

    Raises:
    -------
    ValueError : a token is not a plain run of ASCII digits, or is outside
        the unsigned 32-bit range
    """
    gids = []
    flags = bytearray()

    for token in text.split(','):
        token = token.strip()
        if not token:
            continue
        # int() alone would also take "+5", "1_0" and non-ASCII digits
        if not (token.isascii() and token.isdigit()):
            raise ValueError(f"Invalid cell value {token!r}")
        gid, flag = decode_gid(int(token))
        gids.append(gid)
        flags.append(flag)

    return tuple(gids), bytes(flags)

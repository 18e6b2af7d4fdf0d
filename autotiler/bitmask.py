"""Neighbor bitmasks and their reduction to the 47 canonical blob values."""

from __future__ import annotations

# ---------------------------------------------------------------------------
# Constants: 8-bit bitmask neighbor directions
# ---------------------------------------------------------------------------

N = 0x01
NE = 0x02
E = 0x04
SE = 0x08
S = 0x10
SW = 0x20
W = 0x40
NW = 0x80

# 4-bit cardinal code used by the 16-tile scheme
N4 = 0x1
E4 = 0x2
S4 = 0x4
W4 = 0x8

DIRECTION_NAMES: list[tuple[str, int]] = [
    ("N", N),
    ("NE", NE),
    ("E", E),
    ("SE", SE),
    ("S", S),
    ("SW", SW),
    ("W", W),
    ("NW", NW),
]

# diagonal bit -> the two cardinals that must both be present for it to count
DIAGONAL_SUPPORT: dict[int, tuple[int, int]] = {
    NE: (N, E),
    SE: (E, S),
    SW: (S, W),
    NW: (W, N),
}

BLOB_TILE_COUNT = 47


# ---------------------------------------------------------------------------
# Bitmask computation
# ---------------------------------------------------------------------------


def normalize(raw: int) -> int:
    """Zero out diagonal bits when adjacent cardinals are absent."""
    reduced = raw & 0xFF
    for diagonal, (c1, c2) in DIAGONAL_SUPPORT.items():
        if not (raw & c1 and raw & c2):
            reduced &= ~diagonal
    return reduced


def compute_47_bitmasks() -> list[int]:
    """Return the 47 unique canonical bitmask values, sorted ascending."""
    unique = {normalize(raw) for raw in range(256)}
    result = sorted(unique)
    if len(result) != BLOB_TILE_COUNT:
        raise RuntimeError(
            f"Expected {BLOB_TILE_COUNT} unique bitmasks, got {len(result)}"
        )
    return result


CANONICAL_47: tuple[int, ...] = tuple(compute_47_bitmasks())

_INDEX_47: dict[int, int] = {mask: idx for idx, mask in enumerate(CANONICAL_47)}


def index_of_47(raw: int) -> int:
    """Map any raw 8-bit bitmask to its tile slot 0..46."""
    return _INDEX_47[normalize(raw)]


def cardinals_to_4bit(mask: int) -> int:
    """Pack the N/E/S/W bits of an 8-bit mask into bit0=N, bit1=E, bit2=S, bit3=W."""
    code = 0
    if mask & N:
        code |= N4
    if mask & E:
        code |= E4
    if mask & S:
        code |= S4
    if mask & W:
        code |= W4
    return code


def cardinals_to_8bit(code4: int) -> int:
    """Inverse of :func:`cardinals_to_4bit` (no diagonals set)."""
    mask = 0
    if code4 & N4:
        mask |= N
    if code4 & E4:
        mask |= E
    if code4 & S4:
        mask |= S
    if code4 & W4:
        mask |= W
    return mask


def describe_bitmask(mask: int) -> str:
    """Human-readable description of an 8-bit bitmask."""
    names = [name for name, bit in DIRECTION_NAMES if mask & bit]
    return "+".join(names) if names else "isolated"

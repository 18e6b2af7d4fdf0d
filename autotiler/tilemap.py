"""Render a boolean placement grid with the generated tile variants."""

from __future__ import annotations

from PIL import Image

from .atlas import Scheme
from .bitmask import E, N, NE, NW, S, SE, SW, W, cardinals_to_4bit, normalize
from .compositor import TRANSPARENT, SourceSet, compose_tile
from .generate import clamp_tile_size

Grid = list[list[int]]

TEST_PATTERN: Grid = [
    [0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0],
    [0, 1, 1, 1, 0, 0, 1, 0, 0, 1, 1, 0, 0, 0, 0, 0],
    [0, 1, 1, 1, 0, 0, 1, 0, 0, 1, 1, 0, 0, 1, 0, 0],
    [0, 1, 1, 1, 0, 0, 1, 0, 0, 0, 0, 0, 0, 0, 0, 0],
    [0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0],
    [0, 1, 1, 1, 1, 1, 0, 0, 1, 1, 1, 1, 1, 1, 0, 0],
    [0, 1, 1, 1, 1, 1, 0, 0, 1, 1, 1, 1, 1, 1, 0, 0],
    [0, 1, 1, 0, 1, 1, 0, 0, 1, 1, 0, 0, 1, 1, 0, 0],
    [0, 1, 1, 1, 1, 1, 0, 0, 1, 1, 0, 0, 1, 1, 0, 0],
    [0, 1, 1, 1, 1, 1, 0, 0, 1, 1, 1, 1, 1, 1, 0, 0],
    [0, 0, 0, 0, 0, 0, 0, 0, 1, 1, 1, 1, 1, 1, 0, 0],
    [0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0],
    [0, 1, 0, 1, 0, 1, 1, 1, 1, 0, 0, 0, 0, 0, 0, 0],
    [0, 0, 0, 0, 0, 1, 0, 0, 1, 0, 0, 0, 0, 0, 0, 0],
    [0, 0, 0, 0, 0, 1, 1, 1, 1, 0, 0, 0, 0, 0, 0, 0],
    [0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0],
]

# (row offset, col offset, bit)
_NEIGHBORS = [
    (-1, 0, N),
    (-1, 1, NE),
    (0, 1, E),
    (1, 1, SE),
    (1, 0, S),
    (1, -1, SW),
    (0, -1, W),
    (-1, -1, NW),
]


def _cell_filled(grid: Grid, row: int, col: int) -> bool:
    return 0 <= row < len(grid) and 0 <= col < len(grid[row]) and bool(grid[row][col])


def neighbor_code_8(grid: Grid, row: int, col: int) -> int:
    """Normalized 8-bit neighbor code of cell (row, col).  Off-grid is empty."""
    mask = 0
    for dr, dc, bit in _NEIGHBORS:
        if _cell_filled(grid, row + dr, col + dc):
            mask |= bit
    return normalize(mask)


def neighbor_code_4(grid: Grid, row: int, col: int) -> int:
    """4-bit cardinal code of cell (row, col): bit0=N, bit1=E, bit2=S, bit3=W."""
    return cardinals_to_4bit(neighbor_code_8(grid, row, col))


def render_tilemap(
    grid: Grid,
    sources: SourceSet,
    tile_size: int,
    scheme: Scheme | str = Scheme.SIMPLE_16,
) -> Image.Image:
    """Draw every filled cell of *grid* with the tile matching its neighbors."""
    ts = clamp_tile_size(tile_size)
    is_47 = Scheme.parse(scheme) is Scheme.BLOB_47
    rows = len(grid)
    cols = max((len(r) for r in grid), default=0)
    out = Image.new("RGBA", (cols * ts, rows * ts), TRANSPARENT)

    for r, line in enumerate(grid):
        for c, filled in enumerate(line):
            if not filled:
                continue
            mask8 = neighbor_code_8(grid, r, c)
            compose_tile(
                out,
                (c * ts, r * ts),
                ts,
                cardinals_to_4bit(mask8),
                sources,
                bitmask8=mask8 if is_47 else None,
            )

    return out

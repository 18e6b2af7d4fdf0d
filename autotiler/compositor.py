"""Quadrant compositor shared by the 16-tile and 47-tile generators.

Every output tile is split into four quadrants (TL, TR, BL, BR).  Each
quadrant only looks at its two adjacent cardinal neighbors and, for the
47-tile scheme, the diagonal between them:

    TL: N + W (+NW)  ->  vertical edge = top,    horizontal edge = left
    TR: N + E (+NE)  ->  vertical edge = top,    horizontal edge = right
    BL: S + W (+SW)  ->  vertical edge = bottom, horizontal edge = left
    BR: S + E (+SE)  ->  vertical edge = bottom, horizontal edge = right

Source quadrant (row, col) always lands on the same output quadrant, so a
"top" image contributes its top-left quarter to the TL quadrant, its
top-right quarter to the TR quadrant, and so on.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, fields
from typing import NamedTuple

from PIL import Image

from .bitmask import NE, NW, SE, SW, E, N, S, W, cardinals_to_8bit

log = logging.getLogger(__name__)

TRANSPARENT = (0, 0, 0, 0)

# quadrant -> (row, col) inside a tile
QUADRANT_OFFSETS: dict[str, tuple[int, int]] = {
    "TL": (0, 0),
    "TR": (0, 1),
    "BL": (1, 0),
    "BR": (1, 1),
}


class QuadrantRule(NamedTuple):
    """Which neighbors and source slots feed one output quadrant."""

    vertical: int  # N for TL/TR, S for BL/BR
    horizontal: int  # W for TL/BL, E for TR/BR
    diagonal: int  # diagonal between them
    vertical_slot: str
    horizontal_slot: str


QUADRANT_RULES: dict[str, QuadrantRule] = {
    "TL": QuadrantRule(N, W, NW, "top", "left"),
    "TR": QuadrantRule(N, E, NE, "top", "right"),
    "BL": QuadrantRule(S, W, SW, "bottom", "left"),
    "BR": QuadrantRule(S, E, SE, "bottom", "right"),
}


# ---------------------------------------------------------------------------
# Source set
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class SourceSet:
    """The five source slots.  Any of them may be ``None``."""

    main: Image.Image | None = None
    top: Image.Image | None = None
    bottom: Image.Image | None = None
    left: Image.Image | None = None
    right: Image.Image | None = None

    def get(self, slot: str) -> Image.Image | None:
        return getattr(self, slot)

    def present(self) -> dict[str, Image.Image]:
        """Slots that hold an image, in slot order."""
        return {
            f.name: getattr(self, f.name)
            for f in fields(self)
            if getattr(self, f.name) is not None
        }

    def is_empty(self) -> bool:
        return not self.present()


# ---------------------------------------------------------------------------
# Quadrant helpers
# ---------------------------------------------------------------------------


def quadrant_box(
    width: int, height: int, row: int, col: int
) -> tuple[int, int, int, int]:
    """Pixel box of quadrant (row, col) in a ``width`` x ``height`` raster.

    Odd sizes split at ``size // 2``; the right/bottom quadrants get the
    extra pixel.
    """
    half_w, half_h = width // 2, height // 2
    x0, x1 = (0, half_w) if col == 0 else (half_w, width)
    y0, y1 = (0, half_h) if row == 0 else (half_h, height)
    return x0, y0, x1, y1


def extract_quadrant(
    src: Image.Image, row: int, col: int, size: tuple[int, int]
) -> Image.Image:
    """Crop quadrant (row, col) from *src* as RGBA, scaled to *size* if needed."""
    region = src.crop(quadrant_box(src.width, src.height, row, col))
    if region.mode != "RGBA":
        region = region.convert("RGBA")
    if region.size != size:
        region = region.resize(size, Image.Resampling.NEAREST)
    return region


def _weighted(cv: int, av: int, ch: int, ah: int, total: int) -> int:
    # integer round-half-up of (cv*av + ch*ah) / total
    return (cv * av + ch * ah + total // 2) // total


def blend_edges(vert: Image.Image, horiz: Image.Image) -> Image.Image:
    """Blend two same-size RGBA quadrants, keeping only their overlap.

    Where both have non-zero alpha the color is the alpha-weighted average
    and the alpha is the larger of the two.  Everywhere else the result is
    transparent.
    """
    out = Image.new("RGBA", vert.size, TRANSPARENT)
    pv, ph, po = vert.load(), horiz.load(), out.load()
    w, h = vert.size
    for y in range(h):
        for x in range(w):
            rv, gv, bv, av = pv[x, y]
            rh, gh, bh, ah = ph[x, y]
            if av and ah:
                total = av + ah
                po[x, y] = (
                    _weighted(rv, av, rh, ah, total),
                    _weighted(gv, av, gh, ah, total),
                    _weighted(bv, av, bh, ah, total),
                    max(av, ah),
                )
    return out


# ---------------------------------------------------------------------------
# Compositing
# ---------------------------------------------------------------------------


def _quadrant_layers(
    row: int,
    col: int,
    size: tuple[int, int],
    has_vert: bool,
    has_horiz: bool,
    main: Image.Image | None,
    vert: Image.Image | None,
    horiz: Image.Image | None,
    inner_corner: bool,
) -> list[Image.Image]:
    """Return the RGBA layers to draw, bottom first, for one quadrant."""

    def q(src: Image.Image) -> Image.Image:
        return extract_quadrant(src, row, col, size)

    if has_vert and has_horiz:
        layers = [q(main or vert or horiz)]
        if inner_corner:
            if vert is not None and horiz is not None:
                layers.append(blend_edges(q(vert), q(horiz)))
            elif vert is not None:
                layers.append(q(vert))
            elif horiz is not None:
                layers.append(q(horiz))
        return layers

    # Edge / outer corner: main as base, exposed edges on top.
    # Horizontal is drawn last, so it wins over vertical on outer corners.
    layers = []
    if main is not None:
        layers.append(q(main))
    if not has_vert and vert is not None:
        layers.append(q(vert))
    if not has_horiz and horiz is not None:
        layers.append(q(horiz))
    return layers


def compose_tile(
    dest: Image.Image,
    origin: tuple[int, int],
    tile_size: int,
    bitmask4: int,
    sources: SourceSet,
    bitmask8: int | None = None,
) -> None:
    """Draw one tile into the RGBA image *dest* with its top-left at *origin*.

    *bitmask4* holds the cardinal neighbors (bit0=N, bit1=E, bit2=S, bit3=W).
    Passing *bitmask8* (47-tile scheme) enables inner-corner rendering for
    quadrants whose two cardinals are set but whose diagonal is not.
    """
    ox, oy = origin
    cardinals = cardinals_to_8bit(bitmask4)
    diagonals = bitmask8 or 0

    for q_name, (row, col) in QUADRANT_OFFSETS.items():
        rule = QUADRANT_RULES[q_name]
        main = sources.main
        vert = sources.get(rule.vertical_slot)
        horiz = sources.get(rule.horizontal_slot)

        if main is None and vert is None and horiz is None:
            log.debug("No source for quadrant %s, leaving it transparent", q_name)
            continue

        has_vert = bool(cardinals & rule.vertical)
        has_horiz = bool(cardinals & rule.horizontal)
        inner_corner = (
            bitmask8 is not None
            and has_vert
            and has_horiz
            and not (diagonals & rule.diagonal)
        )

        x0, y0, x1, y1 = quadrant_box(tile_size, tile_size, row, col)
        box = (ox + x0, oy + y0, ox + x1, oy + y1)
        size = (x1 - x0, y1 - y0)

        layers = _quadrant_layers(
            row, col, size, has_vert, has_horiz, main, vert, horiz, inner_corner
        )
        canvas = dest.crop(box)
        for layer in layers:
            canvas = Image.alpha_composite(canvas, layer)
        dest.paste(canvas, box[:2])


def compose_single(
    tile_size: int,
    bitmask4: int,
    sources: SourceSet,
    bitmask8: int | None = None,
) -> Image.Image:
    """Render one tile onto a fresh transparent canvas."""
    tile = Image.new("RGBA", (tile_size, tile_size), TRANSPARENT)
    compose_tile(tile, (0, 0), tile_size, bitmask4, sources, bitmask8)
    return tile

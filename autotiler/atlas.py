"""Atlas builders for the 16-tile and 47-tile schemes."""

from __future__ import annotations

import enum
import logging
import math
from dataclasses import dataclass

from PIL import Image

from .bitmask import CANONICAL_47, cardinals_to_4bit
from .compositor import TRANSPARENT, SourceSet, compose_tile

log = logging.getLogger(__name__)


class Scheme(enum.Enum):
    """Supported autotile schemes."""

    SIMPLE_16 = "16"
    BLOB_47 = "47"

    @classmethod
    def parse(cls, value: object) -> Scheme:
        """Convert a raw config value; anything unrecognized means 16-tile."""
        if isinstance(value, cls):
            return value
        if str(value).strip() == cls.BLOB_47.value:
            return cls.BLOB_47
        if str(value).strip() != cls.SIMPLE_16.value:
            log.warning("Unknown scheme %r, falling back to 16-tile", value)
        return cls.SIMPLE_16


LABELS_16 = [
    "isolated",
    "cap-N",
    "cap-E",
    "corner-NE",
    "cap-S",
    "strip-V",
    "corner-SE",
    "T-E",
    "cap-W",
    "corner-NW",
    "strip-H",
    "T-N",
    "corner-SW",
    "T-W",
    "T-S",
    "cross",
]

COLUMNS_16 = 4
COLUMNS_47 = 8


# ---------------------------------------------------------------------------
# Data types
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class TileDescriptor:
    """Where one generated tile lives in the atlas and which neighbors it encodes."""

    index: int
    bitmask4: int
    bitmask8: int | None
    x: int
    y: int
    width: int
    height: int
    label: str

    @property
    def cell(self) -> tuple[int, int]:
        return self.x // self.width, self.y // self.height

    @property
    def rect(self) -> tuple[int, int, int, int]:
        return self.x, self.y, self.x + self.width, self.y + self.height


@dataclass
class TileAtlas:
    """Generated spritesheet plus its ordered tile descriptors."""

    image: Image.Image
    tiles: list[TileDescriptor]
    columns: int
    rows: int
    tile_size: int
    scheme: Scheme

    def tile_image(self, index: int) -> Image.Image:
        """Crop tile *index* out of the atlas."""
        return self.image.crop(self.tiles[index].rect)


def cell_origin(index: int, columns: int, tile_size: int) -> tuple[int, int]:
    """Top-left pixel of atlas cell *index* in a grid *columns* wide."""
    col, row = index % columns, index // columns
    return col * tile_size, row * tile_size


# ---------------------------------------------------------------------------
# Builders
# ---------------------------------------------------------------------------


def build_16(sources: SourceSet, tile_size: int) -> TileAtlas:
    """4x4 atlas, tile *i* is cardinal bitmask *i*."""
    cols = rows = COLUMNS_16
    out = Image.new("RGBA", (cols * tile_size, rows * tile_size), TRANSPARENT)
    tiles: list[TileDescriptor] = []

    for bitmask in range(16):
        x, y = cell_origin(bitmask, cols, tile_size)
        compose_tile(out, (x, y), tile_size, bitmask, sources)
        tiles.append(
            TileDescriptor(
                index=bitmask,
                bitmask4=bitmask,
                bitmask8=None,
                x=x,
                y=y,
                width=tile_size,
                height=tile_size,
                label=LABELS_16[bitmask],
            )
        )

    return TileAtlas(out, tiles, cols, rows, tile_size, Scheme.SIMPLE_16)


def build_47(sources: SourceSet, tile_size: int) -> TileAtlas:
    """8x6 atlas of the canonical blob tiles in ascending bitmask order.

    The last row holds 7 tiles; the one spare cell after them stays transparent.
    """
    cols = COLUMNS_47
    rows = math.ceil(len(CANONICAL_47) / cols)
    out = Image.new("RGBA", (cols * tile_size, rows * tile_size), TRANSPARENT)
    tiles: list[TileDescriptor] = []

    for idx, mask in enumerate(CANONICAL_47):
        x, y = cell_origin(idx, cols, tile_size)
        bm4 = cardinals_to_4bit(mask)
        compose_tile(out, (x, y), tile_size, bm4, sources, bitmask8=mask)
        tiles.append(
            TileDescriptor(
                index=idx,
                bitmask4=bm4,
                bitmask8=mask,
                x=x,
                y=y,
                width=tile_size,
                height=tile_size,
                label=f"tile-47-{idx}",
            )
        )

    return TileAtlas(out, tiles, cols, rows, tile_size, Scheme.BLOB_47)

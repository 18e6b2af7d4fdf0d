"""Generate a simple pixel-art source set for demos.

  main    dirt body with pebbles
  top     grass strip along the top edge, transparent below
  bottom  / left / right are the top tile rotated into place
"""

from __future__ import annotations

import random

from PIL import Image

from .compositor import SourceSet
from .sources import apply_transform

# ── Palette ───────────────────────────────────────────────
GRASS_BLADE = [(58, 125, 44), (74, 158, 58), (52, 110, 38)]
GRASS_TIP = [(92, 184, 72), (80, 168, 60)]
DIRT_BASE = [(139, 105, 20), (160, 121, 42), (128, 96, 18)]
DIRT_PEBBLE = [(110, 82, 14), (100, 74, 12)]
DIRT_LIGHT = [(180, 146, 62), (170, 136, 56)]


def _pick(rng: random.Random, palette: list[tuple]) -> tuple:
    return rng.choice(palette) + (255,)


def gen_dirt(ts: int, rng: random.Random) -> Image.Image:
    """Dirt tile: brown with lighter spots and dark 2x2 pebbles."""
    img = Image.new("RGBA", (ts, ts), (0, 0, 0, 0))
    px = img.load()
    for y in range(ts):
        for x in range(ts):
            px[x, y] = _pick(rng, DIRT_BASE)

    for _ in range(ts):
        x, y = rng.randint(0, ts - 1), rng.randint(0, ts - 1)
        px[x, y] = _pick(rng, DIRT_LIGHT)

    for _ in range(max(1, ts // 5)):
        bx, by = rng.randint(0, ts - 2), rng.randint(0, ts - 2)
        c = _pick(rng, DIRT_PEBBLE)
        for dy in range(2):
            for dx in range(2):
                px[bx + dx, by + dy] = c
    return img


def gen_grass_edge(ts: int, rng: random.Random) -> Image.Image:
    """Grass strip on the top quarter with an irregular lower fringe."""
    img = Image.new("RGBA", (ts, ts), (0, 0, 0, 0))
    px = img.load()
    band = max(2, ts // 4)
    for x in range(ts):
        depth = band + rng.randint(0, max(1, ts // 16))
        for y in range(min(depth, ts)):
            px[x, y] = _pick(rng, GRASS_BLADE)
        for y in range(rng.randint(1, max(1, band // 2))):
            px[x, y] = _pick(rng, GRASS_TIP)
    return img


def make_sample_sources(tile_size: int = 32, seed: int = 42) -> SourceSet:
    """Deterministic demo source set for *tile_size*."""
    rng = random.Random(seed)
    main = gen_dirt(tile_size, rng)
    top = gen_grass_edge(tile_size, rng)
    return SourceSet(
        main=main,
        top=top,
        bottom=apply_transform(top, rotation=180),
        left=apply_transform(top, rotation=270),
        right=apply_transform(top, rotation=90),
    )

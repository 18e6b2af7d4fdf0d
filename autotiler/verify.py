"""Automatic sanity checks on a generated atlas."""

from __future__ import annotations

from PIL import Image

from .atlas import Scheme, TileAtlas, cell_origin
from .compositor import SourceSet


def _fully_transparent(img: Image.Image) -> bool:
    return img.getchannel("A").getextrema()[1] == 0


def verify_atlas(atlas: TileAtlas, sources: SourceSet) -> list[str]:
    """Run automatic sanity checks on generated tiles."""
    messages: list[str] = []

    # The all-neighbor tile is pure main when main matches the tile size
    full = next(
        (
            t
            for t in atlas.tiles
            if t.bitmask4 == 0xF and t.bitmask8 in (None, 0xFF)
        ),
        None,
    )
    main = sources.main
    if full is not None and main is not None and main.size == (atlas.tile_size,) * 2:
        tile = atlas.tile_image(full.index)
        if tile.tobytes() == main.convert("RGBA").tobytes():
            messages.append(f"✓ tile {full.index} ({full.label}) matches MAIN")
        else:
            messages.append(
                f"⚠ tile {full.index} ({full.label}) differs from MAIN"
            )

    empty = [t.index for t in atlas.tiles if _fully_transparent(atlas.tile_image(t.index))]
    if empty:
        shown = empty[:10]
        messages.append(f"⚠ {len(empty)} tiles fully transparent: {shown}")
    else:
        messages.append(f"✓ All {len(atlas.tiles)} tiles have non-transparent pixels")

    if atlas.scheme is Scheme.BLOB_47:
        ts = atlas.tile_size
        spare = []
        for i in range(len(atlas.tiles), atlas.columns * atlas.rows):
            x, y = cell_origin(i, atlas.columns, ts)
            if not _fully_transparent(atlas.image.crop((x, y, x + ts, y + ts))):
                spare.append(i)
        if spare:
            messages.append(f"⚠ unused atlas cells are not empty: {spare}")

    return messages

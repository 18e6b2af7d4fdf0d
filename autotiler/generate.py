"""Top-level entry point: pick a scheme and build its atlas."""

from __future__ import annotations

import logging

from .atlas import Scheme, TileAtlas, build_16, build_47
from .compositor import SourceSet

log = logging.getLogger(__name__)

MIN_TILE_SIZE = 8


def clamp_tile_size(tile_size: int) -> int:
    if tile_size < MIN_TILE_SIZE:
        log.debug("Tile size %d raised to %d", tile_size, MIN_TILE_SIZE)
        return MIN_TILE_SIZE
    return tile_size


def generate(
    sources: SourceSet,
    tile_size: int,
    scheme: Scheme | str = Scheme.SIMPLE_16,
) -> TileAtlas:
    """Generate the atlas for *scheme*.

    ``tile_size`` below 8 is silently raised to 8.  A raw scheme value is
    converted with :meth:`Scheme.parse`, so anything other than ``"47"``
    yields the 16-tile atlas.  The resolved scheme is ``atlas.scheme``.
    """
    ts = clamp_tile_size(int(tile_size))
    resolved = Scheme.parse(scheme)

    if resolved is Scheme.BLOB_47:
        return build_47(sources, ts)
    if resolved is Scheme.SIMPLE_16:
        return build_16(sources, ts)
    raise AssertionError(f"Unhandled scheme: {resolved!r}")

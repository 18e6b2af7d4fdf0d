"""Labelled preview sheet: common patterns plus every tile of the scheme."""

from __future__ import annotations

from PIL import Image, ImageDraw

from .atlas import Scheme, TileAtlas
from .bitmask import E4, N4, S4, W4
from .compositor import SourceSet, compose_single
from .generate import clamp_tile_size, generate

PREVIEW_MAX_TILE = 128
PAD = 4
LABEL_H = 18
CAPTION_H = 14

BACKGROUND = (26, 26, 26, 255)
LABEL_COLOR = (140, 140, 140, 255)
CAPTION_COLOR = (200, 200, 220, 255)
DOT_ON = (249, 115, 22, 255)
DOT_OFF = (51, 51, 51, 255)
EDGE_HIGHLIGHT = (249, 115, 22, 90)

COMMON_PATTERNS: list[tuple[str, int]] = [
    ("Isolated", 0b0000),
    ("H-Strip", 0b1010),
    ("V-Strip", 0b0101),
    ("Full", 0b1111),
]


def _draw_neighbor_dots(
    draw: ImageDraw.ImageDraw, x: int, y: int, ts: int, bitmask4: int
) -> None:
    """Small dots on each edge: orange when that neighbor is present."""
    r = max(2, ts // 16)
    m = r + 1
    spots = [
        (x + ts // 2, y + m, bitmask4 & N4),
        (x + ts - m, y + ts // 2, bitmask4 & E4),
        (x + ts // 2, y + ts - m, bitmask4 & S4),
        (x + m, y + ts // 2, bitmask4 & W4),
    ]
    for cx, cy, has in spots:
        draw.ellipse([cx - r, cy - r, cx + r, cy + r], fill=DOT_ON if has else DOT_OFF)


def _draw_placeholder(
    img: Image.Image, x: int, y: int, ts: int, bitmask4: int
) -> None:
    """Grey tile shaded by neighbor count, with highlighted connected edges."""
    count = bin(bitmask4 & 0xF).count("1")
    shade = 30 + count * 18
    draw = ImageDraw.Draw(img)
    draw.rectangle([x, y, x + ts - 1, y + ts - 1], fill=(shade, shade, shade, 255))
    draw.rectangle([x, y, x + ts - 1, y + ts - 1], outline=(58, 58, 58, 255))

    overlay = Image.new("RGBA", (ts, ts), (0, 0, 0, 0))
    odraw = ImageDraw.Draw(overlay)
    ew = max(2, ts // 8)
    if bitmask4 & N4:
        odraw.rectangle([0, 0, ts - 1, ew - 1], fill=EDGE_HIGHLIGHT)
    if bitmask4 & S4:
        odraw.rectangle([0, ts - ew, ts - 1, ts - 1], fill=EDGE_HIGHLIGHT)
    if bitmask4 & W4:
        odraw.rectangle([0, 0, ew - 1, ts - 1], fill=EDGE_HIGHLIGHT)
    if bitmask4 & E4:
        odraw.rectangle([ts - ew, 0, ts - 1, ts - 1], fill=EDGE_HIGHLIGHT)
    img.alpha_composite(overlay, (x, y))


def render_preview(
    sources: SourceSet,
    tile_size: int,
    scheme: Scheme | str = Scheme.SIMPLE_16,
    atlas: TileAtlas | None = None,
) -> Image.Image:
    """Render the preview sheet.

    With no sources loaded every tile is drawn as a shaded placeholder so the
    layout is still visible.  Pass an already generated *atlas* to avoid
    building it twice.
    """
    ts = min(clamp_tile_size(tile_size), PREVIEW_MAX_TILE)
    resolved = Scheme.parse(scheme)
    has_any = not sources.is_empty()

    if atlas is None or atlas.tile_size != ts or atlas.scheme is not resolved:
        atlas = generate(sources, ts, resolved)

    cell_w = ts + PAD
    cell_h = ts + CAPTION_H
    pat_w = len(COMMON_PATTERNS) * cell_w - PAD
    grid_w = atlas.columns * cell_w - PAD
    total_w = max(pat_w, grid_w) + PAD * 2
    total_h = PAD + LABEL_H + cell_h + PAD * 3 + LABEL_H + atlas.rows * cell_h + PAD

    preview = Image.new("RGBA", (total_w, total_h), BACKGROUND)
    draw = ImageDraw.Draw(preview)

    # ---- common patterns ----
    cur_y = PAD
    draw.text((PAD, cur_y + 3), "Common Patterns", fill=LABEL_COLOR)
    cur_y += LABEL_H

    for i, (label, bm4) in enumerate(COMMON_PATTERNS):
        x = PAD + i * cell_w
        if has_any:
            tile = compose_single(ts, bm4, sources)
            preview.alpha_composite(tile, (x, cur_y))
            _draw_neighbor_dots(draw, x, cur_y, ts, bm4)
        else:
            _draw_placeholder(preview, x, cur_y, ts, bm4)
        draw.text((x + 1, cur_y + ts + 2), label, fill=CAPTION_COLOR)
    cur_y += cell_h + PAD * 3

    # ---- full scheme grid ----
    draw.text((PAD, cur_y + 3), f"{resolved.value}-Tile Set", fill=LABEL_COLOR)
    cur_y += LABEL_H

    for desc in atlas.tiles:
        col, row = desc.cell
        x = PAD + col * cell_w
        y = cur_y + row * cell_h
        if has_any:
            preview.alpha_composite(atlas.tile_image(desc.index), (x, y))
        else:
            _draw_placeholder(preview, x, y, ts, desc.bitmask4)
        draw.rectangle([x - 1, y - 1, x + ts, y + ts], outline=(80, 80, 100, 255))
        caption = str(desc.bitmask8) if desc.bitmask8 is not None else desc.label
        draw.text((x + 1, y + ts + 2), caption, fill=CAPTION_COLOR)

    return preview

"""Descriptor output: JSON and Bevy-style RON mappings for a generated atlas."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from .atlas import TileAtlas
from .bitmask import describe_bitmask, cardinals_to_8bit


def atlas_to_dict(atlas: TileAtlas) -> dict[str, Any]:
    """Plain-data view of the atlas descriptors."""
    return {
        "scheme": atlas.scheme.value,
        "tile_size": atlas.tile_size,
        "atlas_columns": atlas.columns,
        "atlas_rows": atlas.rows,
        "width": atlas.image.width,
        "height": atlas.image.height,
        "tiles": [
            {
                "id": t.index,
                "bitmask4": t.bitmask4,
                "bitmask8": t.bitmask8,
                "x": t.x,
                "y": t.y,
                "width": t.width,
                "height": t.height,
                "label": t.label,
            }
            for t in atlas.tiles
        ],
    }


def write_json(atlas: TileAtlas, path: Path) -> None:
    path.write_text(json.dumps(atlas_to_dict(atlas), indent=2) + "\n", encoding="utf-8")


def generate_ron_mapping(atlas: TileAtlas) -> str:
    """Build a Bevy-compatible .ron mapping string, keyed by tile id."""
    lines = [
        "(",
        f'    scheme: "{atlas.scheme.value}",',
        f"    tile_size: {atlas.tile_size},",
        f"    atlas_columns: {atlas.columns},",
        f"    atlas_rows: {atlas.rows},",
        "    tiles: {",
    ]

    for tile in atlas.tiles:
        col, row = tile.cell
        mask8 = tile.bitmask8
        if mask8 is None:
            mask8 = cardinals_to_8bit(tile.bitmask4)
        lines.append(f"        {tile.index}: (")
        lines.append(f'            label: "{tile.label}",')
        lines.append(f'            description: "{describe_bitmask(mask8)}",')
        lines.append(f"            bitmask4: {tile.bitmask4},")
        if tile.bitmask8 is not None:
            lines.append(f"            bitmask8: {tile.bitmask8},")
        lines.append(f"            col: {col},")
        lines.append(f"            row: {row},")
        lines.append("        ),")

    lines.append("    },")
    lines.append(")")
    return "\n".join(lines) + "\n"

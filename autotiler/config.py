"""Generator settings and JSON manifest parsing.

Manifest format::

    {
      "tile_size": 32,
      "scheme": "47",
      "name": "grass",
      "sources": {
        "main": "main.png",
        "top": {"file": "edge.png"},
        "left": {"file": "edge.png", "rotation": 270},
        "bottom": {"file": "edge.png", "flip_y": true}
      }
    }

Every key is optional except ``sources``; missing slots are simply empty.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from .atlas import Scheme
from .generate import clamp_tile_size

SLOTS = ("main", "top", "bottom", "left", "right")
VALID_ROTATIONS = (0, 90, 180, 270)

DEFAULT_TILE_SIZE = 32
DEFAULT_NAME = "tileset"


@dataclass
class GeneratorConfig:
    tile_size: int = DEFAULT_TILE_SIZE
    scheme: Scheme = Scheme.SIMPLE_16
    name: str = DEFAULT_NAME

    @classmethod
    def from_mapping(cls, data: dict[str, Any]) -> GeneratorConfig:
        """Build a config from a manifest/state dict, clamping and defaulting."""
        raw_size = data.get("tile_size", data.get("tileSize", DEFAULT_TILE_SIZE))
        try:
            tile_size = int(raw_size)
        except (TypeError, ValueError) as exc:
            raise ValueError(f"tile_size must be an integer, got {raw_size!r}") from exc

        scheme = Scheme.parse(data.get("scheme", data.get("algorithm", "16")))
        name = str(data.get("name", DEFAULT_NAME)) or DEFAULT_NAME
        return cls(tile_size=clamp_tile_size(tile_size), scheme=scheme, name=name)


@dataclass
class SlotSpec:
    """One manifest source entry: a file plus the transform to apply to it."""

    file: str
    rotation: int = 0
    flip_x: bool = False
    flip_y: bool = False

    @classmethod
    def from_raw(cls, slot: str, raw: Any) -> SlotSpec:
        if isinstance(raw, str):
            return cls(file=raw)
        if not isinstance(raw, dict):
            raise ValueError(
                f"Source '{slot}': expected a file name or an object, got {raw!r}"
            )
        if "file" not in raw:
            raise ValueError(f"Source '{slot}': missing required field 'file'")

        rotation = int(raw.get("rotation", 0)) % 360
        if rotation not in VALID_ROTATIONS:
            raise ValueError(
                f"Source '{slot}': rotation must be a multiple of 90, "
                f"got {raw.get('rotation')}"
            )
        return cls(
            file=str(raw["file"]),
            rotation=rotation,
            flip_x=bool(raw.get("flip_x", False)),
            flip_y=bool(raw.get("flip_y", False)),
        )


@dataclass
class Manifest:
    config: GeneratorConfig
    sources: dict[str, SlotSpec] = field(default_factory=dict)


def parse_manifest(path: Path) -> Manifest:
    """Parse a JSON manifest file."""
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise ValueError(f"Invalid JSON in {path}: {exc}") from exc

    if not isinstance(data, dict):
        raise ValueError(f"Manifest {path} must be a JSON object")
    if "sources" not in data:
        raise ValueError(f"Missing 'sources' in {path}")

    raw_sources = data["sources"]
    if not isinstance(raw_sources, dict):
        raise ValueError(f"'sources' in {path} must map slot names to files")

    specs: dict[str, SlotSpec] = {}
    for slot, raw in raw_sources.items():
        slot_name = slot.lower()
        if slot_name not in SLOTS:
            raise ValueError(f"Unknown slot '{slot}'. Valid: {list(SLOTS)}")
        if raw is None:
            continue
        specs[slot_name] = SlotSpec.from_raw(slot_name, raw)

    return Manifest(config=GeneratorConfig.from_mapping(data), sources=specs)

"""Procedural 16-tile and 47-tile autotile atlas generator."""

from .atlas import Scheme, TileAtlas, TileDescriptor, build_16, build_47
from .bitmask import CANONICAL_47, index_of_47, normalize
from .compositor import SourceSet, compose_single, compose_tile
from .generate import generate

__all__ = [
    "CANONICAL_47",
    "Scheme",
    "SourceSet",
    "TileAtlas",
    "TileDescriptor",
    "build_16",
    "build_47",
    "compose_single",
    "compose_tile",
    "generate",
    "index_of_47",
    "normalize",
]

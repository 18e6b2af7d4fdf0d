"""Loading source tiles from disk and sanity-checking them."""

from __future__ import annotations

import logging
from pathlib import Path

from PIL import Image, UnidentifiedImageError

from .compositor import SourceSet
from .config import SLOTS, SlotSpec

log = logging.getLogger(__name__)

# rotation (clockwise degrees) -> PIL transpose op
_ROTATE_CW = {
    90: Image.Transpose.ROTATE_270,
    180: Image.Transpose.ROTATE_180,
    270: Image.Transpose.ROTATE_90,
}


class RasterLoadError(ValueError):
    """A source file exists but could not be decoded as an image."""


def load_raster(path: Path) -> Image.Image:
    """Open *path* as an RGBA image with its pixels read into memory."""
    if not path.exists():
        raise FileNotFoundError(f"Source file not found: {path}")
    try:
        img = Image.open(path)
        img.load()  # read pixels into memory, release file handle
    except (UnidentifiedImageError, OSError) as exc:
        raise RasterLoadError(f"Cannot read image {path}: {exc}") from exc
    if img.mode != "RGBA":
        img = img.convert("RGBA")
    return img


def apply_transform(
    img: Image.Image,
    rotation: int = 0,
    flip_x: bool = False,
    flip_y: bool = False,
) -> Image.Image:
    """Return a flipped-then-rotated copy of *img*.

    *rotation* is clockwise and must be a multiple of 90; 90/270 swap the
    output width and height.
    """
    out = img
    if flip_x:
        out = out.transpose(Image.Transpose.FLIP_LEFT_RIGHT)
    if flip_y:
        out = out.transpose(Image.Transpose.FLIP_TOP_BOTTOM)
    rotation %= 360
    if rotation:
        if rotation not in _ROTATE_CW:
            raise ValueError(f"rotation must be a multiple of 90, got {rotation}")
        out = out.transpose(_ROTATE_CW[rotation])
    return out.copy() if out is img else out


def load_source_set(base_dir: Path, specs: dict[str, SlotSpec]) -> SourceSet:
    """Load every slot in *specs* (relative to *base_dir*) into a SourceSet."""
    images: dict[str, Image.Image] = {}
    for slot, spec in specs.items():
        img = load_raster(base_dir / spec.file)
        images[slot] = apply_transform(img, spec.rotation, spec.flip_x, spec.flip_y)
        log.debug("Loaded %s from %s (%dx%d)", slot, spec.file, *images[slot].size)
    return SourceSet(**images)


def discover_sources(directory: Path) -> dict[str, SlotSpec]:
    """Find ``main.png``, ``top.png``, ... in *directory*.  Any subset is fine."""
    specs: dict[str, SlotSpec] = {}
    for slot in SLOTS:
        candidate = directory / f"{slot}.png"
        if candidate.exists():
            specs[slot] = SlotSpec(file=candidate.name)
    return specs


# ---------------------------------------------------------------------------
# Validation
# ---------------------------------------------------------------------------


def validate_sources(sources: SourceSet) -> list[str]:
    """Return warnings about the loaded sources.  Never raises."""
    present = sources.present()
    if not present:
        return ["No source images loaded; every tile will be transparent"]

    warnings: list[str] = []
    sizes = {img.size for img in present.values()}
    if len(sizes) > 1:
        warnings.append(f"Source images differ in size: {sorted(sizes)}")

    for slot, img in present.items():
        w, h = img.size
        if w != h:
            warnings.append(f"Slot '{slot}' is not square ({w}x{h})")
        alpha = img.convert("RGBA").getchannel("A")
        if alpha.getextrema()[1] == 0:
            warnings.append(f"Slot '{slot}' is fully transparent")
    return warnings

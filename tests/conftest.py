"""Shared pytest fixtures for autotile generation tests."""

import pytest
from PIL import Image

from autotiler.compositor import SourceSet

RED = (255, 0, 0, 255)
GREEN = (0, 255, 0, 255)
BLUE = (0, 0, 255, 255)
WHITE = (255, 255, 255, 255)
CLEAR = (0, 0, 0, 0)


def solid(color, size=16):
    """Square RGBA image filled with one color."""
    return Image.new("RGBA", (size, size), color)


def quadrant_colored(colors, size=16):
    """Square image whose TL/TR/BL/BR quadrants are the four given colors."""
    img = Image.new("RGBA", (size, size), CLEAR)
    half = size // 2
    tl, tr, bl, br = colors
    img.paste(Image.new("RGBA", (half, half), tl), (0, 0))
    img.paste(Image.new("RGBA", (size - half, half), tr), (half, 0))
    img.paste(Image.new("RGBA", (half, size - half), bl), (0, half))
    img.paste(Image.new("RGBA", (size - half, size - half), br), (half, half))
    return img


def region_colors(img, box):
    """Set of distinct pixel values inside *box*."""
    region = img.crop(box)
    return {color for _, color in region.getcolors(maxcolors=region.width * region.height)}


@pytest.fixture
def empty_sources():
    return SourceSet()


@pytest.fixture
def rgb_sources():
    """main=red, top=green, left=blue; bottom/right missing."""
    return SourceSet(main=solid(RED), top=solid(GREEN), left=solid(BLUE))

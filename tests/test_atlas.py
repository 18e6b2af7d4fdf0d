"""
Unit tests for the 16-tile and 47-tile atlas builders.
"""

import pytest

from autotiler.atlas import LABELS_16, Scheme, build_16, build_47, cell_origin
from autotiler.bitmask import CANONICAL_47, cardinals_to_4bit
from autotiler.compositor import SourceSet, compose_single
from autotiler.samples import make_sample_sources

from conftest import CLEAR, RED, region_colors, solid

TS = 16


@pytest.fixture(scope="module")
def sample_sources():
    return make_sample_sources(TS)


class TestBuild16:
    """Tests for the 4x4 cardinal atlas."""

    def test_counts_and_size(self, sample_sources):
        atlas = build_16(sample_sources, TS)
        assert len(atlas.tiles) == 16
        assert atlas.image.size == (4 * TS, 4 * TS)
        assert (atlas.columns, atlas.rows) == (4, 4)
        assert atlas.scheme is Scheme.SIMPLE_16

    def test_empty_sources_still_give_16_tiles(self, empty_sources):
        atlas = build_16(empty_sources, TS)
        assert len(atlas.tiles) == 16
        assert atlas.image.getchannel("A").getextrema() == (0, 0)

    def test_bitmask_is_index(self, sample_sources):
        atlas = build_16(sample_sources, TS)
        for i, tile in enumerate(atlas.tiles):
            assert tile.index == i
            assert tile.bitmask4 == i
            assert tile.bitmask8 is None
            assert tile.cell == (i % 4, i // 4)
            assert (tile.x, tile.y) == (i % 4 * TS, i // 4 * TS)

    def test_labels(self, sample_sources):
        atlas = build_16(sample_sources, TS)
        labels = [t.label for t in atlas.tiles]
        assert labels == LABELS_16
        assert labels[0] == "isolated"
        assert labels[15] == "cross"
        assert labels[5] == "strip-V"
        assert labels[10] == "strip-H"
        assert len(set(labels)) == 16

    def test_tiles_match_single_composition(self, sample_sources):
        atlas = build_16(sample_sources, TS)
        for tile in atlas.tiles:
            expected = compose_single(TS, tile.bitmask4, sample_sources)
            assert atlas.tile_image(tile.index).tobytes() == expected.tobytes()

    def test_cross_cell_is_main(self):
        atlas = build_16(SourceSet(main=solid(RED)), TS)
        assert region_colors(atlas.image, atlas.tiles[15].rect) == {RED}


class TestBuild47:
    """Tests for the 8x6 blob atlas."""

    def test_counts_and_size(self, sample_sources):
        atlas = build_47(sample_sources, TS)
        assert len(atlas.tiles) == 47
        assert atlas.image.size == (8 * TS, 6 * TS)
        assert (atlas.columns, atlas.rows) == (8, 6)
        assert atlas.scheme is Scheme.BLOB_47

    def test_spare_cells_are_transparent(self, sample_sources):
        atlas = build_47(sample_sources, TS)
        for i in range(47, 48):
            x, y = cell_origin(i, 8, TS)
            assert region_colors(atlas.image, (x, y, x + TS, y + TS)) == {CLEAR}

    def test_ordering_follows_canonical_table(self, sample_sources):
        atlas = build_47(sample_sources, TS)
        masks = [t.bitmask8 for t in atlas.tiles]
        assert masks == list(CANONICAL_47)
        assert all(a < b for a, b in zip(masks, masks[1:]))

    def test_cell_formula(self, sample_sources):
        atlas = build_47(sample_sources, TS)
        for i, tile in enumerate(atlas.tiles):
            assert tile.index == i
            assert tile.cell == (i % 8, i // 8)
            assert tile.rect == (i % 8 * TS, i // 8 * TS, i % 8 * TS + TS, i // 8 * TS + TS)

    def test_cardinal_code_derived_from_mask(self, sample_sources):
        atlas = build_47(sample_sources, TS)
        for tile in atlas.tiles:
            assert tile.bitmask4 == cardinals_to_4bit(tile.bitmask8)

    def test_labels_are_unique(self, sample_sources):
        atlas = build_47(sample_sources, TS)
        assert [t.label for t in atlas.tiles] == [f"tile-47-{i}" for i in range(47)]

    def test_inner_corners_rendered(self, sample_sources):
        """Cardinal-only cross (85) differs from the full tile (255)."""
        atlas = build_47(sample_sources, TS)
        by_mask = {t.bitmask8: t for t in atlas.tiles}
        cross = atlas.tile_image(by_mask[0x55].index)
        full = atlas.tile_image(by_mask[0xFF].index)
        assert cross.tobytes() != full.tobytes()

    def test_deterministic(self, sample_sources):
        a = build_47(sample_sources, TS)
        b = build_47(sample_sources, TS)
        assert a.image.tobytes() == b.image.tobytes()
        assert a.tiles == b.tiles

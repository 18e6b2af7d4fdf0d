"""
Unit tests for generator config and manifest parsing.
"""

import json

import pytest

from autotiler.atlas import Scheme
from autotiler.config import GeneratorConfig, SlotSpec, parse_manifest


def write_manifest(tmp_path, data):
    path = tmp_path / "tileset.json"
    path.write_text(json.dumps(data), encoding="utf-8")
    return path


class TestGeneratorConfig:
    def test_defaults(self):
        config = GeneratorConfig.from_mapping({})
        assert config.tile_size == 32
        assert config.scheme is Scheme.SIMPLE_16
        assert config.name == "tileset"

    def test_state_style_keys(self):
        """camelCase keys from the original app state are accepted."""
        config = GeneratorConfig.from_mapping({"tileSize": 24, "algorithm": "47"})
        assert config.tile_size == 24
        assert config.scheme is Scheme.BLOB_47

    def test_small_tile_size_clamped(self):
        assert GeneratorConfig.from_mapping({"tile_size": 3}).tile_size == 8

    def test_unknown_scheme_defaults(self):
        assert GeneratorConfig.from_mapping({"scheme": "wang"}).scheme is Scheme.SIMPLE_16

    def test_non_integer_tile_size_rejected(self):
        with pytest.raises(ValueError, match="tile_size"):
            GeneratorConfig.from_mapping({"tile_size": "big"})


class TestSlotSpec:
    def test_plain_string(self):
        assert SlotSpec.from_raw("main", "main.png") == SlotSpec(file="main.png")

    def test_object_with_transform(self):
        spec = SlotSpec.from_raw(
            "left", {"file": "edge.png", "rotation": -90, "flip_x": True}
        )
        assert spec == SlotSpec(file="edge.png", rotation=270, flip_x=True)

    def test_bad_rotation(self):
        with pytest.raises(ValueError, match="multiple of 90"):
            SlotSpec.from_raw("top", {"file": "a.png", "rotation": 45})

    def test_missing_file(self):
        with pytest.raises(ValueError, match="file"):
            SlotSpec.from_raw("top", {"rotation": 90})

    def test_wrong_type(self):
        with pytest.raises(ValueError, match="expected a file name"):
            SlotSpec.from_raw("top", 12)


class TestParseManifest:
    """Tests for JSON manifest loading."""

    def test_full_manifest(self, tmp_path):
        path = write_manifest(
            tmp_path,
            {
                "tile_size": 16,
                "scheme": "47",
                "name": "grass",
                "sources": {
                    "main": "main.png",
                    "Top": {"file": "edge.png"},
                    "right": None,
                },
            },
        )
        manifest = parse_manifest(path)
        assert manifest.config == GeneratorConfig(16, Scheme.BLOB_47, "grass")
        assert set(manifest.sources) == {"main", "top"}
        assert manifest.sources["top"].file == "edge.png"

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "bad.json"
        path.write_text("{not json", encoding="utf-8")
        with pytest.raises(ValueError, match="Invalid JSON"):
            parse_manifest(path)

    def test_missing_sources(self, tmp_path):
        path = write_manifest(tmp_path, {"tile_size": 16})
        with pytest.raises(ValueError, match="Missing 'sources'"):
            parse_manifest(path)

    def test_unknown_slot(self, tmp_path):
        path = write_manifest(tmp_path, {"sources": {"corner": "c.png"}})
        with pytest.raises(ValueError, match="Unknown slot"):
            parse_manifest(path)

    def test_not_an_object(self, tmp_path):
        path = write_manifest(tmp_path, ["main.png"])
        with pytest.raises(ValueError, match="JSON object"):
            parse_manifest(path)

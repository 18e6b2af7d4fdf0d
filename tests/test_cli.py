"""
Integration tests for the command line front end.
"""

import json

import pytest
from PIL import Image

from autotiler.cli import main, resolve_inputs

from conftest import GREEN, RED, solid


@pytest.fixture
def slot_dir(tmp_path):
    src = tmp_path / "grass"
    src.mkdir()
    solid(RED, 16).save(src / "main.png")
    solid(GREEN, 16).save(src / "top.png")
    return src


class TestResolveInputs:
    def test_slot_directory(self, slot_dir):
        assert resolve_inputs(slot_dir) == [slot_dir]

    def test_directory_of_manifests(self, tmp_path):
        (tmp_path / "b.json").write_text("{}")
        (tmp_path / "a.json").write_text("{}")
        assert [p.name for p in resolve_inputs(tmp_path)] == ["a.json", "b.json"]

    def test_missing(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            resolve_inputs(tmp_path / "missing.json")


class TestMain:
    def test_directory_input(self, slot_dir, capsys):
        main([str(slot_dir), "--tile-size", "16", "--scheme", "47"])
        sheet = slot_dir / "grass-47.png"
        assert Image.open(sheet).size == (128, 96)
        data = json.loads((slot_dir / "grass-47.json").read_text())
        assert len(data["tiles"]) == 47
        assert (slot_dir / "grass-47.ron").exists()
        assert "Done!" in capsys.readouterr().out

    def test_manifest_input(self, slot_dir, tmp_path):
        manifest = slot_dir / "tileset.json"
        manifest.write_text(
            json.dumps(
                {
                    "tile_size": 8,
                    "name": "mini",
                    "sources": {"main": "main.png", "left": {"file": "top.png", "rotation": 270}},
                }
            )
        )
        out = tmp_path / "out" / "sheet.png"
        main([str(manifest), "-o", str(out), "--preview", "--test-map"])
        assert Image.open(out).size == (32, 32)
        assert out.with_suffix(".json").exists()
        assert (out.parent / "sheet_preview.png").exists()
        assert (out.parent / "sheet_testmap.png").exists()

    def test_demo(self, tmp_path):
        out = tmp_path / "demo.png"
        main(["--demo", "--scheme", "47", "--tile-size", "8", "-o", str(out)])
        assert Image.open(out).size == (64, 48)

    def test_bad_manifest_exits(self, tmp_path, capsys):
        bad = tmp_path / "bad.json"
        bad.write_text("{oops")
        with pytest.raises(SystemExit) as exc:
            main([str(bad)])
        assert exc.value.code == 1
        assert "Invalid JSON" in capsys.readouterr().err

    def test_undecodable_source_exits(self, tmp_path, capsys):
        (tmp_path / "main.png").write_bytes(b"garbage")
        with pytest.raises(SystemExit):
            main([str(tmp_path)])
        assert "Cannot read image" in capsys.readouterr().err

    def test_input_required(self, capsys):
        with pytest.raises(SystemExit):
            main([])
        assert "INPUT is required" in capsys.readouterr().err

"""Command line front end.

Usage:
    autotiler tileset.json -o output.png
    autotiler tiles_dir/ --scheme 47 --tile-size 16
    autotiler 'tilesets/*.json' --output-dir generated/
    autotiler --demo --scheme 47 -o demo.png --preview --test-map
"""

from __future__ import annotations

import argparse
import logging
import sys
from dataclasses import dataclass
from pathlib import Path

from .atlas import Scheme
from .compositor import SourceSet
from .config import GeneratorConfig, parse_manifest
from .generate import generate
from .mapping import generate_ron_mapping, write_json
from .preview import render_preview
from .samples import make_sample_sources
from .sources import discover_sources, load_source_set, validate_sources
from .tilemap import TEST_PATTERN, render_tilemap
from .verify import verify_atlas


@dataclass
class OutputOptions:
    output: Path | None = None
    json_path: Path | None = None
    ron_path: Path | None = None
    preview: bool = False
    test_map: bool = False


# ---------------------------------------------------------------------------
# Pipeline
# ---------------------------------------------------------------------------


def load_input(input_path: Path) -> tuple[GeneratorConfig, SourceSet]:
    """Load a manifest file or a directory of slot PNGs."""
    if input_path.is_dir():
        print(f"Loading source directory: {input_path}")
        specs = discover_sources(input_path)
        config = GeneratorConfig(name=input_path.name or "tileset")
        return config, load_source_set(input_path, specs)

    suffix = input_path.suffix.lower()
    if suffix != ".json":
        raise ValueError(f"Unsupported input format: {suffix} (expected .json or a directory)")
    print(f"Loading manifest: {input_path}")
    manifest = parse_manifest(input_path)
    return manifest.config, load_source_set(input_path.parent, manifest.sources)


def apply_overrides(
    config: GeneratorConfig, tile_size: int | None, scheme: str | None
) -> GeneratorConfig:
    data = {"tile_size": config.tile_size, "scheme": config.scheme, "name": config.name}
    if tile_size is not None:
        data["tile_size"] = tile_size
    if scheme is not None:
        data["scheme"] = scheme
    return GeneratorConfig.from_mapping(data)


def process_single(
    config: GeneratorConfig,
    sources: SourceSet,
    default_dir: Path,
    opts: OutputOptions,
) -> None:
    """Full pipeline for one loaded source set."""
    output_path = opts.output
    if output_path is None:
        output_path = default_dir / f"{config.name}-{config.scheme.value}.png"
    json_path = opts.json_path or output_path.with_suffix(".json")
    ron_path = opts.ron_path or output_path.with_suffix(".ron")

    print(f"  Tile size: {config.tile_size}x{config.tile_size}")
    print(f"  Scheme: {config.scheme.value}-tile")
    print(f"  Slots loaded: {sorted(sources.present())}")
    for warn in validate_sources(sources):
        print(f"  ⚠ {warn}")

    # ---- generate ----
    atlas = generate(sources, config.tile_size, config.scheme)
    print(f"  Generated {len(atlas.tiles)} tiles ({atlas.columns}x{atlas.rows} grid)")

    for msg in verify_atlas(atlas, sources):
        print(f"  {msg}")

    # ---- spritesheet ----
    output_path.parent.mkdir(parents=True, exist_ok=True)
    atlas.image.save(output_path)
    print(f"  Saved spritesheet: {output_path} ({atlas.image.width}x{atlas.image.height})")

    # ---- descriptors ----
    write_json(atlas, json_path)
    print(f"  Saved JSON descriptors: {json_path}")
    ron_path.write_text(generate_ron_mapping(atlas), encoding="utf-8")
    print(f"  Saved RON mapping: {ron_path}")

    # ---- optional: preview ----
    if opts.preview:
        preview_path = output_path.with_name(f"{output_path.stem}_preview.png")
        render_preview(sources, config.tile_size, config.scheme, atlas=atlas).save(
            preview_path
        )
        print(f"  Saved preview: {preview_path}")

    # ---- optional: test map ----
    if opts.test_map:
        map_path = output_path.with_name(f"{output_path.stem}_testmap.png")
        render_tilemap(TEST_PATTERN, sources, config.tile_size, config.scheme).save(
            map_path
        )
        print(f"  Saved test map: {map_path}")

    print("  Done!")


# ---------------------------------------------------------------------------
# CLI
# ---------------------------------------------------------------------------


def resolve_inputs(raw: Path) -> list[Path]:
    """Resolve a path argument to a list of inputs (manifests or directories)."""
    if raw.is_dir():
        if discover_sources(raw):
            return [raw]
        found = sorted(raw.glob("*.json"))
        if not found:
            raise FileNotFoundError(f"No slot PNGs or JSON manifests in {raw}")
        return found

    if "*" in raw.name or "?" in raw.name:
        found = sorted(raw.parent.glob(raw.name))
        if not found:
            raise FileNotFoundError(f"No files matching {raw}")
        return found

    if not raw.exists():
        raise FileNotFoundError(f"File not found: {raw}")
    return [raw]


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(
        prog="autotiler",
        description="Generate 16-tile or 47-tile autotile atlases from five source tiles.",
        epilog=(
            "Examples:\n"
            "  autotiler tileset.json -o output.png\n"
            "  autotiler tiles_dir/ --scheme 47\n"
            "  autotiler 'tilesets/*.json' --output-dir generated/\n"
            "  autotiler --demo --scheme 47 --preview"
        ),
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    p.add_argument(
        "input",
        type=Path,
        nargs="?",
        help="JSON manifest, directory with main/top/bottom/left/right PNGs, or glob",
    )
    p.add_argument(
        "-o",
        "--output",
        type=Path,
        default=None,
        help="Output spritesheet path (default: {name}-{scheme}.png next to input)",
    )
    p.add_argument(
        "--scheme",
        default=None,
        help="'16' or '47' (anything else means 16; default: manifest or 16)",
    )
    p.add_argument(
        "--tile-size",
        type=int,
        default=None,
        help="Output tile size in pixels, minimum 8 (default: manifest or 32)",
    )
    p.add_argument(
        "--json",
        type=Path,
        default=None,
        help="JSON descriptor path (default: {output}.json)",
    )
    p.add_argument(
        "--ron",
        type=Path,
        default=None,
        help="RON mapping path (default: {output}.ron)",
    )
    p.add_argument(
        "--preview",
        action="store_true",
        help="Generate labelled preview image",
    )
    p.add_argument(
        "--test-map",
        action="store_true",
        help="Generate a test tile map",
    )
    p.add_argument(
        "--output-dir",
        type=Path,
        default=None,
        help="Output directory for batch processing",
    )
    p.add_argument(
        "--demo",
        action="store_true",
        help="Use built-in sample source tiles instead of INPUT",
    )
    p.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )
    return p.parse_args(argv)


def main(argv: list[str] | None = None) -> None:
    args = parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s:%(name)s: %(message)s",
    )

    if args.output_dir and (args.output or args.json or args.ron):
        print(
            "Error: -o/--json/--ron cannot be used with --output-dir",
            file=sys.stderr,
        )
        sys.exit(1)

    # ---- demo mode ----
    if args.demo:
        config = apply_overrides(GeneratorConfig(name="demo"), args.tile_size, args.scheme)
        print("Using built-in sample tiles")
        out_dir = args.output_dir or Path.cwd()
        opts = OutputOptions(args.output, args.json, args.ron, args.preview, args.test_map)
        process_single(config, make_sample_sources(config.tile_size), out_dir, opts)
        return

    if args.input is None:
        print("Error: INPUT is required unless --demo is given", file=sys.stderr)
        sys.exit(1)

    try:
        inputs = resolve_inputs(args.input)
    except FileNotFoundError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        sys.exit(1)

    for input_path in inputs:
        opts = OutputOptions(None, None, None, args.preview, args.test_map)
        if args.output_dir:
            args.output_dir.mkdir(parents=True, exist_ok=True)
            default_dir = args.output_dir
        else:
            opts.output, opts.json_path, opts.ron_path = args.output, args.json, args.ron
            default_dir = input_path if input_path.is_dir() else input_path.parent

        try:
            config, sources = load_input(input_path)
            config = apply_overrides(config, args.tile_size, args.scheme)
            if args.output_dir:
                opts.output = default_dir / f"{input_path.stem}-{config.scheme.value}.png"
            process_single(config, sources, default_dir, opts)
        except (FileNotFoundError, ValueError) as exc:
            print(f"Error: {exc}", file=sys.stderr)
            if len(inputs) == 1:
                sys.exit(1)
        except Exception as exc:
            print(
                f"Unexpected error processing {input_path}: {exc}",
                file=sys.stderr,
            )
            if len(inputs) == 1:
                sys.exit(1)


if __name__ == "__main__":
    main()

#!/usr/bin/env python3
"""Render one of the preset sphere scenes.

This script demonstrates end-to-end rendering: it builds a preset scene,
applies command-line overrides to the camera configuration, renders with one
worker thread per hardware thread and writes the result as plain PPM (to a
file or stdout) or PNG.

Usage:
    python examples/render_spheres.py [options]

Options:
    --scene {three,random}  Preset scene (default: three)
    --width WIDTH           Image width in pixels (default: preset)
    --samples SAMPLES       Samples per pixel (default: preset)
    --max-depth DEPTH       Maximum bounces per ray (default: preset)
    --workers WORKERS       Worker threads (default: hardware threads)
    --seed SEED             Random seed (default: nondeterministic)
    --output OUTPUT         Output path; .png writes PNG, anything else PPM.
                            Omit to write PPM to stdout.
    --preview               Show the result in a Matplotlib window
    --quiet                 Suppress progress output
    --verbose               Enable debug logging

Example:
    python examples/render_spheres.py --width 200 --samples 20 --output spheres.png
"""

from __future__ import annotations

import argparse
import logging
import sys
import time
from pathlib import Path
from typing import Any

# Ensure the project root is in the Python path for direct execution
_project_root = Path(__file__).parent.parent
if str(_project_root) not in sys.path:
    sys.path.insert(0, str(_project_root))


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        description="Render a preset sphere scene.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--scene",
        choices=("three", "random"),
        default="three",
        help="Preset scene (default: three)",
    )
    parser.add_argument("--width", type=int, help="Image width in pixels (default: preset)")
    parser.add_argument("--samples", type=int, help="Samples per pixel (default: preset)")
    parser.add_argument("--max-depth", type=int, help="Maximum bounces per ray (default: preset)")
    parser.add_argument(
        "--workers",
        type=int,
        help="Worker threads (default: number of hardware threads)",
    )
    parser.add_argument("--seed", type=int, help="Random seed (default: nondeterministic)")
    parser.add_argument(
        "--output",
        type=str,
        help="Output path; .png writes PNG, anything else PPM (default: PPM on stdout)",
    )
    parser.add_argument(
        "--preview",
        action="store_true",
        help="Show the result in a Matplotlib window",
    )
    parser.add_argument(
        "--quiet",
        action="store_true",
        help="Suppress progress output",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )
    return parser.parse_args(argv)


def render_spheres(
    scene: str = "three",
    width: int | None = None,
    samples: int | None = None,
    max_depth: int | None = None,
    workers: int | None = None,
    seed: int | None = None,
    output_path: str | None = None,
    preview: bool = False,
    quiet: bool = False,
) -> Path | None:
    """Render a preset scene and write it out.

    Args:
        scene: "three" or "random".
        width: Image width override.
        samples: Samples-per-pixel override.
        max_depth: Bounce budget override.
        workers: Worker thread count (None = hardware threads).
        seed: Root random seed.
        output_path: Output file; None writes PPM to stdout.
        preview: Show a Matplotlib window after rendering.
        quiet: If True, suppress progress output.

    Returns:
        Path to the saved image file, or None when writing to stdout.
    """
    import numpy as np

    from src.pathtracer.core.renderer import Renderer
    from src.pathtracer.preview.display import show_preview
    from src.pathtracer.preview.export import PPMWriter
    from src.pathtracer.scene.presets import (
        create_random_spheres_scene,
        create_three_spheres_scene,
    )

    overrides: dict[str, Any] = {}
    if width is not None:
        overrides["image_width"] = width
    if samples is not None:
        overrides["samples_per_pixel"] = samples
    if max_depth is not None:
        overrides["max_depth"] = max_depth

    if scene == "random":
        world, config = create_random_spheres_scene(np.random.default_rng(seed), **overrides)
    else:
        world, config = create_three_spheres_scene(**overrides)

    renderer = Renderer(config, workers=workers, seed=seed)

    if not quiet:
        print(
            f"Rendering {renderer.width}x{renderer.height} at "
            f"{config.samples_per_pixel} spp with {renderer.workers} workers...",
            file=sys.stderr,
        )

    start_time = time.time()

    def progress_callback(remaining: int, total: int) -> None:
        if not quiet:
            print(f"\rSections Remaining: {remaining}/{total} ", end="", file=sys.stderr, flush=True)

    output_file = Path(output_path) if output_path is not None else None

    if output_file is None:
        renderer.render(world, output=PPMWriter(sys.stdout), callback=progress_callback)
    elif output_file.suffix.lower() == ".png":
        renderer.render(world, callback=progress_callback)
        renderer.save_image(str(output_file))
    else:
        with output_file.open("w") as stream:
            renderer.render(world, output=PPMWriter(stream), callback=progress_callback)

    if not quiet:
        print("\rDone.                             ", file=sys.stderr)
        if output_file is not None:
            print(f"Saved to: {output_file.absolute()}", file=sys.stderr)
        print(f"Total time: {time.time() - start_time:.2f}s", file=sys.stderr)

    if preview:
        show_preview(renderer.get_image_numpy(), gamma=2.0)

    return output_file


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    args = parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )

    try:
        render_spheres(
            scene=args.scene,
            width=args.width,
            samples=args.samples,
            max_depth=args.max_depth,
            workers=args.workers,
            seed=args.seed,
            output_path=args.output,
            preview=args.preview,
            quiet=args.quiet,
        )
        return 0
    except (ValueError, OSError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())

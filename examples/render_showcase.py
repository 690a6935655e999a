#!/usr/bin/env python3
"""Render the showcase scene.

This script renders the eight-sphere showcase scene with the Whitted ray
tracer and writes the result as a binary PPM image. Run without arguments
it produces the reference 1024x768 image in ./out.ppm.

Usage:
    python -m examples.render_showcase [options]

Options:
    --width WIDTH             Image width in pixels (default: 1024)
    --height HEIGHT           Image height in pixels (default: 768)
    --output OUTPUT           Output file path (default: out.ppm)
    --rows-per-batch ROWS     Rows rendered between progress updates (default: 64)
    --quiet                   Suppress progress output
    --show                    Open a Matplotlib preview window when done

Example:
    python -m examples.render_showcase --width 512 --height 384 --output small.ppm
"""

from __future__ import annotations

import argparse
import sys
import time
from pathlib import Path

import taichi as ti


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        description="Render the Whitted showcase scene.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--width",
        type=int,
        default=1024,
        help="Image width in pixels (default: 1024)",
    )
    parser.add_argument(
        "--height",
        type=int,
        default=768,
        help="Image height in pixels (default: 768)",
    )
    parser.add_argument(
        "--output",
        type=str,
        default="out.ppm",
        help="Output file path, .ppm or .png (default: out.ppm)",
    )
    parser.add_argument(
        "--rows-per-batch",
        type=int,
        default=64,
        help="Rows rendered between progress updates (default: 64)",
    )
    parser.add_argument(
        "--quiet",
        action="store_true",
        help="Suppress progress output",
    )
    parser.add_argument(
        "--show",
        action="store_true",
        help="Open a Matplotlib preview window when done",
    )
    return parser.parse_args(argv)


def render_showcase(
    width: int = 1024,
    height: int = 768,
    output_path: str = "out.ppm",
    rows_per_batch: int = 64,
    quiet: bool = False,
    show: bool = False,
) -> Path:
    """Render the showcase scene and save it to a file.

    Args:
        width: Image width in pixels.
        height: Image height in pixels.
        output_path: Output file path; a .png suffix writes PNG, anything
            else writes PPM.
        rows_per_batch: Rows rendered between progress updates.
        quiet: If True, suppress progress output.
        show: If True, open a preview window after saving.

    Returns:
        Path to the saved image file.
    """
    # Lazy imports to allow Taichi initialization first
    from src.whitted.core.renderer import render
    from src.whitted.preview.export import save_png, save_ppm
    from src.whitted.scene.showcase import create_showcase_scene

    if not quiet:
        print(f"Creating showcase scene ({width}x{height})...")

    scene, camera = create_showcase_scene(width, height)

    start_time = time.time()

    def progress_callback(rows_done: int, total_rows: int) -> None:
        if not quiet:
            elapsed = time.time() - start_time
            progress_pct = (rows_done / total_rows) * 100 if total_rows > 0 else 0
            print(
                f"\r  Progress: {rows_done}/{total_rows} rows "
                f"({progress_pct:.1f}%) - {elapsed:.1f}s",
                end="",
                flush=True,
            )

    image = render(scene, camera, rows_per_batch=rows_per_batch, callback=progress_callback)

    if not quiet:
        print()  # Newline after progress

    output_file = Path(output_path)
    if output_file.suffix.lower() == ".png":
        save_png(image, output_file)
    else:
        save_ppm(image, output_file)

    total_time = time.time() - start_time
    if not quiet:
        print(f"Saved to: {output_file.absolute()}")
        print(f"Total time: {total_time:.2f}s")

    if show:
        from src.whitted.preview.display import show_preview

        show_preview(image)

    return output_file


def main() -> int:
    """Main entry point."""
    args = parse_args()

    # Use GPU if available, fall back to CPU
    try:
        ti.init(arch=ti.gpu)
        if not args.quiet:
            print("Using GPU backend")
    except Exception:
        ti.init(arch=ti.cpu)
        if not args.quiet:
            print("Using CPU backend")

    try:
        render_showcase(
            width=args.width,
            height=args.height,
            output_path=args.output,
            rows_per_batch=args.rows_per_batch,
            quiet=args.quiet,
            show=args.show,
        )
        return 0
    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())

#!/usr/bin/env python3
"""
spheretrace - A Python Path Tracer

Main entry point for rendering the built-in scenes.
"""

import argparse
import logging
import sys
import time

from spheretrace.renderer import Renderer, RenderSettings
from spheretrace.scenes import SCENES


def main(argv=None):
    """Main entry point."""
    parser = argparse.ArgumentParser(
        description='spheretrace - A Python Path Tracer',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog='''
Examples:
  python main.py --scene demo --output render.png
  python main.py --width 600 --height 300 --samples 200 --seed 7 --output demo.png
  python main.py --scene focus --processes --threads 8 --output focus.png
        '''
    )

    parser.add_argument('--width', type=int, default=300, help='Image width (default: 300)')
    parser.add_argument('--height', type=int, default=150, help='Image height (default: 150)')
    parser.add_argument('--samples', type=int, default=100, help='Samples per pixel (default: 100)')
    parser.add_argument('--depth', type=int, default=50, help='Max bounces per path (default: 50)')
    parser.add_argument('--threads', type=int, default=0, help='Number of workers (0=auto)')
    parser.add_argument('--seed', type=int, default=None, help='Random seed for a reproducible render')
    parser.add_argument('--processes', action='store_true',
                        help='Render tiles in worker processes instead of threads')
    parser.add_argument('--output', type=str, default='output/render.png', help='Output filename')
    parser.add_argument('--scene', type=str, default='demo', choices=sorted(SCENES),
                        help='Scene to render (default: demo)')
    parser.add_argument('--verbose', '-v', action='store_true', help='Enable debug logging')

    args = parser.parse_args(argv)

    if args.verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format='%(asctime)s %(name)s %(levelname)s: %(message)s'
        )

    try:
        settings = RenderSettings(
            width=args.width,
            height=args.height,
            samples_per_pixel=args.samples,
            max_depth=args.depth,
            num_threads=args.threads,
            seed=args.seed,
            use_processes=args.processes
        )
    except ValueError as e:
        parser.error(str(e))

    # Print header
    print("=" * 60)
    print("spheretrace Path Tracer")
    print("=" * 60)

    print(f"\nRender Settings:")
    print(f"  Resolution: {settings.width}x{settings.height}")
    print(f"  Samples: {settings.samples_per_pixel}")
    print(f"  Max Depth: {settings.max_depth}")
    print(f"  Workers: {settings.num_threads} ({'processes' if settings.use_processes else 'threads'})")
    print(f"  Seed: {settings.seed}")

    print(f"\nCreating scene: {args.scene}")
    build_world, build_camera = SCENES[args.scene]
    world = build_world()
    camera = build_camera(settings.aspect_ratio)
    print(f"  Objects in scene: {len(world)}")

    renderer = Renderer(settings)

    # Progress tracking
    last_progress = [0]

    def progress_callback(progress: float):
        pct = int(progress * 100)
        if pct > last_progress[0]:
            last_progress[0] = pct
            bar_len = 40
            filled = int(bar_len * progress)
            bar = '█' * filled + '░' * (bar_len - filled)
            print(f'\rRendering: [{bar}] {pct}%', end='', flush=True)

    renderer.set_progress_callback(progress_callback)

    print("\nRendering...")
    start_time = time.time()

    image = renderer.render(world, camera)

    elapsed = time.time() - start_time
    print(f"\nRender completed in {elapsed:.2f} seconds")
    if elapsed > 0:
        print(f"  Samples per second: {(settings.width * settings.height * settings.samples_per_pixel) / elapsed:.0f}")

    print(f"\nSaving to: {args.output}")
    try:
        renderer.save_image(image, args.output)
    except (OSError, ValueError) as e:
        print(f"Error: could not write {args.output}: {e}", file=sys.stderr)
        return 1

    print("\nDone!")
    return 0


if __name__ == '__main__':
    sys.exit(main())

# main.py
"""Render a built-in scene or a Wavefront .obj mesh to a PNG file.

Example:
    python src/main.py --scene glass_spheres --width 300 --height 200 --samples 32
    python src/main.py --obj models/teapot.obj --quality preview --preview
"""
import argparse
import sys
from typing import List, Optional
import numpy as np
from renderer.image_io import save_png
from renderer.raytracer import Renderer
from renderer.settings import QUALITY_LEVELS, TONE_MAPPING_OPERATORS, RenderSettings
from scenes.presets import SCENES, obj_scene

def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Offline Monte-Carlo path tracer.")
    parser.add_argument("--scene", choices=sorted(SCENES), default="sphere_triangle",
                        help="Built-in scene to render (default: sphere_triangle)")
    parser.add_argument("--obj", type=str, default=None,
                        help="Render this .obj mesh instead of a built-in scene")
    parser.add_argument("--width", type=int, default=300, help="Image width (default: 300)")
    parser.add_argument("--height", type=int, default=200, help="Image height (default: 200)")
    parser.add_argument("--quality", choices=sorted(QUALITY_LEVELS), default=None,
                        help="Samples/bounces preset; --samples and --depth override it")
    parser.add_argument("--samples", type=int, default=None,
                        help="Samples per pixel (default: 16)")
    parser.add_argument("--depth", type=int, default=None,
                        help="Maximum bounce depth (default: 8)")
    parser.add_argument("--workers", type=int, default=None,
                        help="Worker processes (default: CPU count)")
    parser.add_argument("--seed", type=int, default=None,
                        help="Render seed for a reproducible image")
    parser.add_argument("--tone-mapping", choices=TONE_MAPPING_OPERATORS, default="gamma",
                        help="Tone mapping operator (default: gamma)")
    parser.add_argument("--output", type=str, default="render.png",
                        help="Output PNG path (default: render.png)")
    parser.add_argument("--preview", action="store_true",
                        help="Show the finished image in a window")
    parser.add_argument("--quiet", action="store_true", help="Suppress progress output")
    return parser.parse_args(argv)

def build_settings(args: argparse.Namespace) -> RenderSettings:
    kwargs = dict(width=args.width, height=args.height, workers=args.workers,
                  seed=args.seed, tone_mapping=args.tone_mapping, verbose=not args.quiet)
    if args.samples is not None:
        kwargs["samples_per_pixel"] = args.samples
    if args.depth is not None:
        kwargs["max_depth"] = args.depth
    if args.quality is not None:
        return RenderSettings.from_quality(args.quality, **kwargs)
    return RenderSettings(**kwargs)

def show_preview(pixels: np.ndarray, caption: str = "Render"):
    """Display an RGBA image (row 0 at the top) until the window is closed."""
    import pygame

    height, width = pixels.shape[0], pixels.shape[1]
    pygame.init()
    try:
        screen = pygame.display.set_mode((width, height))
        pygame.display.set_caption(caption)
        # surfarray is indexed [x, y]
        frame_surface = pygame.surfarray.make_surface(
            np.ascontiguousarray(pixels[:, :, :3].transpose(1, 0, 2)))
        screen.blit(frame_surface, (0, 0))
        pygame.display.flip()

        clock = pygame.time.Clock()
        running = True
        while running:
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    running = False
                elif event.type == pygame.KEYDOWN and event.key == pygame.K_ESCAPE:
                    running = False
            clock.tick(30)
    finally:
        pygame.quit()

def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    try:
        settings = build_settings(args)
        builder = obj_scene(args.obj) if args.obj else SCENES[args.scene]
        camera, world = builder(settings.aspect_ratio)
    except (ValueError, KeyError, FileNotFoundError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    if not args.quiet:
        print(f"Scene: {args.obj or args.scene}")
        print(f"Settings: {settings}")

    renderer = Renderer(settings)
    try:
        pixels = renderer.render(camera, world)
    except KeyboardInterrupt:
        print("Interrupted", file=sys.stderr)
        return 130

    save_png(pixels, args.output)
    if not args.quiet:
        print(f"Saved {args.output} ({renderer.last_render_time:.2f}s)")

    if args.preview:
        show_preview(pixels, caption=f"{args.obj or args.scene} - {args.output}")
    return 0

if __name__ == "__main__":
    sys.exit(main())

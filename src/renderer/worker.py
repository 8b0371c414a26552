# renderer/worker.py
"""
Per-row rendering work. This module is what a render process imports, so it
stays clear of the tone mapping kernel and the numba import.
"""
import os
import random
import time
from typing import Optional, Tuple
import numpy as np
from camera.camera import Camera
from core.vector import Vector3
from geometry.world import World
from renderer.integrator import ray_color
from renderer.settings import RenderSettings

def _seed_from_sequence(entropy: int, spawn_key: tuple) -> int:
    state = np.random.SeedSequence(entropy, spawn_key=spawn_key).generate_state(2)
    return (int(state[0]) << 32) | int(state[1])

def worker_seed(worker_id: int, seed: Optional[int] = None) -> int:
    """
    Seed of a worker's private random stream. Without a render seed the
    high-resolution clock supplies the entropy; the worker id keeps streams
    created in the same instant apart.
    """
    entropy = time.perf_counter_ns() if seed is None else seed
    return _seed_from_sequence(entropy, (0, worker_id))

def row_seed(seed: int, row: int) -> int:
    """Seed for the samples of one scanline of a seeded render."""
    return _seed_from_sequence(seed, (1, row))

def make_worker_rng(worker_id: int, seed: Optional[int] = None) -> random.Random:
    return random.Random(worker_seed(worker_id, seed))

def render_pixel(x: int, y: int, camera: Camera, world: World,
                 settings: RenderSettings, rng: random.Random) -> Vector3:
    """
    Average of samples_per_pixel path-traced samples, each through a random
    point of the pixel footprint. y = 0 is the bottom scanline.
    """
    color = Vector3(0.0, 0.0, 0.0)
    for _ in range(settings.samples_per_pixel):
        # Pixel x covers [x, x + 1) of width, so s and t stay within [0, 1]
        s = (x + rng.random()) / settings.width
        t = (y + rng.random()) / settings.height
        ray = camera.get_ray(s, t, rng)
        color = color + ray_color(ray, world, settings.max_depth, rng)
    return color / settings.samples_per_pixel

def render_row(y: int, camera: Camera, world: World, settings: RenderSettings,
               rng: random.Random) -> np.ndarray:
    """
    Linear colors of scanline y as a (width, 3) array. With a render seed the
    stream is restarted from (seed, y) first, so the row does not depend on
    which worker renders it.
    """
    if settings.seed is not None:
        rng.seed(row_seed(settings.seed, y))
    row = np.empty((settings.width, 3), dtype=np.float64)
    for x in range(settings.width):
        color = render_pixel(x, y, camera, world, settings, rng)
        row[x, 0] = color.x
        row[x, 1] = color.y
        row[x, 2] = color.z
    return row

# Scene and stream of the current render process, set once by init_process.
_process_state = {}

def init_process(camera: Camera, world: World, settings: RenderSettings):
    """Pool initializer: receive the scene once and open a private stream."""
    _process_state["camera"] = camera
    _process_state["world"] = world
    _process_state["settings"] = settings
    _process_state["rng"] = make_worker_rng(os.getpid(), settings.seed)

def render_row_in_process(y: int) -> Tuple[int, np.ndarray]:
    state = _process_state
    return y, render_row(y, state["camera"], state["world"], state["settings"], state["rng"])

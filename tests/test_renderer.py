"""Unit tests for the multiprocess renderer.

Tests cover:
- Worker and row seeding
- Reproducibility and independence from the worker count
- Pixel footprint and values of small end-to-end renders
- Cancellation, worker process failures and progress reporting
"""

import math
import os
import random
import time

import numpy as np
import pytest

from camera.camera import Camera
from core.ray import Ray
from core.vector import Vector3
from geometry.world import World
from renderer.raytracer import ROWS_IN_FLIGHT_PER_WORKER, Renderer
from renderer.worker import render_pixel, row_seed, worker_seed
from renderer.settings import RenderSettings
from renderer.tone_mapping import tone_map
from scenes.presets import single_sphere


def small_camera(aspect_ratio):
    return Camera(Vector3(0, 0.2, 1), Vector3(0, 0, -1), Vector3(0, 1, 0), 70.0, aspect_ratio)


class FailingWorld(World):
    def hit(self, ray, t_min, t_max):
        raise RuntimeError("intersection failed")


class DriverPidWorld(World):
    """Fails any intersection query made in the process that built it."""
    def __init__(self):
        super().__init__()
        self.driver_pid = os.getpid()

    def hit(self, ray, t_min, t_max):
        if os.getpid() == self.driver_pid:
            raise RuntimeError("row rendered in the driver process")
        return super().hit(ray, t_min, t_max)


class CancellingWorld(World):
    """
    Cancels the render from inside the first intersection query. It holds the
    renderer, so it only works with the in-process single worker.
    """
    def __init__(self, renderer):
        super().__init__()
        self.renderer = renderer

    def hit(self, ray, t_min, t_max):
        self.renderer.cancel()
        return super().hit(ray, t_min, t_max)


class RecordingCamera:
    """Records the (s, t) of every ray and looks straight up into the sky."""
    def __init__(self):
        self.samples = []

    def get_ray(self, s, t, rng):
        self.samples.append((s, t))
        return Ray(Vector3(0, 0, 0), Vector3(0, 1, 0))


class FixedRandom(random.Random):
    """Stream that always returns the same number."""
    def __init__(self, value):
        super().__init__(0)
        self.value = value

    def random(self):
        return self.value


class TestSeeding:
    """Tests for the per-worker and per-row seeds."""

    def test_worker_seed_is_deterministic_with_render_seed(self):
        assert worker_seed(3, seed=42) == worker_seed(3, seed=42)

    def test_workers_get_distinct_streams(self):
        assert len({worker_seed(i, seed=42) for i in range(8)}) == 8
        assert len({worker_seed(i) for i in range(8)}) == 8

    def test_row_seeds_are_distinct(self):
        seeds = {row_seed(7, y) for y in range(100)}
        assert len(seeds) == 100
        assert row_seed(7, 0) != row_seed(8, 0)

    def test_row_seed_differs_from_worker_seed(self):
        assert row_seed(5, 0) != worker_seed(0, seed=5)


class TestRenderPixel:
    """Tests for the per-pixel estimator."""

    def test_averages_sky_samples(self):
        settings = RenderSettings(width=4, height=3, samples_per_pixel=3, max_depth=2)
        camera = small_camera(settings.aspect_ratio)
        world = World()
        color = render_pixel(1, 2, camera, world, settings, random.Random(9))

        rng = random.Random(9)
        expected = Vector3(0, 0, 0)
        for _ in range(3):
            s = (1 + rng.random()) / 4
            t = (2 + rng.random()) / 3
            expected = expected + world.ambient_color(camera.get_ray(s, t, rng))
        expected = expected / 3
        assert color.x == pytest.approx(expected.x)
        assert color.y == pytest.approx(expected.y)
        assert color.z == pytest.approx(expected.z)

    def test_single_pixel_image(self):
        settings = RenderSettings(width=1, height=1, samples_per_pixel=2, max_depth=1)
        color = render_pixel(0, 0, small_camera(1.0), World(), settings, random.Random(1))
        assert all(math.isfinite(c) for c in color)

    def test_samples_stay_inside_the_image_plane(self):
        settings = RenderSettings(width=4, height=3, samples_per_pixel=2, max_depth=1)
        camera = RecordingCamera()
        render_pixel(3, 2, camera, World(), settings, FixedRandom(0.999999))
        render_pixel(0, 0, camera, World(), settings, FixedRandom(0.0))
        for s, t in camera.samples:
            assert 0.0 <= s <= 1.0
            assert 0.0 <= t <= 1.0
        # The last column and top row reach up to, but not past, the far edges
        assert camera.samples[0][0] == pytest.approx(1.0, abs=1e-5)
        assert camera.samples[0][1] == pytest.approx(1.0, abs=1e-5)
        assert camera.samples[-1] == (0.0, 0.0)

    def test_pixels_tile_the_image_plane(self):
        settings = RenderSettings(width=4, height=3, samples_per_pixel=1, max_depth=1)
        camera = RecordingCamera()
        render_pixel(1, 1, camera, World(), settings, FixedRandom(0.0))
        render_pixel(2, 2, camera, World(), settings, FixedRandom(0.0))
        assert camera.samples == [(0.25, pytest.approx(1 / 3)), (0.5, pytest.approx(2 / 3))]


class TestRender:
    """End-to-end renders of small images."""

    def test_output_shape_and_type(self, mixed_world):
        settings = RenderSettings(width=6, height=4, samples_per_pixel=1, max_depth=2,
                                  workers=2, seed=1)
        renderer = Renderer(settings)
        image = renderer.render(small_camera(settings.aspect_ratio), mixed_world)
        assert image.shape == (4, 6, 4)
        assert image.dtype == np.uint8
        assert (image[:, :, 3] == 255).all()
        assert renderer.rows_rendered == 4
        assert not renderer.cancelled
        assert renderer.last_render_time > 0

    def test_seeded_render_is_reproducible_across_worker_counts(self, mixed_world):
        images = []
        for workers in (1, 4, 1):
            settings = RenderSettings(width=8, height=6, samples_per_pixel=2, max_depth=3,
                                      workers=workers, seed=7)
            images.append(Renderer(settings).render(small_camera(settings.aspect_ratio),
                                                    mixed_world))
        assert np.array_equal(images[0], images[1])
        assert np.array_equal(images[0], images[2])

    def test_parallel_rows_render_in_worker_processes(self):
        settings = RenderSettings(width=3, height=8, samples_per_pixel=1, max_depth=1,
                                  workers=2, seed=5)
        renderer = Renderer(settings)
        image = renderer.render(small_camera(settings.aspect_ratio), DriverPidWorld())
        assert renderer.rows_rendered == 8
        assert (image[:, :, 3] == 255).all()

    def test_single_worker_renders_in_process(self):
        settings = RenderSettings(width=3, height=2, samples_per_pixel=1, max_depth=1,
                                  workers=1, seed=5)
        with pytest.raises(RuntimeError, match="driver process"):
            Renderer(settings).render(small_camera(settings.aspect_ratio), DriverPidWorld())

    def test_different_seeds_differ(self, mixed_world):
        images = []
        for seed in (1, 2):
            settings = RenderSettings(width=8, height=6, samples_per_pixel=1, max_depth=3,
                                      workers=2, seed=seed)
            images.append(Renderer(settings).render(small_camera(settings.aspect_ratio),
                                                    mixed_world))
        assert not np.array_equal(images[0], images[1])

    def test_empty_world_is_sky_gradient(self):
        settings = RenderSettings(width=5, height=4, samples_per_pixel=2, max_depth=3,
                                  workers=3, seed=3)
        camera = small_camera(settings.aspect_ratio)
        world = World()
        renderer = Renderer(settings)
        renderer.render(camera, world)

        for y in range(settings.height):
            rng = random.Random(row_seed(3, y))
            for x in range(settings.width):
                expected = Vector3(0, 0, 0)
                for _ in range(2):
                    s = (x + rng.random()) / 5
                    t = (y + rng.random()) / 4
                    expected = expected + world.ambient_color(camera.get_ray(s, t, rng))
                expected = expected / 2
                assert list(renderer.linear_buffer[y, x]) == pytest.approx(list(expected))

    def test_single_sphere_pixels(self):
        settings = RenderSettings(width=9, height=7, samples_per_pixel=1, max_depth=0,
                                  workers=2, seed=11)
        camera, world = single_sphere(settings.aspect_ratio)
        image = Renderer(settings).render(camera, world)

        # Center pixel sees the sphere; with no bounces it stays black
        assert list(image[3, 4]) == [0, 0, 0, 255]

        # Bottom-left pixel sees the sky through its first two samples
        rng = random.Random(row_seed(11, 0))
        s = rng.random() / 9
        t = rng.random() / 7
        sky = world.ambient_color(camera.get_ray(s, t, rng))
        expected = tone_map(np.array([[list(sky)]]))
        assert list(image[6, 0]) == list(expected[0, 0])

    def test_unseeded_renders_complete(self, mixed_world):
        settings = RenderSettings(width=4, height=3, samples_per_pixel=1, max_depth=2, workers=2)
        image = Renderer(settings).render(small_camera(settings.aspect_ratio), mixed_world)
        assert (image[:, :, 3] == 255).all()

    def test_verbose_prints_progress(self, capsys):
        settings = RenderSettings(width=3, height=2, samples_per_pixel=1, max_depth=1,
                                  workers=1, seed=0, verbose=True)
        Renderer(settings).render(small_camera(settings.aspect_ratio), World())
        out = capsys.readouterr().out
        assert "Rendering 3x2" in out
        assert "Progress: 100% (2/2 rows)" in out
        assert "Render finished: 2/2 rows" in out


class TestCancellation:
    """Tests for stopping a render early."""

    def test_cancel_keeps_rows_in_flight(self):
        settings = RenderSettings(width=4, height=5, samples_per_pixel=1, max_depth=1,
                                  workers=1, seed=2)
        renderer = Renderer(settings)
        image = renderer.render(small_camera(settings.aspect_ratio), CancellingWorld(renderer))

        assert renderer.cancelled
        assert renderer.rows_rendered == 1
        # The top scanline is rendered first and finishes; the rest stay transparent
        assert (image[0, :, 3] == 255).all()
        assert (image[1:] == 0).all()

    def test_cancel_from_progress_stops_handing_out_rows(self):
        settings = RenderSettings(width=2, height=20, samples_per_pixel=1, max_depth=1,
                                  workers=2, seed=4)
        renderer = Renderer(settings)
        image = renderer.render(small_camera(settings.aspect_ratio), World(),
                                progress=lambda done, total: renderer.cancel())

        # Rows already submitted finish; nothing past them is claimed
        in_flight = settings.workers * ROWS_IN_FLIGHT_PER_WORKER
        assert renderer.cancelled
        assert renderer.rows_rendered == in_flight
        assert (image[:in_flight, :, 3] == 255).all()
        assert (image[in_flight:] == 0).all()

    def test_render_after_cancel_starts_fresh(self):
        settings = RenderSettings(width=4, height=3, samples_per_pixel=1, max_depth=1,
                                  workers=2, seed=2)
        renderer = Renderer(settings)
        renderer.cancel()
        image = renderer.render(small_camera(settings.aspect_ratio), World())
        assert not renderer.cancelled
        assert (image[:, :, 3] == 255).all()

    def test_worker_failure_propagates(self):
        settings = RenderSettings(width=4, height=6, samples_per_pixel=1, max_depth=1,
                                  workers=3, seed=0)
        with pytest.raises(RuntimeError, match="intersection failed"):
            Renderer(settings).render(small_camera(settings.aspect_ratio), FailingWorld())


class TestProgress:
    """Tests for the progress callback."""

    def test_callback_counts_rows_in_order(self):
        calls = []
        settings = RenderSettings(width=3, height=6, samples_per_pixel=1, max_depth=1,
                                  workers=3, seed=0)
        Renderer(settings).render(small_camera(settings.aspect_ratio), World(),
                                  progress=lambda done, total: calls.append((done, total)))
        assert calls == [(i, 6) for i in range(1, 7)]

    def test_slow_callback_still_reaches_the_total(self):
        calls = []

        def progress(done, total):
            if not calls:
                # Workers keep finishing rows while the first report is stuck
                time.sleep(0.5)
            calls.append((done, total))

        settings = RenderSettings(width=1, height=300, samples_per_pixel=1, max_depth=1,
                                  workers=4, seed=0)
        renderer = Renderer(settings)
        renderer.render(small_camera(settings.aspect_ratio), World(), progress=progress)
        assert calls[-1] == (300, 300)
        assert renderer.rows_rendered == 300
        assert calls == [(i, 300) for i in range(1, 301)]

    def test_failing_callback_cancels_render(self):
        def progress(done, total):
            raise ValueError("stop")

        settings = RenderSettings(width=3, height=6, samples_per_pixel=1, max_depth=1,
                                  workers=2, seed=0)
        renderer = Renderer(settings)
        with pytest.raises(ValueError, match="stop"):
            renderer.render(small_camera(settings.aspect_ratio), World(), progress=progress)
        assert renderer.cancelled

# renderer/raytracer.py
import threading
import time
from concurrent.futures import ProcessPoolExecutor, wait, FIRST_COMPLETED
from typing import Callable, Optional
import numpy as np
from camera.camera import Camera
from geometry.world import World
from renderer.settings import RenderSettings
from renderer.tone_mapping import tone_map
from renderer.worker import init_process, make_worker_rng, render_row, render_row_in_process

# Rows submitted ahead per process; a cancel lets at most these finish.
ROWS_IN_FLIGHT_PER_WORKER = 2

# Progress is printed every this many percent when verbose.
PROGRESS_PRINT_STEP = 10

ProgressCallback = Callable[[int, int], None]

class Renderer:
    """
    Multiprocess scanline renderer.

    Scanlines are claimed one at a time, top row first, by a fixed pool of
    worker processes. Each process receives the camera and world once, keeps
    a private random stream, and sends back the linear colors of every row it
    renders; only this process writes the pixel buffer, one row per result.
    With a single worker the rows are rendered in the calling process.

    With a seed in the settings, each row restarts its stream from
    (seed, row), so the image does not depend on the number of workers or on
    which worker rendered which row.
    """
    def __init__(self, settings: RenderSettings):
        self.settings = settings
        self.width = settings.width
        self.height = settings.height

        self._stop = threading.Event()
        self._cancel_requested = False
        self._last_printed = -PROGRESS_PRINT_STEP

        self.linear_buffer: Optional[np.ndarray] = None
        self.rows_done: Optional[np.ndarray] = None
        self.rows_rendered = 0
        self.last_render_time = 0.0

    @property
    def cancelled(self) -> bool:
        return self._cancel_requested

    def cancel(self):
        """
        Stop handing out rows. Rows already in flight are finished; rows never
        claimed stay transparent in the output. Safe to call from any thread.
        """
        self._cancel_requested = True
        self._stop.set()

    def render(self, camera: Camera, world: World,
               progress: Optional[ProgressCallback] = None) -> np.ndarray:
        """
        Render the world as seen by camera.

        Args:
            camera: Fully constructed camera.
            world: Fully constructed world; must not change during the render.
            progress: Optional callback receiving (finished_rows, total_rows),
                always called from the calling thread.

        Returns:
            np.ndarray: (height, width, 4) uint8 RGBA image, row 0 at the top.
        """
        settings = self.settings
        self._stop.clear()
        self._cancel_requested = False
        self._last_printed = -PROGRESS_PRINT_STEP
        self.linear_buffer = np.zeros((self.height, self.width, 3), dtype=np.float64)
        self.rows_done = np.zeros(self.height, dtype=np.bool_)

        if settings.verbose:
            print(f"Rendering {self.width}x{self.height}, {settings.samples_per_pixel} spp, "
                  f"max depth {settings.max_depth}, {settings.workers} workers, "
                  f"{len(world)} objects")

        start = time.perf_counter()
        try:
            if settings.workers == 1:
                self._render_serial(camera, world, progress)
            else:
                self._render_parallel(camera, world, progress)
        except BaseException:
            # Ctrl-C, a failing callback or a failed row: no new rows are claimed.
            self.cancel()
            raise
        finally:
            self.last_render_time = time.perf_counter() - start
            self.rows_rendered = int(self.rows_done.sum())

        if settings.verbose:
            status = "cancelled" if self.cancelled else "finished"
            print(f"Render {status}: {self.rows_rendered}/{self.height} rows "
                  f"in {self.last_render_time:.2f}s")

        return tone_map(self.linear_buffer, settings.tone_mapping, self.rows_done)

    def _rows(self):
        return iter(range(self.height - 1, -1, -1))

    def _render_serial(self, camera: Camera, world: World,
                       progress: Optional[ProgressCallback]):
        rng = make_worker_rng(0, self.settings.seed)
        for y in self._rows():
            if self._stop.is_set():
                break
            self._store_row(y, render_row(y, camera, world, self.settings, rng), progress)

    def _render_parallel(self, camera: Camera, world: World,
                         progress: Optional[ProgressCallback]):
        settings = self.settings
        rows = self._rows()
        max_in_flight = settings.workers * ROWS_IN_FLIGHT_PER_WORKER

        with ProcessPoolExecutor(max_workers=settings.workers, initializer=init_process,
                                 initargs=(camera, world, settings)) as pool:
            pending = set()
            try:
                while True:
                    while not self._stop.is_set() and len(pending) < max_in_flight:
                        y = next(rows, None)
                        if y is None:
                            break
                        pending.add(pool.submit(render_row_in_process, y))
                    if not pending:
                        break
                    done, pending = wait(pending, return_when=FIRST_COMPLETED)
                    for future in done:
                        # Re-raises a failure from the worker process
                        y, row = future.result()
                        self._store_row(y, row, progress)
            except BaseException:
                for future in pending:
                    future.cancel()
                raise

    def _store_row(self, y: int, row: np.ndarray, progress: Optional[ProgressCallback]):
        self.linear_buffer[y] = row
        self.rows_done[y] = True
        self._report(int(self.rows_done.sum()), progress)

    def _report(self, finished: int, progress: Optional[ProgressCallback]):
        total = self.height
        if progress is not None:
            progress(finished, total)
        if self.settings.verbose:
            percent = 100 * finished // total
            if percent - self._last_printed >= PROGRESS_PRINT_STEP or finished == total:
                print(f"Progress: {percent}% ({finished}/{total} rows)")
                self._last_printed = percent

    def __repr__(self) -> str:
        return f"Renderer({self.settings})"

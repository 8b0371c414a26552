# renderer/settings.py
import os
from typing import Optional

TONE_MAPPING_OPERATORS = ("gamma", "reinhard")

# Named quality presets: samples per pixel and maximum bounce depth.
QUALITY_LEVELS = {
    "preview": {"samples": 4, "bounces": 4},
    "balanced": {"samples": 32, "bounces": 8},
    "high_quality": {"samples": 128, "bounces": 16},
}

def default_worker_count() -> int:
    return os.cpu_count() or 1

class RenderSettings:
    """
    Scalar render configuration, validated at construction.

    Args:
        width: Image width in pixels.
        height: Image height in pixels.
        samples_per_pixel: Camera samples averaged per pixel.
        max_depth: Maximum number of bounces after the camera ray.
        workers: Number of worker processes; 1 renders in the calling process.
            Has no effect on the image.
        seed: Render seed. With a seed the image is reproducible; without
            one each worker stream is seeded from the clock.
        tone_mapping: "gamma" or "reinhard".
        verbose: Print progress while rendering.
    """
    def __init__(self, width: int = 300, height: int = 200,
                 samples_per_pixel: int = 16, max_depth: int = 8,
                 workers: Optional[int] = None, seed: Optional[int] = None,
                 tone_mapping: str = "gamma", verbose: bool = False):
        if width <= 0 or height <= 0:
            raise ValueError(f"Image size must be positive, got {width}x{height}")
        if samples_per_pixel <= 0:
            raise ValueError(f"samples_per_pixel must be positive, got {samples_per_pixel}")
        if max_depth < 0:
            raise ValueError(f"max_depth must be non-negative, got {max_depth}")
        if workers is None:
            workers = default_worker_count()
        if workers <= 0:
            raise ValueError(f"workers must be positive, got {workers}")
        if seed is not None and seed < 0:
            raise ValueError(f"seed must be non-negative, got {seed}")
        if tone_mapping not in TONE_MAPPING_OPERATORS:
            raise ValueError(f"Unknown tone mapping '{tone_mapping}', "
                             f"expected one of {', '.join(TONE_MAPPING_OPERATORS)}")

        self.width = width
        self.height = height
        self.samples_per_pixel = samples_per_pixel
        self.max_depth = max_depth
        self.workers = workers
        self.seed = seed
        self.tone_mapping = tone_mapping
        self.verbose = verbose

    @property
    def aspect_ratio(self) -> float:
        return self.width / self.height

    @classmethod
    def from_quality(cls, quality: str, **kwargs) -> "RenderSettings":
        """Build settings from a QUALITY_LEVELS preset; kwargs override it."""
        if quality not in QUALITY_LEVELS:
            raise KeyError(f"Unknown quality level '{quality}', "
                           f"expected one of {', '.join(QUALITY_LEVELS)}")
        preset = QUALITY_LEVELS[quality]
        kwargs.setdefault("samples_per_pixel", preset["samples"])
        kwargs.setdefault("max_depth", preset["bounces"])
        return cls(**kwargs)

    def __repr__(self) -> str:
        return (f"RenderSettings({self.width}x{self.height}, "
                f"spp={self.samples_per_pixel}, max_depth={self.max_depth}, "
                f"workers={self.workers}, seed={self.seed}, "
                f"tone_mapping={self.tone_mapping!r})")

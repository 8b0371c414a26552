# renderer/tone_mapping.py
import math
from typing import Optional
import numpy as np
from numba import njit

@njit(cache=True)
def tone_mapping_kernel(linear_image, rows_done, reinhard, output_image):
    """
    Converts averaged linear radiance (sampling rows, row 0 at the bottom)
    into 8-bit RGBA with row 0 at the top. Rows not marked done are left
    untouched.
    """
    height = linear_image.shape[0]
    width = linear_image.shape[1]
    for y in range(height):
        if not rows_done[y]:
            continue
        out_y = height - 1 - y
        for x in range(width):
            for c in range(3):
                v = linear_image[y, x, c]
                # Also maps NaN to black.
                if not v >= 0.0:
                    v = 0.0
                if reinhard:
                    v = v / (1.0 + v)
                # Gamma 2 correction
                v = math.sqrt(v)
                if v > 1.0:
                    v = 1.0
                output_image[out_y, x, c] = int(v * 255.0)
            output_image[out_y, x, 3] = 255

def tone_map(linear: np.ndarray, operator: str = "gamma",
             rows_done: Optional[np.ndarray] = None) -> np.ndarray:
    """
    Apply tone mapping to a (height, width, 3) linear image.

    Args:
        linear: Averaged linear radiance per pixel, indexed by sampling row.
        operator: "gamma" (square root) or "reinhard" (c / (1 + c), then gamma).
        rows_done: Optional boolean mask of rendered rows; other rows stay
            transparent black.

    Returns:
        np.ndarray: (height, width, 4) uint8 RGBA image, row 0 at the top.
    """
    if operator not in ("gamma", "reinhard"):
        raise ValueError(f"Unknown tone mapping operator '{operator}'")
    if linear.ndim != 3 or linear.shape[2] != 3:
        raise ValueError(f"Expected a (height, width, 3) image, got shape {linear.shape}")

    height, width = linear.shape[0], linear.shape[1]
    if rows_done is None:
        rows_done = np.ones(height, dtype=np.bool_)
    output = np.zeros((height, width, 4), dtype=np.uint8)
    tone_mapping_kernel(np.ascontiguousarray(linear, dtype=np.float64),
                        np.ascontiguousarray(rows_done, dtype=np.bool_),
                        operator == "reinhard", output)
    return output

# renderer/image_io.py
import os
import numpy as np
from PIL import Image

def save_png(pixels: np.ndarray, path: str) -> str:
    """
    Write an 8-bit RGBA (or RGB) image, row 0 at the top, to a PNG file.

    Returns:
        The path written.
    """
    if pixels.dtype != np.uint8 or pixels.ndim != 3 or pixels.shape[2] not in (3, 4):
        raise ValueError(f"Expected a (height, width, 3|4) uint8 array, "
                         f"got {pixels.dtype} {pixels.shape}")
    directory = os.path.dirname(path)
    if directory:
        os.makedirs(directory, exist_ok=True)
    # Pillow infers RGB or RGBA from the channel count.
    Image.fromarray(pixels).save(path)
    return path

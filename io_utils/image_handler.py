# io_utils/image_handler.py
"""
Image read/write helpers using Pillow.

Functions:
- read_image(path) -> (H x W int64 matrix, meta); colour input is converted to luminance
- save_image(path, matrix) -> writes an 8-bit grayscale image
- normalize_to_uint8(matrix) -> min/max stretch of a real or complex matrix for display
"""

import logging
from typing import Tuple

import numpy as np
import pillow_avif  # noqa: F401  registers the AVIF codec with Pillow
from PIL import Image

logger = logging.getLogger(__name__)

IMAGE_EXTENSIONS = (".png", ".tif", ".tiff", ".jpg", ".jpeg", ".bmp", ".gif", ".avif")


def is_image_path(path: str) -> bool:
    return str(path).lower().endswith(IMAGE_EXTENSIONS)


def read_image(path: str) -> Tuple[np.ndarray, dict]:
    """
    Read an image from `path` and return (matrix, meta).
    - The matrix is a 2-D int64 array of 8-bit luminance values.
    - Meta contains the original mode and size (W, H).
    """
    img = Image.open(path)
    mode = img.mode
    # 16-bit grayscale keeps its full range, everything else becomes 8-bit luminance
    if mode in ("I;16", "I;16B", "I;16L", "I"):
        arr = np.asarray(img, dtype=np.int64)
    else:
        arr = np.asarray(img.convert("L")).astype(np.int64)
    meta = {"mode": mode, "size": img.size}
    logger.debug("read_image: %s mode=%s shape=%s", path, mode, arr.shape)
    return arr, meta


def save_image(path: str, array: np.ndarray):
    """
    Save a 2-D matrix to `path` as an 8-bit grayscale image.
    Values are rounded and clipped to 0..255.
    """
    array = np.asarray(array)
    if array.ndim != 2:
        raise ValueError("save_image expects an HxW matrix.")
    if np.iscomplexobj(array):
        array = np.real(array)
    arr = np.clip(np.rint(array), 0, 255).astype(np.uint8)
    Image.fromarray(arr).save(path)
    logger.info("Wrote image %s (%dx%d)", path, arr.shape[0], arr.shape[1])
    return path


def normalize_to_uint8(arr: np.ndarray, log_scale: bool = False) -> np.ndarray:
    """
    Normalize a numeric matrix to uint8 for display.
    Complex input is replaced by its modulus; log_scale applies log1p first.
    """
    a = np.abs(arr) if np.iscomplexobj(arr) else np.asarray(arr, dtype=np.float64)
    if log_scale:
        a = np.log1p(np.abs(a))
    a = np.nan_to_num(a.astype(np.float64), nan=0.0)
    vmin = float(np.min(a)) if a.size else 0.0
    vmax = float(np.max(a)) if a.size else 0.0
    if vmax <= vmin:
        # constant matrix: map to zeros
        return np.zeros(a.shape, dtype=np.uint8)
    scaled = (a - vmin) / (vmax - vmin)
    return (scaled * 255.0).clip(0, 255).astype(np.uint8)

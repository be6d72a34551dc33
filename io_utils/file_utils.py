# io_utils/file_utils.py
"""
Raw-text matrix persistence and file naming helpers.

Text format: one matrix row per line, values separated by single spaces.
Complex values are written as (re,im).
"""

import logging
import os
from typing import List

import numpy as np

from .image_handler import is_image_path, read_image

logger = logging.getLogger(__name__)

DEFAULT_MATRIX_EXT = "dat"
_DTYPES = {"int": np.int64, "float": np.float64, "complex": np.complex128}


def make_result_filename(
    input_path: str,
    transform_name: str,
    ext: str = DEFAULT_MATRIX_EXT,
    outdir: str = ".",
) -> str:
    base = os.path.splitext(os.path.basename(input_path))[0]
    fname = f"{base}_{transform_name}.{ext}"
    os.makedirs(outdir, exist_ok=True)
    return os.path.join(outdir, fname)


def _format_value(v) -> str:
    if isinstance(v, (complex, np.complexfloating)):
        return f"({repr(float(v.real))},{repr(float(v.imag))})"
    if isinstance(v, (float, np.floating)):
        return repr(float(v))
    return str(int(v))


def _parse_value(token: str) -> complex:
    if token.startswith("(") and token.endswith(")"):
        re_part, im_part = token[1:-1].split(",")
        return complex(float(re_part), float(im_part))
    return complex(float(token))


def write_matrix(path: str, matrix: np.ndarray) -> str:
    """Write a 2-D matrix as space-separated rows, one row per line."""
    arr = np.asarray(matrix)
    if arr.ndim != 2:
        raise ValueError("write_matrix expects a 2D matrix.")
    d = os.path.dirname(path)
    if d:
        os.makedirs(d, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        for row in arr:
            f.write(" ".join(_format_value(v) for v in row))
            f.write("\n")
    logger.info("Wrote %s matrix %s to %s", arr.dtype, arr.shape, path)
    return path


def read_matrix(path: str, dtype: str = "int") -> np.ndarray:
    """
    Read a matrix written by write_matrix.
    dtype is one of "int", "float", "complex". Ragged rows raise ValueError.
    """
    if dtype not in _DTYPES:
        raise ValueError(f"Unknown dtype '{dtype}'. Choose 'int', 'float' or 'complex'.")
    rows: List[List[complex]] = []
    with open(path, "r", encoding="utf-8") as f:
        for line in f:
            tokens = line.split()
            if tokens:
                rows.append([_parse_value(t) for t in tokens])
    if rows and len({len(r) for r in rows}) != 1:
        raise ValueError(f"{path}: rows have different lengths.")
    values = np.array(rows, dtype=np.complex128).reshape(len(rows), len(rows[0]) if rows else 0)
    if dtype == "complex":
        return values
    if np.any(values.imag != 0):
        raise ValueError(f"{path}: complex values found, read with dtype='complex'.")
    real = values.real
    if dtype == "int":
        if not np.all(np.equal(np.floor(real), real)):
            raise ValueError(f"{path}: non-integer values found, read with dtype='float'.")
        return real.astype(np.int64)
    return real.astype(np.float64)


def load_matrix(path: str, dtype: str = "int") -> np.ndarray:
    """Load an image (by extension) or a raw-text matrix."""
    if is_image_path(path):
        return read_image(path)[0]
    return read_matrix(path, dtype=dtype)

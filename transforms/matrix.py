"""
transforms/matrix.py

Matrix substrate shared by every transform.

All matrices are 2-D numpy arrays:
- integer signal/image matrices -> int64
- frequency / magnitude matrices -> complex128
- histogram output -> float64

Helpers here validate and copy caller input so transforms never write into
arrays they do not own.
"""

from typing import Tuple
import numpy as np

from .exceptions import InvalidArgumentError, InvalidShapeError

INT_DTYPE = np.int64
REAL_DTYPE = np.float64
COMPLEX_DTYPE = np.complex128


def is_power_of_two(n: int) -> bool:
    n = int(n)
    return n > 0 and (n & (n - 1)) == 0


def _require_2d(arr: np.ndarray, what: str) -> None:
    if arr.ndim != 2:
        raise InvalidShapeError(f"{what} expects a 2D matrix, got ndim={arr.ndim}.")


def as_int_matrix(matrix, what: str = "transform") -> np.ndarray:
    """
    Return a fresh int64 copy of `matrix`.

    Integer and boolean dtypes are accepted as-is. Floating arrays are accepted
    only when every value is integral and fits in int64; complex, fractional
    or out-of-range input raises InvalidArgumentError.
    """
    arr = np.asarray(matrix)
    _require_2d(arr, what)
    if np.issubdtype(arr.dtype, np.integer) or arr.dtype == np.bool_:
        return arr.astype(INT_DTYPE, copy=True)
    if np.issubdtype(arr.dtype, np.floating):
        if not np.all(np.isfinite(arr)) or not np.all(np.equal(np.floor(arr), arr)):
            raise InvalidArgumentError(f"{what} expects an integer matrix; got non-integral values.")
        info = np.iinfo(INT_DTYPE)
        # float(info.max) rounds up to 2**63, which is already out of range
        if arr.size and (arr.min() < info.min or arr.max() >= float(info.max)):
            raise InvalidArgumentError(f"{what} values do not fit in {np.dtype(INT_DTYPE).name}.")
        return arr.astype(INT_DTYPE)
    raise InvalidArgumentError(f"{what} expects an integer matrix; got dtype {arr.dtype}.")


def as_complex_matrix(matrix, what: str = "transform") -> np.ndarray:
    """Return a fresh complex128 copy of a 2-D numeric matrix."""
    arr = np.asarray(matrix)
    _require_2d(arr, what)
    if not np.issubdtype(arr.dtype, np.number) and arr.dtype != np.bool_:
        raise InvalidArgumentError(f"{what} expects a numeric matrix; got dtype {arr.dtype}.")
    return arr.astype(COMPLEX_DTYPE, copy=True)


def flatten_to_buffer(matrix: np.ndarray) -> np.ndarray:
    """Row-major flatten into a contiguous complex128 buffer (always a copy)."""
    return np.array(matrix, dtype=COMPLEX_DTYPE, order="C").reshape(-1)


def check_fft_extents(shape: Tuple[int, int], what: str) -> None:
    """Both extents must be powers of two for the separable 2-D transform."""
    rows, cols = shape
    if not (is_power_of_two(rows) and is_power_of_two(cols)):
        raise InvalidShapeError(
            f"{what} requires power-of-two extents, got {rows}x{cols}."
        )


def round_half_away(values: np.ndarray) -> np.ndarray:
    """
    Round to nearest integer, halves away from zero (4.5 -> 5, -5.5 -> -6).
    np.rint would round halves to even.
    """
    values = np.asarray(values, dtype=REAL_DTYPE)
    return np.where(values >= 0, np.floor(values + 0.5), np.ceil(values - 0.5)).astype(INT_DTYPE)

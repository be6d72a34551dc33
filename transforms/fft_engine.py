'''
FFT engine.

Functions:
- fft_radix2: in-place recursive radix-2 Cooley-Tukey FFT over a strided slice of a flat buffer
- normalize: divide a complex buffer by a real normalizer (in place)
- fft1d / ifft1d: 1-D transform pair over a row-major flattened matrix
- fft2d / ifft2d: separable 2-D transform pair (row passes, then column passes)
- magnitude_spectrum: log-scaled magnitude for visualization
- fft_shift: wrapper around np.fft.fftshift, for display only

Classes FFT1D, InverseFFT1D, FFT2D and InverseFFT2D wrap the functions behind the
Transform interface and cache the last frequency / magnitude matrices.

All transforms use the orthonormal convention: each pass is divided by sqrt(N),
so forward followed by inverse returns the original integers after rounding.
'''

import logging
import math
import warnings
from typing import NamedTuple, Optional

import numpy as np

from .base import Transform
from .exceptions import InvalidArgumentError, InvalidShapeError
from .matrix import (
    COMPLEX_DTYPE,
    as_complex_matrix,
    as_int_matrix,
    check_fft_extents,
    flatten_to_buffer,
    is_power_of_two,
    round_half_away,
)

logger = logging.getLogger(__name__)

FORWARD = -1
INVERSE = 1
DEFAULT_STEP = 1
IMAG_TOL = 1e-9


class FFTResult(NamedTuple):
    frequency: np.ndarray
    magnitude: np.ndarray


# --- primitive ---
def _fft_recursive(block: np.ndarray, start: int, end: int, stride: int, direction: int, scratch: np.ndarray):
    """Transform block[:, start:end+1:stride] of every row of `block` in place."""
    n = (end - start) // stride + 1
    if n == 1:
        return
    _fft_recursive(block, start, end, 2 * stride, direction, scratch)
    _fft_recursive(block, start + stride, end, 2 * stride, direction, scratch)

    half = n // 2
    mid = start + half * stride
    # the sub-results are interleaved: even-part at [0::2], odd-part at [1::2]
    scratch[:, :n] = block[:, start:end + 1:stride]
    twiddle = np.exp(direction * 2j * np.pi * np.arange(half) / n)
    odd = twiddle * scratch[:, 1:n:2]
    even = scratch[:, 0:n:2]
    block[:, start:mid:stride] = even + odd
    block[:, mid:end + 1:stride] = even - odd


def fft_radix2(
        buffer: np.ndarray,
        start: int,
        end: int,
        stride: int,
        direction: int,
        scratch: Optional[np.ndarray] = None,
    ) -> np.ndarray:
    """
    In-place radix-2 decimation-in-time FFT of buffer[start:end+1:stride].

    Parameters
    ----------
    buffer : np.ndarray
        Flat complex128 buffer; the addressed elements are overwritten.
    start, end : int
        First and last (inclusive) offsets of the addressed sub-sequence.
    stride : int
        Distance between consecutive addressed elements (>= 1).
    direction : int
        -1 for the forward transform, +1 for the un-normalized inverse.
    scratch : np.ndarray, optional
        Complex work buffer of at least n elements. Shared by every recursive
        call; allocated once here when omitted.

    Returns
    -------
    np.ndarray
        The same buffer object.
    """
    if direction not in (FORWARD, INVERSE):
        raise InvalidArgumentError(f"direction must be -1 or +1, got {direction}.")
    if int(stride) != stride or stride < 1:
        raise InvalidArgumentError(f"stride must be a positive integer, got {stride}.")
    start, end, stride = int(start), int(end), int(stride)
    if start < 0 or end < start or end >= buffer.shape[0]:
        raise InvalidShapeError(
            f"invalid range [{start}, {end}] for a buffer of length {buffer.shape[0]}."
        )
    n = (end - start) // stride + 1
    if not is_power_of_two(n):
        raise InvalidShapeError(f"radix-2 FFT needs a power-of-two length, got {n}.")
    if scratch is None:
        scratch = np.empty(n, dtype=COMPLEX_DTYPE)
    elif scratch.shape[0] < n:
        raise InvalidShapeError(f"scratch buffer holds {scratch.shape[0]} elements, needs {n}.")
    # a single-row block view, so writes land in `buffer`
    _fft_recursive(buffer[np.newaxis, :], start, end, stride, int(direction), scratch[np.newaxis, :])
    return buffer


def normalize(buffer: np.ndarray, norm: float) -> np.ndarray:
    """Divide every element of `buffer` by `norm` in place."""
    norm = float(norm)
    if norm == 0.0:
        raise InvalidArgumentError("normalizer must be non-zero.")
    buffer /= norm
    return buffer


# --- helpers ---
def _check_step(step) -> int:
    if isinstance(step, bool) or int(step) != step or step < 1:
        raise InvalidArgumentError(f"FFT step must be a positive integer, got {step!r}.")
    return int(step)


def _strided_count(length: int, step: int) -> int:
    return (length - 1) // step + 1


def _magnitude(frequency: np.ndarray) -> np.ndarray:
    return np.abs(frequency).astype(COMPLEX_DTYPE)


def _to_integers(buffer: np.ndarray, imag_tol: float, suppress_warning: bool) -> np.ndarray:
    """Round real parts to integers; optionally warn about a large imaginary residue."""
    imag_max = float(np.max(np.abs(buffer.imag))) if buffer.size else 0.0
    if not suppress_warning and imag_max > imag_tol:
        warnings.warn(
            f"Inverse FFT has non-negligible imaginary component (max abs = {imag_max}). "
            "Returning rounded real part; check the frequency-domain input.",
            RuntimeWarning,
        )
    return round_half_away(buffer.real)


# --- 1-D ---
def fft1d(matrix, step: int = DEFAULT_STEP) -> FFTResult:
    """
    Forward 1-D FFT of a row-major flattened integer matrix.
    Returns FFTResult with 1 x size frequency and magnitude matrices.
    """
    step = _check_step(step)
    item = as_int_matrix(matrix, "fft1d")
    size = item.size
    if size == 0 or not is_power_of_two(_strided_count(size, step)):
        raise InvalidShapeError(
            f"fft1d requires a power-of-two number of strided samples, got size={size}, step={step}."
        )
    buffer = flatten_to_buffer(item)
    fft_radix2(buffer, 0, size - 1, step, FORWARD)
    normalize(buffer, math.sqrt(size))
    frequency = buffer.reshape(1, size)
    logger.debug("fft1d: shape=%s step=%d", item.shape, step)
    return FFTResult(frequency, _magnitude(frequency))


def ifft1d(matrix, imag_tol: float = IMAG_TOL, suppress_warning: bool = True) -> np.ndarray:
    """Inverse 1-D FFT; returns the 1 x N integer signal."""
    freq = as_complex_matrix(matrix, "ifft1d")
    size = freq.size
    if not is_power_of_two(size):
        raise InvalidShapeError(f"ifft1d requires a power-of-two size, got {size}.")
    buffer = freq.reshape(-1)
    fft_radix2(buffer, 0, size - 1, 1, INVERSE)
    normalize(buffer, math.sqrt(size))
    logger.debug("ifft1d: size=%d", size)
    return _to_integers(buffer, imag_tol, suppress_warning).reshape(1, size)


# --- 2-D ---
def _separable_passes(buffer: np.ndarray, rows: int, cols: int, row_stride: int, direction: int):
    grid = buffer.reshape(rows, cols)
    scratch = np.empty(rows * cols, dtype=COMPLEX_DTYPE)
    # all rows in one recursion, then all columns (the rows of grid.T)
    _fft_recursive(grid, 0, cols - 1, row_stride, direction, scratch.reshape(rows, cols))
    _fft_recursive(grid.T, 0, rows - 1, 1, direction, scratch.reshape(cols, rows))
    normalize(buffer, math.sqrt(rows * cols))
    return buffer


def fft2d(matrix, step: int = DEFAULT_STEP) -> FFTResult:
    """
    Separable forward 2-D FFT: every row, then every column.
    Returns FFTResult with rows x cols frequency and magnitude matrices.
    """
    step = _check_step(step)
    item = as_int_matrix(matrix, "fft2d")
    rows, cols = item.shape
    check_fft_extents((rows, cols), "fft2d")
    if not is_power_of_two(_strided_count(cols, step)):
        raise InvalidShapeError(f"fft2d step {step} leaves a non power-of-two row length.")
    buffer = flatten_to_buffer(item)
    _separable_passes(buffer, rows, cols, step, FORWARD)
    frequency = buffer.reshape(rows, cols)
    logger.debug("fft2d: shape=%s step=%d", item.shape, step)
    return FFTResult(frequency, _magnitude(frequency))


def ifft2d(matrix, imag_tol: float = IMAG_TOL, suppress_warning: bool = True) -> np.ndarray:
    """Inverse 2-D FFT; returns an integer matrix of the same shape."""
    freq = as_complex_matrix(matrix, "ifft2d")
    rows, cols = freq.shape
    check_fft_extents((rows, cols), "ifft2d")
    buffer = freq.reshape(-1)
    _separable_passes(buffer, rows, cols, 1, INVERSE)
    logger.debug("ifft2d: shape=%s", freq.shape)
    return _to_integers(buffer, imag_tol, suppress_warning).reshape(rows, cols)


# --- visualization helpers ---
def fft_shift(F: np.ndarray) -> np.ndarray:
    """Shift zero-frequency to center (wrapper, display only)."""
    return np.fft.fftshift(F)


def magnitude_spectrum(F: np.ndarray, shift: bool = False, log: bool = True) -> np.ndarray:
    """Real |F| for display; shift centers the DC bin, log compresses with log1p."""
    if shift:
        F = fft_shift(F)
    return np.log1p(np.abs(F)) if log else np.abs(F)


# --- Transform classes ---
class _ForwardFFT(Transform):
    _fn = None

    def __init__(self, step: int = DEFAULT_STEP):
        super().__init__()
        self._step = _check_step(step)

    @property
    def step(self) -> int:
        return self._step

    def transform(self, item) -> np.ndarray:
        res = self._fn(item, step=self._step)
        self._store(res)
        return res.frequency

    @property
    def frequency(self) -> np.ndarray:
        self._require_computed()
        return self._result.frequency

    @property
    def magnitude(self) -> np.ndarray:
        self._require_computed()
        return self._result.magnitude

    def get_magnitude(self) -> np.ndarray:
        return self.magnitude


class FFT1D(_ForwardFFT):
    name = "fft1D"
    _fn = staticmethod(fft1d)


class FFT2D(_ForwardFFT):
    name = "fft2D"
    _fn = staticmethod(fft2d)


class _InverseFFT(Transform):
    _fn = None

    def __init__(self, imag_tol: float = IMAG_TOL, suppress_warning: bool = True):
        super().__init__()
        self.imag_tol = imag_tol
        self.suppress_warning = suppress_warning

    def transform(self, item) -> np.ndarray:
        out = self._fn(item, imag_tol=self.imag_tol, suppress_warning=self.suppress_warning)
        return self._store(out)


class InverseFFT1D(_InverseFFT):
    name = "ifft1D"
    _fn = staticmethod(ifft1d)


class InverseFFT2D(_InverseFFT):
    name = "ifft2D"
    _fn = staticmethod(ifft2d)

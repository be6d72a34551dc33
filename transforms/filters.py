"""
transforms/filters.py

Ideal frequency-domain lowpass / highpass filters built on the 2-D FFT pair.

Pipeline (no fftshift anywhere):
  1) F = fft2d(item, step)
  2) build a 0/1 mask from the distance of every index (u, v) to the grid
     center (M // 2, N // 2)
  3) G = F * mask
  4) out = ifft2d(G), rounded to integers

The center is the geometric center of the index grid, not the DC bin of an
fftshifted spectrum. Existing numeric expectations depend on this.
"""

import logging
from typing import Tuple

import numpy as np

from .base import Transform
from .exceptions import InvalidArgumentError, InvalidShapeError
from .fft_engine import DEFAULT_STEP, _check_step, fft2d, ifft2d
from .matrix import as_int_matrix

logger = logging.getLogger(__name__)


# --- Distance grid & masks ---
def _distance_grid(shape: Tuple[int, int]) -> np.ndarray:
    """Euclidean distance D[u,v] of every index to the grid center (M // 2, N // 2)."""
    M, N = shape
    u0, v0 = M // 2, N // 2
    u = np.arange(M, dtype=np.float64).reshape(M, 1)
    v = np.arange(N, dtype=np.float64).reshape(1, N)
    return np.hypot(u - u0, v - v0)


def _check_cutoff(cutoff: float) -> float:
    cutoff = float(cutoff)
    if not np.isfinite(cutoff) or cutoff < 0:
        raise InvalidArgumentError(f"cutoff must be a finite non-negative radius, got {cutoff}.")
    return cutoff


def lowpass_mask(shape: Tuple[int, int], cutoff: float) -> np.ndarray:
    """Ideal radial low-pass: 1 where D <= cutoff, 0 elsewhere."""
    cutoff = _check_cutoff(cutoff)
    return (_distance_grid(shape) <= cutoff).astype(float)


def highpass_mask(shape: Tuple[int, int], cutoff: float) -> np.ndarray:
    """Ideal radial high-pass: 1 where D > cutoff, 0 elsewhere."""
    cutoff = _check_cutoff(cutoff)
    return (_distance_grid(shape) > cutoff).astype(float)


def apply_mask(F: np.ndarray, mask: np.ndarray) -> np.ndarray:
    """
    Apply a real-valued mask elementwise to a complex frequency array F.
    Returns a new array; F is left untouched.
    """
    if F.shape != mask.shape:
        raise InvalidShapeError("F and mask must have the same shape for elementwise multiplication.")
    return F * mask


# --- Filters ---
class _SpectralFilter(Transform):
    _mask_fn = None

    def __init__(self, cutoff: float, step: int = DEFAULT_STEP):
        super().__init__()
        self._cutoff = _check_cutoff(cutoff)
        self._step = _check_step(step)

    @property
    def cutoff(self) -> float:
        return self._cutoff

    @property
    def step(self) -> int:
        return self._step

    def mask(self, shape: Tuple[int, int]) -> np.ndarray:
        return self._mask_fn(shape, self._cutoff)

    def masked_spectrum(self, item) -> np.ndarray:
        """Forward transform of `item` with the filter mask applied."""
        item = as_int_matrix(item, type(self).__name__)
        F = fft2d(item, step=self._step).frequency
        mask = self.mask(F.shape)
        logger.debug(
            "%s: shape=%s cutoff=%s kept=%d/%d",
            self.name, F.shape, self._cutoff, int(mask.sum()), mask.size,
        )
        return apply_mask(F, mask)

    def transform(self, item) -> np.ndarray:
        return self._store(ifft2d(self.masked_spectrum(item)))

    @property
    def filtered(self) -> np.ndarray:
        return self.result


class LowpassFilter(_SpectralFilter):
    """Keep frequency cells within `cutoff` of the index-grid center."""
    name = "lowpass"
    _mask_fn = staticmethod(lowpass_mask)


class HighpassFilter(_SpectralFilter):
    """Keep frequency cells farther than `cutoff` from the index-grid center."""
    name = "highpass"
    _mask_fn = staticmethod(highpass_mask)

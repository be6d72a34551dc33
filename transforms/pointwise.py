"""
transforms/pointwise.py

Non-spectral transforms over integer matrices.

- Thresholding(thr_min, thr_max): clamp every cell into [thr_min, thr_max]
- Histogram(): fraction of cells holding each value between the matrix min and max

Thresholding rejects thr_min >= thr_max with InvalidArgumentError, both when
constructed and on every transform() call.
"""

import logging

import numpy as np

from .base import Transform
from .exceptions import InvalidArgumentError, InvalidShapeError
from .matrix import REAL_DTYPE, as_int_matrix

logger = logging.getLogger(__name__)


def _check_bounds(thr_min: int, thr_max: int) -> None:
    if thr_min >= thr_max:
        raise InvalidArgumentError(
            f"Incorrect parameter order: thr_min ({thr_min}) must be < thr_max ({thr_max})."
        )


class Thresholding(Transform):
    name = "threshold"

    def __init__(self, thr_min: int, thr_max: int):
        super().__init__()
        for v in (thr_min, thr_max):
            if isinstance(v, bool) or int(v) != v:
                raise InvalidArgumentError(f"threshold bounds must be integers, got {v!r}.")
        _check_bounds(thr_min, thr_max)
        self.thr_min = int(thr_min)
        self.thr_max = int(thr_max)

    def transform(self, item) -> np.ndarray:
        _check_bounds(self.thr_min, self.thr_max)
        arr = as_int_matrix(item, "Thresholding")
        logger.debug("threshold: shape=%s bounds=[%d, %d]", arr.shape, self.thr_min, self.thr_max)
        return self._store(np.clip(arr, self.thr_min, self.thr_max))


class Histogram(Transform):
    name = "histogram"

    def transform(self, item) -> np.ndarray:
        """
        Return a 1 x (max - min + 1) float64 matrix; bin v - min holds the
        fraction of cells equal to v.
        """
        arr = as_int_matrix(item, "Histogram")
        if arr.size == 0:
            raise InvalidShapeError("Histogram of an empty matrix is undefined.")
        lo = int(arr.min())
        counts = np.bincount((arr - lo).ravel(), minlength=int(arr.max()) - lo + 1)
        hist = (counts / float(arr.size)).astype(REAL_DTYPE).reshape(1, -1)
        logger.debug("histogram: shape=%s bins=%d", arr.shape, hist.shape[1])
        return self._store(hist)

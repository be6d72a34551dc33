"""
visuals/plots.py

Plotting utilities for spectra, filter masks and before/after comparisons.

APIs:
- plot_magnitude_spectrum(F, out_path=None, shift=False, log=True)
- plot_mask(mask, out_path=None)
- compare_and_save(original, filtered, out_path=None, titles=None)

Notes:
- Spectra and masks are written as raw grayscale PNGs with Pillow.
- compare_and_save uses matplotlib; with out_path=None the Figure is returned.
- Spectra are shown unshifted by default so they line up with the filter masks,
  which are centered on the index grid (M // 2, N // 2).
"""

from typing import Optional, Sequence
import os
import numpy as np
import matplotlib.pyplot as plt
from PIL import Image
from transforms.fft_engine import magnitude_spectrum
from io_utils.image_handler import normalize_to_uint8


# Helper to ensure outdir exists
def _ensure_outdir(out_path: Optional[str]):
    if out_path is None:
        return None
    d = os.path.dirname(out_path)
    if d:
        os.makedirs(d, exist_ok=True)
    return out_path


def _save_raw_array_image(out_path: Optional[str], arr: np.ndarray):
    """
    Save a 2-D numeric matrix as a raw grayscale PNG. No Matplotlib involved.
    Complex input is saved as its magnitude.
    """
    if out_path is None:
        return None
    _ensure_outdir(out_path)
    img = Image.fromarray(normalize_to_uint8(np.atleast_2d(arr)))
    img.save(out_path)
    return out_path


def _normalized(a: np.ndarray) -> np.ndarray:
    a = np.array(a, dtype=np.float64)
    a = a - float(np.nanmin(a))
    denom = float(np.nanmax(a)) if float(np.nanmax(a)) != 0.0 else 1.0
    return a / denom


def plot_magnitude_spectrum(
    F: np.ndarray,
    out_path: Optional[str] = None,
    shift: bool = False,
    log: bool = True,
):
    """
    Save the magnitude of a frequency matrix as a PNG (log-scaled by default).
    shift=True centers the DC bin for display.
    If out_path is None -> return the normalized 2D float array instead.
    """
    mag = magnitude_spectrum(F, shift=shift, log=log)
    if out_path is not None:
        return _save_raw_array_image(out_path, mag)
    return _normalized(mag)


def plot_mask(mask: np.ndarray, out_path: Optional[str] = None):
    """
    Save a spectral mask as grayscale PNG (kept cells white).
    If out_path is None -> return the normalized array.
    """
    if out_path is not None:
        return _save_raw_array_image(out_path, mask)
    return _normalized(mask)


def compare_and_save(
    original: np.ndarray,
    filtered: np.ndarray,
    out_path: Optional[str] = None,
    titles: Optional[Sequence[str]] = None,
):
    """
    Original (left) | Transformed (right), side by side.
    """
    if titles is None:
        titles = ("Original", "Filtered")
    fig, axs = plt.subplots(1, 2, figsize=(12, 6))
    for ax, img, title in zip(axs, (original, filtered), titles):
        ax.imshow(np.real(img), cmap="gray", interpolation="nearest")
        ax.set_title(title)
        ax.axis("off")

    if out_path:
        _ensure_outdir(out_path)
        fig.savefig(out_path, dpi=200, bbox_inches="tight", pad_inches=0.05)
        plt.close(fig)
        return out_path
    return fig

# visuals/__init__.py
"""
Visual helpers for the transform engine.
Provides plotting and export utilities used by the CLI.
"""
from .plots import (
    plot_magnitude_spectrum,
    plot_mask,
    compare_and_save,
)
__all__ = [
    "plot_magnitude_spectrum",
    "plot_mask",
    "compare_and_save",
]

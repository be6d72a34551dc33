"""
Transform engine package: FFT family, spectral filters and pointwise transforms.
Exposes public modules for import in tests and CLI.
"""
__all__ = ["base", "exceptions", "fft_engine", "filters", "matrix", "pointwise"]

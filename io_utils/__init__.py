# io_utils/__init__.py
"""
I/O helpers package: image and raw-text matrix adapters, logging setup.
"""
from .image_handler import read_image, save_image, normalize_to_uint8
from .file_utils import make_result_filename, read_matrix, write_matrix, load_matrix
from .log_utils import setup_logging

__all__ = [
    "read_image",
    "save_image",
    "normalize_to_uint8",
    "make_result_filename",
    "read_matrix",
    "write_matrix",
    "load_matrix",
    "setup_logging",
]

"""
Logging setup for command-line runs.
"""

import logging
import sys
from pathlib import Path
from typing import Optional

LOG_FORMAT = '%(asctime)s | %(levelname)-8s | %(name)s | %(message)s'


def setup_logging(log_file: Optional[str] = None, level: int = logging.INFO) -> logging.Logger:
    """
    Route the root logger to stdout, and also to `log_file` (appended) when given.
    Handlers from an earlier call are replaced.
    """
    root = logging.getLogger()
    root.setLevel(level)
    root.handlers = []

    formatter = logging.Formatter(LOG_FORMAT, datefmt='%Y-%m-%d %H:%M:%S')
    handlers = [logging.StreamHandler(sys.stdout)]
    if log_file is not None:
        Path(log_file).parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_file, mode='a', encoding='utf-8'))
    for handler in handlers:
        handler.setFormatter(formatter)
        root.addHandler(handler)
    return root

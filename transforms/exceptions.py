"""
transforms/exceptions.py

Error taxonomy of the transform engine.

- InvalidShapeError: matrix extents the engine cannot handle (non 2-D input,
  non power-of-two FFT extents, empty histogram input)
- NotComputedYetError: cached output read before transform() ran
- InvalidArgumentError: bad numeric parameters (thresholds, step, cutoff...)

Shape and argument errors are also ValueErrors, lifecycle errors are also
RuntimeErrors, so callers catching the builtin types keep working.
"""


class TransformError(Exception):
    """Base class for every error raised by the transform engine."""


class InvalidShapeError(TransformError, ValueError):
    pass


class NotComputedYetError(TransformError, RuntimeError):
    def __init__(self, message: str = "perform transform first"):
        super().__init__(message)


class InvalidArgumentError(TransformError, ValueError):
    pass

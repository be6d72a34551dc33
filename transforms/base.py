"""
transforms/base.py

Single-method transform interface shared by every engine component.

Each instance caches the output of its last transform() call behind a
two-state lifecycle flag. Reading the cache before the first call raises
NotComputedYetError. Instances are not safe to share between threads.
"""

import enum
from abc import ABC, abstractmethod
from typing import Any

from .exceptions import NotComputedYetError


class TransformState(enum.Enum):
    NOT_COMPUTED = "not_computed"
    COMPUTED = "computed"


class Transform(ABC):
    """Base class: subclasses implement transform(item) and call _store()."""

    name: str = "transform"

    def __init__(self):
        self._state = TransformState.NOT_COMPUTED
        self._result = None

    @abstractmethod
    def transform(self, item) -> Any:
        ...

    def __call__(self, item) -> Any:
        return self.transform(item)

    @property
    def state(self) -> TransformState:
        return self._state

    @property
    def computed(self) -> bool:
        return self._state is TransformState.COMPUTED

    def _require_computed(self) -> None:
        if self._state is not TransformState.COMPUTED:
            raise NotComputedYetError(f"{type(self).__name__}: perform transform first")

    def _store(self, result):
        self._result = result
        self._state = TransformState.COMPUTED
        return result

    @property
    def result(self):
        """Output of the most recent transform() call."""
        self._require_computed()
        return self._result

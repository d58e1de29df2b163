"""Shared fixtures: an in-memory engine backend and a tracking allocator."""

from collections.abc import Callable

import numpy as np
import pytest

from imagebridge.domain import BufferAllocator, ForeignArray
from imagebridge.engine import EngineSession


class TrackingAllocator(BufferAllocator):
    """Allocator that records every allocation and free."""

    def __init__(self) -> None:
        self.allocated: list[np.ndarray] = []
        self.freed: list[np.ndarray] = []

    def allocate(self, count: int, dtype: np.dtype) -> np.ndarray:
        data = super().allocate(count, dtype)
        self.allocated.append(data)
        return data

    def free(self, data: np.ndarray) -> None:
        self.freed.append(data)

    def free_count(self, data: np.ndarray) -> int:
        """Number of times exactly this vector was freed."""
        return sum(1 for freed in self.freed if freed is data)


EvalHandler = Callable[["FakeEngineBackend", str], int]


class FakeEngineBackend:
    """In-memory engine backend.

    Variables are stored as numpy arrays. Evaluated expressions are recorded
    and optionally passed to ``eval_handler``, which can simulate their
    effect on the workspace and returns the engine code.
    """

    def __init__(self, allocator: BufferAllocator | None = None) -> None:
        self.workspace: dict[str, np.ndarray] = {}
        self.evaluated: list[str] = []
        self.put_names: list[str] = []
        self.visible: bool | None = None
        self.visible_code = 0
        self.put_code = 0
        self.get_code = 0
        self.fail_on: str | None = None
        self.eval_handler: EvalHandler | None = None
        self.close_count = 0
        self.allocator = allocator

    def set_visible(self, visible: bool) -> int:
        self.visible = visible
        return self.visible_code

    def put_variable(self, name: str, array: ForeignArray) -> int:
        if self.put_code != 0:
            return self.put_code
        self.workspace[name] = array.as_ndarray().copy()
        self.put_names.append(name)
        return 0

    def get_variable(self, name: str) -> tuple[int, ForeignArray | None]:
        if self.get_code != 0:
            return self.get_code, None
        if name not in self.workspace:
            return 0, None
        return 0, ForeignArray.from_ndarray(self.workspace[name], self.allocator)

    def eval_string(self, expression: str) -> int:
        self.evaluated.append(expression)
        if self.fail_on is not None and self.fail_on in expression:
            return 1
        if self.eval_handler is not None:
            return self.eval_handler(self, expression)
        return 0

    def close(self) -> None:
        self.close_count += 1


@pytest.fixture
def tracking_allocator() -> TrackingAllocator:
    """Allocator recording allocations and frees."""
    return TrackingAllocator()


@pytest.fixture
def fake_backend(tracking_allocator: TrackingAllocator) -> FakeEngineBackend:
    """Fresh in-memory engine backend."""
    return FakeEngineBackend(allocator=tracking_allocator)


@pytest.fixture
def session(fake_backend: FakeEngineBackend) -> EngineSession:
    """Started session connected to the fake backend."""
    session = EngineSession(launcher=lambda _options: fake_backend)
    session.start()
    return session


@pytest.fixture
def rgb_planes() -> np.ndarray:
    """2x2 RGB image with R=[[1,2],[3,4]], G=[[5,6],[7,8]], B=[[9,10],[11,12]]."""
    red = np.array([[1, 2], [3, 4]], dtype=np.uint8)
    green = np.array([[5, 6], [7, 8]], dtype=np.uint8)
    blue = np.array([[9, 10], [11, 12]], dtype=np.uint8)
    return np.stack([red, green, blue], axis=2)


@pytest.fixture
def rgb_image(rgb_planes: np.ndarray, tracking_allocator: TrackingAllocator) -> ForeignArray:
    """The 2x2 RGB planes as an engine array."""
    return ForeignArray.from_ndarray(rgb_planes, tracking_allocator)

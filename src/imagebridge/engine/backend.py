"""Engine backends.

A backend is the raw connection to one running engine process. Its methods
mirror the engine's C API: every operation reports a binary return code
(0 for success, anything else for an undifferentiated failure).
``get_variable`` returns that code together with the array, which is None
when the variable is not bound.

EngineSession wraps a backend and turns those codes into exceptions.
"""

import importlib
from collections.abc import Callable
from types import ModuleType
from typing import Any, Protocol

import numpy as np
import structlog

from imagebridge.domain.array import ElementType, ForeignArray
from imagebridge.exceptions import EngineUnavailableError

logger = structlog.get_logger("imagebridge.engine")

# Engine return codes
ENGINE_OK = 0
ENGINE_FAILED = 1


class EngineBackend(Protocol):
    """Connection to a running engine process."""

    def set_visible(self, visible: bool) -> int: ...

    def put_variable(self, name: str, array: ForeignArray) -> int: ...

    def get_variable(self, name: str) -> tuple[int, ForeignArray | None]: ...

    def eval_string(self, expression: str) -> int: ...

    def close(self) -> None: ...


# Launches or attaches to an engine; returns None if none can be reached
EngineLauncher = Callable[[list[str]], EngineBackend | None]


def _import_matlab_engine() -> ModuleType:
    """Import the MATLAB Engine API for Python.

    Raises:
        EngineUnavailableError: If the engine package is not installed
    """
    try:
        return importlib.import_module("matlab.engine")
    except ImportError as e:
        raise EngineUnavailableError(
            "MATLAB Engine API for Python is not installed "
            "(pip install 'imagebridge[matlab]')"
        ) from e


class MatlabEngineBackend:
    """Backend driving a MATLAB session through ``matlab.engine``.

    Example:
        backend = MatlabEngineBackend.launch(["-nodesktop"])
        backend.eval_string("x = magic(3);")
        code, magic = backend.get_variable("x")
        backend.close()
    """

    def __init__(
        self,
        engine: Any,
        errors: tuple[type[BaseException], ...],
        array_types: Any,
    ) -> None:
        """Wrap an engine object returned by ``matlab.engine.start_matlab``.

        Args:
            engine: The MatlabEngine instance
            errors: Exception classes raised by the engine for failed calls
            array_types: Module providing the array constructors
                (``matlab.uint8``, ``matlab.double``, ...)
        """
        self._engine = engine
        self._errors = errors
        self._array_types = array_types

    @classmethod
    def launch(cls, options: list[str]) -> "MatlabEngineBackend":
        """Start a new MATLAB session.

        Args:
            options: MATLAB startup options, e.g. ``["-nodesktop"]``

        Returns:
            Backend connected to the new session

        Raises:
            EngineUnavailableError: If MATLAB cannot be started
        """
        matlab_engine = _import_matlab_engine()
        try:
            engine = matlab_engine.start_matlab(" ".join(options))
        except matlab_engine.EngineError as e:
            raise EngineUnavailableError(str(e)) from e
        errors = (
            matlab_engine.MatlabExecutionError,
            matlab_engine.EngineError,
            matlab_engine.RejectedExecutionError,
        )
        return cls(engine, errors, importlib.import_module("matlab"))

    def set_visible(self, visible: bool) -> int:
        if not visible:
            return ENGINE_OK
        return self.eval_string("desktop")

    def put_variable(self, name: str, array: ForeignArray) -> int:
        matlab_type = getattr(self._array_types, array.element_type.value)
        try:
            self._engine.workspace[name] = matlab_type(array.as_ndarray())
        except self._errors as e:
            logger.debug("Engine put failed", variable=name, error=str(e))
            return ENGINE_FAILED
        return ENGINE_OK

    def get_variable(self, name: str) -> tuple[int, ForeignArray | None]:
        try:
            if not self._engine.exist(name, "var", nargout=1):
                return ENGINE_OK, None
            value = self._engine.workspace[name]
        except self._errors as e:
            logger.debug("Engine get failed", variable=name, error=str(e))
            return ENGINE_FAILED, None

        values = np.asarray(value)
        if values.dtype == np.int64 and values.ndim == 0:
            # Integer scalars come back as Python ints
            values = values.astype(ElementType.DOUBLE.dtype)
        try:
            array = ForeignArray.from_ndarray(values)
        except ValueError as e:
            logger.debug("Unsupported engine value", variable=name, error=str(e))
            return ENGINE_FAILED, None
        return ENGINE_OK, array

    def eval_string(self, expression: str) -> int:
        try:
            self._engine.eval(expression, nargout=0)
        except self._errors as e:
            logger.debug("Engine evaluation failed", error=str(e))
            return ENGINE_FAILED
        return ENGINE_OK

    def close(self) -> None:
        try:
            self._engine.quit()
        except self._errors as e:
            logger.warning("Engine did not quit cleanly", error=str(e))


def launch_matlab(options: list[str]) -> EngineBackend | None:
    """Default engine launcher."""
    return MatlabEngineBackend.launch(options)

"""Engine layer for imagebridge.

This module owns the connection to the external numeric engine and the
translation of its binary return codes into exceptions.

Key classes:
- EngineSession: Session lifecycle, variable put/get and evaluation
- EngineBackend: Protocol implemented by engine connections
- MatlabEngineBackend: Backend for the MATLAB Engine API for Python
"""

from imagebridge.engine.backend import (
    ENGINE_FAILED,
    ENGINE_OK,
    EngineBackend,
    EngineLauncher,
    MatlabEngineBackend,
    launch_matlab,
)
from imagebridge.engine.result_codes import (
    check_engine_return_code,
    error_kind_for,
    exit_code_for,
)
from imagebridge.engine.session import EngineSession

__all__ = [
    "ENGINE_FAILED",
    "ENGINE_OK",
    "EngineBackend",
    "EngineLauncher",
    "EngineSession",
    "MatlabEngineBackend",
    "check_engine_return_code",
    "error_kind_for",
    "exit_code_for",
    "launch_matlab",
]

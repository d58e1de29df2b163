"""Translation between engine return codes and the error taxonomy.

The engine only ever reports 0 for success and nonzero for failure, with no
diagnostic payload. A nonzero code therefore maps to a single
EngineUnspecifiedError; no finer kind is inferred.
"""

from imagebridge.exceptions import (
    EngineUnspecifiedError,
    ErrorKind,
    ImageBridgeError,
)

# Process exit codes for each error kind
_EXIT_CODES: dict[ErrorKind, int] = {
    ErrorKind.NULL_ARGUMENT: 2,
    ErrorKind.SHAPE_MISMATCH: 3,
    ErrorKind.DIMENSION_MISMATCH: 3,
    ErrorKind.INCOMPATIBLE_SHAPE: 3,
    ErrorKind.BUFFER_RELEASED: 3,
    ErrorKind.OUT_OF_MEMORY: 4,
    ErrorKind.SESSION_NOT_READY: 5,
    ErrorKind.ENGINE_UNAVAILABLE: 5,
    ErrorKind.ENGINE_CONFIG_FAILED: 5,
    ErrorKind.VARIABLE_NOT_FOUND: 6,
    ErrorKind.UNSPECIFIED: 1,
}


def check_engine_return_code(code: int, operation: str) -> None:
    """Raise if an engine return code signals failure.

    Args:
        code: Return code reported by the engine
        operation: Description of the engine call, used in the error message

    Raises:
        EngineUnspecifiedError: If ``code`` is nonzero
    """
    if code != 0:
        raise EngineUnspecifiedError(operation)


def error_kind_for(error: BaseException) -> ErrorKind:
    """Map any exception onto the error taxonomy."""
    if isinstance(error, ImageBridgeError):
        return error.kind
    if isinstance(error, MemoryError):
        return ErrorKind.OUT_OF_MEMORY
    return ErrorKind.UNSPECIFIED


def exit_code_for(kind: ErrorKind) -> int:
    """Process exit code reported by the CLI for an error kind."""
    return _EXIT_CODES.get(kind, 1)

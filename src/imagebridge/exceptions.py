"""Exception hierarchy for imagebridge.

Every exception carries an ``ErrorKind`` so callers can branch on the error
taxonomy without matching on classes.
"""

from enum import Enum


class ErrorKind(str, Enum):
    """Error taxonomy shared by every layer of the bridge."""

    NULL_ARGUMENT = "null_argument"
    SHAPE_MISMATCH = "shape_mismatch"
    DIMENSION_MISMATCH = "dimension_mismatch"
    INCOMPATIBLE_SHAPE = "incompatible_shape"
    SESSION_NOT_READY = "session_not_ready"
    ENGINE_UNAVAILABLE = "engine_unavailable"
    ENGINE_CONFIG_FAILED = "engine_config_failed"
    VARIABLE_NOT_FOUND = "variable_not_found"
    OUT_OF_MEMORY = "out_of_memory"
    BUFFER_RELEASED = "buffer_released"
    UNSPECIFIED = "unspecified"


class ImageBridgeError(Exception):
    """Base exception for all imagebridge errors."""

    kind: ErrorKind = ErrorKind.UNSPECIFIED


class NullArgumentError(ImageBridgeError):
    """A required argument was missing."""

    kind = ErrorKind.NULL_ARGUMENT

    def __init__(self, argument: str) -> None:
        self.argument = argument
        super().__init__(f"Required argument '{argument}' is missing")


class ValidationError(ImageBridgeError):
    """Errors raised while validating foreign arrays."""

    pass


class ShapeMismatchError(ValidationError):
    """Array has the wrong dimensionality, element type, or is empty."""

    kind = ErrorKind.SHAPE_MISMATCH

    def __init__(self, reason: str) -> None:
        self.reason = reason
        super().__init__(f"Array is not an RGB image: {reason}")


class ConversionError(ImageBridgeError):
    """Errors raised while converting between pixel layouts."""

    pass


class DimensionMismatchError(ConversionError):
    """Two arrays that must correspond have different sizes."""

    kind = ErrorKind.DIMENSION_MISMATCH

    def __init__(self, expected: tuple[int, ...], actual: tuple[int, ...]) -> None:
        self.expected = expected
        self.actual = actual
        super().__init__(f"Dimension mismatch: expected {expected}, got {actual}")


class OutOfMemoryError(ConversionError):
    """A pixel buffer could not be allocated."""

    kind = ErrorKind.OUT_OF_MEMORY

    def __init__(self, nbytes: int) -> None:
        self.nbytes = nbytes
        super().__init__(f"Could not allocate {nbytes} bytes")


class TransferError(ImageBridgeError):
    """Errors raised while moving buffers between arrays."""

    pass


class IncompatibleShapeError(TransferError):
    """Destination array cannot take the source array's buffer."""

    kind = ErrorKind.INCOMPATIBLE_SHAPE

    def __init__(self, reason: str) -> None:
        self.reason = reason
        super().__init__(f"Cannot move array data: {reason}")


class BufferReleasedError(TransferError):
    """Buffer ownership was already given up."""

    kind = ErrorKind.BUFFER_RELEASED

    def __init__(self) -> None:
        super().__init__("Buffer has already been relinquished")


class EngineError(ImageBridgeError):
    """Errors related to the engine session."""

    pass


class SessionNotReadyError(EngineError):
    """Engine operation attempted without a running session."""

    kind = ErrorKind.SESSION_NOT_READY

    def __init__(self, operation: str) -> None:
        self.operation = operation
        super().__init__(f"Cannot {operation}: engine session is not started")


class EngineUnavailableError(EngineError):
    """The engine process could not be started or reached."""

    kind = ErrorKind.ENGINE_UNAVAILABLE

    def __init__(self, reason: str) -> None:
        self.reason = reason
        super().__init__(f"Engine unavailable: {reason}")


class EngineConfigFailedError(EngineError):
    """The engine started but rejected a session directive."""

    kind = ErrorKind.ENGINE_CONFIG_FAILED

    def __init__(self, directive: str) -> None:
        self.directive = directive
        super().__init__(f"Engine rejected directive '{directive}'")


class VariableNotFoundError(EngineError):
    """Requested variable does not exist in the engine workspace."""

    kind = ErrorKind.VARIABLE_NOT_FOUND

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Variable '{name}' not found in engine workspace")


class EngineUnspecifiedError(EngineError):
    """The engine reported failure without any further detail."""

    kind = ErrorKind.UNSPECIFIED

    def __init__(self, operation: str) -> None:
        self.operation = operation
        super().__init__(f"Engine reported failure during {operation}")

"""Engine session lifecycle and variable exchange.

EngineSession is the only holder of the engine handle. Every other component
talks to the engine through a session, and every call checks that the
session has been started before touching the handle.

The handle is not reentrant: callers must serialize access if several
threads share one session.
"""

import structlog

from imagebridge.config import EngineConfig
from imagebridge.domain.array import ForeignArray
from imagebridge.engine.backend import EngineBackend, EngineLauncher, launch_matlab
from imagebridge.engine.result_codes import check_engine_return_code
from imagebridge.exceptions import (
    EngineConfigFailedError,
    EngineUnavailableError,
    ImageBridgeError,
    NullArgumentError,
    SessionNotReadyError,
    VariableNotFoundError,
)


class EngineSession:
    """Owns the connection to one engine process.

    Example:
        with EngineSession() as session:
            session.put_variable("img", image)
            session.evaluate("gray = rgb2gray(img);")
            gray = session.get_variable("gray")
    """

    def __init__(
        self,
        config: EngineConfig | None = None,
        launcher: EngineLauncher | None = None,
        logger: structlog.stdlib.BoundLogger | None = None,
    ) -> None:
        """Initialize an unstarted session.

        Args:
            config: Engine settings (defaults used if None)
            launcher: Callable that starts the engine (MATLAB if None)
            logger: Logger to use (module logger if None)
        """
        self.config = config or EngineConfig()
        self._launcher = launcher or launch_matlab
        self._handle: EngineBackend | None = None
        self.logger = logger or structlog.get_logger("imagebridge.engine")

    @property
    def handle(self) -> EngineBackend | None:
        """The engine handle, or None when the session is not started."""
        return self._handle

    @property
    def is_started(self) -> bool:
        return self._handle is not None

    def start(self, show_ui: bool | None = None) -> EngineBackend:
        """Start the engine and apply the UI visibility directive.

        Args:
            show_ui: Show the engine desktop (config default if None)

        Returns:
            The engine handle

        Raises:
            EngineUnavailableError: If the engine cannot be reached
            EngineConfigFailedError: If the visibility directive fails
        """
        if self._handle is not None:
            return self._handle

        if show_ui is None:
            show_ui = self.config.show_ui

        self.logger.info(
            "Starting engine session",
            options=self.config.startup_options,
            show_ui=show_ui,
        )

        try:
            handle = self._launcher(list(self.config.startup_options))
        except ImageBridgeError:
            raise
        except Exception as e:
            raise EngineUnavailableError(str(e)) from e

        if handle is None:
            raise EngineUnavailableError("engine launcher returned no session")

        if handle.set_visible(show_ui) != 0:
            handle.close()
            raise EngineConfigFailedError(f"set_visible({show_ui})")

        self._handle = handle
        self.logger.info("Engine session started")
        return handle

    def shutdown(self) -> None:
        """Close the engine session. No-op if it is not running."""
        if self._handle is None:
            return

        handle = self._handle
        self._handle = None
        handle.close()
        self.logger.info("Engine session closed")

    def _require_handle(self, operation: str) -> EngineBackend:
        if self._handle is None:
            raise SessionNotReadyError(operation)
        return self._handle

    def put_variable(self, name: str, array: ForeignArray) -> None:
        """Copy an array into the engine workspace.

        Raises:
            NullArgumentError: If name or array is missing
            SessionNotReadyError: If the session is not started
            EngineUnspecifiedError: If the engine rejects the variable
        """
        if not name:
            raise NullArgumentError("name")
        if array is None:
            raise NullArgumentError("array")

        handle = self._require_handle(f"put variable '{name}'")
        self.logger.debug("Put variable", variable=name, dims=array.dims)
        check_engine_return_code(
            handle.put_variable(name, array), f"put variable '{name}'"
        )

    def get_variable(self, name: str) -> ForeignArray:
        """Copy an array out of the engine workspace.

        The caller owns the returned array and must destroy it.

        Raises:
            NullArgumentError: If name is missing
            SessionNotReadyError: If the session is not started
            VariableNotFoundError: If the engine has no such variable
            EngineUnspecifiedError: If the engine fails to produce the value
        """
        if not name:
            raise NullArgumentError("name")

        handle = self._require_handle(f"get variable '{name}'")
        code, array = handle.get_variable(name)
        check_engine_return_code(code, f"get variable '{name}'")
        if array is None:
            raise VariableNotFoundError(name)

        self.logger.debug("Got variable", variable=name, dims=array.dims)
        return array

    def evaluate(self, expression: str) -> None:
        """Evaluate an expression in the engine workspace.

        Raises:
            NullArgumentError: If expression is missing
            SessionNotReadyError: If the session is not started
            EngineUnspecifiedError: If evaluation fails
        """
        if expression is None:
            raise NullArgumentError("expression")

        handle = self._require_handle("evaluate expression")
        self.logger.debug("Evaluate", expression=expression)
        check_engine_return_code(handle.eval_string(expression), "evaluate expression")

    def __enter__(self) -> "EngineSession":
        """Context manager entry."""
        self.start()
        return self

    def __exit__(self, _exc_type: object, _exc_val: object, _exc_tb: object) -> None:
        """Context manager exit."""
        self.shutdown()

"""Tests for the engine session lifecycle and variable exchange."""

import numpy as np
import pytest

from imagebridge.config import EngineConfig
from imagebridge.domain import ForeignArray
from imagebridge.engine import EngineSession
from imagebridge.exceptions import (
    EngineConfigFailedError,
    EngineUnavailableError,
    EngineUnspecifiedError,
    ErrorKind,
    NullArgumentError,
    SessionNotReadyError,
    VariableNotFoundError,
)


class TestStart:
    """Tests for starting and stopping sessions."""

    def test_start_returns_handle(self, fake_backend) -> None:
        session = EngineSession(launcher=lambda _options: fake_backend)

        handle = session.start()

        assert handle is fake_backend
        assert session.handle is fake_backend
        assert session.is_started
        assert fake_backend.visible is False

    def test_start_passes_options(self, fake_backend) -> None:
        """Test the launcher receives the configured startup options."""
        received = []

        def launcher(options):
            received.append(options)
            return fake_backend

        config = EngineConfig(startup_options=["-nodesktop", "-nosplash"])
        EngineSession(config=config, launcher=launcher).start()

        assert received == [["-nodesktop", "-nosplash"]]

    def test_show_ui(self, fake_backend) -> None:
        session = EngineSession(launcher=lambda _options: fake_backend)
        session.start(show_ui=True)
        assert fake_backend.visible is True

    def test_show_ui_from_config(self, fake_backend) -> None:
        session = EngineSession(
            config=EngineConfig(show_ui=True),
            launcher=lambda _options: fake_backend,
        )
        session.start()
        assert fake_backend.visible is True

    def test_start_twice_keeps_handle(self, fake_backend) -> None:
        calls = []

        def launcher(_options):
            calls.append(1)
            return fake_backend

        session = EngineSession(launcher=launcher)
        assert session.start() is session.start()
        assert len(calls) == 1

    def test_launcher_returns_none(self) -> None:
        session = EngineSession(launcher=lambda _options: None)

        with pytest.raises(EngineUnavailableError) as exc_info:
            session.start()

        assert exc_info.value.kind is ErrorKind.ENGINE_UNAVAILABLE
        assert session.handle is None

    def test_launcher_raises(self) -> None:
        """Test launcher failures become EngineUnavailableError."""

        def launcher(_options):
            raise OSError("connection refused")

        session = EngineSession(launcher=launcher)
        with pytest.raises(EngineUnavailableError, match="connection refused"):
            session.start()

    def test_visibility_failure(self, fake_backend) -> None:
        """Test a rejected visibility directive closes the handle."""
        fake_backend.visible_code = 1
        session = EngineSession(launcher=lambda _options: fake_backend)

        with pytest.raises(EngineConfigFailedError):
            session.start()

        assert session.handle is None
        assert fake_backend.close_count == 1

    def test_shutdown(self, session, fake_backend) -> None:
        session.shutdown()

        assert session.handle is None
        assert fake_backend.close_count == 1

    def test_shutdown_idempotent(self, session, fake_backend) -> None:
        session.shutdown()
        session.shutdown()
        assert fake_backend.close_count == 1

    def test_shutdown_never_started(self) -> None:
        EngineSession(launcher=lambda _options: None).shutdown()

    def test_context_manager(self, fake_backend) -> None:
        with EngineSession(launcher=lambda _options: fake_backend) as session:
            assert session.is_started
        assert not session.is_started
        assert fake_backend.close_count == 1


class TestNotStarted:
    """Tests for operations on a session that was never started."""

    @pytest.fixture
    def idle_session(self, fake_backend) -> EngineSession:
        return EngineSession(launcher=lambda _options: fake_backend)

    def test_evaluate(self, idle_session, fake_backend) -> None:
        with pytest.raises(SessionNotReadyError):
            idle_session.evaluate("x = 1;")
        assert fake_backend.evaluated == []

    def test_put_variable(self, idle_session, rgb_image) -> None:
        with pytest.raises(SessionNotReadyError):
            idle_session.put_variable("img", rgb_image)

    def test_get_variable(self, idle_session) -> None:
        with pytest.raises(SessionNotReadyError) as exc_info:
            idle_session.get_variable("img")
        assert exc_info.value.kind is ErrorKind.SESSION_NOT_READY

    def test_after_shutdown(self, session) -> None:
        session.shutdown()
        with pytest.raises(SessionNotReadyError):
            session.evaluate("x = 1;")


class TestVariables:
    """Tests for put, get and evaluate."""

    def test_put_then_get(self, session, rgb_image, rgb_planes) -> None:
        session.put_variable("img", rgb_image)

        fetched = session.get_variable("img")

        np.testing.assert_array_equal(fetched.as_ndarray(), rgb_planes)
        assert fetched is not rgb_image

    def test_put_missing_name(self, session, rgb_image) -> None:
        with pytest.raises(NullArgumentError) as exc_info:
            session.put_variable("", rgb_image)
        assert exc_info.value.argument == "name"

    def test_put_missing_array(self, session) -> None:
        with pytest.raises(NullArgumentError) as exc_info:
            session.put_variable("img", None)
        assert exc_info.value.argument == "array"

    def test_put_failure(self, session, fake_backend, rgb_image) -> None:
        fake_backend.put_code = 1
        with pytest.raises(EngineUnspecifiedError) as exc_info:
            session.put_variable("img", rgb_image)
        assert exc_info.value.kind is ErrorKind.UNSPECIFIED

    def test_get_unknown_variable(self, session) -> None:
        with pytest.raises(VariableNotFoundError) as exc_info:
            session.get_variable("missing")
        assert exc_info.value.name == "missing"

    def test_get_failure(self, session, fake_backend) -> None:
        """Test an engine failure while fetching is not reported as unbound."""
        fake_backend.workspace["img"] = np.zeros((2, 2, 3), dtype=np.uint8)
        fake_backend.get_code = 1

        with pytest.raises(EngineUnspecifiedError) as exc_info:
            session.get_variable("img")

        assert exc_info.value.kind is ErrorKind.UNSPECIFIED

    def test_get_missing_name(self, session) -> None:
        with pytest.raises(NullArgumentError):
            session.get_variable(None)

    def test_evaluate_records_expression(self, session, fake_backend) -> None:
        session.evaluate("x = magic(3);")
        assert fake_backend.evaluated == ["x = magic(3);"]

    def test_evaluate_failure(self, session, fake_backend) -> None:
        fake_backend.fail_on = "bad"
        with pytest.raises(EngineUnspecifiedError):
            session.evaluate("bad expression")

    def test_evaluate_none(self, session) -> None:
        with pytest.raises(NullArgumentError):
            session.evaluate(None)

    def test_get_returns_double_array(self, session, fake_backend) -> None:
        fake_backend.workspace["c"] = np.array([[1.5, 2.5]])
        array = session.get_variable("c")
        assert array.dims == (1, 2)
        assert isinstance(array, ForeignArray)

"""Tests for engine return code translation."""

import pytest

from imagebridge.engine import check_engine_return_code, error_kind_for, exit_code_for
from imagebridge.exceptions import (
    EngineUnspecifiedError,
    ErrorKind,
    IncompatibleShapeError,
    ShapeMismatchError,
    VariableNotFoundError,
)


class TestCheckEngineReturnCode:
    """Tests for check_engine_return_code."""

    def test_success(self) -> None:
        assert check_engine_return_code(0, "evaluate") is None

    @pytest.mark.parametrize("code", [1, -1, 42])
    def test_any_nonzero_is_unspecified(self, code) -> None:
        """Test every failure code collapses into one kind."""
        with pytest.raises(EngineUnspecifiedError) as exc_info:
            check_engine_return_code(code, "evaluate expression")

        assert exc_info.value.kind is ErrorKind.UNSPECIFIED
        assert exc_info.value.operation == "evaluate expression"


class TestErrorKinds:
    """Tests for mapping exceptions onto the taxonomy."""

    def test_library_errors(self) -> None:
        assert error_kind_for(ShapeMismatchError("empty")) is ErrorKind.SHAPE_MISMATCH
        assert error_kind_for(IncompatibleShapeError("x")) is ErrorKind.INCOMPATIBLE_SHAPE
        assert error_kind_for(VariableNotFoundError("x")) is ErrorKind.VARIABLE_NOT_FOUND

    def test_memory_error(self) -> None:
        assert error_kind_for(MemoryError()) is ErrorKind.OUT_OF_MEMORY

    def test_foreign_errors(self) -> None:
        assert error_kind_for(KeyError("x")) is ErrorKind.UNSPECIFIED

    def test_exit_codes(self) -> None:
        """Test every kind has a nonzero exit code."""
        for kind in ErrorKind:
            assert exit_code_for(kind) > 0
        assert exit_code_for(ErrorKind.UNSPECIFIED) == 1

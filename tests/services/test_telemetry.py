"""Tests for the @traced decorator."""

from __future__ import annotations

from collections.abc import Generator

import pytest

from orderctl.services.result import ServiceResult
from orderctl.services.telemetry import (
    disable_telemetry,
    enable_telemetry,
    telemetry_enabled,
    traced,
)


@pytest.fixture(autouse=True)
def _reset_telemetry_state() -> Generator[None]:
    yield
    disable_telemetry()


@traced
def _ok_op() -> ServiceResult:
    return ServiceResult(ok=True, op="ok_op", meta={"source": "test"})


@traced
def _boom() -> ServiceResult:
    raise RuntimeError("boom")


class TestTraced:
    def test_disabled_passthrough(self) -> None:
        assert telemetry_enabled() is False
        assert _ok_op().meta == {"source": "test"}

    def test_enabled_adds_duration(self) -> None:
        enable_telemetry()
        result = _ok_op()
        assert result.meta is not None
        assert result.meta["source"] == "test"
        assert result.meta["duration_ms"] >= 0

    def test_exceptions_propagate(self) -> None:
        enable_telemetry()
        with pytest.raises(RuntimeError, match="boom"):
            _boom()

    def test_non_result_untouched(self) -> None:
        @traced
        def plain() -> int:
            return 7

        enable_telemetry()
        assert plain() == 7

    def test_preserves_name(self) -> None:
        assert _ok_op.__name__ == "_ok_op"

"""Tests for telemetry primitives: Span, trace_span, @traced."""

from __future__ import annotations

import time
from collections.abc import Generator

import pytest

from archctl.services.result import ServiceResult
from archctl.services.telemetry import (
    Span,
    _current_span,
    disable_telemetry,
    enable_telemetry,
    trace_span,
    traced,
)


@pytest.fixture(autouse=True)
def _reset_telemetry_state() -> Generator[None]:
    """Ensure clean telemetry state for every test."""
    yield
    disable_telemetry()
    _current_span.set(None)


# ── Span unit tests ──────────────────────────────────────────────────


class TestSpan:
    def test_duration_before_end_is_zero(self) -> None:
        assert Span(name="test").duration_ms == 0.0

    def test_duration_after_end(self) -> None:
        span = Span(name="test")
        time.sleep(0.005)
        span.end()
        assert span.duration_ms > 0

    def test_to_dict_minimal(self) -> None:
        span = Span(name="root")
        span.end()
        d = span.to_dict()
        assert d["name"] == "root"
        assert "children" not in d
        assert "annotations" not in d

    def test_annotate(self) -> None:
        span = Span(name="test")
        span.annotate("rules", 5)
        span.end()
        assert span.to_dict()["annotations"] == {"rules": 5}


# ── trace_span tests ─────────────────────────────────────────────────


class TestTraceSpan:
    def test_disabled_yields_none(self) -> None:
        with trace_span("test") as span:
            assert span is None

    def test_no_root_yields_none(self) -> None:
        enable_telemetry()
        with trace_span("test") as span:
            assert span is None

    def test_nested_spans(self) -> None:
        enable_telemetry()
        root = Span(name="root")
        token = _current_span.set(root)
        try:
            with trace_span("a"):
                with trace_span("b"):
                    pass
            assert root.children[0].name == "a"
            assert root.children[0].children[0].name == "b"
            assert root.children[0].end_time is not None
        finally:
            _current_span.reset(token)


# ── @traced tests ────────────────────────────────────────────────────


@traced
def _operation() -> ServiceResult:
    with trace_span("step") as span:
        if span:
            span.annotate("n", 1)
    return ServiceResult(ok=True, op="test", meta={"existing": True})


@traced
def _plain() -> int:
    return 7


@traced
def _boom() -> ServiceResult:
    msg = "boom"
    raise RuntimeError(msg)


class TestTraced:
    def test_disabled_passthrough(self) -> None:
        assert _operation().meta == {"existing": True}

    def test_enabled_injects_telemetry(self) -> None:
        enable_telemetry()
        result = _operation()
        assert result.meta is not None
        assert result.meta["existing"] is True
        telemetry = result.meta["telemetry"]
        assert telemetry["name"].endswith("_operation")
        assert telemetry["children"][0]["name"] == "step"
        assert telemetry["children"][0]["annotations"] == {"n": 1}

    def test_non_result_return_untouched(self) -> None:
        enable_telemetry()
        assert _plain() == 7

    def test_exception_propagates_and_resets_span(self) -> None:
        enable_telemetry()
        with pytest.raises(RuntimeError):
            _boom()
        assert _current_span.get() is None

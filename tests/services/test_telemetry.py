"""Tests for telemetry primitives: Span, trace_span, @traced."""

from __future__ import annotations

from collections.abc import Generator

import pytest

from psuctl.services.result import ServiceResult
from psuctl.services.telemetry import (
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


class TestSpan:
    def test_duration_before_end_is_zero(self) -> None:
        assert Span(name="test").duration_ms == 0.0

    def test_to_dict_minimal(self) -> None:
        span = Span(name="root")
        span.end()
        d = span.to_dict()
        assert d["name"] == "root"
        assert d["duration_ms"] >= 0
        assert "children" not in d
        assert "annotations" not in d

    def test_to_dict_with_children_and_annotations(self) -> None:
        root = Span(name="root")
        child = Span(name="get_endpoints", parent=root)
        child.annotate("count", 2)
        root.children.append(child)
        child.end()
        root.end()
        d = root.to_dict()
        assert d["children"][0]["name"] == "get_endpoints"
        assert d["children"][0]["annotations"] == {"count": 2}


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
        finally:
            _current_span.reset(token)
        assert root.children[0].name == "a"
        assert root.children[0].children[0].name == "b"
        assert root.children[0].end_time is not None


class TestTracedDecorator:
    def test_noop_when_disabled(self) -> None:
        @traced
        def op() -> ServiceResult:
            return ServiceResult(ok=True, op="test")

        assert op().meta is None

    def test_injects_meta_when_enabled(self) -> None:
        @traced
        def op() -> ServiceResult:
            with trace_span("remote_call"):
                pass
            return ServiceResult(ok=True, op="test", meta={"existing": "data"})

        enable_telemetry()
        result = op()
        assert result.meta is not None
        assert result.meta["existing"] == "data"
        telemetry = result.meta["telemetry"]
        assert telemetry["name"].endswith("op")
        assert telemetry["children"][0]["name"] == "remote_call"

    def test_failed_results_are_traced(self) -> None:
        @traced
        def op() -> ServiceResult:
            return ServiceResult.failure("test", "NOT_FOUND", "nope")

        enable_telemetry()
        result = op()
        assert result.ok is False
        assert result.meta is not None
        assert "telemetry" in result.meta

    def test_exception_resets_span(self) -> None:
        @traced
        def op() -> ServiceResult:
            raise RuntimeError("boom")

        enable_telemetry()
        with pytest.raises(RuntimeError):
            op()
        assert _current_span.get() is None

    def test_non_service_result_passthrough(self) -> None:
        @traced
        def op() -> str:
            return "hello"

        enable_telemetry()
        assert op() == "hello"

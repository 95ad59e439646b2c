"""Tests for the tracer module."""

import json

import networkx as nx
import numpy as np
import pytest


class TestSummarize:
    """Tests for object summarization."""

    def test_numpy_array_summary(self):
        """Test that numpy arrays are summarized with shape and type."""
        from curvegraph.tracer import summarize

        arr = np.zeros((100, 3), dtype=np.float64)
        summary = summarize(arr)

        assert "ndarray" in summary
        assert "100x3" in summary
        assert "float64" in summary

    def test_summary_capped_length(self):
        """Test that summary never exceeds max length."""
        from curvegraph.tracer import summarize

        large_dict = {f"key_{i}": f"value_{i}" for i in range(100)}
        summary = summarize(large_dict, max_len=20)

        assert len(summary) <= 20

    def test_list_summary(self):
        """Test list summarization."""
        from curvegraph.tracer import summarize

        summary = summarize(["L1", "L2", "L3"])

        assert "list" in summary
        assert "len=3" in summary

    def test_string_summary(self):
        """Test long string summarization."""
        from curvegraph.tracer import summarize

        summary = summarize("a" * 1000)

        assert "str" in summary
        assert "len=1000" in summary
        assert len(summary) <= 200

    def test_none_summary(self):
        from curvegraph.tracer import summarize

        assert summarize(None) == "None"

    def test_pydantic_model_summary(self):
        """Test Pydantic model summarization."""
        from curvegraph.models import CheckResult, Severity
        from curvegraph.tracer import summarize

        check = CheckResult(rule_id="r", severity=Severity.INFO, passed=True, message="ok")
        summary = summarize(check)

        assert "CheckResult" in summary

    def test_curve_graph_summary(self, triangle, build_curves):
        from curvegraph.tracer import summarize

        builder = build_curves(triangle)
        assert summarize(builder.graph) == "CurveGraph(vertices=9,edges=9)"

    def test_curve_vertex_summary(self):
        from curvegraph.models import CurveVertex, Point
        from curvegraph.tracer import summarize

        summary = summarize(CurveVertex(Point(1, 2), "L1"))
        assert summary == "vertex(1.000,2.000,id=L1)"

    def test_networkx_summary(self):
        from curvegraph.tracer import summarize

        graph = nx.MultiDiGraph()
        graph.add_edge("a", "b")
        assert summarize(graph) == "MultiDiGraph(nodes=2,edges=1)"


class TestTracerSpan:
    """Tests for tracer span functionality."""

    def test_span_nesting(self, capsys):
        """Test that spans produce proper indentation."""
        from curvegraph.tracer import configure_tracer, get_tracer

        configure_tracer(enabled=True, level="INFO")
        tracer = get_tracer()

        with tracer.span("outer", module="test"):
            with tracer.span("inner", module="test"):
                tracer.event("inside")

        captured = capsys.readouterr()
        lines = captured.err.strip().split("\n")

        assert len(lines) == 5
        assert "    test:inner  inside" in lines[2]

        configure_tracer(enabled=False)

    def test_tracer_disabled_no_output(self, capsys):
        """Test that disabled tracer produces no output."""
        from curvegraph.tracer import configure_tracer, get_tracer

        configure_tracer(enabled=False)
        tracer = get_tracer()

        with tracer.span("test", module="test"):
            tracer.event("should not appear")

        captured = capsys.readouterr()
        assert captured.err == ""

    def test_level_filtering(self, capsys):
        from curvegraph.tracer import configure_tracer, get_tracer

        configure_tracer(enabled=True, level="WARN")
        tracer = get_tracer()
        tracer.event("hidden", level="INFO")
        tracer.event("shown", level="WARN")
        configure_tracer(enabled=False)

        err = capsys.readouterr().err
        assert "hidden" not in err
        assert "shown" in err

    def test_span_logs_failure(self, capsys):
        from curvegraph.tracer import configure_tracer, get_tracer

        configure_tracer(enabled=True, level="INFO")
        tracer = get_tracer()

        with pytest.raises(RuntimeError):
            with tracer.span("boom", module="test"):
                raise RuntimeError("bad")
        configure_tracer(enabled=False)

        err = capsys.readouterr().err
        assert "ERROR" in err
        assert "RuntimeError: bad" in err

    def test_json_lines_to_file(self, temp_dir, capsys):
        import os

        from curvegraph.tracer import configure_tracer, get_tracer

        path = os.path.join(temp_dir, "trace.log")
        configure_tracer(enabled=True, level="INFO", file_path=path, json_output=True)
        get_tracer().event("hello", curve_id="L1")
        configure_tracer(enabled=False)

        with open(path, encoding="utf-8") as f:
            lines = f.read().strip().split("\n")
        record = json.loads(lines[-1])
        assert record["message"] == "hello curve_id='L1'"
        assert record["meta"] == {"curve_id": "'L1'"}


class TestTraceDecorator:
    """Tests for the @trace decorator."""

    def test_decorator_runs_function(self):
        """Test that decorated function executes normally."""
        from curvegraph.tracer import configure_tracer, trace

        configure_tracer(enabled=False)

        @trace(label="test_func")
        def my_func(x):
            return x * 2

        assert my_func(5) == 10

    def test_decorator_with_exception(self):
        """Test that decorator propagates exceptions."""
        from curvegraph.tracer import configure_tracer, trace

        configure_tracer(enabled=False)

        @trace(label="failing_func")
        def failing_func():
            raise ValueError("test error")

        with pytest.raises(ValueError):
            failing_func()

    def test_traced_builder_logs_spans(self, triangle, build_curves, capsys):
        from curvegraph.tracer import configure_tracer

        configure_tracer(enabled=True, level="INFO")
        try:
            build_curves(triangle)
        finally:
            configure_tracer(enabled=False)

        err = capsys.readouterr().err
        assert "builder:build_graph  start" in err
        assert "Graph: vertices=9, edges=9" in err

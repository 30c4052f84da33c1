"""Tests for the tracer module."""

import json

import numpy as np
import pytest


class TestSummarize:
    """Tests for object summarization."""

    def test_numpy_array_summary(self):
        """Test that numpy arrays are summarized with shape and type."""
        from geometrize.tracer import summarize

        arr = np.zeros((100, 200), dtype=np.uint64)
        summary = summarize(arr)

        assert "ndarray" in summary
        assert "100x200" in summary
        assert "uint64" in summary

    def test_heatmap_summary(self):
        from geometrize.images.heatmap import Heatmap
        from geometrize.tracer import summarize

        summary = summarize(Heatmap.from_fn(4, 2, lambda x, y: x))

        assert summary == "Heatmap(4x2,max=3)"

    def test_shape_summary(self):
        """Test that shapes report their validity."""
        from geometrize.shapes.rectangle import Rectangle
        from geometrize.tracer import summarize

        summary = summarize(Rectangle.builder().aspect(30.0, 5.0).build())

        assert summary == "Rectangle(valid=False)"

    def test_point_summary(self):
        from geometrize.math.point import Point
        from geometrize.tracer import summarize

        assert summarize(Point(1.5, 2.0)) == "Point(1.5,2)"

    def test_summary_capped_length(self):
        """Test that summary never exceeds max length."""
        from geometrize.tracer import summarize

        large_dict = {f"key_{i}": f"value_{i}" for i in range(100)}
        summary = summarize(large_dict, max_len=20)

        assert len(summary) <= 20

    def test_list_summary(self):
        from geometrize.tracer import summarize

        summary = summarize([1, 2, 3, 4, 5])

        assert "list" in summary
        assert "len=5" in summary

    def test_string_summary(self):
        """Test long string summarization."""
        from geometrize.tracer import summarize

        summary = summarize("a" * 1000)

        assert "len=1000" in summary
        assert len(summary) <= 200

    def test_none_summary(self):
        from geometrize.tracer import summarize

        assert summarize(None) == "None"


class TestTracerSpan:
    """Tests for tracer span functionality."""

    def test_span_nesting(self, capsys, tracing_disabled):
        """Test that spans produce start/end lines and nested events."""
        from geometrize.tracer import configure_tracer, get_tracer

        configure_tracer(enabled=True, level="INFO")
        tracer = get_tracer()

        with tracer.span("outer", module="test"):
            with tracer.span("inner", module="test"):
                tracer.event("inside")

        lines = capsys.readouterr().err.strip().split("\n")

        assert len(lines) == 5
        assert "test:inner  inside" in lines[2]

    def test_tracer_disabled_no_output(self, capsys):
        from geometrize.tracer import configure_tracer, get_tracer

        configure_tracer(enabled=False)
        tracer = get_tracer()

        with tracer.span("test", module="test"):
            tracer.event("should not appear")

        assert capsys.readouterr().err == ""

    def test_failed_span_unwinds(self, capsys, tracing_disabled):
        """Test that an exception leaves the span stack balanced."""
        from geometrize.tracer import configure_tracer, get_tracer

        configure_tracer(enabled=True, level="INFO")
        tracer = get_tracer()

        with pytest.raises(RuntimeError):
            with tracer.span("boom", module="test"):
                raise RuntimeError("bad")

        assert tracer._span_stack == []
        assert tracer._depth == 0
        assert "failed" in capsys.readouterr().err

    def test_level_filtering(self, capsys, tracing_disabled):
        from geometrize.tracer import configure_tracer, get_tracer

        configure_tracer(enabled=True, level="WARN")
        tracer = get_tracer()

        tracer.event("quiet", level="DEBUG")
        tracer.event("loud", level="ERROR")

        err = capsys.readouterr().err
        assert "quiet" not in err
        assert "loud" in err

    def test_json_output(self, capsys, tracing_disabled):
        from geometrize.images.heatmap import Heatmap
        from geometrize.tracer import configure_tracer, get_tracer

        configure_tracer(enabled=True, level="INFO", json_output=True)
        get_tracer().event("exported", heatmap=Heatmap(2, 2))

        lines = capsys.readouterr().err.strip().split("\n")
        record = json.loads(lines[-1])

        assert record["message"].startswith("exported")
        assert record["meta"]["heatmap"] == "Heatmap(2x2,max=0)"

    def test_trace_file(self, temp_dir, tracing_disabled):
        import os

        from geometrize.tracer import configure_tracer, get_tracer

        path = os.path.join(temp_dir, "trace.log")
        configure_tracer(enabled=True, level="INFO", file_path=path)
        get_tracer().event("to file")
        configure_tracer(enabled=False)

        with open(path, encoding="utf-8") as f:
            assert "to file" in f.read()

    def test_reconfigure_releases_trace_file(self, temp_dir, tracing_disabled):
        import os

        from geometrize.tracer import configure_tracer, get_tracer

        path = os.path.join(temp_dir, "trace.log")
        configure_tracer(enabled=True, file_path=path)
        handle = get_tracer().config._file_handle

        configure_tracer(enabled=False)

        assert handle.closed
        assert get_tracer().config._file_handle is None


class TestTraceDecorator:
    """Tests for the @trace decorator."""

    def test_decorator_runs_function(self):
        from geometrize.tracer import configure_tracer, trace

        configure_tracer(enabled=False)

        @trace(label="test_func")
        def my_func(x):
            return x * 2

        assert my_func(5) == 10

    def test_decorator_with_exception(self):
        from geometrize.tracer import configure_tracer, trace

        configure_tracer(enabled=False)

        @trace(label="failing_func")
        def failing_func():
            raise ValueError("test error")

        with pytest.raises(ValueError):
            failing_func()

    def test_traced_heatmap_export(self, capsys, tracing_disabled):
        """Test that heatmap exports open a span when tracing is on."""
        from geometrize.images.heatmap import Heatmap
        from geometrize.tracer import configure_tracer

        configure_tracer(enabled=True, level="INFO")
        Heatmap(2, 2).to_luma8()

        assert "heatmap:heatmap_to_luma8" in capsys.readouterr().err

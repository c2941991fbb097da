"""test_sink.py - Unit tests for StreamSink, FileSink and as_sink().

Covers:
    - StreamSink writes str to text streams and bytes to binary streams
    - StreamSink without a stream follows sys.stdout at write time
    - StreamSink flushes the stream after each write
    - FileSink appends, creating parent directories
    - as_sink() wraps streams and passes Sinks through
"""

import io

import pytest

from dabug.sink import FileSink, Sink, StreamSink, as_sink


class FlushCounter(io.StringIO):
    def __init__(self):
        super().__init__()
        self.flushes = 0

    def flush(self):
        self.flushes += 1
        super().flush()


# ---------------------------------------------------------------------------
# StreamSink
# ---------------------------------------------------------------------------


class TestStreamSink:
    def test_stream_sink_writes_text(self):
        """Text streams receive the rendered text unchanged."""
        out = io.StringIO()
        StreamSink(out).write("a.py:1 - x\n")
        assert out.getvalue() == "a.py:1 - x\n"

    def test_stream_sink_encodes_for_binary_stream(self):
        """Byte streams receive the text encoded, repeatedly."""
        out = io.BytesIO()
        sink = StreamSink(out)
        sink.write("ü\n")
        sink.write("second\n")
        assert out.getvalue() == "ü\nsecond\n".encode("utf-8")

    def test_stream_sink_uses_configured_encoding(self):
        """The encoding argument applies to byte streams."""
        out = io.BytesIO()
        StreamSink(out, encoding="latin-1").write("ü")
        assert out.getvalue() == "ü".encode("latin-1")

    def test_stream_sink_defaults_to_current_stdout(self, capsys):
        """With no stream, output goes to whatever sys.stdout is at write time."""
        StreamSink().write("to stdout\n")
        assert capsys.readouterr().out == "to stdout\n"

    def test_stream_sink_flushes_after_write(self):
        """The stream is flushed once per write."""
        out = FlushCounter()
        StreamSink(out).write("x\n")
        assert out.flushes == 1

    def test_stream_sink_rejects_non_stream(self):
        """Objects without write() are refused up front."""
        with pytest.raises(TypeError):
            StreamSink(42)


# ---------------------------------------------------------------------------
# FileSink
# ---------------------------------------------------------------------------


class TestFileSink:
    def test_file_sink_creates_parents_and_appends(self, tmp_path):
        """Missing directories are created; successive writes append."""
        path = tmp_path / "nested" / "dir" / "trace.txt"
        sink = FileSink(str(path))
        sink.write("-----\n")
        sink.write("=====\n")

        assert path.read_text(encoding="utf-8") == "-----\n=====\n"

    def test_file_sink_rejects_empty_path(self):
        """An empty path is a ValueError."""
        with pytest.raises(ValueError):
            FileSink("")


# ---------------------------------------------------------------------------
# as_sink()
# ---------------------------------------------------------------------------


class TestAsSink:
    def test_as_sink_passes_sink_through(self):
        """An existing Sink is returned as is."""
        sink = StreamSink(io.StringIO())
        assert as_sink(sink) is sink

    def test_as_sink_wraps_stream(self):
        """A plain stream is wrapped in a StreamSink."""
        sink = as_sink(io.StringIO())
        assert isinstance(sink, StreamSink)
        assert isinstance(sink, Sink)

    def test_as_sink_none_means_stdout(self, capsys):
        """None wraps standard output."""
        as_sink(None).write("hi\n")
        assert capsys.readouterr().out == "hi\n"

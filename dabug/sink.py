"""sink.py - Output destinations for rendered dabug text.

A Tracer writes every rendered line or block through a Sink. Two concrete
sinks are provided:

    StreamSink  — writes to any writable stream, text or binary
                  (default: standard output).
    FileSink    — appends to a file on disk.

``Tracer.set_writer()`` also accepts a bare stream and wraps it in a
StreamSink, so most callers never construct a sink explicitly::

    import io
    import dabug

    out = io.StringIO()
    dabug.set_writer(out)
"""

import os
import sys
from abc import ABC, abstractmethod


class Sink(ABC):
    """Abstract base class for rendered-text destinations.

    A sink receives text that is already fully rendered, newlines included,
    and is responsible only for delivering it. Each call carries one complete
    single line or one complete block, so a sink that performs a single
    underlying write per call never interleaves a block with other writers.

    Example:
        >>> class ListSink(Sink):
        ...     def __init__(self):
        ...         self.chunks = []
        ...     def write(self, text):
        ...         self.chunks.append(text)
    """

    @abstractmethod
    def write(self, text: str) -> None:
        """Deliver ``text`` to the destination.

        Args:
            text: Rendered output. Never empty: the Tracer does not call
                ``write`` when there is nothing to output.
        """


class StreamSink(Sink):
    """Write rendered text to a writable stream.

    Text streams receive ``str``; byte streams (``io.BytesIO``, a socket
    file, ``sys.stdout.buffer``) receive the text encoded with ``encoding``.
    The kind of stream is detected on the first write that the stream
    rejects with ``TypeError``.

    Attributes:
        _stream: The target stream, or None to mean ``sys.stdout`` looked up
            at write time (so redirection of ``sys.stdout`` is honoured).
        _encoding (str): Encoding used for byte streams.
        _binary (bool): Set once the stream is known to require bytes.
    """

    def __init__(self, stream=None, encoding: str = "utf-8") -> None:
        if stream is not None and not callable(getattr(stream, "write", None)):
            raise TypeError(f"stream must have a write() method, got {type(stream).__name__}")
        self._stream = stream
        self._encoding = encoding
        self._binary = False

    @property
    def stream(self):
        return self._stream if self._stream is not None else sys.stdout

    def write(self, text: str) -> None:
        stream = self.stream
        if self._binary:
            stream.write(text.encode(self._encoding))
        else:
            try:
                stream.write(text)
            except TypeError:
                self._binary = True
                stream.write(text.encode(self._encoding))

        flush = getattr(stream, "flush", None)
        if callable(flush):
            flush()


class FileSink(Sink):
    """Append rendered text to a file on disk.

    The file and any missing parent directories are created on the first
    write. The file is opened and closed for every write, so it can be
    removed or rotated externally between flushes.

    Example:
        >>> sink = FileSink("./trace.txt")
    """

    def __init__(self, path: str, encoding: str = "utf-8") -> None:
        """Initialise the file sink.

        Args:
            path: Path to the output file.
            encoding: Character encoding for the file. Defaults to ``"utf-8"``.

        Raises:
            ValueError: If ``path`` is empty.
        """
        if not path:
            raise ValueError("path must not be empty")
        self._path = path
        self._encoding = encoding

    @property
    def path(self) -> str:
        return self._path

    def write(self, text: str) -> None:
        parent = os.path.dirname(os.path.abspath(self._path))
        os.makedirs(parent, exist_ok=True)
        with open(self._path, "a", encoding=self._encoding) as f:
            f.write(text)


def as_sink(writer) -> Sink:
    """Return ``writer`` as a Sink, wrapping plain streams in a StreamSink.

    Raises:
        TypeError: If ``writer`` is neither a Sink nor has a ``write()`` method.
    """
    if isinstance(writer, Sink):
        return writer
    return StreamSink(writer)

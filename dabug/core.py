"""core.py - The Tracer: configuration, trace calls and flushing.

A Tracer owns one LineBuffer and the settings that control how its entries
are rendered. Each Tracer is independent; the package-level functions in
``dabug`` delegate to a default instance for convenience.
"""

import logging
from typing import Any, Optional

from .buffer import Entry, LineBuffer
from .render import DEFAULT_BEGIN, DEFAULT_END, format_values, render_block, render_single
from .sink import Sink, as_sink
from .source import Source, capture, default_base_dir

logger = logging.getLogger(__name__)


class Tracer:
    """Buffers trace entries and renders them to a sink.

    In buffered mode (the default) entries accumulate until ``flush()``
    renders them as one aligned block. In autoflush mode every trace call
    writes its own line immediately and nothing is buffered.

    Example:
        >>> import io
        >>> out = io.StringIO()
        >>> t = Tracer(writer=out)
        >>> t.msg("loaded")
        >>> t.here()
        >>> t.flush()       # writes "-----", both lines, "====="
    """

    def __init__(
        self,
        writer=None,
        prefix: str = "",
        autoflush: bool = False,
        begin: str = DEFAULT_BEGIN,
        end: str = DEFAULT_END,
        base_dir: Optional[str] = None,
    ) -> None:
        """Create a Tracer.

        Args:
            writer: A Sink or any object with a ``write()`` method. None
                means standard output.
            prefix: Global prefix placed before every line and marker.
            autoflush: Render each trace call immediately instead of
                buffering. Defaults to False.
            begin: Marker line opening a flushed block.
            end: Marker line closing a flushed block.
            base_dir: Directory that captured file paths are made relative
                to. Defaults to the directory of the program's entry script.
        """
        self._sink: Sink = as_sink(writer)
        self._prefix = prefix
        self._autoflush = autoflush
        self._begin = begin
        self._end = end
        self._base_dir = base_dir if base_dir is not None else default_base_dir()
        self._buffer = LineBuffer()

    # ---------------------------------------------------------------------- #
    # Configuration
    # ---------------------------------------------------------------------- #

    @property
    def sink(self) -> Sink:
        return self._sink

    @property
    def prefix(self) -> str:
        return self._prefix

    @property
    def autoflush(self) -> bool:
        return self._autoflush

    @property
    def markers(self):
        return self._begin, self._end

    @property
    def base_dir(self) -> str:
        return self._base_dir

    def set_writer(self, writer) -> None:
        """Send subsequent output to ``writer`` (a Sink or writable stream)."""
        self._sink = as_sink(writer)

    def set_prefix(self, prefix: str) -> None:
        """Change the global prefix.

        Entries already buffered keep the prefix they were created with.
        """
        self._prefix = prefix

    def set_autoflush(self, enabled: bool) -> None:
        """Switch autoflush mode on or off.

        Any backlog is flushed as a block first, so enabling autoflush never
        leaves entries stranded in the buffer.
        """
        self._autoflush = enabled
        if not self._buffer.is_empty():
            self.flush()

    def set_markers(self, begin: Optional[str] = None, end: Optional[str] = None) -> None:
        if begin is not None:
            self._begin = begin
        if end is not None:
            self._end = end

    # ---------------------------------------------------------------------- #
    # Trace calls
    # ---------------------------------------------------------------------- #

    def here(self) -> None:
        """Record that the calling line ran, with no message."""
        self._record("")

    def msg(self, message: str) -> None:
        """Record ``message`` against the calling line."""
        try:
            text = str(message)
        except Exception:
            logger.debug("dabug: str() failed for %s", type(message).__name__, exc_info=True)
            text = object.__repr__(message)
        self._record(text)

    def objs(self, *values: Any) -> None:
        """Record a structural dump of ``values``, e.g. ``[0] 42, [1] "x"``.

        If the dump itself fails, the entry is still recorded with a
        ``<dump failed: ExcType>`` message.
        """
        try:
            text = format_values(*values)
        except Exception as exc:
            logger.debug("dabug: value dump failed", exc_info=True)
            text = f"<dump failed: {type(exc).__name__}>"
        self._record(text)

    def flush(self) -> None:
        """Render every pending entry as one block and clear the buffer.

        Does nothing, and writes nothing, when the buffer is empty.
        """
        if self._buffer.is_empty():
            return
        entries = self._buffer.drain()
        if not entries:
            return
        self._write(render_block(entries, self._prefix, self._begin, self._end))

    def pending(self) -> int:
        """Return the number of buffered entries."""
        return len(self._buffer)

    def add(self, message: str, source: Source) -> None:
        """Record ``message`` against an already known ``source``.

        Used by integrations, such as the logging bridge, that learn the call
        site some other way than by walking the stack.
        """
        entry = Entry.create(message, source, self._prefix)
        if self._autoflush:
            self._write(render_single(entry) + "\n")
            return
        self._buffer.append(entry)

    # ---------------------------------------------------------------------- #
    # Private helpers
    # ---------------------------------------------------------------------- #

    def _record(self, message: str) -> None:
        self.add(message, capture(self._base_dir))

    def _write(self, text: str) -> None:
        try:
            self._sink.write(text)
        except Exception:
            # A closed, broken or buggy sink must not take the traced program down.
            logger.warning("dabug: failed to write to %s", type(self._sink).__name__, exc_info=True)

"""handler.py - Bridge from the standard logging module into a dabug Tracer.

DabugHandler lets an application that already logs through ``logging`` see
those records in dabug's aligned block, interleaved with its ``dabug.msg()``
and ``dabug.here()`` calls:

    import logging
    import dabug
    from dabug import DabugHandler

    logging.getLogger().addHandler(DabugHandler())
    logger = logging.getLogger(__name__)

    dabug.here()
    logger.info("fetched %d rows", 42)   # buffered as a dabug entry
    dabug.flush()                        # both lines, one block

Log levels are not rendered: dabug has no notion of levels, only of where a
line came from and what it said. The call site is taken from the LogRecord
itself (``pathname``, ``lineno``, ``funcName``) rather than from the stack,
since by the time ``emit()`` runs the stack is deep inside ``logging``.
"""

import logging
import os
from typing import Optional

from .core import Tracer
from .source import Source, normalize_path


class DabugHandler(logging.Handler):
    """A logging.Handler that records every LogRecord as a dabug entry.

    Flushing:
        ``flush()`` renders the tracer's pending block. ``logging.shutdown()``
        flushes every handler at interpreter exit, so entries recorded
        through this handler are not lost if the program never calls
        ``dabug.flush()`` itself.

    Thread-safety:
        ``logging.Handler.handle()`` serializes ``emit()`` with the handler's
        lock; the tracer's buffer has its own lock for callers that trace
        directly.

    Attributes:
        _tracer (Tracer | None): Target tracer. None means the package's
            default tracer, looked up on every record.
    """

    def __init__(self, tracer: Optional[Tracer] = None, level: int = logging.NOTSET) -> None:
        super().__init__(level)
        self._tracer = tracer

    @property
    def tracer(self) -> Tracer:
        if self._tracer is not None:
            return self._tracer
        from . import default

        return default

    def emit(self, record: logging.LogRecord) -> None:
        """Add ``record`` to the tracer as an entry."""
        try:
            tracer = self.tracer
            tracer.add(record.getMessage(), self._to_source(record, tracer.base_dir))
        except Exception:
            # A bug inside dabug must never silence the application's logs.
            self.handleError(record)

    def flush(self) -> None:
        self.acquire()
        try:
            self.tracer.flush()
        finally:
            self.release()

    def _to_source(self, record: logging.LogRecord, base_dir: str) -> Source:
        """Build a Source from the call-site fields of ``record``."""
        path = record.pathname or ""
        if path:
            path = normalize_path(os.path.abspath(path), base_dir)
        function = record.funcName or ""
        if function and record.module:
            function = f"{record.module}.{function}"
        return Source(path, function, record.lineno or 0)

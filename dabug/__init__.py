"""dabug/__init__.py - Public API for the dabug package.

dabug is a small execution tracer for development: sprinkle calls through the
code, then flush, and get one aligned block showing what ran, in what order,
and where.

Quick start:
    import dabug

    dabug.here()                   # "this line ran"
    dabug.msg("loaded config")     # a message tagged with its call site
    dabug.objs(user_id, payload)   # [0] 7, [1] {"amount": 5000}
    dabug.flush()

    # Output (standard output by default):
    # -----
    # app/main.py:3
    # app/main.py:4  - loaded config
    # app/main.py:5  - [0] 7, [1] {"amount": 5000}
    # =====

    # Render each call immediately instead of buffering
    dabug.set_autoflush(True)

    # Independent tracer, e.g. for tests or a separate subsystem
    from dabug import Tracer
    tracer = Tracer(writer=open("trace.txt", "a"), prefix="[worker] ")

Exported names:
    Tracer:        The tracer class; all state lives on an instance.
    default:       The tracer behind the module-level functions.
    DabugHandler:  logging.Handler that feeds log records into a tracer.
    Source, Entry: Value types for call sites and buffered entries.
    Sink, StreamSink, FileSink: Output destinations.
"""

from .buffer import Entry, LineBuffer
from .core import Tracer
from .handler import DabugHandler
from .render import debug_repr, format_values
from .sink import FileSink, Sink, StreamSink
from .source import Source

# Default tracer for the module-level convenience functions. Buffered mode:
# nothing is written until flush() is called.
default = Tracer()


def set_writer(writer) -> None:
    """Send the default tracer's output to ``writer``."""
    default.set_writer(writer)


def set_prefix(prefix: str) -> None:
    default.set_prefix(prefix)


def set_autoflush(enabled: bool) -> None:
    """Toggle autoflush on the default tracer, flushing any backlog."""
    default.set_autoflush(enabled)


def set_markers(begin=None, end=None) -> None:
    default.set_markers(begin, end)


def here() -> None:
    default.here()


def msg(message: str) -> None:
    default.msg(message)


def objs(*values) -> None:
    default.objs(*values)


def flush() -> None:
    default.flush()


__all__ = [
    "Tracer",
    "default",
    "DabugHandler",
    "Source",
    "Entry",
    "LineBuffer",
    "Sink",
    "StreamSink",
    "FileSink",
    "debug_repr",
    "format_values",
    "set_writer",
    "set_prefix",
    "set_autoflush",
    "set_markers",
    "here",
    "msg",
    "objs",
    "flush",
]
__version__ = "0.1.0"

"""source.py - Call-site capture for dabug entries.

Every trace call records *where* it was made: the file, the line and the
qualified name of the calling function. ``capture()`` finds that call site by
walking outward from its own frame and stopping at the first frame whose code
does not live inside the ``dabug`` package, so the public entry points can be
wrapped or re-layered without any hardcoded frame-skip count going stale.

File paths are reported relative to a base directory (by default the
directory of the running program's entry script), which keeps prefixes short
when the traced code sits next to the program being run.
"""

import logging
import os
import sys
from typing import Optional

logger = logging.getLogger(__name__)

# Directory of the dabug package itself. Frames executing code from any file
# under it belong to the tracer's own call chain.
_PACKAGE_DIR = os.path.dirname(os.path.abspath(__file__))


class Source:
    """An immutable call-site location.

    Attributes:
        file (str): Path of the source file, relative to the base directory
            when possible, otherwise absolute.
        function (str): Qualified function name, ``"<module>.<qualname>"``.
        line (int): 1-based line number. 0 for the zero Source.

    Example:
        >>> src = Source("app/main.py", "__main__.run", 12)
        >>> str(src)
        'app/main.py:12'
    """

    __slots__ = ("_file", "_function", "_line")

    def __init__(self, file: str = "", function: str = "", line: int = 0) -> None:
        self._file = file
        self._function = function
        self._line = line

    @property
    def file(self) -> str:
        return self._file

    @property
    def function(self) -> str:
        return self._function

    @property
    def line(self) -> int:
        return self._line

    def __str__(self) -> str:
        return f"{self._file}:{self._line}"

    def __repr__(self) -> str:  # pragma: no cover
        return f"Source({self._file!r}, {self._function!r}, {self._line})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Source):
            return NotImplemented
        return (self._file, self._function, self._line) == (
            other._file,
            other._function,
            other._line,
        )

    def __hash__(self) -> int:
        return hash((self._file, self._function, self._line))


ZERO_SOURCE = Source()


def default_base_dir() -> str:
    """Return the directory of the running program's entry script.

    Falls back to the current working directory when the interpreter was
    started without a script (interactive session, ``python -c``).
    """
    entry = sys.argv[0] if sys.argv else ""
    if not entry or entry == "-c":
        return os.getcwd()
    return os.path.dirname(os.path.abspath(entry))


def normalize_path(path: str, base_dir: Optional[str]) -> str:
    """Make ``path`` relative to ``base_dir`` when it lies underneath it.

    The base directory and any leading separator are stripped. A path that
    does not share the base directory as an ancestor is returned unchanged.

    Args:
        path: Absolute path of a source file.
        base_dir: Directory to strip. Empty or None disables normalization.

    Returns:
        The relative path, or ``path`` itself when there is no common prefix.

    Example:
        >>> normalize_path("/srv/app/pkg/mod.py", "/srv/app")
        'pkg/mod.py'
        >>> normalize_path("/usr/lib/other.py", "/srv/app")
        '/usr/lib/other.py'
    """
    if not base_dir:
        return path
    base = base_dir.rstrip(os.sep)
    if not path.startswith(base + os.sep):
        return path
    return path[len(base):].lstrip(os.sep)


def qualified_name(frame) -> str:
    """Return ``"<module>.<qualname>"`` for the function running in ``frame``."""
    code = frame.f_code
    name = getattr(code, "co_qualname", code.co_name)
    module = frame.f_globals.get("__name__", "")
    return f"{module}.{name}" if module else name


def _is_internal(filename: str) -> bool:
    path = os.path.abspath(filename)
    return path == _PACKAGE_DIR or path.startswith(_PACKAGE_DIR + os.sep)


def capture(base_dir: Optional[str] = None) -> Source:
    """Capture the first call site outside the dabug package.

    Args:
        base_dir: Directory used to shorten the file path. Defaults to
            ``default_base_dir()``.

    Returns:
        The caller's Source, or ``ZERO_SOURCE`` when no such frame exists.
    """
    if base_dir is None:
        base_dir = default_base_dir()

    try:
        frame = sys._getframe(0)
        while frame is not None and _is_internal(frame.f_code.co_filename):
            frame = frame.f_back
        if frame is None:
            logger.debug("no frame outside dabug found on the stack")
            return ZERO_SOURCE

        filename = os.path.abspath(frame.f_code.co_filename)
        return Source(
            normalize_path(filename, base_dir),
            qualified_name(frame),
            frame.f_lineno,
        )
    except Exception:
        # Capture must never break the traced program.
        logger.debug("call-site capture failed", exc_info=True)
        return ZERO_SOURCE
    finally:
        frame = None

"""render.py - Text rendering for dabug entries.

Two output shapes exist:

    Single line (autoflush mode)::

        examples/basic_usage.py:14 - loaded 3 rows

    Block (explicit flush)::

        -----
        examples/basic_usage.py:14  - loaded 3 rows
        examples/basic_usage.py:101 - done
        examples/basic_usage.py:7
        =====

In a block every prefix is left-justified to the widest prefix of the batch so
the messages form one vertical column, however long the individual source
locations are. A bare marker entry (no message) renders as its prefix alone.

The module also provides ``debug_repr()``, the structural value formatter used
by ``Tracer.objs()``. It describes a value from its type and fields and never
calls the value's own ``__str__``/``__repr__``, so a misleading or raising
custom representation cannot hide what is actually stored.
"""

import dataclasses
import enum
import json
import types
from typing import Any, Iterable, List, Optional, Sequence, Set

from .buffer import Entry

SEPARATOR = "- "
DEFAULT_BEGIN = "-----"
DEFAULT_END = "====="

# Nesting beyond this depth is elided as "..." in value dumps.
MAX_DEPTH = 6


def render_single(entry: Entry, width: int = 0) -> str:
    """Render one entry as a single line without a trailing newline.

    Args:
        entry: The entry to render.
        width: Minimum prefix width. The prefix is left-justified (padded on
            the right with spaces) to this width. 0 means no padding.

    Returns:
        The padded prefix alone when the message is empty, otherwise the
        padded prefix followed by ``"- "`` and the message.

    Example:
        >>> e = Entry("hello", None, "a.py:1 ")
        >>> render_single(e)
        'a.py:1 - hello'
        >>> render_single(e, width=10)
        'a.py:1    - hello'
    """
    head = entry.prefix.ljust(width)
    if not entry.message:
        return head
    return f"{head}{SEPARATOR}{entry.message}"


def render_block(
    entries: Sequence[Entry],
    prefix: str = "",
    begin: str = DEFAULT_BEGIN,
    end: str = DEFAULT_END,
) -> str:
    """Render a batch of entries as one aligned, bracketed block.

    The block starts with ``prefix + begin`` and finishes with
    ``prefix + end``; every line, markers included, ends with a newline.

    Args:
        entries: Entries in the order they should appear.
        prefix: Global prefix placed before the begin and end markers.
        begin: Begin marker glyphs.
        end: End marker glyphs.

    Returns:
        The whole block as one string, or ``""`` when ``entries`` is empty so
        that an empty flush writes nothing at all.
    """
    if not entries:
        return ""

    width = max(len(e.prefix) for e in entries)

    lines = [f"{prefix}{begin}"]
    lines.extend(render_single(e, width) for e in entries)
    lines.append(f"{prefix}{end}")
    return "\n".join(lines) + "\n"


def format_values(*values: Any) -> str:
    """Format values as an index-tagged, comma-joined message.

    Example:
        >>> format_values(42, "x")
        '[0] 42, [1] "x"'
    """
    return ", ".join(f"[{i}] {debug_repr(v)}" for i, v in enumerate(values))


def debug_repr(value: Any, _seen: Optional[Set[int]] = None, _depth: int = 0) -> str:
    """Return a structural text form of ``value``.

    Scalars render in their builtin form (strings double-quoted), containers
    recursively, and other objects as ``Type(field=value, ...)`` built from
    their dataclass fields, ``__dict__`` or ``__slots__``. Reference cycles and
    nesting deeper than ``MAX_DEPTH`` render as ``...``.

    Only ``type(value)`` is consulted for type checks and fields are read
    through the builtin slots, never through the value's own attribute
    lookup, so proxies, properties and overridden ``__getattribute__`` do
    not run.

    Example:
        >>> debug_repr({"k": [1, 2.5, None]})
        '{"k": [1, 2.5, None]}'
    """
    kind = type(value)

    if value is None:
        return "None"
    if kind is bool:
        return "True" if value else "False"
    if issubclass(kind, enum.Enum):
        name = _instance_dict(value).get("_name_")
        return f"{kind.__name__}.{name}" if name is not None else object.__repr__(value)
    if issubclass(kind, int):
        return int.__repr__(value)
    if issubclass(kind, float):
        return float.__repr__(value)
    if issubclass(kind, complex):
        return complex.__repr__(value)
    if issubclass(kind, str):
        return json.dumps(str.__str__(value), ensure_ascii=False)
    if issubclass(kind, bytes):
        return bytes.__repr__(value)
    if issubclass(kind, bytearray):
        return bytearray.__repr__(value)
    if issubclass(kind, type):
        return f"<class {value.__module__}.{value.__qualname__}>"

    if _seen is None:
        _seen = set()
    if id(value) in _seen or _depth >= MAX_DEPTH:
        return "..."

    _seen.add(id(value))
    try:
        return _compound_repr(value, _seen, _depth + 1)
    finally:
        _seen.discard(id(value))


def _compound_repr(value: Any, seen: Set[int], depth: int) -> str:
    def sub(v: Any) -> str:
        return debug_repr(v, seen, depth)

    kind = type(value)

    if issubclass(kind, tuple) and getattr(kind, "_fields", None) is not None:
        return _fields_repr(kind.__name__, zip(kind._fields, tuple.__iter__(value)), sub)

    if dataclasses.is_dataclass(kind):
        names = [f.name for f in dataclasses.fields(kind)]
        return _fields_repr(kind.__name__, _read_fields(value, names), sub)

    if issubclass(kind, dict):
        body = ", ".join(f"{sub(k)}: {sub(v)}" for k, v in dict.items(value))
        return _tagged(kind, dict, f"{{{body}}}")

    if issubclass(kind, list):
        return _tagged(kind, list, f"[{', '.join(sub(v) for v in list.__iter__(value))}]")

    if issubclass(kind, tuple):
        items = [sub(v) for v in tuple.__iter__(value)]
        body = f"({items[0]},)" if len(items) == 1 else f"({', '.join(items)})"
        return _tagged(kind, tuple, body)

    if issubclass(kind, (set, frozenset)):
        base = set if issubclass(kind, set) else frozenset
        items = sorted(sub(v) for v in base.__iter__(value))
        if not items:
            return f"{kind.__name__}()"
        body = f"{{{', '.join(items)}}}"
        return body if kind is set else f"{kind.__name__}({body})"

    pairs = _object_fields(value)
    if pairs is None:
        return object.__repr__(value)
    return _fields_repr(kind.__name__, pairs, sub)


def _tagged(kind: type, base: type, body: str) -> str:
    # Subclasses of builtin containers keep their type name in front.
    return body if kind is base else f"{kind.__name__}{body}"


def _fields_repr(name: str, pairs: Iterable, sub) -> str:
    return f"{name}({', '.join(f'{k}={sub(v)}' for k, v in pairs)})"


def _instance_dict(value: Any) -> dict:
    try:
        attrs = object.__getattribute__(value, "__dict__")
    except Exception:
        return {}
    return attrs if type(attrs) is dict else {}


def _slot_names(kind: type) -> List[tuple]:
    """Return ``(attribute, descriptor)`` pairs for every slot in ``kind``'s MRO."""
    found = []
    for klass in kind.__mro__:
        slots = klass.__dict__.get("__slots__")
        if slots is None:
            continue
        if isinstance(slots, str):
            slots = (slots,)
        for name in slots:
            if name in ("__dict__", "__weakref__"):
                continue
            key = name
            if name.startswith("__") and not name.endswith("__"):
                key = f"_{klass.__name__.lstrip('_')}{name}"
            descr = klass.__dict__.get(key)
            if type(descr) is types.MemberDescriptorType:
                found.append((name, descr))
    return found


def _read_slot(value: Any, descr) -> Any:
    # Member descriptors are C-level; unset slots raise AttributeError.
    return descr.__get__(value, type(value))


def _read_fields(value: Any, names: List[str]) -> List[tuple]:
    """Read dataclass fields from the instance dict or slots, skipping unset ones."""
    attrs = _instance_dict(value)
    slots = dict(_slot_names(type(value)))
    pairs = []
    for name in names:
        if name in attrs:
            pairs.append((name, attrs[name]))
        elif name in slots:
            try:
                pairs.append((name, _read_slot(value, slots[name])))
            except AttributeError:
                continue
    return pairs


def _object_fields(value: Any) -> Optional[List[tuple]]:
    """Collect ``(name, value)`` pairs from ``__dict__`` and ``__slots__``.

    Returns None for objects that expose neither, such as functions'
    C-level relatives, sockets or other opaque builtins.
    """
    kind = type(value)
    has_dict = any("__dict__" in klass.__dict__ for klass in kind.__mro__[:-1])
    slots = _slot_names(kind)
    if not has_dict and not slots:
        return None

    pairs = list(_instance_dict(value).items())
    for name, descr in slots:
        try:
            pairs.append((name, _read_slot(value, descr)))
        except AttributeError:
            continue

    if not pairs and callable(value):
        return None
    return pairs

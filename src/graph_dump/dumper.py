"""GraphDumper — renders an object graph as indented text.

The walk is depth-first over an explicit stack of frames instead of the
Python call stack, so graph depth is bounded by memory, not by the
recursion limit.  With tab indents, ``dump([1, "a"], identity="sequential")``
gives::

    [list:sysId#1
        "0":1
        "1":"a"
    ]
"""

from __future__ import annotations

import logging
from typing import Any

from .fields import list_fields, read_field
from .formatting import (
    CLOSE_ARRAY,
    CLOSE_OBJECT,
    array_items,
    format_backref,
    format_label,
    format_scalar,
    format_text,
    is_array,
    is_scalar,
    is_text,
    open_array,
    open_object,
)
from .identity import IdentityRegistry
from .model import END_ARRAY, END_OBJECT, Frame
from .options import DumpOptions

logger = logging.getLogger(__name__)


class GraphDumper:
    """Dumps every field of every object reachable from a root.

    Usage::

        dumper = GraphDumper(DumpOptions(identity="sequential"))
        text = dumper.dump(obj)
        text = dumper.dump(obj, include_static_fields=True)

    An instance holds only its options; each ``dump()`` call gets its own
    stack, registry and buffer, so one dumper may be shared between threads
    dumping unrelated graphs.
    """

    def __init__(self, options: DumpOptions | None = None) -> None:
        self.options = options or DumpOptions()

    def dump(self, root: Any, include_static_fields: bool | None = None) -> str:
        """Return the text dump of *root* and everything reachable from it.

        *include_static_fields* overrides ``options.include_static_fields``
        for this call.  Never raises for unreadable fields; they are rendered
        inline as ``"!ErrorType:message"``.
        """
        if include_static_fields is None:
            include_static_fields = self.options.include_static_fields
        registry = IdentityRegistry(self.options.identity)
        out: list[str] = []
        stack: list[Frame] = [Frame("", "", root)]

        while stack:
            frame = stack.pop()
            out.append(frame.indent)
            out.append(frame.label)
            self._render(frame, stack, registry, out, include_static_fields)
            if stack:
                out.append("\n")

        logger.debug("dumped %d composite objects from %s", len(registry), type(root).__name__)
        return "".join(out)

    # -- Rendering ------------------------------------------------------

    def _render(
        self,
        frame: Frame,
        stack: list[Frame],
        registry: IdentityRegistry,
        out: list[str],
        include_static_fields: bool,
    ) -> None:
        value = frame.payload

        if is_scalar(value):
            out.append(format_scalar(value))
        elif value is END_ARRAY:
            out.append(CLOSE_ARRAY)
        elif value is END_OBJECT:
            out.append(CLOSE_OBJECT)
        elif is_text(value):
            out.append(format_text(value))
        elif value in registry:
            out.append(format_backref(registry.number(value)))
        else:
            sys_id = registry.register(value)
            if is_array(value):
                self._push_array(frame, value, sys_id, stack, out)
            else:
                self._push_object(frame, value, sys_id, stack, out, include_static_fields)

    def _push_array(self, frame: Frame, value: Any, sys_id: int, stack: list[Frame], out: list[str]) -> None:
        out.append(open_array(value, sys_id))
        items = array_items(value)
        if not items:
            out.append(CLOSE_ARRAY)
            return
        # closer goes on its own line at the parent's depth
        stack.append(Frame(frame.indent, "", END_ARRAY))
        child_indent = frame.indent + self.options.indent
        # pushed last-to-first so index 0 pops first
        for index in range(len(items) - 1, -1, -1):
            stack.append(Frame(child_indent, format_label(index), items[index]))

    def _push_object(
        self,
        frame: Frame,
        value: Any,
        sys_id: int,
        stack: list[Frame],
        out: list[str],
        include_static_fields: bool,
    ) -> None:
        fields = list_fields(value, include_static_fields)
        out.append(open_object(value, sys_id))
        if not fields:
            out.append(CLOSE_OBJECT)
            return
        stack.append(Frame(frame.indent, "", END_OBJECT))
        child_indent = frame.indent + self.options.indent
        for field in reversed(fields):
            child = read_field(value, field)
            stack.append(Frame(child_indent, format_label(field.qualified_name), child))


def dump(obj: Any, include_static_fields: bool = False, **options: Any) -> str:
    """Dump *obj* to text; *options* are extra DumpOptions fields."""
    dumper = GraphDumper(DumpOptions(include_static_fields=include_static_fields, **options))
    return dumper.dump(obj)

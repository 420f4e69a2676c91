"""Payload classification and the textual grammar of a dump.

::

    value   := scalar | "text" | object | array | (sysId#N)
    object  := {type:sysId#N  children...  }
    array   := [type:sysId#N  children...  ]
"""

from __future__ import annotations

import array
import collections
import numbers
import types
from enum import Enum
from typing import Any

SCALAR_TYPES = (
    type(None),
    bool,
    numbers.Number,
    Enum,
    bytes,
    type(Ellipsis),
    type(NotImplemented),
)

TEXT_TYPES = (str, collections.UserString)

# Order matters: the first match supplies the base iteration.
ARRAY_TYPES = (
    list,
    tuple,
    set,
    frozenset,
    collections.deque,
    bytearray,
    array.array,
)

MAPPING_TYPES = (dict, types.MappingProxyType)

BACKREF = "(sysId#{})"
OPEN_OBJECT = "{{{}:sysId#{}"
OPEN_ARRAY = "[{}:sysId#{}"
CLOSE_OBJECT = "}"
CLOSE_ARRAY = "]"


# ---------------------------------------------------------------------------
# Classification
# ---------------------------------------------------------------------------

def is_scalar(value: Any) -> bool:
    return issubclass(type(value), SCALAR_TYPES)


def is_text(value: Any) -> bool:
    return issubclass(type(value), TEXT_TYPES)


def is_array(value: Any) -> bool:
    return issubclass(type(value), ARRAY_TYPES)


def is_mapping(value: Any) -> bool:
    return issubclass(type(value), MAPPING_TYPES)


def array_items(value: Any) -> list[Any]:
    """Elements of an array-like value, in index (or iteration) order.

    Iterates with the builtin base type so a subclass overriding
    ``__iter__`` still shows its real contents.
    """
    for base in ARRAY_TYPES:
        if issubclass(type(value), base):
            return list(base.__iter__(value))
    raise TypeError(f"not an array: {type_name(value)}")


# ---------------------------------------------------------------------------
# Tokens
# ---------------------------------------------------------------------------

def type_name(value: Any) -> str:
    """Fully qualified name of the runtime type, without ``builtins.``."""
    t = type(value)
    module = getattr(t, "__module__", None)
    qualname = getattr(t, "__qualname__", t.__name__)
    if module and module != "builtins":
        return f"{module}.{qualname}"
    return qualname


def format_scalar(value: Any) -> str:
    return _safe_str(value)


def format_text(value: Any) -> str:
    # No escaping: embedded quotes and control characters are emitted raw.
    if issubclass(type(value), str):
        return f'"{str.__str__(value)}"'
    return f'"{_safe_str(value)}"'


def format_label(name: Any) -> str:
    return f'"{name}":'


def format_backref(sys_id: int) -> str:
    return BACKREF.format(sys_id)


def open_object(value: Any, sys_id: int) -> str:
    return OPEN_OBJECT.format(type_name(value), sys_id)


def open_array(value: Any, sys_id: int) -> str:
    return OPEN_ARRAY.format(type_name(value), sys_id)


def error_marker(exc: BaseException) -> str:
    """Synthetic value standing in for a field that could not be read."""
    return f"!{type_name(exc)}:{_safe_str(exc)}"


def _safe_str(value: Any) -> str:
    """``str(value)``, or the default object repr when ``__str__`` fails."""
    try:
        return str(value)
    except Exception:
        return object.__repr__(value)

"""Data model for the traversal: work items, sentinels and field descriptors."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto
from typing import Any, Callable


# ---------------------------------------------------------------------------
# Sentinels — pushed to close an array / object on its own line
# ---------------------------------------------------------------------------

class _Sentinel:
    __slots__ = ("_name",)

    def __init__(self, name: str) -> None:
        self._name = name

    def __repr__(self) -> str:
        return self._name


END_ARRAY = _Sentinel("END_ARRAY")
END_OBJECT = _Sentinel("END_OBJECT")


# ---------------------------------------------------------------------------
# Frame — one entry of the explicit work stack
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class Frame:
    indent: str   # accumulated indent tokens from the root
    label: str    # "" for the root and closers, '"name":' otherwise
    payload: Any


# ---------------------------------------------------------------------------
# FieldDescriptor
# ---------------------------------------------------------------------------

class FieldKind(Enum):
    Slot = auto()
    Descriptor = auto()  # member / get-set descriptor of a C type
    Instance = auto()   # instance __dict__ entry
    Static = auto()     # class-level attribute
    Entry = auto()      # mapping item


@dataclass(frozen=True, slots=True)
class FieldDescriptor:
    qualified_name: str            # "super." * level + name
    kind: FieldKind
    owner: type | None             # declaring class, None for mapping entries
    accessor: Callable[[Any], Any]

    def read(self, instance: Any) -> Any:
        return self.accessor(instance)

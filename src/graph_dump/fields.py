"""Reflective field discovery and reading.

A composite object's fields come from every class in its MRO except
``object``.  Fields declared one level up are qualified with ``super.``,
two levels up with ``super.super.``, and so on:

- slot fields, from each class's own ``__slots__``, and member descriptors
  of extension types (plus get-set descriptors of built-in exceptions)
- instance ``__dict__`` entries, attributed to the most-derived class whose
  annotations declare them (level 0 otherwise)
- class-level data attributes, only when statics are requested
- mapping entries, labelled by ``repr(key)``, for dicts and mapping proxies

Values are read from raw storage (member descriptors, ``__dict__``, class
namespaces) so the object's own ``__getattribute__`` / ``__getattr__`` hooks
and properties are never invoked and nothing on the object is changed.
"""

from __future__ import annotations

import inspect
import logging
from collections.abc import Iterator, Mapping
from operator import attrgetter
from typing import Any, Callable

from .formatting import error_marker, is_mapping, type_name
from .model import FieldDescriptor, FieldKind

logger = logging.getLogger(__name__)

SUPER_PREFIX = "super."

_HIDDEN_SLOTS = frozenset({"__dict__", "__weakref__"})
_NOT_DATA = (staticmethod, classmethod, property, type)


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def list_fields(obj: Any, include_statics: bool = False) -> list[FieldDescriptor]:
    """Return the field descriptors of *obj* sorted by qualified name."""
    found: dict[str, FieldDescriptor] = {}
    mro = [cls for cls in type(obj).__mro__ if cls is not object]

    for level, cls in enumerate(mro):
        qualifier = SUPER_PREFIX * level
        if include_statics:
            for name in _class_field_names(cls):
                key = qualifier + name
                found[key] = FieldDescriptor(key, FieldKind.Static, cls, _static_reader(cls, name))
        for name, kind, descriptor in _declared_fields(cls):
            key = qualifier + name
            found[key] = FieldDescriptor(key, kind, cls, _descriptor_reader(descriptor))

    namespace = instance_namespace(obj)
    if namespace:
        owners = _annotation_owners(mro)
        for name in namespace:
            level = owners.get(name, 0)
            key = SUPER_PREFIX * level + str(name)
            owner = mro[level] if mro else None
            # replaces a same-level static of the same name: the instance value wins
            found[key] = FieldDescriptor(key, FieldKind.Instance, owner, _instance_reader(name))

    fields = list(found.values())
    if is_mapping(obj):
        # distinct keys may share a repr (two NaNs): every entry is kept
        for item_key in _mapping_keys(obj):
            label = _key_label(item_key)
            fields.append(FieldDescriptor(label, FieldKind.Entry, None, _entry_reader(item_key)))

    # stable: entries with equal labels stay in mapping order
    fields.sort(key=attrgetter("qualified_name"))
    return fields


def read_field(obj: Any, field: FieldDescriptor) -> Any:
    """Read *field* off *obj*; a failure becomes an ``!Error:message`` string."""
    try:
        return field.read(obj)
    except Exception as exc:
        logger.debug("could not read %s of %s: %r", field.qualified_name, type_name(obj), exc)
        return error_marker(exc)


def instance_namespace(obj: Any) -> Mapping[Any, Any]:
    """The instance ``__dict__`` of *obj*, or an empty mapping if it has none."""
    try:
        namespace = object.__getattribute__(obj, "__dict__")
    except (AttributeError, TypeError):
        return {}
    if not isinstance(namespace, Mapping):
        return {}
    return namespace


# ---------------------------------------------------------------------------
# Discovery helpers
# ---------------------------------------------------------------------------

def _class_field_names(cls: type) -> Iterator[str]:
    """Names of plain data attributes declared in *cls* itself."""
    for name, value in vars(cls).items():
        if not isinstance(name, str) or _is_dunder(name):
            continue
        if isinstance(value, _NOT_DATA) or inspect.isroutine(value):
            continue
        if inspect.isdatadescriptor(value) or inspect.ismethoddescriptor(value):
            continue
        yield name


def _declared_fields(cls: type) -> Iterator[tuple[str, FieldKind, Any]]:
    """Storage declared by *cls* itself: slots, then C-level descriptors.

    Member descriptors of extension types count as fields.  Types from
    ``builtins`` are skipped (a function's ``__globals__`` would pull in
    whole modules) except the exception hierarchy, whose get-set
    descriptors (``args``, ``__cause__``, ``__traceback__``...) also count.
    """
    namespace = vars(cls)
    slots = namespace.get("__slots__", ())
    if isinstance(slots, str):
        slots = (slots,)
    declared = set()
    for name in slots:
        if name in _HIDDEN_SLOTS:
            continue
        attr = _mangle(cls, name)
        descriptor = namespace.get(attr)
        if descriptor is not None and inspect.ismemberdescriptor(descriptor):
            declared.add(attr)
            yield name, FieldKind.Slot, descriptor

    builtin = getattr(cls, "__module__", None) == "builtins"
    builtin_exception = builtin and issubclass(cls, BaseException)
    if builtin and not builtin_exception:
        return
    for attr, descriptor in namespace.items():
        if attr in declared or attr in _HIDDEN_SLOTS:
            continue
        if inspect.ismemberdescriptor(descriptor) or (
            builtin_exception and inspect.isgetsetdescriptor(descriptor)
        ):
            yield attr, FieldKind.Descriptor, descriptor


def _annotation_owners(mro: list[type]) -> dict[str, int]:
    """Map annotated attribute name -> MRO level of its most-derived declaration."""
    owners: dict[str, int] = {}
    for level, cls in enumerate(mro):
        for name in _own_annotations(cls):
            owners.setdefault(name, level)
    return owners


def _own_annotations(cls: type) -> Mapping[str, Any]:
    try:
        return inspect.get_annotations(cls)
    except Exception as exc:  # unresolvable forward references
        logger.debug("ignoring annotations of %s: %r", cls.__qualname__, exc)
        return {}


def _mapping_keys(obj: Any) -> list[Any]:
    if issubclass(type(obj), dict):
        return list(dict.keys(obj))
    return list(obj.keys())


def _key_label(key: Any) -> str:
    try:
        return repr(key)
    except Exception:
        return object.__repr__(key)


def _mangle(cls: type, name: str) -> str:
    if name.startswith("__") and not name.endswith("__"):
        stripped = cls.__name__.lstrip("_")
        if stripped:
            return f"_{stripped}{name}"
    return name


def _is_dunder(name: str) -> bool:
    return len(name) > 4 and name.startswith("__") and name.endswith("__")


# ---------------------------------------------------------------------------
# Readers — bound per field so each closure captures its own key
# ---------------------------------------------------------------------------

def _static_reader(cls: type, name: str) -> Callable[[Any], Any]:
    return lambda instance: vars(cls)[name]


def _descriptor_reader(descriptor: Any) -> Callable[[Any], Any]:
    return lambda instance: descriptor.__get__(instance, type(instance))


def _instance_reader(name: Any) -> Callable[[Any], Any]:
    return lambda instance: object.__getattribute__(instance, "__dict__")[name]


def _entry_reader(key: Any) -> Callable[[Any], Any]:
    def read(instance: Any) -> Any:
        if issubclass(type(instance), dict):
            return dict.__getitem__(instance, key)
        return instance[key]
    return read

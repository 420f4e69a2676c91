"""Tests for field discovery and reading."""

from __future__ import annotations

import functools
from dataclasses import dataclass
from types import MappingProxyType
from typing import ClassVar

from graph_dump import FieldKind, list_fields, read_field
from graph_dump.fields import instance_namespace


def names(obj, include_statics=False):
    return [f.qualified_name for f in list_fields(obj, include_statics)]


@dataclass
class Animal:
    name: str
    legs: int = 4


@dataclass
class Dog(Animal):
    breed: str = "mutt"
    registry: ClassVar[str] = "kennel"


class Secret:
    __slots__ = ("__token", "plain")

    def __init__(self):
        self.__token = "t"
        self.plain = 1


class Grand:
    depth = 2


class Parent(Grand):
    depth = 1


class Leaf(Parent):
    depth = 0

    def __init__(self):
        self.depth = -1


# ---------------------------------------------------------------------------
# Qualifiers
# ---------------------------------------------------------------------------

def test_inherited_dataclass_fields_get_super_prefix():
    assert names(Dog("rex")) == ["breed", "super.legs", "super.name"]


def test_qualifier_grows_per_level():
    assert names(Leaf(), include_statics=True) == [
        "depth",
        "super.depth",
        "super.super.depth",
    ]


def test_instance_value_replaces_same_level_static():
    fields = {f.qualified_name: f for f in list_fields(Leaf(), True)}
    assert fields["depth"].kind is FieldKind.Instance
    assert read_field(Leaf(), fields["depth"]) == -1
    assert fields["super.depth"].kind is FieldKind.Static
    assert fields["super.depth"].owner is Parent


def test_classvar_is_static():
    assert "registry" not in names(Dog("rex"))
    assert "registry" in names(Dog("rex"), include_statics=True)


def test_dataclass_defaults_shown_once_with_statics():
    # class-level defaults share their key with the instance entry
    assert names(Dog("rex"), include_statics=True) == [
        "breed",
        "registry",
        "super.legs",
        "super.name",
    ]


# ---------------------------------------------------------------------------
# Slots
# ---------------------------------------------------------------------------

def test_private_slot_uses_declared_name():
    secret = Secret()
    fields = {f.qualified_name: f for f in list_fields(secret)}
    assert set(fields) == {"__token", "plain"}
    assert fields["__token"].kind is FieldKind.Slot
    assert read_field(secret, fields["__token"]) == "t"


def test_unset_slot_reads_as_error_marker():
    secret = Secret.__new__(Secret)
    field = next(f for f in list_fields(secret) if f.qualified_name == "plain")
    assert read_field(secret, field).startswith("!AttributeError:")


# ---------------------------------------------------------------------------
# Mappings and namespaces
# ---------------------------------------------------------------------------

def test_mapping_entries_are_fields():
    fields = list_fields({2: "b", 1: "a"})
    assert [f.qualified_name for f in fields] == ["1", "2"]
    assert all(f.kind is FieldKind.Entry for f in fields)


def test_mapping_proxy_entries():
    proxy = MappingProxyType({"k": 1})
    (field,) = list_fields(proxy)
    assert field.qualified_name == "'k'"
    assert read_field(proxy, field) == 1


def test_dict_subclass_shows_attributes_and_entries():
    class Tagged(dict):
        pass

    tagged = Tagged(a=1)
    tagged.tag = "x"
    assert names(tagged) == ["'a'", "tag"]


def test_instance_namespace_without_dict():
    assert instance_namespace(object()) == {}
    assert instance_namespace(1) == {}


def test_class_namespace_is_instance_dict():
    assert "depth" in instance_namespace(Leaf)


# ---------------------------------------------------------------------------
# read_field
# ---------------------------------------------------------------------------

def test_read_field_captures_any_exception():
    field = list_fields({"k": 1})[0]

    class Broken(dict):
        def __getitem__(self, key):
            raise RuntimeError("boom")

    # dict entries are read with dict.__getitem__, so the override is bypassed
    assert read_field(Broken(k=1), field) == 1
    assert read_field({}, field) == "!KeyError:'k'"


# ---------------------------------------------------------------------------
# C-level descriptors
# ---------------------------------------------------------------------------

def test_extension_type_members_are_fields():
    bound = functools.partial(int, "7", base=8)
    fields = {f.qualified_name: f for f in list_fields(bound)}
    assert {"func", "args", "keywords"} <= set(fields)
    assert fields["func"].kind is FieldKind.Descriptor
    assert read_field(bound, fields["args"]) == ("7",)


def test_builtin_exception_descriptors_are_fields():
    err = KeyError("k")
    fields = {f.qualified_name: f for f in list_fields(err)}
    # KeyError -> LookupError -> Exception -> BaseException
    assert read_field(err, fields["super.super.super.args"]) == ("k",)
    assert read_field(err, fields["super.super.super.__cause__"]) is None
    assert "super.super.super.__dict__" not in fields


def test_other_builtin_types_expose_no_descriptors():
    def f():
        return None

    assert names(f) == []
    assert "__mro__" not in names(Leaf)


def test_equal_labels_keep_mapping_order():
    nan_a, nan_b = float("nan"), float("nan")
    mapping = {nan_a: 1, "x": 2, nan_b: 3}
    fields = list_fields(mapping)
    assert [f.qualified_name for f in fields] == ["'x'", "nan", "nan"]
    assert [read_field(mapping, f) for f in fields] == [2, 1, 3]

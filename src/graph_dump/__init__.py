"""graph_dump — deterministic text dumps of arbitrary object graphs."""

from .dumper import GraphDumper, dump
from .errors import GraphDumpError, OptionsError, TargetError
from .fields import list_fields, read_field
from .identity import IdentityRegistry
from .model import END_ARRAY, END_OBJECT, FieldDescriptor, FieldKind, Frame
from .options import DumpOptions, IdentityMode

__all__ = [
    "dump",
    "GraphDumper",
    "DumpOptions",
    "IdentityMode",
    "IdentityRegistry",
    "Frame",
    "FieldDescriptor",
    "FieldKind",
    "END_ARRAY",
    "END_OBJECT",
    "list_fields",
    "read_field",
    "GraphDumpError",
    "OptionsError",
    "TargetError",
]

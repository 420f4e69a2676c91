"""DumpOptions — configuration for GraphDumper."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from .errors import OptionsError


class IdentityMode(Enum):
    MEMORY = "memory"          # id(obj)
    SEQUENTIAL = "sequential"  # 1, 2, 3... in discovery order


@dataclass(frozen=True)
class DumpOptions:
    include_static_fields: bool = False
    indent: str = "\t"
    identity: IdentityMode = IdentityMode.MEMORY

    def __post_init__(self) -> None:
        if not isinstance(self.indent, str) or not self.indent:
            raise OptionsError(f"indent must be a non-empty string, got {self.indent!r}")
        if not isinstance(self.identity, IdentityMode):
            try:
                mode = IdentityMode(self.identity)
            except ValueError:
                choices = ", ".join(m.value for m in IdentityMode)
                raise OptionsError(
                    f"unknown identity mode {self.identity!r} (expected one of: {choices})"
                ) from None
            # frozen dataclass: bypass __setattr__ for the coerced value
            object.__setattr__(self, "identity", mode)

"""Exceptions raised by graph_dump.

Dumping itself never raises for traversal problems; these cover bad
configuration and command-line targets only.
"""

from __future__ import annotations


class GraphDumpError(Exception):
    """Base class for all graph_dump errors."""


class OptionsError(GraphDumpError, ValueError):
    """Invalid DumpOptions value."""


class TargetError(GraphDumpError):
    """A command-line target could not be imported or resolved."""

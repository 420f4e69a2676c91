"""``graph-dump`` command line.

Dumps importable objects named as ``package.module:attr.path``::

    graph-dump collections:OrderedDict --statics
    graph-dump --demo
    python -m graph_dump http.client:responses -o responses.txt
"""

from __future__ import annotations

import argparse
import importlib
import logging
import sys
import textwrap
import threading
from typing import IO, Any, Sequence

from .dumper import GraphDumper
from .errors import GraphDumpError, TargetError
from .options import DumpOptions, IdentityMode

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Target resolution
# ---------------------------------------------------------------------------

def resolve_target(spec: str) -> Any:
    """Import ``module[:attr.path]`` and return the named object."""
    module_name, _, attr_path = spec.partition(":")
    if not module_name:
        raise TargetError(f"missing module in target {spec!r}")
    try:
        obj = importlib.import_module(module_name)
    except ImportError as exc:
        raise TargetError(f"cannot import {module_name!r}: {exc}") from exc
    if not attr_path:
        return obj
    for part in attr_path.split("."):
        try:
            obj = getattr(obj, part)
        except AttributeError as exc:
            raise TargetError(f"{spec!r}: no attribute {part!r}") from exc
    return obj


def demo_objects() -> list[tuple[Any, bool]]:
    """Sample live objects: (object, include statics).

    A constant-holding object, a class, the running thread, the loader that
    imported this module and a caught exception.
    """
    try:
        raise RuntimeError("demo")
    except RuntimeError as exc:
        error = exc
    return [
        (textwrap.TextWrapper(width=40), True),
        (threading.Thread, False),
        (threading.current_thread(), False),
        (sys.modules[__name__].__loader__, False),
        (error, False),
    ]


# ---------------------------------------------------------------------------
# CLI entry point
# ---------------------------------------------------------------------------

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="graph-dump",
        description="Dump the full object graph of importable Python objects.",
    )
    parser.add_argument("targets", nargs="*", metavar="TARGET",
                        help="object to dump, as package.module[:attr.path]")
    parser.add_argument("--statics", action="store_true",
                        help="include class-level fields")
    parser.add_argument("--sequential-ids", action="store_true",
                        help="number objects 1, 2, 3... instead of by memory identity")
    parser.add_argument("--indent", default="\t",
                        help="indent token (default: tab)")
    parser.add_argument("-o", "--output", metavar="FILE",
                        help="write to FILE instead of stdout")
    parser.add_argument("--demo", action="store_true",
                        help="dump a few sample live objects")
    parser.add_argument("-v", "--verbose", action="store_true",
                        help="debug logging")
    return parser


def collect_jobs(args: argparse.Namespace) -> list[tuple[Any, bool | None]]:
    """Resolve every object to dump: (object, statics override or None)."""
    jobs: list[tuple[Any, bool | None]] = []
    if args.demo:
        jobs.extend(demo_objects())
    for spec in args.targets:
        jobs.append((resolve_target(spec), None))
    return jobs


def run(args: argparse.Namespace, jobs: list[tuple[Any, bool | None]], dest: IO[str]) -> None:
    identity = IdentityMode.SEQUENTIAL if args.sequential_ids else IdentityMode.MEMORY
    dumper = GraphDumper(DumpOptions(
        include_static_fields=args.statics,
        indent=args.indent,
        identity=identity,
    ))

    for i, (obj, statics) in enumerate(jobs):
        if i:
            print(file=dest)
        logger.debug("dumping %s", type(obj).__name__)
        print(dumper.dump(obj, include_static_fields=statics), file=dest)


def main(argv: Sequence[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if not args.targets and not args.demo:
        parser.print_usage(sys.stderr)
        print("Error: nothing to dump (give a TARGET or --demo)", file=sys.stderr)
        return 2

    try:
        # resolve everything before the output file is created
        jobs = collect_jobs(args)
        if args.output:
            with open(args.output, "w", encoding="utf-8") as fh:
                run(args, jobs, fh)
        else:
            run(args, jobs, sys.stdout)
    except GraphDumpError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 2
    except OSError as exc:
        print(f"Error writing output: {exc}", file=sys.stderr)
        return 2
    return 0


if __name__ == "__main__":
    sys.exit(main())

from __future__ import annotations

import argparse
import sys
from collections.abc import Callable, Sequence
from pathlib import Path

from kvcontext.adapters.log_sinks import JsonlLogSink
from kvcontext.adapters.text_sinks import FileTextSink, StdoutTextSink
from kvcontext.config.loader import ConfigError, load_config
from kvcontext.config.models import AppConfig
from kvcontext.domain.errors import ExportError
from kvcontext.domain.formats import ExportFormat
from kvcontext.domain.value import (
    F32,
    F64,
    I8,
    I16,
    I32,
    I64,
    I128,
    U8,
    U16,
    U32,
    U64,
    U128,
    Bool,
    Char,
    Option,
    String,
    Unit,
    Value,
    to_value,
)
from kvcontext.kernel.context import Context

_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"0", "false", "no", "off"}


def _parse_bool(raw: str) -> Value:
    normalized = raw.strip().lower()
    if normalized in _TRUE:
        return Bool(True)
    if normalized in _FALSE:
        return Bool(False)
    raise ValueError(f"not a boolean: {raw!r}")


# TYPE suffixes accepted by --set KEY:TYPE=VALUE.
_CONVERTERS: dict[str, Callable[[str], Value]] = {
    "str": String,
    "bool": _parse_bool,
    "int": lambda raw: to_value(int(raw, 0)),
    "i8": lambda raw: I8(int(raw, 0)),
    "i16": lambda raw: I16(int(raw, 0)),
    "i32": lambda raw: I32(int(raw, 0)),
    "i64": lambda raw: I64(int(raw, 0)),
    "i128": lambda raw: I128(int(raw, 0)),
    "u8": lambda raw: U8(int(raw, 0)),
    "u16": lambda raw: U16(int(raw, 0)),
    "u32": lambda raw: U32(int(raw, 0)),
    "u64": lambda raw: U64(int(raw, 0)),
    "u128": lambda raw: U128(int(raw, 0)),
    "f32": lambda raw: F32(float(raw)),
    "f64": lambda raw: F64(float(raw)),
    "char": Char,
    "unit": lambda raw: Unit(),
    "none": lambda raw: Option(None),
}


def parse_assignment(raw: str) -> tuple[str, Value]:
    # KEY[:TYPE]=VALUE; a suffix that is not a known type stays part of the key.
    lhs, sep, text = raw.partition("=")
    if not sep or not lhs:
        raise argparse.ArgumentTypeError(f"expected KEY[:TYPE]=VALUE, got {raw!r}")
    key, type_sep, type_name = lhs.rpartition(":")
    if not type_sep or type_name not in _CONVERTERS:
        key, type_name = lhs, "str"
    if not key:
        raise argparse.ArgumentTypeError(f"empty key in {raw!r}")
    try:
        return key, _CONVERTERS[type_name](text)
    except (TypeError, ValueError) as exc:
        raise argparse.ArgumentTypeError(f"{raw!r}: {exc}") from exc


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="kvcontext", description="Build a context and export it")
    parser.add_argument(
        "--format",
        choices=[fmt.value for fmt in ExportFormat],
        default=ExportFormat.JSON.value,
        help="Output format",
    )
    parser.add_argument("--pretty", action="store_true", help="Human-readable output (JSON/TOML/XML)")
    parser.add_argument("--config", help="Path to YAML config")
    parser.add_argument("--output", help="Write to this file instead of stdout")
    parser.add_argument("--log-path", help="Append structured JSONL logs to this file")
    parser.add_argument(
        "--set",
        dest="assignments",
        action="append",
        default=[],
        type=parse_assignment,
        metavar="KEY[:TYPE]=VALUE",
        help=f"Insert a value; TYPE is one of {', '.join(_CONVERTERS)} (default str)",
    )
    return parser


def parse_args(argv: Sequence[str] | None) -> argparse.Namespace:
    # Parse CLI arguments; caller passes argv for testability.
    return build_parser().parse_args(argv)


def run(argv: Sequence[str] | None = None) -> int:
    args = parse_args(argv)
    try:
        config = load_config(Path(args.config)) if args.config else AppConfig()
    except ConfigError as exc:
        print(f"kvcontext: {exc}", file=sys.stderr)
        return 2

    try:
        log_sink = JsonlLogSink.open(Path(args.log_path)) if args.log_path else None
    except OSError as exc:
        print(f"kvcontext: cannot open log {args.log_path}: {exc}", file=sys.stderr)
        return 2

    try:
        context = Context.from_config(config, log_sink=log_sink)
        context.extend(args.assignments)
        text = context.export(args.format, pretty=args.pretty)
    except ExportError as exc:
        print(f"kvcontext: {exc}", file=sys.stderr)
        return 1
    finally:
        if log_sink is not None:
            log_sink.close()

    sink = FileTextSink(Path(args.output)) if args.output else StdoutTextSink()
    try:
        sink.write(text)
    except OSError as exc:
        print(f"kvcontext: cannot write output: {exc}", file=sys.stderr)
        return 1
    return 0

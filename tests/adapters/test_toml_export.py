from __future__ import annotations

import math
import tomllib

import pytest

from kvcontext.adapters.toml_export import TomlExporter
from kvcontext.config.models import ExportSettings
from kvcontext.domain.errors import ExportError
from kvcontext.domain.formats import ExportFormat
from kvcontext.domain.value import (
    F64,
    I64,
    I128,
    U8,
    U64,
    Bool,
    Bytes,
    Char,
    Map,
    Option,
    Seq,
    String,
    Unit,
)


def test_flat_entries_render_as_key_value_lines() -> None:
    text = TomlExporter().export([("name", String("John Doe")), ("age", U8(30))], pretty=False)
    assert text == 'name = "John Doe"\nage = 30\n'


def test_nested_values_round_trip_through_a_toml_parser() -> None:
    entries = [
        ("title", String("demo")),
        ("flags", Seq((Bool(True), Bool(False)))),
        ("owner", Map(((String("name"), String("Ann")), (Char("x"), I64(-1))))),
        ("servers", Seq((Map(((String("ip"), String("10.0.0.1")),)), Map(((String("ip"), String("10.0.0.2")),))))),
    ]
    text = TomlExporter().export(entries, pretty=True)
    assert tomllib.loads(text) == {
        "title": "demo",
        "flags": [True, False],
        "owner": {"name": "Ann", "x": -1},
        "servers": [{"ip": "10.0.0.1"}, {"ip": "10.0.0.2"}],
    }


def test_unit_is_not_representable() -> None:
    with pytest.raises(ExportError) as exc:
        TomlExporter().export([("nothing", Unit())], pretty=False)
    assert exc.value.format is ExportFormat.TOML
    with pytest.raises(ExportError):
        TomlExporter().export([("items", Seq((Unit(),)))], pretty=False)


def test_absent_option_is_omitted_by_default() -> None:
    entries = [
        ("a", Option()),
        ("b", Option(I64(2))),
        ("t", Map(((String("gone"), Option()), (String("kept"), Bool(True))))),
    ]
    text = TomlExporter().export(entries, pretty=False)
    assert tomllib.loads(text) == {"b": 2, "t": {"kept": True}}


def test_absent_option_fails_when_configured() -> None:
    exporter = TomlExporter(ExportSettings(toml_none="error"))
    with pytest.raises(ExportError, match="None"):
        exporter.export([("a", Option())], pretty=False)


def test_absent_option_inside_array_always_fails() -> None:
    with pytest.raises(ExportError, match="array"):
        TomlExporter().export([("items", Seq((I64(1), Option())))], pretty=False)


def test_integers_are_limited_to_signed_64_bits() -> None:
    text = TomlExporter().export([("max", I128((1 << 63) - 1))], pretty=False)
    assert tomllib.loads(text) == {"max": (1 << 63) - 1}
    with pytest.raises(ExportError):
        TomlExporter().export([("big", U64(1 << 63))], pretty=False)


def test_non_string_map_keys_fail() -> None:
    with pytest.raises(ExportError, match="not a string"):
        TomlExporter().export([("m", Map(((I64(1), Bool(True)),)))], pretty=False)


def test_bytes_render_as_integer_array() -> None:
    text = TomlExporter().export([("raw", Bytes(b"\x01\x02"))], pretty=False)
    assert tomllib.loads(text) == {"raw": [1, 2]}


def test_non_finite_floats_are_kept() -> None:
    text = TomlExporter().export([("nan", F64(float("nan"))), ("inf", F64(float("inf")))], pretty=False)
    data = tomllib.loads(text)
    assert math.isnan(data["nan"])
    assert data["inf"] == float("inf")


def test_pretty_uses_multiline_strings() -> None:
    entries = [("text", String("line one\nline two"))]
    pretty = TomlExporter().export(entries, pretty=True)
    compact = TomlExporter().export(entries, pretty=False)
    assert '"""' in pretty
    assert '"""' not in compact
    assert tomllib.loads(pretty) == tomllib.loads(compact) == {"text": "line one\nline two"}


def test_empty_document() -> None:
    assert TomlExporter().export([], pretty=True) == ""


def test_char_and_string_keys_with_the_same_text_fail() -> None:
    value = Map(((Char("k"), String("a")), (String("k"), String("b"))))
    with pytest.raises(ExportError, match="duplicate map key after encoding") as exc:
        TomlExporter().export([("m", value)], pretty=False)
    assert exc.value.format is ExportFormat.TOML


def test_colliding_key_is_rejected_even_when_its_value_is_omitted() -> None:
    value = Map(((Char("k"), String("a")), (String("k"), Option())))
    with pytest.raises(ExportError, match="duplicate map key after encoding"):
        TomlExporter().export([("m", value)], pretty=False)

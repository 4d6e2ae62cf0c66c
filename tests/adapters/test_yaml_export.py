from __future__ import annotations

import pytest
import yaml

from kvcontext.adapters.yaml_export import YamlExporter
from kvcontext.domain.errors import ExportError
from kvcontext.domain.formats import ExportFormat
from kvcontext.domain.value import (
    F64,
    I64,
    U8,
    U128,
    Bool,
    Bytes,
    Char,
    Map,
    Option,
    Seq,
    String,
    Unit,
    Value,
)


def test_flat_entries_render_in_block_style() -> None:
    text = YamlExporter().export([("name", String("John Doe")), ("age", U8(30))])
    assert text == "name: John Doe\nage: 30\n"


def test_unit_and_absent_option_render_as_null() -> None:
    text = YamlExporter().export([("unit", Unit()), ("none", Option())])
    assert text == "unit: null\nnone: null\n"


def test_wide_integers_are_kept() -> None:
    text = YamlExporter().export([("big", U128((1 << 128) - 1))])
    assert yaml.safe_load(text) == {"big": (1 << 128) - 1}


def test_scalar_map_keys_of_any_kind() -> None:
    value = Map(((I64(2), String("two")), (Bool(True), String("yes")), (Char("c"), Unit()), (Option(), I64(0))))
    text = YamlExporter().export([("m", value)])
    assert yaml.safe_load(text) == {"m": {2: "two", True: "yes", "c": None, None: 0}}


def test_structured_map_keys_fail() -> None:
    with pytest.raises(ExportError) as exc:
        YamlExporter().export([("m", Map(((Seq(()), Unit()),)))])
    assert exc.value.format is ExportFormat.YAML
    with pytest.raises(ExportError):
        YamlExporter().export([("m", Map(((Option(Bytes(b"x")), Unit()),)))])


def test_nested_structures_round_trip_through_a_yaml_parser() -> None:
    entries = [
        ("list", Seq((I64(1), String("two"), Seq((Bool(False),))))),
        ("raw", Bytes(b"\x00\x01")),
        ("name", String("Zoë")),
    ]
    text = YamlExporter().export(entries)
    assert "Zoë" in text
    assert yaml.safe_load(text) == {"list": [1, "two", [False]], "raw": [0, 1], "name": "Zoë"}


def test_empty_document() -> None:
    assert YamlExporter().export([]) == ""


@pytest.mark.parametrize(
    "first, second",
    [
        (Bool(True), I64(1)),
        (F64(1.0), I64(1)),
        (Char("k"), String("k")),
        (Option(I64(3)), I64(3)),
    ],
)
def test_keys_equal_once_lowered_fail(first: Value, second: Value) -> None:
    # Python treats True, 1 and 1.0 as one dict key; silently merging them would drop an entry.
    value = Map(((first, String("a")), (second, String("b"))))
    with pytest.raises(ExportError, match="duplicate map key after encoding"):
        YamlExporter().export([("m", value)])

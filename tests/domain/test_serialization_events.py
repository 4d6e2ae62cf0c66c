from __future__ import annotations

from kvcontext.domain.value import (
    F32,
    I16,
    U32,
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
from kvcontext.ports.serializer import Serializer


class RecordingSerializer(Serializer):
    # Records the event stream a Value produces, independent of any format.
    def __init__(self) -> None:
        self.events: list[tuple[object, ...]] = []

    def serialize_unit(self) -> object:
        self.events.append(("unit",))

    def serialize_bool(self, value: bool) -> object:
        self.events.append(("bool", value))

    def serialize_int(self, value: int, *, bits: int, signed: bool) -> object:
        self.events.append(("int", value, bits, signed))

    def serialize_float(self, value: float, *, bits: int) -> object:
        self.events.append(("float", value, bits))

    def serialize_char(self, value: str) -> object:
        self.events.append(("char", value))

    def serialize_str(self, value: str) -> object:
        self.events.append(("str", value))

    def serialize_bytes(self, value: bytes) -> object:
        self.events.append(("bytes", value))

    def serialize_none(self) -> object:
        self.events.append(("none",))

    def serialize_some(self, value: Value) -> object:
        self.events.append(("some",))
        value.serialize(self)

    def serialize_seq(self, items: tuple[Value, ...]) -> object:
        self.events.append(("seq", len(items)))
        for item in items:
            item.serialize(self)

    def serialize_map(self, entries: tuple[tuple[Value, Value], ...]) -> object:
        self.events.append(("map", len(entries)))
        for key, value in entries:
            key.serialize(self)
            value.serialize(self)


def test_each_variant_emits_its_own_event() -> None:
    recorder = RecordingSerializer()
    for value in (Unit(), Bool(False), I16(-2), U32(7), F32(0.5), Char("z"), String("s"), Bytes(b"x")):
        value.serialize(recorder)
    assert recorder.events == [
        ("unit",),
        ("bool", False),
        ("int", -2, 16, True),
        ("int", 7, 32, False),
        ("float", 0.5, 32),
        ("char", "z"),
        ("str", "s"),
        ("bytes", b"x"),
    ]


def test_containers_walk_children_through_the_serializer() -> None:
    recorder = RecordingSerializer()
    Map(((String("k"), Seq((Option(), Option(Bool(True))))),)).serialize(recorder)
    assert recorder.events == [
        ("map", 1),
        ("str", "k"),
        ("seq", 2),
        ("none",),
        ("some",),
        ("bool", True),
    ]

from __future__ import annotations

import math
import struct
from collections.abc import Iterator, Mapping
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, ClassVar

if TYPE_CHECKING:
    from kvcontext.ports.serializer import Serializer

# Largest finite single-precision float.
_F32_MAX = 3.4028234663852886e38


class ValueKind(str, Enum):
    UNIT = "unit"
    BOOL = "bool"
    I8 = "i8"
    I16 = "i16"
    I32 = "i32"
    I64 = "i64"
    I128 = "i128"
    U8 = "u8"
    U16 = "u16"
    U32 = "u32"
    U64 = "u64"
    U128 = "u128"
    F32 = "f32"
    F64 = "f64"
    CHAR = "char"
    STRING = "string"
    BYTES = "bytes"
    OPTION = "option"
    SEQ = "seq"
    MAP = "map"


def integer_bounds(bits: int, *, signed: bool) -> tuple[int, int]:
    if signed:
        return -(1 << (bits - 1)), (1 << (bits - 1)) - 1
    return 0, (1 << bits) - 1


class Value:
    """Closed tagged union of everything a Context can hold.

    Each variant is a frozen dataclass defined in this module. A variant knows
    how to describe itself to a ``Serializer`` as a single event, which is the
    only thing a format adapter needs to encode it.
    """

    __slots__ = ()
    kind: ClassVar[ValueKind]

    def __init_subclass__(cls, **kwargs: object) -> None:
        super().__init_subclass__(**kwargs)
        # The variant set is closed; serializers match on it exhaustively.
        if cls.__module__ != __name__:
            raise TypeError(f"Value variants are closed; cannot subclass as {cls.__qualname__}")

    def serialize(self, serializer: Serializer) -> object:
        raise NotImplementedError("Value.serialize must be implemented by a variant")

    def to_python(self) -> object:
        raise NotImplementedError("Value.to_python must be implemented by a variant")


@dataclass(frozen=True, slots=True)
class Unit(Value):
    kind: ClassVar[ValueKind] = ValueKind.UNIT

    def serialize(self, serializer: Serializer) -> object:
        return serializer.serialize_unit()

    def to_python(self) -> object:
        return None


@dataclass(frozen=True, slots=True)
class Bool(Value):
    value: bool
    kind: ClassVar[ValueKind] = ValueKind.BOOL

    def __post_init__(self) -> None:
        if not isinstance(self.value, bool):
            raise TypeError(f"Bool expects bool, got {type(self.value).__name__}")

    def serialize(self, serializer: Serializer) -> object:
        return serializer.serialize_bool(self.value)

    def to_python(self) -> object:
        return self.value


@dataclass(frozen=True, slots=True)
class Integer(Value):
    # Shared body of the fixed-width integer variants; width comes from the subclass.
    value: int
    bits: ClassVar[int] = 0
    signed: ClassVar[bool] = True

    def __post_init__(self) -> None:
        name = type(self).__name__
        if not self.bits:
            raise TypeError("Integer is abstract; use one of I8..I128 or U8..U128")
        if isinstance(self.value, bool) or not isinstance(self.value, int):
            raise TypeError(f"{name} expects int, got {type(self.value).__name__}")
        low, high = integer_bounds(self.bits, signed=self.signed)
        if not low <= self.value <= high:
            raise ValueError(f"{self.value} is out of range for {name} [{low}, {high}]")

    def serialize(self, serializer: Serializer) -> object:
        return serializer.serialize_int(self.value, bits=self.bits, signed=self.signed)

    def to_python(self) -> object:
        return self.value


@dataclass(frozen=True, slots=True)
class I8(Integer):
    kind: ClassVar[ValueKind] = ValueKind.I8
    bits: ClassVar[int] = 8


@dataclass(frozen=True, slots=True)
class I16(Integer):
    kind: ClassVar[ValueKind] = ValueKind.I16
    bits: ClassVar[int] = 16


@dataclass(frozen=True, slots=True)
class I32(Integer):
    kind: ClassVar[ValueKind] = ValueKind.I32
    bits: ClassVar[int] = 32


@dataclass(frozen=True, slots=True)
class I64(Integer):
    kind: ClassVar[ValueKind] = ValueKind.I64
    bits: ClassVar[int] = 64


@dataclass(frozen=True, slots=True)
class I128(Integer):
    kind: ClassVar[ValueKind] = ValueKind.I128
    bits: ClassVar[int] = 128


@dataclass(frozen=True, slots=True)
class U8(Integer):
    kind: ClassVar[ValueKind] = ValueKind.U8
    bits: ClassVar[int] = 8
    signed: ClassVar[bool] = False


@dataclass(frozen=True, slots=True)
class U16(Integer):
    kind: ClassVar[ValueKind] = ValueKind.U16
    bits: ClassVar[int] = 16
    signed: ClassVar[bool] = False


@dataclass(frozen=True, slots=True)
class U32(Integer):
    kind: ClassVar[ValueKind] = ValueKind.U32
    bits: ClassVar[int] = 32
    signed: ClassVar[bool] = False


@dataclass(frozen=True, slots=True)
class U64(Integer):
    kind: ClassVar[ValueKind] = ValueKind.U64
    bits: ClassVar[int] = 64
    signed: ClassVar[bool] = False


@dataclass(frozen=True, slots=True)
class U128(Integer):
    kind: ClassVar[ValueKind] = ValueKind.U128
    bits: ClassVar[int] = 128
    signed: ClassVar[bool] = False


@dataclass(frozen=True, slots=True)
class Float(Value):
    value: float
    bits: ClassVar[int] = 0

    def __post_init__(self) -> None:
        name = type(self).__name__
        if not self.bits:
            raise TypeError("Float is abstract; use F32 or F64")
        if isinstance(self.value, bool) or not isinstance(self.value, (int, float)):
            raise TypeError(f"{name} expects float, got {type(self.value).__name__}")
        value = float(self.value)
        if self.bits == 32 and math.isfinite(value):
            if abs(value) > _F32_MAX:
                raise ValueError(f"{value} is out of range for F32")
            value = _narrow_f32(value)
        object.__setattr__(self, "value", value)

    def serialize(self, serializer: Serializer) -> object:
        return serializer.serialize_float(self.value, bits=self.bits)

    def to_python(self) -> object:
        return self.value


@dataclass(frozen=True, slots=True)
class F32(Float):
    kind: ClassVar[ValueKind] = ValueKind.F32
    bits: ClassVar[int] = 32


@dataclass(frozen=True, slots=True)
class F64(Float):
    kind: ClassVar[ValueKind] = ValueKind.F64
    bits: ClassVar[int] = 64


@dataclass(frozen=True, slots=True)
class Char(Value):
    value: str
    kind: ClassVar[ValueKind] = ValueKind.CHAR

    def __post_init__(self) -> None:
        if not isinstance(self.value, str) or len(self.value) != 1:
            raise ValueError(f"Char expects exactly one character, got {self.value!r}")
        # Surrogates are not Unicode scalar values.
        if 0xD800 <= ord(self.value) <= 0xDFFF:
            raise ValueError(f"Char cannot hold a surrogate code point: {self.value!r}")

    def serialize(self, serializer: Serializer) -> object:
        return serializer.serialize_char(self.value)

    def to_python(self) -> object:
        return self.value


@dataclass(frozen=True, slots=True)
class String(Value):
    value: str
    kind: ClassVar[ValueKind] = ValueKind.STRING

    def __post_init__(self) -> None:
        if not isinstance(self.value, str):
            raise TypeError(f"String expects str, got {type(self.value).__name__}")

    def serialize(self, serializer: Serializer) -> object:
        return serializer.serialize_str(self.value)

    def to_python(self) -> object:
        return self.value


@dataclass(frozen=True, slots=True)
class Bytes(Value):
    value: bytes
    kind: ClassVar[ValueKind] = ValueKind.BYTES

    def __post_init__(self) -> None:
        if not isinstance(self.value, (bytes, bytearray, memoryview)):
            raise TypeError(f"Bytes expects a bytes-like object, got {type(self.value).__name__}")
        # Owned copy; mutable buffers must not leak into a held value.
        object.__setattr__(self, "value", bytes(self.value))

    def serialize(self, serializer: Serializer) -> object:
        return serializer.serialize_bytes(self.value)

    def to_python(self) -> object:
        return self.value


@dataclass(frozen=True, slots=True)
class Option(Value):
    value: Value | None = None
    kind: ClassVar[ValueKind] = ValueKind.OPTION

    def __post_init__(self) -> None:
        if self.value is not None and not isinstance(self.value, Value):
            raise TypeError(f"Option expects a Value or None, got {type(self.value).__name__}")

    @property
    def is_some(self) -> bool:
        return self.value is not None

    def serialize(self, serializer: Serializer) -> object:
        if self.value is None:
            return serializer.serialize_none()
        return serializer.serialize_some(self.value)

    def to_python(self) -> object:
        return None if self.value is None else self.value.to_python()


@dataclass(frozen=True, slots=True)
class Seq(Value):
    items: tuple[Value, ...] = ()
    kind: ClassVar[ValueKind] = ValueKind.SEQ

    def __post_init__(self) -> None:
        items = tuple(self.items)
        for item in items:
            if not isinstance(item, Value):
                raise TypeError(f"Seq items must be Values, got {type(item).__name__}")
        object.__setattr__(self, "items", items)

    def __len__(self) -> int:
        return len(self.items)

    def __iter__(self) -> Iterator[Value]:
        return iter(self.items)

    def serialize(self, serializer: Serializer) -> object:
        return serializer.serialize_seq(self.items)

    def to_python(self) -> object:
        return [item.to_python() for item in self.items]


@dataclass(frozen=True, slots=True)
class Map(Value):
    # Ordered pairs; a repeated key keeps its first position and takes the last value.
    entries: tuple[tuple[Value, Value], ...] = ()
    kind: ClassVar[ValueKind] = ValueKind.MAP

    def __post_init__(self) -> None:
        pairs = self.entries.items() if isinstance(self.entries, Mapping) else self.entries
        merged: dict[Value, Value] = {}
        for pair in pairs:
            key, value = pair
            if not isinstance(key, Value) or not isinstance(value, Value):
                raise TypeError("Map entries must be (Value, Value) pairs")
            merged[key] = value
        object.__setattr__(self, "entries", tuple(merged.items()))

    def __len__(self) -> int:
        return len(self.entries)

    def get(self, key: Value) -> Value | None:
        for candidate, value in self.entries:
            if candidate == key:
                return value
        return None

    def serialize(self, serializer: Serializer) -> object:
        return serializer.serialize_map(self.entries)

    def to_python(self) -> object:
        # Raises TypeError when a key projects to an unhashable list or dict.
        return {key.to_python(): value.to_python() for key, value in self.entries}


def _narrow_f32(value: float) -> float:
    # Nearest single-precision value, kept as the shortest decimal that maps back to it.
    (narrowed,) = struct.unpack("<f", struct.pack("<f", value))
    for digits in range(1, 10):
        candidate = float(f"{narrowed:.{digits}g}")
        try:
            (back,) = struct.unpack("<f", struct.pack("<f", candidate))
        except OverflowError:
            # Rounding up near the largest float32 can leave the representable range.
            continue
        if back == narrowed:
            return candidate
    return narrowed


def to_value(obj: object) -> Value:
    """Build a Value from plain Python data.

    Python ints carry no width, so they map to the narrowest of I64, U64,
    I128 and U128 that holds them.
    """
    if isinstance(obj, Value):
        return obj
    if obj is None:
        return Unit()
    if isinstance(obj, bool):
        return Bool(obj)
    if isinstance(obj, int):
        return _int_value(obj)
    if isinstance(obj, float):
        return F64(obj)
    if isinstance(obj, str):
        return String(obj)
    if isinstance(obj, (bytes, bytearray, memoryview)):
        return Bytes(bytes(obj))
    if isinstance(obj, Mapping):
        return Map(tuple((to_value(key), to_value(value)) for key, value in obj.items()))
    if isinstance(obj, (list, tuple)):
        return Seq(tuple(to_value(item) for item in obj))
    raise TypeError(f"Cannot convert {type(obj).__name__} to Value")


def _int_value(value: int) -> Integer:
    for variant in (I64, U64, I128, U128):
        low, high = integer_bounds(variant.bits, signed=variant.signed)
        if low <= value <= high:
            return variant(value)
    raise ValueError(f"{value} does not fit in a 128-bit integer")

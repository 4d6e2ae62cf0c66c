from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from kvcontext.domain.value import Value


# Serializer receives one format-neutral event per Value variant and returns the encoded node.
@runtime_checkable
class Serializer(Protocol):
    def serialize_unit(self) -> object:
        raise NotImplementedError("Serializer is a port; use a concrete adapter.")

    def serialize_bool(self, value: bool) -> object:
        raise NotImplementedError("Serializer is a port; use a concrete adapter.")

    def serialize_int(self, value: int, *, bits: int, signed: bool) -> object:
        raise NotImplementedError("Serializer is a port; use a concrete adapter.")

    def serialize_float(self, value: float, *, bits: int) -> object:
        raise NotImplementedError("Serializer is a port; use a concrete adapter.")

    def serialize_char(self, value: str) -> object:
        raise NotImplementedError("Serializer is a port; use a concrete adapter.")

    def serialize_str(self, value: str) -> object:
        raise NotImplementedError("Serializer is a port; use a concrete adapter.")

    def serialize_bytes(self, value: bytes) -> object:
        raise NotImplementedError("Serializer is a port; use a concrete adapter.")

    def serialize_none(self) -> object:
        raise NotImplementedError("Serializer is a port; use a concrete adapter.")

    def serialize_some(self, value: Value) -> object:
        raise NotImplementedError("Serializer is a port; use a concrete adapter.")

    def serialize_seq(self, items: tuple[Value, ...]) -> object:
        raise NotImplementedError("Serializer is a port; use a concrete adapter.")

    def serialize_map(self, entries: tuple[tuple[Value, Value], ...]) -> object:
        raise NotImplementedError("Serializer is a port; use a concrete adapter.")

from __future__ import annotations

import base64
from collections.abc import Sequence

from kvcontext.config.models import ExportSettings
from kvcontext.domain.errors import ExportError
from kvcontext.domain.formats import ExportFormat
from kvcontext.domain.value import Value
from kvcontext.ports.serializer import Serializer


class TreeSerializer(Serializer):
    """Serializer that lowers Values into plain Python containers.

    Format adapters subclass it, override the events their format restricts,
    and hand the resulting tree to the format library. Errors raised while
    walking are ``ExportError`` for this adapter's format.
    """

    format: ExportFormat

    def __init__(self, settings: ExportSettings | None = None) -> None:
        self._settings = settings if settings is not None else ExportSettings()

    def serialize_document(self, entries: Sequence[tuple[str, Value]]) -> dict[str, object]:
        return {key: value.serialize(self) for key, value in entries}

    def serialize_unit(self) -> object:
        return None

    def serialize_bool(self, value: bool) -> object:
        return value

    def serialize_int(self, value: int, *, bits: int, signed: bool) -> object:
        return value

    def serialize_float(self, value: float, *, bits: int) -> object:
        return value

    def serialize_char(self, value: str) -> object:
        return value

    def serialize_str(self, value: str) -> object:
        return value

    def serialize_bytes(self, value: bytes) -> object:
        if self._settings.bytes_encoding == "base64":
            return base64.b64encode(value).decode("ascii")
        return list(value)

    def serialize_none(self) -> object:
        return None

    def serialize_some(self, value: Value) -> object:
        return value.serialize(self)

    def serialize_seq(self, items: tuple[Value, ...]) -> object:
        return [item.serialize(self) for item in items]

    def serialize_map(self, entries: tuple[tuple[Value, Value], ...]) -> object:
        table: dict[object, object] = {}
        for key, value in entries:
            lowered = self.map_key(key)
            # Distinct keys may lower to equal ones (True, 1 and 1.0; "1" and I64(1)).
            if lowered in table:
                raise self.error(f"duplicate map key after encoding: {key!r}")
            table[lowered] = value.serialize(self)
        return table

    def map_key(self, key: Value) -> object:
        raise NotImplementedError("TreeSerializer.map_key must be implemented")

    def error(self, message: str) -> ExportError:
        return ExportError(self.format, message)

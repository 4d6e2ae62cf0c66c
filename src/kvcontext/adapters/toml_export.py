from __future__ import annotations

from collections.abc import Sequence

import tomli_w

from kvcontext.adapters.tree import TreeSerializer
from kvcontext.domain.errors import ExportError
from kvcontext.domain.formats import ExportFormat
from kvcontext.domain.value import Char, String, Value, integer_bounds

_TOML_INT_MIN, _TOML_INT_MAX = integer_bounds(64, signed=True)


class _Absent:
    # Marker for an absent Option inside a table; the entry is dropped.
    __slots__ = ()

    def __repr__(self) -> str:
        return "<absent>"


_ABSENT = _Absent()


class TomlExporter(TreeSerializer):
    """TOML has no null: Unit always fails, an absent Option is omitted from
    its table or rejected, depending on ``toml_none``."""

    format = ExportFormat.TOML

    def serialize_document(self, entries: Sequence[tuple[str, Value]]) -> dict[str, object]:
        return _present(super().serialize_document(entries))

    def serialize_unit(self) -> object:
        raise self.error("unsupported unit type")

    def serialize_none(self) -> object:
        if self._settings.toml_none == "error":
            raise self.error("unsupported None value")
        return _ABSENT

    def serialize_int(self, value: int, *, bits: int, signed: bool) -> object:
        if not _TOML_INT_MIN <= value <= _TOML_INT_MAX:
            raise self.error(f"out-of-range value for i64 type: {value}")
        return value

    def serialize_seq(self, items: tuple[Value, ...]) -> object:
        encoded = [item.serialize(self) for item in items]
        if any(item is _ABSENT for item in encoded):
            raise self.error("unsupported None value in array")
        return encoded

    def serialize_map(self, entries: tuple[tuple[Value, Value], ...]) -> object:
        return _present(super().serialize_map(entries))

    def map_key(self, key: Value) -> object:
        if isinstance(key, (String, Char)):
            return key.value
        raise self.error(f"map key was not a string, got {key.kind.value}")

    def export(self, entries: Sequence[tuple[str, Value]], *, pretty: bool) -> str:
        tree = self.serialize_document(entries)
        indent = self._settings.toml_settings.indent if pretty else 0
        try:
            return tomli_w.dumps(tree, multiline_strings=pretty, indent=indent)
        except (TypeError, ValueError) as exc:
            raise ExportError(self.format, str(exc)) from exc


def _present(table: dict) -> dict:
    return {key: value for key, value in table.items() if value is not _ABSENT}

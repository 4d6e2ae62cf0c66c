from __future__ import annotations

import json
import math
from collections.abc import Sequence

from kvcontext.adapters.tree import TreeSerializer
from kvcontext.domain.errors import ExportError
from kvcontext.domain.formats import ExportFormat
from kvcontext.domain.value import Bool, Char, Integer, String, Value, integer_bounds

# JSON numbers are carried as 64-bit integers; wider values are rejected.
_JSON_INT_MIN = integer_bounds(64, signed=True)[0]
_JSON_INT_MAX = integer_bounds(64, signed=False)[1]


class JsonExporter(TreeSerializer):
    format = ExportFormat.JSON

    def serialize_int(self, value: int, *, bits: int, signed: bool) -> object:
        if not _JSON_INT_MIN <= value <= _JSON_INT_MAX:
            raise self.error(f"number out of range: {value}")
        return value

    def serialize_float(self, value: float, *, bits: int) -> object:
        # NaN and infinities have no JSON literal and are written as null.
        if not math.isfinite(value):
            return None
        return value

    def map_key(self, key: Value) -> object:
        if isinstance(key, (String, Char)):
            return key.value
        if isinstance(key, Bool):
            return "true" if key.value else "false"
        if isinstance(key, Integer):
            return str(self.serialize_int(key.value, bits=key.bits, signed=key.signed))
        raise self.error(f"key must be a string, got {key.kind.value}")

    def export(self, entries: Sequence[tuple[str, Value]], *, pretty: bool) -> str:
        tree = self.serialize_document(entries)
        settings = self._settings.json_settings
        try:
            if pretty:
                return json.dumps(tree, indent=settings.indent, ensure_ascii=settings.ensure_ascii, allow_nan=False)
            return json.dumps(tree, separators=(",", ":"), ensure_ascii=settings.ensure_ascii, allow_nan=False)
        except (TypeError, ValueError) as exc:
            raise ExportError(self.format, str(exc)) from exc

from __future__ import annotations

from collections.abc import Sequence

import yaml

from kvcontext.adapters.tree import TreeSerializer
from kvcontext.domain.errors import ExportError
from kvcontext.domain.formats import ExportFormat
from kvcontext.domain.value import Bytes, Map, Option, Seq, Value


class YamlExporter(TreeSerializer):
    format = ExportFormat.YAML

    def map_key(self, key: Value) -> object:
        # Keys must stay hashable scalars once lowered.
        if isinstance(key, (Seq, Map, Bytes)):
            raise self.error(f"unsupported map key type: {key.kind.value}")
        if isinstance(key, Option):
            return None if key.value is None else self.map_key(key.value)
        return key.serialize(self)

    def export(self, entries: Sequence[tuple[str, Value]], *, pretty: bool = False) -> str:
        tree = self.serialize_document(entries)
        # An empty context is an empty document, not "{}".
        if not tree:
            return ""
        settings = self._settings.yaml_settings
        try:
            return yaml.safe_dump(
                tree,
                sort_keys=False,
                default_flow_style=False,
                allow_unicode=settings.allow_unicode,
                indent=settings.indent,
            )
        except yaml.YAMLError as exc:
            raise ExportError(self.format, str(exc)) from exc

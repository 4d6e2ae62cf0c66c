from __future__ import annotations

from collections.abc import ItemsView, Iterable, Iterator, KeysView, Mapping

from kvcontext.adapters.factory import build_exporters
from kvcontext.config.models import AppConfig, ExportSettings
from kvcontext.domain.errors import ExportError, FormatDisabledError
from kvcontext.domain.formats import ExportFormat
from kvcontext.domain.value import Value
from kvcontext.observability.logging import LogMessage
from kvcontext.ports.log_sink import LogSink


class Context:
    """String-keyed collection of Values with export to JSON, TOML, YAML and XML.

    Entries keep insertion order; overwriting a key keeps its position.
    Exports read a snapshot of the entries and never mutate the context.
    There is no internal locking: callers sharing a Context across threads
    must serialize access themselves.
    """

    __slots__ = ("_entries", "_settings", "_exporters", "_log_sink")

    def __init__(self, *, settings: ExportSettings | None = None, log_sink: LogSink | None = None) -> None:
        self._entries: dict[str, Value] = {}
        self._settings = settings if settings is not None else ExportSettings()
        self._exporters = build_exporters(self._settings)
        self._log_sink = log_sink

    @classmethod
    def new(cls) -> Context:
        return cls()

    @classmethod
    def from_config(cls, config: AppConfig, *, log_sink: LogSink | None = None) -> Context:
        return cls(settings=config.export, log_sink=log_sink)

    @property
    def settings(self) -> ExportSettings:
        return self._settings

    def insert(self, key: str, value: Value) -> None:
        if not isinstance(key, str):
            raise TypeError(f"Context keys must be str, got {type(key).__name__}")
        if not isinstance(value, Value):
            raise TypeError(f"Context values must be Value, got {type(value).__name__}")
        self._entries[key] = value

    def remove(self, key: str) -> Value | None:
        return self._entries.pop(key, None)

    def get(self, key: str) -> Value | None:
        return self._entries.get(key)

    def extend(self, data: Mapping[str, Value] | Iterable[tuple[str, Value]]) -> None:
        pairs = data.items() if isinstance(data, Mapping) else data
        for key, value in pairs:
            self.insert(key, value)

    def to_dict(self) -> dict[str, Value]:
        return dict(self._entries)

    def keys(self) -> KeysView[str]:
        return self._entries.keys()

    def items(self) -> ItemsView[str, Value]:
        return self._entries.items()

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: object) -> bool:
        return key in self._entries

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Context):
            return NotImplemented
        return self._entries == other._entries

    def __repr__(self) -> str:
        return f"Context({self._entries!r})"

    def to_json(self, pretty: bool = False) -> str:
        return self.export(ExportFormat.JSON, pretty=pretty)

    def to_toml(self, pretty: bool = False) -> str:
        return self.export(ExportFormat.TOML, pretty=pretty)

    def to_yaml(self) -> str:
        return self.export(ExportFormat.YAML)

    def to_xml(self, pretty: bool = False) -> str:
        return self.export(ExportFormat.XML, pretty=pretty)

    def export(self, fmt: ExportFormat | str, *, pretty: bool = False) -> str:
        fmt = ExportFormat.parse(fmt)
        exporter = self._exporters.get(fmt)
        if exporter is None:
            raise FormatDisabledError(fmt)

        entries = self._snapshot()
        try:
            text = exporter.export(entries, pretty=pretty)
        except ExportError as exc:
            self._log(LogMessage.export_failed(exc))
            raise
        self._log(LogMessage.exported(fmt, keys=len(entries), size=len(text)))
        return text

    def _snapshot(self) -> list[tuple[str, Value]]:
        entries = list(self._entries.items())
        if self._settings.key_order == "sorted":
            entries.sort(key=lambda item: item[0])
        return entries

    def _log(self, message: LogMessage) -> None:
        if self._log_sink is not None:
            self._log_sink.emit(message)

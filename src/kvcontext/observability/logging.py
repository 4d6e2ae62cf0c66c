from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import UTC, datetime

from kvcontext.domain.errors import ExportError
from kvcontext.domain.formats import ExportFormat

LOG_LEVELS = ("debug", "info", "warning", "error")

EXPORTED = "context.exported"
EXPORT_FAILED = "context.export_failed"


@dataclass(frozen=True, slots=True)
class LogMessage:
    # One structured record about a context export; extra detail travels in fields.
    level: str
    event: str
    format: ExportFormat | None = None
    fields: Mapping[str, object] = field(default_factory=dict)
    timestamp: datetime = field(default_factory=lambda: datetime.now(tz=UTC))

    def __post_init__(self) -> None:
        level = self.level.lower() if isinstance(self.level, str) else self.level
        if level not in LOG_LEVELS:
            raise ValueError(f"Unknown log level {self.level!r}; expected one of: {', '.join(LOG_LEVELS)}")
        if not self.event:
            raise ValueError("LogMessage requires an event name")
        object.__setattr__(self, "level", level)
        object.__setattr__(self, "fields", dict(self.fields))

    @property
    def rank(self) -> int:
        return LOG_LEVELS.index(self.level)

    @classmethod
    def exported(cls, fmt: ExportFormat, *, keys: int, size: int) -> LogMessage:
        return cls(level="debug", event=EXPORTED, format=fmt, fields={"keys": keys, "size": size})

    @classmethod
    def export_failed(cls, error: ExportError) -> LogMessage:
        return cls(level="error", event=EXPORT_FAILED, format=error.format, fields={"error": error.message})

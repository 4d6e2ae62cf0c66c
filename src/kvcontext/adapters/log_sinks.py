from __future__ import annotations

import json
import sys
from pathlib import Path
from typing import TextIO

from kvcontext.observability.logging import LOG_LEVELS, LogMessage
from kvcontext.ports.log_sink import LogSink


class StreamLogSink(LogSink):
    # One flat JSON record per line; stderr unless a stream is given.
    def __init__(self, stream: TextIO | None = None, *, min_level: str = "debug") -> None:
        if min_level not in LOG_LEVELS:
            raise ValueError(f"Unknown log level {min_level!r}; expected one of: {', '.join(LOG_LEVELS)}")
        self._stream = stream
        self._min_rank = LOG_LEVELS.index(min_level)

    def emit(self, message: LogMessage) -> None:
        if message.rank < self._min_rank:
            return
        stream = self._stream if self._stream is not None else sys.stderr
        stream.write(json.dumps(log_record(message), separators=(",", ":"), ensure_ascii=False, default=str) + "\n")
        stream.flush()


class JsonlLogSink(StreamLogSink):
    """StreamLogSink that owns an append-mode file; repeated runs share one log."""

    def __init__(self, handle: TextIO, *, min_level: str = "debug") -> None:
        super().__init__(handle, min_level=min_level)
        self._handle = handle

    @classmethod
    def open(cls, path: Path, *, min_level: str = "debug") -> JsonlLogSink:
        # OSError propagates; callers decide whether a missing log is fatal.
        path.parent.mkdir(parents=True, exist_ok=True)
        return cls(path.open("a", encoding="utf-8"), min_level=min_level)

    def close(self) -> None:
        self._handle.close()

    def __enter__(self) -> JsonlLogSink:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()


def log_record(message: LogMessage) -> dict[str, object]:
    record: dict[str, object] = {
        "ts": message.timestamp.isoformat().replace("+00:00", "Z"),
        "level": message.level,
        "event": message.event,
    }
    if message.format is not None:
        record["format"] = message.format.value
    # Fields never shadow the envelope keys.
    for key, value in message.fields.items():
        record.setdefault(key, value)
    return record

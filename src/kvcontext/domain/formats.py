from __future__ import annotations

from enum import Enum


# Output formats a Context can be exported to; values match config and CLI spelling.
class ExportFormat(str, Enum):
    JSON = "json"
    TOML = "toml"
    YAML = "yaml"
    XML = "xml"

    @classmethod
    def parse(cls, raw: ExportFormat | str) -> ExportFormat:
        if isinstance(raw, cls):
            return raw
        try:
            return cls(str(raw).strip().lower())
        except ValueError as exc:
            allowed = ", ".join(member.value for member in cls)
            raise ValueError(f"Unknown export format {raw!r}; expected one of: {allowed}") from exc

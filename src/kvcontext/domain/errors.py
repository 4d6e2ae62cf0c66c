from __future__ import annotations

from .formats import ExportFormat


class ContextError(Exception):
    pass


class ExportError(ContextError):
    # One error kind per format; the serializer library's message is kept verbatim.
    def __init__(self, fmt: ExportFormat, message: str) -> None:
        super().__init__(f"{fmt.value}: {message}")
        self.format = fmt
        self.message = message


class FormatDisabledError(ExportError):
    # Raised instead of exporting when configuration turns a format off.
    def __init__(self, fmt: ExportFormat) -> None:
        super().__init__(fmt, "format is disabled by configuration")

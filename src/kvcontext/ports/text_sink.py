from __future__ import annotations

from typing import Protocol, runtime_checkable


# TextSink is where a rendered document leaves the process (file, stdout).
@runtime_checkable
class TextSink(Protocol):
    def write(self, text: str) -> None:
        """Deliver the whole document in one call, or raise OSError and deliver nothing."""
        raise NotImplementedError("TextSink is a port; use a concrete adapter.")

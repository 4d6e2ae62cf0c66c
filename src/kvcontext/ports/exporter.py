from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING, Protocol, runtime_checkable

from kvcontext.domain.formats import ExportFormat

if TYPE_CHECKING:
    from kvcontext.domain.value import Value


# Exporter turns a snapshot of context entries into one text document.
@runtime_checkable
class Exporter(Protocol):
    format: ExportFormat

    def export(self, entries: Sequence[tuple[str, Value]], *, pretty: bool) -> str:
        """Encode all entries or raise ExportError; never returns partial output."""
        raise NotImplementedError("Exporter is a port; use a concrete adapter.")

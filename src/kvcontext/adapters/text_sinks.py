from __future__ import annotations

import sys
from dataclasses import dataclass
from pathlib import Path
from typing import TextIO

from kvcontext.ports.text_sink import TextSink


@dataclass(frozen=True, slots=True)
class FileTextSink(TextSink):
    """Writes a whole document to ``path`` through a sibling ``.tmp`` file.

    The target is replaced only after the document is fully written, so a
    reader never sees a truncated export. A failed write removes the temp file
    and leaves any previous ``path`` untouched.
    """

    path: Path
    encoding: str = "utf-8"

    @property
    def temp_path(self) -> Path:
        return self.path.with_name(self.path.name + ".tmp")

    def write(self, text: str) -> None:
        temp = self.temp_path
        try:
            with temp.open("w", encoding=self.encoding, newline="") as handle:
                handle.write(text)
            temp.replace(self.path)
        except BaseException:
            temp.unlink(missing_ok=True)
            raise


@dataclass(frozen=True, slots=True)
class StdoutTextSink(TextSink):
    # Terminal output; appends the newline some formats leave off.
    stream: TextIO | None = None

    def write(self, text: str) -> None:
        stream = self.stream if self.stream is not None else sys.stdout
        stream.write(text if not text or text.endswith("\n") else text + "\n")
        stream.flush()

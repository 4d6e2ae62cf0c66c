from __future__ import annotations

from collections.abc import Sequence

from kvcontext.app import run


def main(argv: Sequence[str] | None = None) -> int:
    # Single-line entrypoint delegating to the CLI.
    return run(list(argv) if argv is not None else None)

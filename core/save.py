"""core/save.py — Snapshot storage port (best-effort local persistence).

The codec in ``simulation.snapshot`` turns the session roster into a
JSON document; this module only moves that text in and out of storage.

Two stores share the same tiny interface (``read() -> str | None`` and
``write(text) -> bool``):

- ``FileStore``   — one JSON file on disk (default ``saves/fields.json``)
- ``MemoryStore`` — an in-process string, for tests and headless runs

Writes never raise.  A failed write prints a ``[SAVE]`` line and returns
False; nothing in the simulation looks at the result.  Concurrent
writers are not coordinated — last writer wins.
"""

from __future__ import annotations
from pathlib import Path
from typing import Protocol

from core.tuning import get as _tun


SAVES_DIR = Path("saves")


class SnapshotStore(Protocol):
    def read(self) -> str | None: ...
    def write(self, text: str) -> bool: ...


class FileStore:
    """Snapshot text kept in a single file."""

    def __init__(self, path: str | Path | None = None):
        if path is None:
            path = _tun("sessions", "save_path", str(SAVES_DIR / "fields.json"))
        self.path = Path(path)

    def read(self) -> str | None:
        """Return the stored text, or None if missing / unreadable."""
        if not self.path.exists():
            return None
        try:
            return self.path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as ex:
            print(f"[SAVE] Error reading {self.path}: {ex}")
            return None

    def write(self, text: str) -> bool:
        """Write via a temp file + rename so a crash never truncates the save."""
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            tmp = self.path.with_suffix(self.path.suffix + ".tmp")
            tmp.write_text(text, encoding="utf-8")
            tmp.replace(self.path)
            return True
        except OSError as ex:
            print(f"[SAVE] Error writing {self.path}: {ex}")
            return False

    def __repr__(self) -> str:
        return f"FileStore({str(self.path)!r})"


class MemoryStore:
    """Snapshot text kept in memory.  ``fail_writes`` simulates a full disk."""

    def __init__(self, text: str | None = None, *, fail_writes: bool = False):
        self.text = text
        self.fail_writes = fail_writes
        self.writes = 0

    def read(self) -> str | None:
        return self.text

    def write(self, text: str) -> bool:
        if self.fail_writes:
            print("[SAVE] Error writing memory store: quota exceeded")
            return False
        self.text = text
        self.writes += 1
        return True

# Copyright (c) 2025 Arne Deutsch, itemis AG, MIT License
"""Thread-safe text file helpers with atomic writes."""

from __future__ import annotations

import os
import tempfile
import threading
from pathlib import Path
from typing import Callable

# per-path locks to guard concurrent access within a process
_locks: dict[str, threading.Lock] = {}
_locks_lock = threading.Lock()


def _get_lock(path: Path) -> threading.Lock:
    """Return a lock for ``path`` shared across threads."""

    key = str(path)
    with _locks_lock:
        lock = _locks.get(key)
        if lock is None:
            lock = threading.Lock()
            _locks[key] = lock
        return lock


def atomic_write_file(path: str | Path, writer: Callable[[Path], None]) -> None:
    """Atomically write to ``path`` using ``writer``.

    The ``writer`` callback receives a temporary path. It should write the
    desired content to that location. The temp file is then ``os.replace``d
    to the target path, ensuring atomicity on POSIX systems.
    """

    target = Path(path)
    lock = _get_lock(target)
    target.parent.mkdir(parents=True, exist_ok=True)
    with lock:
        tmp = tempfile.NamedTemporaryFile(delete=False, dir=target.parent)
        tmp_path = Path(tmp.name)
        try:
            tmp.close()
            writer(tmp_path)
            os.replace(tmp_path, target)
        finally:
            if tmp_path.exists():  # pragma: no cover - cleanup safety
                tmp_path.unlink(missing_ok=True)


def atomic_write_text(path: str | Path, text: str) -> None:
    """Atomically write ``text`` to ``path`` as UTF-8 without newline translation."""

    def _write(tmp_path: Path) -> None:
        with open(tmp_path, "w", encoding="utf-8", newline="") as fh:
            fh.write(text)

    atomic_write_file(path, _write)


def read_text(path: str | Path) -> str:
    """Read ``path`` as UTF-8 under a thread lock.

    Line endings are returned untouched so ``\\r\\n`` reaches the decoder.
    """

    file = Path(path)
    lock = _get_lock(file)
    with lock:
        with open(file, "r", encoding="utf-8", newline="") as fh:
            return fh.read()


__all__ = [
    "atomic_write_file",
    "atomic_write_text",
    "read_text",
]

# acl_sweep/io/checkpoint.py
from __future__ import annotations

import logging
import os
import tempfile
import threading
from pathlib import Path
from typing import Optional, Union

from acl_sweep.errors import CheckpointError

logger = logging.getLogger(__name__)

__all__ = ["FileCheckpointStore", "MemoryCheckpointStore"]


class FileCheckpointStore:
    """
    Single-key checkpoint kept in a plain text file.

    Every write replaces the whole file through a temp file + os.replace, so a
    crash mid-write leaves either the previous key or the new one.
    """

    def __init__(self, path: Union[str, Path]) -> None:
        self.path = Path(path).expanduser()

    def read(self) -> Optional[str]:
        """Return the stored key, or None when there is nothing to resume from."""
        try:
            text = self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return None
        except (OSError, UnicodeDecodeError) as exc:
            logger.warning(
                "Could not read checkpoint %s (%s); starting from the beginning",
                self.path,
                exc,
            )
            return None
        # Only line endings are trimmed; keys may begin or end with spaces.
        key = text.rstrip("\r\n")
        return key or None

    def write(self, key: str) -> None:
        """Persist ``key``; raises CheckpointError on any filesystem failure."""
        tmp_name = None
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                prefix=f".{self.path.name}.", dir=str(self.path.parent)
            )
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                fh.write(key)
            os.replace(tmp_name, self.path)
            tmp_name = None
        except OSError as exc:
            raise CheckpointError(f"cannot write checkpoint {self.path}: {exc}") from exc
        finally:
            if tmp_name is not None:
                try:
                    os.unlink(tmp_name)
                except OSError:
                    pass
        logger.debug("Checkpoint %s -> %r", self.path, key)

    def __repr__(self) -> str:
        return f"FileCheckpointStore({str(self.path)!r})"


class MemoryCheckpointStore:
    """In-process checkpoint; keeps a history of writes for inspection."""

    def __init__(self, initial: Optional[str] = None) -> None:
        self._lock = threading.Lock()
        self._value = initial
        self.writes: list[str] = []

    def read(self) -> Optional[str]:
        with self._lock:
            return self._value

    def write(self, key: str) -> None:
        with self._lock:
            self._value = key
            self.writes.append(key)

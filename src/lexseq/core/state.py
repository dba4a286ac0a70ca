from __future__ import annotations

import fcntl
import json
import logging
import os
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from pathlib import Path

import anyio.to_thread

from lexseq.core.models import IdState

logger = logging.getLogger(__name__)

_MAX_BACKUPS = 3
_IDS_FILE = "ids.json"
_LOCK_FILE = "ids.lock"


class StateStore:
    """Atomic JSON store for ID counters with backup rotation and corruption recovery."""

    def __init__(self, lexseq_dir: Path) -> None:
        self._lexseq_dir = lexseq_dir
        self._state_dir = lexseq_dir / "state"

    @property
    def ids_path(self) -> Path:
        return self._state_dir / _IDS_FILE

    # -- Public API ----------------------------------------------------------

    async def load_ids(self) -> IdState:
        data = await self._load_file(self.ids_path)
        if data is None:
            return IdState()
        return IdState.model_validate(data)

    async def save_ids(self, state: IdState) -> None:
        await self._save_file(self.ids_path, state.model_dump(mode="json"))

    @asynccontextmanager
    async def locked(self) -> AsyncIterator[None]:
        """Hold an exclusive lock on the ID state for a load-modify-save.

        The lock is an advisory ``flock`` on a file beside the state, so it
        serializes every process that goes through this method.
        """

        def _acquire() -> int:
            self._state_dir.mkdir(parents=True, exist_ok=True)
            fd = os.open(str(self._state_dir / _LOCK_FILE), os.O_RDWR | os.O_CREAT, 0o644)
            try:
                fcntl.flock(fd, fcntl.LOCK_EX)
            except OSError:
                os.close(fd)
                raise
            return fd

        fd = await anyio.to_thread.run_sync(_acquire)
        logger.debug("Acquired %s", _LOCK_FILE)
        try:
            yield
        finally:
            fcntl.flock(fd, fcntl.LOCK_UN)
            os.close(fd)

    async def clear(self) -> int:
        """Remove the ID state file and its backups; return how many were removed."""

        def _clear() -> int:
            removed = 0
            for path in self._state_dir.glob(f"{_IDS_FILE}*"):
                path.unlink()
                removed += 1
            return removed

        if not self._state_dir.exists():
            return 0
        return await anyio.to_thread.run_sync(_clear)

    # -- Internals -----------------------------------------------------------

    async def _load_file(self, path: Path) -> dict | list | None:
        """Load JSON from *path*, falling back to backups on missing/corrupt files."""
        candidates = [
            path,
            *(path.parent / f"{path.name}.bak.{i}" for i in range(1, _MAX_BACKUPS + 1)),
        ]
        for candidate in candidates:
            data = await self._try_read_json(candidate)
            if data is not None:
                if candidate != path:
                    logger.warning("Recovered %s from backup %s", path.name, candidate.name)
                return data
        return None

    @staticmethod
    async def _try_read_json(path: Path) -> dict | list | None:
        def _read() -> dict | list | None:
            try:
                raw = path.read_text(encoding="utf-8")
            except OSError:
                return None
            try:
                return json.loads(raw)
            except ValueError:
                return None

        return await anyio.to_thread.run_sync(_read)

    async def _save_file(self, path: Path, data: dict | list) -> None:
        def _write() -> None:
            path.parent.mkdir(parents=True, exist_ok=True)

            # Rotate backups: .bak.3 is dropped, .bak.2 -> .bak.3, .bak.1 -> .bak.2, file -> .bak.1
            for i in range(_MAX_BACKUPS, 1, -1):
                src = path.parent / f"{path.name}.bak.{i - 1}"
                dst = path.parent / f"{path.name}.bak.{i}"
                if src.exists():
                    os.replace(src, dst)

            if path.exists():
                os.replace(path, path.parent / f"{path.name}.bak.1")

            # Atomic write via tmp + fsync + replace
            tmp_path = path.parent / f"{path.name}.tmp"
            content = json.dumps(data, indent=2, ensure_ascii=False)
            fd = os.open(str(tmp_path), os.O_WRONLY | os.O_CREAT | os.O_TRUNC, 0o644)
            try:
                os.write(fd, content.encode("utf-8"))
                os.fsync(fd)
            finally:
                os.close(fd)

            os.replace(tmp_path, path)
            logger.debug("Saved %s", path)

        await anyio.to_thread.run_sync(_write)

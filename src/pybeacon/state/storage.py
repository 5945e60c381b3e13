"""Durable blob stores for the monitoring snapshot.

The registry only needs three operations on a named byte blob.  Any
object with ``load``/``save``/``delete`` works; two implementations
ship here.
"""

from __future__ import annotations

import logging
import os
import tempfile
import threading
from pathlib import Path
from typing import Protocol, runtime_checkable

from pybeacon.exceptions import StateStoreError

_logger = logging.getLogger(__name__)


@runtime_checkable
class StateStore(Protocol):
    """Named byte-blob store.

    Implementations raise :class:`~pybeacon.exceptions.StateStoreError`
    on I/O failure.  ``load`` returns ``None`` when the blob does not
    exist and ``delete`` of a missing blob is not an error.
    """

    def load(self, name: str) -> bytes | None: ...

    def save(self, name: str, data: bytes) -> None: ...

    def delete(self, name: str) -> None: ...


def _check_name(name: str) -> str:
    if not name or name in {".", ".."} or "/" in name or os.sep in name:
        raise StateStoreError(f"Invalid blob name: {name!r}", name=name)
    return name


class FileStateStore:
    """Stores each blob as one file inside *directory*.

    Writes go to a temporary file in the same directory and are moved
    into place with :func:`os.replace`, so a crash mid-write leaves the
    previous blob intact.
    """

    def __init__(self, directory: str | os.PathLike[str]) -> None:
        self._directory = Path(directory)

    @property
    def directory(self) -> Path:
        return self._directory

    def path_for(self, name: str) -> Path:
        return self._directory / _check_name(name)

    def load(self, name: str) -> bytes | None:
        path = self.path_for(name)
        try:
            return path.read_bytes()
        except FileNotFoundError:
            return None
        except OSError as exc:
            raise StateStoreError(f"Could not read {path}: {exc}", name=name) from exc

    def save(self, name: str, data: bytes) -> None:
        path = self.path_for(name)
        tmp_name: str | None = None
        try:
            self._directory.mkdir(parents=True, exist_ok=True)
            with tempfile.NamedTemporaryFile(
                "wb",
                dir=self._directory,
                prefix=f".{name}.",
                suffix=".tmp",
                delete=False,
            ) as handle:
                tmp_name = handle.name
                handle.write(data)
                handle.flush()
                os.fsync(handle.fileno())
            os.replace(tmp_name, path)
            tmp_name = None
        except OSError as exc:
            raise StateStoreError(f"Could not write {path}: {exc}", name=name) from exc
        finally:
            if tmp_name is not None:
                try:
                    os.unlink(tmp_name)
                except OSError:
                    _logger.debug("Could not remove temporary file %s", tmp_name, exc_info=True)

    def delete(self, name: str) -> None:
        path = self.path_for(name)
        try:
            path.unlink(missing_ok=True)
        except OSError as exc:
            raise StateStoreError(f"Could not delete {path}: {exc}", name=name) from exc


class MemoryStateStore:
    """In-process blob store.

    Useful for tests and for embedding applications that persist the
    blob themselves.  Survives registry instances, not the process.
    """

    def __init__(self, blobs: dict[str, bytes] | None = None) -> None:
        self._blobs: dict[str, bytes] = dict(blobs or {})
        self._lock = threading.Lock()

    def load(self, name: str) -> bytes | None:
        with self._lock:
            return self._blobs.get(name)

    def save(self, name: str, data: bytes) -> None:
        with self._lock:
            self._blobs[name] = bytes(data)

    def delete(self, name: str) -> None:
        with self._lock:
            self._blobs.pop(name, None)

    def __contains__(self, name: object) -> bool:
        with self._lock:
            return name in self._blobs

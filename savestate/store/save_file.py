from __future__ import annotations

import contextlib
import logging
import os
import tempfile
from pathlib import Path

from ..errors import SaveFileNotFoundError, SaveIOError
from ..metrics import decode_errors_total, loads_total, save_latency_ms, saves_total
from ..paths import ensure_dir
from . import codec
from .values import Value, check_value


class SaveFile:
    """Key-value entries held in memory and snapshotted to a file.

    The in-memory mapping is the source of truth; the file reflects the last
    successful :meth:`save`. File names are resolved against ``base_dir``
    unless they are absolute. Instances are not thread-safe.
    """

    def __init__(self, base_dir: Path | str, obscure: bool = True) -> None:
        self.base_dir = Path(base_dir)
        self.obscure = obscure
        self._entries: dict[str, Value] = {}
        self.log = logging.getLogger(__name__)

    def __contains__(self, key: object) -> bool:
        return key in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def get(self, key: str) -> Value | None:
        return self._entries.get(key)

    def set(self, key: str, value: Value) -> None:
        if not isinstance(key, str):
            raise TypeError(f"keys must be str, got {type(key).__name__}")
        self._entries[key] = check_value(value)

    def snapshot(self) -> dict[str, Value]:
        return dict(self._entries)

    def path_for(self, name: str | Path) -> Path:
        return self.base_dir / name

    def exists(self, name: str | Path) -> bool:
        return self.path_for(name).is_file()

    def load(self, name: str | Path) -> None:
        """Replace the entries with the contents of ``name``.

        Raises :class:`SaveDecodeError` if the file is corrupt and
        :class:`SaveFileNotFoundError` if it is missing. On failure the
        current entries are kept.
        """
        self.try_load(name).unwrap()

    def try_load(self, name: str | Path) -> codec.DecodeResult:
        """Like :meth:`load` but report decode failures in the result.

        I/O failures still raise.
        """
        path = self.path_for(name)
        data = self._read(path)
        result = codec.try_decode(data, self.obscure, path)
        if not result.ok:
            decode_errors_total.inc()
            self.log.warning(
                "save_decode_failed",
                extra={"event_type": "save_decode_failed", "path": str(path)},
            )
            return result
        self._entries = dict(result.unwrap())
        loads_total.inc()
        self.log.debug(
            "save_loaded",
            extra={"event_type": "save_loaded", "path": str(path), "entries": len(self._entries)},
        )
        return result

    def save(self, name: str | Path) -> Path:
        """Write the entries to ``name``, replacing the previous snapshot."""
        path = self.path_for(name)
        data = codec.encode(self._entries, self.obscure)
        with save_latency_ms.time():
            try:
                self._atomic_write(path, data)
            except OSError as exc:
                raise SaveIOError(f"Unable to write save file {path}: {exc}", path) from exc
        saves_total.inc()
        self.log.debug(
            "save_written",
            extra={
                "event_type": "save_written",
                "path": str(path),
                "bytes_written": len(data),
                "latency_ms": save_latency_ms.last_ms,
            },
        )
        return path

    def _read(self, path: Path) -> bytes:
        try:
            return path.read_bytes()
        except FileNotFoundError as exc:
            raise SaveFileNotFoundError(f"Save file not found: {path}", path) from exc
        except OSError as exc:
            raise SaveIOError(f"Unable to read save file {path}: {exc}", path) from exc

    def _atomic_write(self, path: Path, data: bytes) -> None:
        """Write to a temp file next to ``path``, fsync, then rename over it."""
        ensure_dir(path.parent)
        fd, tmp = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.", suffix=".tmp")
        try:
            with os.fdopen(fd, "wb") as f:
                f.write(data)
                f.flush()
                os.fsync(f.fileno())
            os.replace(tmp, path)
        except BaseException:
            with contextlib.suppress(FileNotFoundError):
                os.unlink(tmp)
            raise

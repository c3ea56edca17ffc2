"""Lifecycle owner for the save store.

The host constructs one :class:`SaveController` at process start, calls
:meth:`SaveController.start` once, and hands the instance to whatever needs
to read or write entries. Every :meth:`SaveController.set_value` persists
before returning.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Callable
from datetime import datetime, timezone

from . import keys
from .config import Settings, get_settings
from .errors import SaveDecodeError, SaveIOError
from .store.save_file import SaveFile
from .store.values import Value, format_timestamp, render


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _parse_version(value: Value | None) -> int | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError:
            return None
    return None


class SaveController:
    def __init__(
        self,
        settings: Settings | None = None,
        *,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self.settings = settings or get_settings()
        self._clock = clock or _utcnow
        self._store: SaveFile | None = None
        self.log = logging.getLogger(__name__)

    @property
    def started(self) -> bool:
        return self._store is not None

    @property
    def store(self) -> SaveFile:
        if self._store is None:
            raise RuntimeError("SaveController.start() has not been called")
        return self._store

    def start(self) -> None:
        """Load the existing save (if any), stamp the format version and save.

        A version mismatch is logged and otherwise ignored. Decode failures
        follow ``settings.on_corrupt``.
        """
        if self._store is not None:
            raise RuntimeError("SaveController.start() already ran")

        store = SaveFile(self.settings.save_dir, obscure=self.settings.obscure_save)
        name = self.settings.save_file_name
        if store.exists(name):
            self._load_existing(store)
        else:
            self.log.info(
                "no save file, starting fresh",
                extra={"event_type": "save_missing", "path": str(store.path_for(name))},
            )

        store.set(keys.SAVE_FILE_VERSION, str(self.settings.format_version))
        self._save(store)
        self._store = store

    def get_value(self, key: str) -> str | None:
        value = self.store.get(key)
        if value is None:
            return None
        return render(value)

    def set_value(self, key: str, value: str) -> None:
        if not isinstance(value, str):
            raise TypeError(f"value must be str, got {type(value).__name__}")
        store = self.store
        store.set(key, value)
        self._save(store)
        self.log.debug("value_set", extra={"event_type": "value_set", "key": key})

    def _load_existing(self, store: SaveFile) -> None:
        result = store.try_load(self.settings.save_file_name)
        if not result.ok:
            assert result.error is not None
            if self.settings.on_corrupt == "raise":
                raise result.error
            self._set_aside(store, result.error)
            return

        expected = self.settings.format_version
        stored = store.get(keys.SAVE_FILE_VERSION)
        if _parse_version(stored) != expected:
            self.log.warning(
                "Save file version mismatch: found %r, expected %d",
                stored,
                expected,
                extra={"event_type": "version_mismatch", "format_version": expected},
            )

    def _set_aside(self, store: SaveFile, error: SaveDecodeError) -> None:
        path = store.path_for(self.settings.save_file_name)
        target = path.with_name(path.name + ".corrupt")
        n = 0
        while target.exists():
            n += 1
            target = path.with_name(f"{path.name}.corrupt.{n}")
        try:
            os.replace(path, target)
        except OSError as exc:
            raise SaveIOError(f"Unable to move corrupt save {path}: {exc}", path) from exc
        self.log.error(
            "Corrupt save file moved to %s (%s): %s",
            target,
            error.category.value,
            error,
            extra={"event_type": "save_reset", "path": str(path)},
        )

    def _save(self, store: SaveFile) -> None:
        store.set(keys.SAVE_TIMESTAMP, format_timestamp(self._clock()))
        store.save(self.settings.save_file_name)

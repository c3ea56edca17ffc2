"""Encode/decode pipeline for save files.

Writing: ``serialize -> utf-8 -> obscure -> base64``. Reading is the exact
inverse. With obscuring disabled the serialized text is stored as is.

The obscure step XORs every byte with :data:`OBSCURE_KEY`. It keeps casual
readers from editing a save in a text editor and nothing more: there is no
key material and anyone can reverse it. Do not rely on it for secrecy.
"""

from __future__ import annotations

import base64
import binascii
import json
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

from ..errors import ErrorCategory, SaveDecodeError
from .values import Value, from_json, to_json

OBSCURE_KEY = 64

_OBSCURE_TABLE = bytes(b ^ OBSCURE_KEY for b in range(256))


def obscure(data: bytes) -> bytes:
    """XOR each byte with :data:`OBSCURE_KEY`. Applying it twice is a no-op."""
    return data.translate(_OBSCURE_TABLE)


def serialize(entries: Mapping[str, Value]) -> str:
    """Render entries as compact JSON, e.g. ``{"score":"10"}``."""
    return json.dumps(
        {key: to_json(value) for key, value in entries.items()},
        separators=(",", ":"),
        sort_keys=True,
    )


def deserialize(text: str, path: Path | None = None) -> dict[str, Value]:
    try:
        raw = json.loads(text)
    except json.JSONDecodeError as exc:
        raise SaveDecodeError(f"Invalid JSON: {exc}", ErrorCategory.FORMAT, path) from exc
    if not isinstance(raw, dict):
        raise SaveDecodeError(
            f"Expected a JSON object, got {type(raw).__name__}", ErrorCategory.FORMAT, path
        )
    entries: dict[str, Value] = {}
    for key, item in raw.items():
        try:
            entries[key] = from_json(item)
        except ValueError as exc:
            raise SaveDecodeError(
                f"Invalid value for {key!r}: {exc}", ErrorCategory.FORMAT, path
            ) from exc
    return entries


def encode(entries: Mapping[str, Value], obscured: bool = True) -> bytes:
    """Turn entries into the bytes written to disk."""
    text = serialize(entries)
    if not obscured:
        return text.encode("utf-8")
    return base64.b64encode(obscure(text.encode("utf-8")))


def decode(data: bytes, obscured: bool = True, path: Path | None = None) -> dict[str, Value]:
    """Turn file contents back into entries.

    Raises :class:`SaveDecodeError` for invalid base64, invalid UTF-8 or a
    malformed mapping. An empty file is not a valid mapping.
    """
    if obscured:
        try:
            data = obscure(base64.b64decode(data.strip(), validate=True))
        except (binascii.Error, ValueError) as exc:
            raise SaveDecodeError(f"Invalid base64: {exc}", ErrorCategory.BASE64, path) from exc
    try:
        text = data.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise SaveDecodeError(f"Invalid UTF-8: {exc}", ErrorCategory.ENCODING, path) from exc
    return deserialize(text, path)


@dataclass(frozen=True)
class DecodeResult:
    """Outcome of a decode that did not raise."""

    entries: dict[str, Value] | None = None
    error: SaveDecodeError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> dict[str, Value]:
        if self.error is not None:
            raise self.error
        assert self.entries is not None
        return self.entries


def try_decode(data: bytes, obscured: bool = True, path: Path | None = None) -> DecodeResult:
    try:
        return DecodeResult(entries=decode(data, obscured, path))
    except SaveDecodeError as exc:
        return DecodeResult(error=exc)

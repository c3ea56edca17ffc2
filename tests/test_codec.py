import base64
import sys
from datetime import datetime, timedelta, timezone
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

from savestate.errors import ErrorCategory, SaveDecodeError
from savestate.store.codec import (
    OBSCURE_KEY,
    decode,
    deserialize,
    encode,
    obscure,
    serialize,
    try_decode,
)

SAMPLES = [
    {},
    {"score": "10"},
    {"név": "Ünïcødé ✓", "emoji": "🎮", "": ""},
    {"ctrl": "line\nbreak\ttab\x00nul\x1b", "quote": '"\\'},
    {"surrogate": "\ud800"},
    {"i": 42, "neg": -7, "f": 1.5, "big": 2**70, "t": True, "no": False},
    {"when": datetime(2024, 2, 29, 23, 59, 59, 123456, tzinfo=timezone.utc)},
    {"local": datetime(2024, 6, 1, 12, 0, tzinfo=timezone(timedelta(hours=2)))},
    {"early": datetime(999, 1, 1, tzinfo=timezone.utc)},
    {"min": datetime(1, 1, 1, tzinfo=timezone.utc)},
    {"max": datetime(9999, 12, 31, 23, 59, 59, 999999, tzinfo=timezone.utc)},
]


def test_encode_decode_preserves_entries():
    for entries in SAMPLES:
        assert decode(encode(entries)) == entries
        assert decode(encode(entries, obscured=False), obscured=False) == entries


def test_obscure_is_its_own_inverse():
    data = bytes(range(256)) * 3
    assert obscure(obscure(data)) == data
    assert obscure(b"") == b""
    assert obscure(b"\x00\x40") == bytes([OBSCURE_KEY, 0])


def test_encoded_file_is_base64_of_masked_json():
    raw = encode({"score": "10"})
    text = bytes(b ^ 64 for b in base64.b64decode(raw)).decode("utf-8")
    assert '"score":"10"' in text


def test_plain_encoding_is_readable_json():
    assert encode({"score": "10"}, obscured=False) == b'{"score":"10"}'


def test_types_stay_distinct():
    decoded = decode(encode({"s": "1", "i": 1, "f": 1.0, "b": True}))
    assert type(decoded["s"]) is str
    assert type(decoded["i"]) is int
    assert type(decoded["f"]) is float
    assert type(decoded["b"]) is bool


def test_timestamp_is_tagged_and_not_confused_with_strings():
    when = datetime(2024, 1, 1, tzinfo=timezone.utc)
    text = serialize({"when": when, "plain": "2024-01-01T00:00:00.000000Z"})
    assert '"when":{"$timestamp":"2024-01-01T00:00:00.000000Z"}' in text
    decoded = deserialize(text)
    assert decoded["when"] == when
    assert decoded["plain"] == "2024-01-01T00:00:00.000000Z"


def test_invalid_base64_is_a_decode_error():
    with pytest.raises(SaveDecodeError) as info:
        decode(b"not base64!!")
    assert info.value.category is ErrorCategory.BASE64


def test_non_ascii_input_is_a_base64_error():
    with pytest.raises(SaveDecodeError) as info:
        decode("ÿÿÿÿ".encode("utf-8"))
    assert info.value.category is ErrorCategory.BASE64


def test_invalid_utf8_is_a_decode_error():
    data = base64.b64encode(obscure(b"\xff\xfe\xfd"))
    with pytest.raises(SaveDecodeError) as info:
        decode(data)
    assert info.value.category is ErrorCategory.ENCODING

    with pytest.raises(SaveDecodeError) as info:
        decode(b"\xff\xfe", obscured=False)
    assert info.value.category is ErrorCategory.ENCODING


def test_malformed_mapping_is_a_decode_error():
    bad_documents = [
        b"",
        b"{",
        b"[1, 2]",
        b'"just a string"',
        b'{"a": null}',
        b'{"a": [1]}',
        b'{"a": {"other": 1}}',
        b'{"a": {"$timestamp": "yesterday"}}',
    ]
    for doc in bad_documents:
        with pytest.raises(SaveDecodeError) as info:
            decode(base64.b64encode(obscure(doc)))
        assert info.value.category is ErrorCategory.FORMAT


def test_surrounding_whitespace_is_tolerated():
    data = encode({"a": "b"})
    assert decode(b"  " + data + b"\n") == {"a": "b"}


def test_try_decode_reports_errors_without_raising():
    good = try_decode(encode({"a": "b"}))
    assert good.ok
    assert good.unwrap() == {"a": "b"}

    bad = try_decode(b"%%%", path=Path("SaveGame.sav"))
    assert not bad.ok
    assert bad.entries is None
    assert bad.error.category is ErrorCategory.BASE64
    assert bad.error.path == Path("SaveGame.sav")
    with pytest.raises(SaveDecodeError):
        bad.unwrap()


def test_early_years_are_zero_padded():
    text = serialize({"when": datetime(999, 1, 1, tzinfo=timezone.utc)})
    assert '"0999-01-01T00:00:00.000000Z"' in text

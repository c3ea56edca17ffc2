"""Entry storage and its on-disk encoding."""

from .codec import OBSCURE_KEY, DecodeResult, decode, encode, obscure, try_decode
from .save_file import SaveFile
from .values import Value

__all__ = [
    "OBSCURE_KEY",
    "DecodeResult",
    "SaveFile",
    "Value",
    "decode",
    "encode",
    "obscure",
    "try_decode",
]

"""Key derivation, filename parsing and byte encoding."""

from __future__ import annotations

import base64
import binascii

from emojistore.domain.exceptions import InvalidInput, UpstreamFailure
from emojistore.domain.models import IndexEncoding, Size

KEY_SEPARATOR = ":"


def split_filename(filename: str) -> tuple[str, str]:
    """Split ``smile.png`` into ``("smile", "png")`` on the last dot.

    Raises InvalidInput when either part is empty.
    """
    name, dot, extension = filename.rpartition(".")
    if not dot or not name or not extension:
        raise InvalidInput("Name and extension required")
    return name, extension


def index_key(name: str, size: Size, multi_size: bool) -> str:
    if not multi_size:
        return name
    return f"{name}{KEY_SEPARATOR}{size.value}"


def strip_size_suffix(key: str, multi_size: bool) -> str:
    if not multi_size:
        return key
    name, sep, suffix = key.rpartition(KEY_SEPARATOR)
    if sep and suffix in {s.value for s in Size}:
        return name
    return key


def serve_extension(extension: str) -> str:
    """Normalize an extension for serving; storage keeps the original."""
    extension = extension.lower()
    return "jpeg" if extension == "jpg" else extension


def encode_bytes(data: bytes, encoding: IndexEncoding) -> str:
    if encoding is IndexEncoding.HEX:
        return data.hex()
    return base64.b64encode(data).decode("ascii")


def decode_bytes(data: str, encoding: IndexEncoding) -> bytes:
    try:
        if encoding is IndexEncoding.HEX:
            return bytes.fromhex(data)
        return base64.b64decode(data, validate=True)
    except (ValueError, binascii.Error) as e:
        raise UpstreamFailure(f"Stored data is not valid {encoding.value}: {e}") from e

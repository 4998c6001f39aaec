"""Small helpers shared across the package."""

from __future__ import annotations

import secrets
from enum import IntEnum
from typing import Any

from .cid import CODEC_DAG_CBOR, CODEC_DAG_JSON, CODEC_DAG_PB, CODEC_RAW, HASH_BYTE_SIZE


class IpldCodec(IntEnum):
    """IPLD codecs identified by their multicodec code."""

    RAW = CODEC_RAW
    DAG_CBOR = CODEC_DAG_CBOR
    DAG_JSON = CODEC_DAG_JSON
    DAG_PB = CODEC_DAG_PB


async def read_fully(stream: Any, size: int) -> tuple[bytes, bool]:
    """Read up to ``size`` bytes from an async stream.

    Returns the bytes read and whether the end of the stream was reached.
    """
    data = bytearray()
    while True:
        chunk = await stream.read(size - len(data))
        if not chunk:
            return bytes(data), True
        data += chunk
        if len(data) == size:
            return bytes(data), False


def get_random_bytes(length: int, rng: Any = None) -> bytes:
    """Return ``length`` random bytes, from ``rng`` if given, else from the OS."""
    if length < 0:
        raise ValueError("length must be non-negative")
    if rng is None:
        return secrets.token_bytes(length)
    return rng.randbytes(length)


def to_hash_output(data: bytes) -> bytes:
    """Pad ``data`` with zeros to a 32-byte hash output."""
    data = bytes(data)
    if len(data) > HASH_BYTE_SIZE:
        raise ValueError(f"expected at most {HASH_BYTE_SIZE} bytes, got {len(data)}")
    return data.ljust(HASH_BYTE_SIZE, b"\0")


def u64_to_ipld(value: int) -> IpldCodec:
    """Convert a multicodec code to an IPLD codec."""
    try:
        return IpldCodec(value)
    except ValueError:
        raise ValueError(f"unsupported IPLD codec: {value:#x}") from None
"""DAG-CBOR encoding and decoding of IPLD values."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

import cbor2

from .cid import Cid

if TYPE_CHECKING:
    from .blockstore import BlockStore

_CID_TAG = 42
_INT_MIN = -(2**64)
_INT_MAX = 2**64 - 1


class AsyncSerializable(ABC):
    """A value whose IPLD form may need a block store to be computed."""

    @abstractmethod
    async def async_serialize(self, store: "BlockStore") -> Any:
        """Return the IPLD representation of this value."""


def _key_order(key: str) -> tuple[int, bytes]:
    raw = key.encode("utf-8")
    return len(raw), raw


def _to_ipld(value: Any) -> Any:
    if value is None or isinstance(value, (bool, float, str, bytes, Cid)):
        return value
    if isinstance(value, int):
        if not _INT_MIN <= value <= _INT_MAX:
            raise OverflowError(f"integer out of range for DAG-CBOR: {value}")
        return value
    if isinstance(value, (bytearray, memoryview)):
        return bytes(value)
    if isinstance(value, Mapping):
        for key in value:
            if not isinstance(key, str):
                raise TypeError(f"map keys must be strings, got {type(key).__name__}")
        return {key: _to_ipld(value[key]) for key in sorted(value, key=_key_order)}
    if isinstance(value, (list, tuple)):
        return [_to_ipld(item) for item in value]
    to_ipld = getattr(value, "to_ipld", None)
    if callable(to_ipld):
        return _to_ipld(to_ipld())
    raise TypeError(f"cannot serialize {type(value).__name__} to IPLD")


def _encode_cid(encoder: cbor2.CBOREncoder, value: Any) -> None:
    if isinstance(value, Cid):
        encoder.encode(cbor2.CBORTag(_CID_TAG, b"\0" + value.to_bytes()))
        return
    raise TypeError(f"cannot encode {type(value).__name__} as DAG-CBOR")


def _decode_tag(decoder: cbor2.CBORDecoder, tag: cbor2.CBORTag) -> Any:
    if tag.tag != _CID_TAG:
        raise ValueError(f"unsupported CBOR tag in DAG-CBOR: {tag.tag}")
    raw = tag.value
    if not isinstance(raw, bytes) or not raw.startswith(b"\0"):
        raise ValueError("invalid CID encoding in DAG-CBOR")
    return Cid.from_bytes(raw[1:])


async def async_serialize_ipld(value: Any, store: "BlockStore") -> Any:
    """Return the IPLD form of ``value``, using ``store`` where needed."""
    if isinstance(value, AsyncSerializable):
        return _to_ipld(await value.async_serialize(store))
    return _to_ipld(value)


def encode(value: Any) -> bytes:
    """Encode a value as DAG-CBOR bytes."""
    return cbor2.dumps(_to_ipld(value), default=_encode_cid)


def decode(data: bytes) -> Any:
    """Decode DAG-CBOR bytes into an IPLD value."""
    return cbor2.loads(bytes(data), tag_hook=_decode_tag)


async def async_encode(value: Any, store: "BlockStore") -> bytes:
    """Encode a value, which may need the block store, as DAG-CBOR bytes."""
    return cbor2.dumps(await async_serialize_ipld(value, store), default=_encode_cid)
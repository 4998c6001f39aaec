"""Content-addressed block stores."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterator, Mapping
from typing import Any

from .cid import CODEC_DAG_CBOR, MAX_BLOCK_SIZE, Cid
from .encoding import async_encode, decode, encode
from .errors import CIDNotFound, MaximumBlockSizeExceeded


class BlockStore(ABC):
    """Stores and retrieves blocks of bytes by their CID."""

    @abstractmethod
    async def get_block(self, cid: Cid) -> bytes:
        """Return the bytes stored under ``cid``."""

    @abstractmethod
    async def put_block(self, data: bytes, codec: int) -> Cid:
        """Store ``data`` and return its CID."""

    async def get_deserializable(self, cid: Cid) -> Any:
        """Load the block under ``cid`` and decode it from DAG-CBOR."""
        return decode(await self.get_block(cid))

    async def put_serializable(self, value: Any) -> Cid:
        """Encode ``value`` as DAG-CBOR and store it."""
        return await self.put_block(encode(value), CODEC_DAG_CBOR)

    async def put_async_serializable(self, value: Any) -> Cid:
        """Encode ``value`` as DAG-CBOR, resolving through this store, and store it."""
        return await self.put_block(await async_encode(value, self), CODEC_DAG_CBOR)

    def create_cid(self, data: bytes, codec: int) -> Cid:
        """Compute the CID for ``data``, enforcing the maximum block size."""
        if len(data) > MAX_BLOCK_SIZE:
            raise MaximumBlockSizeExceeded(len(data))
        return Cid.from_data(data, codec)


class MemoryBlockStore(BlockStore):
    """An in-memory block store."""

    def __init__(self, blocks: Mapping[Cid, bytes] | None = None) -> None:
        self._blocks: dict[Cid, bytes] = dict(blocks or {})

    async def get_block(self, cid: Cid) -> bytes:
        return self[cid]

    async def put_block(self, data: bytes, codec: int) -> Cid:
        data = bytes(data)
        cid = self.create_cid(data, codec)
        self._blocks[cid] = data
        return cid

    def __getitem__(self, cid: Cid) -> bytes:
        try:
            return self._blocks[cid]
        except KeyError:
            raise CIDNotFound(cid) from None

    def __contains__(self, cid: object) -> bool:
        return cid in self._blocks

    def __iter__(self) -> Iterator[Cid]:
        return iter(self._blocks)

    def __len__(self) -> int:
        return len(self._blocks)

    def __repr__(self) -> str:
        return f"MemoryBlockStore({len(self._blocks)} blocks)"

    def to_ipld(self) -> dict[str, bytes]:
        """IPLD form of the store: a map from CID strings to block bytes."""
        return {str(cid): data for cid, data in self._blocks.items()}

    @classmethod
    def from_ipld(cls, data: Mapping[str, Any]) -> "MemoryBlockStore":
        """Rebuild a store from the form produced by :meth:`to_ipld`."""
        if not isinstance(data, Mapping):
            raise TypeError("expected a map of CID strings to bytes")
        return cls({Cid.parse(key): bytes(value) for key, value in data.items()})
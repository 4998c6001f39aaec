"""A block store that renders its blocks as DAG-JSON snapshots."""

from __future__ import annotations

import base64
import math
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import Any

from .blockstore import BlockStore, MemoryBlockStore
from .cid import CODEC_DAG_CBOR, CODEC_RAW, Cid
from .encoding import decode

BlockHandler = Callable[[bytes], Any]


def _key_order(key: str) -> bytes:
    return key.encode("utf-8")


def dag_json_value(value: Any) -> Any:
    """Convert an IPLD value into the JSON value of its DAG-JSON form."""
    if value is None or isinstance(value, (bool, str)):
        return value
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        if not math.isfinite(value):
            raise ValueError(f"DAG-JSON cannot represent {value}")
        return value
    if isinstance(value, Cid):
        return {"/": str(value)}
    if isinstance(value, (bytes, bytearray, memoryview)):
        text = base64.b64encode(bytes(value)).decode("ascii").rstrip("=")
        return {"/": {"bytes": text}}
    if isinstance(value, Mapping):
        for key in value:
            if not isinstance(key, str):
                raise TypeError(f"map keys must be strings, got {type(key).__name__}")
        return {key: dag_json_value(value[key]) for key in sorted(value, key=_key_order)}
    if isinstance(value, (list, tuple)):
        return [dag_json_value(item) for item in value]
    raise TypeError(f"cannot represent {type(value).__name__} as DAG-JSON")


@dataclass(frozen=True)
class BlockSnapshot:
    """A block's DAG-JSON value together with its raw bytes."""

    value: Any
    bytes: bytes

    def to_json(self) -> dict[str, Any]:
        """JSON form, with the bytes in padded standard base64."""
        return {"value": self.value, "bytes": base64.b64encode(self.bytes).decode("ascii")}


class SnapshotBlockStore(BlockStore):
    """An in-memory block store that can snapshot its blocks."""

    def __init__(self) -> None:
        self._inner = MemoryBlockStore()
        self._handlers: dict[Cid, BlockHandler] = {}

    async def get_block(self, cid: Cid) -> bytes:
        return await self._inner.get_block(cid)

    async def put_block(self, data: bytes, codec: int) -> Cid:
        return await self._inner.put_block(data, codec)

    async def get_block_snapshot(self, cid: Cid) -> BlockSnapshot:
        """Load the block under ``cid`` and snapshot it."""
        data = await self.get_block(cid)
        return self.handle_block(cid, data)[1]

    def handle_block(self, cid: Cid, data: bytes) -> tuple[str, BlockSnapshot]:
        """Snapshot ``data`` stored under ``cid``; return the CID string and snapshot."""
        data = bytes(data)
        if cid.codec == CODEC_DAG_CBOR:
            ipld = decode(data)
        elif cid.codec == CODEC_RAW:
            handler = self._handlers.get(cid)
            ipld = handler(data) if handler is not None else data
        else:
            raise ValueError(f"unsupported codec for snapshots: {cid.codec:#x}")
        return str(cid), BlockSnapshot(dag_json_value(ipld), data)

    def get_all_block_snapshots(self) -> dict[str, BlockSnapshot]:
        """Snapshots of every stored block, ordered by CID string."""
        snapshots = dict(self.handle_block(cid, self._inner[cid]) for cid in self._inner)
        return dict(sorted(snapshots.items()))

    def add_block_handler(self, cid: Cid, handler: BlockHandler) -> None:
        """Decode the raw block under ``cid`` with ``handler`` when snapshotting."""
        self._handlers[cid] = handler
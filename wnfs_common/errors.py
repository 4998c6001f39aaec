"""Errors raised by block stores."""

from __future__ import annotations

from typing import Any


class BlockStoreError(Exception):
    """Base class for all block store errors."""


class MaximumBlockSizeExceeded(BlockStoreError):
    """A block is larger than the maximum block size."""

    def __init__(self, size: int) -> None:
        self.size = size
        super().__init__(f"Maximum block size exceeded: Encountered block with {size} bytes")


class CIDNotFound(BlockStoreError, LookupError):
    """The requested CID is not present in the block store."""

    def __init__(self, cid: Any) -> None:
        self.cid = cid
        super().__init__(f"Cannot find specified CID in block store: {cid}")


class BlockHandlerNotFound(BlockStoreError, LookupError):
    """No handler is registered for the block with the given CID."""

    def __init__(self, cid: Any) -> None:
        self.cid = cid
        super().__init__(f"Cannot find handler for block with CID: {cid}")


class LockPoisoned(BlockStoreError):
    """A lock guarding the store was poisoned."""

    def __init__(self) -> None:
        super().__init__("Lock poisoned")
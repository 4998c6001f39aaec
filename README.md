# wnfs_common

Shared building blocks for a content-addressed, WebNative-style file system.
Everything is a library; the package installs no commands.

## Modules

- **`wnfs_common.cid`**: `Cid`, a content identifier made of a version, a
  content codec and a multihash. `Cid.from_data(data, codec)` builds a
  version 1 CID over the BLAKE3-256 digest of the data (`blake3_256` is a
  pure-Python implementation of the hash). `Cid.parse` reads the base32
  (`b…`), base58btc (`z…`) and version 0 (`Qm…`) text forms; `str(cid)` writes
  lower-case base32 for version 1. `to_bytes` / `from_bytes` handle the binary
  form. The module also defines `CODEC_RAW`, `CODEC_DAG_CBOR`, `CODEC_DAG_PB`,
  `CODEC_DAG_JSON`, `HASH_BYTE_SIZE` (32) and `MAX_BLOCK_SIZE` (2**18 bytes).
- **`wnfs_common.encoding`**: `encode` and `decode` convert between Python
  values and DAG-CBOR bytes. Map keys must be strings and are written in
  DAG-CBOR order; `Cid` values are written as CBOR tag 42. Objects with a
  `to_ipld()` method are encoded through it. `AsyncSerializable` is the base
  for values whose IPLD form needs a block store; `async_serialize_ipld` and
  `async_encode` handle them.
- **`wnfs_common.blockstore`**: the asynchronous `BlockStore` interface
  (`get_block`, `put_block`, `get_deserializable`, `put_serializable`,
  `put_async_serializable`, `create_cid`) and `MemoryBlockStore`, an
  in-memory store that also supports `in`, `len`, iteration and indexing by
  CID, and converts to and from a map of CID strings to bytes with `to_ipld`
  / `from_ipld`.
- **`wnfs_common.errors`**: `BlockStoreError` and its subclasses
  `MaximumBlockSizeExceeded` (raised for blocks over `MAX_BLOCK_SIZE`),
  `CIDNotFound` (raised for an unknown CID), `BlockHandlerNotFound` and
  `LockPoisoned`.
- **`wnfs_common.link`**: `Link`, which starts out as either a CID
  (`Link.from_cid(cid, value_type)`) or a value (`Link.from_value(value)`)
  and resolves the other side through a store, caching it. Values must
  subclass `RemembersCid`, which records the CID a value was stored under and
  requires a `from_ipld` class method.
- **`wnfs_common.metadata`**: `NodeType`, the kinds of file system node
  (`"wnfs/pub/file"`, `"wnfs/priv/dir"`, …), and `Metadata`, a map of IPLD
  values with second-precision `created` / `modified` timestamps.
- **`wnfs_common.pathnodes`**: `PathNodes`, the nodes along a path plus its
  tail, and the lookup outcomes `Complete`, `MissingLink` and
  `NotADirectory` (all subclasses of `PathNodesResult`).
- **`wnfs_common.snapshot`**: `SnapshotBlockStore`, an in-memory store that
  renders blocks as `BlockSnapshot`s holding their DAG-JSON value and raw
  bytes, useful for snapshot tests. Raw blocks can be given a custom decoder
  with `add_block_handler`. `dag_json_value` converts any IPLD value to its
  DAG-JSON form.
- **`wnfs_common.utils`**: `IpldCodec`, `u64_to_ipld`, `to_hash_output`
  (zero-pads to 32 bytes), `get_random_bytes` and `read_fully` (reads up to a
  given size from an async stream).

## Installation

```
pip install .
```

## Usage

Storing and loading a value:

```python
import asyncio
from wnfs_common.blockstore import MemoryBlockStore

async def main():
    store = MemoryBlockStore()
    cid = await store.put_serializable(b"hello world")
    print(cid)
    print(await store.get_deserializable(cid))

asyncio.run(main())
```

Links resolve lazily. Linked values remember their CID and know how to
rebuild themselves from IPLD:

```python
from dataclasses import dataclass
from wnfs_common.link import Link, RemembersCid

@dataclass
class Example(RemembersCid):
    price: int

    def to_ipld(self):
        return {"price": self.price}

    @classmethod
    def from_ipld(cls, data):
        return cls(data["price"])

async def demo(store):
    cid = await Link.from_value(Example(256)).resolve_cid(store)
    link = Link.from_cid(cid, Example)
    value = await link.resolve_value(store)
    assert value == Example(256) and link.has_value()
```

Metadata keeps second-precision timestamps:

```python
from datetime import datetime, timezone
from wnfs_common.metadata import Metadata

metadata = Metadata.new(datetime.now(timezone.utc))
metadata.put("foo", "bar")
print(metadata.get_created(), metadata.get("foo"))
```

## What this package does not do

It provides no file system itself: no directories, files or private
(encrypted) nodes, only the pieces they are built from. The only block stores
are in memory; nothing is written to disk or fetched over a network. There is
no command-line tool.

## Running the tests

```
pip install .[test]
pytest
```
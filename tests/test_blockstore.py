import pytest

from wnfs_common.blockstore import MemoryBlockStore
from wnfs_common.cid import CODEC_DAG_CBOR, CODEC_RAW, MAX_BLOCK_SIZE, Cid
from wnfs_common.encoding import AsyncSerializable, decode, encode
from wnfs_common.errors import CIDNotFound, MaximumBlockSizeExceeded


class _Holder(AsyncSerializable):
    def __init__(self, items):
        self.items = items

    async def async_serialize(self, store):
        return {"items": [await store.put_serializable(item) for item in self.items]}


@pytest.mark.asyncio
async def test_retrieval():
    store = MemoryBlockStore()
    first_bytes = [1, 2, 3, 4, 5]
    second_bytes = list(b"hello world")

    first_cid = await store.put_serializable(first_bytes)
    second_cid = await store.put_serializable(second_bytes)

    assert await store.get_deserializable(first_cid) == first_bytes
    assert await store.get_deserializable(second_cid) == second_bytes


@pytest.mark.asyncio
async def test_duplication():
    store = MemoryBlockStore()
    first_bytes = [1, 2, 3, 4, 5]
    second_bytes = list(first_bytes)

    first_cid = await store.put_serializable(first_bytes)
    second_cid = await store.put_serializable(second_bytes)
    assert first_cid == second_cid

    first_loaded = await store.get_deserializable(first_cid)
    second_loaded = await store.get_deserializable(second_cid)
    assert first_loaded == first_bytes
    assert second_loaded == second_bytes
    assert first_loaded == second_loaded
    assert len(store) == 1


@pytest.mark.asyncio
async def test_serialization():
    store = MemoryBlockStore()
    data = [1, 2, 3, 4, 5]
    cid = await store.put_serializable(data)

    serial_store = encode(store)
    restored = MemoryBlockStore.from_ipld(decode(serial_store))

    assert await restored.get_deserializable(cid) == data


@pytest.mark.asyncio
async def test_missing_cid_raises():
    store = MemoryBlockStore()
    cid = Cid.from_data(b"absent", CODEC_RAW)
    with pytest.raises(CIDNotFound) as info:
        await store.get_block(cid)
    assert info.value.cid == cid


@pytest.mark.asyncio
async def test_oversized_block_rejected():
    store = MemoryBlockStore()
    with pytest.raises(MaximumBlockSizeExceeded) as info:
        await store.put_block(b"\0" * (MAX_BLOCK_SIZE + 1), CODEC_RAW)
    assert info.value.size == MAX_BLOCK_SIZE + 1
    assert len(store) == 0


@pytest.mark.asyncio
async def test_put_block_returns_content_cid():
    store = MemoryBlockStore()
    cid = await store.put_block(b"raw data", CODEC_RAW)
    assert cid == Cid.from_data(b"raw data", CODEC_RAW)
    assert cid == store.create_cid(b"raw data", CODEC_RAW)
    assert await store.get_block(cid) == b"raw data"
    assert cid in store


@pytest.mark.asyncio
async def test_put_serializable_uses_dag_cbor():
    store = MemoryBlockStore()
    cid = await store.put_serializable({"a": 1})
    assert cid.codec == CODEC_DAG_CBOR
    assert await store.get_block(cid) == encode({"a": 1})


@pytest.mark.asyncio
async def test_put_async_serializable():
    store = MemoryBlockStore()
    cid = await store.put_async_serializable(_Holder(["x", "y"]))
    root = await store.get_deserializable(cid)
    loaded = [await store.get_deserializable(link) for link in root["items"]]
    assert loaded == ["x", "y"]
    assert len(store) == 3


def test_from_ipld_rejects_bad_cid():
    with pytest.raises(ValueError):
        MemoryBlockStore.from_ipld({"not-a-cid": b"x"})


def test_iteration_lists_stored_cids():
    cid = Cid.from_data(b"one", CODEC_RAW)
    store = MemoryBlockStore({cid: b"one"})
    assert list(store) == [cid]
    assert store[cid] == b"one"
    assert store.to_ipld() == {str(cid): b"one"}
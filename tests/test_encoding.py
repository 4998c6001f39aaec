import pytest

from wnfs_common.blockstore import MemoryBlockStore
from wnfs_common.cid import CODEC_DAG_CBOR, CODEC_RAW, Cid
from wnfs_common.encoding import (
    AsyncSerializable,
    async_encode,
    async_serialize_ipld,
    decode,
    encode,
)


class _Pointer(AsyncSerializable):
    def __init__(self, payload):
        self.payload = payload

    async def async_serialize(self, store):
        cid = await store.put_serializable(self.payload)
        return {"link": cid, "kind": "pointer"}


class _Plain:
    def __init__(self, price):
        self.price = price

    def to_ipld(self):
        return {"price": self.price}


def test_map_keys_are_sorted_length_first():
    assert encode({"bb": 1, "a": 2}) == b"\xa2\x61a\x02\x62bb\x01"


def test_key_order_independent_of_insertion():
    assert encode({"zz": 1, "a": 2, "bbb": 3}) == encode({"bbb": 3, "a": 2, "zz": 1})
    assert list(decode(encode({"zz": 1, "a": 2, "bbb": 3}))) == ["a", "zz", "bbb"]


def test_cid_is_tag_42_with_zero_prefix():
    cid = Cid.from_data(b"abc", CODEC_RAW)
    encoded = encode(cid)
    assert encoded.startswith(b"\xd8\x2a")
    assert encoded.endswith(b"\x00" + cid.to_bytes())


@pytest.mark.parametrize(
    "value",
    [
        None,
        True,
        False,
        0,
        -5,
        2**64 - 1,
        1.5,
        "text",
        b"\x00\x01bytes",
        [1, 2, 3, 4, 5],
        {"nested": {"list": [1, "two", None], "bytes": b"x"}},
    ],
)
def test_round_trip(value):
    assert decode(encode(value)) == value


def test_cid_round_trip_inside_structure():
    cid = Cid.from_data(b"inner", CODEC_DAG_CBOR)
    value = {"children": [cid, cid], "name": "dir"}
    assert decode(encode(value)) == value


def test_tuple_encodes_as_list():
    assert encode((1, "a")) == encode([1, "a"])
    assert decode(encode((1, "a"))) == [1, "a"]


def test_object_with_to_ipld():
    assert decode(encode(_Plain(256))) == {"price": 256}


def test_non_string_keys_rejected():
    with pytest.raises(TypeError):
        encode({1: "a"})


def test_unsupported_type_rejected():
    with pytest.raises(TypeError):
        encode(object())


def test_integer_out_of_range_rejected():
    with pytest.raises(OverflowError):
        encode(2**64)


def test_unknown_tag_rejected():
    import cbor2

    with pytest.raises(ValueError):
        decode(cbor2.dumps(cbor2.CBORTag(99, b"x")))


@pytest.mark.asyncio
async def test_async_serialize_ipld_plain_value():
    store = MemoryBlockStore()
    assert await async_serialize_ipld((1, "b"), store) == [1, "b"]


@pytest.mark.asyncio
async def test_async_encode_uses_store():
    store = MemoryBlockStore()
    encoded = await async_encode(_Pointer([7, 8]), store)
    decoded = decode(encoded)
    assert decoded["kind"] == "pointer"
    assert await store.get_deserializable(decoded["link"]) == [7, 8]


@pytest.mark.asyncio
async def test_async_encode_matches_encode_for_plain_values():
    store = MemoryBlockStore()
    value = {"b": [1, 2], "a": "x"}
    assert await async_encode(value, store) == encode(value)
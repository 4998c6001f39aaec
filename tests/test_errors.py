import pytest

from wnfs_common.cid import CODEC_RAW, Cid
from wnfs_common.errors import (
    BlockHandlerNotFound,
    BlockStoreError,
    CIDNotFound,
    LockPoisoned,
    MaximumBlockSizeExceeded,
)


def test_maximum_block_size_message():
    err = MaximumBlockSizeExceeded(300000)
    assert str(err) == "Maximum block size exceeded: Encountered block with 300000 bytes"
    assert err.size == 300000


def test_cid_not_found_message_and_attribute():
    cid = Cid.from_data(b"missing", CODEC_RAW)
    err = CIDNotFound(cid)
    assert str(err) == f"Cannot find specified CID in block store: {cid}"
    assert err.cid == cid


def test_block_handler_not_found_message():
    cid = Cid.from_data(b"handler", CODEC_RAW)
    err = BlockHandlerNotFound(cid)
    assert str(err) == f"Cannot find handler for block with CID: {cid}"
    assert err.cid == cid


def test_lock_poisoned_message():
    assert str(LockPoisoned()) == "Lock poisoned"


@pytest.mark.parametrize(
    "error",
    [
        MaximumBlockSizeExceeded(1),
        CIDNotFound("x"),
        BlockHandlerNotFound("x"),
        LockPoisoned(),
    ],
)
def test_all_errors_are_block_store_errors(error):
    with pytest.raises(BlockStoreError) as info:
        raise error
    assert info.value is error


def test_lookup_errors_can_be_caught_as_lookup_error():
    err = CIDNotFound("abc")
    with pytest.raises(LookupError) as info:
        raise err
    assert info.value is err
    assert info.value.cid == "abc"
    assert str(info.value) == "Cannot find specified CID in block store: abc"
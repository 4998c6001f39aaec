"""Content identifiers (CIDs) and the BLAKE3 hash they are built on."""

from __future__ import annotations

import base64
import struct
from dataclasses import dataclass

HASH_BYTE_SIZE = 32
MAX_BLOCK_SIZE = 2**18

CODEC_DAG_JSON = 0x0129
CODEC_DAG_CBOR = 0x71
CODEC_DAG_PB = 0x70
CODEC_RAW = 0x55

BLAKE3_256_CODE = 0x1E
SHA2_256_CODE = 0x12

# --------------------------------------------------------------------------
# BLAKE3
# --------------------------------------------------------------------------

_MASK = 0xFFFFFFFF
_IV = (
    0x6A09E667,
    0xBB67AE85,
    0x3C6EF372,
    0xA54FF53A,
    0x510E527F,
    0x9B05688C,
    0x1F83D9AB,
    0x5BE0CD19,
)
_PERMUTATION = (2, 6, 3, 10, 7, 0, 4, 13, 1, 11, 12, 5, 9, 14, 15, 8)
_CHUNK_START = 1 << 0
_CHUNK_END = 1 << 1
_PARENT = 1 << 2
_ROOT = 1 << 3
_BLOCK_LEN = 64
_CHUNK_LEN = 1024


def _g(s: list[int], a: int, b: int, c: int, d: int, x: int, y: int) -> None:
    s[a] = (s[a] + s[b] + x) & _MASK
    v = s[d] ^ s[a]
    s[d] = ((v >> 16) | (v << 16)) & _MASK
    s[c] = (s[c] + s[d]) & _MASK
    v = s[b] ^ s[c]
    s[b] = ((v >> 12) | (v << 20)) & _MASK
    s[a] = (s[a] + s[b] + y) & _MASK
    v = s[d] ^ s[a]
    s[d] = ((v >> 8) | (v << 24)) & _MASK
    s[c] = (s[c] + s[d]) & _MASK
    v = s[b] ^ s[c]
    s[b] = ((v >> 7) | (v << 25)) & _MASK


def _round(s: list[int], m: list[int]) -> None:
    _g(s, 0, 4, 8, 12, m[0], m[1])
    _g(s, 1, 5, 9, 13, m[2], m[3])
    _g(s, 2, 6, 10, 14, m[4], m[5])
    _g(s, 3, 7, 11, 15, m[6], m[7])
    _g(s, 0, 5, 10, 15, m[8], m[9])
    _g(s, 1, 6, 11, 12, m[10], m[11])
    _g(s, 2, 7, 8, 13, m[12], m[13])
    _g(s, 3, 4, 9, 14, m[14], m[15])


def _compress(cv, words, counter: int, block_len: int, flags: int) -> list[int]:
    state = [
        *cv,
        *_IV[:4],
        counter & _MASK,
        (counter >> 32) & _MASK,
        block_len,
        flags,
    ]
    message = list(words)
    for round_number in range(7):
        _round(state, message)
        if round_number < 6:
            message = [message[p] for p in _PERMUTATION]
    low = [a ^ b for a, b in zip(state[:8], state[8:])]
    high = [a ^ b for a, b in zip(state[8:], cv)]
    return low + high


def _words(block: bytes) -> tuple[int, ...]:
    return struct.unpack("<16I", block.ljust(_BLOCK_LEN, b"\0"))


# An output is (chaining value, block words, counter, block length, flags).
def _chunk_output(chunk: bytes, counter: int):
    blocks = [chunk[i : i + _BLOCK_LEN] for i in range(0, len(chunk), _BLOCK_LEN)] or [b""]
    cv = _IV
    flags = _CHUNK_START
    for block in blocks[:-1]:
        cv = tuple(_compress(cv, _words(block), counter, _BLOCK_LEN, flags)[:8])
        flags = 0
    last = blocks[-1]
    return cv, _words(last), counter, len(last), flags | _CHUNK_END


def _parent_output(left, right):
    return _IV, tuple(left) + tuple(right), 0, _BLOCK_LEN, _PARENT


def _chaining_value(output) -> tuple[int, ...]:
    return tuple(_compress(*output)[:8])


def blake3_256(data: bytes) -> bytes:
    """Return the 32-byte BLAKE3 digest of ``data``."""
    data = bytes(data)
    chunks = [data[i : i + _CHUNK_LEN] for i in range(0, len(data), _CHUNK_LEN)] or [b""]
    stack: list[tuple[int, ...]] = []
    for counter, chunk in enumerate(chunks[:-1]):
        cv = _chaining_value(_chunk_output(chunk, counter))
        total = counter + 1
        while total & 1 == 0:
            cv = _chaining_value(_parent_output(stack.pop(), cv))
            total >>= 1
        stack.append(cv)
    output = _chunk_output(chunks[-1], len(chunks) - 1)
    while stack:
        output = _parent_output(stack.pop(), _chaining_value(output))
    cv, words, _, block_len, flags = output
    return struct.pack("<8I", *_compress(cv, words, 0, block_len, flags | _ROOT)[:8])


# --------------------------------------------------------------------------
# Encodings
# --------------------------------------------------------------------------

_BASE58 = "123456789ABCDEFGHJKLMNPQRSTUVWXYZabcdefghijkmnopqrstuvwxyz"


def _b58encode(raw: bytes) -> str:
    number = int.from_bytes(raw, "big")
    digits = []
    while number:
        number, rem = divmod(number, 58)
        digits.append(_BASE58[rem])
    zeros = len(raw) - len(raw.lstrip(b"\0"))
    return "1" * zeros + "".join(reversed(digits))


def _b58decode(text: str) -> bytes:
    number = 0
    for ch in text:
        index = _BASE58.find(ch)
        if index < 0:
            raise ValueError(f"invalid base58 character: {ch!r}")
        number = number * 58 + index
    zeros = len(text) - len(text.lstrip("1"))
    body = number.to_bytes((number.bit_length() + 7) // 8, "big")
    return b"\0" * zeros + body


def _encode_varint(value: int) -> bytes:
    if value < 0:
        raise ValueError("varint must be non-negative")
    out = bytearray()
    while True:
        byte = value & 0x7F
        value >>= 7
        if value:
            out.append(byte | 0x80)
        else:
            out.append(byte)
            return bytes(out)


def _decode_varint(raw: bytes, offset: int) -> tuple[int, int]:
    value = 0
    shift = 0
    while True:
        if offset >= len(raw):
            raise ValueError("truncated varint")
        byte = raw[offset]
        offset += 1
        value |= (byte & 0x7F) << shift
        if not byte & 0x80:
            return value, offset
        shift += 7
        if shift > 63:
            raise ValueError("varint too long")


def _split_multihash(multihash: bytes, offset: int = 0) -> tuple[int, bytes, int]:
    code, offset = _decode_varint(multihash, offset)
    size, offset = _decode_varint(multihash, offset)
    digest = multihash[offset : offset + size]
    if len(digest) != size:
        raise ValueError("truncated multihash digest")
    return code, digest, offset + size


# --------------------------------------------------------------------------
# Cid
# --------------------------------------------------------------------------


@dataclass(frozen=True)
class Cid:
    """A content identifier: version, content codec and multihash."""

    version: int
    codec: int
    multihash: bytes

    def __post_init__(self) -> None:
        if self.version not in (0, 1):
            raise ValueError(f"unsupported CID version: {self.version}")
        code, _, end = _split_multihash(self.multihash)
        if end != len(self.multihash):
            raise ValueError("trailing bytes after multihash")
        if self.version == 0 and (self.codec != CODEC_DAG_PB or code != SHA2_256_CODE):
            raise ValueError("CIDv0 requires dag-pb and sha2-256")

    @classmethod
    def from_data(cls, data: bytes, codec: int) -> "Cid":
        """Build a CIDv1 for ``data`` hashed with BLAKE3-256."""
        digest = blake3_256(data)
        multihash = _encode_varint(BLAKE3_256_CODE) + _encode_varint(len(digest)) + digest
        return cls(1, codec, multihash)

    @property
    def hash_code(self) -> int:
        return _split_multihash(self.multihash)[0]

    @property
    def digest(self) -> bytes:
        return _split_multihash(self.multihash)[1]

    def to_bytes(self) -> bytes:
        """Binary form of the CID."""
        if self.version == 0:
            return self.multihash
        return _encode_varint(self.version) + _encode_varint(self.codec) + self.multihash

    @classmethod
    def from_bytes(cls, raw: bytes) -> "Cid":
        """Parse the binary form of a CID."""
        raw = bytes(raw)
        if len(raw) == 34 and raw[0] == SHA2_256_CODE and raw[1] == 32:
            return cls(0, CODEC_DAG_PB, raw)
        version, offset = _decode_varint(raw, 0)
        if version != 1:
            raise ValueError(f"unsupported CID version: {version}")
        codec, offset = _decode_varint(raw, offset)
        _, _, end = _split_multihash(raw, offset)
        if end != len(raw):
            raise ValueError("trailing bytes after CID")
        return cls(version, codec, raw[offset:end])

    @classmethod
    def parse(cls, text: str) -> "Cid":
        """Parse the textual form of a CID."""
        if len(text) == 46 and text.startswith("Qm"):
            return cls.from_bytes(_b58decode(text))
        if not text:
            raise ValueError("empty CID string")
        prefix, body = text[0], text[1:]
        try:
            if prefix in ("b", "B"):
                padded = body.upper() + "=" * (-len(body) % 8)
                raw = base64.b32decode(padded)
            elif prefix == "z":
                raw = _b58decode(body)
            else:
                raise ValueError(f"unsupported multibase prefix: {prefix!r}")
        except (ValueError, base64.binascii.Error) as exc:
            raise ValueError(f"invalid CID string: {text!r}") from exc
        return cls.from_bytes(raw)

    def __str__(self) -> str:
        if self.version == 0:
            return _b58encode(self.multihash)
        return "b" + base64.b32encode(self.to_bytes()).decode("ascii").lower().rstrip("=")

    def __repr__(self) -> str:
        return f"Cid({self})"
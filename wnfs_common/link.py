"""Links in the IPLD graph that hold a CID, a value, or both."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Generic, TypeVar

from .blockstore import BlockStore
from .cid import Cid


class RemembersCid(ABC):
    """A value that remembers the CID it was persisted as.

    The CID can be set only once; later attempts keep the first one.
    """

    _persisted_as: Cid | None = None

    @property
    def persisted_as(self) -> Cid | None:
        """The CID this value was stored under, if known."""
        return self._persisted_as

    def remember_cid(self, cid: Cid) -> Cid:
        """Record ``cid`` unless a CID is already recorded; return the recorded one."""
        if self._persisted_as is None:
            object.__setattr__(self, "_persisted_as", cid)
        return self._persisted_as  # type: ignore[return-value]

    @classmethod
    @abstractmethod
    def from_ipld(cls, data: Any) -> "RemembersCid":
        """Build a value from its IPLD representation."""


T = TypeVar("T", bound=RemembersCid)


class Link(Generic[T]):
    """A link to a content-addressed value.

    A link starts out either encoded (as a CID) or decoded (as a value), and
    resolves the other side through a block store on demand, caching it.
    """

    __slots__ = ("_cid", "_value", "_value_type")
    __hash__ = None  # type: ignore[assignment]

    def __init__(
        self,
        *,
        cid: Cid | None = None,
        value: T | None = None,
        value_type: type[T] | None = None,
    ) -> None:
        if (cid is None) == (value is None):
            raise ValueError("a link starts from exactly one of a CID or a value")
        self._cid = cid
        self._value = value
        self._value_type = value_type if value_type is not None else type(value)

    @classmethod
    def from_cid(cls, cid: Cid, value_type: type[T]) -> "Link[T]":
        """Create a link that starts out as a CID of a ``value_type`` value."""
        return cls(cid=cid, value_type=value_type)

    @classmethod
    def from_value(cls, value: T) -> "Link[T]":
        """Create a link that starts out as a value."""
        if not isinstance(value, RemembersCid):
            raise TypeError(f"link values must remember their CID, got {type(value).__name__}")
        return cls(value=value)

    @property
    def is_encoded(self) -> bool:
        """Whether the link started out as a CID and has not been made mutable."""
        return self._cid is not None

    async def resolve_cid(self, store: BlockStore) -> Cid:
        """Return the CID, storing the value in ``store`` if it has none yet."""
        if self._cid is not None:
            return self._cid
        value = self._value
        assert value is not None
        if value.persisted_as is not None:
            return value.persisted_as
        cid = await store.put_async_serializable(value)
        return value.remember_cid(cid)

    async def _load(self, store: BlockStore) -> T:
        assert self._cid is not None
        data = await store.get_deserializable(self._cid)
        value = self._value_type.from_ipld(data)
        value.remember_cid(self._cid)
        return value  # type: ignore[return-value]

    async def resolve_value(self, store: BlockStore) -> T:
        """Return the value, loading it from ``store`` and caching it if needed."""
        if self._value is None:
            self._value = await self._load(store)
        return self._value

    async def resolve_value_mut(self, store: BlockStore) -> T:
        """Return the value for modification.

        The link turns into a decoded link, so its CID is recomputed from the
        value the next time it is resolved after the value has changed.
        """
        value = await self.resolve_value(store)
        self._cid = None
        return value

    def get_cid(self) -> Cid | None:
        """The CID if it is known, without touching any store."""
        if self._cid is not None:
            return self._cid
        assert self._value is not None
        return self._value.persisted_as

    def get_value(self) -> T | None:
        """The value if it is loaded, without touching any store."""
        return self._value

    def has_cid(self) -> bool:
        """Whether a CID is known for this link."""
        return self.get_cid() is not None

    def has_value(self) -> bool:
        """Whether the value is loaded."""
        return self._value is not None

    async def deep_eq(self, other: "Link[T]", store: BlockStore) -> bool:
        """Compare two links, resolving their CIDs through ``store`` if needed."""
        if self == other:
            return True
        return await self.resolve_cid(store) == await other.resolve_cid(store)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Link):
            return NotImplemented
        if self._cid is not None and other._cid is not None:
            return self._cid == other._cid
        if self._cid is None and other._cid is None:
            return self._value == other._value
        cid = other.get_cid() if self._cid is not None else self.get_cid()
        if cid is not None:
            return cid == (self._cid if self._cid is not None else other._cid)
        mine, theirs = self.get_value(), other.get_value()
        if mine is None or theirs is None:
            return False
        return mine == theirs

    def __repr__(self) -> str:
        if self._cid is not None:
            return f"Link.Encoded({self._cid})"
        return f"Link.Decoded({self._value!r})"
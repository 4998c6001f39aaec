"""File system node types and node metadata."""

from __future__ import annotations

import math
from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any

_CREATED = "created"
_MODIFIED = "modified"


class NodeType(str, Enum):
    """The type of a file system node."""

    PUBLIC_FILE = "wnfs/pub/file"
    PUBLIC_DIRECTORY = "wnfs/pub/dir"
    PRIVATE_FILE = "wnfs/priv/file"
    PRIVATE_DIRECTORY = "wnfs/priv/dir"
    TEMPORAL_SHARE_POINTER = "wnfs/share/temporal"
    SNAPSHOT_SHARE_POINTER = "wnfs/share/snapshot"

    def __str__(self) -> str:
        return self.value

    @classmethod
    def parse(cls, name: str) -> "NodeType":
        """Parse a node type name, ignoring case."""
        try:
            return cls(name.lower())
        except ValueError:
            raise ValueError(f"Unknown UnixFsNodeKind: {name}") from None

    @classmethod
    def from_ipld(cls, value: Any) -> "NodeType":
        """Build a node type from its IPLD string form."""
        if not isinstance(value, str):
            raise TypeError(f"Expected an IPLD string, got {value!r}")
        return cls.parse(value)

    def to_ipld(self) -> str:
        """IPLD form of the node type."""
        return self.value


def _timestamp(time: datetime) -> int:
    if time.tzinfo is None:
        time = time.replace(tzinfo=timezone.utc)
    return math.floor(time.timestamp())


@dataclass
class Metadata:
    """The metadata of a node in the file system: a map of IPLD values."""

    entries: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def new(cls, time: datetime) -> "Metadata":
        """Create metadata whose created and modified times are ``time``."""
        stamp = _timestamp(time)
        return cls({_CREATED: stamp, _MODIFIED: stamp})

    def upsert_mtime(self, time: datetime) -> None:
        """Set the modified time."""
        self.entries[_MODIFIED] = _timestamp(time)

    def _time_at(self, key: str) -> datetime | None:
        value = self.entries.get(key)
        if not isinstance(value, int) or isinstance(value, bool):
            return None
        try:
            return datetime.fromtimestamp(value, tz=timezone.utc)
        except (OverflowError, OSError, ValueError):
            return None

    def get_created(self) -> datetime | None:
        """The created time, or None if absent or not an integer timestamp."""
        return self._time_at(_CREATED)

    def get_modified(self) -> datetime | None:
        """The modified time, or None if absent or not an integer timestamp."""
        return self._time_at(_MODIFIED)

    def put(self, key: str, value: Any) -> Any:
        """Set ``key`` to ``value``; return the previous value or None."""
        previous = self.entries.get(key)
        self.entries[key] = value
        return previous

    def get(self, key: str) -> Any:
        """The value under ``key``, or None."""
        return self.entries.get(key)

    def delete(self, key: str) -> Any:
        """Remove ``key``; return its value, or None if it was absent."""
        return self.entries.pop(key, None)

    def update(self, other: "Metadata") -> None:
        """Copy every entry of ``other`` into this metadata, overwriting."""
        self.entries.update(other.entries)

    def __contains__(self, key: object) -> bool:
        return key in self.entries

    def __iter__(self) -> Iterator[str]:
        return iter(self.entries)

    def __len__(self) -> int:
        return len(self.entries)

    def to_ipld(self) -> dict[str, Any]:
        """IPLD form of the metadata."""
        return dict(self.entries)

    @classmethod
    def from_ipld(cls, data: Any) -> "Metadata":
        """Build metadata from its IPLD map form."""
        if not isinstance(data, Mapping):
            raise TypeError(f"expected a map for metadata, got {type(data).__name__}")
        for key in data:
            if not isinstance(key, str):
                raise TypeError(f"metadata keys must be strings, got {type(key).__name__}")
        return cls(dict(data))
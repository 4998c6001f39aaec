"""The directory nodes along a path."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Generic, TypeVar

T = TypeVar("T")


@dataclass
class PathNodes(Generic[T]):
    """The nodes along a path, each with the name of the next step, plus the tail."""

    path: list[tuple[T, str]] = field(default_factory=list)
    tail: T | None = None

    def __len__(self) -> int:
        return len(self.path)

    def is_empty(self) -> bool:
        """Whether the path holds no nodes before the tail."""
        return not self.path


@dataclass(frozen=True)
class PathNodesResult(Generic[T]):
    """The outcome of looking up the nodes along a path."""

    nodes: PathNodes[T]


@dataclass(frozen=True)
class Complete(PathNodesResult[T]):
    """The complete path exists."""


@dataclass(frozen=True)
class MissingLink(PathNodesResult[T]):
    """The path does not exist from ``name`` on."""

    name: str


@dataclass(frozen=True)
class NotADirectory(PathNodesResult[T]):
    """The node at ``name`` is not a directory."""

    name: str
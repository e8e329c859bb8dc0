"""
Node identity for rendezvous hashing.

A node is any value that can produce a canonical byte representation.
Two nodes are the same node iff those bytes are equal, and ties between
equal scores are broken by comparing those bytes lexicographically.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Protocol, TypeVar, runtime_checkable

from rendezvous_hash.errors import NodeEncodingError

N = TypeVar("N")

NodeEncoder = Callable[[N], bytes]

BytesLike = bytes | bytearray | memoryview


@runtime_checkable
class Hashable(Protocol):
    """Capability required of node types used without an explicit encoder."""

    def to_bytes(self) -> bytes: ...


@dataclass(frozen=True, slots=True, order=False)
class NodeId:
    """
    A string node identifier such as ``"gate-1:9000"``.

    Orders by its UTF-8 bytes, matching the tie-break order used when
    ranking nodes.
    """

    value: str

    def to_bytes(self) -> bytes:
        return self.value.encode("utf-8")

    def __lt__(self, other: NodeId) -> bool:
        if not isinstance(other, NodeId):
            return NotImplemented
        return self.to_bytes() < other.to_bytes()

    def __str__(self) -> str:
        return self.value


def encode_hashable(node: Hashable) -> bytes:
    # int.to_bytes() is a fixed-width integer codec, not a node identity.
    if isinstance(node, int) or not isinstance(node, Hashable):
        raise NodeEncodingError(
            f"{type(node).__name__} does not implement to_bytes() and no encoder was given"
        )

    return node.to_bytes()


def encode_str(node: str) -> bytes:
    return node.encode("utf-8")


def encode_bytes(node: BytesLike) -> bytes:
    return bytes(node)

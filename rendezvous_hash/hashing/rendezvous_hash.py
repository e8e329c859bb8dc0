"""
Rendezvous Hash (Highest Random Weight) selector.

Every (key, node) pair is scored with CRC-32C over the key bytes followed
by the node bytes, and the node(s) with the highest score win. Adding or
removing a node only moves the keys that node wins or loses, every other
key keeps its node.
"""

from __future__ import annotations

from typing import Generic, Iterable, Literal

from rendezvous_hash.env import Env
from rendezvous_hash.errors import InvalidKeyError, NodeEncodingError
from rendezvous_hash.logging import LoggerStream, MembershipDebug, SelectionTrace
from rendezvous_hash.logging.models import LogLevel

from .crc32c_hasher import Crc32cHasher
from .hashable import N, NodeEncoder, encode_hashable

# Changing the concatenation order changes every key to node assignment.
SCORE_CONCATENATION_ORDER: Literal["key-node"] = "key-node"

Key = str | bytes | bytearray | memoryview


class _NodeScore(Generic[N]):
    __slots__ = ("node", "node_bytes", "score")

    def __init__(self, node: N, node_bytes: bytes) -> None:
        self.node = node
        self.node_bytes = node_bytes
        self.score = 0


class RendezvousHash(Generic[N]):
    """
    Rendezvous Hash (Highest Random Weight) selector over nodes of type N.

    Nodes must implement the Hashable protocol (``to_bytes()``) unless an
    explicit ``encoder`` is supplied. A node's bytes are read once, when it
    is added, and are assumed to be stable for as long as it is a member.

    Concurrency:
    - ``get`` does not mutate the selector and may be shared by readers
      while nothing mutates it.
    - ``get_n`` re-scores and sorts the internal buffer in place, and
      ``add``/``remove``/``clear`` change membership. None of these are
      safe to call concurrently with any other call. Serialize them
      externally, use LockedRendezvousHash, or hand readers a
      ``snapshot()``.

    Usage:
        hasher = RendezvousHash(NodeId("gate-1:9000"), NodeId("gate-2:9000"))

        node, found = hasher.get("job-1234")
        ranked = hasher.get_n(2, "job-1234")
    """

    __slots__ = (
        "_nodes",
        "_hasher",
        "_encoder",
        "_key_encoding",
        "_logger",
    )

    def __init__(
        self,
        *nodes: N,
        encoder: NodeEncoder[N] | None = None,
        env: Env | None = None,
    ) -> None:
        if env is None:
            env = Env()

        self._nodes: list[_NodeScore[N]] = []
        self._hasher = Crc32cHasher()
        self._encoder: NodeEncoder[N] = encoder or encode_hashable
        self._key_encoding = env.RENDEZVOUS_HASH_KEY_ENCODING
        self._logger = LoggerStream(name="rendezvous_hash")

        self.add(*nodes)

    def add(self, *nodes: N) -> None:
        """
        Append nodes to the membership set.

        No uniqueness check is made, adding the same node twice keeps
        two entries until it is removed.
        """
        for node in nodes:
            self._nodes.append(_NodeScore(node, self._node_bytes(node)))

        if nodes and self._logger.enabled(LogLevel.DEBUG):
            self._logger.log(
                MembershipDebug(
                    message=f"Added {len(nodes)} node(s)",
                    operation="add",
                    node_count=len(self._nodes),
                    changed=len(nodes),
                )
            )

    def remove(self, node: N) -> None:
        """
        Remove every member whose bytes equal the bytes of ``node``.

        Removing a node that is not a member does nothing.
        """
        node_bytes = self._node_bytes(node)

        before = len(self._nodes)
        self._nodes = [
            node_score
            for node_score in self._nodes
            if node_score.node_bytes != node_bytes
        ]
        removed = before - len(self._nodes)

        if removed and self._logger.enabled(LogLevel.DEBUG):
            self._logger.log(
                MembershipDebug(
                    message=f"Removed {removed} node(s)",
                    operation="remove",
                    node_count=len(self._nodes),
                    changed=removed,
                )
            )

    def get(self, key: Key) -> tuple[N | None, bool]:
        """
        Select the node with the highest score for a key.

        Equal scores are won by the node with the lexicographically
        smallest bytes, so the result does not depend on insertion order.

        Args:
            key: The key to hash (e.g., job_id, cache key)

        Returns:
            (node, True), or (None, False) if there are no nodes
        """
        if not self._nodes:
            return None, False

        key_bytes = self._key_bytes(key)

        # Local accumulator, get() leaves no shared state behind.
        hasher = Crc32cHasher()
        hasher.write(key_bytes)
        key_checkpoint = hasher.checkpoint()

        best = self._nodes[0]
        best_score = self._score(hasher, key_checkpoint, best.node_bytes)

        for node_score in self._nodes[1:]:
            score = self._score(hasher, key_checkpoint, node_score.node_bytes)

            if score > best_score or (
                score == best_score and node_score.node_bytes < best.node_bytes
            ):
                best = node_score
                best_score = score

        if self._logger.enabled(LogLevel.TRACE):
            self._logger.log(
                SelectionTrace(
                    message="Selected node",
                    operation="get",
                    key_size=len(key_bytes),
                    node_count=len(self._nodes),
                    selected=1,
                )
            )

        return best.node, True

    def get_n(self, n: int, key: Key) -> list[N]:
        """
        Select up to n nodes for a key, ordered by descending score.

        Equal scores are ordered by ascending node bytes. Re-scores every
        member and sorts the internal buffer in place.

        Args:
            n: Number of nodes to return. n <= 0 returns an empty list.
            key: The key to hash

        Returns:
            List of at most min(n, node_count) nodes, best first
        """
        if n <= 0 or not self._nodes:
            return []

        key_bytes = self._key_bytes(key)

        self._hasher.reset()
        self._hasher.write(key_bytes)
        key_checkpoint = self._hasher.checkpoint()

        for node_score in self._nodes:
            node_score.score = self._score(
                self._hasher,
                key_checkpoint,
                node_score.node_bytes,
            )

        self._nodes.sort(
            key=lambda node_score: (-node_score.score, node_score.node_bytes)
        )

        selected = [node_score.node for node_score in self._nodes[:n]]

        if self._logger.enabled(LogLevel.TRACE):
            self._logger.log(
                SelectionTrace(
                    message="Ranked nodes",
                    operation="get_n",
                    key_size=len(key_bytes),
                    node_count=len(self._nodes),
                    selected=len(selected),
                )
            )

        return selected

    def score(self, node: N, key: Key) -> int:
        """Return the 32-bit score of a node for a key."""
        return self._hash(self._node_bytes(node), self._key_bytes(key))

    def contains(self, node: N) -> bool:
        node_bytes = self._node_bytes(node)
        return any(
            node_score.node_bytes == node_bytes for node_score in self._nodes
        )

    def clear(self) -> int:
        """
        Remove all nodes.

        Returns:
            Number of nodes removed
        """
        count = len(self._nodes)
        self._nodes.clear()

        if count and self._logger.enabled(LogLevel.DEBUG):
            self._logger.log(
                MembershipDebug(
                    message="Cleared nodes",
                    operation="clear",
                    node_count=0,
                    changed=count,
                )
            )

        return count

    def snapshot(self) -> RendezvousHash[N]:
        """
        Return an independent copy of this selector.

        The copy shares no buffer or hasher with the original, so a reader
        can call ``get_n`` on it while the original keeps changing.
        """
        copy = type(self).__new__(type(self))
        copy._nodes = [
            _NodeScore(node_score.node, node_score.node_bytes)
            for node_score in self._nodes
        ]
        copy._hasher = Crc32cHasher()
        copy._encoder = self._encoder
        copy._key_encoding = self._key_encoding
        copy._logger = self._logger
        return copy

    def key_distribution(self, keys: Iterable[Key]) -> dict[N, int]:
        """Count how many of the given keys each node wins."""
        distribution: dict[N, int] = {
            node_score.node: 0 for node_score in self._nodes
        }

        for key in keys:
            node, found = self.get(key)
            if found:
                distribution[node] += 1

        return distribution

    @property
    def node_count(self) -> int:
        return len(self._nodes)

    @property
    def nodes(self) -> list[N]:
        """Return the members in their current buffer order."""
        return [node_score.node for node_score in self._nodes]

    def __len__(self) -> int:
        return len(self._nodes)

    def __contains__(self, node: N) -> bool:
        return self.contains(node)

    def _hash(self, node_bytes: bytes, key_bytes: bytes) -> int:
        self._hasher.reset()
        self._hasher.write(key_bytes)
        self._hasher.write(node_bytes)
        return self._hasher.sum32()

    @staticmethod
    def _score(hasher: Crc32cHasher, key_checkpoint: int, node_bytes: bytes) -> int:
        hasher.reset(key_checkpoint)
        hasher.write(node_bytes)
        return hasher.sum32()

    def _node_bytes(self, node: N) -> bytes:
        node_bytes = self._encoder(node)
        if not isinstance(node_bytes, (bytes, bytearray, memoryview)):
            raise NodeEncodingError(
                f"Node encoder returned {type(node_bytes).__name__}, expected bytes"
            )

        return bytes(node_bytes)

    def _key_bytes(self, key: Key) -> bytes:
        if isinstance(key, str):
            return key.encode(self._key_encoding)

        if isinstance(key, (bytes, bytearray, memoryview)):
            return bytes(key)

        raise InvalidKeyError(
            f"Key must be str or bytes-like, got {type(key).__name__}"
        )

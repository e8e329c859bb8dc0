"""
Asyncio-locked rendezvous hash for selectors shared between tasks.
"""

from __future__ import annotations

import asyncio
from typing import Generic, Iterable

from rendezvous_hash.env import Env

from .hashable import N, NodeEncoder
from .rendezvous_hash import Key, RendezvousHash


class LockedRendezvousHash(Generic[N]):
    """
    RendezvousHash guarded by an asyncio.Lock.

    Every call takes the lock, so get_n reordering the shared buffer can
    never interleave with add/remove from another task. The lock is not
    re-entrant and only serializes tasks on one event loop, it gives no
    protection across threads.

    key_distribution takes a snapshot under the lock, releases it, and
    scores the sample keys against the snapshot, so a long sample does
    not block membership changes. Changes made after the snapshot are
    not reflected in the returned counts.

    Usage:
        hasher = LockedRendezvousHash(NodeId("gate-1:9000"), NodeId("gate-2:9000"))

        node, found = await hasher.get("job-1234")
        await hasher.remove(NodeId("gate-1:9000"))
    """

    __slots__ = (
        "_hash",
        "_lock",
    )

    def __init__(
        self,
        *nodes: N,
        encoder: NodeEncoder[N] | None = None,
        env: Env | None = None,
    ) -> None:
        self._hash: RendezvousHash[N] = RendezvousHash(
            *nodes,
            encoder=encoder,
            env=env,
        )
        self._lock = asyncio.Lock()

    async def add(self, *nodes: N) -> None:
        async with self._lock:
            self._hash.add(*nodes)

    async def remove(self, node: N) -> None:
        async with self._lock:
            self._hash.remove(node)

    async def get(self, key: Key) -> tuple[N | None, bool]:
        async with self._lock:
            return self._hash.get(key)

    async def get_n(self, n: int, key: Key) -> list[N]:
        async with self._lock:
            return self._hash.get_n(n, key)

    async def contains(self, node: N) -> bool:
        async with self._lock:
            return self._hash.contains(node)

    async def node_count(self) -> int:
        async with self._lock:
            return self._hash.node_count

    async def get_all_nodes(self) -> list[N]:
        async with self._lock:
            return self._hash.nodes

    async def clear(self) -> int:
        async with self._lock:
            return self._hash.clear()

    async def snapshot(self) -> RendezvousHash[N]:
        async with self._lock:
            return self._hash.snapshot()

    async def key_distribution(self, sample_keys: Iterable[Key]) -> dict[N, int]:
        async with self._lock:
            snapshot = self._hash.snapshot()

        return snapshot.key_distribution(sample_keys)

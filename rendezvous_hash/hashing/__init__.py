"""Rendezvous (highest random weight) node selection."""

from rendezvous_hash.hashing.crc32c_hasher import Crc32cHasher as Crc32cHasher
from rendezvous_hash.hashing.hashable import (
    Hashable as Hashable,
    NodeEncoder as NodeEncoder,
    NodeId as NodeId,
    encode_bytes as encode_bytes,
    encode_hashable as encode_hashable,
    encode_str as encode_str,
)
from rendezvous_hash.hashing.locked_rendezvous_hash import (
    LockedRendezvousHash as LockedRendezvousHash,
)
from rendezvous_hash.hashing.rendezvous_hash import (
    SCORE_CONCATENATION_ORDER as SCORE_CONCATENATION_ORDER,
    RendezvousHash as RendezvousHash,
)

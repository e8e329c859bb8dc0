"""
Rendezvous Hash - deterministic key to node selection.

Usage:
    from rendezvous_hash import NodeId, RendezvousHash

    hasher = RendezvousHash(
        NodeId("cache-1:11211"),
        NodeId("cache-2:11211"),
        NodeId("cache-3:11211"),
    )

    node, found = hasher.get("user:123:profile")
    replicas = hasher.get_n(2, "user:123:profile")

    hasher.remove(NodeId("cache-2:11211"))
"""

from .env import Env, load_env
from .errors import InvalidKeyError, NodeEncodingError, RendezvousHashError
from .hashing import (
    SCORE_CONCATENATION_ORDER,
    Crc32cHasher,
    Hashable,
    LockedRendezvousHash,
    NodeEncoder,
    NodeId,
    RendezvousHash,
    encode_bytes,
    encode_hashable,
    encode_str,
)
from .logging import LoggingConfig, configure_logging

__version__ = "0.1.0"

__all__ = [
    # Selector
    "RendezvousHash",
    "LockedRendezvousHash",
    "SCORE_CONCATENATION_ORDER",
    "Crc32cHasher",
    # Nodes
    "Hashable",
    "NodeId",
    "NodeEncoder",
    "encode_bytes",
    "encode_hashable",
    "encode_str",
    # Errors
    "RendezvousHashError",
    "InvalidKeyError",
    "NodeEncodingError",
    # Configuration
    "Env",
    "load_env",
    "LoggingConfig",
    "configure_logging",
]

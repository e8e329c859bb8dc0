"""
Exceptions for the rendezvous hash selector.

Normal edge cases (empty membership, n <= 0, removing an absent node)
never raise. These are raised only for caller programming errors.
"""


class RendezvousHashError(Exception):
    """Base class for rendezvous hash errors."""
    pass


class InvalidKeyError(RendezvousHashError, TypeError):
    """
    Raised when a lookup key is neither a string nor bytes-like.

    Keys are hashed as raw bytes, so anything that cannot be turned into
    bytes without guessing at a serialization format is rejected.
    """
    pass


class NodeEncodingError(RendezvousHashError, TypeError):
    """
    Raised when a node cannot be turned into its canonical bytes.

    Either the node does not implement the Hashable protocol and no
    encoder was supplied, or the encoder returned something other than
    bytes.
    """
    pass

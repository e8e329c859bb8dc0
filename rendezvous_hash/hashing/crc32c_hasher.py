import crc32c


class Crc32cHasher:
    """
    Reusable CRC-32C (Castagnoli) accumulator.

    Produces the same values as Go's crc32.New(crc32.MakeTable(crc32.Castagnoli)).
    The running checksum must be reset before each independent score.
    Resetting to a checkpoint continues from previously written data, so a
    shared key prefix is only hashed once per lookup.
    """

    __slots__ = ("_checksum",)

    def __init__(self) -> None:
        self._checksum = 0

    def reset(self, checkpoint: int = 0) -> None:
        self._checksum = checkpoint

    def write(self, data: bytes) -> None:
        self._checksum = crc32c.crc32c(data, self._checksum)

    def checkpoint(self) -> int:
        return self._checksum

    def sum32(self) -> int:
        return self._checksum & 0xFFFFFFFF

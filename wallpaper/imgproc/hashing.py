"""Tee reader that hashes bytes as the decoder consumes them."""

from __future__ import annotations

import hashlib
import io
from typing import BinaryIO

DEFAULT_ALGORITHM = "md5"
_DRAIN_CHUNK = 64 * 1024


class HashingReader:
    """Read-only, forward-only view over ``source`` that feeds a digest.

    Every byte handed out by :meth:`read` is added to the hash in order, so the
    digest always matches exactly what the consumer saw. The reader refuses to
    seek, which keeps hasher and consumer on one shared cursor.
    """

    def __init__(self, source: BinaryIO, algorithm: str = DEFAULT_ALGORITHM) -> None:
        self._source = source
        self._hash = hashlib.new(algorithm)
        self._consumed = 0

    @property
    def consumed(self) -> int:
        """Number of bytes read from the source so far."""

        return self._consumed

    def read(self, size: int = -1) -> bytes:
        chunk = self._source.read(size)
        if chunk:
            self._hash.update(chunk)
            self._consumed += len(chunk)
        return chunk

    def drain(self) -> int:
        """Consume the rest of the source and return the number of bytes read."""

        total = 0
        while chunk := self.read(_DRAIN_CHUNK):
            total += len(chunk)
        return total

    def readable(self) -> bool:
        return True

    def seekable(self) -> bool:
        return False

    def seek(self, offset: int, whence: int = io.SEEK_SET) -> int:
        raise io.UnsupportedOperation("HashingReader is not seekable")

    def tell(self) -> int:
        raise io.UnsupportedOperation("HashingReader is not seekable")

    def digest(self) -> bytes:
        return self._hash.digest()

    def hexdigest(self) -> str:
        return self._hash.hexdigest()

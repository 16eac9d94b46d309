import logging
from typing import Union

from .errors import INCOMPLETE

logger = logging.getLogger(__name__)

CRLF = b"\r\n"
# Dead bytes tolerated in front of the cursor before shifting them out
DISCARD_THRESHOLD = 1024

"""
Byte cursor buffer
Accumulates fed chunks, hands out lines and fixed size slices from a
read cursor. Never interprets the bytes it holds
"""
class Buffer:
    def __init__(self) -> None:
        self._buf = bytearray()
        # total bytes available
        self._length = 0
        # next unconsumed byte
        self._pos = 0

    def append(self, data: bytes):
        before = len(self._buf)
        self._buf += data
        # bytes stored, whatever len(data) counts
        self._length += len(self._buf) - before

    def __iadd__(self, data: bytes):
        self.append(data)
        return self

    def __len__(self):
        return self._length

    def __repr__(self):
        return f"Buffer(length={self._length}, pos={self._pos})"

    def is_empty(self) -> bool:
        return self._length == 0

    def unread(self) -> int:
        return self._length - self._pos

    @property
    def pos(self) -> int:
        return self._pos

    @property
    def capacity(self) -> int:
        return len(self._buf)

    # Consume n bytes plus `skip` trailing bytes, all or nothing
    def read_exact(self, n: int, skip: int = 0) -> Union[bytes, object]:
        start = self._pos
        stop = start + n + skip
        if self._length < stop:
            return INCOMPLETE

        self._pos = stop
        return bytes(self._buf[start : start + n])

    def read_line(self) -> Union[bytes, object]:
        start = self._pos
        end_idx = self._buf.find(CRLF, start, self._length)
        if end_idx < 0:
            return INCOMPLETE

        # include CRLF
        self._pos = end_idx + 2
        return bytes(self._buf[start:end_idx])

    def clear(self):
        self._buf = bytearray()
        self._length = self._pos = 0

    def discard(self, threshold: int = DISCARD_THRESHOLD):
        # Fully drained, drop the storage
        if self._pos >= self._length:
            self.clear()
            return

        if self._pos >= threshold:
            logger.debug("compacting %d consumed bytes, %d left", self._pos, self.unread())
            del self._buf[: self._pos]
            self._length -= self._pos
            self._pos = 0

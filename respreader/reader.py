import codecs
import logging
from typing import Optional

from .buffer import DISCARD_THRESHOLD, Buffer
from .errors import INCOMPLETE, ProtocolError
from .parser import MAX_DEPTH, Task

logger = logging.getLogger(__name__)

"""
Incremental RESP reply reader

    reader = Reader()
    reader.feed(b"*2\\r\\n$3\\r\\nfoo\\r\\n")
    reader.gets()       # False, still waiting on the second element
    reader.feed(b":1\\r\\n")
    reader.gets()       # [b"foo", 1]

One reader per connection. Not thread safe.
"""
class Reader:
    def __init__(
        self,
        max_depth: int = MAX_DEPTH,
        discard_threshold: int = DISCARD_THRESHOLD,
        encoding: Optional[str] = None,
        errors: str = "strict",
        not_enough_data=False,
    ) -> None:
        if max_depth < 1:
            raise ValueError(f"max_depth must be at least 1, got {max_depth}")
        if discard_threshold < 0:
            raise ValueError(f"discard_threshold must not be negative, got {discard_threshold}")
        if encoding:
            # Unknown codec names fail here, not mid-stream
            codecs.lookup(encoding)

        self.discard_threshold = discard_threshold
        self.not_enough_data = not_enough_data
        self._buffer = Buffer()
        self._task = Task(self._buffer, max_depth=max_depth, encoding=encoding, errors=errors)
        # Set once the stream turned out malformed
        self._error: Optional[ProtocolError] = None

    def feed(self, data):
        if isinstance(data, str):
            data = data.encode("utf-8")
        elif isinstance(data, memoryview):
            # len() of a typed view counts items, not bytes
            data = data.tobytes()
        elif not isinstance(data, (bytes, bytearray)):
            raise TypeError(f"feed() expects bytes, got {type(data).__name__}")
        self._buffer.append(data)

    def _next(self):
        if self._error is not None:
            raise self._error

        try:
            reply = self._task.process()
        except ProtocolError as e:
            logger.error("%s, reader needs a reset", e)
            self._error = e
            raise

        if reply is INCOMPLETE:
            return INCOMPLETE

        # Only whole top-level replies release buffer space
        self._buffer.discard(self.discard_threshold)
        logger.debug("reply %r, %d bytes left unread", reply, self._buffer.unread())
        return reply

    def gets(self):
        reply = self._next()
        if reply is INCOMPLETE:
            return self.not_enough_data
        return reply

    get_reply = gets

    def has_data(self) -> bool:
        return self._buffer.unread() > 0

    def reset(self):
        self._buffer.clear()
        self._task.reset_chain()
        self._error = None

    # Every reply already complete, stops at the first incomplete one
    def __iter__(self):
        while True:
            reply = self._next()
            if reply is INCOMPLETE:
                return
            yield reply

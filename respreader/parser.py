import re
from typing import Optional

from .buffer import Buffer
from .errors import INCOMPLETE, ArrayReply, ProtocolError, ReplyError

# Decoder slots in the chain, one per nesting level
MAX_DEPTH = 3

# Lengths, counts and integers: optional minus, decimal digits only
INTEGER_RE = re.compile(rb"-?[0-9]+")

"""
Decodes one reply value at one nesting level.

A Task keeps the line and type tag it has already read, so a reply cut
short by the end of the buffer is resumed on the next process() call
instead of being re-read. Tasks form a fixed chain (root -> child ->
grandchild) built once and reused for every reply; an array hands each
of its elements to the child one level down.
"""
class Task:
    def __init__(
        self,
        buffer: Buffer,
        parent: Optional["Task"] = None,
        depth: int = 0,
        max_depth: int = MAX_DEPTH,
        encoding: Optional[str] = None,
        errors: str = "strict",
    ) -> None:
        self.buffer = buffer
        self.parent = parent
        self.depth = depth
        self.encoding = encoding
        self.errors = errors

        self.child = None
        if depth < max_depth - 1:
            self.child = Task(buffer, self, depth + 1, max_depth, encoding, errors)

        self.reset()

    def reset(self):
        self._line = None
        self._type = None
        # parsed bulk length / array count
        self._expected = None
        self.multi_bulk = None

    def reset_chain(self):
        task = self
        while task is not None:
            task.reset()
            task = task.child

    def root(self) -> "Task":
        task = self
        while task.parent is not None:
            task = task.parent
        return task

    # Root error is the reply itself, nested errors are also recorded on
    # the root's multi bulk
    def set_error_object(self, err: ReplyError) -> ReplyError:
        if self.parent is not None:
            self.root().multi_bulk.set_error(err)
        return err

    def _decode(self, data: bytes) -> str:
        encoding = self.encoding or "utf-8"
        errors = self.errors if self.encoding else "replace"
        try:
            return data.decode(encoding, errors)
        except UnicodeDecodeError as e:
            # Bytes are already consumed, the reply can not be retried
            raise ProtocolError(f"Protocol error, can not decode {data!r} as {encoding}") from e

    def _parse_int(self, what: str) -> int:
        if INTEGER_RE.fullmatch(self._line) is None:
            raise ProtocolError(f"Protocol error, bad {what} {self._line!r}")
        return int(self._line)

    def _expected_length(self) -> int:
        if self._expected is None:
            self._expected = self._parse_int("length")
        return self._expected

    def process_error_reply(self):
        return self.set_error_object(ReplyError(self._decode(self._line)))

    def process_status_reply(self):
        return self._decode(self._line)

    def process_integer_reply(self):
        return self._parse_int("integer")

    def process_bulk_reply(self):
        bulk_length = self._expected_length()
        if bulk_length < 0:
            return None

        # skip trailing CRLF
        data = self.buffer.read_exact(bulk_length, 2)
        if data is INCOMPLETE or not self.encoding:
            return data
        return self._decode(data)

    def process_multi_bulk_reply(self):
        multi_bulk_length = self._expected_length()
        if multi_bulk_length < 0:
            return None
        if multi_bulk_length == 0:
            return ArrayReply()

        if self.child is None:
            raise ProtocolError(
                f"Protocol error, arrays nested deeper than {self.depth + 1} levels"
            )

        if self.multi_bulk is None:
            self.multi_bulk = ArrayReply()

        while len(self.multi_bulk) < multi_bulk_length:
            element = self.child.process()
            # Child keeps its partial state for the next call
            if element is INCOMPLETE:
                return INCOMPLETE
            self.multi_bulk.append(element)

        return self.multi_bulk

    def process_protocol_error(self):
        raise ProtocolError(f"Protocol error, got {self._type!r} as reply type byte")

    def process(self):
        if self._line is None:
            line = self.buffer.read_line()
            if line is INCOMPLETE:
                return INCOMPLETE
            self._line = line

        if self._type is None:
            self._type = self._line[:1]
            self._line = self._line[1:]

        handler = self.METHOD_INDEX.get(self._type, Task.process_protocol_error)
        reply = handler(self)

        if reply is not INCOMPLETE:
            self.reset()
        return reply

    # Reply type byte -> handler
    METHOD_INDEX = {
        b"-": process_error_reply,
        b"+": process_status_reply,
        b":": process_integer_reply,
        b"$": process_bulk_reply,
        b"*": process_multi_bulk_reply,
    }

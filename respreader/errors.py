class RespReaderError(Exception):
    pass


"""
Malformed stream, the session can not continue past this point
"""
class ProtocolError(RespReaderError):
    pass


"""
Decoded "-" reply. Handed back as a value, never raised by the reader
"""
class ReplyError(Exception):
    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def __eq__(self, other):
        if not isinstance(other, ReplyError):
            return NotImplemented
        return type(self) is type(other) and self.message == other.message

    def __hash__(self):
        return hash((type(self), self.message))


class _Incomplete:
    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self):
        return "INCOMPLETE"

    def __bool__(self):
        return False

    def __reduce__(self):
        return (_Incomplete, ())


# Not enough bytes yet. Distinct from None (null bulk / null array)
INCOMPLETE = _Incomplete()


"""
Array reply value. `error` holds the first "-" reply found anywhere
beneath the top-level array, None otherwise
"""
class ArrayReply(list):
    def __init__(self, *args):
        super().__init__(*args)
        self.error = None

    def set_error(self, err: ReplyError):
        # First error wins
        if self.error is None:
            self.error = err
        return self.error

    def __repr__(self):
        if self.error is None:
            return f"ArrayReply({list.__repr__(self)})"
        return f"ArrayReply({list.__repr__(self)}, error={self.error!r})"

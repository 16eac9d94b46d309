from typing import Optional, Union

from .errors import ReplyError

"""
Wire form of reply values, the server side of the replies Reader decodes
"""
class RESPEncoder:
    # static method, no need to pass 'self'
    @staticmethod
    def encode_simple_str(s: str) -> bytes:
        return f"+{s}\r\n".encode()

    @staticmethod
    def encode_err(msg: str) -> bytes:
        return f"-{msg}\r\n".encode()

    @staticmethod
    def encode_int(i: int) -> bytes:
        return f":{i}\r\n".encode()

    @staticmethod
    def encode_bulk_str(s: Optional[Union[str, bytes]]) -> bytes:
        if s is None:
            return b"$-1\r\n"
        if isinstance(s, str):
            s = s.encode()
        return b"$" + str(len(s)).encode() + b"\r\n" + bytes(s) + b"\r\n"

    @classmethod
    def encode_arr(cls, items: Optional[list]) -> bytes:
        if items is None:
            return b"*-1\r\n"
        return b"*" + str(len(items)).encode() + b"\r\n" + (
            b"".join(cls.encode_value(item) for item in items)
        )

    @classmethod
    def encode_value(cls, val) -> bytes:
        if val is None:
            return b"$-1\r\n"
        if isinstance(val, ReplyError):
            return cls.encode_err(val.message)
        # bool is an int subclass, but has no reply type
        if isinstance(val, bool):
            raise TypeError("Can not encode a bool as a reply")
        if isinstance(val, int):
            return cls.encode_int(val)
        if isinstance(val, (str, bytes, bytearray)):
            return cls.encode_bulk_str(val)
        if isinstance(val, (list, tuple)):
            return cls.encode_arr(val)
        raise TypeError(f"Can not encode {type(val).__name__} as a reply")

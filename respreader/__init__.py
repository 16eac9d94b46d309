from .buffer import Buffer
from .encoder import RESPEncoder
from .errors import INCOMPLETE, ArrayReply, ProtocolError, ReplyError, RespReaderError
from .parser import Task
from .reader import Reader

__all__ = [
    "ArrayReply",
    "Buffer",
    "INCOMPLETE",
    "ProtocolError",
    "RESPEncoder",
    "Reader",
    "ReplyError",
    "RespReaderError",
    "Task",
]

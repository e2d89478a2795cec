

from .queue import Queue, IndexOutOfRangeError, is_queue
from .collection import Collection, ReverseCollection
from .protocol import (
    Enumerable, Collectable, ProtocolError,
    Cont, Halt, Suspend, Done, Halted, Suspended,
    DONE, HALT, ABORTED,
)
from . import protocol

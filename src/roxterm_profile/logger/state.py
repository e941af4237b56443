"""Process-wide logging state.

Loggers are created at import time by every module, but the queue and its
listener thread must be set up once. The state object records whether that
has happened and owns the pieces clear_logger_state() tears down.
"""

import threading
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import queue
    from logging.handlers import QueueListener


@dataclass
class _LoggerState:
    """Queue logging pieces shared by all roxterm_profile loggers."""

    lock: threading.Lock = field(default_factory=threading.Lock)
    root_initialized: bool = False
    queue_listener: "QueueListener | None" = None
    log_queue: "queue.Queue | None" = None


_state = _LoggerState()


def get_state() -> _LoggerState:
    return _state

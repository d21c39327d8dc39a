from __future__ import annotations

"""
Cooperative Cancellation.

Loops that walk or emit the tree call check_cancelled at each iteration
boundary so a pass can stop before any partial output is produced.
"""

import threading
from typing import Optional

from projectfiles.domain.errors import GenerationCancelled


def check_cancelled(cancellation_event: Optional[threading.Event], stage: str = "") -> None:
    """
    Abort the current pass if cancellation was requested.

    Args:
        cancellation_event: Event set by the caller to request a stop.
        stage: Label of the running stage, used in the error message.

    Raises:
        GenerationCancelled: If the event is set.
    """
    if cancellation_event is not None and cancellation_event.is_set():
        raise GenerationCancelled(stage)

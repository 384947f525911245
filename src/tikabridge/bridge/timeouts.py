"""Deadline guard for blocking engine calls.

Python cannot interrupt a thread blocked in ``read()``/``recv()``, so a
deadline is enforced by running the operation on a helper thread and, when
the deadline passes, invoking a ``cancel`` hook that releases the underlying
resource (killing the subprocess, shutting the socket down).  The blocked
call then returns or fails on the helper thread and the caller sees
:class:`~tikabridge.errors.ExtractionTimeout`.
"""

from __future__ import annotations

import logging
import threading
from typing import Callable, TypeVar

from tikabridge.errors import ExtractionTimeout


logger = logging.getLogger(__name__)

T = TypeVar("T")

# How long to wait for the helper thread to unwind after ``cancel`` ran.
CANCEL_JOIN_SECONDS = 5.0


def run_with_timeout(
    seconds: float | None,
    operation: Callable[[], T],
    *,
    cancel: Callable[[], None] | None = None,
    description: str = "engine call",
) -> T:
    """Run *operation*, failing with ``ExtractionTimeout`` if it outlives *seconds*.

    With ``seconds=None`` the operation runs inline and its result or
    exception is passed through untouched.
    """

    if seconds is None:
        return operation()
    if seconds <= 0:
        raise ValueError("timeout must be > 0 seconds")

    outcome: dict[str, object] = {}

    def _target() -> None:
        try:
            outcome["result"] = operation()
        except BaseException as exc:  # re-raised on the calling thread
            outcome["error"] = exc

    worker = threading.Thread(target=_target, name=f"tikabridge-{description}", daemon=True)
    worker.start()
    worker.join(seconds)

    if worker.is_alive():
        logger.warning("%s exceeded %.3gs deadline; cancelling", description, seconds)
        if cancel is not None:
            cancel()
            worker.join(CANCEL_JOIN_SECONDS)
        raise ExtractionTimeout(description, seconds)

    if "error" in outcome:
        raise outcome["error"]  # type: ignore[misc]
    return outcome["result"]  # type: ignore[return-value]

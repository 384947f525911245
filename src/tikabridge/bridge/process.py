"""Process mode: one engine subprocess per extraction call."""

from __future__ import annotations

import logging
import subprocess

from tikabridge.bridge.command import engine_command
from tikabridge.bridge.timeouts import run_with_timeout
from tikabridge.config import BridgeSettings
from tikabridge.kinds import OutputKind


logger = logging.getLogger(__name__)


def read_via_process(
    kind: OutputKind | str,
    data: bytes,
    *,
    timeout: float | None = None,
    settings: BridgeSettings | None = None,
) -> bytes:
    """Pipe *data* through a fresh engine process and return its standard output.

    The engine reads the whole document from stdin (end-of-input is the
    closed pipe) and writes the result to stdout.  If *timeout* elapses the
    subprocess is killed before ``ExtractionTimeout`` is raised.  Failure to
    spawn the engine surfaces as the ``OSError`` from ``subprocess``.
    """

    resolved = settings or BridgeSettings.from_env()
    command = engine_command(kind, resolved)
    logger.debug("Spawning engine: %s", " ".join(command))

    with subprocess.Popen(command, stdin=subprocess.PIPE, stdout=subprocess.PIPE) as proc:
        stdout, _ = run_with_timeout(
            timeout,
            lambda: proc.communicate(data),
            cancel=proc.kill,
            description=f"engine process ({OutputKind.coerce(kind).value})",
        )

    if proc.returncode != 0:
        logger.warning("Engine exited with status %s for %d input bytes", proc.returncode, len(data))
    return stdout

"""Engine command-line construction."""

from __future__ import annotations

from tikabridge.config import BridgeSettings
from tikabridge.kinds import OutputKind


def engine_command(kind: OutputKind | str, settings: BridgeSettings, *, server_port: int | None = None) -> list[str]:
    """Return the argv that runs the engine for *kind*.

    Passing *server_port* builds the long-lived server-mode variant.
    """

    output_kind = OutputKind.coerce(kind)
    command = [
        settings.java_path,
        "-Djava.awt.headless=true",
        "-jar",
        str(settings.jar_path),
        f"--config={settings.config_path}",
    ]
    if server_port is not None:
        command.extend(["--server", f"--port={server_port}"])
    command.extend(output_kind.switches)
    return command

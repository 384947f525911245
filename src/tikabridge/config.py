"""Runtime configuration for locating and driving the extraction engine."""

from __future__ import annotations

from dataclasses import dataclass
import os
from pathlib import Path
from typing import Mapping


PACKAGE_DIR = Path(__file__).resolve().parent
DEFAULT_JAR_PATH = PACKAGE_DIR / "jar" / "tika-app.jar"
DEFAULT_CONFIG_PATH = PACKAGE_DIR / "jar" / "tika-config.xml"
DEFAULT_SERVER_HOST = "localhost"
DEFAULT_SERVER_PORT = 9293  # arbitrary, but stable across runs
DEFAULT_STARTUP_TIMEOUT_SECONDS = 30.0


def _parse_port(*, name: str, raw_value: str) -> int:
    try:
        value = int(raw_value)
    except ValueError:
        raise ValueError(f"{name} must be an integer") from None
    if not 1 <= value <= 65535:
        raise ValueError(f"{name} must be between 1 and 65535")
    return value


def _parse_positive_float(*, name: str, raw_value: str) -> float:
    try:
        value = float(raw_value)
    except ValueError:
        raise ValueError(f"{name} must be a number") from None
    if value <= 0:
        raise ValueError(f"{name} must be > 0")
    return value


@dataclass(frozen=True, slots=True)
class BridgeSettings:
    """Validated engine location and bridge defaults."""

    java_home: Path | None = None
    jar_path: Path = DEFAULT_JAR_PATH
    config_path: Path = DEFAULT_CONFIG_PATH
    server_host: str = DEFAULT_SERVER_HOST
    server_port: int = DEFAULT_SERVER_PORT
    startup_timeout: float = DEFAULT_STARTUP_TIMEOUT_SECONDS
    timeout: float | None = None

    @property
    def java_path(self) -> str:
        """Java executable: ``$JAVA_HOME/bin/java`` when configured, else ``java`` from PATH."""

        if self.java_home is None:
            return "java"
        return str(self.java_home / "bin" / "java")

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "BridgeSettings":
        source: Mapping[str, str] = os.environ if environ is None else environ

        java_home_raw = source.get("JAVA_HOME", "").strip()
        jar_raw = source.get("TIKA_JAR_PATH", "").strip()
        config_raw = source.get("TIKA_CONFIG_PATH", "").strip()

        server_host = source.get("TIKA_SERVER_HOST", DEFAULT_SERVER_HOST).strip()
        if not server_host:
            raise ValueError("TIKA_SERVER_HOST cannot be empty")

        port_raw = source.get("TIKA_SERVER_PORT", "").strip()
        startup_raw = source.get("TIKA_SERVER_STARTUP_TIMEOUT", "").strip()
        timeout_raw = source.get("TIKA_TIMEOUT", "").strip()

        return cls(
            java_home=Path(java_home_raw) if java_home_raw else None,
            jar_path=Path(jar_raw) if jar_raw else DEFAULT_JAR_PATH,
            config_path=Path(config_raw) if config_raw else DEFAULT_CONFIG_PATH,
            server_host=server_host,
            server_port=(
                _parse_port(name="TIKA_SERVER_PORT", raw_value=port_raw) if port_raw else DEFAULT_SERVER_PORT
            ),
            startup_timeout=(
                _parse_positive_float(name="TIKA_SERVER_STARTUP_TIMEOUT", raw_value=startup_raw)
                if startup_raw
                else DEFAULT_STARTUP_TIMEOUT_SECONDS
            ),
            timeout=_parse_positive_float(name="TIKA_TIMEOUT", raw_value=timeout_raw) if timeout_raw else None,
        )

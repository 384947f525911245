from __future__ import annotations

from pathlib import Path

import pytest

from tikabridge.config import (
    DEFAULT_CONFIG_PATH,
    DEFAULT_JAR_PATH,
    DEFAULT_SERVER_PORT,
    DEFAULT_STARTUP_TIMEOUT_SECONDS,
    BridgeSettings,
)


def test_settings_defaults_from_empty_env() -> None:
    settings = BridgeSettings.from_env({})

    assert settings.java_home is None
    assert settings.java_path == "java"
    assert settings.jar_path == DEFAULT_JAR_PATH
    assert settings.config_path == DEFAULT_CONFIG_PATH
    assert settings.server_host == "localhost"
    assert settings.server_port == DEFAULT_SERVER_PORT == 9293
    assert settings.startup_timeout == DEFAULT_STARTUP_TIMEOUT_SECONDS
    assert settings.timeout is None


def test_bundled_engine_config_ships_with_package() -> None:
    assert DEFAULT_CONFIG_PATH.is_file()


def test_settings_load_overrides_from_env() -> None:
    settings = BridgeSettings.from_env(
        {
            "JAVA_HOME": "/path/to/java/home",
            "TIKA_JAR_PATH": "/opt/tika/tika-app-2.9.jar",
            "TIKA_CONFIG_PATH": "/opt/tika/config.xml",
            "TIKA_SERVER_HOST": "127.0.0.1",
            "TIKA_SERVER_PORT": "9400",
            "TIKA_SERVER_STARTUP_TIMEOUT": "12.5",
            "TIKA_TIMEOUT": "30",
        }
    )

    assert settings.java_path == "/path/to/java/home/bin/java"
    assert settings.jar_path == Path("/opt/tika/tika-app-2.9.jar")
    assert settings.config_path == Path("/opt/tika/config.xml")
    assert settings.server_host == "127.0.0.1"
    assert settings.server_port == 9400
    assert settings.startup_timeout == 12.5
    assert settings.timeout == 30.0


def test_blank_java_home_falls_back_to_path_lookup() -> None:
    assert BridgeSettings.from_env({"JAVA_HOME": "   "}).java_path == "java"


@pytest.mark.parametrize("port", ["0", "70000", "http"])
def test_settings_validate_port(port: str) -> None:
    with pytest.raises(ValueError, match="TIKA_SERVER_PORT"):
        BridgeSettings.from_env({"TIKA_SERVER_PORT": port})


def test_settings_validate_timeouts() -> None:
    with pytest.raises(ValueError, match="TIKA_TIMEOUT"):
        BridgeSettings.from_env({"TIKA_TIMEOUT": "-1"})

    with pytest.raises(ValueError, match="TIKA_SERVER_STARTUP_TIMEOUT"):
        BridgeSettings.from_env({"TIKA_SERVER_STARTUP_TIMEOUT": "soon"})


def test_settings_reject_empty_host() -> None:
    with pytest.raises(ValueError, match="TIKA_SERVER_HOST"):
        BridgeSettings.from_env({"TIKA_SERVER_HOST": " "})

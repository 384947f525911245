"""Shared fixtures: a fake engine installed as ``$JAVA_HOME/bin/java``."""

from __future__ import annotations

from pathlib import Path
import socket
import stat
import sys

import pytest

from tikabridge.config import BridgeSettings


FAKE_ENGINE = Path(__file__).with_name("fake_engine.py")


@pytest.fixture()
def fake_java_home(tmp_path: Path) -> Path:
    java_home = tmp_path / "jdk"
    bin_dir = java_home / "bin"
    bin_dir.mkdir(parents=True)
    java = bin_dir / "java"
    java.write_text(f"#!{sys.executable}\n{FAKE_ENGINE.read_text(encoding='utf-8')}", encoding="utf-8")
    java.chmod(java.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
    return java_home


@pytest.fixture()
def engine_settings(fake_java_home: Path, tmp_path: Path) -> BridgeSettings:
    return BridgeSettings(
        java_home=fake_java_home,
        jar_path=tmp_path / "tika-app.jar",
        config_path=tmp_path / "tika-config.xml",
        server_host="127.0.0.1",
        startup_timeout=15.0,
    )


@pytest.fixture()
def free_port() -> int:
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as sock:
        sock.bind(("127.0.0.1", 0))
        return sock.getsockname()[1]


@pytest.fixture()
def sample_document() -> bytes:
    return (
        "#meta Content-Type=application/vnd.apple.pages\n"
        "#meta Content-Type=application/vnd.apple.pages\n"
        "#meta Creation-Date=2013-10-17T09:21:00Z\n"
        "#meta dc:title=problem: test\n"
        "The quick brown fox jumped over the lazy cat.\n"
        "Second line & more\n"
    ).encode("utf-8")

from __future__ import annotations

import io
from pathlib import Path

import pytest

from tikabridge.errors import SourceNotFoundError, TikaBridgeError, UnsupportedSourceError
from tikabridge.sources import PathSource, StreamSource, URISource, resolve_source


def test_existing_path_resolves_to_path_source(tmp_path: Path) -> None:
    sample = tmp_path / "sample filename with spaces.pages"
    sample.write_bytes(b"content")

    source = resolve_source(str(sample))

    assert isinstance(source, PathSource)
    assert source.read_bytes() == b"content"


def test_pathlike_input_is_accepted(tmp_path: Path) -> None:
    sample = tmp_path / "sample.docx"
    sample.write_bytes(b"PK")

    assert isinstance(resolve_source(sample), PathSource)


def test_relative_path_resolves(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    (tmp_path / "samples").mkdir()
    (tmp_path / "samples" / "sample.pages").write_bytes(b"x")
    monkeypatch.chdir(tmp_path)

    assert isinstance(resolve_source("samples/sample.pages"), PathSource)


@pytest.mark.parametrize(
    "uri",
    [
        "http://svn.apache.org/repos/asf/poi/trunk/test-data/document/sample.docx",
        "https://example.com/report.pdf?download=1",
    ],
)
def test_http_uri_resolves_to_uri_source(uri: str) -> None:
    source = resolve_source(uri)

    assert isinstance(source, URISource)
    assert source.uri == uri


def test_stream_resolves_to_stream_source() -> None:
    source = resolve_source(io.BytesIO(b"streamed"))

    assert isinstance(source, StreamSource)
    assert source.read_bytes() == b"streamed"


def test_text_stream_is_encoded_as_utf8() -> None:
    assert resolve_source(io.StringIO("héllo")).read_bytes() == "héllo".encode("utf-8")


@pytest.mark.parametrize("missing", ["test/sample/missing.pages", "ftp://example.com/file.doc", "http:/broken"])
def test_missing_path_or_unsupported_uri_is_not_found(missing: str) -> None:
    with pytest.raises(FileNotFoundError) as excinfo:
        resolve_source(missing)

    assert isinstance(excinfo.value, SourceNotFoundError)
    assert isinstance(excinfo.value, TikaBridgeError)
    assert missing in str(excinfo.value)


@pytest.mark.parametrize("value", [None, 1, 1.1, b"bytes", ["a"]])
def test_other_objects_are_type_errors(value: object) -> None:
    with pytest.raises(TypeError) as excinfo:
        resolve_source(value)

    assert isinstance(excinfo.value, UnsupportedSourceError)

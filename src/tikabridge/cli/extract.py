"""CLI command for extracting documents through the engine bridge."""

from __future__ import annotations

import argparse
from contextlib import nullcontext
import json
import logging

from dotenv import load_dotenv
import httpx

from tikabridge.bridge.server import EngineServer
from tikabridge.config import BridgeSettings
from tikabridge.document import Document
from tikabridge.errors import EngineStartupError, TikaBridgeError
from tikabridge.extraction import Extractor
from tikabridge.kinds import OutputKind


load_dotenv()

LOGGER = logging.getLogger(__name__)


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Extract text, HTML, metadata or MIME type from documents")
    parser.add_argument("inputs", nargs="+", help="File paths or http(s) URIs")
    parser.add_argument(
        "--kind",
        choices=[kind.value for kind in OutputKind],
        default=OutputKind.TEXT.value,
        help="Output to extract",
    )
    parser.add_argument("--timeout", type=float, default=None, help="Per-document deadline in seconds")
    parser.add_argument(
        "--server",
        action="store_true",
        help="Start one engine server for the whole batch instead of a process per document",
    )
    parser.add_argument("--port", type=int, default=None, help="Engine server port (with --server)")
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    return parser.parse_args(argv)


def _extract_one(document: Document, kind: OutputKind) -> object:
    if kind is OutputKind.TEXT:
        return document.text
    if kind is OutputKind.HTML:
        return document.html
    if kind is OutputKind.METADATA:
        return document.metadata

    mimetype = document.mimetype
    if mimetype is None:
        return None
    return {"content_type": mimetype.content_type, "extensions": list(mimetype.extensions)}


def main(argv: list[str] | None = None) -> int:
    args = _parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(message)s",
    )

    try:
        settings = BridgeSettings.from_env()
    except ValueError as exc:
        LOGGER.error("Invalid configuration: %s", exc)
        return 2

    kind = OutputKind(args.kind)
    results: list[dict[str, object]] = []
    errors: list[dict[str, str]] = []

    try:
        server_context = EngineServer.start(kind, args.port, settings=settings) if args.server else nullcontext(None)
    except (EngineStartupError, OSError) as exc:
        LOGGER.error("Could not start engine server: %s", exc)
        return 2

    with server_context as server:
        extractor = Extractor(server, settings=settings)
        for raw_input in args.inputs:
            try:
                document = Document(raw_input, extractor=extractor, timeout=args.timeout)
                value = _extract_one(document, kind)
            except (TikaBridgeError, OSError, ValueError, httpx.HTTPError) as exc:
                LOGGER.warning("Extraction failed for %s: %s", raw_input, exc)
                errors.append({"input": raw_input, "error": str(exc)})
                continue
            results.append({"input": raw_input, kind.value: value})

    payload = {
        "kind": kind.value,
        "processed": len(results),
        "results": results,
        "errors": errors,
    }
    print(json.dumps(payload, ensure_ascii=False, indent=2))
    return 0 if not errors else 1


if __name__ == "__main__":
    raise SystemExit(main())

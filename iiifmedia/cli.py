"""Thin CLI entry point: reads a file or value, runs a parser, prints JSON."""

import argparse
import json
import logging
import sys
from pathlib import Path

from iiifmedia.captions import extract_speaker_segments
from iiifmedia.display import display_chapters
from iiifmedia.manifest import load_captions, load_manifest
from iiifmedia.ranges import DEFAULT_LANGUAGE, resolve_chapters
from iiifmedia.target import parse_target

logger = logging.getLogger("iiifmedia")


def _emit(data) -> None:
    print(json.dumps(data, indent=2, ensure_ascii=False))


def _target_value(raw: str):
    """A value starting with ``{`` is a JSON SpecificResource, anything else a URI."""
    if raw.lstrip().startswith("{"):
        return json.loads(raw)
    return raw


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="iiifmedia",
        description="Parse IIIF ranges, WebVTT speakers and media fragment targets.",
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Log skipped ranges and cues")
    sub = parser.add_subparsers(dest="command")

    chap = sub.add_parser("chapters", help="Resolve chapters from a IIIF manifest")
    chap.add_argument("manifest", type=Path, help="Path to a IIIF manifest JSON file")
    chap.add_argument("--language", "-l", default=DEFAULT_LANGUAGE, help="Preferred label language")
    chap.add_argument("--display", action="store_true", help="Format times as H:MM:SS")

    spk = sub.add_parser("speakers", help="Extract speaker segments from a WebVTT file")
    spk.add_argument("captions", type=Path, help="Path to a WebVTT file")

    tgt = sub.add_parser("target", help="Parse an annotation target")
    tgt.add_argument("value", help="A URI with fragment, or a SpecificResource as JSON")

    serve = sub.add_parser("serve", help="Launch the JSON API")
    serve.add_argument("--port", type=int, default=8321, help="Port to listen on")
    serve.add_argument("--host", type=str, default="127.0.0.1", help="Host to bind to")
    serve.add_argument("--language", "-l", default=DEFAULT_LANGUAGE, help="Default label language")

    return parser


def main(argv: list[str] | None = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)

    level = logging.DEBUG if args.verbose else logging.INFO
    logging.basicConfig(level=level, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s")

    if args.command is None:
        parser.print_help()
        sys.exit(0)

    if args.command == "serve":
        from iiifmedia.web import create_app
        app = create_app(default_language=args.language)
        logger.info("iiifmedia API: http://%s:%s", args.host, args.port)
        app.run(host=args.host, port=args.port, debug=False)
        return

    try:
        if args.command == "chapters":
            chapters = resolve_chapters(load_manifest(args.manifest), language=args.language)
            logger.debug("Resolved %d chapters from %s", len(chapters), args.manifest)
            if args.display:
                _emit(display_chapters(chapters))
            else:
                _emit([ch.to_dict() for ch in chapters])
        elif args.command == "speakers":
            segments = extract_speaker_segments(load_captions(args.captions))
            logger.debug("Extracted %d speaker segments from %s", len(segments), args.captions)
            _emit([s.to_dict() for s in segments])
        elif args.command == "target":
            parsed = parse_target(_target_value(args.value))
            _emit(parsed.to_dict() if parsed is not None else None)
    except (OSError, ValueError, TypeError) as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

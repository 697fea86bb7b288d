"""Loaders for the documents the parsers consume: IIIF manifests and WebVTT files."""

import json
from pathlib import Path


def load_manifest(path: str | Path) -> dict:
    """Load a IIIF manifest from a JSON file.

    Only the top-level shape is checked; the resolvers tolerate anything
    missing or malformed below it.
    """
    path = Path(path)
    data = json.loads(path.read_text(encoding="utf-8-sig"))

    if not isinstance(data, dict):
        raise ValueError("Manifest must be a JSON object")

    return data


def load_captions(path: str | Path) -> str:
    """Read a WebVTT file as text, dropping any byte-order mark."""
    return Path(path).read_text(encoding="utf-8-sig")

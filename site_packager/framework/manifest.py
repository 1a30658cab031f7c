from __future__ import annotations

import json
import logging
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Iterator

from site_packager.framework.errors import ConfigParseError, ConfigReadError


def read_manifest(path: Path) -> tuple[bytes, dict[str, Any]]:
    """Return (raw_bytes, parsed_object) for a JSON manifest."""
    try:
        raw = path.read_bytes()
    except OSError as exc:
        raise ConfigReadError(f"Cannot read {path.name}: {exc}") from exc

    try:
        payload = json.loads(raw.decode("utf-8-sig"))
    except (UnicodeDecodeError, json.JSONDecodeError) as exc:
        raise ConfigParseError(f"Invalid JSON in {path.name}: {exc}") from exc

    if not isinstance(payload, dict):
        raise ConfigParseError(f"{path.name} must contain a JSON object, got {type(payload).__name__}")
    return raw, payload


@contextmanager
def borrowed_manifest(
    path: Path,
    *,
    homepage: str,
    logger: logging.Logger,
) -> Iterator[dict[str, Any]]:
    """
    Temporarily point the manifest's `homepage` at `homepage`.

    The original bytes are written back when the block exits, whether it
    returns or raises. Nothing is written back if reading or parsing fails,
    because the file was never touched.

    Yields the modified manifest object.
    """

    logger.info("Reading %s", path)
    original, payload = read_manifest(path)

    previous = payload.get("homepage")
    payload["homepage"] = homepage
    logger.info(
        "Setting homepage: %s -> %s",
        json.dumps(previous, ensure_ascii=False) if previous is not None else "(unset)",
        json.dumps(homepage, ensure_ascii=False),
    )

    try:
        path.write_bytes(json.dumps(payload, indent=2, ensure_ascii=False).encode("utf-8"))
        yield payload
    finally:
        logger.info("Restoring original %s", path.name)
        path.write_bytes(original)
        logger.debug("Restored %d bytes to %s", len(original), path)

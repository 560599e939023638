"""Picture download and cache-presence utilities."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any, Mapping, Optional

import requests
from filetype import guess

logger = logging.getLogger("remote_pictures")

DEFAULT_TIMEOUT = 30.0
CHUNK_SIZE = 64 * 1024
PARTIAL_SUFFIX = ".part"
SIGNATURE_BYTES = 261
SVG_MIME = "image/svg+xml"


def is_downloaded(file_path: Path) -> bool:
    """Whether a local copy of the picture already exists."""
    return file_path.exists()


def is_svg(file_path: Path, content_type: str) -> bool:
    """SVG is text-based, so filetype cannot recognise it."""
    mime = content_type.split(";")[0].strip().lower()
    return file_path.suffix.lower() == ".svg" or mime == SVG_MIME


def detect_image_format(data: bytes) -> Optional[str]:
    """Detect image type using filetype; returns lowercase extension."""
    kind = guess(data)
    if kind and kind.mime.startswith("image/"):
        ext = kind.extension.lower()
        if ext == "jpeg":
            return "jpg"
        return ext
    return None


def download_picture(
    session: requests.Session,
    url: str,
    file_path: Path,
    options: Optional[Mapping[str, Any]] = None,
) -> bool:
    """Fetch ``url`` and write the body to ``file_path``.

    ``options`` is passed to ``session.get`` unchanged, apart from a default
    timeout. Network errors and non-2xx responses are logged and reported by
    returning False; filesystem errors propagate. The body is streamed to a
    sibling ``.part`` file and moved into place once complete, so an aborted
    transfer never leaves a truncated file behind.
    """
    request_options = dict(options or {})
    request_options.setdefault("timeout", DEFAULT_TIMEOUT)
    request_options["stream"] = True

    try:
        resp = session.get(url, **request_options)
    except requests.RequestException as exc:
        logger.warning("Failed to download %s: %s", url, exc)
        return False
    try:
        resp.raise_for_status()
    except requests.HTTPError as exc:
        resp.close()
        logger.warning("Failed to download %s: %s", url, exc)
        return False

    partial_path = file_path.with_name(file_path.name + PARTIAL_SUFFIX)
    head = b""
    try:
        with resp, partial_path.open("wb") as handle:
            for chunk in resp.iter_content(chunk_size=CHUNK_SIZE):
                if not chunk:
                    continue
                if len(head) < SIGNATURE_BYTES:
                    head += chunk[: SIGNATURE_BYTES - len(head)]
                handle.write(chunk)
    except requests.RequestException as exc:
        partial_path.unlink(missing_ok=True)
        logger.warning("Failed to download %s: %s", url, exc)
        return False

    os.replace(partial_path, file_path)

    content_type = resp.headers.get("Content-Type", "")
    if head and not is_svg(file_path, content_type) and detect_image_format(head) is None:
        logger.warning(
            "Downloaded %s but the payload is not a recognised image (Content-Type=%s)",
            url,
            content_type,
        )
    return True

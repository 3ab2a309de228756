"""Loading JPEG bytes from local paths and http(s) URLs.

WHY: The CLI accepts either a file on disk or a URL. The engine only
wants a readable byte source, so this module turns both into bytes
before parsing starts.

HOW: Local paths are read with pathlib. URLs are streamed with httpx,
following redirects, and the download is aborted as soon as it passes
MAX_DOWNLOAD_BYTES.

RULES:
- Only "http://" and "https://" prefixes are treated as URLs
- Non-2xx responses raise httpx.HTTPStatusError
- Oversized downloads raise ValueError before the whole body is read
- Missing local files raise FileNotFoundError
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

import httpx

from jpeg_inspector.config import HTTP_TIMEOUT_S, MAX_DOWNLOAD_BYTES

logger = logging.getLogger(__name__)


def is_url(location: str) -> bool:
    return location.lower().startswith(("http://", "https://"))


def fetch_url(
    url: str,
    client: Optional[httpx.Client] = None,
    max_bytes: int = MAX_DOWNLOAD_BYTES,
) -> bytes:
    """Download a URL into memory, enforcing a size limit.

    Args:
        url: http(s) URL of the JPEG.
        client: Optional pre-configured httpx.Client (tests pass one
                with a MockTransport). A temporary client is used otherwise.
        max_bytes: Abort once the body grows past this many bytes.

    Returns:
        The response body.
    """
    owns_client = client is None
    if client is None:
        client = httpx.Client(timeout=httpx.Timeout(HTTP_TIMEOUT_S), follow_redirects=True)

    try:
        logger.info("Downloading %s", url)
        with client.stream("GET", url) as response:
            response.raise_for_status()
            chunks = []
            total = 0
            for chunk in response.iter_bytes():
                total += len(chunk)
                if total > max_bytes:
                    raise ValueError(
                        "Download from {} exceeds the {:,}-byte limit.".format(url, max_bytes)
                    )
                chunks.append(chunk)
        logger.info("Downloaded %d bytes from %s", total, url)
        return b"".join(chunks)
    finally:
        if owns_client:
            client.close()


def load_source_bytes(location: str, client: Optional[httpx.Client] = None) -> bytes:
    """Return the bytes at a local path or http(s) URL."""
    if is_url(location):
        return fetch_url(location, client=client)
    return Path(location).read_bytes()

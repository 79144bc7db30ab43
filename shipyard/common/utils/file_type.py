"""File content type detection for release asset uploads."""

import asyncio
import logging

import filetype

logger = logging.getLogger(__name__)

# Enough bytes for every signature the sniffer knows about
SNIFF_BYTES = 4100
DEFAULT_MIME = "application/octet-stream"


def read_head(path: str, size: int = SNIFF_BYTES) -> bytes:
    """Read at most ``size`` bytes from the start of a file."""
    with open(path, "rb") as handle:
        return handle.read(size)


def detect_mime(head: bytes) -> str:
    """Return the MIME type matching the leading bytes of a file."""
    kind = filetype.guess(head)
    if kind is None:
        return DEFAULT_MIME
    return kind.mime


async def get_file_type(path: str) -> str:
    """
    Get the MIME type of a file by reading its first chunk.

    Args:
        path: Full file path

    Returns:
        MIME type, ``application/octet-stream`` when nothing matches
    """
    head = await asyncio.to_thread(read_head, path)
    mime = detect_mime(head)
    logger.debug(f"Detected {mime} for {path} from {len(head)} bytes")
    return mime

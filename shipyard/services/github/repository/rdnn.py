"""Reverse domain name helpers."""

import re

_INVALID_CHARS = re.compile(r"[^a-z0-9]")


def sanitize_rdnn(value: str) -> str:
    """
    Normalize a string into a reverse domain name.

    Every dot separated segment is lowercased and stripped of anything but
    ascii letters and digits. Segments left empty are dropped, so the result
    never has leading, trailing or doubled dots.

    Args:
        value: Raw dotted name, e.g. ``com.github.Acme.my-widget``

    Returns:
        Sanitized name, e.g. ``com.github.acme.mywidget``
    """
    segments = (_INVALID_CHARS.sub("", segment.lower()) for segment in value.split("."))
    return ".".join(segment for segment in segments if segment)

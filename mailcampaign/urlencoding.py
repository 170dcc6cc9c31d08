"""Percent-decoding of URL data."""

from __future__ import annotations

from urllib.parse import unquote

__all__ = ["url_decode"]


def url_decode(data: str | bytes | None) -> str:
    """Decode %XX escapes; '+' is left as is. Empty input gives ''."""
    if not data:
        return ""
    if isinstance(data, bytes):
        data = data.decode("utf-8", errors="surrogateescape")
    return unquote(data, encoding="utf-8", errors="replace")
"""Helper utilities for the DA backup action."""
from __future__ import annotations

from datetime import datetime, timezone
from typing import Iterable, Optional
from urllib.parse import quote

# Characters encodeURIComponent leaves untouched, besides alphanumerics.
_UNRESERVED = "-_.!~*'()"


def backup_timestamp(dt: Optional[datetime] = None) -> str:
    """Return a second-precision UTC timestamp safe for a folder name.

    ``2025-03-04T05:06:07.891Z`` becomes ``2025-03-04T05-06-07``.
    """

    dt = dt or datetime.now(timezone.utc)
    if dt.tzinfo is not None:
        dt = dt.astimezone(timezone.utc)
    iso = dt.replace(tzinfo=None).isoformat(timespec="milliseconds")
    return iso.replace(":", "-").replace(".", "-")[:19]


def join_path(parent: Optional[str], name: str) -> str:
    return f"{parent}/{name}" if parent else name


def encode_path(path: str) -> str:
    """Percent-encode each segment of *path* while keeping ``/`` separators."""

    return "/".join(quote(segment, safe=_UNRESERVED) for segment in path.split("/"))


def file_name(name: str, ext: Optional[str]) -> str:
    return f"{name}.{ext}" if ext else name


def mask_sensitive(value: str, secrets: Iterable[Optional[str]]) -> str:
    """Replace occurrences of secret values in *value* with '***'."""

    masked = value
    for secret in secrets:
        if secret:
            masked = masked.replace(secret, "***")
    return masked


__all__ = [
    "backup_timestamp",
    "encode_path",
    "file_name",
    "join_path",
    "mask_sensitive",
]

# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Header normalization utilities.

HTTP header field names are case-insensitive (RFC 9110). Requests keep headers as plain
dicts keyed by their canonical form (``Content-Type``); responses keep lowercase keys.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any


def _coerce_headers_mapping(headers: Any) -> Mapping[object, object] | None:
    """
    Best-effort coercion of "dict-like" header containers into a Mapping.

    Handles plain dicts, httpx.Headers and iterable-of-pairs.
    """
    if not headers:
        return None
    if isinstance(headers, Mapping):
        return headers

    items = getattr(headers, "items", None)
    if callable(items):
        return dict(items())

    try:
        return dict(headers)
    except (TypeError, ValueError):
        return None


def canonical_header_key(name: str) -> str:
    """Return the canonical form of a header name (``content-type`` -> ``Content-Type``)."""
    return "-".join(part.capitalize() for part in str(name).strip().split("-"))


def normalize_headers(headers: Mapping[object, object] | None) -> dict[str, str]:
    """Return a lowercase-keyed copy of a header mapping."""
    coerced = _coerce_headers_mapping(headers)
    if not coerced:
        return {}
    out: dict[str, str] = {}
    for key, value in coerced.items():
        if key is None:
            continue
        name = str(key).strip().lower()
        if not name:
            continue
        out[name] = "" if value is None else str(value)
    return out


def header_value(headers: Mapping[object, object] | None, name: str, default: str = "") -> str:
    """
    Return a header value using case-insensitive key matching.

    Fast-paths common key casings before falling back to a full scan.
    """
    if not headers or not name:
        return default

    coerced = _coerce_headers_mapping(headers)
    if not coerced:
        return default

    lower = str(name).lower()
    for key in (name, lower, canonical_header_key(name)):
        if key in coerced:
            value = coerced.get(key)
            return default if value is None else str(value).strip()

    for key, value in coerced.items():
        if key is None:
            continue
        if str(key).lower() == lower:
            return default if value is None else str(value).strip()

    return default


def set_header(headers: dict[str, str], name: str, value: str) -> None:
    """Set a header, replacing any value stored under another casing."""
    key = canonical_header_key(name)
    for existing in [k for k in headers if k.lower() == key.lower()]:
        del headers[existing]
    headers[key] = value


def add_header(headers: dict[str, str], name: str, value: str) -> None:
    """Append a header value; repeated values are comma-joined (RFC 9110 section 5.3)."""
    current = header_value(headers, name, default="")
    if current:
        set_header(headers, name, f"{current}, {value}")
    else:
        set_header(headers, name, value)


__all__ = ["add_header", "canonical_header_key", "header_value", "normalize_headers", "set_header"]

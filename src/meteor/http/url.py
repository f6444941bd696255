# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""URL helpers used by the request builder."""

from __future__ import annotations

import dataclasses
from collections.abc import Mapping
from typing import Any
from urllib.parse import parse_qsl, urlencode, urljoin, urlsplit, urlunsplit


def slash_it(url: str) -> str:
    """Return ``url`` with exactly one trailing slash."""
    return str(url or "").rstrip("/") + "/"


def resolve_path(base_url: str, path: str) -> str:
    """
    Extend ``base_url`` with ``path`` by RFC 3986 reference resolution.

    The base is treated as a directory, so ``http://h/a`` + ``b`` gives
    ``http://h/a/b`` while ``/b`` stays root-relative.
    """
    if not path:
        return base_url
    base = base_url if base_url.endswith("/") else base_url + "/"
    return urljoin(base, path)


def add_extension(url: str, ext: str) -> str:
    """Append ``.ext`` to the path component, leaving query and fragment alone."""
    ext = str(ext or "").lstrip(".")
    if not ext:
        return url
    parts = urlsplit(url)
    return urlunsplit(parts._replace(path=f"{parts.path}.{ext}"))


def query_pairs(params: Any) -> list[tuple[str, str]]:
    """
    Flatten a mapping or dataclass instance into ``(key, value)`` pairs.

    ``None`` values are dropped, list/tuple values repeat the key, booleans
    encode as ``true``/``false``.
    """
    if params is None:
        return []
    if dataclasses.is_dataclass(params) and not isinstance(params, type):
        params = {f.name: getattr(params, f.name) for f in dataclasses.fields(params)}
    if not isinstance(params, Mapping):
        raise TypeError(f"query parameters must be a mapping or dataclass instance, got {type(params).__name__}")

    pairs: list[tuple[str, str]] = []
    for key, value in params.items():
        if value is None:
            continue
        values = value if isinstance(value, (list, tuple)) else [value]
        for item in values:
            if item is None:
                continue
            if isinstance(item, bool):
                item = "true" if item else "false"
            pairs.append((str(key), str(item)))
    return pairs


def merge_query(url: str, pairs: list[tuple[str, str]]) -> str:
    """Merge ``pairs`` into the query already present on ``url`` (sorted by key)."""
    if not pairs:
        return url
    parts = urlsplit(url)
    existing = parse_qsl(parts.query, keep_blank_values=True)
    merged = sorted(existing + pairs, key=lambda kv: kv[0])
    return urlunsplit(parts._replace(query=urlencode(merged)))


__all__ = ["add_extension", "merge_query", "query_pairs", "resolve_path", "slash_it"]

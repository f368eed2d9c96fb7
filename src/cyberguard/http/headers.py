# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Header normalization utilities.

HTTP header field names are case-insensitive (RFC 9110). Callers pass headers as
plain dicts, so lookups here ignore casing.
"""

from __future__ import annotations

from collections.abc import Mapping


def normalize_headers(headers: Mapping[str, str] | None) -> dict[str, str]:
    """Return a lowercase-keyed copy of a header mapping."""
    out: dict[str, str] = {}
    for key, value in (headers or {}).items():
        if key is None:
            continue
        name = str(key).strip().lower()
        if name:
            out[name] = "" if value is None else str(value)
    return out


def has_header(headers: Mapping[str, str] | None, name: str) -> bool:
    lower = name.lower()
    return any(key is not None and str(key).lower() == lower for key in (headers or {}))


def bearer(token: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {token}"}


__all__ = ["bearer", "has_header", "normalize_headers"]

# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""URL helpers shared across endpoint wrappers."""

from __future__ import annotations

from urllib.parse import quote


def join_url(base_url: str, *segments: str) -> str:
    """
    Append path segments to ``base_url``.

    Literal segments may contain slashes (``"auth/login"``); identifiers are
    passed through :func:`path_param` first so they cannot escape their slot.
    """
    path = "/".join(str(segment).strip("/") for segment in segments if str(segment).strip("/"))
    base = base_url.rstrip("/")
    return f"{base}/{path}" if path else base


def path_param(value: str) -> str:
    """Quote an identifier for use as a single path segment."""
    text = str(value).strip()
    if not text:
        raise ValueError("Empty identifier in request path")
    return quote(text, safe="")


__all__ = ["join_url", "path_param"]

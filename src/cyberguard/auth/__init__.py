# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Token storage and the authenticated transport."""

from .tokens import COOKIES_KEY, LEGACY_TOKEN_KEYS, TOKEN_KEY, FileTokenStore, MemoryTokenStore, TokenStore
from .transport import AuthenticatedTransport

__all__ = [
    "COOKIES_KEY",
    "LEGACY_TOKEN_KEYS",
    "TOKEN_KEY",
    "AuthenticatedTransport",
    "FileTokenStore",
    "MemoryTokenStore",
    "TokenStore",
]

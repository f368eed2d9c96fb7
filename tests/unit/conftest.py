# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

import pytest
from builders import BASE

from cyberguard.auth.tokens import MemoryTokenStore
from cyberguard.config import ClientSettings
from cyberguard.http.adapters import StubHttpClient
from cyberguard.notify import CollectingSink
from cyberguard.session import Session


@pytest.fixture
def settings(tmp_path):
    return ClientSettings(base_url=BASE, max_retries=1, token_path=str(tmp_path / "session.json"))


@pytest.fixture
def stub():
    return StubHttpClient()


@pytest.fixture
def tokens():
    return MemoryTokenStore()


@pytest.fixture
def sink():
    return CollectingSink()


@pytest.fixture
def session(stub, tokens, settings):
    return Session(stub, tokens, settings)

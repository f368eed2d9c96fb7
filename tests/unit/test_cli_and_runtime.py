# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

import json

import httpx
import pytest
from builders import BASE, post_payload, url, user_payload

from cyberguard.auth.tokens import COOKIES_KEY, TOKEN_KEY, FileTokenStore
from cyberguard.cli.main import build_parser, main
from cyberguard.config import ClientSettings
from cyberguard.http.adapters import StubHttpClient
from cyberguard.http.httpx_client import HttpxClient
from cyberguard.runtime import CyberGuard


@pytest.fixture
def env(monkeypatch, tmp_path):
    token_path = tmp_path / "session.json"
    monkeypatch.setenv("CYBERGUARD_API_URL", BASE)
    monkeypatch.setenv("CYBERGUARD_TOKEN_PATH", str(token_path))
    monkeypatch.setenv("CYBERGUARD_HTTP_RETRIES", "1")
    return token_path


def test_parser_requires_command():
    parser = build_parser()
    with pytest.raises(SystemExit):
        parser.parse_args([])
    args = parser.parse_args(["--json", "reports", "submit", "--type", "cyber", "--platform", "x", "--description", "d", "--role", "target"])
    assert args.json is True
    assert args.incident_type == "cyber"
    assert args.severity == "medium"


def test_posts_list_json(env, capsys):
    stub = StubHttpClient()
    stub.add_json("GET", url("posts"), 200, [post_payload("p1"), post_payload("p2")])

    assert main(["--json", "posts", "list"], http_client=stub) == 0

    out = json.loads(capsys.readouterr().out)
    assert [item["_id"] for item in out] == ["p1", "p2"]
    assert stub.closed is True


def test_posts_list_pretty(env, capsys):
    stub = StubHttpClient()
    stub.add_json("GET", url("posts"), 200, [post_payload("p1", reactions=[{"emoji": "💪"}])])

    assert main(["posts", "list"], http_client=stub) == 0

    out = capsys.readouterr().out
    assert "[p1] (verbal)" in out
    assert "💪1" in out


def test_short_report_exits_nonzero_without_request(env, capsys):
    stub = StubHttpClient()
    code = main(
        ["reports", "submit", "--type", "cyber", "--platform", "Discord", "--description", "too short", "--role", "bystander"],
        http_client=stub,
    )
    assert code == 1
    assert stub.requests == []
    assert "at least 10 characters" in capsys.readouterr().err


def test_login_persists_token_and_whoami_resumes(env, capsys):
    stub = StubHttpClient()
    stub.add_json("POST", url("auth/login"), 200, {"token": "persisted", "user": user_payload()})
    assert main(["login", "sam", "--password", "secret1"], http_client=stub) == 0
    assert json.loads(env.read_text()) == {TOKEN_KEY: "persisted"}

    stub = StubHttpClient()
    stub.add_json("GET", url("auth/user"), 200, user_payload())
    assert main(["--json", "whoami"], http_client=stub) == 0
    assert stub.requests[0].headers["Authorization"] == "Bearer persisted"
    assert '"username": "sam"' in capsys.readouterr().out


def test_refresh_cookie_survives_between_runs(env, capsys):
    refresh_cookies = []

    def handler(request: httpx.Request) -> httpx.Response:
        path = request.url.path
        if path == "/api/auth/login":
            return httpx.Response(
                200,
                json={"token": "a1", "user": user_payload()},
                headers={"Set-Cookie": "refreshToken=r1; Path=/; HttpOnly"},
            )
        if path == "/api/auth/refresh":
            refresh_cookies.append(request.headers.get("cookie", ""))
            return httpx.Response(200, json={"accessToken": "a2"})
        if path == "/api/auth/user":
            if request.headers.get("authorization") == "Bearer a2":
                return httpx.Response(200, json=user_payload())
            return httpx.Response(401, json={"msg": "Token expired"})
        return httpx.Response(404)

    def new_client():
        return HttpxClient(ClientSettings(base_url=BASE), client=httpx.Client(transport=httpx.MockTransport(handler)))

    assert main(["login", "sam", "--password", "secret1"], http_client=new_client()) == 0
    saved = json.loads(env.read_text())
    assert saved[TOKEN_KEY] == "a1"
    assert [cookie["name"] for cookie in saved[COOKIES_KEY]] == ["refreshToken"]
    assert env.stat().st_mode & 0o777 == 0o600

    assert main(["--json", "whoami"], http_client=new_client()) == 0
    assert len(refresh_cookies) == 1
    assert "refreshToken=r1" in refresh_cookies[0]
    assert json.loads(env.read_text())[TOKEN_KEY] == "a2"
    assert '"username": "sam"' in capsys.readouterr().out


def test_logout_drops_saved_cookies(env):
    cookie = {"name": "refreshToken", "value": "r1", "domain": "api.test", "path": "/"}
    env.write_text(json.dumps({TOKEN_KEY: "a1", COOKIES_KEY: [cookie]}))
    stub = StubHttpClient()
    stub.add_json("GET", url("auth/user"), 200, user_payload())
    stub.add_json("POST", url("auth/logout"), 200, {"msg": "Logged out"})

    assert main(["logout"], http_client=stub) == 0
    assert not env.exists()


def test_whoami_without_session_fails(env, capsys):
    assert main(["whoami"], http_client=StubHttpClient()) == 1
    assert "Error" in capsys.readouterr().err


def test_admin_command_denied_for_anonymous(env, capsys):
    stub = StubHttpClient()
    assert main(["admin", "stats"], http_client=stub) == 1
    assert stub.requests == []


def test_runtime_wires_shared_session(tmp_path, settings):
    stub = StubHttpClient()
    with CyberGuard(stub, settings=settings) as guard:
        assert isinstance(guard.session.tokens, FileTokenStore)
        assert guard.posts.session is guard.session
        assert guard.moderation.session is guard.session
        assert guard.start() is guard
    assert stub.closed is True

    guard = CyberGuard(StubHttpClient(), settings=settings, persist=False)
    assert not isinstance(guard.session.tokens, FileTokenStore)

from __future__ import annotations

import json
from typing import Any

import pytest

from dwolla_payments.core.client import AuthClient
from dwolla_payments.core.config import DwollaConfig

ROOT = "https://api-sandbox.example.com"


class FakeResp:
    def __init__(
        self,
        status_code: int,
        payload: Any = None,
        *,
        reason: str = "",
        headers: dict | None = None,
        text: str | None = None,
    ) -> None:
        self.status_code = status_code
        self._payload = payload
        self.reason = reason
        self.headers = headers or {}
        if text is None:
            text = "" if payload is None else json.dumps(payload)
        self.text = text
        self.content = text.encode("utf-8")

    def json(self):
        if self._payload is None:
            raise ValueError("No JSON object could be decoded")
        return self._payload


class FakeSession:
    """Records calls and replays canned responses keyed by (method, url)."""

    def __init__(self, token: str = "tok-1", expires_in: int = 3600) -> None:
        self.routes: dict[tuple[str, str], list[FakeResp]] = {}
        self.calls: list[dict[str, Any]] = []
        self.token_calls = 0
        self.token_response = FakeResp(
            200, {"access_token": token, "token_type": "bearer", "expires_in": expires_in}
        )

    def add(self, method: str, url: str, resp: FakeResp) -> None:
        self.routes.setdefault((method, url), []).append(resp)

    def post(self, url, auth=None, data=None, headers=None, timeout=None):
        assert url == f"{ROOT}/token"
        self.token_calls += 1
        self.token_auth = auth
        self.token_data = data
        return self.token_response

    def request(self, method, url, headers=None, data=None, files=None, timeout=None):
        self.calls.append(
            {
                "method": method,
                "url": url,
                "headers": headers,
                "data": data,
                "files": files,
                "timeout": timeout,
            }
        )
        queue = self.routes[(method, url)]
        return queue.pop(0) if len(queue) > 1 else queue[0]


@pytest.fixture
def config() -> DwollaConfig:
    return DwollaConfig(
        client_id="cid",
        client_secret="secret",
        environment="sandbox",
        root_url=ROOT,
        timeout_seconds=5,
    )


@pytest.fixture
def session() -> FakeSession:
    return FakeSession()


@pytest.fixture
def auth(config, session) -> AuthClient:
    return AuthClient(config, session=session)

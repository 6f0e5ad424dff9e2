from __future__ import annotations

import io
import json

import pytest

from conftest import ROOT, FakeResp, FakeSession
from dwolla_payments import DwollaClient, create_dwolla_client
from dwolla_payments import cli
from dwolla_payments.cli import run_cli
from dwolla_payments.core import customer as customers


def test_facade_delegates_to_resource_modules(config, monkeypatch) -> None:
    client = DwollaClient(config, session=FakeSession())
    seen = {}

    def fake_get_customer(auth, customer_id):
        seen["auth"] = auth
        seen["id"] = customer_id
        return "sentinel"

    monkeypatch.setattr(customers, "get_customer", fake_get_customer)

    assert client.get_customer("xyz") == "sentinel"
    assert seen == {"auth": client.auth, "id": "xyz"}


def test_facade_end_to_end_funding_sources(config) -> None:
    session = FakeSession()
    session.add(
        "GET",
        f"{ROOT}/customers/xyz/funding-sources",
        FakeResp(200, {"_embedded": {"funding-sources": []}}),
    )
    client = DwollaClient(config, session=session)

    assert client.list_funding_sources("xyz") == []
    assert client.root_url() == ROOT


def test_create_dwolla_client_from_parameters() -> None:
    client = create_dwolla_client(
        env_file=None,
        base={},
        client_id="cid",
        client_secret="secret",
        environment="production",
    )

    assert client.root_url() == "https://api.dwolla.com"


def test_create_dwolla_client_rejects_config_with_parameters(config) -> None:
    with pytest.raises(ValueError):
        create_dwolla_client(config=config, client_id="other")


def _write_env(tmp_path) -> str:
    env_file = tmp_path / ".env"
    env_file.write_text(
        "DWOLLA_CLIENT_ID=cid\n"
        "DWOLLA_CLIENT_SECRET=secret\n"
        f"DWOLLA_ROOT_URL={ROOT}\n"
    )
    return str(env_file)


def test_cli_prints_transfer(tmp_path, monkeypatch) -> None:
    session = FakeSession()
    session.add(
        "GET",
        f"{ROOT}/transfers/t-1",
        FakeResp(200, {"id": "t-1", "status": "pending", "amount": {"value": "5.00", "currency": "USD"}}),
    )
    monkeypatch.setattr(cli.requests, "Session", lambda: session)
    out = io.StringIO()

    code = run_cli(["--env-file", _write_env(tmp_path), "transfer", "t-1"], out=out)

    assert code == 0
    printed = json.loads(out.getvalue())
    assert printed["id"] == "t-1"
    assert printed["amount"] == {"value": "5.00", "currency": "USD"}


def test_cli_create_transfer_builds_funding_source_links(tmp_path, monkeypatch) -> None:
    session = FakeSession()
    session.add(
        "POST",
        f"{ROOT}/transfers",
        FakeResp(201, headers={"Location": f"{ROOT}/transfers/t-9"}),
    )
    monkeypatch.setattr(cli.requests, "Session", lambda: session)
    out = io.StringIO()

    code = run_cli(
        [
            "--env-file",
            _write_env(tmp_path),
            "create-transfer",
            "--source",
            "src-1",
            "--destination",
            "dst-1",
            "--amount",
            "3",
        ],
        out=out,
    )

    assert code == 0
    assert json.loads(out.getvalue()) == {"id": "t-9"}
    body = json.loads(session.calls[0]["data"])
    assert body["_links"]["source"]["href"] == f"{ROOT}/funding-sources/src-1"


def test_cli_reports_api_errors(tmp_path, monkeypatch) -> None:
    session = FakeSession()
    session.add("GET", f"{ROOT}/customers/xyz", FakeResp(404))
    monkeypatch.setattr(cli.requests, "Session", lambda: session)

    assert run_cli(["--env-file", _write_env(tmp_path), "customer", "xyz"], out=io.StringIO()) == 1


def test_cli_reports_invalid_configuration(tmp_path, monkeypatch) -> None:
    monkeypatch.delenv("DWOLLA_CLIENT_ID", raising=False)
    monkeypatch.delenv("DWOLLA_CLIENT_SECRET", raising=False)
    missing = tmp_path / "missing.env"

    assert run_cli(["--env-file", str(missing), "customers"], out=io.StringIO()) == 1


@pytest.mark.parametrize("amount", ["NaN", "Infinity", "0.001"])
def test_cli_rejects_unrepresentable_amounts(tmp_path, monkeypatch, amount) -> None:
    session = FakeSession()
    monkeypatch.setattr(cli.requests, "Session", lambda: session)

    code = run_cli(
        [
            "--env-file",
            _write_env(tmp_path),
            "create-transfer",
            "--source",
            "src-1",
            "--destination",
            "dst-1",
            "--amount",
            amount,
        ],
        out=io.StringIO(),
    )

    assert code == 1
    assert session.calls == []


def test_cli_set_overrides_dwolla_settings(tmp_path, monkeypatch) -> None:
    session = FakeSession()
    session.add("GET", f"{ROOT}/customers", FakeResp(200, {"_embedded": {"customers": []}}))
    monkeypatch.setattr(cli.requests, "Session", lambda: session)
    env_file = tmp_path / ".env"
    env_file.write_text("DWOLLA_CLIENT_ID=cid\nDWOLLA_CLIENT_SECRET=secret\n")
    out = io.StringIO()

    code = run_cli(
        ["--env-file", str(env_file), "--set", f"dwolla_root_url={ROOT}", "customers"], out=out
    )

    assert code == 0
    assert json.loads(out.getvalue()) == []
    assert session.calls[0]["url"] == f"{ROOT}/customers"


@pytest.mark.parametrize("setting", ["HOME=/tmp", "DWOLLA_ROOT_URL", "=x"])
def test_cli_set_rejects_non_dwolla_settings(tmp_path, setting) -> None:
    with pytest.raises(SystemExit):
        run_cli(["--env-file", _write_env(tmp_path), "--set", setting, "customers"])

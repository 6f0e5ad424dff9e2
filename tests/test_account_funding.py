from __future__ import annotations

import pytest

from conftest import ROOT, FakeResp
from dwolla_payments.core.account import Account, list_account_funding_sources, retrieve_account
from dwolla_payments.core.errors import AuthorizationError, NotFoundError, SerializationError
from dwolla_payments.core.funding import get_funding_source
from dwolla_payments.core.payloads import Link

ACCOUNT_URL = f"{ROOT}/accounts/acc-1"


def test_retrieve_account_follows_root_link(auth, session) -> None:
    session.add("GET", f"{ROOT}/", FakeResp(200, {"_links": {"account": {"href": ACCOUNT_URL}}}))
    session.add(
        "GET",
        ACCOUNT_URL,
        FakeResp(200, {"id": "acc-1", "name": "Master", "_links": {"self": {"href": ACCOUNT_URL}}}),
    )

    account = retrieve_account(auth)

    assert account.id == "acc-1"
    assert account.name == "Master"
    assert [c["url"] for c in session.calls] == [f"{ROOT}/", ACCOUNT_URL]


def test_retrieve_account_without_account_link(auth, session) -> None:
    session.add("GET", f"{ROOT}/", FakeResp(200, {"_links": {}}))

    with pytest.raises(SerializationError, match="no account link"):
        retrieve_account(auth)


def test_retrieve_account_forbidden(auth, session) -> None:
    session.add("GET", f"{ROOT}/", FakeResp(403))

    with pytest.raises(AuthorizationError, match="not authorized to retrieve the account"):
        retrieve_account(auth)


def test_list_account_funding_sources(auth, session) -> None:
    session.add(
        "GET",
        f"{ACCOUNT_URL}/funding-sources",
        FakeResp(
            200,
            {"_embedded": {"funding-sources": [{"id": "bal", "type": "balance", "name": "Balance"}]}},
        ),
    )
    account = Account(id="acc-1", links={"self": Link(href=ACCOUNT_URL)})

    [source] = list_account_funding_sources(auth, account)

    assert source.type == "balance"


def test_get_funding_source(auth, session) -> None:
    session.add(
        "GET",
        f"{ROOT}/funding-sources/fs-1",
        FakeResp(
            200,
            {
                "id": "fs-1",
                "status": "unverified",
                "type": "bank",
                "bankAccountType": "savings",
                "name": "Savings",
                "removed": True,
                "channels": ["ach", "wire"],
            },
        ),
    )

    source = get_funding_source(auth, "fs-1")

    assert source.removed is True
    assert source.bank_account_type == "savings"
    assert source.channels == ("ach", "wire")


def test_get_funding_source_not_found(auth, session) -> None:
    session.add("GET", f"{ROOT}/funding-sources/none", FakeResp(404))

    with pytest.raises(NotFoundError, match="funding source not found"):
        get_funding_source(auth, "none")

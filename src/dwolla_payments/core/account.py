"""
The master account behind the configured credentials.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping

from .client import AuthClient
from .errors import SerializationError
from .funding import FundingSource, funding_sources_from
from .payloads import Link, link_href, parse_links

__all__ = [
    "Account",
    "list_account_funding_sources",
    "retrieve_account",
]


@dataclass(frozen=True)
class Account:
    id: str
    name: str = ""
    links: Dict[str, Link] = field(default_factory=dict)

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> "Account":
        return cls(
            id=payload.get("id", ""),
            name=payload.get("name", ""),
            links=parse_links(payload),
        )


def retrieve_account(client: AuthClient) -> Account:
    """
    Resolve the account through the API root's ``account`` link.
    """
    operation = "retrieve account"
    errors = {
        403: "not authorized to retrieve the account",
        404: "account not found",
    }
    root = client.get_json("/", operation=operation, errors=errors)
    account_href = link_href(parse_links(root), "account")
    if account_href is None:
        raise SerializationError("API root has no account link", operation=operation)
    return Account.from_payload(client.get_json(account_href, operation=operation, errors=errors))


def list_account_funding_sources(client: AuthClient, account: Account) -> List[FundingSource]:
    base = link_href(account.links, "self") or f"/accounts/{account.id}"
    payload = client.get_json(
        f"{base.rstrip('/')}/funding-sources",
        operation="list account funding sources",
        errors={
            403: "not authorized to list funding sources",
            404: "account not found",
        },
    )
    return funding_sources_from(payload)

"""
Funding sources: bank accounts and balances attached to a customer or account.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Tuple

from .client import AuthClient
from .payloads import Link, compact, embedded, links_payload, parse_links

__all__ = [
    "FundingSource",
    "funding_sources_from",
    "get_funding_source",
]

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FundingSource:
    """
    A funding source as represented by the API.

    ``removed`` is a soft-delete flag maintained by Dwolla. When creating a
    bank funding source only ``routing_number``, ``account_number``,
    ``bank_account_type`` and ``name`` are sent (plus an optional
    ``plaid_token`` or on-demand authorization link in ``links``).
    """

    id: str = ""
    status: str = ""
    type: str = ""
    bank_account_type: str = ""
    name: str = ""
    bank_name: str = ""
    account_number: str = ""
    routing_number: str = ""
    plaid_token: str = ""
    created: str = ""
    removed: bool = False
    channels: Tuple[str, ...] = ()
    links: Dict[str, Link] = field(default_factory=dict)

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> "FundingSource":
        return cls(
            id=payload.get("id", ""),
            status=payload.get("status", ""),
            type=payload.get("type", ""),
            bank_account_type=payload.get("bankAccountType", ""),
            name=payload.get("name", ""),
            bank_name=payload.get("bankName", ""),
            account_number=payload.get("accountNumber", ""),
            routing_number=payload.get("routingNumber", ""),
            plaid_token=payload.get("plaidToken", ""),
            created=payload.get("created", ""),
            removed=bool(payload.get("removed", False)),
            channels=tuple(payload.get("channels") or ()),
            links=parse_links(payload),
        )

    def to_payload(self) -> Dict[str, Any]:
        return compact(
            {
                "routingNumber": self.routing_number,
                "accountNumber": self.account_number,
                "bankAccountType": self.bank_account_type,
                "name": self.name,
                "plaidToken": self.plaid_token,
                "channels": list(self.channels),
                "_links": links_payload(self.links),
            }
        )


def funding_sources_from(payload: Mapping[str, Any]) -> List[FundingSource]:
    return [FundingSource.from_payload(item) for item in embedded(payload, "funding-sources")]


def get_funding_source(client: AuthClient, source_id: str) -> FundingSource:
    operation = "retrieve funding source"
    payload = client.get_json(
        f"/funding-sources/{source_id}",
        operation=operation,
        errors={
            403: "not authorized to retrieve the funding source",
            404: "funding source not found",
        },
    )
    source = FundingSource.from_payload(payload)
    if source.removed:
        logger.info("Funding source %s is marked as removed", source.id)
    return source


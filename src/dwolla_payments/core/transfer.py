"""
Transfers between two funding sources, and on-demand authorizations.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal, InvalidOperation
from typing import Any, Dict, List, Mapping, Optional

from .client import AuthClient
from .errors import SerializationError
from .payloads import Link, compact, embedded, link_href, links_payload, parse_links

__all__ = [
    "Amount",
    "Transfer",
    "create_on_demand_authorization",
    "create_transfer",
    "get_transfer",
    "transfers_from",
]

CENT = Decimal("0.01")


@dataclass(frozen=True)
class Amount:
    value: Decimal
    currency: str = "USD"

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> "Amount":
        raw = payload.get("value", "0")
        try:
            value = Decimal(str(raw))
        except InvalidOperation as exc:
            raise SerializationError(f"invalid transfer amount '{raw}'") from exc
        return cls(value=value, currency=payload.get("currency", "USD"))

    def to_payload(self) -> Dict[str, str]:
        return {"currency": self.currency, "value": f"{self.value:.2f}"}


@dataclass(frozen=True)
class Transfer:
    """
    A directed money movement between two funding sources.

    Status changes happen on Dwolla's side only; a fetched transfer is a
    snapshot.
    """

    amount: Amount
    id: str = ""
    status: str = ""
    created: str = ""
    links: Dict[str, Link] = field(default_factory=dict)
    metadata: Dict[str, str] = field(default_factory=dict)

    @classmethod
    def between(
        cls,
        source_href: str,
        destination_href: str,
        value: Decimal | str | int,
        *,
        currency: str = "USD",
        metadata: Optional[Mapping[str, str]] = None,
    ) -> "Transfer":
        """Build a transfer ready for :func:`create_transfer`."""
        try:
            amount = Decimal(str(value))
        except InvalidOperation as exc:
            raise ValueError(f"Transfer amount must be a decimal number, got '{value}'") from exc
        if not amount.is_finite():
            raise ValueError(f"Transfer amount must be a finite number, got '{value}'")
        try:
            cents = amount.quantize(CENT)
        except InvalidOperation as exc:
            raise ValueError(f"Transfer amount {amount} is out of range") from exc
        if cents != amount:
            raise ValueError(
                f"Transfer amount {amount} cannot be represented in whole cents"
            )
        if amount <= 0:
            raise ValueError("Transfer amount must be greater than zero")
        return cls(
            amount=Amount(value=amount, currency=currency),
            links={
                "source": Link(href=source_href),
                "destination": Link(href=destination_href),
            },
            metadata=dict(metadata or {}),
        )

    @property
    def source_href(self) -> Optional[str]:
        return link_href(self.links, "source")

    @property
    def destination_href(self) -> Optional[str]:
        return link_href(self.links, "destination")

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> "Transfer":
        return cls(
            amount=Amount.from_payload(payload.get("amount") or {}),
            id=payload.get("id", ""),
            status=payload.get("status", ""),
            created=payload.get("created", ""),
            links=parse_links(payload),
            metadata=dict(payload.get("metadata") or {}),
        )

    def to_payload(self) -> Dict[str, Any]:
        links = {
            name: link
            for name, link in self.links.items()
            if name in ("source", "destination")
        }
        return compact(
            {
                "_links": links_payload(links),
                "amount": self.amount.to_payload(),
                "metadata": self.metadata,
            }
        )


def _decode_transfer(payload: Mapping[str, Any], operation: str) -> Transfer:
    try:
        return Transfer.from_payload(payload)
    except SerializationError as exc:
        raise SerializationError(exc.message, operation=operation) from exc


def transfers_from(payload: Mapping[str, Any], *, operation: str) -> List[Transfer]:
    return [_decode_transfer(item, operation) for item in embedded(payload, "transfers")]


def create_transfer(client: AuthClient, transfer: Transfer) -> str:
    """
    Initiate ``transfer`` and return the ID Dwolla assigned to it.
    """
    if not transfer.source_href or not transfer.destination_href:
        raise ValueError("A transfer needs both a source and a destination link")
    response = client.request(
        "POST",
        "/transfers",
        operation="create transfer",
        expected=(201,),
        errors={
            400: "transfer validation error",
            403: "not authorized to create transfers",
            404: "account not found",
        },
        json_body=transfer.to_payload(),
    )
    return client.created_id(response, "transfers", operation="create transfer")


def get_transfer(client: AuthClient, transfer_id: str) -> Transfer:
    payload = client.get_json(
        f"/transfers/{transfer_id}",
        operation="retrieve transfer",
        errors={
            403: "not authorized to retrieve the transfer",
            404: "transfer not found",
        },
    )
    return _decode_transfer(payload, "retrieve transfer")


def create_on_demand_authorization(client: AuthClient) -> str:
    """
    Create an on-demand authorization and return its ``self`` link.

    The link is what a bank funding source later references as its
    ``on-demand-authorization`` to allow variable future debits.
    """
    operation = "create on-demand authorization"
    response = client.request(
        "POST",
        "/on-demand-authorizations",
        operation=operation,
        expected=(200,),
        errors={403: "not authorized to create on-demand authorizations"},
        send_content_type=True,
    )
    payload = client.decode(response, operation=operation)
    href = link_href(parse_links(payload), "self")
    if href is None:
        raise SerializationError(
            "on-demand authorization response has no self link", operation=operation
        )
    return href

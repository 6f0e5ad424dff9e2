"""
Customers and everything hanging off them: verification documents, funding
sources, funding-source tokens and transfers.

Operations take the :class:`~dwolla_payments.core.client.AuthClient` they run
through as their first argument; records never hold on to a client.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from typing import Any, BinaryIO, Dict, List, Mapping, Optional

from .client import AuthClient
from .errors import SerializationError
from .funding import FundingSource, funding_sources_from
from .payloads import Link, compact, embedded, link_href, parse_links
from .transfer import Transfer, transfers_from

__all__ = [
    "CUSTOMER_FIELDS",
    "Customer",
    "Document",
    "FundingSourceToken",
    "add_document",
    "create_customer",
    "create_funding_source",
    "create_funding_source_token",
    "create_iav_token",
    "get_customer",
    "get_document",
    "list_customers",
    "list_documents",
    "list_funding_sources",
    "list_transfers",
    "update_customer",
]

logger = logging.getLogger(__name__)

# attribute name -> wire name
CUSTOMER_FIELDS: Mapping[str, str] = {
    "first_name": "firstName",
    "last_name": "lastName",
    "email": "email",
    "type": "type",
    "status": "status",
    "business_name": "businessName",
    "ip_address": "ipAddress",
    "date_of_birth": "dateOfBirth",
    "ssn": "ssn",
    "address1": "address1",
    "address2": "address2",
    "city": "city",
    "state": "state",
    "postal_code": "postalCode",
    "phone": "phone",
    "passport": "passport",
}


@dataclass(frozen=True)
class Customer:
    id: str = ""
    first_name: str = ""
    last_name: str = ""
    email: str = ""
    type: str = ""
    status: str = ""
    business_name: str = ""
    ip_address: str = ""
    created: str = ""
    date_of_birth: str = ""
    ssn: str = ""
    address1: str = ""
    address2: str = ""
    city: str = ""
    state: str = ""
    postal_code: str = ""
    phone: str = ""
    passport: str = ""
    links: Dict[str, Link] = field(default_factory=dict)

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> "Customer":
        values = {attr: payload.get(wire, "") for attr, wire in CUSTOMER_FIELDS.items()}
        return cls(
            id=payload.get("id", ""),
            created=payload.get("created", ""),
            links=parse_links(payload),
            **values,
        )

    def to_payload(self) -> Dict[str, Any]:
        """Serialize the writable fields, leaving out empty ones."""
        return compact(
            {wire: getattr(self, attr) for attr, wire in CUSTOMER_FIELDS.items()}
        )


@dataclass(frozen=True)
class Document:
    id: str = ""
    status: str = ""
    type: str = ""
    created: str = ""
    failure_reason: str = ""
    links: Dict[str, Link] = field(default_factory=dict)

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> "Document":
        return cls(
            id=payload.get("id", ""),
            status=payload.get("status", ""),
            type=payload.get("type", ""),
            created=payload.get("created", ""),
            failure_reason=payload.get("failureReason", ""),
            links=parse_links(payload),
        )


@dataclass(frozen=True)
class FundingSourceToken:
    token: str
    links: Dict[str, Link] = field(default_factory=dict)

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> "FundingSourceToken":
        token = payload.get("token")
        if not token:
            raise SerializationError("token response has no token")
        return cls(token=token, links=parse_links(payload))


def _customer_id(customer: Customer | str) -> str:
    customer_id = customer if isinstance(customer, str) else customer.id
    if not customer_id:
        raise ValueError("customer has no id")
    return customer_id


def create_customer(client: AuthClient, customer: Customer) -> str:
    """
    Create ``customer`` and return the new customer's ID.

    The ID is read from the ``Location`` header of the 201 response.
    """
    response = client.request(
        "POST",
        "/customers",
        operation="create customer",
        expected=(201,),
        errors={
            400: "duplicate customer or validation error",
            403: "not authorized to create customers",
            404: "account not found",
        },
        json_body=customer.to_payload(),
    )
    customer_id = client.created_id(
        response, "customers", operation="create customer"
    )
    logger.info("Created Dwolla customer %s", customer_id)
    return customer_id


def list_customers(client: AuthClient) -> List[Customer]:
    payload = client.get_json(
        "/customers",
        operation="list customers",
        errors={
            403: "not authorized to list customers",
            404: "account not found",
        },
    )
    return [Customer.from_payload(item) for item in embedded(payload, "customers")]


def get_customer(client: AuthClient, customer_id: str) -> Customer:
    payload = client.get_json(
        f"/customers/{customer_id}",
        operation="retrieve customer",
        errors={
            403: "not authorized to retrieve the customer",
            404: "account not found",
        },
    )
    return Customer.from_payload(payload)


def update_customer(
    client: AuthClient,
    customer: Customer | str,
    **fields: Any,
) -> Optional[Customer]:
    """
    Submit a sparse patch for a customer.

    Dwolla uses this one endpoint for several effects, chosen by the fields
    present in the body:

    * profile edit: ``email``, ``address1``, ``city``, ``phone`` ...
    * upgrade to verified: ``type="personal"`` plus ``date_of_birth``,
      ``ssn`` and a full address
    * ``status="suspended"`` / ``"deactivated"`` / ``"reactivated"``
    * retry verification: resend the full verified profile with a corrected
      ``ssn`` (all nine digits)

    Field names are the :class:`Customer` attribute names; empty values are
    not sent. Returns the updated customer when the response echoes it.
    """
    unknown = sorted(set(fields) - set(CUSTOMER_FIELDS))
    if unknown:
        raise TypeError(f"Unknown customer field(s): {', '.join(unknown)}")
    patch = compact({CUSTOMER_FIELDS[name]: value for name, value in fields.items()})
    if not patch:
        raise ValueError("update_customer needs at least one non-empty field")

    operation = "update customer"
    response = client.request(
        "POST",
        f"/customers/{_customer_id(customer)}",
        operation=operation,
        expected=(200,),
        errors={
            400: "customer validation error",
            403: "not authorized to update the customer",
            404: "customer not found",
        },
        json_body=patch,
    )
    if not response.content:
        return None
    return Customer.from_payload(client.decode(response, operation=operation))


def add_document(
    client: AuthClient,
    customer: Customer | str,
    file: BinaryIO,
    document_type: str,
    *,
    filename: Optional[str] = None,
) -> None:
    """
    Upload a verification document (``passport``, ``license``, ``idCard`` or
    ``other``). Only a 201 counts as success; the response body is ignored.
    """
    name = filename or os.path.basename(getattr(file, "name", "") or "document")
    client.request(
        "POST",
        f"/customers/{_customer_id(customer)}/documents",
        operation="upload document",
        expected=(201,),
        errors={
            400: "document validation error",
            403: "not authorized to upload document to customer",
            404: "customer not found",
        },
        files={"file": (name, file)},
        data={"documentType": document_type},
    )


def list_documents(client: AuthClient, customer: Customer | str) -> List[Document]:
    payload = client.get_json(
        f"/customers/{_customer_id(customer)}/documents",
        operation="list documents",
        errors={
            403: "not authorized to list documents",
            404: "customer not found",
        },
    )
    return [Document.from_payload(item) for item in embedded(payload, "documents")]


def get_document(client: AuthClient, document_id: str) -> Document:
    payload = client.get_json(
        f"/documents/{document_id}",
        operation="retrieve document",
        errors={
            403: "not authorized to retrieve the document",
            404: "document not found",
        },
    )
    return Document.from_payload(payload)


def create_funding_source(
    client: AuthClient,
    customer: Customer | str,
    source: FundingSource,
) -> str:
    """Attach a bank funding source to the customer and return its ID."""
    response = client.request(
        "POST",
        f"/customers/{_customer_id(customer)}/funding-sources",
        operation="create funding source",
        expected=(201,),
        errors={
            400: "duplicate funding source or validation error",
            403: "not authorized to create funding source",
            404: "customer not found",
        },
        json_body=source.to_payload(),
    )
    return client.created_id(
        response, "funding-sources", operation="create funding source"
    )


def _mint_token(client: AuthClient, path: str, operation: str) -> str:
    response = client.request(
        "POST",
        path,
        operation=operation,
        expected=(200,),
        errors={
            403: f"not authorized to {operation}",
            404: "customer not found",
        },
        send_content_type=True,
    )
    payload = client.decode(response, operation=operation)
    try:
        return FundingSourceToken.from_payload(payload).token
    except SerializationError as exc:
        raise SerializationError(exc.message, operation=operation) from exc


def create_funding_source_token(client: AuthClient, customer: Customer | str) -> str:
    """Mint a token that lets dwolla.js add a funding source for the customer."""
    return _mint_token(
        client,
        f"/customers/{_customer_id(customer)}/funding-sources-token",
        "create funding source token",
    )


def create_iav_token(client: AuthClient, customer: Customer | str) -> str:
    """Mint an instant account verification token for the customer."""
    return _mint_token(
        client,
        f"/customers/{_customer_id(customer)}/iav-token",
        "create iav token",
    )


def list_funding_sources(client: AuthClient, customer: Customer | str) -> List[FundingSource]:
    payload = client.get_json(
        f"/customers/{_customer_id(customer)}/funding-sources",
        operation="list funding sources",
        errors={
            403: "not authorized to list funding sources",
            404: "customer not found",
        },
    )
    return funding_sources_from(payload)


def list_transfers(client: AuthClient, customer: Customer | str) -> List[Transfer]:
    """
    List the customer's transfers, following its ``self`` link when known.
    """
    self_href = None if isinstance(customer, str) else link_href(customer.links, "self")
    if self_href is not None:
        url = f"{self_href.rstrip('/')}/transfers"
    else:
        url = f"/customers/{_customer_id(customer)}/transfers"
    payload = client.get_json(
        url,
        operation="list transfers",
        errors={
            403: "not authorized to list transfers",
            404: "customer not found",
        },
    )
    return transfers_from(payload, operation="list transfers")

"""
Single entry point over the account, customer, funding-source and transfer
operations.
"""

from __future__ import annotations

from typing import Any, BinaryIO, List, Optional

import requests

from . import account as _account
from . import customer as _customer
from . import funding as _funding
from . import transfer as _transfer
from .account import Account
from .client import AuthClient
from .config import DwollaConfig
from .customer import Customer, Document
from .funding import FundingSource
from .transfer import Transfer

__all__ = ["DwollaClient"]


class DwollaClient:
    """
    Thin convenience wrapper that forwards to the resource modules.

    Every method returns the underlying operation's result unchanged.
    """

    def __init__(
        self,
        config: DwollaConfig,
        *,
        session: Optional[requests.Session] = None,
    ) -> None:
        self.config = config
        self.auth = AuthClient(config, session=session)

    @property
    def session(self) -> requests.Session:
        return self.auth.session

    def root_url(self) -> str:
        return self.auth.root_url()

    def retrieve_account(self) -> Account:
        return _account.retrieve_account(self.auth)

    def list_account_funding_sources(self, account: Account) -> List[FundingSource]:
        return _account.list_account_funding_sources(self.auth, account)

    def create_customer(self, customer: Customer) -> str:
        return _customer.create_customer(self.auth, customer)

    def list_customers(self) -> List[Customer]:
        return _customer.list_customers(self.auth)

    def get_customer(self, customer_id: str) -> Customer:
        return _customer.get_customer(self.auth, customer_id)

    def update_customer(self, customer: Customer | str, **fields: Any) -> Optional[Customer]:
        return _customer.update_customer(self.auth, customer, **fields)

    def add_document(
        self,
        customer: Customer | str,
        file: BinaryIO,
        document_type: str,
        *,
        filename: Optional[str] = None,
    ) -> None:
        return _customer.add_document(
            self.auth, customer, file, document_type, filename=filename
        )

    def list_documents(self, customer: Customer | str) -> List[Document]:
        return _customer.list_documents(self.auth, customer)

    def get_document(self, document_id: str) -> Document:
        return _customer.get_document(self.auth, document_id)

    def create_funding_source(self, customer: Customer | str, source: FundingSource) -> str:
        return _customer.create_funding_source(self.auth, customer, source)

    def create_funding_source_token(self, customer: Customer | str) -> str:
        return _customer.create_funding_source_token(self.auth, customer)

    def create_iav_token(self, customer: Customer | str) -> str:
        return _customer.create_iav_token(self.auth, customer)

    def list_funding_sources(self, customer: Customer | str) -> List[FundingSource]:
        return _customer.list_funding_sources(self.auth, customer)

    def list_transfers(self, customer: Customer | str) -> List[Transfer]:
        return _customer.list_transfers(self.auth, customer)

    def get_funding_source(self, source_id: str) -> FundingSource:
        return _funding.get_funding_source(self.auth, source_id)

    def create_transfer(self, transfer: Transfer) -> str:
        return _transfer.create_transfer(self.auth, transfer)

    def get_transfer(self, transfer_id: str) -> Transfer:
        return _transfer.get_transfer(self.auth, transfer_id)

    def create_on_demand_authorization(self) -> str:
        return _transfer.create_on_demand_authorization(self.auth)

"""
Core primitives for talking to the Dwolla v2 API.
"""

from .account import Account, list_account_funding_sources, retrieve_account
from .client import HAL_JSON, AuthClient
from .config import ConfigError, DwollaConfig, load_dwolla_config
from .customer import (
    Customer,
    Document,
    FundingSourceToken,
    add_document,
    create_customer,
    create_funding_source,
    create_funding_source_token,
    create_iav_token,
    get_customer,
    get_document,
    list_customers,
    list_documents,
    list_funding_sources,
    list_transfers,
    update_customer,
)
from .environment import (
    PRODUCTION,
    ROOT_URLS,
    SANDBOX,
    EnvironmentVariables,
    build_environment,
    load_env_file,
    resolve_root_url,
)
from .errors import (
    AuthError,
    AuthorizationError,
    DwollaError,
    HTTPError,
    NetworkError,
    NotFoundError,
    PassthroughError,
    SerializationError,
    ValidationError,
)
from .facade import DwollaClient
from .funding import FundingSource, get_funding_source
from .payloads import Link
from .transfer import (
    Amount,
    Transfer,
    create_on_demand_authorization,
    create_transfer,
    get_transfer,
)

__all__ = [
    "Account",
    "Amount",
    "AuthClient",
    "AuthError",
    "AuthorizationError",
    "ConfigError",
    "Customer",
    "Document",
    "DwollaClient",
    "DwollaConfig",
    "DwollaError",
    "EnvironmentVariables",
    "FundingSource",
    "FundingSourceToken",
    "HAL_JSON",
    "HTTPError",
    "Link",
    "NetworkError",
    "NotFoundError",
    "PRODUCTION",
    "PassthroughError",
    "ROOT_URLS",
    "SANDBOX",
    "SerializationError",
    "Transfer",
    "ValidationError",
    "add_document",
    "build_environment",
    "create_customer",
    "create_funding_source",
    "create_funding_source_token",
    "create_iav_token",
    "create_on_demand_authorization",
    "create_transfer",
    "get_customer",
    "get_document",
    "get_funding_source",
    "get_transfer",
    "list_account_funding_sources",
    "list_customers",
    "list_documents",
    "list_funding_sources",
    "list_transfers",
    "load_dwolla_config",
    "load_env_file",
    "resolve_root_url",
    "retrieve_account",
    "update_customer",
]

"""
Public facade for the Dwolla payments client package.

The most useful pieces are re-exported here so integrators can
``from dwolla_payments import ...`` without navigating the package.
"""

from .api import create_dwolla_client
from .core import (
    Account,
    Amount,
    AuthClient,
    AuthError,
    AuthorizationError,
    ConfigError,
    Customer,
    Document,
    DwollaClient,
    DwollaConfig,
    DwollaError,
    FundingSource,
    HTTPError,
    Link,
    NetworkError,
    NotFoundError,
    PassthroughError,
    SerializationError,
    Transfer,
    ValidationError,
    build_environment,
    load_dwolla_config,
    load_env_file,
)

__all__ = (
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
    "FundingSource",
    "HTTPError",
    "Link",
    "NetworkError",
    "NotFoundError",
    "PassthroughError",
    "SerializationError",
    "Transfer",
    "ValidationError",
    "build_environment",
    "create_dwolla_client",
    "load_dwolla_config",
    "load_env_file",
)

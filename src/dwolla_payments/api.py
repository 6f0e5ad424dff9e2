"""
Public, high-level helpers for building a Dwolla client.
"""

from __future__ import annotations

from typing import Mapping, Optional

import requests

from .core.config import ConfigError, DwollaConfig, load_dwolla_config
from .core.environment import EnvironmentVariables, build_environment, load_env_file
from .core.facade import DwollaClient

__all__ = [
    "ConfigError",
    "DwollaClient",
    "DwollaConfig",
    "EnvironmentVariables",
    "build_environment",
    "create_dwolla_client",
    "load_dwolla_config",
    "load_env_file",
]


def create_dwolla_client(
    *,
    config: Optional[DwollaConfig] = None,
    session: Optional[requests.Session] = None,
    env_file: Optional[str] = ".env",
    overrides: Optional[Mapping[str, str]] = None,
    base: Optional[Mapping[str, str]] = None,
    client_id: Optional[str] = None,
    client_secret: Optional[str] = None,
    environment: Optional[str] = None,
    root_url: Optional[str] = None,
    timeout_seconds: Optional[int | str] = None,
) -> DwollaClient:
    """
    Construct a :class:`DwollaClient`.

    Callers can either supply a ready-made :class:`DwollaConfig` or let the
    helper assemble one from environment data and keyword arguments.
    """
    if config is not None:
        extras = (
            overrides,
            base,
            client_id,
            client_secret,
            environment,
            root_url,
            timeout_seconds,
        )
        if any(item is not None and item != {} for item in extras):
            raise ValueError(
                "Provide either a pre-built DwollaConfig or individual parameters, not both."
            )
        cfg = config
    else:
        cfg = load_dwolla_config(
            env_file=env_file,
            overrides=overrides,
            base=base,
            client_id=client_id,
            client_secret=client_secret,
            environment=environment,
            root_url=root_url,
            timeout_seconds=timeout_seconds,
        )
    return DwollaClient(cfg, session=session)

"""
Configuration objects and helpers for the Dwolla client.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional

from .environment import ROOT_URLS, build_environment, resolve_root_url

__all__ = [
    "ConfigError",
    "DwollaConfig",
    "load_dwolla_config",
]

_PARAMETER_TO_ENV_KEY = {
    "client_id": "DWOLLA_CLIENT_ID",
    "client_secret": "DWOLLA_CLIENT_SECRET",
    "environment": "DWOLLA_ENVIRONMENT",
    "root_url": "DWOLLA_ROOT_URL",
    "timeout_seconds": "DWOLLA_HTTP_TIMEOUT_SECONDS",
}


class ConfigError(Exception):
    """Raised when the supplied configuration is invalid."""


def _collect_parameter_overrides(explicit: Mapping[str, Any]) -> Dict[str, str]:
    overrides: Dict[str, str] = {}
    for key, value in explicit.items():
        if value is None:
            continue
        try:
            env_key = _PARAMETER_TO_ENV_KEY[key]
        except KeyError as exc:  # pragma: no cover - defensive, should not trigger
            raise TypeError(f"Unknown Dwolla parameter '{key}'") from exc
        overrides[env_key] = str(value)
    return overrides


def _require(values: Mapping[str, str], key: str) -> str:
    raw = values.get(key)
    if raw is None or not raw.strip():
        raise ConfigError(f"{key} must be provided")
    return raw.strip()


def _parse_timeout(raw: str) -> int:
    try:
        timeout = int(raw)
    except ValueError as exc:
        raise ConfigError(
            f"DWOLLA_HTTP_TIMEOUT_SECONDS must be an integer, got '{raw}'"
        ) from exc
    if timeout <= 0:
        raise ConfigError("DWOLLA_HTTP_TIMEOUT_SECONDS must be greater than zero")
    return timeout


@dataclass(frozen=True)
class DwollaConfig:
    client_id: str
    client_secret: str = field(repr=False)
    environment: str = "sandbox"
    root_url: str = ROOT_URLS["sandbox"]
    timeout_seconds: int = 30

    @classmethod
    def from_mapping(cls, values: Mapping[str, str]) -> "DwollaConfig":
        client_id = _require(values, "DWOLLA_CLIENT_ID")
        client_secret = _require(values, "DWOLLA_CLIENT_SECRET")

        environment = (values.get("DWOLLA_ENVIRONMENT") or "sandbox").strip().lower()
        try:
            default_root = resolve_root_url(environment)
        except KeyError as exc:
            raise ConfigError(
                f"DWOLLA_ENVIRONMENT must be one of {sorted(ROOT_URLS)}, got '{environment}'"
            ) from exc

        root_url = (values.get("DWOLLA_ROOT_URL") or default_root).strip().rstrip("/")
        if not root_url.startswith(("https://", "http://")):
            raise ConfigError(f"DWOLLA_ROOT_URL must be an http(s) URL, got '{root_url}'")

        timeout_seconds = _parse_timeout(values.get("DWOLLA_HTTP_TIMEOUT_SECONDS", "30"))

        return cls(
            client_id=client_id,
            client_secret=client_secret,
            environment=environment,
            root_url=root_url,
            timeout_seconds=timeout_seconds,
        )

    @classmethod
    def from_env(
        cls,
        *,
        env_file: Optional[str] = ".env",
        overrides: Optional[Mapping[str, str]] = None,
        base: Optional[Mapping[str, str]] = None,
        client_id: Optional[str] = None,
        client_secret: Optional[str] = None,
        environment: Optional[str] = None,
        root_url: Optional[str] = None,
        timeout_seconds: Optional[int | str] = None,
    ) -> "DwollaConfig":
        parameter_overrides = _collect_parameter_overrides(
            {
                "client_id": client_id,
                "client_secret": client_secret,
                "environment": environment,
                "root_url": root_url,
                "timeout_seconds": timeout_seconds,
            }
        )
        merged_overrides = dict(overrides or {})
        merged_overrides.update(parameter_overrides)

        variables = build_environment(
            env_file=env_file,
            base=base,
            overrides=merged_overrides,
        )
        return cls.from_mapping(variables.variables)


def load_dwolla_config(
    *,
    env_file: Optional[str] = ".env",
    overrides: Optional[Mapping[str, str]] = None,
    base: Optional[Mapping[str, str]] = None,
    client_id: Optional[str] = None,
    client_secret: Optional[str] = None,
    environment: Optional[str] = None,
    root_url: Optional[str] = None,
    timeout_seconds: Optional[int | str] = None,
) -> DwollaConfig:
    """
    Convenience wrapper that mirrors :meth:`DwollaConfig.from_env`.

    Credentials can come from environment variables, a ``.env`` file, direct
    keyword arguments, or any combination of the three.
    """
    return DwollaConfig.from_env(
        env_file=env_file,
        overrides=overrides,
        base=base,
        client_id=client_id,
        client_secret=client_secret,
        environment=environment,
        root_url=root_url,
        timeout_seconds=timeout_seconds,
    )

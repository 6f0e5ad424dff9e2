"""
Environment handling for the Dwolla client.

Two concerns live here: the fixed mapping from a named Dwolla environment
(``production`` or ``sandbox``) to its API root URL, and the layering of
``.env`` files, process environment and explicit overrides into a plain
mapping that :class:`dwolla_payments.core.config.DwollaConfig` can consume.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Mapping, MutableMapping, Optional

__all__ = [
    "PRODUCTION",
    "SANDBOX",
    "ROOT_URLS",
    "EnvironmentVariables",
    "build_environment",
    "load_env_file",
    "resolve_root_url",
]

PRODUCTION = "production"
SANDBOX = "sandbox"

ROOT_URLS: Mapping[str, str] = {
    PRODUCTION: "https://api.dwolla.com",
    SANDBOX: "https://api-sandbox.dwolla.com",
}


def resolve_root_url(environment: str) -> str:
    """
    Return the API root URL for ``environment``.

    Raises :class:`KeyError` for anything other than ``production`` or
    ``sandbox``; callers translate that into a configuration error.
    """
    return ROOT_URLS[environment.strip().lower()]


def _parse_env_file(path: Path) -> Dict[str, str]:
    values: Dict[str, str] = {}
    try:
        data = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        return values

    for raw_line in data.splitlines():
        line = raw_line.strip()
        if not line or line.startswith("#") or "=" not in line:
            continue
        key, value = line.split("=", 1)
        value = value.strip()
        if len(value) >= 2 and value[0] == value[-1] and value[0] in "\"'":
            value = value[1:-1]
        values[key.strip()] = value
    return values


def load_env_file(
    path: str = ".env",
    *,
    environ: Optional[MutableMapping[str, str]] = None,
) -> Dict[str, str]:
    """
    Copy the ``DWOLLA_*`` variables found in ``path`` into ``environ``.

    Keys already present in ``environ`` are left alone, and other variables in
    the file are ignored. Returns only the keys that were actually set, so
    callers can tell what the file contributed.
    """
    target: MutableMapping[str, str] = environ if environ is not None else os.environ
    loaded: Dict[str, str] = {}
    for key, value in _parse_env_file(Path(path)).items():
        if not key.startswith("DWOLLA_") or key in target:
            continue
        target[key] = value
        loaded[key] = value
    return loaded


@dataclass(frozen=True)
class EnvironmentVariables:
    """
    A resolved set of variables used to configure the client.
    """

    variables: Mapping[str, str]

    def get(self, key: str, default: Optional[str] = None) -> Optional[str]:
        return self.variables.get(key, default)


def build_environment(
    *,
    env_file: Optional[str] = ".env",
    base: Optional[Mapping[str, str]] = None,
    overrides: Optional[Mapping[str, str]] = None,
) -> EnvironmentVariables:
    """
    Assemble :class:`EnvironmentVariables` from multiple sources.

    ``base`` defaults to :data:`os.environ`. Values from ``env_file`` only fill
    keys missing from ``base``; pass ``None`` to skip the file. ``overrides``
    always win.
    """
    merged: Dict[str, str] = dict(os.environ if base is None else base)

    if env_file is not None:
        for key, value in _parse_env_file(Path(env_file)).items():
            merged.setdefault(key, value)

    if overrides:
        merged.update(overrides)

    return EnvironmentVariables(variables=merged)

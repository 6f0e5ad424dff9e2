"""
HTTP client helpers for the Dwolla API.

:class:`AuthClient` owns the credentials, the root URL and the bearer token
cache. Every resource module goes through :meth:`AuthClient.request`, which
attaches the headers, sends the call and turns unexpected status codes into
the errors defined in :mod:`dwolla_payments.core.errors`.
"""

from __future__ import annotations

import json
import logging
import threading
import time
from typing import Any, Collection, Dict, Mapping, Optional

import requests

from .config import DwollaConfig
from .errors import AuthError, NetworkError, SerializationError, error_for_status

__all__ = [
    "HAL_JSON",
    "AuthClient",
]

logger = logging.getLogger(__name__)

HAL_JSON = "application/vnd.dwolla.v1.hal+json"

# Refresh this many seconds before the vendor-reported expiry.
TOKEN_EXPIRY_LEEWAY_SECONDS = 60


class AuthClient:
    """
    Authenticated access to a single Dwolla environment.

    The instance is safe to share between threads: the only mutable state is
    the cached token, which is read and refreshed under a lock.
    """

    def __init__(
        self,
        config: DwollaConfig,
        *,
        session: Optional[requests.Session] = None,
        clock=time.monotonic,
    ) -> None:
        self.config = config
        self.session = session or requests.Session()
        self._clock = clock
        self._lock = threading.Lock()
        self._token: Optional[str] = None
        self._token_expires_at = 0.0

    def root_url(self) -> str:
        return self.config.root_url

    def url_for(self, path_or_url: str) -> str:
        """Join ``path_or_url`` to the root URL unless it is already absolute."""
        if path_or_url.startswith(("https://", "http://")):
            return path_or_url
        return f"{self.config.root_url}/{path_or_url.lstrip('/')}"

    def token(self) -> str:
        """
        Return a bearer token, fetching a new one when the cache is empty or stale.
        """
        with self._lock:
            if self._token is not None and self._clock() < self._token_expires_at:
                return self._token
            token, expires_in = self._fetch_token()
            self._token = token
            self._token_expires_at = self._clock() + max(
                expires_in - TOKEN_EXPIRY_LEEWAY_SECONDS, 0
            )
            return token

    def invalidate_token(self) -> None:
        with self._lock:
            self._token = None
            self._token_expires_at = 0.0

    def _fetch_token(self) -> tuple[str, int]:
        token_url = self.url_for("/token")
        logger.info("Requesting Dwolla access token from %s", token_url)
        try:
            response = self.session.post(
                token_url,
                auth=(self.config.client_id, self.config.client_secret),
                data={"grant_type": "client_credentials"},
                headers={"Accept": "application/json"},
                timeout=self.config.timeout_seconds,
            )
        except requests.RequestException as exc:
            raise AuthError(
                f"failed to reach token endpoint: {exc}", operation="get auth token"
            ) from exc

        if response.status_code != 200:
            raise AuthError(
                f"token request rejected with {response.status_code} {response.reason}",
                operation="get auth token",
            )
        try:
            payload = response.json()
            token = payload["access_token"]
        except (ValueError, KeyError, TypeError) as exc:
            raise AuthError(
                "token response did not contain an access_token",
                operation="get auth token",
            ) from exc
        return token, int(payload.get("expires_in", 3600))

    def _headers(self, *, json_body: bool, operation: str) -> Dict[str, str]:
        try:
            token = self.token()
        except AuthError as exc:
            raise AuthError(
                f"failed to get auth token: {exc.message}", operation=operation
            ) from exc
        headers = {
            "Authorization": f"Bearer {token}",
            "Accept": HAL_JSON,
        }
        if json_body:
            headers["Content-Type"] = HAL_JSON
        return headers

    def request(
        self,
        method: str,
        path_or_url: str,
        *,
        operation: str,
        expected: Collection[int] = (200,),
        errors: Optional[Mapping[int, str]] = None,
        json_body: Optional[Mapping[str, Any]] = None,
        files: Optional[Mapping[str, Any]] = None,
        data: Optional[Mapping[str, str]] = None,
        send_content_type: bool = False,
    ) -> requests.Response:
        """
        Send one authenticated request and return the raw response.

        ``expected`` lists the status codes treated as success; anything else
        is raised through :func:`error_for_status` using the ``errors`` map.
        ``send_content_type`` forces the vendor content type on calls that
        POST without a body.
        """
        url = self.url_for(path_or_url)
        body: Optional[str] = None
        if json_body is not None:
            try:
                body = json.dumps(json_body)
            except (TypeError, ValueError) as exc:
                raise SerializationError(
                    f"error encoding request body: {exc}", operation=operation
                ) from exc

        headers = self._headers(
            json_body=body is not None or send_content_type, operation=operation
        )

        logger.debug("%s %s (%s)", method, url, operation)
        try:
            response = self.session.request(
                method,
                url,
                headers=headers,
                data=body if body is not None else data,
                files=files,
                timeout=self.config.timeout_seconds,
            )
        except requests.RequestException as exc:
            raise NetworkError(
                f"failed to make request to dwolla api: {exc}", operation=operation
            ) from exc

        if response.status_code in expected:
            return response

        if response.status_code == 400:
            logger.warning(
                "Dwolla rejected %s %s with 400: %s", method, url, response.text
            )
        raise error_for_status(
            response.status_code,
            f"{response.status_code} {response.reason}".strip(),
            messages=errors,
            body=response.text,
            operation=operation,
        )

    @staticmethod
    def decode(response: requests.Response, *, operation: str) -> Dict[str, Any]:
        """Decode a JSON response body, raising :class:`SerializationError`."""
        try:
            payload = response.json()
        except ValueError as exc:
            raise SerializationError(
                f"error parsing JSON response: {response.text}", operation=operation
            ) from exc
        if not isinstance(payload, dict):
            raise SerializationError(
                f"expected a JSON object, got {type(payload).__name__}",
                operation=operation,
            )
        return payload

    def get_json(self, path_or_url: str, *, operation: str, errors=None) -> Dict[str, Any]:
        response = self.request("GET", path_or_url, operation=operation, errors=errors)
        return self.decode(response, operation=operation)

    def created_id(
        self, response: requests.Response, collection: str, *, operation: str
    ) -> str:
        """
        Extract the new resource's ID from a 201 ``Location`` header.

        The ``<root>/<collection>/`` prefix is stripped; a Location outside the
        configured root falls back to its last path segment.
        """
        location = (response.headers.get("Location") or "").strip()
        if not location.rstrip("/"):
            raise SerializationError(
                "created response has no Location header", operation=operation
            )
        prefix = f"{self.config.root_url}/{collection}/"
        if location.startswith(prefix):
            return location[len(prefix):]
        return location.rstrip("/").rsplit("/", 1)[-1]

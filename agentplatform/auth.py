"""
OAuth2 client-credentials token handling.

TokenFetcher performs the token exchange against the identity provider and
TokenCache keeps a single in-memory bearer token, refreshing it at most once
at a time no matter how many threads ask for it concurrently.

Tokens live in process memory only and are lost on restart. The
client-credentials grant issues no refresh token, so an expired token is
simply replaced by a new grant.
"""

import base64
import threading
import time
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

import httpx

from agentplatform.exceptions import AuthError
from agentplatform.logging import (
    get_logger,
    log_http_request,
    log_http_response,
    log_token_refresh,
    preview_body,
)

logger = get_logger("auth")

# Safety margin subtracted from the advertised token lifetime
SKEW_SECONDS = 10

# Lifetime assumed when the token response carries no expires_in
DEFAULT_EXPIRES_IN = 900

TOKEN_PATH = "/connect/token"


@dataclass(frozen=True)
class TokenGrant:
    """Parsed response of a successful client-credentials exchange."""

    access_token: str
    expires_in: float


@dataclass(frozen=True)
class CachedToken:
    """Immutable bearer token plus the epoch timestamp of its advertised expiry."""

    value: str
    expires_at: float

    @classmethod
    def empty(cls) -> "CachedToken":
        return cls(value="", expires_at=0.0)

    @classmethod
    def from_grant(cls, grant: TokenGrant, fetched_at: float) -> "CachedToken":
        return cls(value=grant.access_token, expires_at=fetched_at + grant.expires_in)

    def is_valid(self, now: float) -> bool:
        return bool(self.value.strip()) and now < self.expires_at - SKEW_SECONDS


class TokenFetcher:
    """
    Performs the OAuth2 client-credentials exchange with Basic authentication.

    Sends ``grant_type=client_credentials`` to ``{oauth_base_url}/connect/token``
    and parses ``access_token`` and the optional ``expires_in`` from the JSON reply.
    """

    def __init__(
        self,
        client_id: str,
        client_secret: str,
        oauth_base_url: str,
        timeout: float = 30.0,
        http_client: httpx.Client | None = None,
    ) -> None:
        """
        Initialize the token fetcher.

        Args:
            client_id: OAuth2 client identifier
            client_secret: OAuth2 client secret
            oauth_base_url: Base URL of the identity provider
            timeout: Connect and read timeout in seconds
            http_client: Optional pre-built httpx client (closed by the caller)
        """
        self.client_id = client_id
        self.token_url = oauth_base_url.rstrip("/") + TOKEN_PATH
        self._client_secret = client_secret
        self._owns_client = http_client is None
        self._client = http_client or httpx.Client(timeout=timeout)

    def close(self) -> None:
        """Close the HTTP client if this fetcher created it."""
        if self._owns_client:
            self._client.close()

    def _basic_credentials(self) -> str:
        raw = f"{self.client_id}:{self._client_secret}".encode("utf-8")
        return base64.b64encode(raw).decode("ascii")

    def fetch(self) -> TokenGrant:
        """
        Request a new access token.

        Returns:
            TokenGrant with the trimmed token and its advertised lifetime

        Raises:
            AuthError: On network failure, non-2xx status, or an unusable body
        """
        headers = {
            "Authorization": f"Basic {self._basic_credentials()}",
            "Accept": "application/json",
            "Content-Type": "application/x-www-form-urlencoded",
        }
        log_http_request("POST", self.token_url, headers=headers)

        started = time.perf_counter()
        try:
            response = self._client.post(
                self.token_url,
                data={"grant_type": "client_credentials"},
                headers=headers,
            )
        except httpx.RequestError as e:
            logger.error("Error requesting OAuth token from %s: %s", self.token_url, e)
            raise AuthError(
                "TOKEN_REQUEST_FAILED",
                f"Failed to request OAuth token: {e}",
                endpoint="token",
            ) from e
        elapsed_ms = (time.perf_counter() - started) * 1000
        log_http_response(response.status_code, self.token_url, elapsed_ms=elapsed_ms)

        if not response.is_success:
            logger.error(
                "Token endpoint %s returned HTTP %d", self.token_url, response.status_code
            )
            raise AuthError(
                "TOKEN_HTTP_ERROR",
                f"Failed to obtain access token. HTTP {response.status_code}: "
                f"{preview_body(response.text)}",
                endpoint="token",
                status_code=response.status_code,
            )

        try:
            data = response.json()
        except ValueError as e:
            raise AuthError(
                "TOKEN_INVALID_RESPONSE",
                "Token response is not valid JSON",
                endpoint="token",
                status_code=response.status_code,
            ) from e

        grant = self._parse_grant(data)
        log_token_refresh(self.token_url, grant.expires_in)
        return grant

    def _parse_grant(self, data: Any) -> TokenGrant:
        if not isinstance(data, dict):
            raise AuthError(
                "TOKEN_INVALID_RESPONSE",
                "Token response is not a JSON object",
                endpoint="token",
            )

        token = data.get("access_token")
        if not isinstance(token, str) or not token.strip():
            raise AuthError(
                "TOKEN_INVALID_RESPONSE",
                "Token response has no access_token",
                endpoint="token",
            )

        expires_in = data.get("expires_in", DEFAULT_EXPIRES_IN)
        # bool is an int subclass but never a lifetime
        if isinstance(expires_in, bool) or not isinstance(expires_in, (int, float)):
            raise AuthError(
                "TOKEN_INVALID_RESPONSE",
                f"Token response has non-numeric expires_in: {expires_in!r}",
                endpoint="token",
            )

        return TokenGrant(access_token=token.strip(), expires_in=float(expires_in))


class TokenCache:
    """
    Process-wide cache for a single bearer token.

    The fast path reads the current token without locking. Refreshes are
    serialized by a lock with a second validity check inside it, so
    concurrent callers that find the token expired trigger exactly one fetch
    and all observe the same new token.

    Example:
        ```python
        fetcher = TokenFetcher("client-id", "secret", "https://idp.example.com")
        cache = TokenCache(fetcher)
        token = cache.get_access_token()
        ```
    """

    def __init__(
        self,
        fetcher: TokenFetcher,
        clock: Callable[[], float] = time.time,
    ) -> None:
        """
        Initialize the token cache.

        Args:
            fetcher: Anything with a ``fetch() -> TokenGrant`` method
            clock: Returns the current time as epoch seconds
        """
        self._fetcher = fetcher
        self._clock = clock
        self._lock = threading.Lock()
        self._token = CachedToken.empty()

    @property
    def cached_token(self) -> CachedToken:
        """The currently cached token (possibly expired or empty)."""
        return self._token

    def get_access_token(self) -> str:
        """
        Return a valid access token, fetching a new one only when needed.

        Raises:
            AuthError: If the token fetch fails; the previous token is kept
        """
        snapshot = self._token
        if snapshot.is_valid(self._clock()):
            return snapshot.value

        with self._lock:
            snapshot = self._token
            if snapshot.is_valid(self._clock()):
                return snapshot.value

            fetched_at = self._clock()
            grant = self._fetcher.fetch()
            self._token = CachedToken.from_grant(grant, fetched_at)
            logger.debug("Cached new access token, expires_at=%.0f", self._token.expires_at)
            return self._token.value

    def invalidate(self) -> None:
        """Drop the cached token so the next call fetches a new one."""
        with self._lock:
            self._token = CachedToken.empty()

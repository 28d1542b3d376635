"""
Agent Platform client logging utilities.

Provides configurable logging for HTTP requests/responses and token refreshes.
Ensures no credentials (client secrets, bearer tokens, Basic auth headers) are logged.
"""

import logging
import re
from typing import Any

# Create SDK-specific loggers
_sdk_logger = logging.getLogger("agentplatform")
_http_logger = logging.getLogger("agentplatform.http")
_auth_logger = logging.getLogger("agentplatform.auth")

# Patterns for sensitive data that should be masked
_SENSITIVE_PATTERNS = [
    # Authorization header values
    (re.compile(r"\b(Bearer|Basic)\s+[A-Za-z0-9\-._~+/]+=*"), r"\1 [REDACTED]"),
    # JSON-style secret/token fields
    (
        re.compile(
            r'"(access_token|client_secret|secret|token|password|api_key)"\s*:\s*"[^"]*"',
            re.IGNORECASE,
        ),
        r'"\1": "[REDACTED]"',
    ),
    # key=value / key: 'value' forms
    (
        re.compile(
            r"(access_token|client_secret|secret|token|password|api_key)['\"]?\s*[:=]\s*['\"]?[^'\"&\s,}\[]+['\"]?",
            re.IGNORECASE,
        ),
        r"\1: [REDACTED]",
    ),
]

_DEFAULT_SENSITIVE_KEYS = {
    "authorization",
    "secret",
    "token",
    "password",
    "api_key",
}

# Maximum length of response text kept in error messages
_BODY_PREVIEW_LENGTH = 200


def configure_logging(
    level: int = logging.INFO,
    http_level: int | None = None,
    auth_level: int | None = None,
    handler: logging.Handler | None = None,
    format_string: str | None = None,
) -> None:
    """
    Configure Agent Platform client logging.

    Args:
        level: Default log level for all SDK loggers (default: INFO)
        http_level: Log level for HTTP request/response logging (default: same as level)
        auth_level: Log level for token operations (default: same as level)
        handler: Custom handler to use (default: StreamHandler to stderr)
        format_string: Custom format string (default: includes timestamp, level, logger name)

    Example:
        ```python
        import logging
        from agentplatform.logging import configure_logging

        # Enable debug logging for HTTP requests
        configure_logging(level=logging.INFO, http_level=logging.DEBUG)
        ```
    """
    if format_string is None:
        format_string = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

    formatter = logging.Formatter(format_string)

    if handler is None:
        handler = logging.StreamHandler()

    handler.setFormatter(formatter)

    _sdk_logger.setLevel(level)
    _sdk_logger.addHandler(handler)

    _http_logger.setLevel(http_level if http_level is not None else level)
    _auth_logger.setLevel(auth_level if auth_level is not None else level)


def get_logger(name: str | None = None) -> logging.Logger:
    """
    Get an Agent Platform client logger.

    Args:
        name: Logger name suffix (e.g., "http", "auth"). If None, returns main SDK logger.

    Returns:
        Logger instance
    """
    if name is None:
        return _sdk_logger
    return logging.getLogger(f"agentplatform.{name}")


def mask_sensitive_data(text: str) -> str:
    """
    Mask sensitive data in a string.

    Replaces bearer/basic credentials and secret or token values
    with redacted placeholders.
    """
    result = text
    for pattern, replacement in _SENSITIVE_PATTERNS:
        result = pattern.sub(replacement, result)
    return result


def preview_body(text: str) -> str:
    """Return a masked, length-capped excerpt of a response body for error messages."""
    masked = mask_sensitive_data(text.strip())
    if len(masked) <= _BODY_PREVIEW_LENGTH:
        return masked
    return masked[:_BODY_PREVIEW_LENGTH] + "..."


def safe_log_dict(data: dict[str, Any], sensitive_keys: set[str] | None = None) -> dict[str, Any]:
    """
    Create a copy of a dictionary with sensitive values masked.

    Args:
        data: Dictionary that may contain sensitive values
        sensitive_keys: Key fragments to mask (default: authorization, secret, token, password, api_key)

    Returns:
        Dictionary with sensitive values replaced with "[REDACTED]"
    """
    if sensitive_keys is None:
        sensitive_keys = _DEFAULT_SENSITIVE_KEYS

    result: dict[str, Any] = {}
    for key, value in data.items():
        key_lower = key.lower()
        if any(sk in key_lower for sk in sensitive_keys):
            result[key] = "[REDACTED]"
        elif isinstance(value, dict):
            result[key] = safe_log_dict(value, sensitive_keys)
        elif isinstance(value, list):
            result[key] = [
                safe_log_dict(item, sensitive_keys) if isinstance(item, dict) else item
                for item in value
            ]
        else:
            result[key] = value

    return result


def log_http_request(
    method: str,
    url: str,
    headers: dict[str, str] | None = None,
    body: dict[str, Any] | None = None,
) -> None:
    """Log an HTTP request at DEBUG level with sensitive data masked."""
    if not _http_logger.isEnabledFor(logging.DEBUG):
        return

    log_parts = [f"{method} {url}"]

    if headers:
        log_parts.append(f"headers={safe_log_dict(headers)}")

    if body:
        log_parts.append(f"body={safe_log_dict(body)}")

    _http_logger.debug(" | ".join(log_parts))


def log_http_response(
    status_code: int,
    url: str,
    body: dict[str, Any] | None = None,
    elapsed_ms: float | None = None,
) -> None:
    """Log an HTTP response at DEBUG level with sensitive data masked."""
    if not _http_logger.isEnabledFor(logging.DEBUG):
        return

    log_parts = [f"Response {status_code} from {url}"]

    if elapsed_ms is not None:
        log_parts.append(f"elapsed={elapsed_ms:.2f}ms")

    if body:
        log_parts.append(f"body={safe_log_dict(body)}")

    _http_logger.debug(" | ".join(log_parts))


def log_token_refresh(token_url: str, expires_in: float) -> None:
    """
    Log a successful token refresh at INFO level.

    Only the endpoint and the advertised lifetime are logged, never the token.
    """
    _auth_logger.info(
        "Obtained access token from %s, expires_in=%ds", token_url, int(expires_in)
    )


# Export public API
__all__ = [
    "configure_logging",
    "get_logger",
    "mask_sensitive_data",
    "preview_body",
    "safe_log_dict",
    "log_http_request",
    "log_http_response",
    "log_token_refresh",
]

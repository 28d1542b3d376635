"""Agent Platform client exception classes."""


class AgentPlatformError(Exception):
    """Base exception for all Agent Platform client errors."""

    def __init__(
        self,
        code: str,
        message: str,
        endpoint: str | None = None,
        status_code: int | None = None,
    ) -> None:
        self.code = code
        self.message = message
        self.endpoint = endpoint
        self.status_code = status_code
        super().__init__(f"[{code}] {message}")


class ConfigurationError(AgentPlatformError):
    """Raised when client configuration is invalid or missing."""

    def __init__(self, message: str) -> None:
        super().__init__("CONFIGURATION_ERROR", message)


class ValidationError(AgentPlatformError):
    """Raised when caller-supplied input violates a precondition."""

    def __init__(self, message: str) -> None:
        super().__init__("VALIDATION_ERROR", message)


class AuthError(AgentPlatformError):
    """Raised when an access token cannot be obtained from the identity provider."""

    pass


class UpstreamError(AgentPlatformError):
    """Raised when the Agent Platform is unreachable, rejects a call, or
    returns a response of unexpected shape."""

    pass

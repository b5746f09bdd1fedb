"""Error types for the coach proxy.

Every error carries the HTTP status and the message returned to the caller
as ``{"error": message}``. Anything not derived from CoachProxyError is
reported as a 500 by the route.
"""

RATE_LIMIT_MESSAGE = "Rate limit exceeded. Please try again in a moment."
CREDITS_DEPLETED_MESSAGE = "AI credits depleted. Please add credits to continue."


class CoachProxyError(Exception):
    """Base error for a request that could not be answered."""

    status_code: int = 500

    def __init__(self, message: str, status_code: int | None = None):
        self.message = message
        if status_code is not None:
            self.status_code = status_code
        super().__init__(self.message)


class ConfigurationError(CoachProxyError):
    """Raised when a required secret is absent."""


class AuthError(CoachProxyError):
    """Raised when the caller cannot be authenticated.

    The status depends on configuration (401, or 500 for legacy clients).
    """

    status_code = 401


class MissingAuthorizationError(AuthError):
    def __init__(self, status_code: int | None = None):
        super().__init__("No authorization header", status_code)


class InvalidTokenError(AuthError):
    def __init__(self, status_code: int | None = None):
        super().__init__("Unauthorized", status_code)


class InvalidRequestError(CoachProxyError):
    """Raised when the request body is not a valid coach request."""

    status_code = 400


class ContextSerializationError(CoachProxyError):
    """Raised when userContext cannot be rendered as JSON (cyclic or unsupported values)."""

    status_code = 400


class UpstreamRateLimitedError(CoachProxyError):
    status_code = 429

    def __init__(self):
        super().__init__(RATE_LIMIT_MESSAGE)


class UpstreamQuotaExhaustedError(CoachProxyError):
    status_code = 402

    def __init__(self):
        super().__init__(CREDITS_DEPLETED_MESSAGE)


class UpstreamUnexpectedError(CoachProxyError):
    """Raised for any other gateway failure (status, transport, or malformed body)."""

    def __init__(self, message: str, upstream_status: int | None = None):
        self.upstream_status = upstream_status
        super().__init__(message)

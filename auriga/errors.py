"""Errors raised during model generation."""

from __future__ import annotations


class GenerateError(Exception):
    """Base of all generation errors; raised directly for other provider errors."""


class ApiError(GenerateError):
    """The provider answered with an HTTP error."""

    def __init__(self, status: int, message: str) -> None:
        super().__init__(f"API error {status}: {message}")
        self.status = status
        self.message = message


class RateLimitedError(GenerateError):
    """The provider rate-limited the request."""

    def __init__(self, retry_after: int | None = None) -> None:
        if retry_after is None:
            text = "rate limited"
        else:
            text = f"rate limited, retry after {retry_after}s"
        super().__init__(text)
        self.retry_after = retry_after


class _MessageError(GenerateError):
    prefix = ""

    def __init__(self, message: str) -> None:
        super().__init__(f"{self.prefix}: {message}")
        self.message = message


class SerializationError(_MessageError):
    """Encoding the request or decoding the response failed."""

    prefix = "serialization error"


class NetworkError(_MessageError):
    """A network or I/O failure."""

    prefix = "network error"


class ContentFilteredError(_MessageError):
    """The provider rejected the request on content policy grounds."""

    prefix = "content filtered"


class AuthenticationError(_MessageError):
    """Authentication with the provider failed."""

    prefix = "authentication error"


class ContextLengthExceededError(GenerateError):
    """The request does not fit in the model's context window."""

    def __init__(self, max_tokens: int, requested_tokens: int) -> None:
        super().__init__(
            f"context length exceeded: requested {requested_tokens} tokens, max {max_tokens}"
        )
        self.max_tokens = max_tokens
        self.requested_tokens = requested_tokens
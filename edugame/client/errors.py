"""Errors raised by serverless function calls."""

from http import HTTPStatus

DEFAULT_FAILURE_MESSAGE = "Failed to get response"
RATE_LIMITED_MESSAGE = "Rate limits exceeded, please try again later."
PAYMENT_REQUIRED_MESSAGE = "Payment required, please add funds."


class ChatRequestError(Exception):
    """A function call failed before any response was streamed.

    Attributes:
        status_code: HTTP status, or None if no response was received.
        retryable: Whether resending the same request may succeed.
    """

    retryable = True

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class RateLimitedError(ChatRequestError):
    """The AI gateway rejected the call with 429 Too Many Requests."""

    pass


class PaymentRequiredError(ChatRequestError):
    """The AI gateway quota is exhausted (402 Payment Required)."""

    retryable = False


def error_for_status(status_code: int, server_message: str | None) -> ChatRequestError:
    """Build the error for a non-success response.

    Args:
        status_code: HTTP status of the response.
        server_message: The body's `error` field, if any.

    Returns:
        The matching ChatRequestError subclass instance.
    """
    if status_code == HTTPStatus.TOO_MANY_REQUESTS:
        return RateLimitedError(server_message or RATE_LIMITED_MESSAGE, status_code)
    if status_code == HTTPStatus.PAYMENT_REQUIRED:
        return PaymentRequiredError(server_message or PAYMENT_REQUIRED_MESSAGE, status_code)
    return ChatRequestError(server_message or DEFAULT_FAILURE_MESSAGE, status_code)

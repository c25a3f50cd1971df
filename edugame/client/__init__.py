"""Clients for the backend's serverless functions.

Responsibilities:
    - Configuration of the backend URL, key and timeouts
    - Streaming calls to the doubt-solver function
    - Mapping failure statuses (429, 402, ...) to typed errors

Uses httpx for async streaming requests.
"""

from edugame.client.config import ClientConfig, get_client_config
from edugame.client.doubt_solver import DoubtSolverClient
from edugame.client.errors import (
    ChatRequestError,
    PaymentRequiredError,
    RateLimitedError,
)

__all__ = [
    "ChatRequestError",
    "ClientConfig",
    "DoubtSolverClient",
    "PaymentRequiredError",
    "RateLimitedError",
    "get_client_config",
]

"""Client for the `ai-doubt-solver` serverless function.

The function validates the request, adds a subject persona and relays the
AI gateway's event stream untouched. This client checks the status before
reading the body, then hands the body bytes to the stream decoder.
"""

import json
import logging
from collections.abc import AsyncGenerator, Callable

import httpx

from edugame.client.config import ClientConfig, get_client_config
from edugame.client.errors import ChatRequestError, error_for_status
from edugame.models.schemas import DoubtRequest
from edugame.session.context import SessionContext
from edugame.streaming.decoder import accumulate_deltas, iter_deltas

logger = logging.getLogger(__name__)

FUNCTION_NAME = "ai-doubt-solver"


def _server_error_message(response: httpx.Response) -> str | None:
    """Return the `error` field of a JSON error body, if there is one."""
    try:
        body = response.json()
    except (json.JSONDecodeError, UnicodeDecodeError):
        return None
    if isinstance(body, dict) and isinstance(body.get("error"), str):
        return body["error"]
    return None


class DoubtSolverClient:
    """Streams AI tutor answers for student questions.

    Args:
        config: Backend configuration. Loads from environment if not provided.
        session: Signed-in user; its access token is preferred over the
            publishable key for authorization.
        transport: Optional httpx transport, e.g. `httpx.MockTransport`.
    """

    def __init__(
        self,
        config: ClientConfig | None = None,
        session: SessionContext | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._config = config or get_client_config()
        self._session = session
        self._transport = transport

    @property
    def session(self) -> SessionContext | None:
        """Signed-in user the requests are authorized as, if any."""
        return self._session

    @property
    def url(self) -> str:
        return f"{self._config.functions_url}/{FUNCTION_NAME}"

    def _headers(self) -> dict[str, str]:
        token = (
            self._session.access_token
            if self._session is not None
            else self._config.publishable_key
        )
        return {
            "Authorization": f"Bearer {token}",
            "apikey": self._config.publishable_key,
            "Accept": "text/event-stream",
        }

    async def stream_answer(self, request: DoubtRequest) -> AsyncGenerator[str]:
        """Stream the answer to a question as text deltas.

        Closing the generator early closes the HTTP response.

        Args:
            request: The validated question, subject and history.

        Yields:
            Answer text fragments in arrival order.

        Raises:
            RateLimitedError: On 429, before any fragment.
            PaymentRequiredError: On 402, before any fragment.
            ChatRequestError: On any other failure status or connection error.
        """
        payload = request.model_dump(mode="json", by_alias=True)

        async with httpx.AsyncClient(
            timeout=self._config.timeout, transport=self._transport
        ) as client:
            try:
                async with client.stream(
                    "POST", self.url, json=payload, headers=self._headers()
                ) as response:
                    if not response.is_success:
                        await response.aread()
                        error = error_for_status(
                            response.status_code, _server_error_message(response)
                        )
                        logger.warning(
                            f"{FUNCTION_NAME} failed with {response.status_code}: {error}"
                        )
                        raise error

                    async for delta in iter_deltas(response.aiter_bytes()):
                        yield delta
            except httpx.RequestError as e:
                logger.error(f"{FUNCTION_NAME} connection failed: {e}")
                raise ChatRequestError(f"Connection failed: {e}") from e

    async def ask(
        self,
        request: DoubtRequest,
        on_delta: Callable[[str, str], None] | None = None,
    ) -> str:
        """Run one exchange and return the complete answer.

        Args:
            request: The question to ask.
            on_delta: Called with (fragment, accumulated) per fragment.

        Returns:
            The full answer text.
        """
        answer = await accumulate_deltas(self.stream_answer(request), on_delta)
        logger.info(f"Answered {request.subject.value} question ({len(answer)} chars)")
        return answer

"""Pytest fixtures and shared test configuration.

Fixtures:
    - async_client: HTTPX client for API testing
    - client_config: Backend configuration pointing at a fake project
    - sse_frame: Builds one `data:` line of a chat-completion stream
"""

import json
from collections.abc import AsyncGenerator, Callable

import pytest
from httpx import ASGITransport, AsyncClient

from edugame.api import create_app
from edugame.client.config import ClientConfig


@pytest.fixture
async def async_client() -> AsyncGenerator[AsyncClient]:
    """Create async HTTP client for API testing.

    Yields:
        AsyncClient bound to a fresh, signed-out application.
    """
    transport = ASGITransport(app=create_app())
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest.fixture
def client_config() -> ClientConfig:
    """Return configuration for a fake backend project."""
    return ClientConfig(
        supabase_url="https://project.example.co/",
        publishable_key="pk-test-key",
        timeout=5.0,
    )


@pytest.fixture
def sse_frame() -> Callable[[str], str]:
    """Return a builder for content frames, newline included."""

    def build(content: str) -> str:
        payload = {"choices": [{"delta": {"content": content}}]}
        return f"data: {json.dumps(payload, ensure_ascii=False)}\n"

    return build

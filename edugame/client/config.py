"""Client configuration with environment variable loading.

Pydantic-based configuration for calls to the backend's serverless functions.
"""

import os

from dotenv import load_dotenv
from pydantic import BaseModel, Field, field_validator

# Load environment variables from .env file
load_dotenv()


class ClientConfig(BaseModel):
    """Configuration for the serverless function client.

    Attributes:
        supabase_url: Project base URL of the managed backend.
        publishable_key: Public (anon) API key sent with every request.
        timeout: Connect/read timeout in seconds for function calls.
    """

    supabase_url: str = Field(
        default_factory=lambda: os.getenv("SUPABASE_URL", ""),
        description="Backend project URL",
    )
    publishable_key: str = Field(
        default_factory=lambda: os.getenv("SUPABASE_PUBLISHABLE_KEY", ""),
        description="Publishable API key for the backend",
    )
    timeout: float = Field(
        default_factory=lambda: float(os.getenv("EDUGAME_REQUEST_TIMEOUT", "120")),
        gt=0.0,
        le=600.0,
        description="Request timeout in seconds",
    )

    @field_validator("supabase_url")
    @classmethod
    def validate_url(cls, v: str) -> str:
        """Require an http(s) URL and drop any trailing slash."""
        v = v.strip()
        if not v.startswith(("http://", "https://")):
            raise ValueError("SUPABASE_URL is required and must be an http(s) URL")
        return v.rstrip("/")

    @field_validator("publishable_key")
    @classmethod
    def validate_publishable_key(cls, v: str) -> str:
        """Validate that the publishable key is provided and non-empty."""
        if not v or not v.strip():
            raise ValueError("SUPABASE_PUBLISHABLE_KEY is required")
        return v.strip()

    @property
    def functions_url(self) -> str:
        """Base URL of the deployed serverless functions."""
        return f"{self.supabase_url}/functions/v1"


def get_client_config() -> ClientConfig:
    """Create client configuration from environment.

    Returns:
        Configured ClientConfig instance.

    Raises:
        ValueError: If the URL or publishable key is missing.
    """
    return ClientConfig()

"""
OpenAI API client package.

Provides:
- Blocking and asyncio clients over httpx (``Client``, ``AsyncClient``)
- Typed pydantic payloads for model listing and text/chat completion
- A uniform error taxonomy rooted at ``ClientError``
"""
from openai_api_client.api.client import AsyncClient, Client, create_client
from openai_api_client.api.operations import (
    CHAT_COMPLETION,
    LIST_MODELS,
    RETRIEVE_MODEL,
    TEXT_COMPLETION,
    Operation,
)
from openai_api_client.common.config import ClientConfig, load_config
from openai_api_client.common.credential import Credential
from openai_api_client.common.errors import (
    ApiError,
    ClientError,
    ConfigurationError,
    DeserializationError,
    SerializationError,
    TransportError,
)

__version__ = "0.1.0"

__all__ = [
    "ApiError",
    "AsyncClient",
    "CHAT_COMPLETION",
    "Client",
    "ClientConfig",
    "ClientError",
    "ConfigurationError",
    "Credential",
    "DeserializationError",
    "LIST_MODELS",
    "Operation",
    "RETRIEVE_MODEL",
    "SerializationError",
    "TEXT_COMPLETION",
    "TransportError",
    "create_client",
    "load_config",
]

"""Blocking and asyncio clients for the OpenAI-style HTTP API.

Both clients share request building and response handling; they differ only
in the httpx transport they drive:

- ``Client``       -> ``httpx.Client``       (blocks the calling thread)
- ``AsyncClient``  -> ``httpx.AsyncClient``  (suspends the calling task)

``create_client`` picks one based on ``ClientConfig.blocking_transport``.
"""
from __future__ import annotations
import json
import logging
import time
from typing import Any
from urllib.parse import quote

import httpx

from openai_api_client.api.codec import decode_text, encode
from openai_api_client.api.operations import (
    CHAT_COMPLETION,
    LIST_MODELS,
    RETRIEVE_MODEL,
    TEXT_COMPLETION,
    Operation,
    ReqT,
    RespT,
)
from openai_api_client.common.config import ClientConfig, normalize_base_url
from openai_api_client.common.credential import Credential
from openai_api_client.common.errors import (
    ApiError,
    ClientError,
    SerializationError,
    TransportError,
)
from openai_api_client.common.logging_setup import redact
from openai_api_client.common.schema import (
    ChatCompletionRequest,
    ChatCompletionResponse,
    ListModelsRequest,
    Model,
    ModelList,
    RetrieveModelRequest,
    TextCompletionRequest,
    TextCompletionResponse,
)

LOGGER = logging.getLogger("openai_api_client.client")

ORGANIZATION_HEADER = "OpenAI-Organization"


class _BaseClient:
    """State and wire handling shared by both clients."""

    _http_type: type = httpx.Client

    def __init__(
        self,
        credential: str | Credential,
        base_url: str | None = None,
        *,
        config: ClientConfig | None = None,
        http_client: Any = None,
    ) -> None:
        # Validate everything before a transport handle exists.
        cred = Credential.coerce(credential)
        cfg = config or ClientConfig()
        url = normalize_base_url(base_url) if base_url is not None else cfg.base_url

        if http_client is None:
            http = self._http_type(timeout=cfg.timeout)
            owns_http = True
        else:
            http = http_client
            owns_http = False

        object.__setattr__(self, "_credential", cred)
        object.__setattr__(self, "_config", cfg)
        object.__setattr__(self, "_base_url", url)
        object.__setattr__(self, "_http", http)
        object.__setattr__(self, "_owns_http", owns_http)

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError(f"{type(self).__name__} is immutable")

    def __delattr__(self, name: str) -> None:
        raise AttributeError(f"{type(self).__name__} is immutable")

    def __repr__(self) -> str:
        return f"{type(self).__name__}(base_url={self._base_url!r}, credential={self._credential!r})"

    @property
    def base_url(self) -> str:
        return self._base_url

    @property
    def config(self) -> ClientConfig:
        return self._config

    @property
    def organization(self) -> str | None:
        return self._config.organization

    @property
    def credential(self) -> Credential:
        return self._credential

    # ------------------------------------------------------------------
    # Request / response handling
    # ------------------------------------------------------------------

    def _headers(self) -> dict[str, str]:
        headers = {
            "Authorization": self._credential.bearer(),
            "Accept": "application/json",
        }
        if self._config.organization:
            headers[ORGANIZATION_HEADER] = self._config.organization
        return headers

    def _prepare(self, op: Operation[ReqT, RespT], payload: ReqT) -> tuple[str, dict[str, Any] | None]:
        """Return the absolute URL and JSON body for one invocation."""
        try:
            if not isinstance(payload, op.request_type):
                raise SerializationError(
                    f"{op.name} expects {op.request_type.__name__}, got {type(payload).__name__}"
                )
            body = encode(payload)
            path_values = {}
            for name in op.path_params:
                value = body.pop(name, None)
                if value is None:
                    raise SerializationError(f"{op.name} requires path parameter {name!r}")
                path_values[name] = quote(str(value), safe="")
        except SerializationError as e:
            LOGGER.warning("%s payload rejected: %s", op.name, e.message)
            raise
        url = self._base_url + op.render_path(path_values)
        if not op.sends_body:
            return url, None
        return url, body

    def _handle_response(self, op: Operation[ReqT, RespT], response: httpx.Response, started: float) -> RespT:
        latency_ms = int((time.time() - started) * 1000)
        LOGGER.debug(
            "%s %s -> %s in %sms", op.method, response.request.url, response.status_code, latency_ms
        )
        text = response.text
        if not response.is_success:
            try:
                body = json.loads(text) if text else None
            except ValueError:
                body = None
            err = ApiError(response.status_code, body=body, raw=text)
            LOGGER.warning("%s failed: %s", op.name, err.message)
            raise err
        try:
            return decode_text(op.response_type, text)
        except ClientError as e:
            LOGGER.warning("%s returned malformed response: %s", op.name, e.message)
            raise

    def _transport_error(self, op: Operation[ReqT, RespT], url: str, e: httpx.RequestError) -> TransportError:
        # httpx/h11 may echo header values in their messages.
        err = TransportError(
            redact(f"{op.name} request to {url} failed: {type(e).__name__}: {e}"),
            details={"operation": op.name, "url": url},
            cause=e,
        )
        LOGGER.warning("%s", err.message)
        return err


class Client(_BaseClient):
    """Blocking client. Each call occupies the calling thread for the round trip."""

    _http_type = httpx.Client

    def invoke(self, op: Operation[ReqT, RespT], payload: ReqT) -> RespT:
        """
        Issue one request for ``op`` and return its typed response.

        Raises:
            SerializationError, TransportError, ApiError, DeserializationError
        """
        url, body = self._prepare(op, payload)
        started = time.time()
        try:
            response = self._http.request(op.method, url, headers=self._headers(), json=body)
        except httpx.RequestError as e:
            raise self._transport_error(op, url, e) from e
        return self._handle_response(op, response, started)

    def list_models(self) -> ModelList:
        return self.invoke(LIST_MODELS, ListModelsRequest())

    def retrieve_model(self, model_id: str) -> Model:
        return self.invoke(RETRIEVE_MODEL, RetrieveModelRequest(model=model_id))

    def create_completion(self, request: TextCompletionRequest) -> TextCompletionResponse:
        return self.invoke(TEXT_COMPLETION, request)

    def create_chat_completion(self, request: ChatCompletionRequest) -> ChatCompletionResponse:
        return self.invoke(CHAT_COMPLETION, request)

    def close(self) -> None:
        if self._owns_http:
            self._http.close()

    def __enter__(self) -> "Client":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:  # noqa: ANN001
        self.close()


class AsyncClient(_BaseClient):
    """Asyncio client. Each call suspends the calling task until the response arrives."""

    _http_type = httpx.AsyncClient

    async def invoke(self, op: Operation[ReqT, RespT], payload: ReqT) -> RespT:
        """Awaitable counterpart of ``Client.invoke``."""
        url, body = self._prepare(op, payload)
        started = time.time()
        try:
            response = await self._http.request(op.method, url, headers=self._headers(), json=body)
        except httpx.RequestError as e:
            raise self._transport_error(op, url, e) from e
        return self._handle_response(op, response, started)

    async def list_models(self) -> ModelList:
        return await self.invoke(LIST_MODELS, ListModelsRequest())

    async def retrieve_model(self, model_id: str) -> Model:
        return await self.invoke(RETRIEVE_MODEL, RetrieveModelRequest(model=model_id))

    async def create_completion(self, request: TextCompletionRequest) -> TextCompletionResponse:
        return await self.invoke(TEXT_COMPLETION, request)

    async def create_chat_completion(self, request: ChatCompletionRequest) -> ChatCompletionResponse:
        return await self.invoke(CHAT_COMPLETION, request)

    async def aclose(self) -> None:
        if self._owns_http:
            await self._http.aclose()

    async def __aenter__(self) -> "AsyncClient":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:  # noqa: ANN001
        await self.aclose()


def create_client(
    credential: str | Credential,
    base_url: str | None = None,
    *,
    config: ClientConfig | None = None,
    http_client: Any = None,
) -> Client | AsyncClient:
    """
    Build the client matching ``config.blocking_transport``.

    Args:
        credential: API key or ``Credential``.
        base_url: Optional override of ``config.base_url``.
        config: Client options; defaults to ``ClientConfig()``.
        http_client: Optional pre-built httpx client to borrow.
    """
    cfg = config or ClientConfig()
    cls = Client if cfg.blocking_transport else AsyncClient
    return cls(credential, base_url, config=cfg, http_client=http_client)

from __future__ import annotations

from typing import Any, Iterator

import pytest
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse, PlainTextResponse
from fastapi.testclient import TestClient

from openai_api_client import Client

API_KEY = "sk-test-0123456789"
BASE_URL = "http://testserver/v1"


def build_stub_app() -> FastAPI:
    """Stub of the remote API.

    ``app.state.canned`` maps a route key to ``(status, body)``; a ``str`` body
    is sent as plain text. ``app.state.seen`` records each request.
    """
    app = FastAPI()
    app.state.canned = {}
    app.state.seen = []

    async def _reply(request: Request, key: str, default: Any, status: int = 200) -> Any:
        raw = await request.body()
        app.state.seen.append(
            {
                "method": request.method,
                "path": request.url.path,
                "headers": dict(request.headers),
                "body": raw,
            }
        )
        if request.headers.get("authorization") != f"Bearer {API_KEY}":
            return JSONResponse(
                {"error": {"message": "Incorrect API key provided", "type": "invalid_request_error"}},
                status_code=401,
            )
        status, body = app.state.canned.get(key, (status, default))
        if isinstance(body, str):
            return PlainTextResponse(body, status_code=status)
        return JSONResponse(body, status_code=status)

    @app.get("/v1/models")
    async def list_models(request: Request) -> Any:
        return await _reply(request, "models", {"data": [{"id": "model-a"}]})

    @app.get("/v1/models/{model_id}")
    async def retrieve_model(model_id: str, request: Request) -> Any:
        if model_id != "model-a":
            return await _reply(
                request,
                "model",
                {"error": {"message": f"The model '{model_id}' does not exist"}},
                status=404,
            )
        return await _reply(
            request,
            "model",
            {"id": model_id, "object": "model", "created": 1677610602, "owned_by": "openai"},
        )

    @app.post("/v1/completions")
    async def completions(request: Request) -> Any:
        return await _reply(request, "completions", {"choices": [{"text": " world"}]})

    @app.post("/v1/chat/completions")
    async def chat_completions(request: Request) -> Any:
        return await _reply(
            request,
            "chat",
            {
                "id": "chatcmpl-1",
                "object": "chat.completion",
                "created": 1677858242,
                "choices": [
                    {"index": 0, "message": {"role": "assistant", "content": "Hi there"}, "finish_reason": "stop"}
                ],
                "usage": {"prompt_tokens": 9, "completion_tokens": 3, "total_tokens": 12},
            },
        )

    return app


@pytest.fixture()
def stub_app() -> FastAPI:
    return build_stub_app()


@pytest.fixture()
def api_key() -> str:
    return API_KEY


@pytest.fixture()
def base_url() -> str:
    return BASE_URL


@pytest.fixture()
def client(stub_app: FastAPI) -> Iterator[Client]:
    """Blocking client wired to the stub app through Starlette's TestClient."""
    with TestClient(stub_app) as http:
        with Client(API_KEY, BASE_URL, http_client=http) as c:
            yield c

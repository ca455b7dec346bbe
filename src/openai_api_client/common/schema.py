"""Pydantic models for request/response payloads.

Request models validate eagerly and forbid unknown fields. Response models
ignore unknown fields, but a missing required field is always a validation
error rather than a defaulted value.
"""
from __future__ import annotations
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


class RequestPayload(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)


class ResponsePayload(BaseModel):
    model_config = ConfigDict(extra="ignore", frozen=True)


# --------------------------------------------------------------------------
# Models
# --------------------------------------------------------------------------


class ListModelsRequest(RequestPayload):
    """``GET /models`` takes no parameters."""


class RetrieveModelRequest(RequestPayload):
    model: str = Field(min_length=1)


class ModelPermission(ResponsePayload):
    id: str
    object: str | None = None
    created: int | None = None
    allow_create_engine: bool | None = None
    allow_sampling: bool | None = None
    allow_logprobs: bool | None = None
    allow_search_indices: bool | None = None
    allow_view: bool | None = None
    allow_fine_tuning: bool | None = None
    organization: str | None = None
    group: Any = None
    is_blocking: bool | None = None


class Model(ResponsePayload):
    """A model entry as returned by the models endpoints."""

    id: str
    object: str | None = None
    created: int | None = None
    owned_by: str | None = None
    root: str | None = None
    parent: Any = None
    permission: list[ModelPermission] | None = None


class ModelList(ResponsePayload):
    data: list[Model]
    object: str | None = None

    def ids(self) -> list[str]:
        return [m.id for m in self.data]


# --------------------------------------------------------------------------
# Shared sampling parameters
# --------------------------------------------------------------------------


class Usage(ResponsePayload):
    """Token accounting attached to generation responses."""

    prompt_tokens: int
    total_tokens: int
    completion_tokens: int | None = None


class _SamplingRequest(RequestPayload):
    model: str = Field(min_length=1)
    max_tokens: int | None = Field(default=None, ge=1)
    temperature: float | None = Field(default=None, ge=0.0, le=2.0)
    top_p: float | None = Field(default=None, ge=0.0, le=1.0)
    n: int | None = Field(default=None, ge=1)
    stop: str | list[str] | None = None
    presence_penalty: float | None = Field(default=None, ge=-2.0, le=2.0)
    frequency_penalty: float | None = Field(default=None, ge=-2.0, le=2.0)
    logit_bias: dict[str, float] | None = None
    user: str | None = None

    @field_validator("stop")
    @classmethod
    def _at_most_four_stops(cls, v: str | list[str] | None) -> str | list[str] | None:
        if isinstance(v, list) and len(v) > 4:
            raise ValueError("at most 4 stop sequences are allowed")
        return v

    @field_validator("logit_bias")
    @classmethod
    def _bias_range(cls, v: dict[str, float] | None) -> dict[str, float] | None:
        if v is None:
            return v
        for token, bias in v.items():
            if not -100.0 <= bias <= 100.0:
                raise ValueError(f"logit bias for token {token} must be within [-100, 100]")
        return v


# --------------------------------------------------------------------------
# Text completion
# --------------------------------------------------------------------------


class TextCompletionRequest(_SamplingRequest):
    """Body for ``POST /completions``."""

    prompt: str | list[str] | None = None
    suffix: str | None = None
    logprobs: int | None = Field(default=None, ge=0, le=5)
    echo: bool | None = None
    best_of: int | None = Field(default=None, ge=1)

    @model_validator(mode="after")
    def _best_of_covers_n(self) -> "TextCompletionRequest":
        if self.best_of is not None and self.n is not None and self.best_of < self.n:
            raise ValueError("best_of must be greater than or equal to n")
        return self


class TextCompletionChoice(ResponsePayload):
    text: str
    index: int | None = None
    finish_reason: str | None = None
    logprobs: Any = None


class TextCompletionResponse(ResponsePayload):
    choices: list[TextCompletionChoice]
    id: str | None = None
    object: str | None = None
    created: int | None = None
    model: str | None = None
    usage: Usage | None = None

    @property
    def text(self) -> str:
        """Text of the first choice, or ``""`` when the list is empty."""
        return self.choices[0].text if self.choices else ""


# --------------------------------------------------------------------------
# Chat completion
# --------------------------------------------------------------------------


class ChatRole(str, Enum):
    SYSTEM = "system"
    USER = "user"
    ASSISTANT = "assistant"


class ChatMessage(RequestPayload):
    """Outgoing chat message."""

    role: ChatRole
    content: str
    name: str | None = None


class ChatResponseMessage(ResponsePayload):
    role: ChatRole
    content: str
    name: str | None = None


class ChatCompletionRequest(_SamplingRequest):
    """Body for ``POST /chat/completions``."""

    messages: list[ChatMessage] = Field(min_length=1)


class ChatCompletionChoice(ResponsePayload):
    message: ChatResponseMessage
    index: int | None = None
    finish_reason: str | None = None


class ChatCompletionResponse(ResponsePayload):
    choices: list[ChatCompletionChoice]
    id: str | None = None
    object: str | None = None
    created: int | None = None
    model: str | None = None
    usage: Usage | None = None

    @property
    def content(self) -> str:
        return self.choices[0].message.content if self.choices else ""

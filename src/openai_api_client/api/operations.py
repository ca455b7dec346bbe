"""Operation descriptors.

An ``Operation`` names everything the transport needs to call one endpoint.
Supporting a new endpoint means adding a payload pair to ``common.schema`` and
one descriptor here.
"""
from __future__ import annotations
import string
from dataclasses import dataclass, field
from typing import Generic, TypeVar

from openai_api_client.common.schema import (
    ChatCompletionRequest,
    ChatCompletionResponse,
    ListModelsRequest,
    Model,
    ModelList,
    RequestPayload,
    ResponsePayload,
    RetrieveModelRequest,
    TextCompletionRequest,
    TextCompletionResponse,
)

ReqT = TypeVar("ReqT", bound=RequestPayload)
RespT = TypeVar("RespT", bound=ResponsePayload)


@dataclass(frozen=True)
class Operation(Generic[ReqT, RespT]):
    """One remote endpoint.

    Attributes:
        name: Identifier used in logs and errors.
        method: HTTP method.
        path: Path relative to the base URL; ``{field}`` placeholders are
            filled from the request payload and removed from the body.
        request_type: Payload model accepted by ``invoke``.
        response_type: Model the JSON response is decoded into.
    """

    name: str
    method: str
    path: str
    request_type: type[ReqT]
    response_type: type[RespT]
    path_params: tuple[str, ...] = field(init=False)

    def __post_init__(self) -> None:
        names = tuple(
            fname for _, fname, _, _ in string.Formatter().parse(self.path) if fname
        )
        object.__setattr__(self, "path_params", names)

    @property
    def sends_body(self) -> bool:
        return self.method not in ("GET", "DELETE")

    def render_path(self, values: dict[str, str]) -> str:
        return self.path.format(**values)


LIST_MODELS: Operation[ListModelsRequest, ModelList] = Operation(
    name="list_models",
    method="GET",
    path="/models",
    request_type=ListModelsRequest,
    response_type=ModelList,
)

RETRIEVE_MODEL: Operation[RetrieveModelRequest, Model] = Operation(
    name="retrieve_model",
    method="GET",
    path="/models/{model}",
    request_type=RetrieveModelRequest,
    response_type=Model,
)

TEXT_COMPLETION: Operation[TextCompletionRequest, TextCompletionResponse] = Operation(
    name="text_completion",
    method="POST",
    path="/completions",
    request_type=TextCompletionRequest,
    response_type=TextCompletionResponse,
)

CHAT_COMPLETION: Operation[ChatCompletionRequest, ChatCompletionResponse] = Operation(
    name="chat_completion",
    method="POST",
    path="/chat/completions",
    request_type=ChatCompletionRequest,
    response_type=ChatCompletionResponse,
)

OPERATIONS: dict[str, Operation] = {
    op.name: op for op in (LIST_MODELS, RETRIEVE_MODEL, TEXT_COMPLETION, CHAT_COMPLETION)
}

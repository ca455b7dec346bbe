from __future__ import annotations

import pytest
from pydantic import ValidationError

from openai_api_client import DeserializationError, SerializationError
from openai_api_client.api.codec import decode, decode_text, encode
from openai_api_client.api.operations import OPERATIONS, RETRIEVE_MODEL, TEXT_COMPLETION
from openai_api_client.common.schema import (
    ChatCompletionRequest,
    ChatCompletionResponse,
    ChatMessage,
    ChatRole,
    Model,
    ModelList,
    RetrieveModelRequest,
    TextCompletionRequest,
    TextCompletionResponse,
)


@pytest.mark.parametrize(
    "payload",
    [
        TextCompletionRequest(model="model-a", prompt="hello"),
        TextCompletionRequest(
            model="model-a",
            prompt=["a", "b"],
            suffix="!",
            max_tokens=16,
            temperature=0.7,
            top_p=0.9,
            n=2,
            best_of=3,
            logprobs=5,
            echo=True,
            stop=["\n", "END"],
            presence_penalty=-1.5,
            frequency_penalty=2.0,
            logit_bias={"50256": -100.0},
            user="u-1",
        ),
        ChatCompletionRequest(
            model="model-a",
            messages=[
                ChatMessage(role=ChatRole.SYSTEM, content="Be brief."),
                ChatMessage(role=ChatRole.USER, content="Hi", name="alice"),
            ],
            stop="\n",
        ),
        RetrieveModelRequest(model="model-a"),
    ],
)
def test_request_round_trip(payload) -> None:
    assert decode(type(payload), encode(payload)) == payload


def test_encode_omits_unset_fields() -> None:
    assert encode(TextCompletionRequest(model="m", prompt="hello")) == {"model": "m", "prompt": "hello"}


def test_request_required_fields_enforced_at_construction() -> None:
    with pytest.raises(ValidationError):
        TextCompletionRequest(prompt="hello")  # type: ignore[call-arg]
    with pytest.raises(ValidationError):
        ChatCompletionRequest(model="m", messages=[])


@pytest.mark.parametrize(
    "kwargs",
    [
        {"temperature": 2.5},
        {"top_p": -0.1},
        {"n": 0},
        {"logprobs": 6},
        {"stop": ["1", "2", "3", "4", "5"]},
        {"presence_penalty": 3.0},
        {"logit_bias": {"1": 101.0}},
        {"n": 3, "best_of": 2},
        {"unknown_field": 1},
    ],
)
def test_request_constraints(kwargs) -> None:
    with pytest.raises(ValidationError):
        TextCompletionRequest(model="m", **kwargs)


def test_encode_revalidates_constructed_payload() -> None:
    bad = TextCompletionRequest.model_construct(model="m", temperature=9.0)
    with pytest.raises(SerializationError) as exc_info:
        encode(bad)
    assert exc_info.value.details["errors"][0]["loc"] == ["temperature"]


def test_decode_scenario_bodies() -> None:
    models = decode(ModelList, {"data": [{"id": "model-a"}]})
    assert models.ids() == ["model-a"]
    completion = decode(TextCompletionResponse, {"choices": [{"text": " world"}]})
    assert completion.choices[0].text == " world"


def test_decode_ignores_unknown_fields() -> None:
    model = decode(Model, {"id": "model-a", "capabilities": {"x": 1}})
    assert model.id == "model-a"


def test_decode_model_with_permissions() -> None:
    model = decode(
        Model,
        {
            "id": "davinci",
            "object": "model",
            "created": 1649359874,
            "owned_by": "openai",
            "root": "davinci",
            "parent": None,
            "permission": [
                {
                    "id": "modelperm-1",
                    "object": "model_permission",
                    "created": 1669066355,
                    "allow_create_engine": False,
                    "allow_sampling": True,
                    "allow_logprobs": True,
                    "allow_search_indices": False,
                    "allow_view": True,
                    "allow_fine_tuning": False,
                    "organization": "*",
                    "group": None,
                    "is_blocking": False,
                }
            ],
        },
    )
    assert model.permission is not None
    assert model.permission[0].allow_sampling is True


@pytest.mark.parametrize(
    "model_type, data, missing",
    [
        (ModelList, {}, "data"),
        (ModelList, {"data": [{"object": "model"}]}, "data.0.id"),
        (TextCompletionResponse, {"choices": [{}]}, "choices.0.text"),
        (TextCompletionResponse, {"choices": [{"text": "x"}], "usage": {"prompt_tokens": 1}}, "usage.total_tokens"),
    ],
)
def test_decode_missing_required_field(model_type, data, missing) -> None:
    with pytest.raises(DeserializationError) as exc_info:
        decode(model_type, data)
    assert missing in exc_info.value.message


def test_decode_wrong_type_is_deserialization_error() -> None:
    with pytest.raises(DeserializationError):
        decode(ModelList, {"data": "not-a-list"})


def test_decode_text_rejects_invalid_json() -> None:
    with pytest.raises(DeserializationError) as exc_info:
        decode_text(ModelList, "{not json")
    assert exc_info.value.raw == "{not json"


def test_operation_descriptors() -> None:
    assert set(OPERATIONS) == {"list_models", "retrieve_model", "text_completion", "chat_completion"}
    assert RETRIEVE_MODEL.path_params == ("model",)
    assert RETRIEVE_MODEL.render_path({"model": "m"}) == "/models/m"
    assert not RETRIEVE_MODEL.sends_body
    assert TEXT_COMPLETION.sends_body
    assert TEXT_COMPLETION.path_params == ()


def test_outgoing_chat_message_forbids_unknown_fields() -> None:
    with pytest.raises(ValidationError):
        ChatMessage(role=ChatRole.USER, content="Hi", tool_calls=[])  # type: ignore[call-arg]


def test_response_chat_message_ignores_unknown_fields() -> None:
    resp = decode(
        ChatCompletionResponse,
        {"choices": [{"message": {"role": "assistant", "content": "Hi", "refusal": None}}]},
    )
    assert resp.content == "Hi"

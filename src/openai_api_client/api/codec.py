"""JSON encoding/decoding of payloads with typed errors."""
from __future__ import annotations
import json
from typing import Any, TypeVar

from pydantic import BaseModel, ValidationError
from pydantic_core import PydanticSerializationError

from openai_api_client.common.errors import DeserializationError, SerializationError

T = TypeVar("T", bound=BaseModel)


def _error_details(e: ValidationError) -> list[dict[str, Any]]:
    return [
        {"loc": list(err["loc"]), "type": err["type"], "msg": err["msg"]}
        for err in e.errors(include_url=False)
    ]


def encode(payload: BaseModel) -> dict[str, Any]:
    """
    Dump a request payload to a JSON-compatible dict.

    The payload is re-validated first, so instances built with
    ``model_construct`` cannot smuggle invalid fields onto the wire.
    Unset optional fields are omitted.

    Raises:
        SerializationError: The payload is invalid or not JSON-encodable.
    """
    model_type = type(payload)
    try:
        data = payload.model_dump(mode="json", exclude_none=True)
        model_type.model_validate(data)
    except ValidationError as e:
        raise SerializationError(
            f"{model_type.__name__} failed validation",
            details={"errors": _error_details(e)},
            cause=e,
        ) from e
    except (PydanticSerializationError, AttributeError, TypeError, ValueError) as e:
        raise SerializationError(f"{model_type.__name__} is not JSON-encodable", cause=e) from e
    return data


def decode(model_type: type[T], data: Any, raw: str | None = None) -> T:
    """
    Validate decoded JSON against ``model_type``.

    Raises:
        DeserializationError: A required field is missing or has the wrong type.
    """
    try:
        return model_type.model_validate(data)
    except ValidationError as e:
        missing = [".".join(str(p) for p in err["loc"]) for err in e.errors() if err["type"] == "missing"]
        msg = f"Response does not match {model_type.__name__}"
        if missing:
            msg = f"{msg}; missing field(s): {', '.join(missing)}"
        raise DeserializationError(
            msg, raw=raw, details={"errors": _error_details(e)}, cause=e
        ) from e


def decode_text(model_type: type[T], text: str) -> T:
    """Parse a JSON document and validate it against ``model_type``."""
    try:
        data = json.loads(text)
    except ValueError as e:
        raise DeserializationError("Response body is not valid JSON", raw=text, cause=e) from e
    return decode(model_type, data, raw=text)

"""Error taxonomy surfaced by the client core.

Every failure is raised to the caller as a ``ClientError`` subclass; nothing is
retried or recovered internally.
"""
from __future__ import annotations
from typing import Any

from openai_api_client.common.logging_setup import redact


class ClientError(Exception):
    """Base class for all client errors.

    Attributes:
        message: Human readable description. Never contains the credential.
        details: Extra structured context (status code, field names, ...).
        cause: Underlying exception, if any.
    """

    def __init__(
        self,
        message: str,
        details: dict[str, Any] | None = None,
        cause: BaseException | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}
        self.cause = cause

    def to_dict(self) -> dict[str, Any]:
        return {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "details": self.details,
            "cause": redact(repr(self.cause)) if self.cause else None,
        }


class ConfigurationError(ClientError):
    """Invalid credential, base URL or configuration file."""


class TransportError(ClientError):
    """Connection refused, timeout, DNS failure or other network-level error."""


class SerializationError(ClientError):
    """A request payload could not be encoded to the wire format."""


class ApiError(ClientError):
    """The remote endpoint answered with a non-success status.

    Attributes:
        status_code: HTTP status returned by the endpoint.
        body: Parsed JSON error document, when the endpoint sent one.
        raw: Raw response text.
    """

    def __init__(
        self,
        status_code: int,
        body: Any = None,
        raw: str | None = None,
    ) -> None:
        message = f"API returned HTTP {status_code}"
        remote = _error_message(body)
        if remote:
            message = f"{message}: {redact(remote)}"
        super().__init__(message, details={"status_code": status_code, "body": body})
        self.status_code = status_code
        self.body = body
        self.raw = raw


class DeserializationError(ClientError):
    """A response body did not match the schema expected for the operation."""

    def __init__(
        self,
        message: str,
        raw: str | None = None,
        details: dict[str, Any] | None = None,
        cause: BaseException | None = None,
    ) -> None:
        super().__init__(message, details=details, cause=cause)
        self.raw = raw


def _error_message(body: Any) -> str | None:
    """Pull ``error.message`` out of an OpenAI-style error document."""
    if not isinstance(body, dict):
        return None
    err = body.get("error")
    if isinstance(err, dict) and isinstance(err.get("message"), str):
        return err["message"]
    if isinstance(err, str):
        return err
    return None

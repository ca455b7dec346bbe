"""Opaque bearer-token value."""
from __future__ import annotations

from pydantic import SecretStr

from openai_api_client.common.errors import ConfigurationError


class Credential:
    """Secret API key whose printable forms are always redacted.

    The raw value is only reachable through ``reveal()``, which the client
    calls when building the ``Authorization`` header.
    """

    __slots__ = ("_secret",)

    def __init__(self, value: str) -> None:
        if not isinstance(value, str) or not value.strip():
            raise ConfigurationError("API credential must be a non-empty string")
        # A stray newline from a key file would otherwise end up in header errors.
        if value != value.strip() or any(ord(ch) < 0x20 or ord(ch) == 0x7F for ch in value):
            raise ConfigurationError(
                "API credential must not contain surrounding whitespace or control characters"
            )
        object.__setattr__(self, "_secret", SecretStr(value))

    def __setattr__(self, name: str, value: object) -> None:
        raise AttributeError("Credential is immutable")

    def reveal(self) -> str:
        return self._secret.get_secret_value()

    def bearer(self) -> str:
        """Value for the ``Authorization`` header."""
        return f"Bearer {self.reveal()}"

    def __repr__(self) -> str:
        return "Credential('**********')"

    __str__ = __repr__

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Credential):
            return NotImplemented
        return self._secret == other._secret

    def __hash__(self) -> int:
        return hash(self._secret)

    @classmethod
    def coerce(cls, value: "str | Credential") -> "Credential":
        if isinstance(value, Credential):
            return value
        return cls(value)

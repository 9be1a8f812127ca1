"""Classification of fetch outcomes into the resolver's error taxonomy."""

from __future__ import annotations

import math

from pydantic import BaseModel, ConfigDict, ValidationError

from suimvr.core.exceptions import (
    MvrError,
    NetworkError,
    NotFoundError,
    RateLimitedError,
    RequestTimeoutError,
    SerializationError,
    ServerError,
)
from suimvr.core.types import NameKind
from suimvr.resolution.fetcher import FetchResponse, FetchTransportError


class PackageResponse(BaseModel):
    """Registry payload for a package lookup."""

    model_config = ConfigDict(extra="ignore")

    package_id: str | None = None
    address: str | None = None
    name: str | None = None
    version: str | None = None


class TypeResponse(BaseModel):
    """Registry payload for a type lookup."""

    model_config = ConfigDict(extra="ignore")

    type_signature: str | None = None
    signature: str | None = None
    package_id: str | None = None
    module: str | None = None
    name: str | None = None


class ErrorClassifier:
    """
    Maps fetch outcomes onto :class:`MvrError` subclasses.

    Each remote outcome is classified exactly once:

    - transport failure -> NetworkError
    - deadline exceeded -> RequestTimeoutError (configured timeout)
    - 404 -> NotFoundError
    - 429 -> RateLimitedError (Retry-After, default 60s)
    - any other non-2xx -> ServerError
    - undecodable 2xx body -> SerializationError
    """

    DEFAULT_RETRY_AFTER = 60.0

    def __init__(self, timeout: float) -> None:
        self._timeout = timeout

    def classify_exception(self, exc: BaseException) -> MvrError:
        """Classify an exception raised while waiting on the fetcher."""
        if isinstance(exc, TimeoutError):
            return RequestTimeoutError(self._timeout)
        if isinstance(exc, FetchTransportError):
            return NetworkError(str(exc) or "Transport failure")
        if isinstance(exc, MvrError):
            return exc
        raise TypeError(f"Cannot classify {type(exc).__name__}") from exc

    def classify_response(
        self,
        name: str,
        kind: NameKind,
        response: FetchResponse,
    ) -> MvrError | None:
        """Return the error for a non-success response, or None on 2xx."""
        status = response.status_code
        if 200 <= status < 300:
            return None
        if status == 404:
            return NotFoundError(name, kind)
        if status == 429:
            return RateLimitedError(self.parse_retry_after(response.header("Retry-After")))
        return ServerError(status, response.body or "Unknown error")

    @classmethod
    def parse_retry_after(cls, value: str | None) -> float:
        """Parse a Retry-After header given in seconds."""
        if value is None:
            return cls.DEFAULT_RETRY_AFTER
        try:
            seconds = float(value.strip())
        except ValueError:
            return cls.DEFAULT_RETRY_AFTER
        if not math.isfinite(seconds):
            return cls.DEFAULT_RETRY_AFTER
        return max(seconds, 0.0)

    def extract_value(self, name: str, kind: NameKind, body: str) -> str:
        """
        Pull the resolved value out of a successful response body.

        Package bodies may be a bare ``0x...`` address or a JSON object with
        ``address`` / ``package_id``. Type bodies are JSON objects with
        ``type_signature`` / ``signature``.

        Raises:
            SerializationError: if the body cannot be decoded
        """
        if kind == NameKind.PACKAGE:
            return self._extract_package_address(name, body)
        return self._extract_type_signature(name, body)

    def _extract_package_address(self, name: str, body: str) -> str:
        text = body.strip()
        if text.startswith("0x") and not any(c.isspace() for c in text):
            return text

        try:
            payload = PackageResponse.model_validate_json(text)
        except ValidationError as e:
            raise SerializationError(
                f"Failed to parse JSON response for '{name}'", {"body": body[:200]}
            ) from e

        address = payload.address or payload.package_id
        if not address:
            raise SerializationError(
                f"Address not found in response for '{name}'", {"body": body[:200]}
            )
        return address

    def _extract_type_signature(self, name: str, body: str) -> str:
        try:
            payload = TypeResponse.model_validate_json(body)
        except ValidationError as e:
            raise SerializationError(
                f"Failed to parse JSON response for '{name}'", {"body": body[:200]}
            ) from e

        signature = payload.type_signature or payload.signature
        if not signature:
            raise SerializationError(
                f"Type signature not found in response for '{name}'", {"body": body[:200]}
            )
        return signature

"""
Outbound request and submission outcome types.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any, ClassVar, Mapping

from shared.errors import EncodingError, RateLimitError, TransportError

CONTENT_TYPE_KEY = "Content-Type"
CONTENT_TYPE_VALUE = "application/json"


@dataclass(frozen=True)
class OutboundRequest:
    """A fully built request, ready to hand to a transport."""

    url: str
    body: bytes
    method: str = "POST"
    headers: Mapping[str, str] = field(
        default_factory=lambda: {CONTENT_TYPE_KEY: CONTENT_TYPE_VALUE}
    )

    def __post_init__(self) -> None:
        object.__setattr__(self, "headers", MappingProxyType(dict(self.headers)))

    @classmethod
    def create_document(cls, url: str, body: bytes) -> "OutboundRequest":
        """POST a JSON payload to the create-document endpoint."""
        return cls(url=url, body=body, method="POST",
                   headers={CONTENT_TYPE_KEY: CONTENT_TYPE_VALUE})


class RejectionReason(str, Enum):
    LIMIT_EXCEEDED = "limit-exceeded"


class SubmissionOutcome:
    """Result of one ``DocumentSubmitter.submit`` call."""

    name: ClassVar[str] = "outcome"

    @property
    def ok(self) -> bool:
        return False

    def raise_for_outcome(self) -> Any:
        """Return the transport response, or raise the matching client error."""
        raise NotImplementedError


@dataclass(frozen=True)
class Dispatched(SubmissionOutcome):
    response: Any

    name: ClassVar[str] = "dispatched"

    @property
    def ok(self) -> bool:
        return True

    def raise_for_outcome(self) -> Any:
        return self.response


@dataclass(frozen=True)
class Rejected(SubmissionOutcome):
    reason: RejectionReason = RejectionReason.LIMIT_EXCEEDED

    name: ClassVar[str] = "rejected"

    def raise_for_outcome(self) -> Any:
        raise RateLimitError(
            "Request limit exceeded. Try again later.",
            details={"reason": self.reason.value}
        )


@dataclass(frozen=True)
class EncodingFailed(SubmissionOutcome):
    cause: BaseException

    name: ClassVar[str] = "encoding_failed"

    def raise_for_outcome(self) -> Any:
        if isinstance(self.cause, EncodingError):
            raise self.cause
        raise EncodingError(
            f"Payload encoding failed: {self.cause}",
            details={"error": str(self.cause)}
        ) from self.cause


@dataclass(frozen=True)
class TransportFailed(SubmissionOutcome):
    cause: BaseException

    name: ClassVar[str] = "transport_failed"

    def raise_for_outcome(self) -> Any:
        raise TransportError(
            f"Transport error: {self.cause}",
            details={"error": str(self.cause), "error_type": type(self.cause).__name__}
        ) from self.cause

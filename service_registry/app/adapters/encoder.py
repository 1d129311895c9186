"""
Payload encoders turning a document and its signature into request bytes.
"""

from __future__ import annotations

import json
from typing import Any, Optional, Protocol, runtime_checkable

from pydantic_core import PydanticSerializationError, to_jsonable_python

from shared.errors import EncodingError


@runtime_checkable
class PayloadEncoder(Protocol):
    """Serializes a document for the wire. Must not perform I/O."""

    def encode(self, document: Any, signature: str) -> bytes:
        ...


class JsonPayloadEncoder:
    """Structural JSON encoder for pydantic models, dataclasses and plain containers.

    Values pydantic knows how to serialize (UUIDs, dates, decimals, enums,
    sets) are converted the way pydantic converts them. Model fields are
    written under their aliases.

    The signature is left out of the payload unless ``signature_field`` is
    set, in which case it is written under that key of the top-level object.
    """

    def __init__(self, signature_field: Optional[str] = None, *, ensure_ascii: bool = False):
        self.signature_field = signature_field
        self.ensure_ascii = ensure_ascii

    def encode(self, document: Any, signature: str) -> bytes:
        try:
            payload = to_jsonable_python(document, by_alias=True)
            if self.signature_field:
                if not isinstance(payload, dict):
                    raise TypeError(
                        f"cannot embed a signature into {type(payload).__name__} payload"
                    )
                payload = {**payload, self.signature_field: signature}
            text = json.dumps(payload, ensure_ascii=self.ensure_ascii, allow_nan=False)
        except (TypeError, ValueError, PydanticSerializationError) as exc:
            raise EncodingError(
                f"Cannot encode {type(document).__name__}: {exc}",
                details={"document_type": type(document).__name__, "error": str(exc)}
            ) from exc
        return text.encode("utf-8")

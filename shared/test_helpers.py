"""
Test helper functions and factory methods for the registry client.
"""

import json
import uuid
from typing import Any, Dict, List, Optional

import httpx

from service_registry.app.domain.documents import Description, Document, Product
from service_registry.app.domain.outcomes import OutboundRequest


class TestDataFactory:
    """Factory for creating test data."""

    __test__ = False

    @staticmethod
    def create_product(uit_code: Optional[str] = None, **overrides: Any) -> Product:
        """Create a product line."""
        fields = {
            "certificate_document": "CONFORMITY_CERTIFICATE",
            "certificate_document_date": "2024-01-15",
            "certificate_document_number": "RU-C-001",
            "owner_inn": "7701234567",
            "producer_inn": "7707654321",
            "production_date": "2024-01-10",
            "tnved_code": "6403990000",
            "uit_code": uit_code or f"010460{uuid.uuid4().hex[:10]}",
            "uitu_code": "",
        }
        fields.update(overrides)
        return Product(**fields)

    @staticmethod
    def create_document(doc_id: Optional[str] = None, product_count: int = 2, **overrides: Any) -> Document:
        """Create a goods-introduction document."""
        fields = {
            "description": Description(participant_inn="7701234567"),
            "doc_id": doc_id or str(uuid.uuid4()),
            "doc_status": "NEW",
            "doc_type": "LP_INTRODUCE_GOODS",
            "import_request": True,
            "owner_inn": "7701234567",
            "production_date": "2024-01-10",
            "production_type": "OWN_PRODUCTION",
            "products": [
                TestDataFactory.create_product(uit_code=f"0104600000000{i:02d}")
                for i in range(product_count)
            ],
            "reg_date": "2024-01-20",
            "reg_number": "REG-0001",
        }
        fields.update(overrides)
        return Document(**fields)


class RecordingTransport:
    """Transport double that records requests and replies with a canned response."""

    __test__ = False

    def __init__(self, status_code: int = 200, body: Optional[Dict[str, Any]] = None,
                 error: Optional[BaseException] = None):
        self.status_code = status_code
        self.body = body if body is not None else {"status": "accepted"}
        self.error = error
        self.requests: List[OutboundRequest] = []

    async def send(self, request: OutboundRequest) -> httpx.Response:
        self.requests.append(request)
        if self.error is not None:
            raise self.error
        return httpx.Response(
            status_code=self.status_code,
            content=json.dumps(self.body),
            request=httpx.Request(request.method, request.url)
        )


def decode_payload(body: bytes) -> Dict[str, Any]:
    """Decode an encoded payload back into a dict."""
    return json.loads(body.decode("utf-8"))


def decode_document(body: bytes) -> Document:
    """Decode a JSON payload produced by the default encoder back into a Document."""
    return Document.model_validate_json(body)

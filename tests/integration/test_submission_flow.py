"""
Integration tests for the rate-limited submission flow.
"""

import asyncio
import time

import httpx
import pytest

from service_registry.app.domain.outcomes import Dispatched, Rejected, RejectionReason, TransportFailed
from service_registry.app.submitter import create_submitter
from shared.config import get_config
from shared.test_helpers import TestDataFactory, decode_payload


class TestSubmissionFlow:
    """End-to-end submission through the default httpx transport."""

    @pytest.fixture
    def config(self):
        """One request per second, signature embedded in the payload."""
        return get_config(
            window_seconds=1.0,
            max_requests_per_window=1,
            create_document_url="https://registry.test/api/v3/lk/documents/create",
            signature_field="signature",
        )

    @pytest.mark.asyncio
    async def test_one_request_per_window(self, config):
        """Test dispatch, rejection within the window, then dispatch after the boundary."""
        received = []

        def handler(request: httpx.Request) -> httpx.Response:
            received.append(request)
            return httpx.Response(200, json={"value": f"id-{len(received)}"})

        doc_a = TestDataFactory.create_document(doc_id="doc-a")
        doc_b = TestDataFactory.create_document(doc_id="doc-b")
        doc_c = TestDataFactory.create_document(doc_id="doc-c")

        async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
            async with create_submitter(config, http_client=client) as submitter:
                first = await submitter.submit(doc_a, "sig1")
                ticks = submitter.gate.scheduler.ticks
                second = await submitter.submit(doc_b, "sig2")

                deadline = time.monotonic() + 5.0
                while submitter.gate.scheduler.ticks <= ticks:
                    assert time.monotonic() < deadline, "window never reset"
                    await asyncio.sleep(0.05)

                third = await submitter.submit(doc_c, "sig3")

        assert isinstance(first, Dispatched)
        assert first.response.json() == {"value": "id-1"}
        assert second == Rejected(RejectionReason.LIMIT_EXCEEDED)
        assert isinstance(third, Dispatched)

        assert [decode_payload(r.content)["doc_id"] for r in received] == ["doc-a", "doc-c"]
        assert [decode_payload(r.content)["signature"] for r in received] == ["sig1", "sig3"]
        assert all(r.headers["Content-Type"] == "application/json" for r in received)
        assert submitter.gate.closed is True

    @pytest.mark.asyncio
    async def test_unreachable_registry(self, config):
        """Test a connection failure is reported with its original cause."""
        def refuse(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("Connection refused", request=request)

        async with httpx.AsyncClient(transport=httpx.MockTransport(refuse)) as client:
            async with create_submitter(config, http_client=client) as submitter:
                outcome = await submitter.submit(TestDataFactory.create_document(), "sig")

        assert isinstance(outcome, TransportFailed)
        assert isinstance(outcome.cause, httpx.ConnectError)

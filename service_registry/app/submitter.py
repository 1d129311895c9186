"""
Rate-limited document submission to the remote registry.
"""

from __future__ import annotations

import time
from typing import Any, Optional

import httpx

from shared.config import CREATE_DOCUMENT_URL, RegistryClientConfig
from shared.logging import configure_logging, get_logger
from shared.metrics import SubmissionMetrics
from .adapters.encoder import JsonPayloadEncoder, PayloadEncoder
from .adapters.transport import HttpxTransport, Transport
from .domain.outcomes import (
    Dispatched,
    EncodingFailed,
    OutboundRequest,
    Rejected,
    RejectionReason,
    SubmissionOutcome,
    TransportFailed,
)
from .ratelimit.fixed_window import AdmissionGate


class DocumentSubmitter:
    """Submits documents through an admission gate.

    Every call returns a classified outcome instead of raising. Rejected
    submissions never reach the encoder or the transport. Nothing is
    retried here.
    """

    def __init__(
        self,
        gate: AdmissionGate,
        transport: Transport,
        encoder: Optional[PayloadEncoder] = None,
        *,
        endpoint: str = CREATE_DOCUMENT_URL,
        metrics: Optional[SubmissionMetrics] = None,
        owns_transport: bool = False,
        owns_gate: bool = True,
    ) -> None:
        self.gate = gate
        self.transport = transport
        self.encoder = encoder if encoder is not None else JsonPayloadEncoder()
        self.endpoint = endpoint
        self.metrics = metrics if metrics is not None else SubmissionMetrics()
        self.logger = get_logger("registry.submitter")
        self._owns_transport = owns_transport
        self._owns_gate = owns_gate

    async def submit(self, document: Any, signature: str) -> SubmissionOutcome:
        """Submit one document if the current window still has room."""
        admitted = self.gate.try_acquire()
        self.metrics.set_window_count(self.gate.current_count)
        if not admitted:
            self.logger.warning(
                "Request limit exceeded",
                max_requests=self.gate.max_requests,
                window_seconds=self.gate.window_seconds
            )
            self.metrics.record_outcome(Rejected.name)
            return Rejected(RejectionReason.LIMIT_EXCEEDED)

        started = time.perf_counter()
        outcome = await self._dispatch(document, signature)
        self.metrics.record_outcome(outcome.name, time.perf_counter() - started)
        return outcome

    def build_request(self, body: bytes) -> OutboundRequest:
        return OutboundRequest.create_document(self.endpoint, body)

    async def _dispatch(self, document: Any, signature: str) -> SubmissionOutcome:
        try:
            body = self.encoder.encode(document, signature)
        except Exception as e:
            self.logger.error(
                "Document encoding failed",
                document_type=type(document).__name__,
                error=str(e)
            )
            return EncodingFailed(e)

        request = self.build_request(body)

        try:
            response = await self.transport.send(request)
        except Exception as e:
            self.logger.error(
                "Registry request failed",
                url=request.url,
                error_type=type(e).__name__,
                error=str(e)
            )
            return TransportFailed(e)

        self.logger.info(
            "Document dispatched",
            url=request.url,
            status_code=getattr(response, "status_code", None)
        )
        return Dispatched(response)

    async def close(self) -> None:
        """Close the gate and transport this submitter owns.

        A gate shared with other submitters should be passed with
        ``owns_gate=False`` and closed by whoever created it.
        """
        if self._owns_gate:
            self.gate.close()
        if self._owns_transport:
            close = getattr(self.transport, "close", None)
            if close is not None:
                await close()

    async def __aenter__(self) -> "DocumentSubmitter":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()


def create_submitter(
    config: Optional[RegistryClientConfig] = None,
    *,
    metrics: Optional[SubmissionMetrics] = None,
    http_client: Optional[httpx.AsyncClient] = None,
    configure_logs: bool = True,
) -> DocumentSubmitter:
    """Wire a submitter with the default httpx transport and JSON encoder.

    Structured logging is configured from ``config`` unless ``configure_logs``
    is False, for applications that set up structlog themselves. A
    caller-supplied ``http_client`` is used as is and left open on close.
    """
    if config is None:
        config = RegistryClientConfig()
    if configure_logs:
        configure_logging(config.service_name, config.log_level)

    gate = AdmissionGate(config.window_seconds, config.max_requests_per_window)
    return DocumentSubmitter(
        gate,
        HttpxTransport(timeout=config.http_timeout, client=http_client),
        JsonPayloadEncoder(signature_field=config.signature_field),
        endpoint=config.create_document_url,
        metrics=metrics,
        owns_transport=True,
    )

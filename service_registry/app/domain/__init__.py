"""
Domain types for the registry client.
"""

from .documents import Description, Document, Product
from .outcomes import (
    Dispatched,
    EncodingFailed,
    OutboundRequest,
    Rejected,
    RejectionReason,
    SubmissionOutcome,
    TransportFailed,
)

__all__ = [
    "Description",
    "Document",
    "Product",
    "Dispatched",
    "EncodingFailed",
    "OutboundRequest",
    "Rejected",
    "RejectionReason",
    "SubmissionOutcome",
    "TransportFailed",
]

"""
Document registry client package.

Submits documents to the remote registry while bounding the number of
outbound requests per fixed time window.

Structure:
- app.submitter: DocumentSubmitter and the default wiring.
- app.ratelimit: Fixed-window admission gate and its reset scheduler.
- app.adapters: Payload encoders and HTTP transports.
- app.domain: Document models, outbound requests and submission outcomes.
"""

from .submitter import DocumentSubmitter, create_submitter

__all__ = ["DocumentSubmitter", "create_submitter"]

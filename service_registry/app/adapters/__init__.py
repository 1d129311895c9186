"""
Adapters package for the registry client.

Holds the injected capabilities used by the submitter:

- Payload encoders that serialize documents to JSON bytes
- Transports that perform the HTTP exchange (httpx by default)

Keep adapters thin and side-effect free outside of explicit calls.
"""

from .encoder import JsonPayloadEncoder, PayloadEncoder
from .transport import HttpxTransport, Transport

__all__ = [
    "JsonPayloadEncoder",
    "PayloadEncoder",
    "HttpxTransport",
    "Transport",
]

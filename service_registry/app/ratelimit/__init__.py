"""
Rate limiting package for the registry client.

Holds the fixed-window admission gate: one shared counter, incremented on
every check and reset to zero by a background timer once per window.
"""

from .fixed_window import AdmissionGate, RateLimitConfig, RequestCounter, WindowResetScheduler

__all__ = ["AdmissionGate", "RateLimitConfig", "RequestCounter", "WindowResetScheduler"]

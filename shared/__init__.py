"""
Shared utilities for the document registry client.

This package aggregates common building blocks consumed by the client:

- config: Client configuration via pydantic-settings
- logging: Structured logging with trace correlation
- metrics: Prometheus metrics helpers
- errors: Canonical error types and responses
- test_helpers: Factories and transport doubles for the test suites

Only test_helpers may import from service_* packages.
"""

"""Fake/mock implementations of core ports for testing.

These in-memory implementations allow core domain logic to be tested
without a ServiceNow instance:

- FakeTransportPort: Queued raw responses and captured requests
"""

from .transport import FakeTransportPort, body_response

__all__ = [
    "FakeTransportPort",
    "body_response",
]

"""Test suite for the ticketlink adapter.

Organized into three categories:

1. core/: Unit tests for core domain logic
   - Minimal dependencies, fast execution
   - Uses in-memory fakes for ports

2. adapters/: Tests for the ServiceNow transport
   - Runs against httpx.MockTransport, never a live instance

3. fakes/: Port implementations for testing
   - In-memory TransportPort used by core unit tests
"""

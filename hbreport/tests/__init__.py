"""Test suite for the hbreport notifier.

Organized into three categories:

1. core/: Unit tests for core domain logic
   - No network, fast execution

2. adapters/: Tests for adapter implementations
   - httpx adapter exercised through httpx.MockTransport

3. fakes/: Port implementations for testing
   - In-memory NoticeTransportPort used by client tests
"""

"""Test package for RAG Client.

Provides coverage for all components with unit tests for isolated logic
and integration tests for full request flows.

Structure:
    - unit/: Individual function and class tests
    - integration/: Stores driven through the real HTTP stack

Integration tests run against an in-memory FastAPI backend, no network.
Leverages pytest with pytest-check for soft assertions.
"""

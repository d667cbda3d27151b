"""Unit tests for individual components in isolation.

Ensures fast execution with minimal dependencies.

Coverage:
    - models/: Pydantic validation and camelCase parsing
    - client/: Configuration, gateway failures, envelope classification
    - stores/: Optimistic updates, rollback and history replay

Uses fake APIs and httpx.MockTransport instead of a backend. Leverages
pytest-check for multiple assertions per test.
"""

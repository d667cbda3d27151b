"""Integration tests for components working together as a system.

No mocks between the stores and the HTTP layer.

Coverage:
    - Conversation submissions, rollbacks and history replay
    - Document upload, paging, deletion and detail
    - One notification per failed call across the whole stack

Uses httpx.ASGITransport against the FastAPI fake backend in conftest.py.
"""

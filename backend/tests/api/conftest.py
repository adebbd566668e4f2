"""API test fixtures — FastAPI app over an in-process ASGI transport.

Invariants:
    - No network: httpx talks to the app through ASGITransport
    - Sample blog store is read-only, so tests share it safely
"""

import pytest
from httpx import ASGITransport, AsyncClient

from jsonapi_compound.main import app


@pytest.fixture
async def client():
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

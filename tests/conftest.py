"""
Shared fixtures: API test client, auth helpers and sample builders.
"""
import os

os.environ.setdefault("JWT_SECRET", "test-secret")

import pytest
from fastapi.testclient import TestClient
from jose import jwt

from app.core.config import JWT_ALGORITHM, JWT_SECRET
from app.main import app
from stats_engine.models import AggregatedPoint, Sample
from stats_engine.params import validate_params


@pytest.fixture
def client() -> TestClient:
    return TestClient(app)


@pytest.fixture
def auth_headers() -> dict:
    token = jwt.encode({"sub": "7"}, JWT_SECRET, algorithm=JWT_ALGORITHM)
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def make_params():
    """Build validated RequestParams from keyword overrides."""
    def _make(**overrides):
        raw = {"device_id": 955, "from": 1736294400, "to": 1736298000}
        raw.update(overrides)
        result = validate_params(raw)
        assert result.valid, result.errors
        return result.normalized
    return _make


@pytest.fixture
def power_samples() -> list:
    return [Sample(timestamp=1000 + i * 30, value=100 + i * 10) for i in range(6)]


@pytest.fixture
def make_points():
    def _make(count: int, start: int = 1000, step: int = 60, shape=lambda i: 100 + i):
        return [
            AggregatedPoint(
                timestamp=start + i * step,
                avg=shape(i),
                min=shape(i) - 10,
                max=shape(i) + 10,
                count=10,
            )
            for i in range(count)
        ]
    return _make

"""
Shared fixtures for adversarial tests.

Provides common test infrastructure for race condition, brute force
and injection tests.
"""

from collections.abc import Generator

import pytest
from fastapi.testclient import TestClient

from src.api.main import app

# Module-level marker for all adversarial tests
pytestmark = pytest.mark.adversarial


@pytest.fixture
def client() -> Generator[TestClient, None, None]:
    """Full application client; lifespan gives each test a fresh limiter."""
    with TestClient(app) as test_client:
        yield test_client

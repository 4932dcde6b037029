"""
Pytest fixtures for API integration tests.

Provides a FastAPI test client and a ready-made upload payload.
"""
import pytest
from fastapi.testclient import TestClient

from csvlens.main import app


@pytest.fixture(scope="function")
def client():
    """Test client bound to the application."""
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def csv_upload(customers):
    """The customers table in the shape the upload endpoint returns."""
    return {"filename": "customers.csv", "delimiter": ",", **customers}

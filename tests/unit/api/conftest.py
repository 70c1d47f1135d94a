"""Fixtures for API tests."""

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from enrollment_bff.api.app import create_app
from enrollment_bff.api.dependencies import get_enrollment_store, get_plan_catalog


@pytest.fixture
def app(store, plan_catalog) -> FastAPI:
    """Application wired to a fresh in-memory store."""
    app = create_app()
    app.dependency_overrides[get_enrollment_store] = lambda: store
    app.dependency_overrides[get_plan_catalog] = lambda: plan_catalog
    return app


@pytest.fixture
def client(app: FastAPI) -> TestClient:
    return TestClient(app)


@pytest.fixture
def create(client: TestClient):
    """Create an enrollment through the API and return its JSON body."""

    def _create(**body) -> dict:
        payload = {"customerId": "C1", "planId": "P1", **body}
        response = client.post("/api/v1/enrollment/", json=payload)
        assert response.status_code == 201, response.text
        return response.json()

    return _create

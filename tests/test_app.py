#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
Basic tests for the main application.
"""
import pytest
from fastapi.testclient import TestClient
from app import create_app


@pytest.fixture
def client(mock_settings):
    """Create a test client for the FastAPI app."""
    app = create_app(mock_settings)
    return TestClient(app)


def test_health_endpoint(client):
    """Test the health check endpoint."""
    response = client.get("/health")
    assert response.status_code == 200
    data = response.json()
    assert "status" in data


def test_app_creation(mock_settings):
    """Test that the app can be created successfully."""
    app = create_app(mock_settings)
    assert app is not None
    assert app.title == "Review Insight Chat API (LangChain + Chroma + OpenAI)"


def test_app_creates_database_on_first_use(mock_settings):
    """Building the app touches no files; the first chat request creates the database."""
    client = TestClient(create_app(mock_settings))
    assert not mock_settings.database_path.exists()

    response = client.get("/api/chats")

    assert response.status_code == 200
    assert response.json() == {"success": True, "chats": []}
    assert mock_settings.database_path.exists()


def test_chat_routes_registered(mock_settings):
    app = create_app(mock_settings)
    paths = app.openapi()["paths"]
    assert "post" in paths["/api/search"]
    assert "post" in paths["/api/index-data"]
    assert {"get", "post"} <= set(paths["/api/chats"])
    assert "get" in paths["/api/chats/{chat_id}/messages"]
    assert "delete" in paths["/api/chats/{chat_id}"]

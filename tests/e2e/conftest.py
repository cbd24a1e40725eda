"""Shared fixtures for end-to-end tests."""

import pytest
from dishka.integrations.fastapi import FastapiProvider
from fastapi.testclient import TestClient

from outpost.interface.api.app import create_app
from tests.di import build_test_container


@pytest.fixture
def app():
    """Application wired to mock providers and in-memory storage."""
    return create_app(build_test_container(None, FastapiProvider()))


@pytest.fixture
def client(app):
    """Test client with the application lifespan running."""
    with TestClient(app) as test_client:
        yield test_client

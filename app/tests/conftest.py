import os
import sys
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

# Get the project root directory
root_dir = Path(__file__).parent.parent.parent

# Add the project root to Python path
sys.path.insert(0, str(root_dir))

# Settings fail fast without a credential
os.environ.setdefault("OPENAI_API_KEY", "test-key")

from app.core.application import create_application
from app.dependencies.clients import get_completion_client
from app.services.completion_client import CompletionClient
from app.tests.fakes import FakeOpenAI, make_settings


@pytest.fixture
def settings():
    return make_settings()


@pytest.fixture
def fake_openai():
    return FakeOpenAI()


@pytest.fixture
def completion_client(fake_openai):
    return CompletionClient(fake_openai, timeout=0.2)


@pytest.fixture
def app(settings, completion_client):
    application = create_application(settings)
    application.dependency_overrides[get_completion_client] = lambda: completion_client
    return application


@pytest.fixture
def client(app):
    return TestClient(app, raise_server_exceptions=False)

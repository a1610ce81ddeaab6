"""Pytest configuration and fixtures."""

import pytest
from fastapi.testclient import TestClient

from app.api.http_api import app, get_backends
from app.core.dispatcher import Backends
from app.core.routing_types import TextCompletion
from app.llm.provider_config import Settings, get_settings


class FakeTextBackend:
    """Records prompts and returns a canned completion (or raises)."""

    def __init__(self, completion=None, error=None):
        self.completion = completion
        self.error = error
        self.prompts = []

    def complete_text(self, prompt):
        self.prompts.append(prompt)
        if self.error is not None:
            raise self.error
        return self.completion


class FakeImageBackend:
    def __init__(self, url=None, error=None):
        self.url = url
        self.error = error
        self.prompts = []

    def generate_image(self, prompt):
        self.prompts.append(prompt)
        if self.error is not None:
            raise self.error
        return self.url


@pytest.fixture
def text_backend():
    return FakeTextBackend(completion=TextCompletion(content="leaves fall softly"))


@pytest.fixture
def image_backend():
    return FakeImageBackend(url="https://example.hf.space/gradio_api/file=/tmp/image.webp")


@pytest.fixture
def settings():
    return Settings(openrouter_api_key="test-key", hf_token="hf_test")


@pytest.fixture
def client(text_backend, image_backend, settings):
    """Test client with both providers replaced by fakes.

    Tests may mutate the fake backends (or `settings` via
    `app.dependency_overrides[get_settings]`) before sending requests.
    """
    app.dependency_overrides[get_backends] = lambda: Backends(
        text=text_backend, image=image_backend
    )
    app.dependency_overrides[get_settings] = lambda: settings
    yield TestClient(app)
    app.dependency_overrides.clear()

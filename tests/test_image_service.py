"""Image backend tests (inference space HTTP calls mocked)."""

import json

import pytest
import requests

from app.core.errors import UpstreamCallError
from app.image import client as image_client
from app.image.client import first_result_url, iter_events, space_base_url
from app.image.service import GradioImageBackend, build_inputs
from app.llm.provider_config import IMAGE_PARAMETERS, Settings

IMAGE_URL = "https://black-forest-labs-flux-1-dev.hf.space/gradio_api/file=/tmp/gradio/image.webp"


class FakePostResponse:
    def __init__(self, body, status_code=200):
        self.body = body
        self.status_code = status_code

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.exceptions.HTTPError(f"{self.status_code} Server Error")

    def json(self):
        return self.body


class FakeStreamResponse:
    def __init__(self, lines, status_code=200):
        self.lines = lines
        self.status_code = status_code
        self.encoding = None

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        return False

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.exceptions.HTTPError(f"{self.status_code} Server Error")

    def iter_lines(self, decode_unicode=False):
        return iter(self.lines)


@pytest.fixture
def space(monkeypatch):
    """Fake Gradio space: records calls, serves configurable responses."""
    state = {
        "post": FakePostResponse({"event_id": "evt-1"}),
        "lines": [
            "event: generating",
            "data: null",
            "",
            "event: complete",
            "data: " + json.dumps([{"path": "/tmp/gradio/image.webp", "url": IMAGE_URL}, 1234]),
        ],
        "posts": [],
        "gets": [],
    }

    def fake_post(url, headers=None, json=None, timeout=None):
        state["posts"].append({"url": url, "headers": headers, "json": json, "timeout": timeout})
        return state["post"]

    def fake_get(url, headers=None, stream=False, timeout=None):
        state["gets"].append({"url": url, "headers": headers, "stream": stream, "timeout": timeout})
        return FakeStreamResponse(state["lines"])

    monkeypatch.setattr(image_client.requests, "post", fake_post)
    monkeypatch.setattr(image_client.requests, "get", fake_get)
    return state


@pytest.fixture
def backend():
    return GradioImageBackend(Settings(hf_token="hf_secret", image_timeout_seconds=90.0))


def test_space_base_url_from_space_id():
    assert space_base_url("black-forest-labs/FLUX.1-dev") == (
        "https://black-forest-labs-flux-1-dev.hf.space"
    )


def test_space_base_url_keeps_full_urls():
    assert space_base_url("http://127.0.0.1:7860/") == "http://127.0.0.1:7860"


def test_build_inputs_uses_fixed_parameters():
    assert build_inputs("a red fox", IMAGE_PARAMETERS) == ["a red fox", 0, True, 512, 512, 7.5, 50]


def test_generate_image_returns_first_url(space, backend):
    assert backend.generate_image("a red fox") == IMAGE_URL

    post = space["posts"][0]
    assert post["url"] == "https://black-forest-labs-flux-1-dev.hf.space/gradio_api/call/infer"
    assert post["json"] == {"data": ["a red fox", 0, True, 512, 512, 7.5, 50]}
    assert post["headers"]["Authorization"] == "Bearer hf_secret"
    assert post["timeout"] == 90.0

    get = space["gets"][0]
    assert get["url"].endswith("/gradio_api/call/infer/evt-1")
    assert get["stream"] is True
    assert get["timeout"] == 90.0


def test_generate_image_without_url_returns_none(space, backend):
    space["lines"] = ["event: complete", "data: " + json.dumps([{"path": "/tmp/x.webp"}, 1])]

    assert backend.generate_image("a red fox") is None


def test_error_event_raises(space, backend):
    space["lines"] = ["event: error", 'data: "GPU quota exceeded"']

    with pytest.raises(UpstreamCallError) as excinfo:
        backend.generate_image("a red fox")

    assert excinfo.value.message == "Inference space error: GPU quota exceeded"


def test_error_event_without_detail(space, backend):
    space["lines"] = ["event: error", "data: null"]

    with pytest.raises(UpstreamCallError, match="reported an error"):
        backend.generate_image("a red fox")


def test_stream_ending_early_raises(space, backend):
    space["lines"] = ["event: heartbeat", "data: null"]

    with pytest.raises(UpstreamCallError, match="ended before completion"):
        backend.generate_image("a red fox")


def test_missing_event_id_raises(space, backend):
    space["post"] = FakePostResponse({})

    with pytest.raises(UpstreamCallError, match="event id"):
        backend.generate_image("a red fox")


def test_submit_http_error_propagates(space, backend):
    space["post"] = FakePostResponse({}, status_code=503)

    with pytest.raises(requests.exceptions.HTTPError):
        backend.generate_image("a red fox")


def test_iter_events_pairs_event_and_data():
    lines = ["event: generating", "data: null", "", "event: complete", "data: [1]"]

    assert list(iter_events(lines)) == [("generating", "null"), ("complete", "[1]")]


def test_first_result_url_edge_cases():
    assert first_result_url([]) is None
    assert first_result_url(["/tmp/plain-path.webp"]) is None
    assert first_result_url([{"image": {"url": "https://x/y.png"}}]) == "https://x/y.png"

import json
from typing import Any, Dict, List

import httpx
import pytest
from fastapi.testclient import TestClient

from main import create_app
from utils.settings import Settings


class FakeGemini:
    """Records forwarded requests and answers with a canned response."""

    def __init__(self) -> None:
        self.requests: List[httpx.Request] = []
        self.status_code = 200
        self.body: Any = {"candidates": [{"content": {"parts": [{"text": "GOOD"}]}}]}
        self.error: Exception | None = None

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.error is not None:
            raise self.error
        if isinstance(self.body, (bytes, str)):
            return httpx.Response(self.status_code, content=self.body)
        return httpx.Response(self.status_code, json=self.body)

    def last_json(self) -> Dict[str, Any]:
        return json.loads(self.requests[-1].content)


@pytest.fixture
def settings(tmp_path):
    return Settings(
        gemini_api_key="test-key",
        gemini_model="gemini-test",
        gemini_api_base="https://gemini.invalid/v1beta",
        training_data_path=tmp_path / "data" / "training-data.json",
        public_dir=tmp_path / "public",
        max_body_bytes=1024 * 1024,
    )


@pytest.fixture
def gemini():
    return FakeGemini()


@pytest.fixture
def client(settings, gemini):
    app = create_app(settings, transport=httpx.MockTransport(gemini.handler))
    with TestClient(app) as test_client:
        yield test_client

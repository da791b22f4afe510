import httpx
import pytest
from fastapi.testclient import TestClient

from dependencies import get_advice_client
from main import app
from services.analyze_service import AdviceClient

UPSTREAM_URL = "https://advice.test/getadvice"

SAMPLE_RESULT = {
    "emotion": "joy",
    "advice": (
        "- Suggestion: Rest\n"
        "- Emotional Reflection: Calm\n"
        "- Keywords: a, b\n"
        "- Sentiment Score: 7"
    ),
}


class FakeUpstream:
    """Records outbound requests and answers with a canned response."""

    def __init__(self):
        self.requests = []
        self.status_code = 200
        self.json = SAMPLE_RESULT
        self.content = None
        self.error = None

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.error is not None:
            raise self.error
        if self.content is not None:
            return httpx.Response(self.status_code, content=self.content)
        return httpx.Response(self.status_code, json=self.json)

    def client(self) -> AdviceClient:
        return AdviceClient(UPSTREAM_URL, transport=httpx.MockTransport(self.handler))


@pytest.fixture
def upstream():
    fake = FakeUpstream()
    app.dependency_overrides[get_advice_client] = fake.client
    yield fake
    app.dependency_overrides.pop(get_advice_client, None)


@pytest.fixture
def client(upstream):
    return TestClient(app)


@pytest.fixture
def anyio_backend():
    return "asyncio"

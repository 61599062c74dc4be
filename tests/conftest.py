import os

# main.py builds a module-level app on import; give it a key
os.environ.setdefault("DEEPSEEK_API_KEY", "test-key")

import pytest
from fastapi.testclient import TestClient

from img_alt_api.core.settings import Settings
from img_alt_api.main import create_app


class FakeProvider:
    """Stands in for VisionProvider; records every VisionRequest it gets."""

    def __init__(self, reply: str = "A cat sleeping on a sofa.") -> None:
        self.reply = reply
        self.error: Exception | None = None
        self.calls = []

    async def describe(self, request) -> str:
        self.calls.append(request)
        if self.error is not None:
            raise self.error
        return self.reply


@pytest.fixture
def settings() -> Settings:
    return Settings(_env_file=None, deepseek_api_key="test-key")


@pytest.fixture
def provider() -> FakeProvider:
    return FakeProvider()


@pytest.fixture
def client(settings, provider) -> TestClient:
    return TestClient(create_app(settings, provider=provider))

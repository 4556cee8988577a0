"""Pytest configuration and shared fixtures."""
from types import SimpleNamespace
from unittest.mock import AsyncMock, Mock

import pytest

from artanalyst.ai import ImageAnalyzer
from artanalyst.boundary import AppContext, BoundaryDispatcher
from artanalyst.config import AppConfig
from artanalyst.state.in_memory import InMemoryStateStore

# 1x1 transparent PNG
PNG_BASE64 = (
    "iVBORw0KGgoAAAANSUhEUgAAAAEAAAABCAQAAAC1HAwCAAAAC0lEQVR42mNkYAAAAAYAAjCB0C8AAAAASUVORK5CYII="
)


class FakeWindow:
    """In-memory stand-in for a native window."""

    def __init__(self, x=100, y=100, width=1200, height=800, maximized=False):
        self.bounds = (x, y, width, height)
        self.maximized = maximized
        self.destroyed = False
        self.minimized = False
        self.closed = False

    def is_destroyed(self):
        return self.destroyed

    def get_bounds(self):
        return self.bounds

    def is_maximized(self):
        return self.maximized

    def minimize(self):
        self.minimized = True

    def maximize(self):
        self.maximized = True

    def unmaximize(self):
        self.maximized = False

    def close(self):
        self.closed = True
        self.destroyed = True


def make_message(message_id="a", role="user", content="hi", timestamp=1000):
    """Build a raw chat message as the UI would send it."""
    return {"id": message_id, "role": role, "content": content, "timestamp": timestamp}


def make_genai_client(text="A still life with apples.", side_effect=None):
    """Create a mock genai.Client whose async generate_content returns ``text``."""
    client = Mock()
    client.aio.models.generate_content = AsyncMock(
        return_value=SimpleNamespace(candidates=None, text=text),
        side_effect=side_effect,
    )
    return client


@pytest.fixture
def store():
    """Return an empty in-memory state store."""
    return InMemoryStateStore()


@pytest.fixture
def set_spy(store, monkeypatch):
    """Wrap the store's set so tests can count write attempts."""
    spy = Mock(wraps=store.set)
    monkeypatch.setattr(store, "set", spy)
    return spy


@pytest.fixture
def genai_client():
    return make_genai_client()


@pytest.fixture
def analyzer(genai_client):
    """Return an analyzer backed by a mock Gemini client."""
    return ImageAnalyzer(api_key="fake-key", model="gemini-test", client=genai_client)


@pytest.fixture
def config(tmp_path):
    return AppConfig(gemini_api_key="fake-key", gemini_model="gemini-test", data_dir=tmp_path)


@pytest.fixture
def context(config, store, analyzer):
    """Return an application context with a short debounce interval."""
    return AppContext.create(config, store=store, analyzer=analyzer, quiet_period=0.05)


@pytest.fixture
def dispatcher(context):
    return BoundaryDispatcher(context)


@pytest.fixture
def window():
    return FakeWindow()

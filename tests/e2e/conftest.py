"""Shared fixtures for end-to-end tests.

These run the real AIClient and retrying transport against an in-process
``httpx.MockTransport`` that plays the part of the completion endpoint.
"""

from unittest.mock import patch

import httpx
import pytest

from completion_server import FakeCompletionServer
from phonics_story.ai_client import AIClient
from phonics_story.config import APIConfig


@pytest.fixture(autouse=True)
def no_backoff():
    with patch("phonics_story.utils.retry.backoff_delay", return_value=0):
        yield


@pytest.fixture
def api_config():
    return APIConfig(base_url="http://llm.test", model="test-model", api_token="e2e-token")


@pytest.fixture
def make_client(api_config):
    """Build an AIClient that talks to the given fake server."""
    def build(server: FakeCompletionServer) -> AIClient:
        http = httpx.AsyncClient(transport=httpx.MockTransport(server))
        return AIClient(api_config, http_client=http)
    return build

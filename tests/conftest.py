"""Shared fixtures for the pipeline tests."""

import pytest

from chat_fakes import CollectingSink, FakeChatClient
from phonics_story.models import StoryInput


@pytest.fixture
def story_input():
    return StoryInput(
        theme="friendship",
        genre="adventure",
        phonic_skill="sh digraph",
        length=4,
        grade_level="2",
    )


@pytest.fixture
def sink():
    return CollectingSink()


@pytest.fixture
def chat():
    """A chat client whose evaluator approves the first draft."""
    return FakeChatClient()

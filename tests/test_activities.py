"""Tests for phonics_story.pipeline.activities."""

import copy

import pytest

from chat_fakes import SAMPLE_STORY, FakeChatClient
from phonics_story.errors import MalformedResponseError
from phonics_story.models import Story, StoryInput
from phonics_story.pipeline.activities import (
    ComprehensionQuestion,
    generate_pre_reading_prompts,
    generate_questions,
)


@pytest.fixture
def story():
    return Story.from_dict(copy.deepcopy(SAMPLE_STORY))


# ---------------------------------------------------------------------------
# Comprehension questions
# ---------------------------------------------------------------------------


class TestQuestions:
    @pytest.mark.asyncio
    async def test_questions_from_reply(self, story, story_input):
        chat = FakeChatClient()
        questions = await generate_questions(chat, story, story_input, 2, ["Literal", "Inference"])

        assert questions == [
            ComprehensionQuestion("Where did Sam run?", "Literal"),
            ComprehensionQuestion("Why did Sam and Pam share a snack?", "Open-ended"),
        ]
        prompt = chat.calls_of("questions")[0]["messages"][1]["content"]
        assert "Sam ran to the fish shop. He saw a big red ship.\n\nSam and Pam had a snack." in prompt
        assert "Generate exactly 2 comprehension questions" in prompt
        assert "- Literal\n- Inference" in prompt
        assert "- Title: The Fish Shop" in prompt
        assert "- Story Length: 4 sentences" in prompt

    @pytest.mark.asyncio
    async def test_no_types_requested(self, story, story_input):
        chat = FakeChatClient()
        await generate_questions(chat, story, story_input, 1)
        assert "- No specific types requested" in chat.calls_of("questions")[0]["messages"][1]["content"]

    @pytest.mark.asyncio
    async def test_zero_count_makes_no_request(self, story, story_input):
        chat = FakeChatClient()
        assert await generate_questions(chat, story, story_input, 0) == []
        assert chat.calls == []

    @pytest.mark.asyncio
    async def test_extra_questions_are_cut(self, story, story_input):
        chat = FakeChatClient()
        questions = await generate_questions(chat, story, story_input, 1)
        assert [q.text for q in questions] == ["Where did Sam run?"]

    @pytest.mark.asyncio
    async def test_loose_entries(self, story, story_input):
        chat = FakeChatClient(questions={"questions": [
            "What is a ship?",
            {"text": "  "},
            5,
            {"question": "Who ran?"},
        ]})
        questions = await generate_questions(chat, story, story_input, 4)
        assert [q.to_dict() for q in questions] == [
            {"text": "What is a ship?", "type": "Open-ended"},
            {"text": "Who ran?", "type": "Open-ended"},
        ]

    @pytest.mark.asyncio
    async def test_reply_without_list(self, story, story_input):
        chat = FakeChatClient(questions={"questions": "Where did Sam run?"})
        with pytest.raises(MalformedResponseError):
            await generate_questions(chat, story, story_input, 2)


# ---------------------------------------------------------------------------
# Pre-reading prompts
# ---------------------------------------------------------------------------


class TestPreReadingPrompts:
    @pytest.mark.asyncio
    async def test_prompts_from_reply(self, story, story_input):
        chat = FakeChatClient()
        prompts = await generate_pre_reading_prompts(chat, story, story_input, 2)

        assert prompts == ["Think about a time you shared with a friend.", "Have you ever seen a ship?"]
        call = chat.calls_of("pre-reading")[0]
        assert call["max_tokens"] == 612
        prompt = call["messages"][1]["content"]
        assert "Theme concepts to connect: loyalty, trust" in prompt
        assert "Maximum words per prompt: 18" in prompt
        assert "Sam ran to the fish shop." not in prompt

    @pytest.mark.asyncio
    async def test_unknown_theme_uses_general_connections(self, story):
        story_input = StoryInput(theme="volcanoes", genre="mystery", phonic_skill="sh",
                                 length=4, grade_level="K")
        chat = FakeChatClient()
        await generate_pre_reading_prompts(chat, story, story_input, 1)

        prompt = chat.calls_of("pre-reading")[0]["messages"][1]["content"]
        assert "Theme concepts to connect: experiences, feelings, choices" in prompt
        assert "Maximum words per prompt: 12" in prompt

    @pytest.mark.asyncio
    async def test_non_text_prompts_are_dropped(self, story, story_input):
        chat = FakeChatClient(prompts={"prompts": ["Imagine a ship.", None, "", 3]})
        assert await generate_pre_reading_prompts(chat, story, story_input, 3) == ["Imagine a ship."]

    @pytest.mark.asyncio
    async def test_zero_count_makes_no_request(self, story, story_input):
        chat = FakeChatClient()
        assert await generate_pre_reading_prompts(chat, story, story_input, 0) == []
        assert chat.calls == []

    @pytest.mark.asyncio
    async def test_reply_without_list(self, story, story_input):
        chat = FakeChatClient(prompts={})
        with pytest.raises(MalformedResponseError):
            await generate_pre_reading_prompts(chat, story, story_input, 2)

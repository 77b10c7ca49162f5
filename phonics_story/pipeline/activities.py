"""Comprehension questions and pre-reading prompts for a finished story."""

from dataclasses import dataclass
from typing import Any, Optional, Sequence

from loguru import logger

from ..ai_client import ChatClient
from ..errors import MalformedResponseError
from ..models import Story, StoryInput
from ..utils.cancellation import CancellationToken
from .prompts import messages_for_pre_reading, messages_for_questions

QUESTIONS_TEMPERATURE = 0.7
PRE_READING_TEMPERATURE = 0.7
PRE_READING_MAX_TOKENS = 612
DEFAULT_QUESTION_TYPE = "Open-ended"


@dataclass
class ComprehensionQuestion:
    text: str
    type: str = DEFAULT_QUESTION_TYPE

    def to_dict(self) -> dict:
        return {"text": self.text, "type": self.type}


def _items(data: Any, key: str) -> list:
    items = data.get(key) if isinstance(data, dict) else None
    if not isinstance(items, list):
        raise MalformedResponseError(f'AI response has no "{key}" list')
    return items


def _question(item: Any) -> Optional[ComprehensionQuestion]:
    if isinstance(item, str):
        text, kind = item, DEFAULT_QUESTION_TYPE
    elif isinstance(item, dict):
        text = item.get("text") or item.get("question") or ""
        kind = item.get("type") or DEFAULT_QUESTION_TYPE
    else:
        return None
    text = str(text).strip()
    return ComprehensionQuestion(text=text, type=str(kind).strip()) if text else None


async def generate_questions(
    client: ChatClient,
    story: Story,
    story_input: StoryInput,
    count: int,
    question_types: Sequence[str] = (),
    *,
    token: Optional[CancellationToken] = None,
    max_tokens: int = 8192,
) -> list[ComprehensionQuestion]:
    """Ask for ``count`` comprehension questions about ``story``.

    Returns at most ``count`` questions; blank entries are dropped. A
    ``count`` of zero or less makes no request.

    Raises:
        MalformedResponseError: the reply has no ``questions`` list.
    """
    if count <= 0:
        return []

    data = await client.chat_json(
        messages_for_questions(story, story_input, count, tuple(question_types)),
        temperature=QUESTIONS_TEMPERATURE,
        max_tokens=max_tokens,
        token=token,
    )
    questions = [q for q in map(_question, _items(data, "questions")) if q is not None][:count]
    if len(questions) < count:
        logger.warning(f"Asked for {count} questions, got {len(questions)}")
    return questions


async def generate_pre_reading_prompts(
    client: ChatClient,
    story: Story,
    story_input: StoryInput,
    count: int,
    *,
    token: Optional[CancellationToken] = None,
) -> list[str]:
    """Ask for ``count`` thinking prompts to use before reading ``story``."""
    if count <= 0:
        return []

    data = await client.chat_json(
        messages_for_pre_reading(story, story_input, count),
        temperature=PRE_READING_TEMPERATURE,
        max_tokens=PRE_READING_MAX_TOKENS,
        token=token,
    )
    prompts = [str(p).strip() for p in _items(data, "prompts") if isinstance(p, str) and p.strip()]
    if len(prompts) < count:
        logger.warning(f"Asked for {count} pre-reading prompts, got {len(prompts)}")
    return prompts[:count]

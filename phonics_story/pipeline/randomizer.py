"""LLM-invented story parameters for a grade, used to seed a pipeline run."""

import random
from typing import Optional

from loguru import logger

from ..ai_client import ChatClient
from ..education.grade_constraints import VALID_GRADES, grade_display, normalize_grade
from ..education.phonics import extract_pattern
from ..errors import CancellationError, PipelineError, ValidationError
from ..models import StoryInput
from ..utils.cancellation import CancellationToken
from ..utils.retry import pause
from .prompts import RANDOM_LENGTH_RANGE, messages_for_random_story
from .runner import validate_input

RANDOM_TEMPERATURE = 0.9
OPTION_DELAY = 1.0


def _clamp_length(value) -> int:
    low, high = RANDOM_LENGTH_RANGE
    try:
        length = int(value)
    except (TypeError, ValueError):
        raise ValidationError([f"length: expected a number of sentences, got {value!r}"])
    return max(low, min(high, length))


async def generate_random_story_input(
    client: ChatClient,
    grade: Optional[str] = None,
    *,
    token: Optional[CancellationToken] = None,
    max_tokens: int = 8192,
    rng: Optional[random.Random] = None,
) -> StoryInput:
    """Ask the model for an original theme, genre, phonics skill and length.

    ``grade`` is picked at random when omitted. The reply's grade is always
    replaced by the requested one and its length is clamped to
    ``RANDOM_LENGTH_RANGE``.

    Raises:
        CancellationError: ``token`` fired.
        PipelineError: the call failed or the reply was not a usable story input.
    """
    if grade is None:
        grade = (rng or random).choice(VALID_GRADES)
    grade = normalize_grade(grade)
    if grade not in VALID_GRADES:
        raise ValidationError([f"gradeLevel: grade level must be K or 1-6, got {grade!r}"])

    logger.info(f"Inventing story parameters for {grade_display(grade)}")
    try:
        data = await client.chat_json(
            messages_for_random_story(grade),
            temperature=RANDOM_TEMPERATURE,
            max_tokens=max_tokens,
            token=token,
        )
        params = {k: data.get(k) for k in ("theme", "genre", "phonicSkill")}
        params["length"] = _clamp_length(data.get("length"))
        params["gradeLevel"] = grade
        story_input = validate_input(params)
    except CancellationError:
        raise
    except Exception as e:
        logger.error(f"Random story parameters failed: {e}")
        raise PipelineError(f"random story generation failed: {e}") from e

    if not extract_pattern(story_input.phonic_skill):
        logger.warning(f'Phonics skill "{story_input.phonic_skill}" matches no known pattern')
    logger.info(
        f"Random parameters: {story_input.theme} | {story_input.genre} | "
        f"{story_input.phonic_skill} | {story_input.length} sentences"
    )
    return story_input


async def generate_story_options(
    client: ChatClient,
    grade: Optional[str] = None,
    count: int = 3,
    *,
    token: Optional[CancellationToken] = None,
    delay: float = OPTION_DELAY,
) -> list[StoryInput]:
    """Generate up to ``count`` independent story inputs for ``grade`` (random per option when None).

    Failed options are skipped; the call only fails when none succeed.
    Options are spaced ``delay`` seconds apart to vary the replies.
    """
    options: list[StoryInput] = []
    errors: list[str] = []

    for i in range(count):
        if i and delay:
            await pause(delay, token)
        try:
            options.append(await generate_random_story_input(client, grade, token=token))
        except CancellationError:
            raise
        except PipelineError as e:
            errors.append(str(e))
            logger.warning(f"Story option {i + 1} failed: {e}")

    if count > 0 and not options:
        raise PipelineError(f"failed to generate any story options: {'; '.join(errors)}")

    target = grade_display(grade) if grade else "random grades"
    logger.info(f"Generated {len(options)}/{count} story options for {target}")
    return options

"""Entry point for running the full story pipeline."""

import dataclasses
from typing import Any, Mapping, Optional, Union

from loguru import logger
from pydantic import ValidationError as PydanticValidationError

from ..ai_client import AIClient, ChatClient
from ..analytics import LoggingSink
from ..config import Config
from ..education.grade_constraints import grade_display
from ..errors import CancellationError, PipelineError, ValidationError
from ..models import PipelineOptions, Story, StoryInput
from .core import run_pipeline_core
from .report import build_educational_analysis, build_final_report


def validate_input(story_input: Union[StoryInput, Mapping[str, Any]]) -> StoryInput:
    """Coerce ``story_input`` into a StoryInput or raise ValidationError listing every problem."""
    if isinstance(story_input, StoryInput):
        return story_input
    if not isinstance(story_input, Mapping):
        raise ValidationError([f"story input must be a mapping, got {type(story_input).__name__}"])
    try:
        return StoryInput.model_validate(dict(story_input))
    except PydanticValidationError as e:
        errors = []
        for err in e.errors():
            field = ".".join(str(part) for part in err["loc"]) or "input"
            errors.append(f"{field}: {err['msg']}")
        raise ValidationError(errors) from e


def _with_defaults(options: Optional[PipelineOptions], config: Config) -> PipelineOptions:
    if options is None:
        options = PipelineOptions.from_config(config.pipeline)
    if options.analytics is None:
        options = dataclasses.replace(options, analytics=LoggingSink())
    return options


async def run_pipeline(
    story_input: Union[StoryInput, Mapping[str, Any]],
    options: Optional[PipelineOptions] = None,
    *,
    client: Optional[ChatClient] = None,
    config: Optional[Config] = None,
) -> Story:
    """Validate input, run the pipeline and attach the educational analysis and report.

    Raises:
        ValidationError: the input is malformed; no request was made.
        CancellationError: the run was cancelled.
        PipelineError: story generation failed.
    """
    story_input = validate_input(story_input)
    config = config or Config()
    options = _with_defaults(options, config)

    logger.info(f"Starting educational story pipeline for {grade_display(story_input.grade_level)}")
    logger.info(
        f"Target: {story_input.phonic_skill} | Theme: {story_input.theme} | "
        f"Length: {story_input.length} sentences"
    )

    owned = client is None
    if owned:
        client = AIClient(config.api)

    try:
        story = await run_pipeline_core(story_input, client, options)
        story.educational_analysis = build_educational_analysis(story, story_input)
        story.final_report = build_final_report(story, story_input, options.quality_threshold)
    except CancellationError:
        logger.warning("Story pipeline cancelled")
        raise
    except Exception as e:
        logger.error(f"Pipeline failed: {e}")
        raise PipelineError(f"story generation failed: {e}") from e
    finally:
        if owned:
            await client.aclose()

    logger.success(f"Pipeline completed: {story.final_report.overall_assessment}")
    return story

"""Phonics story writer: LLM-generated, grade-appropriate phonics stories."""

from .ai_client import AIClient, ChatClient
from .analytics import LoggingSink, NullSink, StatusSink, TimedEvent
from .config import APIConfig, Config, PipelineConfig
from .errors import (
    AIResponseError,
    CancellationError,
    ContentMissingError,
    MalformedResponseError,
    PipelineError,
    RequestError,
    StoryPipelineError,
    TransportError,
    ValidationError,
)
from .models import Evaluation, PipelineOptions, Sentence, SentenceRevision, Story, StoryInput
from .pipeline import (
    EducationalAnalysis,
    FinalReport,
    generate_pre_reading_prompts,
    generate_questions,
    generate_random_story_input,
    generate_story_options,
    run_pipeline,
    run_pipeline_core,
)
from .utils.cancellation import CancellationToken

__version__ = "0.1.0"

__all__ = [
    "AIClient",
    "ChatClient",
    "LoggingSink",
    "NullSink",
    "StatusSink",
    "TimedEvent",
    "APIConfig",
    "Config",
    "PipelineConfig",
    "AIResponseError",
    "CancellationError",
    "ContentMissingError",
    "MalformedResponseError",
    "PipelineError",
    "RequestError",
    "StoryPipelineError",
    "TransportError",
    "ValidationError",
    "Evaluation",
    "PipelineOptions",
    "Sentence",
    "SentenceRevision",
    "Story",
    "StoryInput",
    "FinalReport",
    "EducationalAnalysis",
    "run_pipeline",
    "run_pipeline_core",
    "generate_pre_reading_prompts",
    "generate_questions",
    "generate_random_story_input",
    "generate_story_options",
    "CancellationToken",
]

"""Exception taxonomy for the story pipeline."""

from typing import Optional


class StoryPipelineError(Exception):
    """Base class for every error raised by phonics_story."""


class ValidationError(StoryPipelineError):
    """Story input failed validation before any network call was made."""

    def __init__(self, errors: list[str]):
        self.errors = list(errors)
        super().__init__(f"Invalid input: {', '.join(self.errors)}")


class CancellationError(StoryPipelineError):
    """The caller cancelled the run. Never retried, never wrapped."""

    def __init__(self, message: str = "operation cancelled"):
        super().__init__(message)


class TransportError(StoryPipelineError):
    """Retries exhausted against the chat endpoint, or a network failure."""

    def __init__(self, message: str, status_code: Optional[int] = None, body: str = ""):
        super().__init__(message)
        self.status_code = status_code
        self.body = body


class RequestError(TransportError):
    """The chat endpoint answered with a non-success status."""


class AIResponseError(StoryPipelineError):
    """A response arrived but cannot be used."""


class ContentMissingError(AIResponseError):
    pass


class MalformedResponseError(AIResponseError):
    pass


class PipelineError(StoryPipelineError):
    """Story generation failed; wraps the original cause."""

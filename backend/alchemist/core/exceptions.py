"""
Core Exceptions
Standardized exceptions for the application.

Every generation step raises exactly one StageError subclass; the stage
name travels with the error so the orchestrator can record where a run
stopped without inspecting messages.
"""

from typing import Optional


class AlchemistError(Exception):
    """Base exception for all application errors."""
    pass


class InfrastructureError(AlchemistError):
    """Base exception for infrastructure errors (model gateway, configuration)."""
    pass


class TopicValidationError(AlchemistError, ValueError):
    """Raised when user input (a topic or prompt) is blank."""
    pass


class InvalidDataUriError(AlchemistError, ValueError):
    """Raised when a string is not a base64 data URI of the expected kind."""
    pass


class PipelineError(AlchemistError):
    """Base exception for generation pipeline errors."""
    pass


class StageError(PipelineError):
    """A generation step failed; `stage` names the step."""

    stage = "unknown"

    def __init__(self, message: str, *, stage: Optional[str] = None):
        super().__init__(message)
        self.message = message
        if stage is not None:
            self.stage = stage


class PlanError(StageError):
    stage = "plan"


class EmptyPlanError(PlanError):
    """The plan step returned no usable modules."""

    def __init__(self, message: str = "Failed to generate a valid module plan."):
        super().__init__(message)


class IdeaGenerationError(StageError):
    stage = "idea"


class ImageGenerationError(StageError):
    stage = "image"


class BackgroundRemovalError(ImageGenerationError):
    stage = "background_removal"


class ContentGenerationError(StageError):
    stage = "content"


class ScriptGenerationError(StageError):
    stage = "script"


class SpeechGenerationError(StageError):
    stage = "speech"

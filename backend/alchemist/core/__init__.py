"""
Core Module - Cross-cutting concerns and shared infrastructure

Organization:
    - logging.py: Structured logging configuration and utilities
    - llm_logger.py: Model gateway request/response logging
    - exceptions.py: Error taxonomy for the pipeline and infrastructure
    - data_uri.py: Base64 data URI encoding and parsing
    - validation.py: Input validation and download naming
    - runtime.py: Environment parsing helpers

Usage:
    from alchemist.core import get_logger, build_data_uri, require_topic
"""

# Logging
from .logging import (
    setup_logging,
    get_logger,
    set_request_id,
    set_job_id,
    clear_context,
    module_context,
    LogTimer,
)

# Exceptions
from .exceptions import (
    AlchemistError,
    InfrastructureError,
    TopicValidationError,
    InvalidDataUriError,
    PipelineError,
    StageError,
    PlanError,
    EmptyPlanError,
    IdeaGenerationError,
    ImageGenerationError,
    BackgroundRemovalError,
    ContentGenerationError,
    ScriptGenerationError,
    SpeechGenerationError,
)

# Data URIs
from .data_uri import (
    build_data_uri,
    is_data_uri,
    parse_data_uri,
    require_image_data_uri,
    png_dimensions,
)

# Validation
from .validation import (
    require_topic,
    require_prompt,
    safe_filename_fragment,
    suggest_download_name,
)

# Runtime
from .runtime import (
    parse_bool_env,
    env_int,
    gateway_backend_report,
)

__all__ = [
    # Logging
    "setup_logging",
    "get_logger",
    "set_request_id",
    "set_job_id",
    "clear_context",
    "module_context",
    "LogTimer",
    # Exceptions
    "AlchemistError",
    "InfrastructureError",
    "TopicValidationError",
    "InvalidDataUriError",
    "PipelineError",
    "StageError",
    "PlanError",
    "EmptyPlanError",
    "IdeaGenerationError",
    "ImageGenerationError",
    "BackgroundRemovalError",
    "ContentGenerationError",
    "ScriptGenerationError",
    "SpeechGenerationError",
    # Data URIs
    "build_data_uri",
    "is_data_uri",
    "parse_data_uri",
    "require_image_data_uri",
    "png_dimensions",
    # Validation
    "require_topic",
    "require_prompt",
    "safe_filename_fragment",
    "suggest_download_name",
    # Runtime
    "parse_bool_env",
    "env_int",
    "gateway_backend_report",
]

"""Helpers shared by the generation steps."""

import base64
import binascii
from typing import Any, Dict, Iterator, Optional, Tuple

from alchemist.config import TEXT_STEP_TIMEOUT
from alchemist.services.infrastructure.llm.prompting_engine import PromptConfig


def text_prompt_config(**overrides: Any) -> PromptConfig:
    """PromptConfig for a text step, with the configured timeout applied."""
    overrides.setdefault("timeout", TEXT_STEP_TIMEOUT or None)
    return PromptConfig(**overrides)


def failure_reason(result: Dict[str, Any]) -> str:
    error = result.get("error") or "unknown error"
    error_type = result.get("error_type")
    return f"{error_type}: {error}" if error_type and error_type not in error else error


def iter_response_parts(response: Any) -> Iterator[Any]:
    """Yield every content part of every candidate in an SDK response."""
    for candidate in getattr(response, "candidates", None) or []:
        content = getattr(candidate, "content", None)
        for part in getattr(content, "parts", None) or []:
            yield part


def decode_blob_data(data: Any) -> Optional[bytes]:
    """Inline data arrives as bytes, or as base64 text from some transports."""
    if isinstance(data, (bytes, bytearray)):
        return bytes(data)
    if isinstance(data, str):
        try:
            return base64.b64decode(data, validate=True)
        except (binascii.Error, ValueError):
            return None
    return None


def first_inline_media(response: Any, mime_prefix: str) -> Optional[Tuple[bytes, Optional[str]]]:
    """
    Return (bytes, mime type) of the first inline part whose MIME type starts
    with ``mime_prefix``. Parts without a MIME type are accepted too.
    """
    for part in iter_response_parts(response):
        inline_data = getattr(part, "inline_data", None)
        if inline_data is None:
            continue
        mime_type = getattr(inline_data, "mime_type", None)
        if mime_type and not str(mime_type).lower().startswith(mime_prefix):
            continue
        payload = decode_blob_data(getattr(inline_data, "data", None))
        if payload:
            return payload, mime_type
    return None

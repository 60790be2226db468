"""
Model Gateway Call Logger

Records every request sent to the model gateway and the matching response:
- Truncated prompt text and generation config
- Counts and sizes of inline media parts (images sent for editing)
- Response text preview, returned media parts, duration and errors

Console records go through the structured application logger. When
LLM_LOG_FILE is set, full records are also appended to a JSONL file.

Usage:
    llm_logger = get_llm_logger()
    request_id = llm_logger.log_request(model="gemini-2.5-flash", contents=prompt, config={...})
    ...
    llm_logger.log_response(request_id, response)
"""

import json
import os
import threading
import time
import uuid
from dataclasses import asdict, dataclass
from datetime import UTC, datetime
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from .logging import get_logger


@dataclass
class LLMRequest:
    """Represents a gateway request"""
    request_id: str
    timestamp: str
    model: str
    prompt: str  # Shortened version
    prompt_length: int
    config: Dict[str, Any]
    media_parts: int = 0
    media_bytes: int = 0


@dataclass
class LLMResponse:
    """Represents a gateway response"""
    request_id: str
    timestamp: str
    response_text: str
    duration_seconds: float
    success: bool
    media_parts: int = 0
    error: Optional[str] = None
    error_type: Optional[str] = None


def _now() -> str:
    return datetime.now(UTC).isoformat().replace("+00:00", "Z")


def _inline_parts(response: Any) -> List[Any]:
    """Collect inline_data blobs from the first candidate of a response."""
    candidates = getattr(response, "candidates", None) or []
    blobs = []
    for candidate in candidates[:1]:
        content = getattr(candidate, "content", None)
        for part in getattr(content, "parts", None) or []:
            inline_data = getattr(part, "inline_data", None)
            if inline_data is not None:
                blobs.append(inline_data)
    return blobs


class LLMLogger:
    """Logger for model gateway requests and responses."""

    def __init__(
        self,
        max_prompt_length: int = 500,
        max_response_length: Optional[int] = 2000,
        log_file: Optional[Path] = None,
    ):
        self.max_prompt_length = max_prompt_length
        self.max_response_length = max_response_length
        self.log_file = Path(log_file) if log_file else None
        self.logger = get_logger(__name__, component="llm_logger")
        self._active_requests: Dict[str, float] = {}
        self._lock = threading.Lock()

    @staticmethod
    def _truncate_text(text: Optional[str], max_length: Optional[int]) -> str:
        if text is None:
            return ""
        if max_length is None or len(text) <= max_length:
            return text
        return text[:max_length] + f"... [truncated, total: {len(text)} chars]"

    @staticmethod
    def _split_contents(contents: Union[str, List[Any]]) -> tuple[str, int, int]:
        """Return (joined text, media part count, media byte total)."""
        if isinstance(contents, str):
            return contents, 0, 0

        texts: List[str] = []
        media_parts = 0
        media_bytes = 0
        for item in contents or []:
            if isinstance(item, str):
                texts.append(item)
                continue
            text = getattr(item, "text", None)
            if isinstance(text, str):
                texts.append(text)
                continue
            inline_data = getattr(item, "inline_data", None)
            if inline_data is not None:
                media_parts += 1
                data = getattr(inline_data, "data", None)
                if isinstance(data, (bytes, bytearray)):
                    media_bytes += len(data)
        return "\n".join(texts), media_parts, media_bytes

    @staticmethod
    def _response_text(response: Any) -> str:
        if response is None:
            return ""
        if isinstance(response, str):
            return response
        try:
            return getattr(response, "text", None) or ""
        except (AttributeError, ValueError):
            return ""

    def _append_jsonl(self, record: Dict[str, Any]) -> None:
        if not self.log_file:
            return
        try:
            self.log_file.parent.mkdir(parents=True, exist_ok=True)
            with self._lock, self.log_file.open("a", encoding="utf-8") as handle:
                handle.write(json.dumps(record, default=str) + "\n")
        except OSError as exc:
            self.logger.warning("Could not write LLM call log", extra={"path": str(self.log_file), "error": str(exc)})

    def log_request(
        self,
        model: str,
        contents: Union[str, List[Any]],
        config: Optional[Dict[str, Any]] = None,
    ) -> str:
        """
        Log a gateway request.

        Returns:
            Request ID for correlation with the response
        """
        request_id = str(uuid.uuid4())
        full_prompt, media_parts, media_bytes = self._split_contents(contents)

        request = LLMRequest(
            request_id=request_id,
            timestamp=_now(),
            model=model,
            prompt=self._truncate_text(full_prompt, self.max_prompt_length),
            prompt_length=len(full_prompt),
            config=config or {},
            media_parts=media_parts,
            media_bytes=media_bytes,
        )
        with self._lock:
            self._active_requests[request_id] = time.time()

        log_data = {"event": "llm_request", **asdict(request)}
        self.logger.info(
            f"LLM Request | Model: {model} | Prompt: {len(full_prompt)} chars",
            extra={"extra_data": log_data},
        )
        self._append_jsonl({**log_data, "prompt": full_prompt})
        return request_id

    def log_response(
        self,
        request_id: str,
        response: Any,
        success: bool = True,
        error: Optional[BaseException] = None,
    ) -> None:
        """Log a gateway response (or failure) for a previously logged request."""
        with self._lock:
            started = self._active_requests.pop(request_id, None)
        duration = round(time.time() - started, 3) if started else 0.0

        response_text = self._response_text(response) if success else ""
        record = LLMResponse(
            request_id=request_id,
            timestamp=_now(),
            response_text=self._truncate_text(response_text, self.max_response_length),
            duration_seconds=duration,
            success=success,
            media_parts=len(_inline_parts(response)) if success else 0,
            error=str(error) if error else None,
            error_type=type(error).__name__ if error else None,
        )
        log_data = {"event": "llm_response", **asdict(record)}

        if success:
            self.logger.info(
                f"LLM Response | Duration: {duration:.2f}s | Length: {len(response_text)} chars",
                extra={"extra_data": log_data},
            )
        else:
            self.logger.error(
                f"LLM Error | Duration: {duration:.2f}s | Error: {record.error}",
                extra={"extra_data": log_data},
            )
        self._append_jsonl(log_data)

    def log_error(self, request_id: str, error: BaseException) -> None:
        self.log_response(request_id, None, success=False, error=error)


_default_logger: Optional[LLMLogger] = None


def get_llm_logger() -> LLMLogger:
    """Get the shared LLMLogger instance (singleton pattern)."""
    global _default_logger
    if _default_logger is None:
        log_file = os.getenv("LLM_LOG_FILE")
        _default_logger = LLMLogger(log_file=Path(log_file) if log_file else None)
    return _default_logger

"""
Base Prompting Engine

Provides core model interaction with unified client handling, response
parsing and cost tracking. Every call is a single attempt: failures are
reported back to the caller, never retried here.
"""

import asyncio
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Union

from alchemist.config.models import get_model_config
from alchemist.core import get_logger
from alchemist.services.infrastructure.llm.cost_tracker import CostTracker
from alchemist.services.infrastructure.llm.gemini.client import (
    GenerationConfig,
    UnifiedGeminiClient,
    create_client,
)
from alchemist.services.infrastructure.parsing import parse_json_response

logger = get_logger(__name__, component="prompting_engine")


@dataclass
class PromptConfig:
    """Configuration for a prompt execution"""
    model_name: Optional[str] = None  # If None, uses the step's configured model
    temperature: Optional[float] = None  # If None, uses the step's configured temperature
    top_p: Optional[float] = None
    top_k: Optional[int] = None
    max_output_tokens: Optional[int] = None
    timeout: Optional[float] = None
    response_format: str = "text"  # "text" or "json"
    system_instruction: Optional[str] = None
    response_schema: Optional[Any] = None
    response_modalities: Optional[List[str]] = None
    voice_name: Optional[str] = None


def _as_int(value: Any) -> int:
    return value if isinstance(value, int) else 0


class PromptingEngine:
    """
    Centralized engine for all model interactions of one pipeline step.

    Responsibilities:
    - Unified Gemini client management
    - Request/response handling with an optional timeout
    - Cost tracking integration
    - Response parsing (text, JSON)
    """

    def __init__(
        self,
        config_key: str,
        cost_tracker: Optional[CostTracker] = None,
        client: Optional[UnifiedGeminiClient] = None,
    ):
        """Initialize the prompting engine.

        Args:
            config_key: Pipeline step in the model config (e.g. "module_plan")
            cost_tracker: Optional cost tracker shared across a run
            client: Optional pre-built client; created on first use otherwise
        """
        self.config_key = config_key
        self.cost_tracker = cost_tracker or CostTracker()
        self._client = client

    @property
    def client(self) -> UnifiedGeminiClient:
        if self._client is None:
            self._client = create_client()
        return self._client

    @property
    def model_name(self) -> str:
        return get_model_config(self.config_key).model_name

    def _get_generation_config(self, prompt_config: PromptConfig) -> Optional[GenerationConfig]:
        """Build generation config from prompt config"""
        step_config = get_model_config(self.config_key)
        kwargs: Dict[str, Any] = {}

        temperature = prompt_config.temperature if prompt_config.temperature is not None else step_config.temperature
        if temperature is not None:
            kwargs["temperature"] = temperature
        if prompt_config.top_p is not None:
            kwargs["top_p"] = prompt_config.top_p
        if prompt_config.top_k is not None:
            kwargs["top_k"] = prompt_config.top_k
        if prompt_config.max_output_tokens is not None:
            kwargs["max_output_tokens"] = prompt_config.max_output_tokens
        if prompt_config.response_format == "json":
            kwargs["response_mime_type"] = "application/json"
        if prompt_config.response_schema is not None:
            kwargs["response_schema"] = prompt_config.response_schema
        if prompt_config.system_instruction:
            kwargs["system_instruction"] = prompt_config.system_instruction
        if prompt_config.response_modalities:
            kwargs["response_modalities"] = list(prompt_config.response_modalities)
        if prompt_config.voice_name:
            kwargs["voice_name"] = prompt_config.voice_name

        return GenerationConfig(**kwargs) if kwargs else None

    def _track_usage(self, response: Any, model_name: str) -> Dict[str, int]:
        usage_metadata = getattr(response, "usage_metadata", None)
        if not usage_metadata:
            return {}
        usage = {
            "input_tokens": _as_int(getattr(usage_metadata, "prompt_token_count", 0)),
            "output_tokens": _as_int(getattr(usage_metadata, "candidates_token_count", 0)),
            "total_tokens": _as_int(getattr(usage_metadata, "total_token_count", 0)),
        }
        self.cost_tracker.track_request(
            model_name=model_name,
            input_tokens=usage["input_tokens"],
            output_tokens=usage["output_tokens"],
        )
        return usage

    async def generate(
        self,
        prompt: str,
        config: Optional[PromptConfig] = None,
        contents: Optional[Union[str, List[Any]]] = None,
        context: Optional[Dict[str, Any]] = None,
    ) -> Dict[str, Any]:
        """
        Generate a response from the model.

        Args:
            prompt: The prompt text (sent as-is unless ``contents`` is given)
            config: Optional prompt configuration
            contents: Optional multimodal contents replacing the prompt
            context: Optional context echoed back on failure

        Returns:
            Dict containing:
                - success: bool
                - response: str (text response, may be empty for media output)
                - raw_response: the SDK response (for inline media parts)
                - parsed_json: Dict (if response_format is "json")
                - json_parse_error: str (if JSON was requested but not found)
                - error / error_type: str (if failed)
                - usage: Dict (token usage info)
        """
        config = config or PromptConfig()
        model_name = config.model_name or self.model_name
        payload = contents if contents is not None else prompt

        try:
            gen_config = self._get_generation_config(config)
            call = asyncio.to_thread(
                self.client.models.generate_content,
                model=model_name,
                contents=payload,
                config=gen_config,
            )
            if config.timeout:
                response = await asyncio.wait_for(call, timeout=config.timeout)
            else:
                response = await call
        except asyncio.TimeoutError:
            logger.warning(
                "Model request timed out",
                extra={"step": self.config_key, "model": model_name, "timeout": config.timeout},
            )
            return {
                "success": False,
                "error": f"Request timed out after {config.timeout}s",
                "error_type": "TimeoutError",
                "context": context,
            }
        except Exception as e:
            logger.warning(
                "Model request failed",
                extra={"step": self.config_key, "model": model_name, "error": str(e), "error_type": type(e).__name__},
            )
            return {
                "success": False,
                "error": str(e),
                "error_type": type(e).__name__,
                "context": context,
            }

        result: Dict[str, Any] = {
            "success": True,
            "usage": self._track_usage(response, model_name),
            "raw_response": response,
        }

        text_response = getattr(response, "text", None)
        result["response"] = text_response if isinstance(text_response, str) else ""

        if config.response_format == "json":
            parsed = parse_json_response(result["response"])
            result["parsed_json"] = parsed
            if not parsed:
                result["json_parse_error"] = "Response did not contain a JSON object"

        return result

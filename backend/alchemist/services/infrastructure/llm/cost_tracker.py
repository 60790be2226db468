"""
Cost tracking for Gemini API usage
"""

import threading
from typing import Any, Dict

# Gemini pricing (per 1M tokens)
# See: https://ai.google.dev/pricing
PRICING = {
    "gemini-2.5-flash": {
        "input": 0.30,
        "output": 2.50,
    },
    "gemini-2.5-pro": {
        "input": 1.25,
        "output": 10.0,
    },
    "gemini-2.0-flash-preview-image-generation": {
        "input": 0.10,
        "output": 0.40,
    },
    "gemini-2.5-flash-preview-tts": {
        "input": 0.50,
        "output": 10.0,  # audio output tokens
    },
}


class CostTracker:
    """Tracks token usage and costs for Gemini API calls"""

    def __init__(self):
        self._lock = threading.Lock()
        self.token_usage: Dict[str, Any] = {
            "input_tokens": 0,
            "output_tokens": 0,
            "total_cost": 0.0,
            "by_model": {},
        }

    def track_request(self, model_name: str, input_tokens: int, output_tokens: int) -> float:
        """Record one call's token counts; returns its estimated cost in USD."""
        input_tokens = input_tokens or 0
        output_tokens = output_tokens or 0
        pricing = PRICING.get(model_name)
        call_cost = 0.0
        if pricing:
            call_cost = (input_tokens / 1_000_000) * pricing["input"] + (output_tokens / 1_000_000) * pricing["output"]

        with self._lock:
            self.token_usage["input_tokens"] += input_tokens
            self.token_usage["output_tokens"] += output_tokens
            self.token_usage["total_cost"] += call_cost

            by_model = self.token_usage["by_model"].setdefault(
                model_name, {"input_tokens": 0, "output_tokens": 0, "cost": 0.0, "requests": 0}
            )
            by_model["input_tokens"] += input_tokens
            by_model["output_tokens"] += output_tokens
            by_model["cost"] += call_cost
            by_model["requests"] += 1

        return call_cost

    def get_summary(self) -> Dict[str, Any]:
        """
        Get a summary of token usage and costs

        Returns:
            Dict with token counts, costs, and breakdown by model
        """
        with self._lock:
            return {
                "total_input_tokens": self.token_usage["input_tokens"],
                "total_output_tokens": self.token_usage["output_tokens"],
                "total_tokens": self.token_usage["input_tokens"] + self.token_usage["output_tokens"],
                "total_cost_usd": round(self.token_usage["total_cost"], 4),
                "by_model": {
                    model: {
                        "input_tokens": data["input_tokens"],
                        "output_tokens": data["output_tokens"],
                        "total_tokens": data["input_tokens"] + data["output_tokens"],
                        "requests": data["requests"],
                        "cost_usd": round(data["cost"], 4),
                    }
                    for model, data in self.token_usage["by_model"].items()
                },
            }

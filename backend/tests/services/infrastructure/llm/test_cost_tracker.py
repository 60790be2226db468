"""
Tests for alchemist.services.infrastructure.llm.cost_tracker
"""

from alchemist.services.infrastructure.llm.cost_tracker import CostTracker


class TestCostTracker:

    def test_known_model_cost(self):
        tracker = CostTracker()
        cost = tracker.track_request("gemini-2.5-flash", input_tokens=1_000_000, output_tokens=1_000_000)
        assert cost == 0.30 + 2.50

    def test_unknown_model_counts_tokens_without_cost(self):
        tracker = CostTracker()
        assert tracker.track_request("mystery-model", 100, 50) == 0.0
        summary = tracker.get_summary()
        assert summary["total_tokens"] == 150
        assert summary["total_cost_usd"] == 0.0
        assert summary["by_model"]["mystery-model"]["requests"] == 1

    def test_summary_accumulates(self):
        tracker = CostTracker()
        tracker.track_request("gemini-2.5-flash", 10, 5)
        tracker.track_request("gemini-2.5-flash", 10, 5)
        tracker.track_request("gemini-2.5-flash-preview-tts", 10, 5)
        summary = tracker.get_summary()
        assert summary["total_input_tokens"] == 30
        assert summary["by_model"]["gemini-2.5-flash"]["requests"] == 2
        assert set(summary["by_model"]) == {"gemini-2.5-flash", "gemini-2.5-flash-preview-tts"}

import pytest


@pytest.fixture(autouse=True)
def mock_cloud_env(monkeypatch):
    """Point every test at the Gemini API backend with a fake key"""
    monkeypatch.setenv("GEMINI_API_KEY", "mock-key")
    monkeypatch.setenv("USE_VERTEX_AI", "false")
    monkeypatch.delenv("GCP_PROJECT_ID", raising=False)
    monkeypatch.delenv("TTS_VOICE", raising=False)
    monkeypatch.delenv("LLM_LOG_FILE", raising=False)

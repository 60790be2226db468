"""
Runtime environment helpers.
"""

import os
from typing import Dict


def parse_bool_env(value: str | None, default: bool = False) -> bool:
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def env_int(name: str, default: int, minimum: int = 0) -> int:
    raw = os.getenv(name)
    if raw is None:
        return default
    try:
        return max(int(raw), minimum)
    except (TypeError, ValueError):
        return default


def gateway_backend_report() -> Dict[str, object]:
    """Describe which model gateway backend is configured, without secrets."""
    use_vertex_ai = parse_bool_env(os.getenv("USE_VERTEX_AI"))
    report: Dict[str, object] = {
        "use_vertex_ai": use_vertex_ai,
        "backend": "vertex_ai" if use_vertex_ai else "gemini_api",
    }
    if use_vertex_ai:
        report["project_id_configured"] = bool(os.getenv("GCP_PROJECT_ID"))
        report["location"] = os.getenv("GCP_LOCATION", "us-central1")
        report["configured"] = report["project_id_configured"]
    else:
        report["configured"] = bool(os.getenv("GEMINI_API_KEY"))
    return report

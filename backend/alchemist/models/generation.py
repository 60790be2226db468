"""
API schemas for generation endpoints

Request models for starting single-module and course runs.
"""

from pydantic import BaseModel
from typing import Optional


class ModuleRequest(BaseModel):
    """Request to generate one module directly from a topic"""
    topic: str
    session_id: Optional[str] = None  # A new run for the same session discards the previous one
    voice: Optional[str] = None  # Gemini TTS voice; configured default if omitted


class CourseRequest(ModuleRequest):
    """Request to plan a topic into 2-3 modules and generate each of them"""
    pass

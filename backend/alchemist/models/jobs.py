"""
API schemas for job endpoints

Models for run status, per-module progress and completed module records.
"""

from pydantic import BaseModel
from typing import List, Optional

from alchemist.services.pipeline.schemas import ModuleIdea, ModulePlan, PlannedModule


class RunErrorResponse(BaseModel):
    """Where and why a run stopped"""
    stage: str
    module_index: Optional[int] = None
    message: str
    error_type: str


class ModuleRecordResponse(BaseModel):
    """A fully generated module"""
    planned_module: Optional[PlannedModule] = None
    idea: ModuleIdea
    image_data_uri: str
    html_content: str
    audio_script: str
    audio_data_uri: str


class ModuleProgressResponse(BaseModel):
    """Artifacts produced so far for one module"""
    index: int
    stage: str  # idle, idea, image, content, script, speech, done, error
    planned_module: Optional[PlannedModule] = None
    idea: Optional[ModuleIdea] = None
    image_data_uri: Optional[str] = None
    html_content: Optional[str] = None
    audio_script: Optional[str] = None
    audio_data_uri: Optional[str] = None
    error: Optional[RunErrorResponse] = None


class JobResponse(BaseModel):
    """Response with job status and whatever the run has produced"""
    job_id: str
    status: str
    progress: float
    message: str
    mode: Optional[str] = None  # "single" or "multi"
    topic: Optional[str] = None
    session_id: Optional[str] = None
    stage_label: Optional[str] = None
    plan: Optional[ModulePlan] = None
    current_module_index: Optional[int] = None
    modules: List[ModuleProgressResponse] = []
    completed: List[ModuleRecordResponse] = []
    error: Optional[RunErrorResponse] = None


class JobDeletedResponse(BaseModel):
    job_id: str
    deleted: bool

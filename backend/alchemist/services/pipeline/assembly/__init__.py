from .orchestrator import ModulePipeline, ProgressCallback, PIPELINE_STEPS
from .state import (
    GENERATION_STAGES,
    ModuleProgress,
    ModuleStage,
    RunError,
    RunMode,
    RunPhase,
    RunState,
)

__all__ = [
    "ModulePipeline",
    "ProgressCallback",
    "PIPELINE_STEPS",
    "GENERATION_STAGES",
    "ModuleProgress",
    "ModuleStage",
    "RunError",
    "RunMode",
    "RunPhase",
    "RunState",
]

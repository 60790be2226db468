"""
Run state for the module pipeline.

A RunState is created per run and handed to the orchestrator, which moves
it forward only through the methods below. Callers (job manager, API,
tests) read it between transitions through the progress callback.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel

from alchemist.services.pipeline.schemas import (
    AudioScript,
    GeneratedImage,
    GeneratedModuleRecord,
    InteractiveContent,
    ModuleIdea,
    ModulePlan,
    PlannedModule,
    SynthesizedAudio,
)


class ModuleStage(str, Enum):
    """Per-module state machine: idle -> idea -> ... -> speech -> done, or error."""

    IDLE = "idle"
    IDEA = "idea"
    IMAGE = "image"
    CONTENT = "content"
    SCRIPT = "script"
    SPEECH = "speech"
    DONE = "done"
    ERROR = "error"

    @property
    def label(self) -> str:
        return STAGE_LABELS[self]


STAGE_LABELS = {
    ModuleStage.IDLE: "Waiting",
    ModuleStage.IDEA: "Generating module idea",
    ModuleStage.IMAGE: "Generating image",
    ModuleStage.CONTENT: "Building interactive content",
    ModuleStage.SCRIPT: "Writing audio script",
    ModuleStage.SPEECH: "Synthesizing speech",
    ModuleStage.DONE: "Done",
    ModuleStage.ERROR: "Failed",
}

# Stages a module must pass through, in order
GENERATION_STAGES = (
    ModuleStage.IDEA,
    ModuleStage.IMAGE,
    ModuleStage.CONTENT,
    ModuleStage.SCRIPT,
    ModuleStage.SPEECH,
)


class RunPhase(str, Enum):
    IDLE = "idle"
    PLANNING = "planning"
    GENERATING = "generating"
    DONE = "done"
    ERROR = "error"


class RunMode(str, Enum):
    SINGLE = "single"
    MULTI = "multi"


_ARTIFACT_FIELDS = {
    ModuleIdea: "idea",
    GeneratedImage: "image",
    InteractiveContent: "content",
    AudioScript: "script",
    SynthesizedAudio: "audio",
}


def _dump(artifact: Optional[BaseModel]) -> Optional[Dict[str, Any]]:
    return artifact.model_dump() if artifact is not None else None


@dataclass(frozen=True)
class RunError:
    """The terminal failure of a run and where it happened."""
    stage: str
    message: str
    module_index: Optional[int] = None
    error_type: str = "StageError"

    def describe(self) -> str:
        return f"Failed during '{self.stage}': {self.message}"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "stage": self.stage,
            "message": self.message,
            "module_index": self.module_index,
            "error_type": self.error_type,
        }


@dataclass
class ModuleProgress:
    """Artifacts produced so far for one module; kept after a failure."""
    index: int
    planned_module: Optional[PlannedModule] = None
    stage: ModuleStage = ModuleStage.IDLE
    idea: Optional[ModuleIdea] = None
    image: Optional[GeneratedImage] = None
    content: Optional[InteractiveContent] = None
    script: Optional[AudioScript] = None
    audio: Optional[SynthesizedAudio] = None
    error: Optional[RunError] = None

    def to_record(self) -> GeneratedModuleRecord:
        missing = [name for name in _ARTIFACT_FIELDS.values() if getattr(self, name) is None]
        if missing:
            raise ValueError(f"Module {self.index} is missing artifacts: {', '.join(missing)}")
        return GeneratedModuleRecord(
            planned_module=self.planned_module,
            idea=self.idea,
            image=self.image,
            content=self.content,
            script=self.script,
            audio=self.audio,
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "index": self.index,
            "planned_module": _dump(self.planned_module),
            "stage": self.stage.value,
            "idea": _dump(self.idea),
            "image": _dump(self.image),
            "content": _dump(self.content),
            "script": _dump(self.script),
            "audio": _dump(self.audio),
            "error": self.error.to_dict() if self.error else None,
        }


@dataclass
class RunState:
    topic: str
    mode: RunMode = RunMode.SINGLE
    phase: RunPhase = RunPhase.IDLE
    plan: Optional[ModulePlan] = None
    modules: List[ModuleProgress] = field(default_factory=list)
    completed: List[GeneratedModuleRecord] = field(default_factory=list)
    current_module_index: Optional[int] = None
    error: Optional[RunError] = None

    # === Read side ===

    @property
    def current_module(self) -> Optional[ModuleProgress]:
        if self.current_module_index is None:
            return None
        return self.modules[self.current_module_index]

    @property
    def total_modules(self) -> int:
        return len(self.modules)

    @property
    def stage_label(self) -> str:
        """Human-readable description of where the run is."""
        if self.error is not None:
            return self.error.describe()
        if self.phase == RunPhase.PLANNING:
            return "Planning modules"
        if self.phase == RunPhase.DONE:
            return f"Done: {len(self.completed)} module(s) generated"
        module = self.current_module
        if self.phase == RunPhase.GENERATING and module is not None:
            if self.mode == RunMode.MULTI:
                return f"Module {module.index + 1}/{self.total_modules}: {module.stage.label}"
            return module.stage.label
        return "Idle"

    @property
    def progress(self) -> float:
        """Fraction of generation stages finished across all modules (0-100)."""
        if self.phase == RunPhase.DONE:
            return 100.0
        if not self.modules:
            return 0.0
        total = len(self.modules) * len(GENERATION_STAGES)
        finished = 0
        for module in self.modules:
            if module.stage == ModuleStage.DONE:
                finished += len(GENERATION_STAGES)
            elif module.stage in GENERATION_STAGES:
                finished += GENERATION_STAGES.index(module.stage)
        return round(100.0 * finished / total, 1)

    # === Transitions ===

    def begin_planning(self) -> None:
        self._require_phase(RunPhase.IDLE)
        self.phase = RunPhase.PLANNING

    def set_plan(self, plan: ModulePlan) -> None:
        self._require_phase(RunPhase.PLANNING)
        self.plan = plan
        self.modules = [
            ModuleProgress(index=index, planned_module=module)
            for index, module in enumerate(plan.planned_modules)
        ]
        self.phase = RunPhase.GENERATING

    def begin_module(self, index: int) -> ModuleProgress:
        if self.phase == RunPhase.IDLE and not self.modules:
            self.modules = [ModuleProgress(index=0)]
        self._require_phase(RunPhase.IDLE, RunPhase.GENERATING)
        if not 0 <= index < len(self.modules):
            raise IndexError(f"No module at index {index}")
        self.phase = RunPhase.GENERATING
        self.current_module_index = index
        return self.modules[index]

    def advance(self, stage: ModuleStage) -> None:
        if stage not in GENERATION_STAGES:
            raise ValueError(f"Cannot advance to '{stage.value}'")
        module = self._require_current()
        if module.stage != ModuleStage.IDLE and GENERATION_STAGES.index(stage) <= GENERATION_STAGES.index(module.stage):
            raise ValueError(f"Cannot move module {module.index} from '{module.stage.value}' back to '{stage.value}'")
        module.stage = stage

    def store(self, artifact: BaseModel) -> None:
        """Attach a step's output to the current module."""
        name = _ARTIFACT_FIELDS.get(type(artifact))
        if name is None:
            raise TypeError(f"Not a module artifact: {type(artifact).__name__}")
        setattr(self._require_current(), name, artifact)

    def complete_module(self) -> GeneratedModuleRecord:
        module = self._require_current()
        record = module.to_record()
        module.stage = ModuleStage.DONE
        self.completed.append(record)
        return record

    def fail(self, stage: str, message: str, error_type: str = "StageError") -> RunError:
        module = self.current_module
        error = RunError(
            stage=stage,
            message=message,
            module_index=module.index if module is not None else None,
            error_type=error_type,
        )
        if module is not None and module.stage != ModuleStage.DONE:
            module.stage = ModuleStage.ERROR
            module.error = error
        self.error = error
        self.phase = RunPhase.ERROR
        return error

    def finish(self) -> None:
        self._require_phase(RunPhase.GENERATING)
        self.phase = RunPhase.DONE
        self.current_module_index = None

    def _require_phase(self, *phases: RunPhase) -> None:
        if self.phase not in phases:
            expected = ", ".join(phase.value for phase in phases)
            raise RuntimeError(f"Run is '{self.phase.value}', expected one of: {expected}")

    def _require_current(self) -> ModuleProgress:
        module = self.current_module
        if module is None:
            raise RuntimeError("No module is being generated")
        return module

    def to_dict(self) -> Dict[str, Any]:
        return {
            "topic": self.topic,
            "mode": self.mode.value,
            "phase": self.phase.value,
            "stage_label": self.stage_label,
            "progress": self.progress,
            "plan": _dump(self.plan),
            "current_module_index": self.current_module_index,
            "modules": [module.to_dict() for module in self.modules],
            "completed": [record.model_dump() for record in self.completed],
            "error": self.error.to_dict() if self.error else None,
        }

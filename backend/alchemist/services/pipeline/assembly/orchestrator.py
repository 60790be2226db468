"""
Module Pipeline - sequences the generation steps for one module or a whole course.

Single mode:  Idea(topic) -> Image -> Content -> Script -> Speech
Course mode:  Plan(topic), then the single-module chain for every planned
              module in order, with the script aware of its position.

Every step failure ends the run. Completed modules stay in
``RunState.completed``; the failing module keeps whatever artifacts it had
produced. Nothing raised by a step escapes ``run_*``.
"""

from typing import Any, Awaitable, Callable, Dict, Optional

from alchemist.core import LogTimer, StageError, get_logger, module_context, require_topic, set_job_id
from alchemist.services.infrastructure.llm.cost_tracker import CostTracker
from alchemist.services.infrastructure.llm.prompting_engine import PromptingEngine
from alchemist.services.pipeline.audio import generate_speech
from alchemist.services.pipeline.ideation import generate_module_idea
from alchemist.services.pipeline.imagery import generate_image
from alchemist.services.pipeline.interactive import generate_interactive_content
from alchemist.services.pipeline.narration import generate_audio_script
from alchemist.services.pipeline.planning import generate_module_plan
from alchemist.services.pipeline.schemas import (
    ContentRequest,
    IdeaRequest,
    ImageRequest,
    ModuleIdea,
    PlanRequest,
    ScriptRequest,
    SpeechRequest,
)

from .state import ModuleProgress, ModuleStage, RunMode, RunPhase, RunState

logger = get_logger(__name__, component="module_pipeline")

ProgressCallback = Callable[[RunState], Awaitable[None]]
StepCall = Callable[[], Awaitable[Any]]

PIPELINE_STEPS = (
    "module_plan",
    "module_idea",
    "image_generation",
    "interactive_content",
    "audio_script",
    "speech_synthesis",
)


class ModulePipeline:
    """
    Drives a RunState through the generation steps.

    Args:
        engines: Optional prompting engines keyed by pipeline step; missing
            ones are created on first use and share ``cost_tracker``
        cost_tracker: Token/cost accounting for the run
        voice: TTS voice for the speech step (configured default if None)
        job_id: Bound to the logging context while a run executes
    """

    def __init__(
        self,
        engines: Optional[Dict[str, PromptingEngine]] = None,
        cost_tracker: Optional[CostTracker] = None,
        voice: Optional[str] = None,
        job_id: Optional[str] = None,
    ):
        self.cost_tracker = cost_tracker or CostTracker()
        self._engines: Dict[str, PromptingEngine] = dict(engines or {})
        self.voice = voice
        self.job_id = job_id

    def engine(self, step: str) -> PromptingEngine:
        if step not in PIPELINE_STEPS:
            raise ValueError(f"Unknown pipeline step: {step}")
        if step not in self._engines:
            self._engines[step] = PromptingEngine(step, cost_tracker=self.cost_tracker)
        return self._engines[step]

    # === Public entry points ===

    async def run_single_module(
        self,
        topic: str,
        state: Optional[RunState] = None,
        progress_callback: Optional[ProgressCallback] = None,
    ) -> RunState:
        """
        Generate one module straight from the topic.

        Raises:
            TopicValidationError: blank topic (before anything runs)
        """
        topic = require_topic(topic)
        state = self._fresh_state(state, topic, RunMode.SINGLE)
        if self.job_id:
            set_job_id(self.job_id)

        logger.info("Single-module run started", extra={"topic": topic})
        state.begin_module(0)
        if await self._generate_module(state, idea_topic=topic, progress_callback=progress_callback):
            state.finish()
            await self._notify(state, progress_callback)
        self._log_outcome(state)
        return state

    async def run_course(
        self,
        topic: str,
        state: Optional[RunState] = None,
        progress_callback: Optional[ProgressCallback] = None,
    ) -> RunState:
        """
        Plan the topic into modules and generate each one in order.

        Raises:
            TopicValidationError: blank topic (before anything runs)
        """
        topic = require_topic(topic)
        state = self._fresh_state(state, topic, RunMode.MULTI)
        if self.job_id:
            set_job_id(self.job_id)

        logger.info("Course run started", extra={"topic": topic})
        state.begin_planning()
        await self._notify(state, progress_callback)

        plan = await self._attempt(
            state,
            "plan",
            lambda: generate_module_plan(self.engine("module_plan"), PlanRequest(topic=topic)),
        )
        if plan is None:
            await self._notify(state, progress_callback)
            self._log_outcome(state)
            return state

        state.set_plan(plan)
        logger.info(
            "Module plan ready",
            extra={"overall_topic": plan.overall_topic, "modules": len(plan.planned_modules)},
        )
        await self._notify(state, progress_callback)

        for index, planned in enumerate(plan.planned_modules):
            state.begin_module(index)
            succeeded = await self._generate_module(
                state,
                idea_topic=planned.concept,
                progress_callback=progress_callback,
            )
            if not succeeded:
                break
        else:
            state.finish()
            await self._notify(state, progress_callback)

        self._log_outcome(state)
        return state

    # === Module chain ===

    async def _generate_module(
        self,
        state: RunState,
        idea_topic: str,
        progress_callback: Optional[ProgressCallback],
    ) -> bool:
        module = state.current_module
        with module_context(module.index):
            idea = await self._run_stage(
                state, ModuleStage.IDEA, progress_callback,
                lambda: generate_module_idea(self.engine("module_idea"), IdeaRequest(topic=idea_topic)),
            )
            if idea is None:
                return False

            image = await self._run_stage(
                state, ModuleStage.IMAGE, progress_callback,
                lambda: generate_image(self.engine("image_generation"), ImageRequest(prompt=idea.image_prompt)),
            )
            if image is None:
                return False

            content_request = ContentRequest(
                image=image,
                module_title=idea.module_title,
                animation_concept=idea.animation_concept,
                suggested_keywords=list(idea.suggested_keywords),
            )
            content = await self._run_stage(
                state, ModuleStage.CONTENT, progress_callback,
                lambda: generate_interactive_content(self.engine("interactive_content"), content_request),
            )
            if content is None:
                return False

            script_request = self._script_request(state, module, idea)
            script = await self._run_stage(
                state, ModuleStage.SCRIPT, progress_callback,
                lambda: generate_audio_script(self.engine("audio_script"), script_request),
            )
            if script is None:
                return False

            speech_request = SpeechRequest(text=script.audio_script, voice=self.voice)
            audio = await self._run_stage(
                state, ModuleStage.SPEECH, progress_callback,
                lambda: generate_speech(self.engine("speech_synthesis"), speech_request),
            )
            if audio is None:
                return False

            state.complete_module()
            logger.info("Module completed", extra={"module_title": idea.module_title})
        await self._notify(state, progress_callback)
        return True

    @staticmethod
    def _script_request(state: RunState, module: ModuleProgress, idea: ModuleIdea) -> ScriptRequest:
        if module.planned_module is None:
            return ScriptRequest(
                current_module_title=idea.module_title,
                current_module_concept=state.topic,
                overall_topic=state.topic,
                module_index=0,
                total_modules_in_plan=1,
            )

        previous_concept = None
        if module.index > 0:
            previous_concept = state.plan.planned_modules[module.index - 1].concept
        return ScriptRequest(
            current_module_title=module.planned_module.title,
            current_module_concept=module.planned_module.concept,
            overall_topic=state.plan.overall_topic,
            module_index=module.index,
            total_modules_in_plan=state.total_modules,
            previous_module_concept=previous_concept,
        )

    # === Stage plumbing ===

    async def _run_stage(
        self,
        state: RunState,
        stage: ModuleStage,
        progress_callback: Optional[ProgressCallback],
        step: StepCall,
    ) -> Optional[Any]:
        state.advance(stage)
        await self._notify(state, progress_callback)
        artifact = await self._attempt(state, stage.value, step)
        if artifact is None:
            await self._notify(state, progress_callback)
            return None
        state.store(artifact)
        return artifact

    async def _attempt(self, state: RunState, stage_name: str, step: StepCall) -> Optional[Any]:
        """Run one step; on failure record it on the state and return None."""
        try:
            with LogTimer(logger, f"{stage_name} step"):
                return await step()
        except StageError as exc:
            state.fail(exc.stage, exc.message, type(exc).__name__)
        except Exception as exc:
            logger.error(
                f"Unexpected error in {stage_name} step",
                extra={"stage": stage_name, "error_type": type(exc).__name__},
                exc_info=True,
            )
            state.fail(stage_name, str(exc) or type(exc).__name__, type(exc).__name__)
        return None

    @staticmethod
    async def _notify(state: RunState, progress_callback: Optional[ProgressCallback]) -> None:
        if progress_callback is not None:
            await progress_callback(state)

    @staticmethod
    def _fresh_state(state: Optional[RunState], topic: str, mode: RunMode) -> RunState:
        if state is None:
            return RunState(topic=topic, mode=mode)
        if state.phase != RunPhase.IDLE or state.modules:
            raise ValueError("RunState has already been used for a run")
        state.topic = topic
        state.mode = mode
        return state

    def _log_outcome(self, state: RunState) -> None:
        extra = {
            "mode": state.mode.value,
            "completed_modules": len(state.completed),
            "cost_usd": self.cost_tracker.get_summary()["total_cost_usd"],
        }
        if state.error is not None:
            extra.update(
                failed_stage=state.error.stage,
                failed_module_index=state.error.module_index,
                error=state.error.message,
                error_type=state.error.error_type,
            )
            logger.warning(f"Run stopped: {state.stage_label}", extra=extra)
        else:
            logger.info("Run finished", extra=extra)

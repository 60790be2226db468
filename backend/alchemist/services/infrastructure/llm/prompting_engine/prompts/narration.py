"""
Narration script prompts.

The first module of a plan introduces the overall topic; every later module
continues from the previous module's concept. ``build_script_prompt`` picks
the template from a typed ScriptRequest.
"""

from alchemist.services.pipeline.schemas import ScriptRequest

from .base import PromptTemplate

_SCRIPT_RULES = """The script should:
1. Be conversational and easy to understand.
2. Suit a text-to-speech engine: clear sentence structures and common vocabulary.
3. Be approximately 100-150 words long for this module segment.
4. Focus on thoroughly explaining "{current_module_concept}" for the module titled "{current_module_title}", giving the key information a student needs.

Output ONLY the narration text for this module. Do not include any other conversational text, prefixes like "Script:", or markdown formatting."""

SCRIPT_INTRODUCTION = PromptTemplate(
    template="""You are an expert scriptwriter for educational audio narrations, acting as a helpful study guide leading a student through a multi-part learning module.
The overall topic is "{overall_topic}".
This is module {module_number} of {total_modules}.

For this first module, titled "{current_module_title}", give a brief, engaging introduction to the overall topic of "{overall_topic}". Then move smoothly into a clear, informative explanation of this module's core concept: "{current_module_concept}".
Make it sound like the beginning of a learning journey.

""" + _SCRIPT_RULES,
    description="Narration that opens a plan by introducing the overall topic",
)

SCRIPT_CONTINUATION = PromptTemplate(
    template="""You are an expert scriptwriter for educational audio narrations, acting as a helpful study guide leading a student through a multi-part learning module.
The overall topic is "{overall_topic}".
This is module {module_number} of {total_modules}.

We just covered "{previous_module_concept}". Now, in this module, "{current_module_title}", we build on that. Give a clear, informative explanation of this concept: "{current_module_concept}", connecting it to what was learned before.
Make the transition smooth, as if continuing a lesson. Do not re-introduce the overall topic unless it is natural for context.
The goal is one continuous narration across the modules, not a series of disconnected introductions.

""" + _SCRIPT_RULES,
    description="Narration that continues from the previous module's concept",
)


def build_script_prompt(request: ScriptRequest) -> str:
    """Render the narration prompt for one module."""
    values = {
        "overall_topic": request.overall_topic,
        "module_number": request.module_index + 1,
        "total_modules": request.total_modules_in_plan,
        "current_module_title": request.current_module_title,
        "current_module_concept": request.current_module_concept,
    }
    previous = (request.previous_module_concept or "").strip()
    if request.is_first_module or not previous:
        return SCRIPT_INTRODUCTION.format(**values)
    return SCRIPT_CONTINUATION.format(previous_module_concept=previous, **values)

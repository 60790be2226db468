"""
Module idea prompts.
"""

from .base import PromptTemplate

MODULE_IDEA = PromptTemplate(
    template="""You are an expert in creating engaging academic content. For the topic or concept below, produce the idea for one learning module.

Topic: {topic}

Return JSON with:
1. "module_title": a concise, engaging title for the module.
2. "image_prompt": a descriptive prompt for an image generation model. It must describe a vibrant, visually engaging illustration (not a simple icon) that is colorful, clear and suited to an educational context. The image must not contain any text, letters or labels.
   Example for "The Water Cycle": "Stylized illustration of the water cycle showing evaporation from a lake, cloud formation, rain over mountains, and water flowing back in a river, bright and clear educational style, flat design".
3. "animation_concept": 1-2 sentences describing what the module teaches. It is shown as the lesson's informational text.
4. "suggested_keywords": 2 to 3 short keywords guiding the interactive style (e.g. "slide-in", "reveal", "flashcards").""",
    description="Title, illustration prompt, concept and keywords for one module",
)

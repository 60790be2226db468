"""
Image generation and editing prompts.
"""

from .base import PromptTemplate

IMAGE_GENERATION = PromptTemplate(
    template="""Generate an image: {prompt}""",
    description="Text-to-image request",
)

BACKGROUND_REMOVAL = PromptTemplate(
    template="""Remove the background from this image, making it transparent. Preserve the main subject. Output should be a PNG image with an alpha channel for transparency.""",
    description="Background removal instruction sent alongside the image",
)

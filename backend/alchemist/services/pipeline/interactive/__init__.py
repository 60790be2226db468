from .content_step import generate_interactive_content
from .placeholder import substitute_image_placeholder, substitute_image_placeholder_counted

__all__ = [
    "generate_interactive_content",
    "substitute_image_placeholder",
    "substitute_image_placeholder_counted",
]

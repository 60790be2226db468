from .image_step import generate_image
from .background_removal import remove_image_background

__all__ = ["generate_image", "remove_image_background"]

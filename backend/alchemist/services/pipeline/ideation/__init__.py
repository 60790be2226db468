from .idea_step import generate_module_idea

__all__ = ["generate_module_idea"]

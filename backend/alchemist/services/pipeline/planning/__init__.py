from .plan_step import generate_module_plan, MIN_PLANNED_MODULES, MAX_PLANNED_MODULES

__all__ = ["generate_module_plan", "MIN_PLANNED_MODULES", "MAX_PLANNED_MODULES"]

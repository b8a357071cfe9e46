from .registry import ToleranceRegistry, Tolerances, get_tolerances

__all__ = ["Tolerances", "ToleranceRegistry", "get_tolerances"]

from .pointer import L, SemanticPointer
from .runtime import needle, Needle

__all__ = ["L", "SemanticPointer", "needle", "Needle"]

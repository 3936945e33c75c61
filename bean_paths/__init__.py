"""Type-safe property path builders generated from bean models."""

from .codegen import (
    BeanPropertyPathExtension,
    EmissionResult,
    Settings,
    TypeModel,
    __version__,
    generate_from_model,
    quick_generate,
)

__all__ = [
    "BeanPropertyPathExtension",
    "EmissionResult",
    "Settings",
    "TypeModel",
    "__version__",
    "generate_from_model",
    "quick_generate",
]

"""
Bean path code generation module.

Emits TypeScript property path builders from a bean model.
"""

from typing import Any, Dict, List, Optional, Union

from .registry import (
    ExtensionRegistry,
    RegistryError,
    get_extension,
    get_extension_info,
    get_registry,
    list_all_extension_info,
    list_supported_extensions,
    register_extension,
)
from .core.extension import (
    EmissionResult,
    EmitterExtension,
    ExtensionError,
    ExtensionFeatures,
    InheritanceCycleError,
    LineWriter,
    emit_extensions,
)
from .core.model import Bean, Property, TypeModel, convert_model_dict
from .core.config import ConfigError, Settings, load_settings
from .extensions import BeanPropertyPathExtension

# Version info
__version__ = "0.1.0"


def generate_from_model(
    model: TypeModel,
    settings: Optional[Union[Settings, Dict[str, Any]]] = None,
    extensions: Optional[List[str]] = None,
) -> EmissionResult:
    """
    Run registered extensions over a bean model.

    Args:
        model: Bean model
        settings: Settings instance or dict of overrides
        extensions: Extension names; defaults to ``settings.extensions``

    Returns:
        EmissionResult with generated code
    """
    if not isinstance(settings, Settings):
        settings = load_settings(custom_config=settings)

    names = extensions if extensions is not None else settings.extensions
    instances = [get_extension(name, settings.custom) for name in names]

    return emit_extensions(model, settings, instances)


def quick_generate(model_data: Dict[str, Any], **options) -> str:
    """
    Quick code generation from a JSON-compatible model description.

    Args:
        model_data: Dict with a ``beans`` list
        **options: Settings overrides (indent_string, export_keyword, ...)

    Returns:
        Generated code string
    """
    model = convert_model_dict(model_data)
    result = generate_from_model(model, options)

    if result.success:
        return result.code
    else:
        raise RuntimeError(f"Code generation failed: {result.error_message}")


# Export main interfaces
__all__ = [
    "ExtensionRegistry",
    "RegistryError",
    "EmitterExtension",
    "ExtensionError",
    "ExtensionFeatures",
    "InheritanceCycleError",
    "EmissionResult",
    "LineWriter",
    "BeanPropertyPathExtension",
    "Bean",
    "Property",
    "TypeModel",
    "Settings",
    "ConfigError",
    "emit_extensions",
    "generate_from_model",
    "quick_generate",
    "convert_model_dict",
    "get_extension",
    "get_extension_info",
    "get_registry",
    "list_all_extension_info",
    "list_supported_extensions",
    "register_extension",
]

"""
Core code generation components.

Provides the bean model, the extension contract and the utilities
used by all emitter extensions.
"""

from .extension import (
    EmitterExtension,
    ExtensionError,
    ExtensionFeatures,
    EmissionResult,
    InheritanceCycleError,
    LineWriter,
    Writer,
    check_compatibility,
    emit_extensions,
)
from .model import (
    ArrayType,
    BasicType,
    Bean,
    GenericReferenceType,
    ModelError,
    Property,
    ReferenceType,
    TsType,
    TypeModel,
    convert_model_dict,
    parse_type,
)
from .naming import get_bean_class_name, get_fields_class_name, get_simple_name
from .config import Settings, ConfigManager, ConfigError, load_settings
from .templates import TemplateEngine, TemplateError, create_template_engine

__all__ = [
    # Extension contract
    "EmitterExtension",
    "ExtensionError",
    "ExtensionFeatures",
    "EmissionResult",
    "InheritanceCycleError",
    "LineWriter",
    "Writer",
    "check_compatibility",
    "emit_extensions",
    # Bean model
    "ArrayType",
    "BasicType",
    "Bean",
    "GenericReferenceType",
    "ModelError",
    "Property",
    "ReferenceType",
    "TsType",
    "TypeModel",
    "convert_model_dict",
    "parse_type",
    # Naming
    "get_bean_class_name",
    "get_fields_class_name",
    "get_simple_name",
    # Configuration system
    "Settings",
    "ConfigManager",
    "ConfigError",
    "load_settings",
    # Template system
    "TemplateEngine",
    "TemplateError",
    "create_template_engine",
]

"""
Base emitter extension interface.

Defines the contract that all emitter extensions must implement, the
line sink they write to, and the entry point that runs them over a model.
"""

from abc import ABC, abstractmethod
from dataclasses import asdict, dataclass
from typing import Any, Dict, List, Optional, Protocol, Sequence

from ...logging_config import get_logger
from .config import DECLARATION_FILE, ConfigError, Settings
from .model import TypeModel
from .templates import TemplateEngine, create_template_engine

logger = get_logger(__name__)


class ExtensionError(Exception):
    """Base exception for emission errors."""

    pass


class InheritanceCycleError(ExtensionError):
    """Raised when a bean is, directly or transitively, its own ancestor."""

    def __init__(self, cycle: Sequence[str]):
        self.cycle = list(cycle)
        super().__init__(f"Inheritance cycle detected: {' -> '.join(self.cycle)}")


@dataclass
class ExtensionFeatures:
    """Capabilities an extension declares to the host before emission."""

    generates_runtime_code: bool = False
    generates_module_code: bool = False
    works_with_packages_mapped_to_namespaces: bool = False
    overrides_string_enums: bool = False

    def to_dict(self) -> Dict[str, bool]:
        return asdict(self)


class Writer(Protocol):
    """Line sink an extension writes its output to."""

    def write_indented_line(self, line: str) -> None:
        ...


class LineWriter:
    """In-memory Writer collecting output lines in order."""

    def __init__(self, newline: str = "\n"):
        self.newline = newline
        self.lines: List[str] = []

    def write_indented_line(self, line: str) -> None:
        self.lines.append(line)

    def getvalue(self) -> str:
        return self.newline.join(self.lines)


class EmitterExtension(ABC):
    """Abstract base class for all emitter extensions."""

    #: Registry name of the extension
    extension_name: str = ""

    def __init__(self, config: Optional[Dict[str, Any]] = None):
        """Initialize extension with optional configuration."""
        self.config = config or {}
        self._template_engine = None

    @property
    def name(self) -> str:
        return self.extension_name or type(self).__name__

    @property
    @abstractmethod
    def features(self) -> ExtensionFeatures:
        """Return the capabilities of this extension."""
        pass

    @property
    def template_engine(self) -> TemplateEngine:
        """Get the template engine for this extension."""
        if self._template_engine is None:
            self._template_engine = create_template_engine()
        return self._template_engine

    def emit_elements(
        self, writer: Writer, settings: Settings, export_keyword: bool, model: TypeModel
    ) -> None:
        """
        Write this extension's elements for the whole model.

        Args:
            writer: Line sink
            settings: Emitter settings
            export_keyword: Whether top-level declarations are exported
            model: Full bean model
        """
        pass

    def validate_model(self, model: TypeModel) -> List[str]:
        """
        Check a model for issues that affect this extension's output.

        Returns:
            List of warning messages (empty if no issues)
        """
        return []


class EmissionResult:
    """Container for emission results and metadata."""

    def __init__(
        self, code: str, warnings: List[str] = None, metadata: Dict[str, Any] = None
    ):
        """
        Initialize emission result.

        Args:
            code: Generated code
            warnings: Any warnings from emission
            metadata: Additional metadata about emission
        """
        self.code = code
        self.warnings = warnings or []
        self.metadata = metadata or {}
        self.success = True
        self.error_message = None
        self.exception = None

    @classmethod
    def error(cls, message: str, exception: Exception = None) -> "EmissionResult":
        """Create a failed emission result."""
        result = cls(code="")
        result.success = False
        result.error_message = message
        result.exception = exception
        return result


def check_compatibility(settings: Settings, extensions: Sequence[EmitterExtension]):
    """
    Refuse extensions whose output does not fit the configured output file type.

    Raises:
        ConfigError: If a runtime-code extension is used for a declaration file
    """
    if settings.output_file_type != DECLARATION_FILE:
        return
    for extension in extensions:
        if extension.features.generates_runtime_code:
            raise ConfigError(
                f"Extension '{extension.name}' generates runtime code, "
                f"output_file_type must be 'implementationFile'"
            )


def emit_extensions(
    model: TypeModel,
    settings: Settings,
    extensions: Sequence[EmitterExtension],
    export_keyword: Optional[bool] = None,
) -> EmissionResult:
    """
    Run extensions over a model with error handling.

    Args:
        model: Bean model to emit
        settings: Emitter settings
        extensions: Extensions to run, in order
        export_keyword: Overrides ``settings.export_keyword`` when given

    Returns:
        EmissionResult with code, warnings, and metadata
    """
    if export_keyword is None:
        export_keyword = settings.export_keyword

    try:
        check_compatibility(settings, extensions)

        warnings = []
        for extension in extensions:
            warnings.extend(extension.validate_model(model))

        writer = LineWriter(settings.newline)
        for extension in extensions:
            logger.info(
                "Running extension %s over %d beans", extension.name, len(model.beans)
            )
            extension.emit_elements(writer, settings, export_keyword, model)

        metadata = {
            "bean_count": len(model.beans),
            "extensions": [extension.name for extension in extensions],
            "line_count": len(writer.lines),
            "output_file_type": settings.output_file_type,
            "export_keyword": export_keyword,
        }

        return EmissionResult(writer.getvalue(), warnings, metadata)

    except Exception as e:
        logger.error("Emission failed: %s", e)
        return EmissionResult.error(f"Emission failed: {str(e)}", exception=e)

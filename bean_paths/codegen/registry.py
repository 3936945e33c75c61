"""
Extension registry system for managing available emitter extensions.

Provides dynamic registration and instantiation of extensions by name.
"""

from typing import Any, Dict, List, Optional, Type

from ..logging_config import get_logger
from .core.extension import EmitterExtension

logger = get_logger(__name__)


class RegistryError(Exception):
    """Exception raised for registry-related errors."""

    pass


class ExtensionRegistry:
    """Registry for managing available emitter extensions."""

    def __init__(self):
        """Initialize empty registry."""
        self._extensions: Dict[str, Type[EmitterExtension]] = {}
        self._aliases: Dict[str, str] = {}

    def register(
        self,
        name: str,
        extension_class: Type[EmitterExtension],
        aliases: Optional[List[str]] = None,
        replace: bool = False,
    ):
        """
        Register an extension.

        Args:
            name: Primary extension name (e.g., 'beanPropertyPath')
            extension_class: Class implementing EmitterExtension
            aliases: Alternative names for this extension
            replace: If True, replace existing registration. If False, skip if exists.

        Raises:
            RegistryError: If extension class is invalid or conflicts exist
        """
        if not isinstance(extension_class, type) or not issubclass(
            extension_class, EmitterExtension
        ):
            raise RegistryError("Extension class must inherit from EmitterExtension")

        key = name.lower()

        # Check if already registered
        if key in self._extensions and not replace:
            logger.debug("Extension %s already registered, skipping", name)
            return

        self._extensions[key] = extension_class

        # Register aliases
        for alias in aliases or []:
            alias_key = alias.lower()

            # Skip if alias is the same as primary
            if alias_key == key:
                continue

            # Check for conflicts (unless replacing)
            if not replace:
                if alias_key in self._extensions:
                    raise RegistryError(
                        f"Alias '{alias}' conflicts with existing primary extension"
                    )
                if alias_key in self._aliases and self._aliases[alias_key] != key:
                    raise RegistryError(
                        f"Alias '{alias}' already points to '{self._aliases[alias_key]}'"
                    )

            self._aliases[alias_key] = key

    def unregister(self, name: str):
        """
        Unregister an extension and its aliases.

        Args:
            name: Extension name to unregister
        """
        key = name.lower()
        self._extensions.pop(key, None)

        # Remove aliases pointing to this extension
        for alias in [a for a, target in self._aliases.items() if target == key]:
            del self._aliases[alias]

    def _resolve_key(self, name: str) -> str:
        key = name.lower()
        if key in self._extensions:
            return key
        if key in self._aliases:
            return self._aliases[key]
        available = self.list_extensions()
        raise RegistryError(
            f"No extension registered under name: {name}. "
            f"Available: {', '.join(available)}"
        )

    def get_extension_class(self, name: str) -> Type[EmitterExtension]:
        """
        Get extension class by name or alias.

        Raises:
            RegistryError: If name not found
        """
        return self._extensions[self._resolve_key(name)]

    def create_extension(
        self, name: str, config: Optional[Dict[str, Any]] = None
    ) -> EmitterExtension:
        """
        Create extension instance.

        Args:
            name: Extension name or alias
            config: Extension-specific configuration

        Returns:
            Configured extension instance

        Raises:
            RegistryError: If extension creation fails
        """
        extension_class = self.get_extension_class(name)
        try:
            return extension_class(config)
        except Exception as e:
            raise RegistryError(f"Failed to create extension {name}: {e}") from e

    def list_extensions(self) -> List[str]:
        """Get list of registered primary extension names."""
        return sorted(self._extensions.keys())

    def get_aliases(self, name: str) -> List[str]:
        """Get all aliases for a registered extension."""
        key = name.lower()
        return sorted(alias for alias, target in self._aliases.items() if target == key)

    def is_supported(self, name: str) -> bool:
        """Check if an extension name or alias is registered."""
        key = name.lower()
        return key in self._extensions or key in self._aliases

    def get_extension_info(self, name: str) -> Dict[str, Any]:
        """
        Get information about a registered extension.

        Raises:
            RegistryError: If name not found
        """
        key = self._resolve_key(name)
        extension_class = self._extensions[key]
        extension = extension_class()

        return {
            "name": extension.name,
            "class": extension_class.__name__,
            "module": extension_class.__module__,
            "aliases": self.get_aliases(key),
            "features": extension.features.to_dict(),
        }


# Global registry instance - created once
_global_registry: Optional[ExtensionRegistry] = None


def get_registry() -> ExtensionRegistry:
    """Get the global extension registry, initializing if needed."""
    global _global_registry
    if _global_registry is None:
        _global_registry = ExtensionRegistry()
        _auto_register_extensions(_global_registry)
    return _global_registry


def _auto_register_extensions(registry: ExtensionRegistry):
    """Register the built-in extensions with their aliases."""
    from .extensions import BeanPropertyPathExtension

    registry.register(
        BeanPropertyPathExtension.extension_name,
        BeanPropertyPathExtension,
        aliases=["bean-property-path", "property-path"],
    )


# Public API functions using the global registry


def register_extension(
    name: str,
    extension_class: Type[EmitterExtension],
    aliases: Optional[List[str]] = None,
):
    """Register an extension in the global registry."""
    get_registry().register(name, extension_class, aliases)


def get_extension(name: str, config: Optional[Dict[str, Any]] = None) -> EmitterExtension:
    """Get extension instance from global registry."""
    return get_registry().create_extension(name, config)


def list_supported_extensions() -> List[str]:
    """List all registered extensions from global registry."""
    return get_registry().list_extensions()


def get_extension_info(name: str) -> Dict[str, Any]:
    """Get information about a registered extension."""
    return get_registry().get_extension_info(name)


def list_all_extension_info() -> Dict[str, Dict[str, Any]]:
    """Get information about all registered extensions."""
    return {name: get_extension_info(name) for name in list_supported_extensions()}

"""
Core bean model for code generation.

Holds the type references, beans and properties an emission pass works on,
and converts JSON-compatible model descriptions into that representation.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple, Union


class ModelError(Exception):
    """Exception raised when a model description is structurally invalid."""

    pass


# Type names that never refer to a bean
PRIMITIVE_TYPES = {
    "any",
    "unknown",
    "void",
    "undefined",
    "null",
    "never",
    "object",
    "string",
    "number",
    "bigint",
    "boolean",
    "Date",
}


@dataclass(frozen=True)
class TsType:
    """Base class for all type references."""

    pass


@dataclass(frozen=True)
class BasicType(TsType):
    """Primitive type such as ``string`` or ``number``."""

    name: str

    def __str__(self) -> str:
        return self.name


@dataclass(frozen=True)
class ReferenceType(TsType):
    """Plain reference to a named type."""

    symbol: str

    def __str__(self) -> str:
        return self.symbol


@dataclass(frozen=True)
class GenericReferenceType(TsType):
    """Reference to a generic type together with its type arguments."""

    symbol: str
    type_arguments: Tuple[TsType, ...] = ()

    def __str__(self) -> str:
        arguments = ", ".join(str(argument) for argument in self.type_arguments)
        return f"{self.symbol}<{arguments}>"


@dataclass(frozen=True)
class ArrayType(TsType):
    """Array of another type."""

    element_type: TsType

    def __str__(self) -> str:
        return f"{self.element_type}[]"


@dataclass
class Property:
    """A single named, typed property of a bean."""

    name: str
    type: TsType


@dataclass(eq=False)
class Bean:
    """A class-like type: name, optional parent reference and ordered properties.

    Beans compare and hash by identity, so two distinct beans with the same
    name are still tracked separately during emission.
    """

    name: TsType
    parent: Optional[TsType] = None
    properties: List[Property] = field(default_factory=list)

    def add_property(self, prop: Property) -> None:
        """Append a property, keeping declaration order."""
        self.properties.append(prop)

    def get_property(self, name: str) -> Optional[Property]:
        """Get property by name."""
        for prop in self.properties:
            if prop.name == name:
                return prop
        return None


@dataclass
class TypeModel:
    """All beans of one emission pass, in iteration order."""

    beans: List[Bean] = field(default_factory=list)

    def add_bean(self, bean: Bean) -> None:
        self.beans.append(bean)

    def find_bean(self, type_ref: Optional[TsType]) -> Optional[Bean]:
        """
        Find the bean whose name equals the given type reference.

        The match is exact: ``Page<T>`` does not match a bean named ``Page``.

        Args:
            type_ref: Type reference to look up, may be None

        Returns:
            First matching bean or None
        """
        if type_ref is None:
            return None
        for bean in self.beans:
            if bean.name == type_ref:
                return bean
        return None


def parse_type(text: str) -> TsType:
    """
    Parse a textual type reference.

    Supports primitives, plain names, ``Name<Arg, ...>`` with nesting and a
    trailing ``[]`` for arrays.

    Args:
        text: Type reference text, e.g. ``"Page<Map<string, Dog>>"``

    Returns:
        Parsed type reference

    Raises:
        ModelError: If the text is empty or its brackets are unbalanced
    """
    text = text.strip()
    if not text:
        raise ModelError("Empty type reference")

    if text.endswith("[]"):
        return ArrayType(parse_type(text[:-2]))

    if "<" in text:
        start = text.index("<")
        if not text.endswith(">"):
            raise ModelError(f"Unbalanced type arguments in '{text}'")
        symbol = text[:start].strip()
        if not symbol:
            raise ModelError(f"Missing generic symbol in '{text}'")
        arguments = [
            parse_type(part) for part in _split_type_arguments(text[start + 1 : -1], text)
        ]
        return GenericReferenceType(symbol, tuple(arguments))

    if ">" in text:
        raise ModelError(f"Unbalanced type arguments in '{text}'")

    if text in PRIMITIVE_TYPES:
        return BasicType(text)
    return ReferenceType(text)


def _split_type_arguments(arguments_text: str, full_text: str) -> List[str]:
    """Split a type argument list on top-level commas."""
    parts = []
    depth = 0
    current = []

    for char in arguments_text:
        if char == "<":
            depth += 1
        elif char == ">":
            depth -= 1
            if depth < 0:
                raise ModelError(f"Unbalanced type arguments in '{full_text}'")
        elif char == "," and depth == 0:
            parts.append("".join(current))
            current = []
            continue
        current.append(char)

    if depth != 0:
        raise ModelError(f"Unbalanced type arguments in '{full_text}'")

    parts.append("".join(current))
    if any(not part.strip() for part in parts):
        raise ModelError(f"Empty type argument in '{full_text}'")
    return parts


def convert_type(value: Union[str, Dict[str, Any]]) -> TsType:
    """
    Convert a JSON type description into a type reference.

    Args:
        value: Either a type string or ``{"symbol": ..., "arguments": [...]}``

    Returns:
        Type reference
    """
    if isinstance(value, str):
        return parse_type(value)

    if isinstance(value, dict):
        symbol = value.get("symbol")
        if not isinstance(symbol, str) or not symbol:
            raise ModelError(f"Type object requires a 'symbol' string: {value!r}")
        arguments = value.get("arguments") or []
        if not arguments:
            return parse_type(symbol)
        return GenericReferenceType(
            symbol, tuple(convert_type(argument) for argument in arguments)
        )

    raise ModelError(f"Unsupported type description: {value!r}")


def convert_model_dict(data: Dict[str, Any]) -> TypeModel:
    """
    Convert a JSON-compatible model description into a TypeModel.

    Args:
        data: Dict with a ``beans`` list; each bean has ``name``, optional
            ``parent`` and ``properties`` (list of ``name``/``type`` dicts)

    Returns:
        TypeModel with beans in the order given
    """
    if not isinstance(data, dict) or not isinstance(data.get("beans"), list):
        raise ModelError("Model description must be an object with a 'beans' list")

    model = TypeModel()

    for index, bean_data in enumerate(data["beans"]):
        if not isinstance(bean_data, dict) or "name" not in bean_data:
            raise ModelError(f"Bean #{index} has no 'name'")

        bean = Bean(name=convert_type(bean_data["name"]))
        if bean_data.get("parent") is not None:
            bean.parent = convert_type(bean_data["parent"])

        for prop_data in bean_data.get("properties", []):
            if not isinstance(prop_data, dict):
                raise ModelError(f"Invalid property in bean '{bean.name}': {prop_data!r}")
            if not prop_data.get("name") or "type" not in prop_data:
                raise ModelError(
                    f"Property in bean '{bean.name}' requires 'name' and 'type'"
                )
            bean.add_property(
                Property(name=prop_data["name"], type=convert_type(prop_data["type"]))
            )

        model.add_bean(bean)

    return model

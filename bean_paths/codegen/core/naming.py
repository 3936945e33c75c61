"""
Naming utilities for path-builder code generation.

Resolves the identifiers generated classes and constants are built from,
and checks names against TypeScript identifier rules.
"""

import re
from typing import Optional

from .model import Bean, GenericReferenceType, TsType

# Suffix of every generated path-builder class; also the base class name
FIELDS_SUFFIX = "Fields"

_IDENTIFIER_RE = re.compile(r"^[A-Za-z_$][A-Za-z0-9_$]*$")

TS_RESERVED_WORDS = {
    'break', 'case', 'catch', 'class', 'const', 'continue', 'debugger',
    'default', 'delete', 'do', 'else', 'enum', 'export', 'extends', 'false',
    'finally', 'for', 'function', 'if', 'import', 'in', 'instanceof', 'new',
    'null', 'return', 'super', 'switch', 'this', 'throw', 'true', 'try',
    'typeof', 'var', 'void', 'while', 'with', 'implements', 'interface',
    'let', 'package', 'private', 'protected', 'public', 'static', 'yield'
}


def get_simple_name(type_ref: TsType) -> str:
    """
    Return the name used when composing generated identifiers.

    Generic references contribute only their symbol, never their type
    arguments: ``Page<T>`` becomes ``Page``.
    """
    if isinstance(type_ref, GenericReferenceType):
        return type_ref.symbol
    return str(type_ref)


def get_bean_class_name(bean: Bean) -> str:
    """Simple name of a bean."""
    return get_simple_name(bean.name)


def get_fields_class_name(bean: Optional[Bean]) -> str:
    """
    Name of the path-builder class for a bean.

    Without a bean this is the bare suffix, which is also the name of the
    universal base class.
    """
    prefix = get_bean_class_name(bean) if bean is not None else ""
    return prefix + FIELDS_SUFFIX


def is_valid_identifier(name: str) -> bool:
    """Check that a name is a syntactically valid TypeScript identifier."""
    return bool(_IDENTIFIER_RE.match(name))


def is_reserved_word(name: str) -> bool:
    """Check if name is a TypeScript reserved word."""
    return name in TS_RESERVED_WORDS

"""Shared fixtures for bean_paths tests."""

import pytest

from bean_paths.codegen.core.config import Settings
from bean_paths.codegen.core.extension import LineWriter
from bean_paths.codegen.core.model import (
    BasicType,
    Bean,
    GenericReferenceType,
    Property,
    ReferenceType,
    TypeModel,
)
from bean_paths.codegen.extensions import BeanPropertyPathExtension


def ref(name):
    return ReferenceType(name)


def emit_lines(model, settings=None, export_keyword=False):
    """Run the property path extension and return the written lines."""
    writer = LineWriter()
    BeanPropertyPathExtension().emit_elements(
        writer, settings or Settings(), export_keyword, model
    )
    return writer.lines


@pytest.fixture
def animal_model():
    """Animal (no parent) with one string property."""
    animal = Bean(ref("Animal"), properties=[Property("name", BasicType("string"))])
    return TypeModel([animal])


@pytest.fixture
def dog_model():
    """Dog extends Animal and references Animal as a property type."""
    animal = Bean(ref("Animal"), properties=[Property("nickname", BasicType("string"))])
    dog = Bean(
        ref("Dog"),
        parent=ref("Animal"),
        properties=[Property("owner", ref("Animal"))],
    )
    return TypeModel([animal, dog])


@pytest.fixture
def deep_model():
    """Beans listed child-first so ancestors must be pulled forward."""
    puppy = Bean(ref("Puppy"), parent=ref("Dog"), properties=[Property("toy", ref("Toy"))])
    dog = Bean(ref("Dog"), parent=ref("Animal"), properties=[Property("owner", ref("Person"))])
    animal = Bean(ref("Animal"), properties=[Property("nickname", BasicType("string"))])
    person = Bean(ref("Person"), properties=[Property("pet", ref("Dog"))])
    toy = Bean(ref("Toy"))
    return TypeModel([puppy, dog, animal, person, toy])


@pytest.fixture
def generic_model():
    """Generic bean Page<T> whose name carries type arguments."""
    page_type = GenericReferenceType("Page", (ref("T"),))
    page = Bean(page_type, properties=[Property("next", page_type)])
    result = Bean(ref("Result"), parent=page_type, properties=[Property("page", page_type)])
    return TypeModel([page, result])

"""Tests for the bean property path extension."""

import pytest

from bean_paths.codegen.core.config import Settings
from bean_paths.codegen.core.extension import InheritanceCycleError, LineWriter
from bean_paths.codegen.core.model import BasicType, Bean, Property, TypeModel
from bean_paths.codegen.core.templates import FIELDS_CLASS_TEMPLATE
from bean_paths.codegen.extensions import BeanPropertyPathExtension

from conftest import emit_lines, ref

FIELDS_CLASS_LINES = FIELDS_CLASS_TEMPLATE.split("\n")
CONSTRUCTOR_LINE = "    constructor(parent?: Fields, name?: string) { super(parent, name); }"


def class_header_index(lines, class_name):
    matches = [i for i, line in enumerate(lines) if line.startswith(f"class {class_name} ")]
    assert len(matches) == 1, f"{class_name} declared {len(matches)} times"
    return matches[0]


def test_features_declare_runtime_code():
    assert BeanPropertyPathExtension().features.generates_runtime_code is True


def test_empty_model_writes_only_fields_class():
    lines = emit_lines(TypeModel())

    assert lines == [""] + FIELDS_CLASS_LINES
    assert len(FIELDS_CLASS_LINES) == 15


def test_animal_scenario(animal_model):
    lines = emit_lines(animal_model)

    assert lines[: len(FIELDS_CLASS_LINES) + 1] == [""] + FIELDS_CLASS_LINES
    assert lines[len(FIELDS_CLASS_LINES) + 1 :] == [
        "",
        "class AnimalFields extends Fields {",
        CONSTRUCTOR_LINE,
        '    name = new Fields(this, "name");',
        "}",
        "const Animal = new AnimalFields();",
    ]


def test_dog_extends_animal_and_is_written_after_it(dog_model):
    lines = emit_lines(dog_model)

    animal_index = class_header_index(lines, "AnimalFields")
    dog_index = class_header_index(lines, "DogFields")

    assert animal_index < dog_index
    assert lines[dog_index] == "class DogFields extends AnimalFields {"
    assert '    owner = new AnimalFields(this, "owner");' in lines


def test_ancestors_are_written_before_descendants(deep_model):
    lines = emit_lines(deep_model)

    order = [
        line.split()[1]
        for line in lines
        if line.startswith("class ") and line != "class Fields {"
    ]
    assert order == [
        "AnimalFields",
        "DogFields",
        "PuppyFields",
        "PersonFields",
        "ToyFields",
    ]
    assert lines[class_header_index(lines, "PuppyFields")] == (
        "class PuppyFields extends DogFields {"
    )


def test_each_bean_written_once_regardless_of_references(deep_model):
    text = "\n".join(emit_lines(deep_model))

    for name in ("Animal", "Dog", "Puppy", "Person", "Toy"):
        assert text.count(f"class {name}Fields ") == 1


def test_constants_follow_model_order_after_all_classes(deep_model):
    lines = emit_lines(deep_model)
    constants = [line for line in lines if line.startswith("const ")]

    assert constants == [
        "const Puppy = new PuppyFields();",
        "const Dog = new DogFields();",
        "const Animal = new AnimalFields();",
        "const Person = new PersonFields();",
        "const Toy = new ToyFields();",
    ]
    last_class_end = max(i for i, line in enumerate(lines) if line == "}")
    assert lines.index(constants[0]) == last_class_end + 1


def test_export_keyword_marks_constants(dog_model):
    lines = emit_lines(dog_model, export_keyword=True)

    assert "export const Animal = new AnimalFields();" in lines
    assert "export const Dog = new DogFields();" in lines
    assert not any(line.startswith("export class") for line in lines)


def test_unresolved_parent_extends_fields_directly():
    model = TypeModel([Bean(ref("Cat"), parent=ref("Feline"))])
    lines = emit_lines(model)

    assert "class CatFields extends Fields {" in lines


def test_property_order_is_preserved():
    bean = Bean(
        ref("Point"),
        properties=[
            Property("z", BasicType("number")),
            Property("x", BasicType("number")),
            Property("y", BasicType("number")),
        ],
    )
    lines = emit_lines(TypeModel([bean]))
    fields = [line.strip().split(" = ")[0] for line in lines if " = new Fields(this" in line]

    assert fields == ["z", "x", "y"]


def test_unresolved_property_type_uses_bare_fields_known_defect():
    # Known defect kept for output compatibility: the builder class of an
    # unknown type degenerates to the bare "Fields" suffix.
    bean = Bean(ref("Order"), properties=[Property("customer", ref("Customer"))])
    lines = emit_lines(TypeModel([bean]))

    assert '    customer = new Fields(this, "customer");' in lines


def test_self_referencing_property_does_not_recurse():
    node = Bean(ref("Node"), properties=[Property("next", ref("Node"))])
    lines = emit_lines(TypeModel([node]))

    assert '    next = new NodeFields(this, "next");' in lines
    assert lines.count("class NodeFields extends Fields {") == 1


def test_mutually_referencing_beans():
    a = Bean(ref("A"), properties=[Property("b", ref("B"))])
    b = Bean(ref("B"), properties=[Property("a", ref("A"))])
    lines = emit_lines(TypeModel([a, b]))

    assert '    b = new BFields(this, "b");' in lines
    assert '    a = new AFields(this, "a");' in lines


def test_generic_names_drop_type_arguments(generic_model):
    lines = emit_lines(generic_model)

    assert "class PageFields extends Fields {" in lines
    assert "class ResultFields extends PageFields {" in lines
    assert '    next = new PageFields(this, "next");' in lines
    assert "const Page = new PageFields();" in lines
    assert not any("<" in line for line in lines if line.startswith(("class", "const")))


def test_parent_cycle_raises():
    a = Bean(ref("A"), parent=ref("B"))
    b = Bean(ref("B"), parent=ref("A"))

    with pytest.raises(InheritanceCycleError) as excinfo:
        emit_lines(TypeModel([a, b]))

    assert excinfo.value.cycle == ["A", "B", "A"]


def test_self_parent_raises():
    a = Bean(ref("A"), parent=ref("A"))

    with pytest.raises(InheritanceCycleError):
        emit_lines(TypeModel([a]))


@pytest.mark.parametrize("indent", ["  ", "\t", "        "])
def test_indent_substitution(dog_model, indent):
    lines = emit_lines(dog_model, Settings(indent_string=indent))

    assert lines[1 : len(FIELDS_CLASS_LINES) + 1] == [
        line.replace("    ", indent) for line in FIELDS_CLASS_LINES
    ]
    assert f"{indent}constructor(parent?: Fields, name?: string) {{ super(parent, name); }}" in lines
    assert f'{indent}owner = new AnimalFields(this, "owner");' in lines


def test_two_space_indent_preserves_nesting():
    lines = emit_lines(TypeModel(), Settings(indent_string="  "))

    assert "      return this.name ? this.parent.get() + \".\" + this.name : this.parent.get();" in lines
    assert "  get(): string | undefined {" in lines


def test_separate_passes_do_not_share_state(dog_model):
    extension = BeanPropertyPathExtension()
    first, second = LineWriter(), LineWriter()
    extension.emit_elements(first, Settings(), False, dog_model)
    extension.emit_elements(second, Settings(), False, dog_model)

    assert first.lines == second.lines


def test_validate_model_reports_unresolved_references():
    model = TypeModel(
        [
            Bean(
                ref("Cat"),
                parent=ref("Feline"),
                properties=[
                    Property("owner", ref("Person")),
                    Property("color", BasicType("string")),
                    Property("bad-name", BasicType("string")),
                ],
            )
        ]
    )
    warnings = BeanPropertyPathExtension().validate_model(model)

    assert any("Parent 'Feline'" in w for w in warnings)
    assert any("Cat.owner" in w and "bare Fields" in w for w in warnings)
    assert not any("Cat.color" in w for w in warnings)
    assert any("Cat.bad-name" in w for w in warnings)


def test_validate_model_reports_duplicate_simple_names(generic_model):
    other_page = Bean(ref("Page"))
    generic_model.add_bean(other_page)

    warnings = BeanPropertyPathExtension().validate_model(generic_model)

    assert any("PageFields is declared twice" in w for w in warnings)


def test_validate_model_clean_model(dog_model):
    assert BeanPropertyPathExtension().validate_model(dog_model) == []


def test_validate_model_reports_fields_member_shadowing(animal_model):
    animal = animal_model.beans[0]
    animal.add_property(Property("parent", ref("Animal")))
    animal.add_property(Property("get", BasicType("string")))

    warnings = BeanPropertyPathExtension().validate_model(animal_model)

    shadowing = [w for w in warnings if "shadows" in w]
    assert len(shadowing) == 3
    assert any("Animal.name shadows Fields.name" in w for w in shadowing)
    assert any("Animal.parent shadows Fields.parent" in w for w in shadowing)


def test_shadowing_property_is_still_written(animal_model):
    lines = emit_lines(animal_model)

    assert '    name = new Fields(this, "name");' in lines


def test_deep_hierarchy_listed_child_first():
    depth = 1200
    beans = [
        Bean(ref(f"Level{i}"), parent=ref(f"Level{i - 1}") if i else None)
        for i in reversed(range(depth))
    ]

    lines = emit_lines(TypeModel(beans))

    headers = [line for line in lines if line.startswith("class Level")]
    assert len(headers) == depth
    assert headers[0] == "class Level0Fields extends Fields {"
    assert headers[1] == "class Level1Fields extends Level0Fields {"
    assert headers[-1] == f"class Level{depth - 1}Fields extends Level{depth - 2}Fields {{"
    assert lines[-1] == "const Level0 = new Level0Fields();"


def test_cycle_above_written_beans_names_only_the_cycle():
    root = Bean(ref("Root"))
    a = Bean(ref("A"), parent=ref("B"))
    b = Bean(ref("B"), parent=ref("C"))
    c = Bean(ref("C"), parent=ref("A"))
    child = Bean(ref("Child"), parent=ref("A"))

    with pytest.raises(InheritanceCycleError) as excinfo:
        emit_lines(TypeModel([root, child, a, b, c]))

    assert excinfo.value.cycle == ["A", "B", "C", "A"]

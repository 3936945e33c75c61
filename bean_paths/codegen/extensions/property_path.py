"""
Emitter extension generating type-safe property path getters.

Many JavaScript frameworks take "property paths" as strings to pick data out
of objects, e.g. a grid column bound to ``"owner.address.city"``. For every
bean this extension writes a parallel ``<Bean>Fields`` class whose fields
mirror the bean's properties, plus one constant per bean, so that
``Dog.owner.address.city.get()`` evaluates to ``"owner.address.city"``.
"""

from typing import List, Set

from ...logging_config import get_logger
from ..core.config import Settings
from ..core.extension import (
    EmitterExtension,
    ExtensionFeatures,
    InheritanceCycleError,
    Writer,
)
from ..core.model import BasicType, Bean, Property, TypeModel
from ..core.naming import (
    get_bean_class_name,
    get_fields_class_name,
    is_reserved_word,
    is_valid_identifier,
)

logger = get_logger(__name__)

FIELDS_CLASS_TEMPLATE_NAME = "fields_class.ts"

# Members of the Fields base class that a same-named field would shadow
FIELDS_BASE_MEMBERS = ("parent", "name", "get")


class BeanPropertyPathExtension(EmitterExtension):
    """Writes the ``Fields`` path-builder hierarchy for all beans of a model."""

    extension_name = "beanPropertyPath"

    @property
    def features(self) -> ExtensionFeatures:
        return ExtensionFeatures(generates_runtime_code=True)

    def emit_elements(
        self, writer: Writer, settings: Settings, export_keyword: bool, model: TypeModel
    ) -> None:
        self._emit_fields_class(writer, settings)

        emitted_beans: Set[Bean] = set()
        for bean in model.beans:
            emitted_beans |= self._write_bean_and_parents_field_specs(
                writer, settings, model, emitted_beans, bean
            )
        for bean in model.beans:
            self._create_bean_field_constant(writer, export_keyword, bean)

        logger.info("Emitted %d path-builder classes", len(emitted_beans))

    def _emit_fields_class(self, writer: Writer, settings: Settings) -> None:
        """Write the universal ``Fields`` base class."""
        writer.write_indented_line("")
        for line in self.template_engine.render_lines(
            FIELDS_CLASS_TEMPLATE_NAME, indent_string=settings.indent_string
        ):
            writer.write_indented_line(line)

    def _write_bean_and_parents_field_specs(
        self,
        writer: Writer,
        settings: Settings,
        model: TypeModel,
        emitted_so_far: Set[Bean],
        bean: Bean,
    ) -> Set[Bean]:
        """
        Write a bean's path-builder class, preceded by its parents' if needed.

        The parent chain is walked up to the first bean already written and
        the collected beans are then written root first, so arbitrarily deep
        hierarchies do not grow the call stack.

        Args:
            emitted_so_far: Beans already written in this pass
            bean: Bean to write

        Returns:
            The beans written by this call (empty if the bean was already written)

        Raises:
            InheritanceCycleError: If the bean is directly or transitively its
                own ancestor
        """
        chain: List[Bean] = []
        current = bean
        while current is not None and current not in emitted_so_far:
            if current in chain:
                cycle = chain[chain.index(current):] + [current]
                raise InheritanceCycleError([get_bean_class_name(b) for b in cycle])
            chain.append(current)
            current = model.find_bean(current.parent)

        for pending in reversed(chain):
            self._write_bean_field_spec(writer, settings, model, pending)
        return set(chain)

    def _write_bean_field_spec(
        self, writer: Writer, settings: Settings, model: TypeModel, bean: Bean
    ) -> None:
        parent_class_name = get_fields_class_name(model.find_bean(bean.parent))
        class_name = get_fields_class_name(bean)

        logger.debug("Writing %s extends %s", class_name, parent_class_name)
        writer.write_indented_line("")
        writer.write_indented_line(f"class {class_name} extends {parent_class_name} {{")
        writer.write_indented_line(
            settings.indent_string
            + "constructor(parent?: Fields, name?: string) { super(parent, name); }"
        )
        for prop in bean.properties:
            self._write_bean_property(writer, settings, model, prop)
        writer.write_indented_line("}")

    def _write_bean_property(
        self, writer: Writer, settings: Settings, model: TypeModel, prop: Property
    ) -> None:
        # An unresolved type leaves only the bare suffix, i.e. "Fields"
        field_class_name = get_fields_class_name(model.find_bean(prop.type))
        writer.write_indented_line(
            f'{settings.indent_string}{prop.name} = new {field_class_name}(this, "{prop.name}");'
        )

    def _create_bean_field_constant(
        self, writer: Writer, export_keyword: bool, bean: Bean
    ) -> None:
        class_name = get_bean_class_name(bean)
        writer.write_indented_line(
            ("export " if export_keyword else "")
            + f"const {class_name} = new {class_name}Fields();"
        )

    def validate_model(self, model: TypeModel) -> list:
        """Report references and names that make the output incomplete or invalid."""
        warnings = []
        seen_names = {}

        for bean in model.beans:
            class_name = get_bean_class_name(bean)

            if class_name in seen_names:
                warnings.append(
                    f"Beans '{seen_names[class_name]}' and '{bean.name}' share the "
                    f"name {class_name}; {class_name}Fields is declared twice"
                )
            else:
                seen_names[class_name] = str(bean.name)

            if not is_valid_identifier(class_name) or is_reserved_word(class_name):
                warnings.append(f"Bean name '{class_name}' is not usable as a constant name")

            if bean.parent is not None and model.find_bean(bean.parent) is None:
                warnings.append(
                    f"Parent '{bean.parent}' of bean '{class_name}' is not in the model; "
                    f"{class_name}Fields extends Fields"
                )

            for prop in bean.properties:
                if not is_valid_identifier(prop.name):
                    warnings.append(
                        f"Property name {class_name}.{prop.name} is not a valid identifier"
                    )
                elif prop.name in FIELDS_BASE_MEMBERS:
                    warnings.append(
                        f"Property {class_name}.{prop.name} shadows Fields.{prop.name}; "
                        f"paths through {class_name} are not reliable"
                    )
                if not isinstance(prop.type, BasicType) and model.find_bean(prop.type) is None:
                    warnings.append(
                        f"Type '{prop.type}' of {class_name}.{prop.name} is not a bean; "
                        f"field falls back to bare Fields"
                    )

        return warnings

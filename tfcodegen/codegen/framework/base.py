"""
Base classes shared by all generator nodes.

A generator node is the converted form of one attribute or block. It can
compare itself structurally to another node, render its schema definition,
report the Go imports it needs and describe its model struct field.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

from ..core.equality import (
    custom_type_equal,
    default_equal,
    plan_modifiers_equal,
    validators_equal,
)
from ..core.generator import GeneratorError
from ..core.imports import BASETYPES_IMPORT, PLANMODIFIER_IMPORT, VALIDATOR_IMPORT, ImportSet
from ..core.naming import FrameworkIdentifier
from ..core.schema import (
    AssociatedExternalType,
    CustomDefinition,
    CustomType,
    PlanModifier,
    Validator,
)
from ..core.templates import TemplateError, create_template_engine

TEMPLATE_DIR = Path(__file__).parent / "templates"


def render(template_name: str, **context: Any) -> str:
    """Render one of the framework templates, raising GeneratorError on failure."""
    engine = create_template_engine(TEMPLATE_DIR)
    try:
        return engine.render_template(template_name, context)
    except TemplateError as e:
        raise GeneratorError(str(e)) from e


@dataclass(frozen=True)
class ModelField:
    """A field of the generated model struct."""

    name: str
    tfsdk_name: str
    value_type: str

    def to_string(self) -> str:
        return f'{self.name} {self.value_type} `tfsdk:"{self.tfsdk_name}"`'


# Import helpers


def custom_type_imports(custom_type: Optional[CustomType]) -> ImportSet:
    """
    Imports for a node's custom type.

    Nodes without a custom type need nothing here: the types package is
    imported by the model struct, element types and object types that use it.
    """
    imports = ImportSet()
    if custom_type is not None and custom_type.import_ is not None:
        imports.add(custom_type.import_.path)
    return imports


def associated_external_type_imports(
    associated_external_type: Optional[AssociatedExternalType],
) -> ImportSet:
    """The external type's package, plus basetypes for the generated conversions."""
    imports = ImportSet()
    if associated_external_type is None or associated_external_type.import_ is None:
        return imports
    if associated_external_type.import_.path:
        imports.add(associated_external_type.import_.path)
        imports.add(BASETYPES_IMPORT)
    return imports


def custom_definition_imports(definition: Optional[CustomDefinition]) -> ImportSet:
    imports = ImportSet()
    if definition is not None:
        for code_import in definition.imports:
            imports.add(code_import.path)
    return imports


def _support_imports(definitions, support_import: str) -> ImportSet:
    imports = ImportSet()
    for definition in definitions:
        if definition is None:
            continue
        for code_import in definition.imports:
            if code_import.path:
                imports.add(support_import)
                imports.add(code_import.path)
    return imports


def validator_imports(validators: Tuple[Validator, ...]) -> ImportSet:
    return _support_imports((v.custom for v in validators), VALIDATOR_IMPORT)


def plan_modifier_imports(plan_modifiers: Tuple[PlanModifier, ...]) -> ImportSet:
    return _support_imports((p.custom for p in plan_modifiers), PLANMODIFIER_IMPORT)


# Rendering helpers


def schema_definitions(items) -> List[str]:
    """Non-empty custom schema definitions of validators or plan modifiers."""
    definitions = []
    for item in items:
        if item.custom is not None and item.custom.schema_definition:
            definitions.append(item.custom.schema_definition)
    return definitions


def custom_type_string(custom_type: Optional[CustomType]) -> str:
    return custom_type.type if custom_type is not None else ""


def render_attributes(attributes: Dict[str, "GeneratorAttribute"]) -> str:
    """Render attributes in ascending name order."""
    return "".join(attributes[name].to_string(name) for name in sorted(attributes))


def render_blocks(blocks: Dict[str, "GeneratorBlock"]) -> str:
    """Render blocks in ascending name order."""
    return "".join(blocks[name].to_string(name) for name in sorted(blocks))


def mapping_equal(a: Dict[str, Any], b: Dict[str, Any]) -> bool:
    """Compare two name-keyed mappings of generator nodes."""
    if a.keys() != b.keys():
        return False
    return all(a[name].equal(b[name]) for name in a)


def mapping_imports(mapping: Dict[str, Any]) -> ImportSet:
    imports = ImportSet()
    for node in mapping.values():
        imports.append(node.imports())
    return imports


class GeneratorNode(ABC):
    """Operations every generator attribute and block implements."""

    # Name of the framework schema type, e.g. "BoolAttribute"
    schema_type: str = ""
    # Suffix of validator.X / planmodifier.X, e.g. "Bool"
    validator_type: str = ""
    # Model struct value type, e.g. "types.Bool"
    model_value_type: str = ""
    # Kind name used by object value emission, e.g. "Bool", "ListNested"
    attribute_kind: str = ""

    @abstractmethod
    def equal(self, other: Any) -> bool:
        """Structural comparison. Nodes of different kinds are never equal."""

    @abstractmethod
    def to_string(self, name: str) -> str:
        """Render the schema definition of this node keyed by name."""

    @abstractmethod
    def imports(self) -> ImportSet:
        """Go imports required by the rendered definition."""

    def model_field(self, name: str) -> ModelField:
        """Describe the model struct field for this node."""
        identifier = FrameworkIdentifier(name)
        value_type = self.model_value_type
        custom_type = getattr(self, "custom_type", None)
        if custom_type is not None and custom_type.value_type:
            value_type = custom_type.value_type
        return ModelField(
            name=identifier.to_pascal_case(),
            tfsdk_name=identifier.to_string(),
            value_type=value_type,
        )

    # Object value emission

    @abstractmethod
    def attr_type(self, name: str) -> str:
        """attr.Type expression used inside object Value implementations."""

    @abstractmethod
    def attr_value(self, name: str) -> str:
        """attr.Value type used inside object Value implementations."""

    def collection_type(self) -> Optional[Dict[str, str]]:
        """Element type and value function for collection kinds."""
        return None


class GeneratorAttribute(GeneratorNode):
    """Abstract base for generator attributes."""


class GeneratorBlock(GeneratorNode):
    """Abstract base for generator blocks."""


@dataclass(eq=False)
class AttributeFields(GeneratorAttribute):
    """Fields and behavior shared by every attribute kind."""

    required: bool = False
    optional: bool = False
    computed: bool = False
    sensitive: bool = False
    description: str = ""
    markdown_description: str = ""
    deprecation_message: str = ""
    custom_type: Optional[CustomType] = None
    default: Any = None
    validators: Tuple[Validator, ...] = field(default_factory=tuple)
    plan_modifiers: Tuple[PlanModifier, ...] = field(default_factory=tuple)

    template_name = ""

    def equal(self, other: Any) -> bool:
        if type(other) is not type(self):
            return False
        if not custom_type_equal(self.custom_type, other.custom_type):
            return False
        if not self._default_equal(other):
            return False
        if not self._type_equal(other):
            return False
        if not validators_equal(self.validators, other.validators):
            return False
        if not plan_modifiers_equal(self.plan_modifiers, other.plan_modifiers):
            return False
        if self._scalars() != other._scalars():
            return False
        return self._children_equal(other)

    def _scalars(self) -> tuple:
        return (
            self.required,
            self.optional,
            self.computed,
            self.sensitive,
            self.description,
            self.markdown_description,
            self.deprecation_message,
        )

    def _default_equal(self, other) -> bool:
        return default_equal(self.default, other.default)

    def _type_equal(self, other) -> bool:
        return True

    def _children_equal(self, other) -> bool:
        return True

    def imports(self) -> ImportSet:
        imports = custom_type_imports(self.custom_type)
        imports.append(self._default_imports())
        imports.append(validator_imports(self.validators))
        imports.append(plan_modifier_imports(self.plan_modifiers))
        imports.append(self._type_imports())
        imports.append(self._children_imports())
        return imports

    def _default_imports(self) -> ImportSet:
        if self.default is None:
            return ImportSet()
        return custom_definition_imports(self.default.custom)

    def _type_imports(self) -> ImportSet:
        return ImportSet()

    def _children_imports(self) -> ImportSet:
        return ImportSet()

    def default_string(self) -> str:
        """Go expression of the default, or an empty string."""
        if self.default is not None and self.default.custom is not None:
            return self.default.custom.schema_definition
        return ""

    def _context(self, name: str) -> Dict[str, Any]:
        return {
            "name": name,
            "schema_type": self.schema_type,
            "validator_type": self.validator_type,
            "custom_type": custom_type_string(self.custom_type),
            "required": self.required,
            "optional": self.optional,
            "computed": self.computed,
            "sensitive": self.sensitive,
            "description": self.description,
            "markdown_description": self.markdown_description,
            "deprecation_message": self.deprecation_message,
            "validators": schema_definitions(self.validators),
            "plan_modifiers": schema_definitions(self.plan_modifiers),
            "default": self.default_string(),
        }

    def to_string(self, name: str) -> str:
        return render(self.template_name, **self._context(name))


@dataclass(eq=False)
class BlockFields(GeneratorBlock):
    """Fields and behavior shared by every block kind."""

    description: str = ""
    markdown_description: str = ""
    deprecation_message: str = ""
    custom_type: Optional[CustomType] = None
    validators: Tuple[Validator, ...] = field(default_factory=tuple)
    plan_modifiers: Tuple[PlanModifier, ...] = field(default_factory=tuple)

    template_name = ""

    def equal(self, other: Any) -> bool:
        if type(other) is not type(self):
            return False
        if not custom_type_equal(self.custom_type, other.custom_type):
            return False
        if not validators_equal(self.validators, other.validators):
            return False
        if not plan_modifiers_equal(self.plan_modifiers, other.plan_modifiers):
            return False
        if (self.description, self.markdown_description, self.deprecation_message) != (
            other.description,
            other.markdown_description,
            other.deprecation_message,
        ):
            return False
        return self._children_equal(other)

    def _children_equal(self, other) -> bool:
        return True

    def imports(self) -> ImportSet:
        imports = custom_type_imports(self.custom_type)
        imports.append(validator_imports(self.validators))
        imports.append(plan_modifier_imports(self.plan_modifiers))
        imports.append(self._children_imports())
        return imports

    def _children_imports(self) -> ImportSet:
        return ImportSet()

    def _context(self, name: str) -> Dict[str, Any]:
        return {
            "name": name,
            "schema_type": self.schema_type,
            "validator_type": self.validator_type,
            "custom_type": custom_type_string(self.custom_type),
            "description": self.description,
            "markdown_description": self.markdown_description,
            "deprecation_message": self.deprecation_message,
            "validators": schema_definitions(self.validators),
            "plan_modifiers": schema_definitions(self.plan_modifiers),
        }

    def to_string(self, name: str) -> str:
        return render(self.template_name, **self._context(name))

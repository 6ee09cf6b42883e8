"""
Generator nodes for nested attributes and blocks.

Nested nodes own child attributes (and, for blocks, child blocks) keyed by
name. Children are rendered in ascending name order, compared recursively
and contribute their imports to the parent.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Tuple

from ..core.equality import (
    associated_external_type_equal,
    custom_type_equal,
    plan_modifiers_equal,
    validators_equal,
)
from ..core.imports import ImportSet
from ..core.naming import FrameworkIdentifier
from ..core.schema import AssociatedExternalType, CustomType, PlanModifier, Validator
from .base import (
    AttributeFields,
    BlockFields,
    GeneratorAttribute,
    GeneratorBlock,
    associated_external_type_imports,
    custom_type_string,
    mapping_equal,
    mapping_imports,
    plan_modifier_imports,
    render,
    render_attributes,
    render_blocks,
    schema_definitions,
    validator_imports,
)


@dataclass(eq=False)
class GeneratorNestedObject:
    """Object shared by the elements of a nested attribute or block."""

    attributes: Dict[str, GeneratorAttribute] = field(default_factory=dict)
    blocks: Dict[str, GeneratorBlock] = field(default_factory=dict)
    custom_type: Optional[CustomType] = None
    associated_external_type: Optional[AssociatedExternalType] = None
    validators: Tuple[Validator, ...] = field(default_factory=tuple)
    plan_modifiers: Tuple[PlanModifier, ...] = field(default_factory=tuple)

    def equal(self, other: Any) -> bool:
        if not isinstance(other, GeneratorNestedObject):
            return False
        if not custom_type_equal(self.custom_type, other.custom_type):
            return False
        if not associated_external_type_equal(
            self.associated_external_type, other.associated_external_type
        ):
            return False
        if not validators_equal(self.validators, other.validators):
            return False
        if not plan_modifiers_equal(self.plan_modifiers, other.plan_modifiers):
            return False
        if not mapping_equal(self.attributes, other.attributes):
            return False
        return mapping_equal(self.blocks, other.blocks)

    def imports(self) -> ImportSet:
        imports = ImportSet()
        # No fallback to the types package: the element object type is implied
        if self.custom_type is not None and self.custom_type.import_ is not None:
            imports.add(self.custom_type.import_.path)
        imports.append(associated_external_type_imports(self.associated_external_type))
        imports.append(validator_imports(self.validators))
        imports.append(plan_modifier_imports(self.plan_modifiers))
        imports.append(mapping_imports(self.attributes))
        imports.append(mapping_imports(self.blocks))
        return imports

    def context(self) -> Dict[str, Any]:
        return {
            "attributes": render_attributes(self.attributes),
            "blocks": render_blocks(self.blocks),
            "object_custom_type": custom_type_string(self.custom_type),
            "object_validators": schema_definitions(self.validators),
            "object_plan_modifiers": schema_definitions(self.plan_modifiers),
        }


def _nested_attr_type(collection: str, name: str) -> str:
    pascal = FrameworkIdentifier(name).to_pascal_case()
    return f"basetypes.{collection}Type{{\nElemType: {pascal}Value{{}}.Type(ctx),\n}}"


def _single_nested_attr_type(name: str) -> str:
    pascal = FrameworkIdentifier(name).to_pascal_case()
    return f"basetypes.ObjectType{{\nAttrTypes: {pascal}Value{{}}.AttributeTypes(ctx),\n}}"


class ObjectShaped(ABC):
    """Mixin for nodes that get a companion object Type/Value pair."""

    # List, Map, Set for collections of objects, Object for single objects
    collection: str = ""

    @abstractmethod
    def object_children(self) -> Dict[str, Any]:
        """Child attributes and blocks of the object, keyed by name."""

    @abstractmethod
    def external_type(self) -> Optional[AssociatedExternalType]:
        """Go type the object converts to and from, if any."""

    def attr_type(self, name: str) -> str:
        custom_type = getattr(self, "custom_type", None)
        if custom_type is not None and custom_type.type:
            return custom_type.type
        if self.collection == "Object":
            return _single_nested_attr_type(name)
        return _nested_attr_type(self.collection, name)

    def attr_value(self, name: str) -> str:
        custom_type = getattr(self, "custom_type", None)
        if custom_type is not None and custom_type.value_type:
            return custom_type.value_type
        return f"basetypes.{self.collection}Value"


# Nested attributes


@dataclass(eq=False)
class NestedAttribute(ObjectShaped, AttributeFields):
    """Attribute holding a list, map or set of nested objects."""

    nested_object: GeneratorNestedObject = field(default_factory=GeneratorNestedObject)

    template_name = "nested_attribute.go.j2"

    def _children_equal(self, other) -> bool:
        return self.nested_object.equal(other.nested_object)

    def _children_imports(self) -> ImportSet:
        return self.nested_object.imports()

    def to_string(self, name: str) -> str:
        context = self._context(name)
        context.update(self.nested_object.context())
        return render(self.template_name, **context)

    def object_children(self) -> Dict[str, Any]:
        return dict(self.nested_object.attributes)

    def external_type(self) -> Optional[AssociatedExternalType]:
        return self.nested_object.associated_external_type


@dataclass(eq=False)
class GeneratorListNestedAttribute(NestedAttribute):
    schema_type = "ListNestedAttribute"
    validator_type = "List"
    model_value_type = "types.List"
    attribute_kind = "ListNested"
    collection = "List"


@dataclass(eq=False)
class GeneratorMapNestedAttribute(NestedAttribute):
    schema_type = "MapNestedAttribute"
    validator_type = "Map"
    model_value_type = "types.Map"
    attribute_kind = "MapNested"
    collection = "Map"


@dataclass(eq=False)
class GeneratorSetNestedAttribute(NestedAttribute):
    schema_type = "SetNestedAttribute"
    validator_type = "Set"
    model_value_type = "types.Set"
    attribute_kind = "SetNested"
    collection = "Set"


@dataclass(eq=False)
class GeneratorSingleNestedAttribute(ObjectShaped, AttributeFields):
    """Attribute holding a single nested object."""

    attributes: Dict[str, GeneratorAttribute] = field(default_factory=dict)
    associated_external_type: Optional[AssociatedExternalType] = None

    schema_type = "SingleNestedAttribute"
    validator_type = "Object"
    model_value_type = "types.Object"
    attribute_kind = "SingleNested"
    collection = "Object"
    template_name = "single_nested_attribute.go.j2"

    def _children_equal(self, other) -> bool:
        if not associated_external_type_equal(
            self.associated_external_type, other.associated_external_type
        ):
            return False
        return mapping_equal(self.attributes, other.attributes)

    def _children_imports(self) -> ImportSet:
        imports = associated_external_type_imports(self.associated_external_type)
        return imports.append(mapping_imports(self.attributes))

    def to_string(self, name: str) -> str:
        context = self._context(name)
        context["attributes"] = render_attributes(self.attributes)
        return render(self.template_name, **context)

    def object_children(self) -> Dict[str, Any]:
        return dict(self.attributes)

    def external_type(self) -> Optional[AssociatedExternalType]:
        return self.associated_external_type


# Nested blocks


@dataclass(eq=False)
class NestedBlock(ObjectShaped, BlockFields):
    """Block holding a list or set of nested objects."""

    nested_object: GeneratorNestedObject = field(default_factory=GeneratorNestedObject)

    template_name = "nested_block.go.j2"

    def _children_equal(self, other) -> bool:
        return self.nested_object.equal(other.nested_object)

    def _children_imports(self) -> ImportSet:
        return self.nested_object.imports()

    def to_string(self, name: str) -> str:
        context = self._context(name)
        context.update(self.nested_object.context())
        return render(self.template_name, **context)

    def object_children(self) -> Dict[str, Any]:
        children: Dict[str, Any] = dict(self.nested_object.attributes)
        children.update(self.nested_object.blocks)
        return children

    def external_type(self) -> Optional[AssociatedExternalType]:
        return self.nested_object.associated_external_type


@dataclass(eq=False)
class GeneratorListNestedBlock(NestedBlock):
    schema_type = "ListNestedBlock"
    validator_type = "List"
    model_value_type = "types.List"
    attribute_kind = "ListNested"
    collection = "List"


@dataclass(eq=False)
class GeneratorSetNestedBlock(NestedBlock):
    schema_type = "SetNestedBlock"
    validator_type = "Set"
    model_value_type = "types.Set"
    attribute_kind = "SetNested"
    collection = "Set"


@dataclass(eq=False)
class GeneratorSingleNestedBlock(ObjectShaped, BlockFields):
    """Block holding a single nested object."""

    attributes: Dict[str, GeneratorAttribute] = field(default_factory=dict)
    blocks: Dict[str, GeneratorBlock] = field(default_factory=dict)
    associated_external_type: Optional[AssociatedExternalType] = None

    schema_type = "SingleNestedBlock"
    validator_type = "Object"
    model_value_type = "types.Object"
    attribute_kind = "SingleNested"
    collection = "Object"
    template_name = "single_nested_block.go.j2"

    def _children_equal(self, other) -> bool:
        if not associated_external_type_equal(
            self.associated_external_type, other.associated_external_type
        ):
            return False
        if not mapping_equal(self.attributes, other.attributes):
            return False
        return mapping_equal(self.blocks, other.blocks)

    def _children_imports(self) -> ImportSet:
        imports = associated_external_type_imports(self.associated_external_type)
        return imports.append(mapping_imports(self.attributes), mapping_imports(self.blocks))

    def to_string(self, name: str) -> str:
        context = self._context(name)
        context["attributes"] = render_attributes(self.attributes)
        context["blocks"] = render_blocks(self.blocks)
        return render(self.template_name, **context)

    def object_children(self) -> Dict[str, Any]:
        children: Dict[str, Any] = dict(self.attributes)
        children.update(self.blocks)
        return children

    def external_type(self) -> Optional[AssociatedExternalType]:
        return self.associated_external_type

"""
Generator nodes for list, map, set and object attributes.

These attributes describe the type of their elements (or, for objects, of
their attributes) with an element type tree that is resolved into a Go type
expression when rendered.
"""

from dataclasses import dataclass, field
from typing import Dict, Optional, Tuple

from ..convert.common import ConversionError
from ..convert.element_type import (
    ResolvedType,
    attribute_types_imports,
    element_type_imports,
    resolve_attribute_types,
    resolve_element_type,
)
from ..core.equality import attribute_types_equal, element_type_equal
from ..core.generator import GeneratorError
from ..core.imports import ImportSet
from ..core.schema import ElementType, ObjectAttributeType
from .base import AttributeFields, render


@dataclass(eq=False)
class CollectionAttribute(AttributeFields):
    """Attribute holding elements of a single element type."""

    element_type: ElementType = field(default_factory=ElementType)

    template_name = "collection_attribute.go.j2"

    def resolved_element_type(self) -> ResolvedType:
        try:
            return resolve_element_type(self.element_type)
        except ConversionError as e:
            raise GeneratorError(str(e)) from e

    def _type_equal(self, other) -> bool:
        return element_type_equal(self.element_type, other.element_type)

    def _type_imports(self) -> ImportSet:
        return element_type_imports(self.element_type)

    def to_string(self, name: str) -> str:
        context = self._context(name)
        context["element_type"] = self.resolved_element_type().expression
        return render(self.template_name, **context)

    def attr_type(self, name: str) -> str:
        if self.custom_type is not None and self.custom_type.type:
            return self.custom_type.type
        element = self.resolved_element_type().expression
        return f"basetypes.{self.validator_type}Type{{\nElemType: {element},\n}}"

    def attr_value(self, name: str) -> str:
        if self.custom_type is not None and self.custom_type.value_type:
            return self.custom_type.value_type
        return f"basetypes.{self.validator_type}Value"

    def collection_type(self) -> Optional[Dict[str, str]]:
        return {
            "ElementType": self.resolved_element_type().expression,
            "TypeValueFunc": f"types.{self.validator_type}Value",
        }


@dataclass(eq=False)
class GeneratorListAttribute(CollectionAttribute):
    schema_type = "ListAttribute"
    validator_type = "List"
    model_value_type = "types.List"
    attribute_kind = "List"


@dataclass(eq=False)
class GeneratorMapAttribute(CollectionAttribute):
    """Map attribute. Its element type is only resolved when rendered."""

    schema_type = "MapAttribute"
    validator_type = "Map"
    model_value_type = "types.Map"
    attribute_kind = "Map"


@dataclass(eq=False)
class GeneratorSetAttribute(CollectionAttribute):
    schema_type = "SetAttribute"
    validator_type = "Set"
    model_value_type = "types.Set"
    attribute_kind = "Set"


@dataclass(eq=False)
class GeneratorObjectAttribute(AttributeFields):
    """Object attribute with a fixed set of typed attributes."""

    attribute_types: Tuple[ObjectAttributeType, ...] = ()

    schema_type = "ObjectAttribute"
    validator_type = "Object"
    model_value_type = "types.Object"
    attribute_kind = "Object"
    template_name = "object_attribute.go.j2"

    def resolved_attribute_types(self) -> ResolvedType:
        try:
            return resolve_attribute_types(self.attribute_types)
        except ConversionError as e:
            raise GeneratorError(str(e)) from e

    def _type_equal(self, other) -> bool:
        return attribute_types_equal(self.attribute_types, other.attribute_types)

    def _type_imports(self) -> ImportSet:
        return attribute_types_imports(self.attribute_types)

    def to_string(self, name: str) -> str:
        context = self._context(name)
        context["attribute_types"] = self.resolved_attribute_types().expression
        return render(self.template_name, **context)

    def attr_type(self, name: str) -> str:
        if self.custom_type is not None and self.custom_type.type:
            return self.custom_type.type
        attribute_types = self.resolved_attribute_types().expression
        return f"basetypes.ObjectType{{\nAttrTypes: {attribute_types},\n}}"

    def attr_value(self, name: str) -> str:
        if self.custom_type is not None and self.custom_type.value_type:
            return self.custom_type.value_type
        return "basetypes.ObjectValue"

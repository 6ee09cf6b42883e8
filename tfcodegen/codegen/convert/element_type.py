"""
Resolution of element types into Go type expressions.

A collection's element type, or an object's attribute types, are nested
trees in the specification. They are flattened here into the expression
used in the generated schema together with the imports it requires.
"""

from dataclasses import dataclass, field
from typing import Sequence

from ..core.imports import ATTR_IMPORT, TYPES_IMPORT, ImportSet
from ..core.schema import ElementType, ObjectAttributeType
from .common import ConversionError

_PRIMITIVE_TYPES = {
    "bool": "types.BoolType",
    "float64": "types.Float64Type",
    "int64": "types.Int64Type",
    "number": "types.NumberType",
    "string": "types.StringType",
}

_COLLECTION_TYPES = {
    "list": "types.ListType",
    "map": "types.MapType",
    "set": "types.SetType",
}


@dataclass
class ResolvedType:
    """A Go type expression and the imports it depends on."""

    expression: str
    imports: ImportSet = field(default_factory=ImportSet)


def resolve_element_type(element_type: ElementType) -> ResolvedType:
    """
    Resolve an element type recursively.

    Args:
        element_type: Element type from the specification

    Returns:
        ResolvedType with the Go expression and required imports

    Raises:
        ConversionError: If no element kind is set
    """
    kind = element_type.kind if element_type is not None else None
    if kind is None:
        raise ConversionError(f"element type is not defined: {element_type!r}")

    node = getattr(element_type, kind)

    if kind in _PRIMITIVE_TYPES:
        return _leaf(node.custom_type, _PRIMITIVE_TYPES[kind])

    if node.custom_type is not None and node.custom_type.type:
        # The custom type replaces the whole branch, including its elements
        return _leaf(node.custom_type, node.custom_type.type)

    if kind in _COLLECTION_TYPES:
        inner = resolve_element_type(node.element_type)
        expression = f"{_COLLECTION_TYPES[kind]}{{\nElemType: {inner.expression},\n}}"
        return ResolvedType(expression, inner.imports)

    attribute_types = resolve_attribute_types(node.attribute_types)
    expression = f"types.ObjectType{{\nAttrTypes: {attribute_types.expression},\n}}"
    return ResolvedType(expression, attribute_types.imports)


def resolve_attribute_types(attribute_types: Sequence[ObjectAttributeType]) -> ResolvedType:
    """
    Resolve object attribute types into a map[string]attr.Type literal.

    Entries are emitted in ascending name order.
    """
    imports = ImportSet().add(ATTR_IMPORT)
    lines = []
    for attribute_type in sorted(attribute_types, key=lambda a: a.name):
        resolved = resolve_element_type(attribute_type.element_type)
        imports.append(resolved.imports)
        lines.append(f'"{attribute_type.name}": {resolved.expression},\n')

    expression = "map[string]attr.Type{\n" + "".join(lines) + "}"
    return ResolvedType(expression, imports)


def _leaf(custom_type, default_expression: str) -> ResolvedType:
    expression = default_expression
    if custom_type is not None and custom_type.type:
        expression = custom_type.type

    # Exactly one import per leaf: the custom import or the types package
    if custom_type is not None and custom_type.import_ is not None and custom_type.import_.path:
        return ResolvedType(expression, ImportSet().add(custom_type.import_.path))
    return ResolvedType(expression, ImportSet().add(TYPES_IMPORT))


def element_type_imports(element_type: ElementType) -> ImportSet:
    """
    Imports of an element type without rendering it.

    Undefined element types, at any depth, contribute no imports.
    """
    kind = element_type.kind if element_type is not None else None
    if kind is None:
        return ImportSet()

    node = getattr(element_type, kind)

    if kind in _PRIMITIVE_TYPES or (node.custom_type is not None and node.custom_type.type):
        return _leaf(node.custom_type, "").imports

    if kind in _COLLECTION_TYPES:
        return element_type_imports(node.element_type)

    return attribute_types_imports(node.attribute_types)


def attribute_types_imports(attribute_types: Sequence[ObjectAttributeType]) -> ImportSet:
    """Imports of object attribute types without rendering them."""
    imports = ImportSet().add(ATTR_IMPORT)
    for attribute_type in attribute_types:
        imports.append(element_type_imports(attribute_type.element_type))
    return imports

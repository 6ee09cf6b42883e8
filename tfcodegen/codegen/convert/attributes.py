"""
Conversion of specification attributes into generator attributes.

There is one converter per attribute kind. Each rejects a missing node,
maps computed/optional/required onto the three framework flags and passes
custom types, defaults, validators and plan modifiers through unchanged.
"""

from typing import Any, Dict, Optional, Tuple

from ...logging_config import get_logger
from ..core import schema as spec
from ..framework.base import GeneratorAttribute
from ..framework.collections import (
    GeneratorListAttribute,
    GeneratorMapAttribute,
    GeneratorObjectAttribute,
    GeneratorSetAttribute,
)
from ..framework.nested import (
    GeneratorListNestedAttribute,
    GeneratorMapNestedAttribute,
    GeneratorNestedObject,
    GeneratorSetNestedAttribute,
    GeneratorSingleNestedAttribute,
)
from ..framework.primitives import (
    GeneratorBoolAttribute,
    GeneratorFloat64Attribute,
    GeneratorInt64Attribute,
    GeneratorNumberAttribute,
    GeneratorStringAttribute,
)
from .common import ConversionError, is_computed, is_optional, is_required, nil_error, text
from .element_type import resolve_element_type

logger = get_logger(__name__)

ATTRIBUTE_NOT_DEFINED = "attribute type not defined"


def _common(node: spec.AttributeBase) -> Dict[str, Any]:
    """Keyword arguments shared by every generator attribute."""
    cor = node.computed_optional_required
    return {
        "required": is_required(cor),
        "optional": is_optional(cor),
        "computed": is_computed(cor),
        "sensitive": bool(node.sensitive),
        "description": text(node.description),
        "markdown_description": text(node.description),
        "deprecation_message": text(node.deprecation_message),
        "custom_type": node.custom_type,
        "default": node.default,
        "validators": tuple(node.validators),
        "plan_modifiers": tuple(node.plan_modifiers),
    }


# Primitives


def convert_bool_attribute(node: Optional[spec.BoolAttribute]) -> GeneratorBoolAttribute:
    if node is None:
        raise nil_error("BoolAttribute")
    return GeneratorBoolAttribute(**_common(node))


def convert_float64_attribute(node: Optional[spec.Float64Attribute]) -> GeneratorFloat64Attribute:
    if node is None:
        raise nil_error("Float64Attribute")
    return GeneratorFloat64Attribute(**_common(node))


def convert_int64_attribute(node: Optional[spec.Int64Attribute]) -> GeneratorInt64Attribute:
    if node is None:
        raise nil_error("Int64Attribute")
    return GeneratorInt64Attribute(**_common(node))


def convert_number_attribute(node: Optional[spec.NumberAttribute]) -> GeneratorNumberAttribute:
    if node is None:
        raise nil_error("NumberAttribute")
    return GeneratorNumberAttribute(**_common(node))


def convert_string_attribute(node: Optional[spec.StringAttribute]) -> GeneratorStringAttribute:
    if node is None:
        raise nil_error("StringAttribute")
    return GeneratorStringAttribute(**_common(node))


# Collections


def convert_list_attribute(node: Optional[spec.ListAttribute]) -> GeneratorListAttribute:
    if node is None:
        raise nil_error("ListAttribute")
    # Fail early on an undefined element type
    resolve_element_type(node.element_type)
    return GeneratorListAttribute(element_type=node.element_type, **_common(node))


def convert_map_attribute(node: Optional[spec.MapAttribute]) -> GeneratorMapAttribute:
    if node is None:
        raise nil_error("MapAttribute")
    return GeneratorMapAttribute(element_type=node.element_type, **_common(node))


def convert_set_attribute(node: Optional[spec.SetAttribute]) -> GeneratorSetAttribute:
    if node is None:
        raise nil_error("SetAttribute")
    resolve_element_type(node.element_type)
    return GeneratorSetAttribute(element_type=node.element_type, **_common(node))


def convert_object_attribute(node: Optional[spec.ObjectAttribute]) -> GeneratorObjectAttribute:
    if node is None:
        raise nil_error("ObjectAttribute")
    return GeneratorObjectAttribute(attribute_types=tuple(node.attribute_types), **_common(node))


# Nested


def convert_nested_attribute_object(
    nested_object: spec.NestedAttributeObject,
) -> GeneratorNestedObject:
    return GeneratorNestedObject(
        attributes=convert_attributes(nested_object.attributes),
        custom_type=nested_object.custom_type,
        associated_external_type=nested_object.associated_external_type,
        validators=tuple(nested_object.validators),
        plan_modifiers=tuple(nested_object.plan_modifiers),
    )


def convert_list_nested_attribute(
    node: Optional[spec.ListNestedAttribute],
) -> GeneratorListNestedAttribute:
    if node is None:
        raise nil_error("ListNestedAttribute")
    return GeneratorListNestedAttribute(
        nested_object=convert_nested_attribute_object(node.nested_object), **_common(node)
    )


def convert_map_nested_attribute(
    node: Optional[spec.MapNestedAttribute],
) -> GeneratorMapNestedAttribute:
    if node is None:
        raise nil_error("MapNestedAttribute")
    return GeneratorMapNestedAttribute(
        nested_object=convert_nested_attribute_object(node.nested_object), **_common(node)
    )


def convert_set_nested_attribute(
    node: Optional[spec.SetNestedAttribute],
) -> GeneratorSetNestedAttribute:
    if node is None:
        raise nil_error("SetNestedAttribute")
    return GeneratorSetNestedAttribute(
        nested_object=convert_nested_attribute_object(node.nested_object), **_common(node)
    )


def convert_single_nested_attribute(
    node: Optional[spec.SingleNestedAttribute],
) -> GeneratorSingleNestedAttribute:
    if node is None:
        raise nil_error("SingleNestedAttribute")
    return GeneratorSingleNestedAttribute(
        attributes=convert_attributes(node.attributes),
        associated_external_type=node.associated_external_type,
        **_common(node),
    )


_CONVERTERS = {
    "bool": convert_bool_attribute,
    "float64": convert_float64_attribute,
    "int64": convert_int64_attribute,
    "list": convert_list_attribute,
    "list_nested": convert_list_nested_attribute,
    "map": convert_map_attribute,
    "map_nested": convert_map_nested_attribute,
    "number": convert_number_attribute,
    "object": convert_object_attribute,
    "set": convert_set_attribute,
    "set_nested": convert_set_nested_attribute,
    "single_nested": convert_single_nested_attribute,
    "string": convert_string_attribute,
}


def convert_attribute(
    attribute: spec.Attribute, not_defined: str = ATTRIBUTE_NOT_DEFINED
) -> GeneratorAttribute:
    """
    Convert an attribute by dispatching on its kind.

    Args:
        attribute: Specification attribute
        not_defined: Message prefix used when no kind is set

    Returns:
        The generator attribute

    Raises:
        ConversionError: If the attribute has no kind or its kind fails to convert
    """
    kind = attribute.kind
    if kind is None:
        raise ConversionError(f"{not_defined}: {attribute!r}")

    logger.debug("Converting %s attribute %s", kind, attribute.name)
    return _CONVERTERS[kind](getattr(attribute, kind))


def convert_attributes(
    attributes: Tuple[spec.Attribute, ...], not_defined: str = ATTRIBUTE_NOT_DEFINED
) -> Dict[str, GeneratorAttribute]:
    """Convert attributes keyed by name, stopping at the first error."""
    return {
        attribute.name: convert_attribute(attribute, not_defined) for attribute in attributes
    }

"""
Terraform Plugin Framework generator nodes.

Each node renders the Go schema definition of one attribute or block and
reports the imports and model field it needs.
"""

from .base import GeneratorAttribute, GeneratorBlock, GeneratorNode, ModelField
from .collections import (
    GeneratorListAttribute,
    GeneratorMapAttribute,
    GeneratorObjectAttribute,
    GeneratorSetAttribute,
)
from .nested import (
    GeneratorListNestedAttribute,
    GeneratorListNestedBlock,
    GeneratorMapNestedAttribute,
    GeneratorNestedObject,
    GeneratorSetNestedAttribute,
    GeneratorSetNestedBlock,
    GeneratorSingleNestedAttribute,
    GeneratorSingleNestedBlock,
)
from .object_value import (
    CustomObjectType,
    CustomObjectValue,
    ExternalTypeMethods,
    collect_object_types,
)
from .primitives import (
    GeneratorBoolAttribute,
    GeneratorFloat64Attribute,
    GeneratorInt64Attribute,
    GeneratorNumberAttribute,
    GeneratorStringAttribute,
)
from .schema import GeneratorSchema

__all__ = [
    "GeneratorNode",
    "GeneratorAttribute",
    "GeneratorBlock",
    "ModelField",
    # Attributes
    "GeneratorBoolAttribute",
    "GeneratorFloat64Attribute",
    "GeneratorInt64Attribute",
    "GeneratorNumberAttribute",
    "GeneratorStringAttribute",
    "GeneratorListAttribute",
    "GeneratorMapAttribute",
    "GeneratorSetAttribute",
    "GeneratorObjectAttribute",
    "GeneratorListNestedAttribute",
    "GeneratorMapNestedAttribute",
    "GeneratorSetNestedAttribute",
    "GeneratorSingleNestedAttribute",
    # Blocks
    "GeneratorNestedObject",
    "GeneratorListNestedBlock",
    "GeneratorSetNestedBlock",
    "GeneratorSingleNestedBlock",
    # Schema and object values
    "GeneratorSchema",
    "CustomObjectType",
    "CustomObjectValue",
    "ExternalTypeMethods",
    "collect_object_types",
]

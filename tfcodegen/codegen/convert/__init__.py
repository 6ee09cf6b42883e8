"""
Conversion of specification nodes into generator nodes.

The attribute, block and schema converters live in their own modules and
are imported from there since they depend on the framework nodes.
"""

from .common import ConversionError, is_computed, is_optional, is_required, nil_error
from .element_type import ResolvedType, resolve_attribute_types, resolve_element_type

__all__ = [
    "ConversionError",
    "is_computed",
    "is_optional",
    "is_required",
    "nil_error",
    "ResolvedType",
    "resolve_attribute_types",
    "resolve_element_type",
]

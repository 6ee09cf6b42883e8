"""
Generator nodes for primitive attributes: bool, float64, int64, number and string.
"""

from dataclasses import dataclass
from decimal import Decimal

from ..core.imports import (
    BOOLDEFAULT_IMPORT,
    FLOAT64DEFAULT_IMPORT,
    INT64DEFAULT_IMPORT,
    STRINGDEFAULT_IMPORT,
    ImportSet,
)
from ..core.templates import go_quote
from .base import AttributeFields


def format_float(value: float) -> str:
    """Shortest decimal representation without an exponent, e.g. 1.234 or 100."""
    formatted = format(Decimal(repr(float(value))), "f")
    if "." in formatted:
        formatted = formatted.rstrip("0").rstrip(".")
    return formatted


@dataclass(eq=False)
class PrimitiveAttribute(AttributeFields):
    """Attribute whose value is a single scalar."""

    template_name = "primitive_attribute.go.j2"

    # Import of the framework package providing static defaults
    default_import = ""

    def attr_type(self, name: str) -> str:
        if self.custom_type is not None and self.custom_type.type:
            return self.custom_type.type
        return f"basetypes.{self.validator_type}Type{{}}"

    def attr_value(self, name: str) -> str:
        if self.custom_type is not None and self.custom_type.value_type:
            return self.custom_type.value_type
        return f"basetypes.{self.validator_type}Value"

    def _default_imports(self) -> ImportSet:
        if self.default is not None and self.default.static is not None and self.default_import:
            return ImportSet().add(self.default_import)
        return super()._default_imports()

    def default_string(self) -> str:
        if self.default is not None and self.default.static is not None:
            static = self.static_default(self.default.static)
            if static:
                return static
        return super().default_string()

    def static_default(self, value) -> str:
        """Go expression for a static default, empty when unsupported."""
        return ""


@dataclass(eq=False)
class GeneratorBoolAttribute(PrimitiveAttribute):
    schema_type = "BoolAttribute"
    validator_type = "Bool"
    model_value_type = "types.Bool"
    attribute_kind = "Bool"
    default_import = BOOLDEFAULT_IMPORT

    def static_default(self, value) -> str:
        return f"booldefault.StaticBool({'true' if value else 'false'})"


@dataclass(eq=False)
class GeneratorFloat64Attribute(PrimitiveAttribute):
    schema_type = "Float64Attribute"
    validator_type = "Float64"
    model_value_type = "types.Float64"
    attribute_kind = "Float64"
    default_import = FLOAT64DEFAULT_IMPORT

    def static_default(self, value) -> str:
        return f"float64default.StaticFloat64({format_float(value)})"


@dataclass(eq=False)
class GeneratorInt64Attribute(PrimitiveAttribute):
    schema_type = "Int64Attribute"
    validator_type = "Int64"
    model_value_type = "types.Int64"
    attribute_kind = "Int64"
    default_import = INT64DEFAULT_IMPORT

    def static_default(self, value) -> str:
        return f"int64default.StaticInt64({int(value)})"


@dataclass(eq=False)
class GeneratorNumberAttribute(PrimitiveAttribute):
    """Number attributes only support custom defaults."""

    schema_type = "NumberAttribute"
    validator_type = "Number"
    model_value_type = "types.Number"
    attribute_kind = "Number"


@dataclass(eq=False)
class GeneratorStringAttribute(PrimitiveAttribute):
    schema_type = "StringAttribute"
    validator_type = "String"
    model_value_type = "types.String"
    attribute_kind = "String"
    default_import = STRINGDEFAULT_IMPORT

    def static_default(self, value) -> str:
        return f"stringdefault.StaticString({go_quote(value)})"

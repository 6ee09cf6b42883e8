"""
Helpers shared by the attribute, block and schema converters.
"""

from typing import Optional, Tuple

from ..core.schema import ComputedOptionalRequired


class ConversionError(Exception):
    """Exception raised when a specification node cannot be converted."""

    pass


def nil_error(kind: str) -> ConversionError:
    """Error for a missing specification node, e.g. '*resource.BoolAttribute is nil'."""
    return ConversionError(f"*resource.{kind} is nil")


# (required, optional, computed)
_COR_FLAGS = {
    ComputedOptionalRequired.REQUIRED: (True, False, False),
    ComputedOptionalRequired.OPTIONAL: (False, True, False),
    ComputedOptionalRequired.COMPUTED: (False, False, True),
    ComputedOptionalRequired.COMPUTED_OPTIONAL: (False, True, True),
}


def is_required(cor: Optional[ComputedOptionalRequired]) -> bool:
    return _flags(cor)[0]


def is_optional(cor: Optional[ComputedOptionalRequired]) -> bool:
    return _flags(cor)[1]


def is_computed(cor: Optional[ComputedOptionalRequired]) -> bool:
    return _flags(cor)[2]


def _flags(cor: Optional[ComputedOptionalRequired]) -> Tuple[bool, bool, bool]:
    return _COR_FLAGS.get(cor, (False, False, False))


def text(value: Optional[str]) -> str:
    """Optional string field as a plain string."""
    return value if value is not None else ""

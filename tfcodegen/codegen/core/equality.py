"""
Structural equality helpers for optional specification fragments.

Generator nodes compare their custom types, associated external types,
defaults, validators, plan modifiers and element types through these
functions so that missing (None) and present fragments are handled the
same way everywhere.
"""

from typing import Optional, Sequence

from .schema import (
    AssociatedExternalType,
    CodeImport,
    CustomDefinition,
    CustomType,
    Default,
    ElementType,
    ObjectAttributeType,
    PlanModifier,
    Validator,
)


def _both_none_or_neither(a, b) -> Optional[bool]:
    """Return a decided result when at least one side is None, else None."""
    if a is None and b is None:
        return True
    if a is None or b is None:
        return False
    return None


def import_equal(a: Optional[CodeImport], b: Optional[CodeImport]) -> bool:
    decided = _both_none_or_neither(a, b)
    if decided is not None:
        return decided
    return a.path == b.path and (a.alias or None) == (b.alias or None)


def custom_type_equal(a: Optional[CustomType], b: Optional[CustomType]) -> bool:
    """Compare custom types including their (optional) import."""
    decided = _both_none_or_neither(a, b)
    if decided is not None:
        return decided
    if not import_equal(a.import_, b.import_):
        return False
    return a.type == b.type and a.value_type == b.value_type


def associated_external_type_equal(
    a: Optional[AssociatedExternalType], b: Optional[AssociatedExternalType]
) -> bool:
    decided = _both_none_or_neither(a, b)
    if decided is not None:
        return decided
    return import_equal(a.import_, b.import_) and a.type == b.type


def custom_definition_equal(
    a: Optional[CustomDefinition], b: Optional[CustomDefinition]
) -> bool:
    decided = _both_none_or_neither(a, b)
    if decided is not None:
        return decided
    if a.schema_definition != b.schema_definition:
        return False
    if len(a.imports) != len(b.imports):
        return False
    return all(import_equal(x, y) for x, y in zip(a.imports, b.imports))


def default_equal(a: Optional[Default], b: Optional[Default]) -> bool:
    decided = _both_none_or_neither(a, b)
    if decided is not None:
        return decided
    if not _static_equal(a.static, b.static):
        return False
    return custom_definition_equal(a.custom, b.custom)


def _static_equal(a, b) -> bool:
    # True == 1 in Python; a bool default must not match an int default.
    if isinstance(a, bool) != isinstance(b, bool):
        return False
    return a == b


def validators_equal(a: Sequence[Validator], b: Sequence[Validator]) -> bool:
    """
    Compare validator lists position by position.

    Lists holding the same validators in a different order are not equal.
    """
    if len(a) != len(b):
        return False
    return all(custom_definition_equal(x.custom, y.custom) for x, y in zip(a, b))


def plan_modifiers_equal(a: Sequence[PlanModifier], b: Sequence[PlanModifier]) -> bool:
    """Compare plan modifier lists position by position."""
    if len(a) != len(b):
        return False
    return all(custom_definition_equal(x.custom, y.custom) for x, y in zip(a, b))


def element_type_equal(a: Optional[ElementType], b: Optional[ElementType]) -> bool:
    """Recursively compare element types. Object attribute order is ignored."""
    decided = _both_none_or_neither(a, b)
    if decided is not None:
        return decided

    if a.kind != b.kind:
        return False
    kind = a.kind
    if kind is None:
        return True

    left, right = getattr(a, kind), getattr(b, kind)
    if not custom_type_equal(left.custom_type, right.custom_type):
        return False
    if kind in ("list", "map", "set"):
        return element_type_equal(left.element_type, right.element_type)
    if kind == "object":
        return attribute_types_equal(left.attribute_types, right.attribute_types)
    return True


def attribute_types_equal(
    a: Sequence[ObjectAttributeType], b: Sequence[ObjectAttributeType]
) -> bool:
    """Compare object attribute types as a name-keyed mapping."""
    left = {attr_type.name: attr_type.element_type for attr_type in a}
    right = {attr_type.name: attr_type.element_type for attr_type in b}
    if left.keys() != right.keys():
        return False
    return all(element_type_equal(left[name], right[name]) for name in left)

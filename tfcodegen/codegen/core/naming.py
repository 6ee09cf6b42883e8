"""
Naming utilities for safe code generation.

Handles validation of Terraform Plugin Framework identifiers and their
conversion into Go identifiers.
"""

import re
from typing import Set


# Same rule the framework applies to attribute and block names.
_IDENTIFIER_PATTERN = re.compile(r"^[a-z_][a-z0-9_]*$")

# First letter, or an underscore followed by a letter or digit
_SNAKE_LETTERS = re.compile(r"(^[a-z])|_[a-z0-9]")

GO_RESERVED_WORDS: Set[str] = {
    'break', 'case', 'chan', 'const', 'continue', 'default', 'defer',
    'else', 'fallthrough', 'for', 'func', 'go', 'goto', 'if', 'import',
    'interface', 'map', 'package', 'range', 'return', 'select', 'struct',
    'switch', 'type', 'var'
}


class FrameworkIdentifier:
    """A schema name with helpers for turning it into Go identifiers."""

    __slots__ = ("_name",)

    def __init__(self, name: str):
        self._name = str(name)

    def valid(self) -> bool:
        """Whether the name is a valid framework identifier."""
        return bool(_IDENTIFIER_PATTERN.match(self._name))

    def to_pascal_case(self) -> str:
        """
        Convert to PascalCase.

        Example:
            example_resource_thing -> ExampleResourceThing
        """
        return _SNAKE_LETTERS.sub(
            lambda match: match.group(0).replace("_", "").upper(), self._name
        )

    def to_camel_case(self) -> str:
        """
        Convert to camelCase.

        Example:
            example_resource_thing -> exampleResourceThing
        """
        pascal = self.to_pascal_case()
        if not pascal:
            return pascal
        return pascal[0].lower() + pascal[1:]

    def to_string(self) -> str:
        return self._name

    def __str__(self) -> str:
        return self._name

    def __repr__(self) -> str:
        return f"FrameworkIdentifier({self._name!r})"

    def __eq__(self, other) -> bool:
        if isinstance(other, FrameworkIdentifier):
            return self._name == other._name
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self._name)


def is_valid_go_package_name(name: str) -> bool:
    """Check a Go package name: lowercase identifier that is not a keyword."""
    if not name or not name.isidentifier() or name != name.lower():
        return False
    return name not in GO_RESERVED_WORDS

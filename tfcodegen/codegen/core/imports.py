"""
Import path aggregation for generated Go code.

Every generator node reports the Go packages it needs as an ImportSet.
Sets from nested nodes are merged upwards and rendered, sorted, in the
import block of the generated file.
"""

from typing import Iterable, Iterator, List, Optional, Set

FRAMEWORK_PREFIX = "github.com/hashicorp/terraform-plugin-framework/"

ATTR_IMPORT = FRAMEWORK_PREFIX + "attr"
BASETYPES_IMPORT = FRAMEWORK_PREFIX + "types/basetypes"
DIAG_IMPORT = FRAMEWORK_PREFIX + "diag"
TYPES_IMPORT = FRAMEWORK_PREFIX + "types"
VALIDATOR_IMPORT = FRAMEWORK_PREFIX + "schema/validator"
PLANMODIFIER_IMPORT = FRAMEWORK_PREFIX + "resource/schema/planmodifier"

BOOLDEFAULT_IMPORT = FRAMEWORK_PREFIX + "resource/schema/booldefault"
FLOAT64DEFAULT_IMPORT = FRAMEWORK_PREFIX + "resource/schema/float64default"
INT64DEFAULT_IMPORT = FRAMEWORK_PREFIX + "resource/schema/int64default"
STRINGDEFAULT_IMPORT = FRAMEWORK_PREFIX + "resource/schema/stringdefault"

RESOURCE_SCHEMA_IMPORT = FRAMEWORK_PREFIX + "resource/schema"
DATASOURCE_SCHEMA_IMPORT = FRAMEWORK_PREFIX + "datasource/schema"

CONTEXT_IMPORT = "context"
FMT_IMPORT = "fmt"
MATH_BIG_IMPORT = "math/big"
STRINGS_IMPORT = "strings"
TFTYPES_IMPORT = "github.com/hashicorp/terraform-plugin-go/tftypes"

# Packages referenced by the object Type/Value implementations.
OBJECT_VALUE_IMPORTS = (
    ATTR_IMPORT,
    BASETYPES_IMPORT,
    CONTEXT_IMPORT,
    DIAG_IMPORT,
    FMT_IMPORT,
    STRINGS_IMPORT,
    TFTYPES_IMPORT,
    TYPES_IMPORT,
)


class ImportSet:
    """Deduplicated collection of Go import paths."""

    def __init__(self, paths: Optional[Iterable[str]] = None):
        self._paths: Set[str] = set()
        if paths:
            for path in paths:
                self.add(path)

    def add(self, path: Optional[str]) -> "ImportSet":
        """Add a path. Empty and missing paths are ignored."""
        if path:
            self._paths.add(path)
        return self

    def append(self, *others: "ImportSet") -> "ImportSet":
        """Merge the paths of other import sets into this one."""
        for other in others:
            if other is not None:
                self._paths.update(other._paths)
        return self

    def all(self) -> List[str]:
        """Return all paths in ascending order."""
        return sorted(self._paths)

    def __contains__(self, path: str) -> bool:
        return path in self._paths

    def __iter__(self) -> Iterator[str]:
        return iter(self.all())

    def __len__(self) -> int:
        return len(self._paths)

    def __eq__(self, other) -> bool:
        if not isinstance(other, ImportSet):
            return NotImplemented
        return self._paths == other._paths

    def __repr__(self) -> str:
        return f"ImportSet({self.all()!r})"

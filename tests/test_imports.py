"""
Tests for ImportSet aggregation.

Covers:
- Idempotent adds
- Order-independent merges
- Ignored empty paths
"""

from tfcodegen.codegen.core.imports import ImportSet, TYPES_IMPORT


class TestImportSet:
    """Tests for ImportSet."""

    def test_add_is_idempotent(self):
        """Adding a path twice keeps one entry."""
        imports = ImportSet().add("fmt").add("fmt")
        assert imports.all() == ["fmt"]

    def test_empty_paths_are_ignored(self):
        """Empty and missing paths are not added."""
        imports = ImportSet().add("").add(None)
        assert len(imports) == 0

    def test_all_is_sorted(self):
        """Paths are returned in ascending order."""
        imports = ImportSet(["strings", "context", TYPES_IMPORT])
        assert imports.all() == ["context", TYPES_IMPORT, "strings"]

    def test_append_order_independent(self):
        """Merging in any order yields the same set."""
        a = ImportSet(["fmt"])
        b = ImportSet(["context"])
        c = ImportSet(["fmt", "strings"])
        assert ImportSet().append(a, b, c) == ImportSet().append(c, b, a)

    def test_contains_and_iter(self):
        """Membership and iteration follow the sorted paths."""
        imports = ImportSet(["b", "a"])
        assert "a" in imports
        assert list(imports) == ["a", "b"]

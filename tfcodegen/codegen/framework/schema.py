"""
Top-level generator schema of a resource or data source.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List

from ..core.imports import ImportSet
from .base import (
    GeneratorAttribute,
    GeneratorBlock,
    ModelField,
    mapping_equal,
    mapping_imports,
    render,
    render_attributes,
    render_blocks,
)


@dataclass(eq=False)
class GeneratorSchema:
    """Converted attributes and blocks of one resource or data source."""

    attributes: Dict[str, GeneratorAttribute] = field(default_factory=dict)
    blocks: Dict[str, GeneratorBlock] = field(default_factory=dict)

    def equal(self, other: Any) -> bool:
        if not isinstance(other, GeneratorSchema):
            return False
        if not mapping_equal(self.attributes, other.attributes):
            return False
        return mapping_equal(self.blocks, other.blocks)

    def imports(self) -> ImportSet:
        """Union of the imports of every attribute and block."""
        return mapping_imports(self.attributes).append(mapping_imports(self.blocks))

    def attributes_string(self) -> str:
        return render_attributes(self.attributes)

    def blocks_string(self) -> str:
        return render_blocks(self.blocks)

    def to_string(self) -> str:
        """Render the schema.Schema{...} literal."""
        return render(
            "schema.go.j2",
            attributes=self.attributes_string(),
            blocks=self.blocks_string(),
        )

    def model_fields(self) -> List[ModelField]:
        """Model struct fields in ascending name order, attributes then blocks."""
        fields = [self.attributes[name].model_field(name) for name in sorted(self.attributes)]
        fields.extend(self.blocks[name].model_field(name) for name in sorted(self.blocks))
        return fields

    def object_nodes(self) -> Dict[str, Any]:
        """Attributes and blocks keyed by name."""
        nodes: Dict[str, Any] = dict(self.attributes)
        nodes.update(self.blocks)
        return nodes

"""
Conversion of specification blocks into generator blocks.
"""

from typing import Any, Dict, Optional, Tuple

from ...logging_config import get_logger
from ..core import schema as spec
from ..framework.base import GeneratorBlock
from ..framework.nested import (
    GeneratorListNestedBlock,
    GeneratorNestedObject,
    GeneratorSetNestedBlock,
    GeneratorSingleNestedBlock,
)
from .attributes import convert_attributes
from .common import ConversionError, nil_error, text

logger = get_logger(__name__)

# Attributes inside blocks report a slightly different message
BLOCK_ATTRIBUTE_NOT_DEFINED = "attribute type is not defined"


def _common(node: spec.BlockBase) -> Dict[str, Any]:
    return {
        "description": text(node.description),
        "markdown_description": text(node.description),
        "deprecation_message": text(node.deprecation_message),
        "custom_type": node.custom_type,
        "validators": tuple(node.validators),
        "plan_modifiers": tuple(node.plan_modifiers),
    }


def convert_nested_block_object(nested_object: spec.NestedBlockObject) -> GeneratorNestedObject:
    return GeneratorNestedObject(
        attributes=convert_attributes(nested_object.attributes, BLOCK_ATTRIBUTE_NOT_DEFINED),
        blocks=convert_blocks(nested_object.blocks),
        custom_type=nested_object.custom_type,
        associated_external_type=nested_object.associated_external_type,
        validators=tuple(nested_object.validators),
        plan_modifiers=tuple(nested_object.plan_modifiers),
    )


def convert_list_nested_block(node: Optional[spec.ListNestedBlock]) -> GeneratorListNestedBlock:
    if node is None:
        raise nil_error("ListNestedBlock")
    return GeneratorListNestedBlock(
        nested_object=convert_nested_block_object(node.nested_object), **_common(node)
    )


def convert_set_nested_block(node: Optional[spec.SetNestedBlock]) -> GeneratorSetNestedBlock:
    if node is None:
        raise nil_error("SetNestedBlock")
    return GeneratorSetNestedBlock(
        nested_object=convert_nested_block_object(node.nested_object), **_common(node)
    )


def convert_single_nested_block(
    node: Optional[spec.SingleNestedBlock],
) -> GeneratorSingleNestedBlock:
    if node is None:
        raise nil_error("SingleNestedBlock")
    return GeneratorSingleNestedBlock(
        attributes=convert_attributes(node.attributes, BLOCK_ATTRIBUTE_NOT_DEFINED),
        blocks=convert_blocks(node.blocks),
        associated_external_type=node.associated_external_type,
        **_common(node),
    )


_CONVERTERS = {
    "list_nested": convert_list_nested_block,
    "set_nested": convert_set_nested_block,
    "single_nested": convert_single_nested_block,
}


def convert_block(block: spec.Block) -> GeneratorBlock:
    """
    Convert a block by dispatching on its kind.

    Raises:
        ConversionError: If the block has no kind or its children fail to convert
    """
    kind = block.kind
    if kind is None:
        raise ConversionError(f"block type is not defined: {block!r}")

    logger.debug("Converting %s block %s", kind, block.name)
    return _CONVERTERS[kind](getattr(block, kind))


def convert_blocks(blocks: Tuple[spec.Block, ...]) -> Dict[str, GeneratorBlock]:
    """Convert blocks keyed by name, stopping at the first error."""
    return {block.name: convert_block(block) for block in blocks}

"""
Conversion of whole resource and data source schemas.
"""

from typing import Dict, Iterable, Union

from ...logging_config import get_logger
from ..core.schema import DataSource, Resource, Schema
from ..framework.schema import GeneratorSchema
from .attributes import convert_attributes
from .blocks import convert_blocks

logger = get_logger(__name__)


def to_generator_schema(schema: Schema) -> GeneratorSchema:
    """
    Convert a specification schema into a generator schema.

    Top-level attributes are converted before blocks. The first error
    aborts the conversion and no partial schema is returned.

    Raises:
        ConversionError: If any attribute or block fails to convert
    """
    attributes = convert_attributes(schema.attributes)
    blocks = convert_blocks(schema.blocks)
    return GeneratorSchema(attributes=attributes, blocks=blocks)


def to_generator_schemas(
    items: Iterable[Union[Resource, DataSource]],
) -> Dict[str, GeneratorSchema]:
    """
    Convert resources or data sources keyed by name.

    Args:
        items: Resources or data sources from a specification

    Returns:
        Generator schemas keyed by resource or data source name
    """
    schemas = {}
    for item in items:
        logger.debug("Converting schema %s", item.name)
        schemas[item.name] = to_generator_schema(item.schema)
    logger.info("Converted %d schema(s)", len(schemas))
    return schemas

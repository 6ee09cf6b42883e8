"""
tfcodegen Code Generation Module

Generates Terraform Plugin Framework schema code from provider code
specifications.
"""

from typing import Any, Dict, Optional, Union

from .registry import (
    GeneratorRegistry,
    RegistryError,
    get_generator,
    get_registry,
    get_target_info,
    is_target_supported,
    list_all_target_info,
    list_supported_targets,
    register_generator,
)
from .core.generator import CodeGenerator, GenerationResult, GeneratorError, generate_code
from .core.schema import Specification, SpecificationError, parse_specification
from .core.config import GeneratorConfig, ConfigManager, ConfigError, load_config
from .convert.common import ConversionError
from .convert.schema import to_generator_schema, to_generator_schemas

__version__ = "0.1.0"


def generate_from_specification(
    specification: Union[Specification, Dict[str, Any]],
    target: str = "resource",
    config: Optional[Union[GeneratorConfig, Dict[str, Any], str]] = None,
) -> GenerationResult:
    """
    Generate schema code for the resources or data sources of a specification.

    Args:
        specification: Parsed specification or its decoded JSON document
        target: Generator target name or alias
        config: Generator configuration, dict or configuration file path

    Returns:
        GenerationResult with one file per resource or data source
    """
    try:
        if not isinstance(specification, Specification):
            specification = parse_specification(specification)

        generator = get_generator(target, config)
        if generator.target_name == "data_source":
            items = specification.datasources
        else:
            items = specification.resources

        schemas = to_generator_schemas(items)
    except (SpecificationError, ConversionError, RegistryError, ConfigError) as e:
        return GenerationResult.error(f"Code generation failed: {e}", exception=e)

    return generate_code(generator, schemas)


__all__ = [
    "GeneratorRegistry",
    "RegistryError",
    "CodeGenerator",
    "GenerationResult",
    "GeneratorError",
    "Specification",
    "SpecificationError",
    "ConversionError",
    "GeneratorConfig",
    "ConfigManager",
    "ConfigError",
    "generate_code",
    "generate_from_specification",
    "get_generator",
    "get_registry",
    "get_target_info",
    "is_target_supported",
    "list_all_target_info",
    "list_supported_targets",
    "register_generator",
    "load_config",
    "parse_specification",
    "to_generator_schema",
    "to_generator_schemas",
]

"""
Core code generation components.

Provides the specification model, base generator interface and the shared
naming, import, configuration and template utilities.
"""

from .generator import CodeGenerator, GeneratorError, GenerationResult, generate_code
from .schema import (
    Attribute,
    Block,
    ComputedOptionalRequired,
    DataSource,
    Resource,
    Schema,
    Specification,
    SpecificationError,
    parse_specification,
    validate_specification,
)
from .imports import ImportSet
from .naming import FrameworkIdentifier
from .config import GeneratorConfig, ConfigManager, ConfigError, load_config
from .templates import TemplateEngine, TemplateError, create_template_engine

__all__ = [
    # Base generator interface
    "CodeGenerator",
    "GeneratorError",
    "GenerationResult",
    "generate_code",
    # Specification model
    "Attribute",
    "Block",
    "ComputedOptionalRequired",
    "DataSource",
    "Resource",
    "Schema",
    "Specification",
    "SpecificationError",
    "parse_specification",
    "validate_specification",
    # Imports and naming
    "ImportSet",
    "FrameworkIdentifier",
    # Configuration system
    "GeneratorConfig",
    "ConfigManager",
    "ConfigError",
    "load_config",
    # Template system
    "TemplateEngine",
    "TemplateError",
    "create_template_engine",
]

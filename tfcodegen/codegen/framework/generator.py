"""
Terraform Plugin Framework schema generators.

Renders one Go file per resource or data source containing the schema
function, the model struct and the custom object types of nested objects.
"""

from pathlib import Path
from typing import Dict, List, Optional

from ...logging_config import get_logger
from ..core.config import GeneratorConfig
from ..core.generator import CodeGenerator, GeneratorError
from ..core.imports import (
    CONTEXT_IMPORT,
    DATASOURCE_SCHEMA_IMPORT,
    RESOURCE_SCHEMA_IMPORT,
    TYPES_IMPORT,
    ImportSet,
)
from ..core.naming import FrameworkIdentifier
from ..core.templates import TemplateError
from .base import TEMPLATE_DIR
from .object_value import collect_object_types, object_value_imports
from .schema import GeneratorSchema

logger = get_logger(__name__)


class FrameworkGenerator(CodeGenerator):
    """Base generator for framework schema files."""

    # Import path of the framework schema package for this target
    schema_import: str = ""
    # Suffix of the generated schema function name
    function_suffix: str = ""

    def __init__(self, config: Optional[GeneratorConfig] = None):
        """
        Initialize the generator.

        Args:
            config: Generator configuration, defaults are used when omitted
        """
        super().__init__(config or GeneratorConfig())

    def get_template_directory(self) -> Optional[Path]:
        return TEMPLATE_DIR

    def file_name(self, name: str) -> str:
        return f"{name}_{self.target_name}{self.config.file_suffix}"

    def generate(self, schemas: Dict[str, GeneratorSchema]) -> Dict[str, str]:
        files = {}
        for name in sorted(schemas):
            files[self.file_name(name)] = self.generate_single_schema(name, schemas[name])
        return files

    def generate_single_schema(self, name: str, schema: GeneratorSchema) -> str:
        logger.debug("Generating %s %s", self.target_name, name)
        pascal = FrameworkIdentifier(name).to_pascal_case()

        model = ""
        if self.config.generate_models:
            model = self.generate_model(name, schema)

        object_types: List[str] = []
        if self.config.generate_object_types:
            object_types = collect_object_types(schema.object_nodes())

        context = {
            "header": self.config.add_header,
            "package_name": self.config.package_name,
            "imports": self.get_imports(schema, bool(object_types)).all(),
            "function_name": f"{pascal}{self.function_suffix}",
            "schema": schema.to_string(),
            "model": model,
            "object_types": object_types,
        }

        try:
            return self.render_template("file.go.j2", context)
        except TemplateError as e:
            raise GeneratorError(f"Failed to render {self.target_name} {name}: {e}") from e

    def generate_model(self, name: str, schema: GeneratorSchema) -> str:
        """Render the model struct of a schema."""
        pascal = FrameworkIdentifier(name).to_pascal_case()
        context = {"name": pascal, "fields": schema.model_fields()}
        try:
            return self.render_template("model.go.j2", context)
        except TemplateError as e:
            raise GeneratorError(f"Failed to render model for {name}: {e}") from e

    def get_imports(self, schema: GeneratorSchema, with_object_types: bool = False) -> ImportSet:
        """Imports of the generated file."""
        imports = ImportSet().add(CONTEXT_IMPORT).add(self.schema_import)
        imports.append(schema.imports())

        if self.config.generate_models:
            fields = schema.model_fields()
            if any(f.value_type.startswith("types.") for f in fields):
                imports.add(TYPES_IMPORT)

        if with_object_types:
            imports.append(object_value_imports(schema.object_nodes()))

        return imports


class ResourceGenerator(FrameworkGenerator):
    """Generates resource schema files."""

    schema_import = RESOURCE_SCHEMA_IMPORT
    function_suffix = "ResourceSchema"

    @property
    def target_name(self) -> str:
        return "resource"


class DataSourceGenerator(FrameworkGenerator):
    """Generates data source schema files."""

    schema_import = DATASOURCE_SCHEMA_IMPORT
    function_suffix = "DataSourceSchema"

    @property
    def target_name(self) -> str:
        return "data_source"

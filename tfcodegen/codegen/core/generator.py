"""
Base generator interface for all code generation targets.

Defines the contract that the resource and data source generators implement.
"""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Dict, List, Optional

from ...logging_config import get_logger
from .naming import FrameworkIdentifier
from .templates import TemplateEngine, create_template_engine

logger = get_logger(__name__)


class GeneratorError(Exception):
    """Base exception for code generation errors."""

    pass


class CodeGenerator(ABC):
    """Abstract base class for all code generators."""

    def __init__(self, config: Optional[Any] = None):
        """Initialize generator with optional configuration."""
        self.config = config
        self._template_engine = None
        self._setup_templates()

    def _setup_templates(self):
        """Setup template engine for this generator."""
        template_dir = self.get_template_directory()
        if template_dir:
            self._template_engine = create_template_engine(template_dir)
        else:
            # Fallback to in-memory templates
            self._template_engine = create_template_engine()

    @property
    @abstractmethod
    def target_name(self) -> str:
        """Return the name of the generation target (e.g., 'resource')."""
        pass

    @property
    def file_extension(self) -> str:
        """Return the file extension for generated files."""
        return ".go"

    def get_template_directory(self) -> Optional[Path]:
        """
        Return the directory containing templates for this generator.

        Subclasses should override this to provide their template directory.
        Return None to use in-memory templates only.

        Returns:
            Path to template directory or None
        """
        return None

    @property
    def template_engine(self) -> TemplateEngine:
        """Get the template engine for this generator."""
        if self._template_engine is None:
            self._setup_templates()
        return self._template_engine

    @abstractmethod
    def generate(self, schemas: Dict[str, Any]) -> Dict[str, str]:
        """
        Generate code for all schemas.

        Args:
            schemas: Dictionary mapping resource or data source names to generator schemas

        Returns:
            Dictionary mapping file names to generated code
        """
        pass

    @abstractmethod
    def generate_single_schema(self, name: str, schema: Any) -> str:
        """
        Generate the code file for a single schema.

        Args:
            name: Resource or data source name
            schema: Generator schema to render

        Returns:
            Generated code for this schema only
        """
        pass

    def file_name(self, name: str) -> str:
        """File name of the generated code for a schema."""
        return f"{name}_{self.target_name}_gen{self.file_extension}"

    def validate_schemas(self, schemas: Dict[str, Any]) -> List[str]:
        """
        Validate schemas for basic structural issues.

        Args:
            schemas: Schemas to validate

        Returns:
            List of warning messages (empty if no issues)
        """
        warnings = []

        for name, schema in schemas.items():
            if not FrameworkIdentifier(name).valid():
                warnings.append(f"Name '{name}' is not a valid framework identifier")

            # Check for empty schemas
            if not schema.attributes and not schema.blocks:
                warnings.append(f"Schema '{name}' has no attributes or blocks")

            for child in list(schema.attributes) + list(schema.blocks):
                if not FrameworkIdentifier(child).valid():
                    warnings.append(
                        f"Name '{name}.{child}' is not a valid framework identifier"
                    )

        return warnings

    def format_code(self, code: str) -> str:
        """
        Apply formatting to generated code.

        Args:
            code: Raw generated code

        Returns:
            Code without trailing whitespace, ending in a single newline
        """
        lines = [line.rstrip() for line in code.split("\n")]
        return "\n".join(lines).rstrip("\n") + "\n"

    # Template helper methods

    def render_template(self, template_name: str, context: Dict[str, Any]) -> str:
        """
        Render a template with context.

        Args:
            template_name: Template file name
            context: Template variables

        Returns:
            Rendered content
        """
        return self.template_engine.render_template(template_name, context)

    def template_exists(self, template_name: str) -> bool:
        """Check if a template exists."""
        return self.template_engine.template_exists(template_name)


class GenerationResult:
    """Container for generation results and metadata."""

    def __init__(
        self,
        files: Dict[str, str] = None,
        warnings: List[str] = None,
        metadata: Dict[str, Any] = None,
    ):
        """
        Initialize generation result.

        Args:
            files: Generated code keyed by file name
            warnings: Any warnings from generation
            metadata: Additional metadata about generation
        """
        self.files = files or {}
        self.warnings = warnings or []
        self.metadata = metadata or {}
        self.success = True
        self.error_message = None
        self.exception = None

    @property
    def code(self) -> str:
        """All generated files concatenated in file name order."""
        return "\n".join(self.files[name] for name in sorted(self.files))

    @classmethod
    def error(cls, message: str, exception: Exception = None) -> "GenerationResult":
        """Create a failed generation result."""
        result = cls()
        result.success = False
        result.error_message = message
        result.exception = exception
        return result


def generate_code(generator: CodeGenerator, schemas: Dict[str, Any]) -> GenerationResult:
    """
    Generate code using the specified generator with error handling.

    Args:
        generator: Code generator instance
        schemas: Generator schemas keyed by resource or data source name

    Returns:
        GenerationResult with code, warnings, and metadata
    """
    try:
        warnings = generator.validate_schemas(schemas)
        for warning in warnings:
            logger.warning(warning)

        files = {
            file_name: generator.format_code(code)
            for file_name, code in generator.generate(schemas).items()
        }

        metadata = {
            "target": generator.target_name,
            "file_extension": generator.file_extension,
            "schema_count": len(schemas),
            "file_count": len(files),
        }

        logger.info("Generated %d %s file(s)", len(files), generator.target_name)
        return GenerationResult(files, warnings, metadata)

    except Exception as e:
        logger.error("Code generation failed: %s", e)
        return GenerationResult.error(f"Code generation failed: {str(e)}", exception=e)

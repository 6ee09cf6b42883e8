"""
Tests for identifier naming and the template engine.

Covers:
- FrameworkIdentifier validity and case conversion
- Go package name validation
- Go string quoting
- Template loading, in-memory templates and render errors
"""

import pytest

from tfcodegen.codegen.core.naming import FrameworkIdentifier, is_valid_go_package_name
from tfcodegen.codegen.core.templates import (
    TemplateEngine,
    TemplateError,
    create_template_engine,
    go_quote,
)
from tfcodegen.codegen.framework.base import TEMPLATE_DIR


class TestFrameworkIdentifier:
    """Tests for FrameworkIdentifier."""

    @pytest.mark.parametrize(
        "name, pascal, camel",
        [
            ("example", "Example", "example"),
            ("example_resource_thing", "ExampleResourceThing", "exampleResourceThing"),
            ("ipv4_address", "Ipv4Address", "ipv4Address"),
            ("item_2", "Item2", "item2"),
        ],
    )
    def test_case_conversion(self, name, pascal, camel):
        """Underscores are dropped and the following letter upper-cased."""
        identifier = FrameworkIdentifier(name)
        assert identifier.to_pascal_case() == pascal
        assert identifier.to_camel_case() == camel

    @pytest.mark.parametrize("name", ["example", "_private", "a1_b2"])
    def test_valid(self, name):
        """Lowercase names with digits and underscores are valid."""
        assert FrameworkIdentifier(name).valid()

    @pytest.mark.parametrize("name", ["", "Example", "1abc", "with-dash"])
    def test_invalid(self, name):
        """Uppercase, leading digits and punctuation are invalid."""
        assert not FrameworkIdentifier(name).valid()

    def test_equality(self):
        """Identifiers compare and hash by name."""
        assert FrameworkIdentifier("a") == FrameworkIdentifier("a")
        assert len({FrameworkIdentifier("a"), FrameworkIdentifier("a")}) == 1


class TestGoPackageName:
    """Tests for is_valid_go_package_name."""

    @pytest.mark.parametrize("name", ["provider", "things", "v2api"])
    def test_valid(self, name):
        """Lowercase identifiers are accepted."""
        assert is_valid_go_package_name(name)

    @pytest.mark.parametrize("name", ["", "Provider", "my-pkg", "type", "2fast"])
    def test_invalid(self, name):
        """Empty, uppercase, punctuated and reserved names are rejected."""
        assert not is_valid_go_package_name(name)


class TestGoQuote:
    """Tests for go_quote."""

    def test_plain(self):
        """Printable text is wrapped in double quotes."""
        assert go_quote("hello") == '"hello"'

    def test_escapes(self):
        """Quotes, backslashes and control characters are escaped."""
        assert go_quote('say "hi"\n') == '"say \\"hi\\"\\n"'
        assert go_quote("a\\b") == '"a\\\\b"'
        assert go_quote("\x01") == '"\\x01"'

    def test_unicode(self):
        """Printable unicode passes through unchanged."""
        assert go_quote("café") == '"café"'


class TestTemplateEngine:
    """Tests for TemplateEngine."""

    def test_file_templates(self):
        """Templates are loaded from the template directory."""
        engine = create_template_engine(TEMPLATE_DIR)
        assert engine.template_exists("file.go.j2")
        assert not engine.template_exists("missing.go.j2")

    def test_engines_are_cached(self):
        """One engine is created per directory."""
        assert create_template_engine(TEMPLATE_DIR) is create_template_engine(TEMPLATE_DIR)

    def test_in_memory_template(self):
        """In-memory templates render with the go_quote filter."""
        engine = TemplateEngine()
        engine.add_template("greeting.j2", "{{ text | go_quote }}")
        assert engine.render_template("greeting.j2", {"text": "hi"}) == '"hi"'

    def test_render_string(self):
        """Template strings render without a trailing newline."""
        engine = TemplateEngine()
        assert engine.render_string("{% if flag %}yes{% endif %}\n", {"flag": True}) == "yes"

    def test_undefined_variable(self):
        """Missing variables are errors."""
        engine = TemplateEngine()
        with pytest.raises(TemplateError):
            engine.render_string("{{ missing }}", {})

    def test_missing_template(self):
        """Unknown templates raise TemplateError."""
        with pytest.raises(TemplateError, match="missing.go.j2"):
            TemplateEngine().render_template("missing.go.j2", {})

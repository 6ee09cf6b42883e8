"""
Tests for generator node rendering, imports and model fields.

Covers:
- Schema definitions of primitive, collection, object and nested kinds
- Static and custom defaults
- Validators and plan modifiers
- Sorted splicing of children
- Imports of every kind
- Model struct fields
- A minimal schema holding every attribute kind
- Abstract node operations and object value types of nested nodes
"""

import pytest

from tfcodegen.codegen.convert.schema import to_generator_schema
from tfcodegen.codegen.core.generator import GeneratorError
from tfcodegen.codegen.core.imports import (
    ATTR_IMPORT,
    BOOLDEFAULT_IMPORT,
    FLOAT64DEFAULT_IMPORT,
    PLANMODIFIER_IMPORT,
    STRINGDEFAULT_IMPORT,
    TYPES_IMPORT,
    VALIDATOR_IMPORT,
)
from tfcodegen.codegen.core.schema import (
    CodeImport,
    CustomDefinition,
    CustomType,
    Default,
    ElementType,
    ObjectAttributeType,
    PlanModifier,
    Validator,
    parse_element_type,
    parse_schema,
)
from tfcodegen.codegen.framework import (
    GeneratorBoolAttribute,
    GeneratorNode,
    GeneratorFloat64Attribute,
    GeneratorInt64Attribute,
    GeneratorListAttribute,
    GeneratorListNestedAttribute,
    GeneratorListNestedBlock,
    GeneratorMapAttribute,
    GeneratorNestedObject,
    GeneratorNumberAttribute,
    GeneratorObjectAttribute,
    GeneratorSchema,
    GeneratorSingleNestedAttribute,
    GeneratorSingleNestedBlock,
    GeneratorStringAttribute,
)
from tfcodegen.codegen.framework.nested import ObjectShaped
from tfcodegen.codegen.framework.primitives import format_float


MINIMAL_FRAGMENTS = [
    '"bool_attribute": schema.BoolAttribute{\n},',
    '"float64_attribute": schema.Float64Attribute{\n},',
    '"int64_attribute": schema.Int64Attribute{\n},',
    '"list_attribute": schema.ListAttribute{\nElementType: types.StringType,\n},',
    (
        '"list_nested_attribute": schema.ListNestedAttribute{\n'
        "NestedObject: schema.NestedAttributeObject{\n"
        "Attributes: map[string]schema.Attribute{\n"
        "},\n"
        "},\n"
        "},"
    ),
    '"map_attribute": schema.MapAttribute{\nElementType: types.Int64Type,\n},',
    (
        '"map_nested_attribute": schema.MapNestedAttribute{\n'
        "NestedObject: schema.NestedAttributeObject{\n"
        "Attributes: map[string]schema.Attribute{\n"
        "},\n"
        "},\n"
        "},"
    ),
    '"number_attribute": schema.NumberAttribute{\n},',
    '"object_attribute": schema.ObjectAttribute{\nAttributeTypes: map[string]attr.Type{\n},\n},',
    '"set_attribute": schema.SetAttribute{\nElementType: types.BoolType,\n},',
    (
        '"set_nested_attribute": schema.SetNestedAttribute{\n'
        "NestedObject: schema.NestedAttributeObject{\n"
        "Attributes: map[string]schema.Attribute{\n"
        "},\n"
        "},\n"
        "},"
    ),
    (
        '"single_nested_attribute": schema.SingleNestedAttribute{\n'
        "Attributes: map[string]schema.Attribute{\n"
        "},\n"
        "},"
    ),
    '"string_attribute": schema.StringAttribute{\n},',
    '"list_nested_block": schema.ListNestedBlock{\nNestedObject: schema.NestedBlockObject{\n},\n},',
    '"set_nested_block": schema.SetNestedBlock{\nNestedObject: schema.NestedBlockObject{\n},\n},',
    '"single_nested_block": schema.SingleNestedBlock{\n},',
]


def _validator(definition, path=""):
    imports = (CodeImport(path=path),) if path else ()
    return Validator(custom=CustomDefinition(imports=imports, schema_definition=definition))


class TestPrimitiveRendering:
    """Tests for primitive attribute definitions."""

    def test_bool(self):
        """Flags and descriptions are rendered in a fixed order."""
        node = GeneratorBoolAttribute(
            required=True, description="Turns it on", markdown_description="Turns it on"
        )
        assert node.to_string("bool_attribute") == (
            '\n"bool_attribute": schema.BoolAttribute{\n'
            "Required: true,\n"
            'Description: "Turns it on",\n'
            'MarkdownDescription: "Turns it on",\n'
            "},"
        )

    def test_empty(self):
        """An attribute without settings renders an empty literal."""
        assert GeneratorStringAttribute().to_string("s") == '\n"s": schema.StringAttribute{\n},'

    def test_computed_optional_sensitive(self):
        """Computed, optional and sensitive flags are rendered."""
        node = GeneratorStringAttribute(optional=True, computed=True, sensitive=True)
        assert node.to_string("password") == (
            '\n"password": schema.StringAttribute{\n'
            "Optional: true,\n"
            "Computed: true,\n"
            "Sensitive: true,\n"
            "},"
        )

    def test_deprecation_message_is_quoted(self):
        """Messages are quoted and escaped like Go strings."""
        node = GeneratorInt64Attribute(deprecation_message='use "other"\ninstead')
        assert 'DeprecationMessage: "use \\"other\\"\\ninstead",' in node.to_string("n")

    def test_custom_type(self):
        """Custom types are rendered first."""
        node = GeneratorNumberAttribute(
            optional=True, custom_type=CustomType(type="my.NumberType{}")
        )
        assert node.to_string("n") == (
            '\n"n": schema.NumberAttribute{\n'
            "CustomType: my.NumberType{},\n"
            "Optional: true,\n"
            "},"
        )


class TestDefaults:
    """Tests for default values."""

    def test_static_bool(self):
        """Static bool defaults use booldefault."""
        node = GeneratorBoolAttribute(computed=True, default=Default(static=False))
        assert "Default: booldefault.StaticBool(false),\n" in node.to_string("b")
        assert BOOLDEFAULT_IMPORT in node.imports()

    def test_static_string(self):
        """Static string defaults are quoted."""
        node = GeneratorStringAttribute(default=Default(static='say "hi"'))
        assert 'Default: stringdefault.StaticString("say \\"hi\\""),\n' in node.to_string("s")
        assert STRINGDEFAULT_IMPORT in node.imports()

    def test_static_float64(self):
        """Static float defaults use the shortest decimal form."""
        node = GeneratorFloat64Attribute(default=Default(static=1.5))
        assert "Default: float64default.StaticFloat64(1.5),\n" in node.to_string("f")
        assert FLOAT64DEFAULT_IMPORT in node.imports()

    def test_static_int64(self):
        """Static int defaults are rendered as integers."""
        node = GeneratorInt64Attribute(default=Default(static=10))
        assert "Default: int64default.StaticInt64(10),\n" in node.to_string("i")

    def test_custom_default(self):
        """Custom defaults render their definition and imports."""
        default = Default(
            custom=CustomDefinition(
                imports=(CodeImport(path="example.com/defaults"),),
                schema_definition="defaults.Number()",
            )
        )
        node = GeneratorNumberAttribute(default=default)
        assert "Default: defaults.Number(),\n" in node.to_string("n")
        assert "example.com/defaults" in node.imports()

    @pytest.mark.parametrize(
        "value, expected",
        [(1.0, "1"), (1.25, "1.25"), (100.0, "100"), (0.1, "0.1"), (1e20, "100000000000000000000")],
    )
    def test_format_float(self, value, expected):
        """Floats are formatted without exponents or trailing zeros."""
        assert format_float(value) == expected


class TestValidatorsAndPlanModifiers:
    """Tests for validators and plan modifiers."""

    def test_validators(self):
        """Validators are rendered in order under the kind's validator type."""
        node = GeneratorStringAttribute(
            validators=(_validator("a()"), _validator("b()")),
        )
        assert node.to_string("s") == (
            '\n"s": schema.StringAttribute{\n'
            "Validators: []validator.String{\n"
            "a(),\n"
            "b(),\n"
            "},\n"
            "},"
        )

    def test_validator_imports(self):
        """Validator imports add the validator package."""
        node = GeneratorStringAttribute(validators=(_validator("v.X()", "example.com/v"),))
        assert node.imports().all() == sorted(["example.com/v", VALIDATOR_IMPORT])

    def test_validator_without_import(self):
        """Validators without imports do not add the validator package."""
        node = GeneratorStringAttribute(validators=(_validator("v()"),))
        assert VALIDATOR_IMPORT not in node.imports()

    def test_plan_modifiers(self):
        """Plan modifiers are rendered under the kind's plan modifier type."""
        plan_modifier = PlanModifier(
            custom=CustomDefinition(
                imports=(CodeImport(path="example.com/pm"),), schema_definition="pm.Keep()"
            )
        )
        node = GeneratorInt64Attribute(plan_modifiers=(plan_modifier,))
        assert "PlanModifiers: []planmodifier.Int64{\npm.Keep(),\n},\n" in node.to_string("i")
        assert PLANMODIFIER_IMPORT in node.imports()


class TestCollectionRendering:
    """Tests for list, map, set and object attributes."""

    def test_list(self):
        """Lists render their element type."""
        node = GeneratorListAttribute(
            optional=True, element_type=parse_element_type({"string": {}})
        )
        assert node.to_string("tags") == (
            '\n"tags": schema.ListAttribute{\n'
            "ElementType: types.StringType,\n"
            "Optional: true,\n"
            "},"
        )

    def test_map_without_element_type(self):
        """Undefined map element types fail when rendered."""
        node = GeneratorMapAttribute(element_type=ElementType())
        with pytest.raises(GeneratorError, match="element type is not defined"):
            node.to_string("m")

    def test_object(self):
        """Objects render their attribute types."""
        node = GeneratorObjectAttribute(
            required=True,
            attribute_types=(
                ObjectAttributeType(name="count", element_type=parse_element_type({"int64": {}})),
            ),
        )
        assert node.to_string("o") == (
            '\n"o": schema.ObjectAttribute{\n'
            "AttributeTypes: map[string]attr.Type{\n"
            '"count": types.Int64Type,\n'
            "},\n"
            "Required: true,\n"
            "},"
        )

    def test_collection_imports(self):
        """Collections import the types package for the element type."""
        node = GeneratorListAttribute(element_type=parse_element_type({"bool": {}}))
        assert node.imports().all() == [TYPES_IMPORT]

    def test_undefined_map_element_type_imports(self):
        """Import collection does not fail on an undefined map element type."""
        assert GeneratorMapAttribute(element_type=ElementType()).imports().all() == []

    def test_object_imports(self):
        """Objects import the attr package for the attribute type map."""
        assert ATTR_IMPORT in GeneratorObjectAttribute().imports()


class TestNestedRendering:
    """Tests for nested attributes and blocks."""

    def test_list_nested_attribute(self):
        """Nested objects splice their attributes into the definition."""
        node = GeneratorListNestedAttribute(
            optional=True,
            nested_object=GeneratorNestedObject(
                attributes={"nested_bool": GeneratorBoolAttribute(computed=True)}
            ),
        )
        assert node.to_string("list_nested_attribute") == (
            '\n"list_nested_attribute": schema.ListNestedAttribute{\n'
            "NestedObject: schema.NestedAttributeObject{\n"
            "Attributes: map[string]schema.Attribute{\n"
            '"nested_bool": schema.BoolAttribute{\n'
            "Computed: true,\n"
            "},\n"
            "},\n"
            "},\n"
            "Optional: true,\n"
            "},"
        )

    def test_children_are_sorted(self):
        """Children are rendered in ascending name order."""
        node = GeneratorSingleNestedAttribute(
            attributes={
                "zeta": GeneratorStringAttribute(),
                "alpha": GeneratorStringAttribute(),
            }
        )
        rendered = node.to_string("parent")
        assert rendered.index('"alpha"') < rendered.index('"zeta"')

    def test_single_nested_block_without_children(self):
        """Empty attribute and block maps are omitted from blocks."""
        node = GeneratorSingleNestedBlock(description="d", markdown_description="d")
        assert node.to_string("b") == (
            '\n"b": schema.SingleNestedBlock{\n'
            'Description: "d",\n'
            'MarkdownDescription: "d",\n'
            "},"
        )

    def test_list_nested_block(self):
        """Nested blocks render attributes before blocks."""
        node = GeneratorListNestedBlock(
            nested_object=GeneratorNestedObject(
                attributes={"a": GeneratorBoolAttribute(required=True)},
                blocks={"inner": GeneratorSingleNestedBlock()},
            )
        )
        assert node.to_string("outer") == (
            '\n"outer": schema.ListNestedBlock{\n'
            "NestedObject: schema.NestedBlockObject{\n"
            "Attributes: map[string]schema.Attribute{\n"
            '"a": schema.BoolAttribute{\n'
            "Required: true,\n"
            "},\n"
            "},\n"
            "Blocks: map[string]schema.Block{\n"
            '"inner": schema.SingleNestedBlock{\n'
            "},\n"
            "},\n"
            "},\n"
            "},"
        )

    def test_nested_object_validators(self):
        """Object validators are rendered inside the nested object."""
        node = GeneratorListNestedAttribute(
            nested_object=GeneratorNestedObject(validators=(_validator("obj()"),))
        )
        assert "Validators: []validator.Object{\nobj(),\n},\n" in node.to_string("n")

    def test_nested_imports_include_children(self):
        """Nested nodes merge the imports of their children."""
        node = GeneratorSingleNestedBlock(
            attributes={
                "s": GeneratorStringAttribute(validators=(_validator("v()", "example.com/v"),))
            }
        )
        imports = node.imports()
        assert "example.com/v" in imports
        assert VALIDATOR_IMPORT in imports


class TestModelFields:
    """Tests for model struct fields."""

    def test_model_field(self):
        """Field names are PascalCase with the schema name as tag."""
        field = GeneratorBoolAttribute().model_field("bool_attribute")
        assert field.to_string() == 'BoolAttribute types.Bool `tfsdk:"bool_attribute"`'

    def test_custom_value_type(self):
        """Custom value types replace the framework value type."""
        node = GeneratorStringAttribute(custom_type=CustomType(value_type="my.StringValue"))
        assert node.model_field("s").value_type == "my.StringValue"

    def test_schema_model_fields_order(self):
        """Attributes come first, then blocks, each sorted by name."""
        schema = GeneratorSchema(
            attributes={"b": GeneratorBoolAttribute(), "a": GeneratorStringAttribute()},
            blocks={"c": GeneratorListNestedBlock()},
        )
        assert [f.tfsdk_name for f in schema.model_fields()] == ["a", "b", "c"]
        assert schema.model_fields()[2].value_type == "types.List"


class TestSchemaRendering:
    """Tests for whole schema literals."""

    def test_attributes_only(self):
        """Blocks are omitted when the schema has none."""
        schema = GeneratorSchema(attributes={"b": GeneratorBoolAttribute(required=True)})
        assert schema.to_string() == (
            "schema.Schema{\n"
            "Attributes: map[string]schema.Attribute{\n"
            '"b": schema.BoolAttribute{\n'
            "Required: true,\n"
            "},\n"
            "},\n"
            "}"
        )

    def test_empty(self):
        """An empty schema renders an empty literal."""
        assert GeneratorSchema().to_string() == "schema.Schema{\n}"

    def test_every_attribute_kind(self):
        """A schema with one minimal attribute of every kind renders."""
        data = {
            "attributes": [
                {"name": "bool_attribute", "bool": {}},
                {"name": "float64_attribute", "float64": {}},
                {"name": "int64_attribute", "int64": {}},
                {"name": "list_attribute", "list": {"element_type": {"string": {}}}},
                {"name": "list_nested_attribute", "list_nested": {}},
                {"name": "map_attribute", "map": {"element_type": {"int64": {}}}},
                {"name": "map_nested_attribute", "map_nested": {}},
                {"name": "number_attribute", "number": {}},
                {"name": "object_attribute", "object": {}},
                {"name": "set_attribute", "set": {"element_type": {"bool": {}}}},
                {"name": "set_nested_attribute", "set_nested": {}},
                {"name": "single_nested_attribute", "single_nested": {}},
                {"name": "string_attribute", "string": {}},
            ],
            "blocks": [
                {"name": "list_nested_block", "list_nested": {}},
                {"name": "set_nested_block", "set_nested": {}},
                {"name": "single_nested_block", "single_nested": {}},
            ],
        }
        schema = to_generator_schema(parse_schema(data))
        rendered = schema.to_string()

        for fragment in MINIMAL_FRAGMENTS:
            assert fragment in rendered
        for line in rendered.split("\n"):
            assert not line.startswith(("Required:", "Optional:", "Computed:", "Description:"))
        assert TYPES_IMPORT in schema.imports()
        assert ATTR_IMPORT in schema.imports()


class TestNodeContracts:
    """Tests for the operations every node must implement."""

    def test_missing_object_value_operations(self):
        """Nodes without attr_type and attr_value cannot be instantiated."""

        class Incomplete(GeneratorNode):
            def equal(self, other):
                return False

            def to_string(self, name):
                return ""

            def imports(self):
                return None

        with pytest.raises(TypeError):
            Incomplete()

    def test_missing_object_children(self):
        """Object-shaped nodes must name their children and external type."""

        class Incomplete(ObjectShaped):
            collection = "Object"

        with pytest.raises(TypeError):
            Incomplete()

    @pytest.mark.parametrize(
        "node, attr_type, attr_value",
        [
            (
                GeneratorListNestedAttribute(),
                "basetypes.ListType{\nElemType: NValue{}.Type(ctx),\n}",
                "basetypes.ListValue",
            ),
            (
                GeneratorSingleNestedBlock(),
                "basetypes.ObjectType{\nAttrTypes: NValue{}.AttributeTypes(ctx),\n}",
                "basetypes.ObjectValue",
            ),
        ],
    )
    def test_object_value_types(self, node, attr_type, attr_value):
        """Nested nodes reference their generated object Value type."""
        assert node.attr_type("n") == attr_type
        assert node.attr_value("n") == attr_value

    @pytest.mark.parametrize(
        "node_class",
        [
            GeneratorListNestedAttribute,
            GeneratorSingleNestedAttribute,
            GeneratorListNestedBlock,
            GeneratorSingleNestedBlock,
        ],
    )
    def test_custom_types_replace_object_value_types(self, node_class):
        """Custom types and value types replace the generated ones."""
        node = node_class(custom_type=CustomType(type="my.NType{}", value_type="my.NValue"))
        assert node.attr_type("n") == "my.NType{}"
        assert node.attr_value("n") == "my.NValue"

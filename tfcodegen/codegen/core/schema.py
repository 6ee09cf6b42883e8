"""
Core schema representation for code generation.

Parses the JSON provider code specification into an immutable tree of
typed nodes that the converters work with. Attribute and block nodes are
discriminated unions: exactly one kind field is expected to be set.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple

from ...logging_config import get_logger

logger = get_logger(__name__)


class SpecificationError(Exception):
    """Exception raised when a specification document cannot be parsed."""

    pass


class ComputedOptionalRequired(Enum):
    """Whether an attribute is computed, optional, required or both computed and optional."""

    COMPUTED = "computed"
    OPTIONAL = "optional"
    REQUIRED = "required"
    COMPUTED_OPTIONAL = "computed_optional"


# Shared descriptors


@dataclass(frozen=True)
class CodeImport:
    """A Go import path with an optional alias."""

    path: str = ""
    alias: Optional[str] = None


@dataclass(frozen=True)
class CustomType:
    """Override of the framework type and value type of a node."""

    import_: Optional[CodeImport] = None
    type: str = ""
    value_type: str = ""


@dataclass(frozen=True)
class AssociatedExternalType:
    """Go type that a nested object converts to and from, e.g. *apisdk.Thing."""

    import_: Optional[CodeImport] = None
    type: str = ""

    def type_reference(self) -> str:
        """The type without its pointer prefix."""
        return self.type[1:] if self.type.startswith("*") else self.type

    def to_pascal_case(self) -> str:
        """Method name suffix, e.g. "*apisdk.Type" becomes "ApisdkType"."""
        return "".join(part[:1].upper() + part[1:] for part in self.type_reference().split("."))


@dataclass(frozen=True)
class CustomDefinition:
    """Inline Go source for a default, validator or plan modifier."""

    imports: Tuple[CodeImport, ...] = ()
    schema_definition: str = ""


@dataclass(frozen=True)
class Default:
    """Default value: either a static literal or a custom definition."""

    static: Any = None
    custom: Optional[CustomDefinition] = None


@dataclass(frozen=True)
class Validator:
    custom: Optional[CustomDefinition] = None


@dataclass(frozen=True)
class PlanModifier:
    custom: Optional[CustomDefinition] = None


# Element types


@dataclass(frozen=True)
class PrimitiveElementType:
    custom_type: Optional[CustomType] = None


@dataclass(frozen=True)
class CollectionElementType:
    element_type: ElementType = field(default_factory=lambda: ElementType())
    custom_type: Optional[CustomType] = None


@dataclass(frozen=True)
class ObjectElementType:
    attribute_types: Tuple[ObjectAttributeType, ...] = ()
    custom_type: Optional[CustomType] = None


ELEMENT_KINDS = (
    "bool",
    "float64",
    "int64",
    "list",
    "map",
    "number",
    "object",
    "set",
    "string",
)


@dataclass(frozen=True)
class ElementType:
    """Element type of a collection, or the type of an object attribute."""

    bool: Optional[PrimitiveElementType] = None
    float64: Optional[PrimitiveElementType] = None
    int64: Optional[PrimitiveElementType] = None
    list: Optional[CollectionElementType] = None
    map: Optional[CollectionElementType] = None
    number: Optional[PrimitiveElementType] = None
    object: Optional[ObjectElementType] = None
    set: Optional[CollectionElementType] = None
    string: Optional[PrimitiveElementType] = None

    @property
    def kind(self) -> Optional[str]:
        return _first_kind(self, ELEMENT_KINDS)


@dataclass(frozen=True)
class ObjectAttributeType:
    """Named entry of an object's attribute types."""

    name: str
    element_type: ElementType = field(default_factory=ElementType)


# Attribute kinds


@dataclass(frozen=True)
class AttributeBase:
    """Fields shared by every attribute kind."""

    computed_optional_required: Optional[ComputedOptionalRequired] = None
    sensitive: Optional[bool] = None
    description: Optional[str] = None
    deprecation_message: Optional[str] = None
    custom_type: Optional[CustomType] = None
    default: Optional[Default] = None
    validators: Tuple[Validator, ...] = ()
    plan_modifiers: Tuple[PlanModifier, ...] = ()


@dataclass(frozen=True)
class BoolAttribute(AttributeBase):
    pass


@dataclass(frozen=True)
class Float64Attribute(AttributeBase):
    pass


@dataclass(frozen=True)
class Int64Attribute(AttributeBase):
    pass


@dataclass(frozen=True)
class NumberAttribute(AttributeBase):
    pass


@dataclass(frozen=True)
class StringAttribute(AttributeBase):
    pass


@dataclass(frozen=True)
class ListAttribute(AttributeBase):
    element_type: ElementType = field(default_factory=ElementType)


@dataclass(frozen=True)
class MapAttribute(AttributeBase):
    element_type: ElementType = field(default_factory=ElementType)


@dataclass(frozen=True)
class SetAttribute(AttributeBase):
    element_type: ElementType = field(default_factory=ElementType)


@dataclass(frozen=True)
class ObjectAttribute(AttributeBase):
    attribute_types: Tuple[ObjectAttributeType, ...] = ()


@dataclass(frozen=True)
class NestedAttributeObject:
    attributes: Tuple[Attribute, ...] = ()
    custom_type: Optional[CustomType] = None
    associated_external_type: Optional[AssociatedExternalType] = None
    validators: Tuple[Validator, ...] = ()
    plan_modifiers: Tuple[PlanModifier, ...] = ()


@dataclass(frozen=True)
class ListNestedAttribute(AttributeBase):
    nested_object: NestedAttributeObject = field(default_factory=NestedAttributeObject)


@dataclass(frozen=True)
class MapNestedAttribute(AttributeBase):
    nested_object: NestedAttributeObject = field(default_factory=NestedAttributeObject)


@dataclass(frozen=True)
class SetNestedAttribute(AttributeBase):
    nested_object: NestedAttributeObject = field(default_factory=NestedAttributeObject)


@dataclass(frozen=True)
class SingleNestedAttribute(AttributeBase):
    attributes: Tuple[Attribute, ...] = ()
    associated_external_type: Optional[AssociatedExternalType] = None


# Dispatch order used by every converter.
ATTRIBUTE_KINDS = (
    "bool",
    "float64",
    "int64",
    "list",
    "list_nested",
    "map",
    "map_nested",
    "number",
    "object",
    "set",
    "set_nested",
    "single_nested",
    "string",
)


@dataclass(frozen=True)
class Attribute:
    """An attribute node. Exactly one kind field is expected to be set."""

    name: str
    bool: Optional[BoolAttribute] = None
    float64: Optional[Float64Attribute] = None
    int64: Optional[Int64Attribute] = None
    list: Optional[ListAttribute] = None
    list_nested: Optional[ListNestedAttribute] = None
    map: Optional[MapAttribute] = None
    map_nested: Optional[MapNestedAttribute] = None
    number: Optional[NumberAttribute] = None
    object: Optional[ObjectAttribute] = None
    set: Optional[SetAttribute] = None
    set_nested: Optional[SetNestedAttribute] = None
    single_nested: Optional[SingleNestedAttribute] = None
    string: Optional[StringAttribute] = None

    @property
    def kind(self) -> Optional[str]:
        return _first_kind(self, ATTRIBUTE_KINDS)


# Block kinds


@dataclass(frozen=True)
class BlockBase:
    """Fields shared by every block kind."""

    description: Optional[str] = None
    deprecation_message: Optional[str] = None
    custom_type: Optional[CustomType] = None
    validators: Tuple[Validator, ...] = ()
    plan_modifiers: Tuple[PlanModifier, ...] = ()


@dataclass(frozen=True)
class NestedBlockObject:
    attributes: Tuple[Attribute, ...] = ()
    blocks: Tuple[Block, ...] = ()
    custom_type: Optional[CustomType] = None
    associated_external_type: Optional[AssociatedExternalType] = None
    validators: Tuple[Validator, ...] = ()
    plan_modifiers: Tuple[PlanModifier, ...] = ()


@dataclass(frozen=True)
class ListNestedBlock(BlockBase):
    nested_object: NestedBlockObject = field(default_factory=NestedBlockObject)


@dataclass(frozen=True)
class SetNestedBlock(BlockBase):
    nested_object: NestedBlockObject = field(default_factory=NestedBlockObject)


@dataclass(frozen=True)
class SingleNestedBlock(BlockBase):
    attributes: Tuple[Attribute, ...] = ()
    blocks: Tuple[Block, ...] = ()
    associated_external_type: Optional[AssociatedExternalType] = None


BLOCK_KINDS = ("list_nested", "set_nested", "single_nested")


@dataclass(frozen=True)
class Block:
    """A block node. Exactly one kind field is expected to be set."""

    name: str
    list_nested: Optional[ListNestedBlock] = None
    set_nested: Optional[SetNestedBlock] = None
    single_nested: Optional[SingleNestedBlock] = None

    @property
    def kind(self) -> Optional[str]:
        return _first_kind(self, BLOCK_KINDS)


# Documents


@dataclass(frozen=True)
class Schema:
    """Top-level attributes and blocks of a resource or data source."""

    attributes: Tuple[Attribute, ...] = ()
    blocks: Tuple[Block, ...] = ()


@dataclass(frozen=True)
class Resource:
    name: str
    schema: Schema = field(default_factory=Schema)


@dataclass(frozen=True)
class DataSource:
    name: str
    schema: Schema = field(default_factory=Schema)


@dataclass(frozen=True)
class Provider:
    name: str


@dataclass(frozen=True)
class Specification:
    """A parsed provider code specification."""

    provider: Optional[Provider] = None
    resources: Tuple[Resource, ...] = ()
    datasources: Tuple[DataSource, ...] = ()

    def get_resource(self, name: str) -> Optional[Resource]:
        """Get resource by name."""
        for resource in self.resources:
            if resource.name == name:
                return resource
        return None

    def get_datasource(self, name: str) -> Optional[DataSource]:
        """Get data source by name."""
        for datasource in self.datasources:
            if datasource.name == name:
                return datasource
        return None


def _first_kind(node: Any, kinds: Tuple[str, ...]) -> Optional[str]:
    for kind in kinds:
        if getattr(node, kind) is not None:
            return kind
    return None


# Parsing

_ATTRIBUTE_CLASSES = {
    "bool": BoolAttribute,
    "float64": Float64Attribute,
    "int64": Int64Attribute,
    "list": ListAttribute,
    "list_nested": ListNestedAttribute,
    "map": MapAttribute,
    "map_nested": MapNestedAttribute,
    "number": NumberAttribute,
    "object": ObjectAttribute,
    "set": SetAttribute,
    "set_nested": SetNestedAttribute,
    "single_nested": SingleNestedAttribute,
    "string": StringAttribute,
}

_BLOCK_CLASSES = {
    "list_nested": ListNestedBlock,
    "set_nested": SetNestedBlock,
    "single_nested": SingleNestedBlock,
}


def parse_specification(data: Dict[str, Any]) -> Specification:
    """
    Convert a decoded specification document into a Specification tree.

    Args:
        data: Decoded JSON document

    Returns:
        Specification: Immutable typed representation of the document

    Raises:
        SpecificationError: If the document structure is unusable or a name is duplicated
    """
    if not isinstance(data, dict):
        raise SpecificationError(
            f"specification must be a JSON object, got {type(data).__name__}"
        )

    provider = None
    provider_data = data.get("provider")
    if isinstance(provider_data, dict) and provider_data.get("name"):
        provider = Provider(name=provider_data["name"])

    resources = tuple(
        Resource(name=name, schema=schema)
        for name, schema in _parse_named_schemas(data.get("resources"), "resource", True)
    )
    datasources = tuple(
        DataSource(name=name, schema=schema)
        for name, schema in _parse_named_schemas(
            data.get("datasources"), "datasource", False
        )
    )

    specification = Specification(provider=provider, resources=resources, datasources=datasources)
    validate_specification(specification)

    logger.info(
        "Parsed specification: %d resource(s), %d data source(s)",
        len(resources),
        len(datasources),
    )
    return specification


def validate_specification(specification: Specification) -> None:
    """
    Reject duplicated names at every level of a specification.

    Resource and data source names must be unique, as must the attribute
    and block names of every schema and nested object, and the attribute
    type names of every object.

    Raises:
        SpecificationError: Naming the first duplicate found, e.g.
            'resource "example" attribute name "id" is duplicated'
    """
    _check_unique((r.name for r in specification.resources), "resource name")
    _check_unique((d.name for d in specification.datasources), "data source name")

    for resource in specification.resources:
        _validate_schema(resource.schema, f'resource "{resource.name}"')
    for datasource in specification.datasources:
        _validate_schema(datasource.schema, f'data source "{datasource.name}"')


def _check_unique(names, label: str) -> None:
    seen = set()
    for name in names:
        if name in seen:
            raise SpecificationError(f'{label} "{name}" is duplicated')
        seen.add(name)


def _validate_schema(schema: Schema, prefix: str) -> None:
    _validate_attributes(schema.attributes, prefix)
    _validate_blocks(schema.blocks, prefix)


def _validate_attributes(attributes: Tuple[Attribute, ...], prefix: str) -> None:
    _check_unique((a.name for a in attributes), f"{prefix} attribute name")

    for attribute in attributes:
        path = f'{prefix} attribute "{attribute.name}"'
        kind = attribute.kind
        body = getattr(attribute, kind) if kind else None
        if kind in ("list_nested", "map_nested", "set_nested"):
            _validate_attributes(body.nested_object.attributes, path)
        elif kind == "single_nested":
            _validate_attributes(body.attributes, path)
        elif kind == "object":
            _validate_attribute_types(body.attribute_types, path)


def _validate_attribute_types(
    attribute_types: Tuple[ObjectAttributeType, ...], prefix: str
) -> None:
    _check_unique((t.name for t in attribute_types), f"{prefix} object attribute type name")

    for attribute_type in attribute_types:
        if attribute_type.element_type.object is not None:
            _validate_attribute_types(
                attribute_type.element_type.object.attribute_types,
                f'{prefix} object attribute type "{attribute_type.name}"',
            )


def _validate_blocks(blocks: Tuple[Block, ...], prefix: str) -> None:
    _check_unique((b.name for b in blocks), f"{prefix} block name")

    for block in blocks:
        path = f'{prefix} block "{block.name}"'
        kind = block.kind
        if kind in ("list_nested", "set_nested"):
            nested_object = getattr(block, kind).nested_object
            _validate_attributes(nested_object.attributes, path)
            _validate_blocks(nested_object.blocks, path)
        elif kind == "single_nested":
            _validate_attributes(block.single_nested.attributes, path)
            _validate_blocks(block.single_nested.blocks, path)


def _parse_named_schemas(items: Any, label: str, resource: bool):
    for item in _as_list(items, f"{label}s"):
        if not isinstance(item, dict) or not item.get("name"):
            raise SpecificationError(f"{label} without a name: {item!r}")
        schema_data = item.get("schema") or {}
        if not isinstance(schema_data, dict):
            raise SpecificationError(f"{label} {item['name']} schema must be an object")
        logger.debug("Parsing %s %s", label, item["name"])
        yield item["name"], parse_schema(schema_data, resource=resource)


def parse_schema(data: Dict[str, Any], resource: bool = True) -> Schema:
    """
    Parse the attributes and blocks of a single schema.

    Args:
        data: Mapping with optional "attributes" and "blocks" lists
        resource: False for data sources, which carry no defaults or plan modifiers

    Returns:
        Schema: Parsed schema
    """
    return Schema(
        attributes=_parse_attributes(data.get("attributes"), resource),
        blocks=_parse_blocks(data.get("blocks"), resource),
    )


def parse_attribute(data: Dict[str, Any], resource: bool = True) -> Attribute:
    """Parse one attribute node. Unrecognised kind keys are ignored."""
    if not isinstance(data, dict):
        raise SpecificationError(f"attribute must be an object: {data!r}")
    name = data.get("name")
    if not name:
        raise SpecificationError(f"attribute without a name: {data!r}")

    kinds = {}
    for kind, cls in _ATTRIBUTE_CLASSES.items():
        body = data.get(kind)
        if body is None:
            continue
        if not isinstance(body, dict):
            raise SpecificationError(f"attribute {name}: {kind} must be an object")
        kinds[kind] = _parse_attribute_kind(cls, kind, body, resource)

    return Attribute(name=name, **kinds)


def parse_block(data: Dict[str, Any], resource: bool = True) -> Block:
    """Parse one block node. Unrecognised kind keys are ignored."""
    if not isinstance(data, dict):
        raise SpecificationError(f"block must be an object: {data!r}")
    name = data.get("name")
    if not name:
        raise SpecificationError(f"block without a name: {data!r}")

    kinds = {}
    for kind, cls in _BLOCK_CLASSES.items():
        body = data.get(kind)
        if body is None:
            continue
        if not isinstance(body, dict):
            raise SpecificationError(f"block {name}: {kind} must be an object")
        fields = _block_common(body, resource)
        if kind == "single_nested":
            fields["attributes"] = _parse_attributes(body.get("attributes"), resource)
            fields["blocks"] = _parse_blocks(body.get("blocks"), resource)
            fields["associated_external_type"] = _parse_associated_external_type(
                body.get("associated_external_type")
            )
        else:
            fields["nested_object"] = _parse_nested_block_object(
                body.get("nested_object") or {}, resource
            )
        kinds[kind] = cls(**fields)

    return Block(name=name, **kinds)


def parse_element_type(data: Dict[str, Any]) -> ElementType:
    """Parse an element type. An empty mapping yields an empty ElementType."""
    if not isinstance(data, dict):
        raise SpecificationError(f"element type must be an object: {data!r}")

    kinds = {}
    for kind in ELEMENT_KINDS:
        body = data.get(kind)
        if body is None:
            continue
        if not isinstance(body, dict):
            raise SpecificationError(f"element type {kind} must be an object")
        custom_type = _parse_custom_type(body.get("custom_type"))
        if kind in ("list", "map", "set"):
            kinds[kind] = CollectionElementType(
                element_type=parse_element_type(body.get("element_type") or {}),
                custom_type=custom_type,
            )
        elif kind == "object":
            kinds[kind] = ObjectElementType(
                attribute_types=_parse_object_attribute_types(body.get("attribute_types")),
                custom_type=custom_type,
            )
        else:
            kinds[kind] = PrimitiveElementType(custom_type=custom_type)

    return ElementType(**kinds)


def _parse_attribute_kind(cls, kind: str, body: Dict[str, Any], resource: bool):
    fields = _attribute_common(body, resource)

    if kind in ("list", "map", "set"):
        fields["element_type"] = parse_element_type(body.get("element_type") or {})
    elif kind == "object":
        fields["attribute_types"] = _parse_object_attribute_types(
            body.get("attribute_types")
        )
    elif kind in ("list_nested", "map_nested", "set_nested"):
        nested = body.get("nested_object") or {}
        fields["nested_object"] = NestedAttributeObject(
            attributes=_parse_attributes(nested.get("attributes"), resource),
            custom_type=_parse_custom_type(nested.get("custom_type")),
            associated_external_type=_parse_associated_external_type(
                nested.get("associated_external_type")
            ),
            validators=_parse_validators(nested.get("validators")),
            plan_modifiers=(
                _parse_plan_modifiers(nested.get("plan_modifiers")) if resource else ()
            ),
        )
    elif kind == "single_nested":
        fields["attributes"] = _parse_attributes(body.get("attributes"), resource)
        fields["associated_external_type"] = _parse_associated_external_type(
            body.get("associated_external_type")
        )

    return cls(**fields)


def _attribute_common(body: Dict[str, Any], resource: bool) -> Dict[str, Any]:
    fields = {
        "computed_optional_required": _parse_cor(body.get("computed_optional_required")),
        "sensitive": body.get("sensitive"),
        "description": body.get("description"),
        "deprecation_message": body.get("deprecation_message"),
        "custom_type": _parse_custom_type(body.get("custom_type")),
        "validators": _parse_validators(body.get("validators")),
    }
    if resource:
        fields["default"] = _parse_default(body.get("default"))
        fields["plan_modifiers"] = _parse_plan_modifiers(body.get("plan_modifiers"))
    return fields


def _block_common(body: Dict[str, Any], resource: bool) -> Dict[str, Any]:
    fields = {
        "description": body.get("description"),
        "deprecation_message": body.get("deprecation_message"),
        "custom_type": _parse_custom_type(body.get("custom_type")),
        "validators": _parse_validators(body.get("validators")),
    }
    if resource:
        fields["plan_modifiers"] = _parse_plan_modifiers(body.get("plan_modifiers"))
    return fields


def _parse_nested_block_object(data: Dict[str, Any], resource: bool) -> NestedBlockObject:
    return NestedBlockObject(
        attributes=_parse_attributes(data.get("attributes"), resource),
        blocks=_parse_blocks(data.get("blocks"), resource),
        custom_type=_parse_custom_type(data.get("custom_type")),
        associated_external_type=_parse_associated_external_type(
            data.get("associated_external_type")
        ),
        validators=_parse_validators(data.get("validators")),
        plan_modifiers=(
            _parse_plan_modifiers(data.get("plan_modifiers")) if resource else ()
        ),
    )


def _parse_attributes(items: Any, resource: bool) -> Tuple[Attribute, ...]:
    return tuple(parse_attribute(item, resource) for item in _as_list(items, "attributes"))


def _parse_blocks(items: Any, resource: bool) -> Tuple[Block, ...]:
    return tuple(parse_block(item, resource) for item in _as_list(items, "blocks"))


def _parse_object_attribute_types(items: Any) -> Tuple[ObjectAttributeType, ...]:
    attribute_types = []
    for item in _as_list(items, "attribute_types"):
        if not isinstance(item, dict) or not item.get("name"):
            raise SpecificationError(f"object attribute type without a name: {item!r}")
        body = {k: v for k, v in item.items() if k != "name"}
        attribute_types.append(
            ObjectAttributeType(name=item["name"], element_type=parse_element_type(body))
        )
    return tuple(attribute_types)


def _parse_cor(value: Any) -> Optional[ComputedOptionalRequired]:
    if value is None or value == "":
        return None
    try:
        return ComputedOptionalRequired(value)
    except ValueError:
        raise SpecificationError(f"invalid computed_optional_required value: {value!r}")


def _parse_import(data: Any) -> Optional[CodeImport]:
    if data is None:
        return None
    if not isinstance(data, dict):
        raise SpecificationError(f"import must be an object: {data!r}")
    return CodeImport(path=data.get("path") or "", alias=data.get("alias"))


def _parse_custom_type(data: Any) -> Optional[CustomType]:
    if data is None:
        return None
    if not isinstance(data, dict):
        raise SpecificationError(f"custom_type must be an object: {data!r}")
    return CustomType(
        import_=_parse_import(data.get("import")),
        type=data.get("type") or "",
        value_type=data.get("value_type") or "",
    )


def _parse_associated_external_type(data: Any) -> Optional[AssociatedExternalType]:
    if data is None:
        return None
    if not isinstance(data, dict):
        raise SpecificationError(f"associated_external_type must be an object: {data!r}")
    if not data.get("type"):
        raise SpecificationError(f"associated_external_type without a type: {data!r}")
    return AssociatedExternalType(
        import_=_parse_import(data.get("import")), type=data["type"]
    )


def _parse_custom_definition(data: Any) -> Optional[CustomDefinition]:
    if data is None:
        return None
    if not isinstance(data, dict):
        raise SpecificationError(f"custom definition must be an object: {data!r}")
    imports = tuple(
        _parse_import(_entry(item, "import"))
        for item in _as_list(data.get("imports"), "imports")
    )
    return CustomDefinition(
        imports=imports, schema_definition=data.get("schema_definition") or ""
    )


def _parse_default(data: Any) -> Optional[Default]:
    if data is None:
        return None
    if not isinstance(data, dict):
        raise SpecificationError(f"default must be an object: {data!r}")
    return Default(
        static=data.get("static"), custom=_parse_custom_definition(data.get("custom"))
    )


def _parse_validators(items: Any) -> Tuple[Validator, ...]:
    return tuple(
        Validator(custom=_parse_custom_definition(_entry(item, "validator").get("custom")))
        for item in _as_list(items, "validators")
    )


def _parse_plan_modifiers(items: Any) -> Tuple[PlanModifier, ...]:
    return tuple(
        PlanModifier(
            custom=_parse_custom_definition(_entry(item, "plan modifier").get("custom"))
        )
        for item in _as_list(items, "plan_modifiers")
    )


def _as_list(items: Any, label: str) -> List[Any]:
    if items is None:
        return []
    if not isinstance(items, list):
        raise SpecificationError(f"{label} must be a list, got {type(items).__name__}")
    return items


def _entry(item: Any, label: str) -> Dict[str, Any]:
    if not isinstance(item, dict):
        raise SpecificationError(f"{label} must be an object: {item!r}")
    return item

"""
Emission of custom object Type/Value implementations.

Every object-shaped node of a schema (single nested attributes and blocks,
and the element object of list, map and set nested attributes and blocks)
gets a companion ``<Name>Type`` and ``<Name>Value`` pair implementing the
framework's ObjectTypable and ObjectValuable interfaces. Objects with an
associated external type additionally get To<Type> and From<Type> methods
converting the Value to and from that Go type.
"""

from typing import Any, Dict, Iterator, List, Optional, Tuple

from ...logging_config import get_logger
from ..core.generator import GeneratorError
from ..core.imports import MATH_BIG_IMPORT, OBJECT_VALUE_IMPORTS, ImportSet
from ..core.naming import FrameworkIdentifier
from ..core.schema import AssociatedExternalType
from .base import render
from .nested import ObjectShaped

logger = get_logger(__name__)

# Methods generated on every Value; struct fields must not shadow them
GENERATED_METHOD_NAMES = frozenset(
    {
        "AttributeTypes",
        "Equal",
        "IsNull",
        "IsUnknown",
        "String",
        "ToObjectValue",
        "ToTerraformValue",
        "Type",
    }
)

_NESTED_COLLECTIONS = {
    "ListNested": "List",
    "MapNested": "Map",
    "SetNested": "Set",
}

TYPE_SECTIONS = (
    "typable",
    "type",
    "equal",
    "string",
    "value_from_object",
    "value_null",
    "value_unknown",
    "value",
    "value_must",
    "value_from_terraform",
    "value_type",
)

VALUE_SECTIONS = (
    "valuable",
    "value",
    "to_terraform_value",
    "is_null",
    "is_unknown",
    "string",
    "to_object_value",
    "equal",
    "type",
    "attribute_types",
)


def field_name(object_name: str, attribute_name: str) -> str:
    """
    Go struct field name of an attribute inside an object Value.

    Names colliding with a generated method are prefixed with the object
    name, e.g. attribute "type" of object "example" becomes ExampleType.
    """
    pascal = FrameworkIdentifier(attribute_name).to_pascal_case()
    if pascal in GENERATED_METHOD_NAMES:
        return FrameworkIdentifier(object_name).to_pascal_case() + pascal
    return pascal


def _camel(value: str) -> str:
    return value[:1].lower() + value[1:]


class CustomObjectType:
    """Renders the ``<Name>Type`` half of a custom object."""

    def __init__(self, name: str, attr_values: Optional[Dict[str, str]] = None):
        self.name = FrameworkIdentifier(name)
        self.attr_values = dict(attr_values or {})

    def _attributes(self) -> List[Dict[str, str]]:
        return [
            {
                "name": attribute_name,
                "camel": FrameworkIdentifier(attribute_name).to_camel_case(),
                "field": field_name(self.name.to_string(), attribute_name),
                "value": self.attr_values[attribute_name],
            }
            for attribute_name in sorted(self.attr_values)
        ]

    def render_section(self, section: str) -> str:
        name = self.name.to_pascal_case()
        missing_return = "nil" if section == "value_from_object" else f"New{name}ValueUnknown()"
        return render(
            f"object_type/{section}.go.j2",
            name=name,
            attributes=self._attributes(),
            missing_return=missing_return,
        )

    def render(self) -> str:
        return "".join("\n" + self.render_section(section) for section in TYPE_SECTIONS)


class CustomObjectValue:
    """Renders the ``<Name>Value`` half of a custom object."""

    def __init__(
        self,
        name: str,
        attribute_kinds: Optional[Dict[str, str]] = None,
        attr_types: Optional[Dict[str, str]] = None,
        attr_values: Optional[Dict[str, str]] = None,
        collection_types: Optional[Dict[str, Dict[str, str]]] = None,
    ):
        self.name = FrameworkIdentifier(name)
        self.attribute_kinds = dict(attribute_kinds or {})
        self.attr_types = dict(attr_types or {})
        self.attr_values = dict(attr_values or {})
        self.collection_types = dict(collection_types or {})

    def _attribute_names(self) -> List[str]:
        names = set(self.attribute_kinds) | set(self.attr_types) | set(self.attr_values)
        return sorted(names)

    def _attribute(self, attribute_name: str) -> Dict[str, Any]:
        field = field_name(self.name.to_string(), attribute_name)
        kind = self.attribute_kinds.get(attribute_name, "")
        collection = self.collection_types.get(attribute_name)
        nested = kind in _NESTED_COLLECTIONS or kind == "SingleNested"

        local = _camel(field)
        if not nested:
            local += "Val"

        object_type = self.attr_types.get(attribute_name, "")
        if kind == "Object":
            object_type = f"basetypes.ObjectType{{\nAttrTypes: v.{field}.AttributeTypes(ctx),\n}}"

        if nested or collection or kind == "Object":
            object_value = local
        else:
            object_value = f"v.{field}"

        return {
            "name": attribute_name,
            "field": field,
            "pascal": FrameworkIdentifier(attribute_name).to_pascal_case(),
            "kind": kind,
            "nested": nested,
            "collection_kind": _NESTED_COLLECTIONS.get(kind, ""),
            "collection": collection,
            "local": local,
            "type": self.attr_types.get(attribute_name, ""),
            "value": self.attr_values.get(attribute_name, ""),
            "object_type": object_type,
            "object_value": object_value,
        }

    def render_section(self, section: str) -> str:
        return render(
            f"object_value/{section}.go.j2",
            name=self.name.to_pascal_case(),
            attributes=[self._attribute(n) for n in self._attribute_names()],
        )

    def render(self) -> str:
        return "".join("\n" + self.render_section(section) for section in VALUE_SECTIONS)


# Conversions of primitive fields: (framework value to Go, Go to framework value)
_PRIMITIVE_CONVERSIONS = {
    "Bool": ("ValueBoolPointer", "BoolPointerValue"),
    "Float64": ("ValueFloat64Pointer", "Float64PointerValue"),
    "Int64": ("ValueInt64Pointer", "Int64PointerValue"),
    "Number": ("ValueBigFloat", "NumberValue"),
    "String": ("ValueStringPointer", "StringPointerValue"),
}

_ELEMENT_GO_TYPES = {
    "bool": "*bool",
    "float64": "*float64",
    "int64": "*int64",
    "number": "*big.Float",
    "string": "*string",
}


class UnsupportedConversionError(GeneratorError):
    """A child attribute cannot be converted to or from an associated external type."""

    def __init__(self, message: str, path: str = ""):
        self.path = path
        super().__init__(f"{path}: {message}" if path else message)


def element_go_type(child: Any) -> str:
    """
    Go element type of a collection attribute converted to an external type.

    Raises:
        UnsupportedConversionError: For element types other than primitives
    """
    element_type = child.element_type
    kind = element_type.kind
    if kind not in _ELEMENT_GO_TYPES:
        raise UnsupportedConversionError(f"{kind} element type is not yet implemented")
    if getattr(element_type, kind).custom_type is not None:
        raise UnsupportedConversionError("custom element type is not yet implemented")
    return _ELEMENT_GO_TYPES[kind]


class ExternalTypeMethods:
    """
    Renders the To<Type> and From<Type> methods of an object Value.

    The methods convert between the object Value and the Go struct named by
    the object's associated external type. Primitive fields convert through
    pointer values, list, map and set fields through their elements.
    """

    def __init__(
        self, name: str, external_type: AssociatedExternalType, children: Dict[str, Any]
    ):
        self.name = FrameworkIdentifier(name)
        self.external_type = external_type
        self.children = dict(children)

    def _attribute(self, attribute_name: str) -> Dict[str, Any]:
        child = self.children[attribute_name]
        kind = child.attribute_kind
        identifier = FrameworkIdentifier(attribute_name)
        attribute = {
            "name": attribute_name,
            "field": field_name(self.name.to_string(), attribute_name),
            "pascal": identifier.to_pascal_case(),
            "camel": identifier.to_camel_case(),
            "collection": False,
        }

        if kind in _PRIMITIVE_CONVERSIONS:
            attribute["to_func"], attribute["from_func"] = _PRIMITIVE_CONVERSIONS[kind]
        elif kind in ("List", "Map", "Set"):
            try:
                element_type = element_go_type(child)
            except UnsupportedConversionError as e:
                raise UnsupportedConversionError(str(e), attribute_name) from e
            attribute["collection"] = True
            attribute["go_type"] = (
                f"map[string]{element_type}" if kind == "Map" else f"[]{element_type}"
            )
            attribute["element_type"] = child.collection_type()["ElementType"]
            attribute["value_from"] = f"types.{kind}ValueFrom"
        else:
            raise UnsupportedConversionError(
                f"{kind or type(child).__name__} type is not yet implemented", attribute_name
            )
        return attribute

    def _context(self) -> Dict[str, Any]:
        return {
            "name": self.name.to_pascal_case(),
            "method": self.external_type.to_pascal_case(),
            "external_type": self.external_type.type,
            "type_reference": self.external_type.type_reference(),
            "attributes": [self._attribute(n) for n in sorted(self.children)],
        }

    def imports(self) -> ImportSet:
        """Packages the methods need beyond those of object values."""
        imports = ImportSet()
        for attribute in self._context()["attributes"]:
            if "big.Float" in attribute.get("go_type", ""):
                imports.add(MATH_BIG_IMPORT)
        return imports

    def render(self) -> str:
        """
        Render both methods, each preceded by a blank line.

        Raises:
            UnsupportedConversionError: If a child has no conversion
        """
        context = self._context()
        to_method = render("object_value/to_external_type.go.j2", **context)
        from_method = render("object_value/from_external_type.go.j2", **context)
        return "\n\n" + to_method + "\n" + from_method


def object_type_and_value(name: str, children: Dict[str, Any]) -> str:
    """Render the Type and Value of one object from its child generator nodes."""
    attribute_kinds = {}
    attr_types = {}
    attr_values = {}
    collection_types = {}

    for child_name, child in children.items():
        attribute_kinds[child_name] = child.attribute_kind
        attr_types[child_name] = child.attr_type(child_name)
        attr_values[child_name] = child.attr_value(child_name)
        collection_type = child.collection_type()
        if collection_type is not None:
            collection_types[child_name] = collection_type

    object_type = CustomObjectType(name, attr_values)
    object_value = CustomObjectValue(
        name, attribute_kinds, attr_types, attr_values, collection_types
    )
    return object_type.render() + "\n" + object_value.render()


def iter_object_nodes(nodes: Dict[str, Any]) -> Iterator[Tuple[str, Any]]:
    """Yield object-shaped nodes keyed by name, parents before their children."""
    for name in sorted(nodes):
        node = nodes[name]
        if not isinstance(node, ObjectShaped):
            continue
        yield name, node
        yield from iter_object_nodes(node.object_children())


def external_type_methods(name: str, node: ObjectShaped) -> Optional[ExternalTypeMethods]:
    """To/From methods of a node with an associated external type, else None."""
    external_type = node.external_type()
    if external_type is None:
        return None
    return ExternalTypeMethods(name, external_type, node.object_children())


def collect_object_types(nodes: Dict[str, Any]) -> List[str]:
    """
    Render Type/Value pairs for every object-shaped node, depth first.

    Objects with an associated external type also get To/From methods.
    When a child has no conversion the methods are skipped and the error
    is logged; the Type/Value pair is still rendered.

    Args:
        nodes: Generator attributes and blocks keyed by name

    Returns:
        Rendered code per object, parents before their children
    """
    rendered = []
    for name, node in iter_object_nodes(nodes):
        logger.debug("Rendering object value type for %s", name)
        code = object_type_and_value(name, node.object_children())
        methods = external_type_methods(name, node)
        if methods is not None:
            try:
                code += methods.render()
            except UnsupportedConversionError as e:
                logger.error("error generating to/from methods for %s.%s", name, e)
        rendered.append(code)
    return rendered


def object_value_imports(nodes: Optional[Dict[str, Any]] = None) -> ImportSet:
    """
    Imports required by rendered object Type/Value implementations.

    Args:
        nodes: Generator attributes and blocks whose To/From methods are rendered too
    """
    imports = ImportSet(OBJECT_VALUE_IMPORTS)
    for name, node in iter_object_nodes(nodes or {}):
        methods = external_type_methods(name, node)
        if methods is None:
            continue
        try:
            imports.append(methods.imports())
        except UnsupportedConversionError:
            continue
    return imports

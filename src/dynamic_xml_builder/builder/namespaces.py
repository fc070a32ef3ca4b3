"""Namespace promotion for attribute bags.

An attribute named ``xmlns`` is not kept as an attribute: its value becomes
the namespace of the element that owns the bag. Other attributes are copied
in bag order. Prefixed declarations such as ``xmlns:atom`` are ordinary
attributes here.
"""

from typing import List, Optional, Tuple

from dynamic_xml_builder.tree.nodes import XMLElement, check_xml_name

from .arguments import AttributeFields, to_xml_string

XMLNS_ATTRIBUTE = "xmlns"

PreparedAttributes = List[Tuple[str, Optional[str]]]


def is_namespace_declaration(name: str) -> bool:
    """Check whether name is the default-namespace declaration attribute."""
    return name == XMLNS_ATTRIBUTE


def prepare_attributes(
    fields: AttributeFields, validate_names: bool = True
) -> PreparedAttributes:
    """Validate names and stringify values before any node is created.

    Values of None are kept as None and skipped when applied.

    Raises:
        InvalidArgument: If validate_names is set and a name is not an XML name
    """
    prepared: PreparedAttributes = []
    for name, value in fields:
        if validate_names:
            check_xml_name(name, "attributes")
        prepared.append((name, None if value is None else to_xml_string(value)))
    return prepared


def apply_attributes(element: XMLElement, attributes: PreparedAttributes) -> None:
    """Copy attributes onto element, promoting ``xmlns`` to its namespace."""
    for name, value in attributes:
        if value is None:
            continue
        if is_namespace_declaration(name):
            element.name = element.name.in_namespace(value)
        else:
            element.set_attribute(name, value)


"""Node-building engine of the dynamic XML builder.

Key Components:
    Xml: Builder turning dynamically named calls into elements
    BuilderContext: Stack of containers receiving new nodes
    classify_arguments: Splits call arguments into content, attributes and fragment
    apply_attributes: Copies attributes onto an element, promoting ``xmlns``
"""

from .arguments import (
    ClassifiedArguments,
    attribute_fields,
    callback_arity,
    classify_arguments,
    is_scalar,
    to_xml_string,
)
from .context import BuilderContext
from .engine import Xml
from .namespaces import (
    XMLNS_ATTRIBUTE,
    apply_attributes,
    is_namespace_declaration,
    prepare_attributes,
)

__all__ = [
    "ClassifiedArguments",
    "attribute_fields",
    "callback_arity",
    "classify_arguments",
    "is_scalar",
    "to_xml_string",
    "BuilderContext",
    "Xml",
    "XMLNS_ATTRIBUTE",
    "apply_attributes",
    "is_namespace_declaration",
    "prepare_attributes",
]

"""Document tree for the dynamic XML builder.

Key Components:
    XMLDocument: Root container with declaration, doctype and root element
    XMLElement: Element with qualified name, attributes and mixed content
    XMLText, XMLCData, XMLComment: Leaf content nodes
    XMLDocumentType, XMLDeclaration: Document prolog information
    XMLTreeReader: Reads markup text back into an XMLDocument
"""

from .nodes import (
    QualifiedName,
    XMLCData,
    XMLComment,
    XMLContainer,
    XMLDeclaration,
    XMLDocument,
    XMLDocumentType,
    XMLElement,
    XMLNode,
    XMLText,
    check_xml_name,
    is_xml_name,
)
from .reader import XMLTreeReader, read_document

__all__ = [
    "QualifiedName",
    "XMLCData",
    "XMLComment",
    "XMLContainer",
    "XMLDeclaration",
    "XMLDocument",
    "XMLDocumentType",
    "XMLElement",
    "XMLNode",
    "XMLText",
    "check_xml_name",
    "is_xml_name",
    "XMLTreeReader",
    "read_document",
]

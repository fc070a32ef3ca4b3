"""Conversion of a built document into other XML tree libraries.

Each export renders the document without indentation and loads the markup
with the target library, so the result is an independent tree that can be
queried or modified without touching the builder.

Because the markup never undeclares a default namespace, a child built without
a namespace inside a namespaced parent comes back in the parent's namespace
in every export, while the builder's own tree (``Xml.to_element``) keeps it
un-namespaced.
"""

from typing import Optional
from xml.dom import minidom
from xml.etree import ElementTree

from lxml import etree

from dynamic_xml_builder.tree.nodes import XMLDocument

from .writer import UTF16, XMLWriter, select_encoding

# libxml2 names of the output encodings
_LXML_ENCODINGS = {
    "utf-8": "UTF-8",
    UTF16: "UTF-16LE",
}


def to_lxml(document: XMLDocument, writer: XMLWriter) -> Optional[etree._ElementTree]:
    """Load the document into an lxml element tree, None without a root element.

    The parser is told the encoding actually written, since the declaration
    may name an encoding other than the one used for output.
    """
    if document.root is None:
        return None
    parser = etree.XMLParser(
        encoding=_LXML_ENCODINGS[select_encoding(document.declaration)],
        strip_cdata=False,
        resolve_entities=False,
        remove_blank_text=False,
    )
    root = etree.fromstring(writer.render_bytes(document), parser)
    return root.getroottree()


def to_lxml_element(document: XMLDocument, writer: XMLWriter) -> Optional[etree._Element]:
    tree = to_lxml(document, writer)
    return tree.getroot() if tree is not None else None


def to_lxml_node(document: XMLDocument, writer: XMLWriter) -> Optional[etree._Element]:
    """First top-level node of the lxml tree; comments before the root count."""
    node = to_lxml_element(document, writer)
    if node is None:
        return None
    while node.getprevious() is not None:
        node = node.getprevious()
    return node


def to_etree(
    document: XMLDocument, writer: XMLWriter
) -> Optional[ElementTree.ElementTree]:
    """Load the document into the standard library ElementTree.

    ElementTree keeps comments inside the root element but has no place for
    the doctype or for nodes outside the root.
    """
    root = to_etree_element(document, writer)
    return ElementTree.ElementTree(root) if root is not None else None


def to_etree_element(
    document: XMLDocument, writer: XMLWriter
) -> Optional[ElementTree.Element]:
    if document.root is None:
        return None
    parser = ElementTree.XMLParser(
        target=ElementTree.TreeBuilder(insert_comments=True)
    )
    return ElementTree.fromstring(writer.render(document), parser=parser)


def to_minidom(document: XMLDocument, writer: XMLWriter) -> minidom.Document:
    """Load the document into a DOM; an empty document yields an empty DOM."""
    if document.root is None:
        return minidom.getDOMImplementation().createDocument(None, None, None)
    return minidom.parseString(writer.render(document))


def to_minidom_node(document: XMLDocument, writer: XMLWriter) -> Optional[minidom.Node]:
    """First child of the DOM document other than its document type."""
    dom = to_minidom(document, writer)
    for child in dom.childNodes:
        if child.nodeType != child.DOCUMENT_TYPE_NODE:
            return child
    return None


def to_minidom_element(
    document: XMLDocument, writer: XMLWriter
) -> Optional[minidom.Element]:
    return to_minidom(document, writer).documentElement

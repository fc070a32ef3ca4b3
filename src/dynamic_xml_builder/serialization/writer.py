"""Rendering of a document tree to markup text.

The writer follows the rules of an indenting XML writer:

* without indentation nothing is inserted between nodes;
* with indentation, elements, comments and doctypes start on a new line
  indented one step per nesting level, unless they are the very first output
  or sit in mixed content;
* once text or CDATA is written inside an element, indentation is suspended
  until that element is closed;
* the declaration is only written when one was set on the document.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional

from dynamic_xml_builder.shared.config import SerializationConfig
from dynamic_xml_builder.shared.logging import get_logger
from dynamic_xml_builder.tree.nodes import (
    XMLCData,
    XMLComment,
    XMLDeclaration,
    XMLDocument,
    XMLDocumentType,
    XMLElement,
    XMLNode,
    XMLText,
)

UTF8 = "utf-8"
UTF16 = "utf-16"

# Python codecs for the two output encodings; neither writes a byte order mark
CODECS: Dict[str, str] = {
    UTF8: "utf-8",
    UTF16: "utf-16-le",
}

_TEXT_ESCAPES = str.maketrans({
    "&": "&amp;",
    "<": "&lt;",
    ">": "&gt;",
    "\r": "&#xD;",
})

_ATTRIBUTE_ESCAPES = str.maketrans({
    "&": "&amp;",
    "<": "&lt;",
    ">": "&gt;",
    '"': "&quot;",
    "\t": "&#x9;",
    "\n": "&#xA;",
    "\r": "&#xD;",
})


def escape_text(value: str) -> str:
    return value.translate(_TEXT_ESCAPES)


def escape_attribute(value: str) -> str:
    return value.translate(_ATTRIBUTE_ESCAPES)


def select_encoding(declaration: Optional[XMLDeclaration]) -> str:
    """Pick the output encoding for a document.

    Only a declared ``utf-16`` (any case) switches away from UTF-8; every
    other declared value is echoed in the declaration but written as UTF-8.
    """
    if (
        declaration is not None
        and declaration.encoding
        and declaration.encoding.lower() == UTF16
    ):
        return UTF16
    return UTF8


@dataclass
class _Output:
    """Mutable state of one render pass."""

    indent: bool
    indent_chars: str
    newline: str
    parts: List[str] = field(default_factory=list)
    level: int = 0
    mixed: bool = False

    def write(self, text: str) -> None:
        self.parts.append(text)

    def break_line(self) -> None:
        if self.indent and not self.mixed and self.parts:
            self.parts.append(self.newline + self.indent_chars * self.level)


class XMLWriter:
    """Serializer turning an XMLDocument into markup text or bytes."""

    def __init__(
        self,
        config: Optional[SerializationConfig] = None,
        correlation_id: Optional[str] = None,
    ) -> None:
        self.config = config or SerializationConfig()
        self.logger = get_logger(__name__, correlation_id, "writer")

    def render(self, document: XMLDocument, indent: bool = False) -> str:
        """Render document to text.

        Args:
            document: Document to render
            indent: Put block content on separate, indented lines

        Returns:
            Markup text, starting with the declaration when one is set
        """
        out = _Output(indent, self.config.indent_chars, self.config.newline)

        if document.declaration is not None:
            out.write(self._declaration(document.declaration))

        for child in document.children:
            self._write_node(out, child, None)

        text = "".join(out.parts)
        self.logger.debug(
            "Rendered document",
            extra={
                "indent": indent,
                "length": len(text),
                "encoding": select_encoding(document.declaration),
            },
        )
        return text

    def render_bytes(self, document: XMLDocument, indent: bool = False) -> bytes:
        """Render document and encode it with the selected output encoding."""
        codec = CODECS[select_encoding(document.declaration)]
        return self.render(document, indent).encode(codec)

    def _declaration(self, declaration: XMLDeclaration) -> str:
        version = declaration.effective_version(self.config.default_version)
        encoding = declaration.effective_encoding(self.config.default_encoding)
        text = f'<?xml version="{escape_attribute(version)}" encoding="{escape_attribute(encoding)}"'
        if declaration.standalone is not None:
            text += f' standalone="{escape_attribute(declaration.standalone)}"'
        return text + "?>"

    def _write_node(self, out: _Output, node: XMLNode, scope: Optional[str]) -> None:
        if isinstance(node, XMLElement):
            self._write_element(out, node, scope)
        elif isinstance(node, XMLText):
            out.mixed = True
            out.write(escape_text(node.value))
        elif isinstance(node, XMLCData):
            out.mixed = True
            out.write("<![CDATA[" + node.value.replace("]]>", "]]]]><![CDATA[>") + "]]>")
        elif isinstance(node, XMLComment):
            out.break_line()
            out.write(f"<!--{node.value}-->")
        elif isinstance(node, XMLDocumentType):
            out.break_line()
            out.write(self._doctype(node))
        else:
            raise TypeError(f"Cannot render node of type {type(node).__name__}")

    def _write_element(
        self, out: _Output, element: XMLElement, scope: Optional[str]
    ) -> None:
        name = element.local_name
        out.break_line()
        out.write("<" + name)
        for attr_name, value in element.attributes.items():
            out.write(f' {attr_name}="{escape_attribute(value)}"')

        # un-namespaced elements never undeclare the default namespace
        if element.namespace and element.namespace != scope:
            out.write(f' xmlns="{escape_attribute(element.namespace)}"')
            scope = element.namespace

        if element.is_empty:
            out.write(" />")
            return

        out.write(">")
        outer_mixed = out.mixed
        out.level += 1
        for child in element.children:
            self._write_node(out, child, scope)
        out.level -= 1
        out.break_line()
        out.write(f"</{name}>")
        out.mixed = outer_mixed

    @staticmethod
    def _doctype(doctype: XMLDocumentType) -> str:
        text = "<!DOCTYPE " + doctype.name
        if doctype.public_id is not None:
            text += f' PUBLIC "{doctype.public_id}" "{doctype.system_id or ""}"'
        elif doctype.system_id is not None:
            text += f' SYSTEM "{doctype.system_id}"'
        if doctype.internal_subset is not None:
            text += f"[{doctype.internal_subset}]"
        return text + ">"

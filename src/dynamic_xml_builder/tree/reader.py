"""Reading markup text back into a document tree.

The reader drives the expat parser bundled with Python and keeps what the
tree can represent: the declaration, the doctype, elements with ordered
attributes, text, CDATA sections and comments. Processing instructions are
dropped. Default namespaces are resolved with normal XML scoping, so an
element inherits the default namespace of its parent unless it declares
its own (``xmlns=""`` clears it).
"""

from pathlib import Path
from typing import List, Optional, Union
from xml.parsers import expat

from dynamic_xml_builder.shared.errors import MarkupParseError
from dynamic_xml_builder.shared.logging import get_logger

from .nodes import (
    QualifiedName,
    XMLCData,
    XMLComment,
    XMLContainer,
    XMLDeclaration,
    XMLDocument,
    XMLDocumentType,
    XMLElement,
    XMLText,
)

_STANDALONE = {-1: None, 0: "no", 1: "yes"}


class XMLTreeReader:
    """Single-use reader turning markup into an XMLDocument."""

    def __init__(self, correlation_id: Optional[str] = None) -> None:
        self.logger = get_logger(__name__, correlation_id, "reader")
        self._document = XMLDocument()
        self._open: List[XMLContainer] = [self._document]
        self._namespaces: List[Optional[str]] = [None]
        self._doctype: Optional[XMLDocumentType] = None
        self._subset: Optional[List[str]] = None
        self._cdata: Optional[List[str]] = None

    def read(self, markup: Union[str, bytes]) -> XMLDocument:
        """Parse markup and return the populated document.

        Raises:
            MarkupParseError: If the markup is not well-formed
        """
        parser = expat.ParserCreate()
        parser.ordered_attributes = True
        # ATTLIST defaults from the internal subset are not document attributes
        parser.specified_attributes = True
        parser.buffer_text = True
        parser.XmlDeclHandler = self._on_declaration
        parser.StartDoctypeDeclHandler = self._on_start_doctype
        parser.EndDoctypeDeclHandler = self._on_end_doctype
        parser.DefaultHandlerExpand = self._on_default
        parser.StartElementHandler = self._on_start_element
        parser.EndElementHandler = self._on_end_element
        parser.CharacterDataHandler = self._on_characters
        parser.CommentHandler = self._on_comment
        parser.StartCdataSectionHandler = self._on_start_cdata
        parser.EndCdataSectionHandler = self._on_end_cdata

        try:
            parser.Parse(markup, True)
        except expat.ExpatError as e:
            self.logger.error(
                "Markup could not be read",
                extra={"line": e.lineno, "column": e.offset},
                exc_info=False,
            )
            raise MarkupParseError(
                expat.errors.messages[e.code], line=e.lineno, column=e.offset
            ) from e

        if self._document.root is None:
            raise MarkupParseError("Markup contains no root element")
        return self._document

    @property
    def _current(self) -> XMLContainer:
        return self._open[-1]

    def _on_declaration(
        self, version: Optional[str], encoding: Optional[str], standalone: int
    ) -> None:
        self._document.declaration = XMLDeclaration(
            version, encoding, _STANDALONE[standalone]
        )

    def _on_start_doctype(
        self,
        name: str,
        system_id: Optional[str],
        public_id: Optional[str],
        has_internal_subset: int,
    ) -> None:
        self._doctype = XMLDocumentType(name, public_id, system_id)
        self._subset = [] if has_internal_subset else None

    def _on_default(self, data: str) -> None:
        if self._subset is not None:
            self._subset.append(data)

    def _on_end_doctype(self) -> None:
        if self._doctype is None:
            return
        if self._subset is not None:
            self._doctype.internal_subset = "".join(self._subset)
        self._document.append(self._doctype)
        self._doctype = None
        self._subset = None

    def _on_start_element(self, name: str, attributes: List[str]) -> None:
        element = XMLElement(QualifiedName(name))
        namespace = self._namespaces[-1]
        for index in range(0, len(attributes), 2):
            attr_name, value = attributes[index], attributes[index + 1]
            if attr_name == "xmlns":
                namespace = value or None
            else:
                element.attributes[attr_name] = value
        element.name = element.name.in_namespace(namespace)

        self._current.append(element)
        self._open.append(element)
        self._namespaces.append(namespace)

    def _on_end_element(self, name: str) -> None:
        self._open.pop()
        self._namespaces.pop()

    def _on_characters(self, data: str) -> None:
        if self._cdata is not None:
            self._cdata.append(data)
            return
        if self._current is self._document:
            return
        children = self._current.children
        if children and isinstance(children[-1], XMLText):
            children[-1].value += data
        else:
            self._current.append(XMLText(data))

    def _on_comment(self, data: str) -> None:
        if self._subset is not None:
            self._subset.append(f"<!--{data}-->")
            return
        self._current.append(XMLComment(data))

    def _on_start_cdata(self) -> None:
        self._cdata = []

    def _on_end_cdata(self) -> None:
        data = "".join(self._cdata or [])
        self._cdata = None
        if data:
            self._current.append(XMLCData(data))


def read_document(
    source: Union[str, bytes, Path], correlation_id: Optional[str] = None
) -> XMLDocument:
    """Read markup text, bytes or a file path into an XMLDocument."""
    if isinstance(source, Path):
        source = source.read_bytes()
    return XMLTreeReader(correlation_id).read(source)

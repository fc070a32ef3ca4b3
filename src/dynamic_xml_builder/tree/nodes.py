"""Document tree model populated by the builder.

The tree mirrors the node kinds of a markup document: a document root holding
an optional declaration, an optional doctype and one root element; elements
holding ordered attributes and ordered mixed content (elements, text, CDATA,
comments).
"""

import re
from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, Optional

from dynamic_xml_builder.shared.errors import DocumentStructureError, InvalidArgument

# NameStartChar / NameChar productions of the XML 1.0 (fifth edition) grammar
_NAME_START = (
    ":A-Z_a-z\u00c0-\u00d6\u00d8-\u00f6\u00f8-\u02ff\u0370-\u037d"
    "\u037f-\u1fff\u200c-\u200d\u2070-\u218f\u2c00-\u2fef\u3001-\ud7ff"
    "\uf900-\ufdcf\ufdf0-\ufffd\U00010000-\U000effff"
)
_NAME_CHAR = _NAME_START + "\\-.0-9\u00b7\u0300-\u036f\u203f-\u2040"
_XML_NAME = re.compile(f"[{_NAME_START}][{_NAME_CHAR}]*")


def is_xml_name(name: str) -> bool:
    """Check whether name matches the XML Name production."""
    return bool(_XML_NAME.fullmatch(name))


def check_xml_name(name: str, argument: str) -> str:
    """Return name unchanged, raising InvalidArgument when it is not an XML name."""
    if not is_xml_name(name):
        raise InvalidArgument(f"{name!r} is not a valid XML name", argument=argument)
    return name


@dataclass(frozen=True)
class QualifiedName:
    """Element name made of a local name and an optional namespace URI."""

    local_name: str
    namespace: Optional[str] = None

    def __post_init__(self) -> None:
        if not self.local_name:
            raise ValueError("Local name cannot be empty")

    def __str__(self) -> str:
        if self.namespace:
            return f"{{{self.namespace}}}{self.local_name}"
        return self.local_name

    def in_namespace(self, namespace: Optional[str]) -> "QualifiedName":
        """Return the same local name placed in namespace (None or "" for no namespace)."""
        return QualifiedName(self.local_name, namespace or None)

    @classmethod
    def parse(cls, text: str) -> "QualifiedName":
        """Parse a plain or ``{namespace}local`` (Clark notation) name."""
        if text.startswith("{"):
            namespace, _, local_name = text[1:].partition("}")
            return cls(local_name, namespace or None)
        return cls(text)


class XMLNode:
    """Base class for every node that can sit inside a container."""

    parent: Optional["XMLContainer"] = None
    node_type = "node"

    def get_depth(self) -> int:
        """Number of element ancestors (nodes directly under the document are 0)."""
        depth = 0
        ancestor = self.parent
        while isinstance(ancestor, XMLElement):
            depth += 1
            ancestor = ancestor.parent
        return depth

    def to_dict(self) -> Dict[str, Any]:
        raise NotImplementedError


@dataclass(eq=False)
class XMLText(XMLNode):
    """Character data that is escaped on output."""

    value: str
    node_type = "text"

    def to_dict(self) -> Dict[str, Any]:
        return {"type": self.node_type, "value": self.value}


@dataclass(eq=False)
class XMLCData(XMLNode):
    """Character data written verbatim inside a CDATA section."""

    value: str
    node_type = "cdata"

    def to_dict(self) -> Dict[str, Any]:
        return {"type": self.node_type, "value": self.value}


@dataclass(eq=False)
class XMLComment(XMLNode):
    """Markup comment.

    Comment text may not contain ``--`` nor end with ``-``; both would make
    the rendered comment malformed.
    """

    value: str
    node_type = "comment"

    def __post_init__(self) -> None:
        if "--" in self.value or self.value.endswith("-"):
            raise InvalidArgument(
                "Comment text cannot contain '--' or end with '-'", argument="text"
            )

    def to_dict(self) -> Dict[str, Any]:
        return {"type": self.node_type, "value": self.value}


@dataclass(eq=False)
class XMLDocumentType(XMLNode):
    """Document type declaration placed before the root element."""

    name: str
    public_id: Optional[str] = None
    system_id: Optional[str] = None
    internal_subset: Optional[str] = None
    node_type = "doctype"

    def to_dict(self) -> Dict[str, Any]:
        result: Dict[str, Any] = {"type": self.node_type, "name": self.name}
        for key in ("public_id", "system_id", "internal_subset"):
            value = getattr(self, key)
            if value is not None:
                result[key] = value
        return result


@dataclass
class XMLDeclaration:
    """XML declaration as recorded; unset fields are defaulted when rendered."""

    version: Optional[str] = None
    encoding: Optional[str] = None
    standalone: Optional[str] = None

    def effective_version(self, default: str = "1.0") -> str:
        return self.version or default

    def effective_encoding(self, default: str = "utf-8") -> str:
        return self.encoding or default

    def to_dict(self) -> Dict[str, Any]:
        return {
            "version": self.version,
            "encoding": self.encoding,
            "standalone": self.standalone,
        }


class XMLContainer:
    """Shared child management for documents and elements."""

    children: List[XMLNode]

    def append(self, node: XMLNode) -> XMLNode:
        """Attach node as the last child and set its parent.

        Raises:
            TypeError: If node is not a tree node
            DocumentStructureError: If the node is not allowed at this position
        """
        if not isinstance(node, XMLNode):
            raise TypeError("Child must be an XMLNode instance")
        self._check_child(node)
        node.parent = self
        self.children.append(node)
        return node

    def _check_child(self, node: XMLNode) -> None:
        """Hook for containers that restrict their children."""

    def elements(self) -> Iterator["XMLElement"]:
        """Iterate over direct child elements."""
        return (child for child in self.children if isinstance(child, XMLElement))

    def iter_elements(self) -> Iterator["XMLElement"]:
        """Iterate over descendant elements in document order."""
        for child in self.elements():
            yield child
            yield from child.iter_elements()

    def find(self, tag: str) -> Optional["XMLElement"]:
        """Find the first descendant element whose tag or local name equals tag."""
        return next((el for el in self.iter_elements() if el.matches(tag)), None)

    def find_all(self, tag: str) -> List["XMLElement"]:
        """Find all descendant elements whose tag or local name equals tag."""
        return [el for el in self.iter_elements() if el.matches(tag)]


@dataclass(eq=False)
class XMLElement(XMLNode, XMLContainer):
    """Element with a qualified name, ordered attributes and ordered children."""

    name: QualifiedName
    attributes: Dict[str, str] = field(default_factory=dict)
    children: List[XMLNode] = field(default_factory=list)
    node_type = "element"

    def __post_init__(self) -> None:
        if isinstance(self.name, str):
            self.name = QualifiedName.parse(self.name)
        for child in self.children:
            child.parent = self

    @property
    def tag(self) -> str:
        """Name in Clark notation, ``{namespace}local`` when namespaced."""
        return str(self.name)

    @property
    def local_name(self) -> str:
        return self.name.local_name

    @property
    def namespace(self) -> Optional[str]:
        return self.name.namespace

    @property
    def is_empty(self) -> bool:
        """True when the element has no child nodes and renders self-closing."""
        return not self.children

    @property
    def text(self) -> str:
        """Concatenated text and CDATA directly inside this element."""
        return "".join(
            child.value for child in self.children
            if isinstance(child, (XMLText, XMLCData))
        )

    @property
    def full_text(self) -> str:
        """Concatenated text and CDATA of this element and all descendants."""
        parts = []
        for child in self.children:
            if isinstance(child, (XMLText, XMLCData)):
                parts.append(child.value)
            elif isinstance(child, XMLElement):
                parts.append(child.full_text)
        return "".join(parts)

    def matches(self, tag: str) -> bool:
        return tag in (self.tag, self.local_name)

    def get_attribute(self, name: str, default: Optional[str] = None) -> Optional[str]:
        """Get attribute value with optional default."""
        return self.attributes.get(name, default)

    def set_attribute(self, name: str, value: str) -> None:
        """Set attribute value; an existing attribute keeps its position."""
        if not isinstance(name, str) or not isinstance(value, str):
            raise TypeError("Attribute name and value must be strings")
        self.attributes[name] = value

    def has_attribute(self, name: str) -> bool:
        return name in self.attributes

    def get_path(self) -> str:
        """Get XPath-like path to this element."""
        if not isinstance(self.parent, XMLElement):
            return f"/{self.local_name}"

        siblings = [el for el in self.parent.elements() if el.name == self.name]
        parent_path = self.parent.get_path()
        if len(siblings) > 1:
            position = siblings.index(self) + 1
            return f"{parent_path}/{self.local_name}[{position}]"
        return f"{parent_path}/{self.local_name}"

    def to_dict(self) -> Dict[str, Any]:
        result: Dict[str, Any] = {"type": self.node_type, "tag": self.tag}
        if self.attributes:
            result["attributes"] = dict(self.attributes)
        if self.children:
            result["children"] = [child.to_dict() for child in self.children]
        return result


@dataclass(eq=False)
class XMLDocument(XMLContainer):
    """Root container of a built document.

    Holds the optional declaration and the ordered top-level nodes: at most
    one doctype, at most one root element, and any number of comments.
    """

    declaration: Optional[XMLDeclaration] = None
    children: List[XMLNode] = field(default_factory=list)

    @property
    def doctype(self) -> Optional[XMLDocumentType]:
        return next(
            (c for c in self.children if isinstance(c, XMLDocumentType)), None
        )

    @property
    def root(self) -> Optional[XMLElement]:
        """The root element, or None while the document has none."""
        return next(self.elements(), None)

    def first_node(self) -> Optional[XMLNode]:
        """First top-level node, skipping the doctype."""
        return next(
            (c for c in self.children if not isinstance(c, XMLDocumentType)), None
        )

    def _check_child(self, node: XMLNode) -> None:
        if isinstance(node, XMLElement):
            if self.root is not None:
                raise DocumentStructureError(
                    f"Document already has root element <{self.root.local_name}>"
                )
        elif isinstance(node, XMLDocumentType):
            if self.doctype is not None:
                raise DocumentStructureError("Document already has a document type")
            if self.root is not None:
                raise DocumentStructureError(
                    "Document type must precede the root element"
                )
        elif isinstance(node, XMLCData):
            raise DocumentStructureError("CDATA is not allowed at document level")
        elif isinstance(node, XMLText):
            raise DocumentStructureError("Text is not allowed at document level")

    def to_dict(self) -> Dict[str, Any]:
        result: Dict[str, Any] = {
            "declaration": self.declaration.to_dict() if self.declaration else None,
            "children": [child.to_dict() for child in self.children],
        }
        return result


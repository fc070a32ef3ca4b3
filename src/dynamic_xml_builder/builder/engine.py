"""Node-building engine behind the dynamic XML builder.

Any attribute looked up on an ``Xml`` instance that is not one of its own
operations becomes a tag-building call::

    xml = Xml()
    xml.Declaration()
    xml.feed({"xmlns": "http://www.w3.org/2005/Atom"}, lambda feed: (
        feed.title("My Blog!"),
        feed.link(href="http://example.org"),
    ))

Positional arguments are classified into text content, an attribute bag and
a fragment callback; keyword arguments form one more attribute bag. Special
content uses the reserved operations ``Tag``, ``Comment``, ``CData``,
``Text``, ``Declaration`` and ``DocumentType``. A leading underscore escapes
a tag name that collides with them: ``xml._Comment()`` builds ``<Comment />``.
"""

import functools
from typing import Any, Callable, Optional, Union

from lxml import etree
from xml.dom import minidom
from xml.etree import ElementTree

from dynamic_xml_builder.serialization import exports
from dynamic_xml_builder.serialization.writer import XMLWriter, select_encoding
from dynamic_xml_builder.shared.config import BuilderConfig
from dynamic_xml_builder.shared.errors import InvalidArgument, require_text
from dynamic_xml_builder.shared.logging import get_logger
from dynamic_xml_builder.tree.nodes import (
    QualifiedName,
    XMLCData,
    XMLComment,
    XMLDeclaration,
    XMLDocument,
    XMLDocumentType,
    XMLElement,
    XMLNode,
    XMLText,
    check_xml_name,
)

from .arguments import callback_arity, classify_arguments
from .context import BuilderContext
from .namespaces import apply_attributes, prepare_attributes

_STANDALONE_FLAGS = {True: "yes", False: "no"}

# IPython and Jupyter probe these names on any displayed object
_DISPLAY_HOOK_PREFIXES = ("_repr_", "_ipython_")


def _require_callback(callback: Any, arity: int, argument: str) -> None:
    if callback is None:
        raise InvalidArgument(f"{argument} cannot be None", argument=argument)
    if not callable(callback):
        raise InvalidArgument(f"{argument} must be callable", argument=argument)
    if callback_arity(callback) != arity:
        expected = "no arguments" if arity == 0 else "exactly one argument"
        raise InvalidArgument(f"{argument} must take {expected}", argument=argument)


class Xml:
    """Fluent builder for a single XML document.

    One instance owns one document; calls append to the element whose
    fragment is currently running, or to the document when none is.
    Instances are not safe to share between threads.

    Dunder names and the ``_repr_*``/``_ipython_*`` display hooks are not
    turned into tags; build such elements with ``Tag`` directly.
    """

    def __init__(self, config: Optional[BuilderConfig] = None) -> None:
        self.__config = config or BuilderConfig()
        self.__document = XMLDocument()
        self.__context = BuilderContext(self.__document)
        self.__logger = get_logger(__name__, self.__config.correlation_id, "engine")
        self.__writer = XMLWriter(self.__config.serialization, self.__config.correlation_id)

    @classmethod
    def from_document(
        cls, document: XMLDocument, config: Optional[BuilderConfig] = None
    ) -> "Xml":
        """Wrap an existing document; new nodes are appended at document level."""
        builder = cls(config)
        builder.__document = document
        builder.__context = BuilderContext(document)
        return builder

    # Helpers

    @staticmethod
    def fragment(callback: Callable[[], Any]) -> Callable[[], Any]:
        """Return a zero-argument fragment callback unchanged after validating it."""
        _require_callback(callback, 0, "fragment")
        return callback

    @staticmethod
    def fragment_with_builder(
        callback: Callable[["Xml"], Any]
    ) -> Callable[["Xml"], Any]:
        """Return a builder-receiving fragment callback unchanged after validating it."""
        _require_callback(callback, 1, "fragment")
        return callback

    @classmethod
    def build(
        cls, callback: Callable[["Xml"], Any], config: Optional[BuilderConfig] = None
    ) -> "Xml":
        """Create a builder, run callback with it and return the builder."""
        if callback is None:
            raise InvalidArgument("builder callback cannot be None", argument="callback")
        builder = cls(config)
        callback(builder)
        return builder

    # Dynamic dispatch

    def __getattr__(self, name: str) -> Callable[..., None]:
        if (
            (name.startswith("__") and name.endswith("__"))
            or name.startswith("_Xml__")
            or name.startswith(_DISPLAY_HOOK_PREFIXES)
        ):
            raise AttributeError(name)
        return functools.partial(self.Tag, name)

    # Node building

    def Tag(self, name: str, /, *args: Any, **attributes: Any) -> None:
        """Append an element named name to the current container.

        Args:
            name: Tag name; one leading escape character is stripped
            *args: Text content, an attribute bag and/or a fragment callback
            **attributes: Attributes applied after any positional attribute bag

        Raises:
            InvalidArgument: If name is empty or not a valid XML name
            DocumentStructureError: If a second root element would be created
        """
        name = require_text(name, "name")
        if name.startswith(self.__config.escape_prefix):
            name = name[1:]
        if not name:
            raise InvalidArgument("name cannot be only the escape character", argument="name")
        if self.__config.validate_names:
            check_xml_name(name, "name")

        classified = classify_arguments(args, self, attributes, self.__logger)
        prepared = prepare_attributes(
            classified.attributes or [], self.__config.validate_names
        )

        element = XMLElement(QualifiedName(name))
        self.__context.current.append(element)
        self.__logger.debug(
            "Created element",
            extra={"tag": name, "depth": self.__context.depth},
        )

        if classified.content:
            element.append(XMLText(classified.content))

        apply_attributes(element, prepared)

        if classified.fragment is not None:
            with self.__context.entering(element):
                classified.fragment()

    def Comment(self, text: str) -> None:
        """Append a comment to the current container."""
        self.__context.current.append(XMLComment(require_text(text, "text")))

    def CData(self, text: str) -> None:
        """Append a CDATA section to the current container."""
        self.__context.current.append(XMLCData(require_text(text, "text")))

    def Text(self, text: str) -> None:
        """Append escaped text to the current container."""
        self.__context.current.append(XMLText(require_text(text, "text")))

    def Declaration(
        self,
        version: Optional[str] = None,
        encoding: Optional[str] = None,
        standalone: Union[str, bool, None] = None,
    ) -> None:
        """Set the XML declaration, replacing any earlier one.

        Unset fields render as version ``1.0`` and encoding ``utf-8``.
        """
        if isinstance(standalone, bool):
            standalone = _STANDALONE_FLAGS[standalone]
        self.__document.declaration = XMLDeclaration(version, encoding, standalone)

    def DocumentType(
        self,
        name: str,
        public_id: Optional[str] = None,
        system_id: Optional[str] = None,
        internal_subset: Optional[str] = None,
    ) -> None:
        """Add a document type to the document, ahead of the root element."""
        name = require_text(name, "name")
        if self.__config.validate_names:
            check_xml_name(name, "name")
        self.__document.append(
            XMLDocumentType(name, public_id, system_id, internal_subset)
        )

    # Rendering

    @property
    def writer(self) -> XMLWriter:
        """Serializer configured for this builder."""
        return self.__writer

    @property
    def encoding(self) -> str:
        """Output encoding, ``utf-16`` when declared so and ``utf-8`` otherwise."""
        return select_encoding(self.__document.declaration)

    def to_string(self, indent: bool = False) -> str:
        """Render the document, indented when indent is true."""
        return self.writer.render(self.__document, indent)

    def to_bytes(self, indent: bool = False) -> bytes:
        """Render the document encoded with the selected output encoding."""
        return self.writer.render_bytes(self.__document, indent)

    def __str__(self) -> str:
        return self.to_string(False)

    def __bytes__(self) -> bytes:
        return self.to_bytes(False)

    def __repr__(self) -> str:
        root = self.__document.root
        return f"<Xml root={root.tag if root is not None else None!r}>"

    # Structural exports

    def to_document(self) -> XMLDocument:
        """The document being built."""
        return self.__document

    def to_element(self) -> Optional[XMLElement]:
        """The root element, or None when no element was built.

        Names are as built: a child given no namespace has none here, even
        inside a namespaced parent. The lxml, ElementTree and minidom exports
        and ``parse_string`` re-read the markup, where such a child inherits
        the parent's default namespace.
        """
        return self.__document.root

    def to_node(self) -> Optional[XMLNode]:
        """The first top-level node, skipping the document type."""
        return self.__document.first_node()

    def to_lxml(self) -> Optional[etree._ElementTree]:
        """Re-read the rendered markup with lxml; un-namespaced children inherit."""
        return exports.to_lxml(self.__document, self.writer)

    def to_lxml_element(self) -> Optional[etree._Element]:
        return exports.to_lxml_element(self.__document, self.writer)

    def to_lxml_node(self) -> Optional[etree._Element]:
        return exports.to_lxml_node(self.__document, self.writer)

    def to_etree(self) -> Optional[ElementTree.ElementTree]:
        """Re-read the markup with ElementTree; un-namespaced children inherit."""
        return exports.to_etree(self.__document, self.writer)

    def to_etree_element(self) -> Optional[ElementTree.Element]:
        return exports.to_etree_element(self.__document, self.writer)

    def to_minidom(self) -> minidom.Document:
        """Re-read the rendered markup as a DOM; un-namespaced children inherit."""
        return exports.to_minidom(self.__document, self.writer)

    def to_minidom_node(self) -> Optional[minidom.Node]:
        return exports.to_minidom_node(self.__document, self.writer)

    def to_minidom_element(self) -> Optional[minidom.Element]:
        return exports.to_minidom_element(self.__document, self.writer)

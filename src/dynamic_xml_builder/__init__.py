"""Dynamic XML Builder.

A small internal DSL for writing XML documents with chained, dynamically
named calls instead of node and attribute constructors::

    >>> from dynamic_xml_builder import Xml
    >>> xml = Xml()
    >>> xml.user("John Doe", username="jdoe", usertype="admin")
    >>> str(xml)
    '<user username="jdoe" usertype="admin">John Doe</user>'

Progressive API Disclosure:
- Level 1: Simple functions - build(), parse_string(), parse_file()
- Level 2: Builder class - Xml with Tag/Comment/CData/Text/Declaration/DocumentType
- Level 3: Configuration - BuilderConfig and SerializationConfig
- Level 4: Tree access - XMLDocument/XMLElement and lxml/ElementTree/minidom exports
"""

__version__ = "0.1.0"
__author__ = "Dynamic XML Builder Team"

from .api import build, fragment, fragment_with_builder, parse_file, parse_string
from .builder import Xml
from .shared.config import BuilderConfig, SerializationConfig
from .shared.errors import (
    BuilderError,
    DocumentStructureError,
    InvalidArgument,
    MarkupParseError,
)
from .tree import QualifiedName, XMLDocument, XMLElement

__all__ = [
    # Version and metadata
    "__author__",
    "__version__",

    # Level 1: Simple functions
    "build",
    "fragment",
    "fragment_with_builder",
    "parse_file",
    "parse_string",

    # Level 2: Builder class
    "Xml",

    # Level 3: Configuration
    "BuilderConfig",
    "SerializationConfig",

    # Level 4: Tree access
    "QualifiedName",
    "XMLDocument",
    "XMLElement",

    # Errors
    "BuilderError",
    "DocumentStructureError",
    "InvalidArgument",
    "MarkupParseError",
]

"""Rendering and export of built documents.

Key Components:
    XMLWriter: Renders an XMLDocument to text or encoded bytes
    select_encoding: Chooses the output encoding from the declaration
    exports: Loads a document into lxml, ElementTree or minidom trees
"""

from . import exports
from .writer import CODECS, UTF8, UTF16, XMLWriter, escape_attribute, escape_text, select_encoding

__all__ = [
    "exports",
    "CODECS",
    "UTF8",
    "UTF16",
    "XMLWriter",
    "escape_attribute",
    "escape_text",
    "select_encoding",
]

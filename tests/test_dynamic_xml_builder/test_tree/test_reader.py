"""Tests for reading markup into a document tree."""

import pytest

from dynamic_xml_builder.shared.errors import MarkupParseError
from dynamic_xml_builder.tree import (
    XMLCData,
    XMLComment,
    XMLElement,
    XMLText,
    XMLTreeReader,
    read_document,
)


class TestXMLTreeReader:
    """Test the expat-based reader."""

    def test_simple_element(self):
        document = read_document('<user username="jdoe" usertype="admin">John</user>')

        root = document.root
        assert root.tag == "user"
        assert list(root.attributes.items()) == [("username", "jdoe"), ("usertype", "admin")]
        assert root.text == "John"
        assert document.declaration is None

    def test_declaration(self):
        document = read_document(
            '<?xml version="1.0" encoding="utf-16" standalone="yes"?><a />'
        )

        assert document.declaration.version == "1.0"
        assert document.declaration.encoding == "utf-16"
        assert document.declaration.standalone == "yes"

    def test_declaration_without_standalone(self):
        document = read_document('<?xml version="1.0"?><a />')

        assert document.declaration.standalone is None
        assert document.declaration.encoding is None

    def test_default_namespace_is_inherited(self):
        document = read_document('<feed xmlns="urn:atom"><title /><x xmlns="" /></feed>')

        feed = document.root
        title, untitled = list(feed.elements())
        assert feed.namespace == "urn:atom"
        assert "xmlns" not in feed.attributes
        assert title.namespace == "urn:atom"
        assert untitled.namespace is None

    def test_prefixed_declarations_are_attributes(self):
        document = read_document('<a xmlns:atom="urn:atom" />')

        assert document.root.get_attribute("xmlns:atom") == "urn:atom"

    def test_cdata_kept_separate(self):
        document = read_document("<a>x<![CDATA[<b>&]]></a>")

        children = document.root.children
        assert isinstance(children[0], XMLText)
        assert isinstance(children[1], XMLCData)
        assert children[1].value == "<b>&"

    def test_entities_merged_into_text(self):
        document = read_document("<a>x &amp; y</a>")

        assert len(document.root.children) == 1
        assert document.root.text == "x & y"

    def test_comments(self):
        document = read_document("<!--top--><a><!--inner--></a>")

        assert isinstance(document.children[0], XMLComment)
        assert document.children[0].value == "top"
        assert document.root.children[0].value == "inner"

    def test_doctype(self):
        document = read_document(
            '<!DOCTYPE html PUBLIC "-//W3C//DTD XHTML 1.0 Strict//EN" '
            '"http://www.w3.org/TR/xhtml1/DTD/xhtml1-strict.dtd"><html />'
        )

        doctype = document.doctype
        assert doctype.name == "html"
        assert doctype.public_id == "-//W3C//DTD XHTML 1.0 Strict//EN"
        assert doctype.system_id == "http://www.w3.org/TR/xhtml1/DTD/xhtml1-strict.dtd"
        assert doctype.internal_subset is None
        assert document.children[0] is doctype

    def test_doctype_internal_subset(self):
        document = read_document("<!DOCTYPE a [<!ELEMENT a ANY>]><a />")

        assert "<!ELEMENT a ANY>" in document.doctype.internal_subset

    def test_processing_instructions_dropped(self):
        document = read_document("<a><?php echo 1; ?>text</a>")

        assert [type(c) for c in document.root.children] == [XMLText]

    def test_bytes_input(self):
        markup = '<?xml version="1.0" encoding="utf-8"?><a>é</a>'.encode("utf-8")

        assert read_document(markup).root.text == "é"

    def test_path_input(self, tmp_path):
        path = tmp_path / "doc.xml"
        path.write_bytes(b"<a><b /></a>")

        document = read_document(path)
        assert isinstance(document.root.children[0], XMLElement)

    def test_malformed_markup(self):
        with pytest.raises(MarkupParseError) as exc_info:
            XMLTreeReader().read("<a><b></a>")

        assert exc_info.value.line == 1
        assert exc_info.value.column is not None

    def test_no_root_element(self):
        with pytest.raises(MarkupParseError):
            read_document("<!-- only a comment -->")

    def test_comment_inside_internal_subset(self):
        document = read_document("<!DOCTYPE a [<!-- note --><!ELEMENT a ANY>]><a />")

        assert document.children[0] is document.doctype
        assert "<!-- note -->" in document.doctype.internal_subset
        assert not any(isinstance(c, XMLComment) for c in document.children)

    def test_attlist_defaults_ignored(self):
        document = read_document("<!DOCTYPE a [<!ATTLIST a b CDATA 'd'>]><a c='1' />")

        assert document.root.attributes == {"c": "1"}

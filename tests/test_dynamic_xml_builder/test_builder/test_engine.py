"""Tests for the dynamic node-building engine."""

import logging
from dataclasses import dataclass

import pytest

from dynamic_xml_builder.builder import Xml
from dynamic_xml_builder.shared.config import BuilderConfig
from dynamic_xml_builder.shared.errors import DocumentStructureError, InvalidArgument
from dynamic_xml_builder.tree import XMLComment, XMLElement


@dataclass
class Bag:
    a: str
    x: int
    z: bool


class TestHelpers:
    """Test fragment and build helpers."""

    def test_fragment_none(self):
        with pytest.raises(InvalidArgument):
            Xml.fragment(None)

    def test_fragment_returns_callback(self):
        callback = lambda: None
        assert Xml.fragment(callback) is callback

    def test_fragment_rejects_builder_callback(self):
        with pytest.raises(InvalidArgument):
            Xml.fragment(lambda xml: None)

    def test_fragment_with_builder_none(self):
        with pytest.raises(InvalidArgument):
            Xml.fragment_with_builder(None)

    def test_fragment_with_builder_returns_callback(self):
        callback = lambda xml: None
        assert Xml.fragment_with_builder(callback) is callback

    def test_build_none(self):
        with pytest.raises(InvalidArgument):
            Xml.build(None)

    def test_build_runs_callback(self):
        executed = []

        def callback(xml):
            executed.append(True)
            xml.hello("world")

        result = Xml.build(callback)

        assert executed == [True]
        assert isinstance(result, Xml)
        assert str(result) == "<hello>world</hello>"


class TestDynamicDispatch:
    """Test that unknown attribute names become tags."""

    def test_unknown_name_calls_tag(self):
        xml = Xml()
        xml.hello("world", {"a": "b"})
        assert str(xml) == '<hello a="b">world</hello>'

    def test_dunder_names_not_dispatched(self):
        xml = Xml()
        with pytest.raises(AttributeError):
            xml.__deepcopy__
        assert not hasattr(xml, "__html__")

    @pytest.mark.parametrize("name", ["_repr_html_", "_repr_mimebundle_", "_ipython_display_"])
    def test_display_hooks_not_dispatched(self, name):
        xml = Xml()
        assert not hasattr(xml, name)
        assert xml.to_document().children == []

    def test_display_hook_names_via_tag(self):
        xml = Xml()
        xml.Tag("_repr_html_")
        assert str(xml) == "<repr_html_ />"

    def test_reserved_names_escaped(self):
        xml = Xml()
        xml._Comment()
        assert str(xml) == "<Comment />"

    def test_builder_member_names_escaped(self):
        xml = Xml()
        xml._to_string("x")
        assert str(xml) == "<to_string>x</to_string>"

    def test_custom_escape_prefix(self):
        xml = Xml(BuilderConfig(escape_prefix="x"))
        xml.Tag("xText")
        assert str(xml) == "<Text />"


class TestTag:
    """Test element creation through Tag."""

    def test_name_becomes_tag_name(self):
        xml = Xml()
        xml.Tag("hello")
        assert str(xml) == "<hello />"

    def test_escaped_name(self):
        xml = Xml()
        xml.Tag("_Comment")
        assert str(xml) == "<Comment />"

    def test_only_one_prefix_stripped(self):
        xml = Xml()
        xml.Tag("__x")
        assert str(xml) == "<_x />"

    def test_string_content(self):
        xml = Xml()
        xml.Tag("tag", "value")
        assert str(xml) == "<tag>value</tag>"

    def test_scalar_content(self):
        xml = Xml()
        xml.Tag("tag", 123)
        assert str(xml) == "<tag>123</tag>"

    def test_empty_string_content_renders_empty(self):
        xml = Xml()
        xml.Tag("tag", "")
        assert str(xml) == "<tag />"

    def test_attribute_bag_order(self):
        xml = Xml()
        xml.Tag("tag", Bag(a="b", x=9, z=True))
        assert str(xml) == '<tag a="b" x="9" z="true" />'

    def test_mapping_and_keyword_attributes(self):
        xml = Xml()
        xml.Tag("tag", {"a": "b", "x": 9, "z": True})
        xml2 = Xml()
        xml2.tag(a="b", x=9, z=True)

        assert str(xml) == '<tag a="b" x="9" z="true" />'
        assert str(xml2) == str(xml)

    def test_none_attribute_omitted(self):
        xml = Xml()
        xml.link(href="/", rel=None)
        assert str(xml) == '<link href="/" />'

    def test_xmlns_promoted_to_namespace(self):
        xml = Xml()
        xml.Tag("tag", {"a": "b", "xmlns": "http://www.w3.org/2005/Atom"})

        assert xml.to_element().namespace == "http://www.w3.org/2005/Atom"
        assert "xmlns" not in xml.to_element().attributes
        assert str(xml) == '<tag a="b" xmlns="http://www.w3.org/2005/Atom" />'

    def test_content_and_attributes(self):
        xml = Xml()
        xml.Tag("tag", "value", {"a": "b"})
        assert str(xml) == '<tag a="b">value</tag>'

    def test_attributes_and_fragment(self):
        xml = Xml()
        xml.Tag("tag", {"a": "b"}, Xml.fragment_with_builder(
            lambda inner: inner.Tag("inner", "innerval")
        ))
        assert str(xml) == '<tag a="b"><inner>innerval</inner></tag>'

    def test_nested_fragments(self):
        xml = Xml()
        xml.Tag("outer", Xml.fragment(lambda: xml.Tag(
            "inner1", Xml.fragment(lambda: xml.Tag("inner2"))
        )))
        assert str(xml) == "<outer><inner1><inner2 /></inner1></outer>"

    def test_nested_builder_fragments(self):
        xml = Xml()
        xml.Tag("outer", Xml.fragment_with_builder(lambda outer: outer.Tag(
            "inner1", Xml.fragment_with_builder(lambda inner1: inner1.Tag("inner2"))
        )))
        assert str(xml) == "<outer><inner1><inner2 /></inner1></outer>"

    def test_nested_indented(self):
        xml = Xml()
        xml.outer(lambda: xml.inner1(lambda: xml.inner2()))

        assert xml.to_string(indent=True) == (
            "<outer>\r\n  <inner1>\r\n    <inner2 />\r\n  </inner1>\r\n</outer>"
        )

    def test_last_bucket_wins(self):
        xml = Xml()
        xml.tag("first", "second", {"a": "1"}, {"b": "2"}, c="3")
        assert str(xml) == '<tag c="3">second</tag>'

    def test_uncallable_multi_argument_callback_logged(self, caplog):
        xml = Xml()
        with caplog.at_level(logging.WARNING):
            xml.tag(lambda a, b: None)

        assert str(xml) == "<tag />"
        assert any("more than one argument" in r.getMessage() for r in caplog.records)


class TestTagErrors:
    """Test that failed calls leave the tree unmodified."""

    @pytest.mark.parametrize("name", [None, ""])
    def test_missing_name(self, name):
        xml = Xml()
        with pytest.raises(InvalidArgument):
            xml.Tag(name)
        assert xml.to_document().children == []

    def test_escape_character_alone(self):
        xml = Xml()
        with pytest.raises(InvalidArgument):
            xml.Tag("_")
        assert xml.to_document().children == []

    def test_invalid_name(self):
        xml = Xml()
        with pytest.raises(InvalidArgument):
            xml.Tag("two words")
        assert xml.to_document().children == []

    def test_invalid_attribute_name(self):
        xml = Xml()
        with pytest.raises(InvalidArgument):
            xml.tag({"bad name": "x"})
        assert xml.to_document().children == []

    def test_lenient_names(self):
        xml = Xml(BuilderConfig.lenient())
        xml.Tag("1st")
        assert str(xml) == "<1st />"

    def test_second_root(self):
        xml = Xml()
        xml.first()
        with pytest.raises(DocumentStructureError):
            xml.second()
        assert str(xml) == "<first />"

    def test_context_restored_after_error(self):
        xml = Xml()

        def failing():
            xml.child()
            raise RuntimeError("boom")

        with pytest.raises(RuntimeError):
            xml.root(failing)

        xml.Comment("after")
        assert str(xml) == "<root><child /></root><!--after-->"


class TestSpecialContent:
    """Test Comment, CData and Text."""

    @pytest.mark.parametrize("method", ["Comment", "CData", "Text"])
    @pytest.mark.parametrize("value", [None, ""])
    def test_missing_content(self, method, value):
        xml = Xml()
        xml.tag(lambda: None)
        with pytest.raises(InvalidArgument):
            getattr(xml, method)(value)
        assert xml.to_element().children == []

    def test_comment(self):
        xml = Xml()
        xml.Comment("comment")
        xml.Tag("hello", "world")
        assert str(xml) == "<!--comment--><hello>world</hello>"

    def test_malformed_comment(self):
        xml = Xml()
        with pytest.raises(InvalidArgument):
            xml.Comment("a--b")
        assert xml.to_document().children == []

    def test_cdata(self):
        xml = Xml()
        xml.Tag("tag", Xml.fragment(lambda: (
            xml.CData("content"),
            xml.Tag("hello", "world"),
        )))
        assert str(xml) == "<tag><![CDATA[content]]><hello>world</hello></tag>"

    def test_cdata_at_document_level(self):
        xml = Xml()
        with pytest.raises(DocumentStructureError):
            xml.CData("content")

    def test_text(self):
        xml = Xml()
        xml.Tag("tag", Xml.fragment(lambda: xml.Text("some text")))
        assert str(xml) == "<tag>some text</tag>"

    def test_text_is_escaped(self):
        xml = Xml()
        xml.tag(lambda: xml.Text("a < b & c"))
        assert str(xml) == "<tag>a &lt; b &amp; c</tag>"


class TestDeclarationAndDoctype:
    """Test document-level declarations."""

    def test_no_declaration_by_default(self):
        xml = Xml()
        xml.hello()
        assert xml.to_document().declaration is None
        assert str(xml) == "<hello />"

    def test_declaration_defaults(self):
        xml = Xml()
        xml.Declaration()
        xml.Tag("hello")
        assert str(xml) == '<?xml version="1.0" encoding="utf-8"?><hello />'

    def test_declaration_all_params(self):
        xml = Xml()
        xml.Declaration(encoding="utf-16", standalone="yes")
        xml.Tag("hello")
        assert str(xml) == (
            '<?xml version="1.0" encoding="utf-16" standalone="yes"?><hello />'
        )

    def test_declaration_boolean_standalone(self):
        xml = Xml()
        xml.Declaration(standalone=False)
        assert xml.to_document().declaration.standalone == "no"

    def test_declaration_replaced(self):
        xml = Xml()
        xml.Declaration(version="1.1")
        xml.Declaration(encoding="utf-16")
        xml.hello()
        assert str(xml) == '<?xml version="1.0" encoding="utf-16"?><hello />'

    def test_doctype_params(self):
        xml = Xml()
        xml.DocumentType("html", "publicid", "systemid", "internalsubset")

        doctype = xml.to_document().doctype
        assert doctype.name == "html"
        assert doctype.public_id == "publicid"
        assert doctype.system_id == "systemid"
        assert doctype.internal_subset == "internalsubset"

    @pytest.mark.parametrize("name", [None, ""])
    def test_doctype_missing_name(self, name):
        xml = Xml()
        with pytest.raises(InvalidArgument):
            xml.DocumentType(name)
        assert xml.to_document().doctype is None

    def test_doctype_after_root(self):
        xml = Xml()
        xml.html()
        with pytest.raises(DocumentStructureError):
            xml.DocumentType("html")

    def test_first_node_skips_doctype(self):
        xml = Xml()
        xml.DocumentType("html")
        xml.Tag("tag", "value")

        node = xml.to_node()
        assert isinstance(node, XMLElement)
        assert node.local_name == "tag"


class TestStructuralViews:
    """Test access to the built tree."""

    def test_to_element(self):
        xml = Xml()
        xml.Tag("tag", "value")
        assert xml.to_element().tag == "tag"

    def test_empty_builder(self):
        xml = Xml()
        assert xml.to_element() is None
        assert xml.to_node() is None
        assert str(xml) == ""

    def test_to_node_comment_first(self):
        xml = Xml()
        xml.Comment("c")
        xml.a()
        assert isinstance(xml.to_node(), XMLComment)

    def test_repr(self):
        xml = Xml()
        assert repr(xml) == "<Xml root=None>"
        xml.feed(xmlns="urn:atom")
        assert repr(xml) == "<Xml root='{urn:atom}feed'>"

    def test_atom_feed(self):
        posts = [("First", "http://example.org/1"), ("Second", "http://example.org/2")]

        xml = Xml()
        xml.Declaration()
        xml.feed({"xmlns": "http://www.w3.org/2005/Atom"}, lambda feed: (
            feed.title("My Blog!"),
            feed.link(href="http://example.org"),
            feed.author(lambda author: author.name("John Doe")),
            [feed.entry(lambda entry: (
                entry.title(title),
                entry.link(href=link),
            )) for title, link in posts],
        ))

        root = xml.to_element()
        assert root.namespace == "http://www.w3.org/2005/Atom"
        assert [e.local_name for e in root.elements()] == [
            "title", "link", "author", "entry", "entry"
        ]
        assert root.find("entry").find("title").text == "First"
        assert str(xml).startswith(
            '<?xml version="1.0" encoding="utf-8"?>'
            '<feed xmlns="http://www.w3.org/2005/Atom"><title>My Blog!</title>'
        )

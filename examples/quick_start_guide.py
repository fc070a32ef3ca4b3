#!/usr/bin/env python3
"""
Quick Start Guide for the Dynamic XML Builder.

Builds an Atom feed from plain Python data, prints it with and without
indentation, then reads it back and hands it to lxml.
"""

import datetime
import sys
from collections import namedtuple
from pathlib import Path

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from dynamic_xml_builder import Xml, parse_string

Post = namedtuple("Post", ["title", "permalink", "published", "content"])


def get_blog_posts():
    """Sample data standing in for a model layer."""
    return [
        Post(
            f"Post number {n}",
            f"http://example.org/posts/{n}",
            datetime.datetime(2011, 1, n, 12, 0, 0),
            f"Content of post {n} & some <markup>",
        )
        for n in range(1, 4)
    ]


def build_feed(posts):
    """Build the feed; each call on the builder becomes an element."""
    xml = Xml()
    xml.Declaration()
    xml.feed({"xmlns": "http://www.w3.org/2005/Atom"}, lambda feed: (
        feed.title("My Blog!"),
        feed.subtitle("Others have blogs too, but this one is mine"),
        feed.link(href="http://example.org"),
        feed.link(href="http://example.org/feed.xml", rel="self"),
        feed.author(lambda author: (
            author.name("John Doe"),
            author.email("johndoe@example.org"),
        )),
        # loops work where nested constructors would not
        [feed.entry(lambda entry: (
            entry.title(post.title),
            entry.link(href=post.permalink),
            entry.updated(post.published),
            entry.summary(post.content),
        )) for post in posts],
    ))
    return xml


def quick_start_example():
    print("QUICK START - Dynamic XML Builder")
    print("=" * 40)

    xml = build_feed(get_blog_posts())

    print("\nStep 1: Compact output")
    print("-" * 30)
    print(xml)

    print("\nStep 2: Indented output")
    print("-" * 30)
    print(xml.to_string(indent=True))

    print("\nStep 3: Read it back")
    print("-" * 30)
    reparsed = parse_string(str(xml))
    root = reparsed.to_element()
    print(f"Root: {root.tag}")
    print(f"Entries: {len(root.find_all('entry'))}")
    print(f"Round trip stable: {str(reparsed) == str(xml)}")

    print("\nStep 4: Hand over to lxml")
    print("-" * 30)
    element = xml.to_lxml_element()
    ns = {"atom": "http://www.w3.org/2005/Atom"}
    for title in element.xpath("atom:entry/atom:title/text()", namespaces=ns):
        print(f"  {title}")


def main():
    """Main function."""
    try:
        quick_start_example()
        print("\nAll examples completed successfully!")
        return 0

    except Exception as e:
        print(f"\nExample failed: {e}")
        import traceback
        traceback.print_exc()
        return 1


if __name__ == "__main__":
    sys.exit(main())

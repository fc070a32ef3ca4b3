"""Module-level entry points of the dynamic XML builder.

These functions mirror the helpers on ``Xml`` so callers can write
``build(lambda xml: xml.hello("world"))`` without touching the class, and
add the reverse direction: reading existing markup into a builder.
"""

from pathlib import Path
from typing import Any, Callable, Optional, Union

from dynamic_xml_builder.builder.engine import Xml
from dynamic_xml_builder.shared.config import BuilderConfig
from dynamic_xml_builder.shared.logging import get_logger
from dynamic_xml_builder.tree.reader import read_document


def build(
    callback: Callable[[Xml], Any], config: Optional[BuilderConfig] = None
) -> Xml:
    """Create a builder, run callback with it and return the builder.

    Args:
        callback: Function receiving the new builder
        config: Optional builder configuration

    Returns:
        The populated builder

    Raises:
        InvalidArgument: If callback is None

    Examples:
        >>> str(build(lambda xml: xml.hello("world")))
        '<hello>world</hello>'
    """
    return Xml.build(callback, config)


def fragment(callback: Callable[[], Any]) -> Callable[[], Any]:
    """Validate a zero-argument fragment callback and return it unchanged."""
    return Xml.fragment(callback)


def fragment_with_builder(callback: Callable[[Xml], Any]) -> Callable[[Xml], Any]:
    """Validate a builder-receiving fragment callback and return it unchanged."""
    return Xml.fragment_with_builder(callback)


def parse_string(
    markup: Union[str, bytes], config: Optional[BuilderConfig] = None
) -> Xml:
    """Read markup into a new builder.

    Further node-building calls on the returned builder append at document
    level, so only comments can be added once the root element exists.

    Raises:
        MarkupParseError: If the markup is not well-formed
    """
    config = config or BuilderConfig()
    logger = get_logger(__name__, config.correlation_id, "parse")
    logger.debug(
        "Reading markup",
        extra={"input_type": type(markup).__name__, "length": len(markup)},
    )
    return Xml.from_document(read_document(markup, config.correlation_id), config)


def parse_file(
    path: Union[str, Path], config: Optional[BuilderConfig] = None
) -> Xml:
    """Read a markup file into a new builder.

    The file is read as bytes so its declared encoding is honoured.
    """
    return parse_string(Path(path).read_bytes(), config)

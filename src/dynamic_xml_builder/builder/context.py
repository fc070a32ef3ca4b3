"""Insertion-point tracking for nested builder callbacks.

The context is a stack of containers whose top is the node that the next
Tag/Comment/CData/Text call appends into. Entering an element's fragment
pushes the element; leaving pops it again, also when the fragment raises.
"""

from contextlib import contextmanager
from typing import Iterator, List

from dynamic_xml_builder.tree.nodes import XMLContainer, XMLDocument, XMLElement


class BuilderContext:
    """Stack of open containers rooted at the document."""

    def __init__(self, document: XMLDocument) -> None:
        self._stack: List[XMLContainer] = [document]

    @property
    def current(self) -> XMLContainer:
        """Container receiving the next appended node."""
        return self._stack[-1]

    @property
    def depth(self) -> int:
        """Number of elements currently open (0 at document level)."""
        return len(self._stack) - 1

    def push(self, element: XMLElement) -> None:
        if element.parent is not self.current:
            raise ValueError("Only a child of the current container can be entered")
        self._stack.append(element)

    def pop(self) -> XMLContainer:
        """Close the innermost element and return the restored container."""
        if len(self._stack) == 1:
            raise IndexError("Cannot leave the document root")
        self._stack.pop()
        return self.current

    @contextmanager
    def entering(self, element: XMLElement) -> Iterator[XMLElement]:
        """Make element the current container for the duration of the block."""
        self.push(element)
        try:
            yield element
        finally:
            self.pop()

"""
Layout tree.

Immutable nodes describing a rendered resume independently of any output format.
The HTML surface is generated from this tree, and tests inspect it directly.
"""

from dataclasses import dataclass
from typing import Iterator, List, Optional, Tuple


@dataclass(frozen=True)
class LayoutNode:
    """
    One element of a rendered layout.

    Attributes:
        tag: Element kind, named after its HTML counterpart (div, section, h1, ...)
        classes: Style classes, in order
        text: Text content preceding the children
        attrs: Extra attributes as (name, value) pairs (e.g., href)
        children: Child nodes, in display order
    """

    tag: str
    classes: Tuple[str, ...] = ()
    text: str = ""
    attrs: Tuple[Tuple[str, str], ...] = ()
    children: Tuple["LayoutNode", ...] = ()

    def has_class(self, name: str) -> bool:
        return name in self.classes

    def attr(self, name: str) -> Optional[str]:
        for key, value in self.attrs:
            if key == name:
                return value
        return None

    def iter(self) -> Iterator["LayoutNode"]:
        """Depth-first, pre-order traversal including this node."""
        yield self
        for child in self.children:
            yield from child.iter()

    def find_all(self, class_name: str) -> List["LayoutNode"]:
        return [node for node in self.iter() if node.has_class(class_name)]

    def find(self, class_name: str) -> Optional["LayoutNode"]:
        return next((node for node in self.iter() if node.has_class(class_name)), None)

    def texts(self) -> List[str]:
        """Non-empty text of this subtree in reading order."""
        return [node.text for node in self.iter() if node.text]

    def outline(self, indent: int = 0) -> str:
        """Plain-text rendering of the subtree, one text-bearing node per line."""
        lines = []
        depth = indent
        if self.text:
            lines.append("  " * indent + self.text)
            depth += 1
        for child in self.children:
            child_outline = child.outline(depth)
            if child_outline:
                lines.append(child_outline)
        return "\n".join(lines)


def node(tag: str, classes: str = "", text: str = "", children=(), **attrs: str) -> LayoutNode:
    """
    Build a LayoutNode.

    Args:
        tag: Element kind
        classes: Space-separated class names
        text: Text content
        children: Child nodes; None entries are dropped so optional parts can be
            written inline
        **attrs: Extra attributes
    """
    return LayoutNode(
        tag=tag,
        classes=tuple(classes.split()),
        text=text,
        attrs=tuple(attrs.items()),
        children=tuple(child for child in children if child is not None),
    )

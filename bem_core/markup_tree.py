"""
Markup Tree Module
Immutable view of a parsed JSX/TSX file: the markup elements in
depth-first order, the enclosing-element side-table, and cursor lookup.
"""

from dataclasses import dataclass
from typing import Iterator, List, Optional, Tuple
import logging

from tree_sitter import Node, Tree

logger = logging.getLogger(__name__)

MARKUP_NODE_TYPES = ('jsx_element', 'jsx_self_closing_element')


class OffsetEncoding:
    CODEPOINT = 'codepoint'
    UTF16 = 'utf-16'


def node_text(node: Node) -> str:
    return node.text.decode('utf-8')


def codepoint_offset(text: str, utf16_offset: int) -> int:
    """
    Convert a UTF-16 code unit offset (as VS Code reports it) to a str index.

    Characters outside the Basic Multilingual Plane take two UTF-16 units.
    An offset falling between the two halves of a surrogate pair maps to the
    index after that character.
    """
    units = 0
    for index, char in enumerate(text):
        if units >= utf16_offset:
            return index
        units += 2 if ord(char) > 0xFFFF else 1
    return len(text)


@dataclass(frozen=True)
class JSXAttribute:
    name: str
    value: Optional[Node]


@dataclass(frozen=True)
class MarkupElement:
    """A JSX element with byte spans for the whole element and its opening tag."""
    index: int
    tag_name: str
    start: int
    end: int
    open_tag_start: int
    open_tag_end: int
    attributes: Tuple[JSXAttribute, ...]
    node: Node

    def contains(self, offset: int) -> bool:
        return self.start <= offset <= self.end

    def opening_tag_contains(self, offset: int) -> bool:
        return self.open_tag_start <= offset <= self.open_tag_end

    def get_attribute(self, name: str) -> Optional[JSXAttribute]:
        """Return the first attribute called ``name``, if any."""
        for attr in self.attributes:
            if attr.name == name:
                return attr
        return None


@dataclass(frozen=True)
class SyntaxTree:
    source: str
    source_bytes: bytes
    variant: str
    tree: Tree
    elements: Tuple[MarkupElement, ...]
    # element index -> index of the enclosing element
    parents: Tuple[Optional[int], ...]

    @property
    def root(self) -> Node:
        return self.tree.root_node

    def byte_offset(self, char_offset: int) -> int:
        """Convert an editor (character) offset to a byte offset into the source."""
        char_offset = max(0, min(char_offset, len(self.source)))
        return len(self.source[:char_offset].encode('utf-8'))

    def parent_of(self, element: MarkupElement) -> Optional[MarkupElement]:
        parent_index = self.parents[element.index]
        if parent_index is None:
            return None
        return self.elements[parent_index]

    def ancestors(self, element: MarkupElement) -> Iterator[MarkupElement]:
        """Yield ``element`` and then each enclosing element, nearest first."""
        current = element
        while current is not None:
            yield current
            current = self.parent_of(current)


def _opening_tag(node: Node) -> Optional[Node]:
    if node.type == 'jsx_self_closing_element':
        return node
    for child in node.children:
        if child.type == 'jsx_opening_element':
            return child
    return None


def _read_attributes(opening: Node) -> Tuple[JSXAttribute, ...]:
    attributes = []
    for child in opening.named_children:
        # spread attributes ({...props}) are jsx_expression nodes
        if child.type != 'jsx_attribute' or not child.named_children:
            continue
        parts = child.named_children
        value = parts[1] if len(parts) > 1 else None
        attributes.append(JSXAttribute(name=node_text(parts[0]), value=value))
    return tuple(attributes)


def build_syntax_tree(source: str, source_bytes: bytes, variant: str, tree: Tree) -> SyntaxTree:
    """Collect markup elements in pre-order and link each to its enclosing element."""
    elements: List[MarkupElement] = []
    parents: List[Optional[int]] = []

    stack = [(tree.root_node, None)]
    while stack:
        node, enclosing = stack.pop()
        if node.type in MARKUP_NODE_TYPES:
            opening = _opening_tag(node)
            name_node = opening.child_by_field_name('name') if opening is not None else None
            # fragments (<>...</>) have no tag name and are not elements
            if name_node is not None:
                element = MarkupElement(
                    index=len(elements),
                    tag_name=node_text(name_node),
                    start=node.start_byte,
                    end=node.end_byte,
                    open_tag_start=opening.start_byte,
                    open_tag_end=opening.end_byte,
                    attributes=_read_attributes(opening),
                    node=node,
                )
                elements.append(element)
                parents.append(enclosing)
                enclosing = element.index
        for child in reversed(node.children):
            stack.append((child, enclosing))

    logger.debug(f"Collected {len(elements)} markup elements")
    return SyntaxTree(
        source=source,
        source_bytes=source_bytes,
        variant=variant,
        tree=tree,
        elements=tuple(elements),
        parents=tuple(parents),
    )


def find_innermost_element(tree: SyntaxTree, offset: int) -> Optional[MarkupElement]:
    """
    Find the most deeply nested markup element containing a character offset.

    Elements are stored parents-first, so the last one containing the
    offset is the innermost.
    """
    byte_offset = tree.byte_offset(offset)
    found = None
    for element in tree.elements:
        if element.contains(byte_offset):
            found = element
    if found is not None:
        logger.debug(f"Cursor at {offset} is inside <{found.tag_name}> [{found.start}, {found.end}]")
    return found

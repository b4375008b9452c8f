"""
Block Inference Module
Infers the BEM block name from the className of the element under the
cursor or of its nearest enclosing element.
"""

from typing import Collection, Optional
import logging

from tree_sitter import Node

from bem_core.expression_scanner import extract_block
from bem_core.markup_tree import MarkupElement, SyntaxTree

logger = logging.getLogger(__name__)

CLASS_ATTRIBUTE = 'className'


def class_name_expression(element: MarkupElement) -> Optional[Node]:
    """
    The expression inside ``className={...}``.

    Returns None when there is no className attribute or when its value is
    a plain string literal.
    """
    attr = element.get_attribute(CLASS_ATTRIBUTE)
    if attr is None or attr.value is None or attr.value.type != 'jsx_expression':
        return None
    for child in attr.value.named_children:
        if child.type != 'comment':
            return child
    return None


def find_block_from_ancestors(tree: SyntaxTree, element: MarkupElement,
                              object_names: Collection[str]) -> Optional[str]:
    """Walk from ``element`` outwards and return the first block found."""
    if not object_names:
        return None
    for ancestor in tree.ancestors(element):
        expression = class_name_expression(ancestor)
        if expression is None:
            continue
        block = extract_block(expression, object_names)
        if block:
            logger.debug(f"Block {block!r} inferred from <{ancestor.tag_name}> at byte {ancestor.start}")
            return block
    return None

"""
Expression Scanner Module
Finds ``styles.block`` style references inside a className expression,
looking through calls, ternaries, logical operators, arrays, object
literals and template strings.
"""

from typing import Collection, Iterable, Optional

from tree_sitter import Node

from bem_core.markup_tree import node_text

ELEMENT_SEPARATOR = '__'
LOGICAL_OPERATORS = ('&&', '||', '??')


def block_from_key(key: str) -> str:
    """``card__title`` -> ``card``"""
    return key.split(ELEMENT_SEPARATOR, 1)[0]


def _member_key(node: Node, object_names: Collection[str]) -> Optional[str]:
    """Property name of ``obj.key`` / ``obj['key']`` when ``obj`` is a candidate."""
    obj = node.child_by_field_name('object')
    if obj is None or obj.type != 'identifier' or node_text(obj) not in object_names:
        return None
    if node.type == 'member_expression':
        prop = node.child_by_field_name('property')
        if prop is not None and prop.type == 'property_identifier':
            return node_text(prop)
    else:
        index = node.child_by_field_name('index')
        if index is not None and index.type == 'string':
            return node_text(index)[1:-1]
    return None


def _scan_each(nodes: Iterable[Optional[Node]], object_names: Collection[str]) -> Optional[str]:
    for node in nodes:
        found = extract_block(node, object_names)
        if found:
            return found
    return None


def extract_block(node: Optional[Node], object_names: Collection[str]) -> Optional[str]:
    """
    Return the block segment of the first candidate member access in ``node``.

    Traversal is depth-first in source order: member object before property,
    callee before arguments, test before branches, left before right.
    Function bodies and other expression kinds are not searched.
    """
    if node is None:
        return None
    kind = node.type

    if kind in ('member_expression', 'subscript_expression'):
        key = _member_key(node, object_names)
        if key:
            block = block_from_key(key)
            if block:
                return block
        inner = node.child_by_field_name('property' if kind == 'member_expression' else 'index')
        return _scan_each((node.child_by_field_name('object'), inner), object_names)

    if kind == 'call_expression':
        found = extract_block(node.child_by_field_name('function'), object_names)
        if found:
            return found
        arguments = node.child_by_field_name('arguments')
        if arguments is None or arguments.type != 'arguments':
            return None
        return _scan_each(arguments.named_children, object_names)

    if kind == 'template_string':
        substitutions = [child for child in node.named_children if child.type == 'template_substitution']
        return _scan_each((sub.named_children[0] for sub in substitutions if sub.named_children), object_names)

    if kind == 'ternary_expression':
        return _scan_each((
            node.child_by_field_name('condition'),
            node.child_by_field_name('consequence'),
            node.child_by_field_name('alternative'),
        ), object_names)

    if kind == 'binary_expression':
        operator = node.child_by_field_name('operator')
        if operator is None or operator.type not in LOGICAL_OPERATORS:
            return None
        return _scan_each((node.child_by_field_name('left'), node.child_by_field_name('right')), object_names)

    if kind == 'array':
        return _scan_each(node.named_children, object_names)

    if kind == 'object':
        pairs = [child for child in node.named_children if child.type == 'pair']
        return _scan_each((pair.child_by_field_name('value') for pair in pairs), object_names)

    if kind == 'parenthesized_expression':
        return _scan_each(node.named_children, object_names)

    return None

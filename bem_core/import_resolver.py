"""
Import Resolver Module
Finds the stylesheet-module import (``*.module.css|scss|sass``) of a file
and the local name it binds.
"""

from dataclasses import dataclass
from typing import Optional
import logging
import re

from tree_sitter import Node

from bem_core.markup_tree import SyntaxTree, node_text

logger = logging.getLogger(__name__)

STYLESHEET_MODULE_RE = re.compile(r'\.module\.(s?css|sass)$', re.IGNORECASE)


@dataclass(frozen=True)
class ImportBinding:
    local_name: str
    module_path: str
    node: Node


def is_stylesheet_module(path: str) -> bool:
    return bool(STYLESHEET_MODULE_RE.search(path))


def _string_value(node: Node) -> str:
    # strip the surrounding quotes
    return node_text(node)[1:-1]


def _default_or_namespace_name(import_node: Node) -> Optional[str]:
    """
    Return the local name of the first default or namespace binding.

    ``import s from ...`` and ``import * as s from ...`` qualify;
    ``import { s } from ...`` does not.
    """
    for child in import_node.named_children:
        if child.type != 'import_clause':
            continue
        for binding in child.named_children:
            if binding.type == 'identifier':
                return node_text(binding)
            if binding.type == 'namespace_import':
                for part in binding.named_children:
                    if part.type == 'identifier':
                        return node_text(part)
    return None


def find_stylesheet_import(tree: SyntaxTree) -> Optional[ImportBinding]:
    """Return the first top-level stylesheet-module import with a usable binding."""
    for statement in tree.root.named_children:
        if statement.type != 'import_statement':
            continue
        source = statement.child_by_field_name('source')
        if source is None:
            continue
        module_path = _string_value(source)
        if not is_stylesheet_module(module_path):
            continue

        local_name = _default_or_namespace_name(statement)
        if local_name is None:
            logger.debug(f"Skipping {module_path}: only named bindings")
            continue
        logger.debug(f"Found stylesheet import {local_name} from {module_path}")
        return ImportBinding(local_name=local_name, module_path=module_path, node=statement)
    return None

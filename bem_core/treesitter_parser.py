"""
Tree-sitter Parser Module
Parses JSX/TSX source into a SyntaxTree using the JavaScript or TSX grammar.
"""

from typing import Optional
import logging

import tree_sitter_javascript as tsjs
import tree_sitter_typescript as tstypescript
from tree_sitter import Language, Node, Parser

from bem_core.errors import ParseError
from bem_core.markup_tree import SyntaxTree, build_syntax_tree

logger = logging.getLogger(__name__)


class LanguageVariant:
    STANDARD = 'standard'
    TYPED = 'typed'


# Both grammars always accept JSX, class fields and decorators
JS_LANGUAGE = Language(tsjs.language())
TSX_LANGUAGE = Language(tstypescript.language_tsx())

TYPED_LANGUAGE_IDS = ('typescript', 'typescriptreact')
TYPED_EXTENSIONS = ('.ts', '.tsx')


def detect_language_variant(language_id: Optional[str] = None, file_name: Optional[str] = None) -> str:
    """Pick the grammar profile from an editor language id or the file extension."""
    if language_id in TYPED_LANGUAGE_IDS:
        return LanguageVariant.TYPED
    if file_name and file_name.lower().endswith(TYPED_EXTENSIONS):
        return LanguageVariant.TYPED
    return LanguageVariant.STANDARD


def _find_error_node(root: Node) -> Optional[Node]:
    stack = [root]
    while stack:
        node = stack.pop()
        if node.type == 'ERROR' or node.is_missing:
            return node
        for child in reversed(node.children):
            if child.has_error or child.is_missing:
                stack.append(child)
    return None


def parse_source(source: str, variant: str = LanguageVariant.STANDARD) -> SyntaxTree:
    """Parse source text, raising ParseError if the grammar reports any error."""
    language = TSX_LANGUAGE if variant == LanguageVariant.TYPED else JS_LANGUAGE
    logger.debug(f"Parsing {len(source)} characters with the {variant} grammar")

    source_bytes = source.encode('utf-8')
    parser = Parser(language)
    tree = parser.parse(source_bytes)

    if tree.root_node.has_error:
        error_node = _find_error_node(tree.root_node)
        if error_node is not None:
            row, column = error_node.start_point
            raise ParseError('Could not parse file', line=row + 1, column=column + 1)
        raise ParseError('Could not parse file')

    return build_syntax_tree(source, source_bytes, variant, tree)

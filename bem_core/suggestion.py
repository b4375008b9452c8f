"""
Suggestion Module
Assembles the BEM className suggestion for a cursor position: which
stylesheet object to use, which block name, and whether to insert a bare
attribute or a whole element.
"""

from dataclasses import dataclass
from typing import Optional, Tuple, Union
import logging
import re

from bem_core.block_inference import find_block_from_ancestors
from bem_core.errors import InvalidFileStemError, InvalidIdentifierError
from bem_core.import_resolver import find_stylesheet_import
from bem_core.markup_tree import OffsetEncoding, codepoint_offset, find_innermost_element
from bem_core.naming import file_stem, stylesheet_stem, to_camel_case
from bem_core.treesitter_parser import LanguageVariant, parse_source

logger = logging.getLogger(__name__)

IDENTIFIER_RE = re.compile(r'^[A-Za-z_$][A-Za-z0-9_$]*$')
# characters that would break out of the quoted relative path
UNSAFE_STEM_RE = re.compile(r'[\'"`\\/\r\n]')
DEFAULT_OBJECT_IDENTIFIER = 'style'
DEFAULT_TAG = 'div'
DEFAULT_BLOCK = 'block'
DEFAULT_FILE_NAME = 'Component.tsx'
STYLESHEET_EXTENSION = '.module.scss'


class InsertionMode:
    ATTRIBUTE_ONLY = 'attribute_only'
    FULL_ELEMENT = 'full_element'


@dataclass(frozen=True)
class NamingSuggestion:
    object_identifier: str
    block_name: str
    insertion_mode: str
    needs_user_input = False

    def to_dict(self):
        return {
            'object_identifier': self.object_identifier,
            'block_name': self.block_name,
            'insertion_mode': self.insertion_mode,
        }


@dataclass(frozen=True)
class ImportCompletion:
    import_statement_text: str
    object_identifier: str


@dataclass(frozen=True)
class PendingSuggestion:
    """A suggestion still waiting for the stylesheet object name from the user."""
    block_name: str
    insertion_mode: str
    file_stem: str
    needs_user_input = True

    def complete(self, identifier: str) -> Tuple[NamingSuggestion, ImportCompletion]:
        completion = complete_with_user_identifier(identifier, self.file_stem)
        suggestion = NamingSuggestion(
            object_identifier=completion.object_identifier,
            block_name=self.block_name,
            insertion_mode=self.insertion_mode,
        )
        return suggestion, completion

    def to_dict(self):
        return {
            'object_identifier': None,
            'block_name': self.block_name,
            'insertion_mode': self.insertion_mode,
            'file_stem': self.file_stem,
        }


def is_valid_identifier(identifier: str) -> bool:
    return isinstance(identifier, str) and bool(IDENTIFIER_RE.match(identifier))


def is_valid_file_stem(stem: str) -> bool:
    return isinstance(stem, str) and bool(stem) and not UNSAFE_STEM_RE.search(stem)


def complete_with_user_identifier(identifier: str, stem: str) -> ImportCompletion:
    """Build the import statement for a stylesheet object name chosen by the user."""
    if not is_valid_identifier(identifier):
        raise InvalidIdentifierError(identifier)
    if not is_valid_file_stem(stem):
        raise InvalidFileStemError(stem)
    return ImportCompletion(
        import_statement_text=f"import {identifier} from './{stem}{STYLESHEET_EXTENSION}';\n",
        object_identifier=identifier,
    )


def import_insert_line(source: str) -> int:
    """Line for a synthesized import: below a shebang, otherwise the top of the file."""
    return 1 if source.startswith('#!') else 0


def analyze(source: str, variant: str = LanguageVariant.STANDARD, offset: int = 0,
            file_name: str = DEFAULT_FILE_NAME,
            offset_encoding: str = OffsetEncoding.CODEPOINT) -> Union[NamingSuggestion, PendingSuggestion]:
    """
    Analyze ``source`` at the cursor ``offset``.

    ``offset`` counts code points by default; pass
    ``OffsetEncoding.UTF16`` for editors that count UTF-16 code units.

    Raises ParseError when the file does not parse. Returns a
    PendingSuggestion when the file has no stylesheet-module import, so the
    caller can ask the user for an object name.
    """
    if offset_encoding == OffsetEncoding.UTF16:
        offset = codepoint_offset(source, offset)
    tree = parse_source(source, variant)
    binding = find_stylesheet_import(tree)
    element = find_innermost_element(tree, offset)

    block: Optional[str] = None
    if element is not None and binding is not None:
        block = find_block_from_ancestors(tree, element, (binding.local_name,))
    if not block and binding is not None:
        block = to_camel_case(stylesheet_stem(binding.module_path))
        logger.debug(f"Block {block!r} taken from stylesheet {binding.module_path}")
    if not block:
        block = to_camel_case(file_stem(file_name)) or DEFAULT_BLOCK
        logger.debug(f"Block {block!r} taken from file name {file_name}")

    if element is not None and element.opening_tag_contains(tree.byte_offset(offset)):
        mode = InsertionMode.ATTRIBUTE_ONLY
    else:
        mode = InsertionMode.FULL_ELEMENT

    if binding is None:
        return PendingSuggestion(block_name=block, insertion_mode=mode, file_stem=file_stem(file_name))
    return NamingSuggestion(object_identifier=binding.local_name, block_name=block, insertion_mode=mode)


def render_snippet(suggestion: NamingSuggestion, tag: str = DEFAULT_TAG) -> str:
    """Editor snippet text with numbered tab stops for object, block, tag and element."""
    class_attr = f"className={{${{1:{suggestion.object_identifier}}}.${{2:{suggestion.block_name}}}__${{4}}}}"
    if suggestion.insertion_mode == InsertionMode.ATTRIBUTE_ONLY:
        return class_attr
    return f"<${{3:{tag}}} {class_attr}>\n\t$0\n</${{3:{tag}}}>"

#!/usr/bin/env python3
"""
BEM className Assistant
Command-line entry point: suggests a ``className={styles.block__element}``
snippet for a cursor position in a JSX/TSX file.
"""

import argparse
import json
import logging
import sys

from bem_core.errors import ClassNameAssistError, UserCancelled
from bem_core.suggestion import (
    DEFAULT_OBJECT_IDENTIFIER,
    DEFAULT_TAG,
    analyze,
    import_insert_line,
    is_valid_identifier,
    render_snippet,
)
from bem_core.treesitter_parser import detect_language_variant
from utils.file_utils import is_markup_source, offset_from_position, read_file_content

logger = logging.getLogger(__name__)

MAX_PROMPT_ATTEMPTS = 3


def prompt_identifier(default: str = DEFAULT_OBJECT_IDENTIFIER) -> str:
    """Ask for the stylesheet object name; Enter accepts the default, EOF cancels."""
    for _ in range(MAX_PROMPT_ATTEMPTS):
        try:
            answer = input(f"Name of the CSS Module object [{default}]: ")
        except EOFError:
            raise UserCancelled()
        answer = answer.strip() or default
        if is_valid_identifier(answer):
            return answer
        print(f"Invalid identifier name: {answer}", file=sys.stderr)
    raise UserCancelled()


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description='Suggest a BEM className for a JSX/TSX cursor position.')
    parser.add_argument('file', help='JSX/TSX source file')
    position = parser.add_mutually_exclusive_group(required=True)
    position.add_argument('--offset', type=int, help='character offset of the cursor')
    position.add_argument('--line', type=int, help='zero-based cursor line (use with --column)')
    parser.add_argument('--column', type=int, help='zero-based cursor column (requires --line)')
    parser.add_argument('--language-id', help='editor language id, e.g. typescriptreact')
    parser.add_argument('--identifier', help='stylesheet object name to use when the file has no CSS Module import')
    parser.add_argument('--tag', default=DEFAULT_TAG, help='tag for a full element snippet')
    parser.add_argument('--json', action='store_true', help='print the result as JSON')
    parser.add_argument('--verbose', action='store_true', help='enable debug logging')
    return parser


def run(args) -> int:
    if not is_markup_source(args.file):
        logger.warning(f"{args.file} does not look like a JS/TS source file")
    source = read_file_content(args.file)
    offset = args.offset if args.offset is not None else offset_from_position(source, args.line, args.column or 0)
    variant = detect_language_variant(args.language_id, args.file)

    result = analyze(source, variant, offset, file_name=args.file)

    completion = None
    if result.needs_user_input:
        identifier = args.identifier or prompt_identifier()
        result, completion = result.complete(identifier)

    snippet = render_snippet(result, tag=args.tag)
    if args.json:
        print(json.dumps({
            'suggestion': result.to_dict(),
            'snippet': snippet,
            'import': {
                'text': completion.import_statement_text,
                'line': import_insert_line(source),
            } if completion else None,
        }, indent=2))
        return 0

    if completion:
        print(f"# insert at line {import_insert_line(source)}:")
        print(completion.import_statement_text, end='')
    print(snippet)
    return 0


def main(argv=None) -> int:
    """Main execution function."""
    parser = build_arg_parser()
    args = parser.parse_args(argv)
    if args.column is not None and args.line is None:
        parser.error('--column requires --line')
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING)

    try:
        return run(args)
    except UserCancelled:
        return 1
    except ClassNameAssistError as e:
        print(f"BEM: {e}", file=sys.stderr)
        return 1
    except (FileNotFoundError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())

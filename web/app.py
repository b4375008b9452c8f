"""
Web Interface for the BEM className Assistant
JSON endpoints an editor plugin can call with the document text and cursor.
"""

import logging
import os
import sys
from pathlib import Path

# Add project root to Python path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from flask import Flask, jsonify, request
from bem_core.errors import InvalidFileStemError, InvalidIdentifierError, ParseError
from bem_core.markup_tree import OffsetEncoding
from bem_core.suggestion import (
    DEFAULT_FILE_NAME,
    DEFAULT_TAG,
    analyze as analyze_source,
    complete_with_user_identifier,
    import_insert_line,
    render_snippet,
)
from bem_core.treesitter_parser import detect_language_variant

logger = logging.getLogger(__name__)

app = Flask(__name__)


OPTIONAL_STRING_FIELDS = ('file_name', 'language_id', 'identifier', 'tag')
OFFSET_ENCODINGS = (OffsetEncoding.CODEPOINT, OffsetEncoding.UTF16)


def _invalid_optional_field(data):
    for name in OPTIONAL_STRING_FIELDS:
        if data.get(name) is not None and not isinstance(data[name], str):
            return name
    return None


@app.route('/analyze', methods=['POST'])
def analyze():
    """Suggest a className for the cursor position in the posted source."""
    data = request.get_json(silent=True) or {}
    source = data.get('source')
    offset = data.get('offset')
    # bool is an int subclass, so true/false must be rejected explicitly
    if not isinstance(source, str) or isinstance(offset, bool) or not isinstance(offset, int):
        return jsonify({'error': 'Both source (string) and offset (integer) are required'}), 400
    bad_field = _invalid_optional_field(data)
    if bad_field:
        return jsonify({'error': f'{bad_field} must be a string'}), 400
    offset_encoding = data.get('offset_encoding') or OffsetEncoding.CODEPOINT
    if offset_encoding not in OFFSET_ENCODINGS:
        return jsonify({'error': f'offset_encoding must be one of {", ".join(OFFSET_ENCODINGS)}'}), 400

    file_name = data.get('file_name') or DEFAULT_FILE_NAME
    variant = detect_language_variant(data.get('language_id'), file_name)
    tag = data.get('tag') or DEFAULT_TAG

    try:
        result = analyze_source(source, variant, offset, file_name=file_name, offset_encoding=offset_encoding)
        completion = None
        if result.needs_user_input and data.get('identifier'):
            result, completion = result.complete(data['identifier'])
    except (ParseError, InvalidIdentifierError, InvalidFileStemError) as e:
        return jsonify({'error': str(e)}), 400
    except Exception as e:
        logger.error(f"Error analyzing {file_name}: {str(e)}", exc_info=True)
        return jsonify({'error': str(e)}), 500

    response = {
        'needs_user_input': result.needs_user_input,
        'suggestion': result.to_dict(),
        'snippet': None if result.needs_user_input else render_snippet(result, tag=tag),
        'import': None,
    }
    if completion:
        response['import'] = {
            'text': completion.import_statement_text,
            'line': import_insert_line(source),
        }
    return jsonify(response)


@app.route('/complete', methods=['POST'])
def complete():
    """Build the stylesheet import for an object name the user typed in."""
    data = request.get_json(silent=True) or {}
    identifier = data.get('identifier')
    file_stem = data.get('file_stem')
    if not isinstance(identifier, str) or not isinstance(file_stem, str) or not identifier or not file_stem:
        return jsonify({'error': 'Both identifier and file_stem are required strings'}), 400
    try:
        completion = complete_with_user_identifier(identifier, file_stem)
    except (InvalidIdentifierError, InvalidFileStemError) as e:
        return jsonify({'error': str(e)}), 400
    return jsonify({
        'import_statement': completion.import_statement_text,
        'object_identifier': completion.object_identifier,
    })


if __name__ == '__main__':
    logging.basicConfig(level=logging.DEBUG)
    port = int(os.environ.get("PORT", 5000))
    app.run(host="0.0.0.0", port=port, debug=True)

import sys
import os
import pytest
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))
from bem_core.errors import InvalidFileStemError, InvalidIdentifierError, ParseError
from bem_core.markup_tree import OffsetEncoding
from bem_core.suggestion import (
    ImportCompletion,
    InsertionMode,
    NamingSuggestion,
    PendingSuggestion,
    analyze,
    complete_with_user_identifier,
    import_insert_line,
    render_snippet,
)
from bem_core.treesitter_parser import LanguageVariant

CARD = (
    "import React from 'react';\n"
    "import styles from './Card.module.scss';\n"
    "\n"
    "export const Card = ({ title, active }) => (\n"
    "  <article className={active ? styles.card__active : styles.card}>\n"
    "    <header className=\"plain\">\n"
    "      <h2>{title}</h2>\n"
    "    </header>\n"
    "  </article>\n"
    ");\n"
)

def test_block_from_nearest_ancestor_class_name():
    result = analyze(CARD, offset=CARD.index('{title}</h2>') + 2)
    assert isinstance(result, NamingSuggestion)
    assert result.object_identifier == 'styles'
    assert result.block_name == 'card'
    assert result.insertion_mode == InsertionMode.FULL_ELEMENT
    assert result.needs_user_input is False

def test_cursor_in_opening_tag_inserts_attribute_only():
    code = (
        "import styles from './Card.module.scss';\n"
        "const x = <div className={styles.card__title}><div className=\"x\">hi</div></div>;\n"
    )
    result = analyze(code, offset=code.index('className="x"'))
    assert result.insertion_mode == InsertionMode.ATTRIBUTE_ONLY
    assert result.block_name == 'card'

def test_opening_tag_bounds_are_inclusive():
    code = "import s from './A.module.css';\nconst x = <p>text</p>;\n"
    assert analyze(code, offset=code.index('<p>')).insertion_mode == InsertionMode.ATTRIBUTE_ONLY
    assert analyze(code, offset=code.index('text')).insertion_mode == InsertionMode.ATTRIBUTE_ONLY
    assert analyze(code, offset=code.index('ext')).insertion_mode == InsertionMode.FULL_ELEMENT

def test_nearest_ancestor_wins():
    code = (
        "import styles from './Page.module.css';\n"
        "const x = (\n"
        "  <div className={styles.page}>\n"
        "    <ul className={clsx(styles.list__wide)}>\n"
        "      <li>item</li>\n"
        "    </ul>\n"
        "  </div>\n"
        ");\n"
    )
    assert analyze(code, offset=code.index('item')).block_name == 'list'

def test_conditional_consequent_is_scanned_first():
    code = (
        "import styles from './Card.module.css';\n"
        "const x = <div className={cond ? styles.card : styles.row}><span>a</span></div>;\n"
    )
    assert analyze(code, offset=code.index('a</span>')).block_name == 'card'

def test_falls_back_to_stylesheet_stem():
    code = (
        'import cls from "./Card.module.scss";\n'
        'const x = <div className={other.thing}><span>a</span></div>;\n'
    )
    result = analyze(code, offset=code.index('a</span>'), file_name='Whatever.jsx')
    assert result.object_identifier == 'cls'
    assert result.block_name == 'card'

def test_stylesheet_stem_used_outside_markup():
    code = "import styles from './user-menu.module.css';\nconst a = 1;\n"
    result = analyze(code, offset=len(code))
    assert result.block_name == 'userMenu'
    assert result.insertion_mode == InsertionMode.FULL_ELEMENT

def test_ancestor_using_other_object_is_ignored():
    code = (
        "import s from './Layout.module.css';\n"
        "const x = <div className={styles.card}><i /></div>;\n"
    )
    assert analyze(code, offset=code.index('<i')).block_name == 'layout'

def test_missing_import_needs_user_input():
    code = "export const x = 1;\n"
    result = analyze(code, LanguageVariant.TYPED, 0, file_name='src/UserProfileCard.tsx')
    assert isinstance(result, PendingSuggestion)
    assert result.needs_user_input is True
    assert result.block_name == 'userProfileCard'
    assert result.insertion_mode == InsertionMode.FULL_ELEMENT
    assert result.file_stem == 'UserProfileCard'

def test_missing_import_ignores_ancestor_class_names():
    code = "const x = <div className={styles.card}><span>a</span></div>;\n"
    result = analyze(code, offset=code.index('a</span>'), file_name='Profile.jsx')
    assert result.needs_user_input
    assert result.block_name == 'profile'

def test_pending_suggestion_completion():
    pending = PendingSuggestion(block_name='card', insertion_mode=InsertionMode.ATTRIBUTE_ONLY, file_stem='Card')
    suggestion, completion = pending.complete('css')
    assert suggestion == NamingSuggestion('css', 'card', InsertionMode.ATTRIBUTE_ONLY)
    assert completion.import_statement_text == "import css from './Card.module.scss';\n"

def test_complete_with_user_identifier():
    completion = complete_with_user_identifier('$style_1', 'UserProfileCard')
    assert completion == ImportCompletion(
        import_statement_text="import $style_1 from './UserProfileCard.module.scss';\n",
        object_identifier='$style_1',
    )

@pytest.mark.parametrize('identifier', ['', '1style', 'my-style', 'a b'])
def test_invalid_identifier(identifier):
    with pytest.raises(InvalidIdentifierError):
        complete_with_user_identifier(identifier, 'Card')

def test_parse_error_propagates():
    with pytest.raises(ParseError):
        analyze("const x = <div>;\n", offset=0)

def test_typed_source():
    code = (
        "import styles from './Card.module.scss';\n"
        "type Props = { title: string };\n"
        "export const Card = ({ title }: Props) => <div className={styles.card__root}>{title}</div>;\n"
    )
    result = analyze(code, LanguageVariant.TYPED, code.index('{title}</div>') + 1, file_name='Card.tsx')
    assert result.block_name == 'card'
    assert result.insertion_mode == InsertionMode.FULL_ELEMENT

def test_render_attribute_snippet():
    suggestion = NamingSuggestion('styles', 'card', InsertionMode.ATTRIBUTE_ONLY)
    assert render_snippet(suggestion) == 'className={${1:styles}.${2:card}__${4}}'

def test_render_full_element_snippet():
    suggestion = NamingSuggestion('styles', 'card', InsertionMode.FULL_ELEMENT)
    assert render_snippet(suggestion, tag='section') == (
        '<${3:section} className={${1:styles}.${2:card}__${4}}>\n\t$0\n</${3:section}>'
    )

def test_import_insert_line():
    assert import_insert_line('#!/usr/bin/env node\nconst a = 1;\n') == 1
    assert import_insert_line('const a = 1;\n') == 0

@pytest.mark.parametrize('identifier', [None, 123, ['css']])
def test_non_string_identifier_is_invalid(identifier):
    with pytest.raises(InvalidIdentifierError):
        complete_with_user_identifier(identifier, 'Card')

@pytest.mark.parametrize('stem', ["x';alert(1);'", '../Card', 'a\\b', 'Card\n', '', 'Ca"rd'])
def test_unsafe_file_stem_is_rejected(stem):
    with pytest.raises(InvalidFileStemError):
        complete_with_user_identifier('css', stem)

def test_pending_completion_rejects_unsafe_file_name():
    result = analyze("const a = 1;\n", offset=0, file_name="it's.jsx")
    with pytest.raises(InvalidFileStemError):
        result.complete('css')

def test_utf16_offsets_account_for_astral_characters():
    code = (
        "import styles from './Card.module.scss';\n"
        "const x = <div className={styles.card}>\U0001F600<b>x</b></div>;\n"
    )
    b_open = code.index('<b>')
    # one emoji before <b> adds one extra UTF-16 unit
    result = analyze(code, offset=b_open + 1, offset_encoding=OffsetEncoding.UTF16)
    assert result.insertion_mode == InsertionMode.ATTRIBUTE_ONLY
    # end of <b>'s opening tag; read as code points this would be past it
    result = analyze(code, offset=code.index('x</b>') + 1, offset_encoding=OffsetEncoding.UTF16)
    assert result.insertion_mode == InsertionMode.ATTRIBUTE_ONLY
    result = analyze(code, offset=code.index('x</b>') + 2, offset_encoding=OffsetEncoding.UTF16)
    assert result.insertion_mode == InsertionMode.FULL_ELEMENT

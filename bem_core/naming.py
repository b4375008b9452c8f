"""
Naming Module
camelCase normalization of component and stylesheet names.
"""

import re

from bem_core.import_resolver import STYLESHEET_MODULE_RE

DEFAULT_STEM = 'Component'

_WORD_BOUNDARY_RE = re.compile(r'([a-z])([A-Z])')
_SEPARATOR_RE = re.compile(r'[\s\-_]+')


def to_camel_case(name: str) -> str:
    """
    Convert an identifier or file name to camelCase.

    >>> to_camel_case('UserProfileCard')
    'userProfileCard'
    >>> to_camel_case('user-profile_card')
    'userProfileCard'
    """
    words = _SEPARATOR_RE.split(_WORD_BOUNDARY_RE.sub(r'\1 \2', name))
    result = []
    for index, word in enumerate(words):
        if index == 0:
            result.append(word.lower())
        else:
            result.append(word[:1].upper() + word[1:].lower())
    return ''.join(result)


def file_stem(file_name: str) -> str:
    """``src/components/Card.tsx`` -> ``Card``"""
    base = re.split(r'[\\/]', file_name)[-1] if file_name else ''
    if not base:
        return DEFAULT_STEM
    return re.sub(r'\.[^.]+$', '', base)


def stylesheet_stem(module_path: str) -> str:
    """``./styles/Card.module.scss`` -> ``Card``"""
    base = module_path.split('/')[-1] or f'{DEFAULT_STEM}.module.scss'
    return STYLESHEET_MODULE_RE.sub('', base)

"""
File Utilities Module
Reading source files and converting editor positions to offsets.
"""

from pathlib import Path
from typing import Union

# File extension categories
EXTENSION_GROUPS = {
    'js': {'.js', '.jsx', '.mjs', '.cjs'},
    'ts': {'.ts', '.tsx', '.mts', '.cts'},
}


def is_markup_source(path: Union[str, Path]) -> bool:
    """Check if a file can hold JSX markup."""
    suffix = Path(path).suffix.lower()
    return suffix in EXTENSION_GROUPS['js'] or suffix in EXTENSION_GROUPS['ts']


def read_file_content(file_path: Union[str, Path]) -> str:
    """
    Safely read file content with proper encoding.

    Args:
        file_path: Path to the file to read

    Returns:
        File contents as string

    Raises:
        FileNotFoundError: If file doesn't exist
        IOError: If file can't be read
    """
    try:
        with open(file_path, 'r', encoding='utf-8', newline='') as f:
            return f.read()
    except UnicodeDecodeError:
        # Fallback to system default encoding if UTF-8 fails
        with open(file_path, 'r', newline='') as f:
            return f.read()


def offset_from_position(text: str, line: int, column: int) -> int:
    """
    Convert a zero-based line/column position to a character offset.

    Lines past the end clamp to the end of the text, columns past the end of
    a line clamp to the end of that line.
    """
    if line < 0 or column < 0:
        raise ValueError(f"Position must be non-negative, got line {line}, column {column}")
    lines = text.split('\n')
    if line >= len(lines):
        return len(text)
    offset = sum(len(l) + 1 for l in lines[:line])
    current = lines[line].rstrip('\r')
    return offset + min(column, len(current))

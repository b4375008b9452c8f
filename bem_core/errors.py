"""
Errors Module
Exception types raised by the className analysis pipeline.
"""

from typing import Optional


class ClassNameAssistError(Exception):
    """Base class for all errors raised by the assistant."""


class ParseError(ClassNameAssistError):
    """Source text is not valid under the selected grammar."""

    def __init__(self, message: str, line: Optional[int] = None, column: Optional[int] = None):
        self.line = line
        self.column = column
        if line is not None:
            message = f"{message} (line {line}, column {column})"
        super().__init__(message)


class InvalidIdentifierError(ClassNameAssistError):
    """A user-supplied stylesheet object name is not a valid JS identifier."""

    def __init__(self, identifier: str):
        self.identifier = identifier
        super().__init__(f"Invalid identifier name: {identifier!r}")


class UserCancelled(ClassNameAssistError):
    """The user declined to supply an identifier."""


class InvalidFileStemError(ClassNameAssistError):
    """A file stem cannot be written into a relative import path."""

    def __init__(self, stem: str):
        self.stem = stem
        super().__init__(f"Invalid file stem: {stem!r}")

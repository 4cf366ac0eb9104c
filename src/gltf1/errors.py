"""
Error taxonomy for glTF parsing.

Every failure is fatal to the whole parse. The first error raised wins and
its message is what callers see.
"""

from __future__ import annotations


class GltfError(ValueError):
    """Base class for all parse failures."""

    def __init__(self, message: str, path: str | None = None):
        super().__init__(message)
        self.path = path


class JsonSyntaxError(GltfError):
    """The input text is not well-formed JSON."""

    def __init__(self, reason: str, offset: int, line: int, column: int):
        super().__init__(f"{line}:{column}: {reason}")
        self.reason = reason
        self.offset = offset  # byte offset into the UTF-8 input
        self.line = line
        self.column = column


class MissingElementError(GltfError):
    """A required element does not exist."""

    def __init__(self, path: str):
        super().__init__(f"The required element '{path}' does not exist.", path)


class ElementTypeError(GltfError):
    """An element exists but its JSON type does not match what was expected."""


class UnexpectedValueError(GltfError):
    """A parsed value has no entry in its allow-list."""

    def __init__(self, value: object, path: str):
        super().__init__(f"Unexpected value '{value}' for element '{path}'.", path)
        self.value = value

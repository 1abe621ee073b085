"""
Naming helpers for turning X protocol names into Go identifiers.
"""

import re

# Words: runs of capitals (WINDOW), capitalized or lower words (Window, width), digits
_WORD_PATTERN = re.compile(r"[A-Z]+(?![a-z])|[A-Z]?[a-z]+|[0-9]+")


def _normalize_separators(text: str) -> str:
    """Normalize separators (underscores, hyphens) to spaces."""
    return text.replace("_", " ").replace("-", " ")


def _split_into_words(text: str) -> list[str]:
    """Split text into words, handling camelCase boundaries."""
    return _WORD_PATTERN.findall(text)


def snake_to_pascal_case(text: str) -> str:
    """Convert snake_case, camelCase or UPPER_CASE text to PascalCase.

    Examples:
        "border_width" -> "BorderWidth"
        "WINDOW" -> "Window"
        "GetWindowAttributes" -> "GetWindowAttributes"
        "CHAR2B" -> "Char2B"
    """
    if not text:
        return ""
    words = _split_into_words(_normalize_separators(text))
    return "".join(word.capitalize() for word in words if word)


def go_exported_name(text: str) -> str:
    """PascalCase a name and make sure it is a valid exported Go identifier."""
    name = snake_to_pascal_case(text)
    if not name:
        return "Unnamed"
    if name[0].isdigit():
        return "N" + name
    return name

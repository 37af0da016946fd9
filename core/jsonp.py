"""JSON-P callback name validation.

The callback name is echoed verbatim in front of the JSON body, so it must be
a plain ECMAScript identifier (Unicode aware) and must not be a keyword.
"""
from __future__ import annotations

import unicodedata

_ZWNJ = "\u200c"
_ZWJ = "\u200d"

_PART_CATEGORIES = frozenset({"Mn", "Mc", "Nd", "Pc"})

RESERVED_WORDS = frozenset({
    "break", "do", "instanceof", "typeof", "case",
    "else", "new", "var", "catch", "finally", "return", "void", "continue",
    "for", "switch", "while", "debugger", "function", "this", "with",
    "default", "if", "throw", "delete", "in", "try", "class", "enum",
    "extends", "super", "const", "export", "import", "implements", "let",
    "private", "public", "yield", "interface", "package", "protected",
    "static", "null", "true", "false",
})


def _is_identifier_start(ch: str) -> bool:
    return ch in "$_" or unicodedata.category(ch).startswith("L")


def _is_identifier_part(ch: str) -> bool:
    if _is_identifier_start(ch) or ch in (_ZWNJ, _ZWJ):
        return True
    return unicodedata.category(ch) in _PART_CATEGORIES


def is_valid_callback_name(name) -> bool:
    """Return True if ``name`` is safe to use as a JSON-P callback.

    >>> is_valid_callback_name("myCallback123")
    True
    >>> is_valid_callback_name("a;b")
    False
    >>> is_valid_callback_name("Return")
    False
    """
    if not isinstance(name, str) or not name:
        return False
    if not _is_identifier_start(name[0]):
        return False
    if not all(_is_identifier_part(ch) for ch in name[1:]):
        return False
    return name.casefold() not in RESERVED_WORDS


__all__ = ["is_valid_callback_name", "RESERVED_WORDS"]

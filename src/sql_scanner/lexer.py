#!/usr/bin/env python3
"""
SQL Lexer

Splits raw SQL text into a flat, lowercased token sequence. This is a lexical
scan only: no quoting, no operators, no nesting.
"""

import re
from pathlib import Path
from typing import List, Union

LEXER_SEPARATORS = (" ", ",", "\n", "\t", ";")
LEXER_SKIP = ("", ",", ";", "\n", "\t")

_SEPARATOR_PATTERN = re.compile("[" + re.escape("".join(LEXER_SEPARATORS)) + "]")


def lex_text(text: str) -> List[str]:
    """
    Split SQL text into tokens.

    Args:
        text: Raw SQL text

    Returns:
        Lowercased tokens in source order, without empty or punctuation-only tokens
    """
    tokens = _SEPARATOR_PATTERN.split(text.lower())
    return [token for token in tokens if token not in LEXER_SKIP]


def lex_file(file_path: Union[str, Path]) -> List[str]:
    """Read a SQL file and split it into tokens"""
    path = Path(file_path)
    if not path.exists():
        raise FileNotFoundError(f"SQL file not found: {path}")

    with open(path, "r", encoding="utf-8") as f:
        content = f.read()

    return lex_text(content)

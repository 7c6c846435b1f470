#!/usr/bin/env python3
"""
Table Extractor

Pulls table names out of a lexed SQL statement. Two flavours are provided:

* extract_tables: positional scan over the token list, per statement kind
* parse_tables: regex scan over the raw text for every ``from <table>``

Both are heuristics. Joins, subqueries and aliases are not resolved.
"""

import re
from typing import Iterable, List

from .statement import StatementKind

FROM_TABLE_PATTERN = re.compile(r"from\s*(?P<table>[a-zA-Z_]*)")

# Words that may sit between a DDL keyword and the object name
DDL_SKIP_WORDS = {
    "table", "view", "index", "or", "replace", "temporary", "temp",
    "unique", "if", "not", "exists",
}


def _clean_table_name(token: str) -> str:
    """Strip a trailing column list or stray characters from a table token"""
    name = token.split("(", 1)[0]
    return name.strip("\r)")


def _unique(names: Iterable[str]) -> List[str]:
    """Drop empty names and duplicates, keeping the first occurrence"""
    seen = set()
    result = []
    for name in names:
        if name and name not in seen:
            seen.add(name)
            result.append(name)
    return result


def _tables_after_from(tokens: List[str]) -> List[str]:
    tables = []
    for i, token in enumerate(tokens[:-1]):
        if token == "from":
            tables.append(_clean_table_name(tokens[i + 1]))
    return tables


def _token_at(tokens: List[str], position: int) -> List[str]:
    if position < len(tokens):
        return [_clean_table_name(tokens[position])]
    return []


def _ddl_target(tokens: List[str]) -> List[str]:
    for token in tokens[1:]:
        if token not in DDL_SKIP_WORDS:
            return [_clean_table_name(token)]
    return []


def extract_tables(tokens: List[str], kind: StatementKind) -> List[str]:
    """
    Extract table names from a token sequence.

    Args:
        tokens: Tokens produced by the lexer
        kind: Statement kind of the token sequence

    Returns:
        Unique table names in order of appearance
    """
    if kind in (StatementKind.SELECT, StatementKind.DELETE):
        tables = _tables_after_from(tokens)
    elif kind == StatementKind.INSERT:
        # insert into <table>
        tables = _token_at(tokens, 2)
    elif kind == StatementKind.UPDATE:
        tables = _token_at(tokens, 1)
    elif kind in (StatementKind.CREATE, StatementKind.DROP, StatementKind.ALTER):
        tables = _ddl_target(tokens)
    else:
        tables = []

    return _unique(tables)


def parse_tables(text: str) -> List[str]:
    """Find every table following ``from`` in raw SQL text"""
    matches = FROM_TABLE_PATTERN.finditer(text.lower())
    return _unique(match.group("table") for match in matches)

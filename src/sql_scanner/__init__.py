"""
SQL Scanner package for lexing, classifying and extracting tables from SQL scripts.
"""

from .lexer import LEXER_SEPARATORS, LEXER_SKIP, lex_text, lex_file
from .comments import remove_comments
from .statement import StatementKind, classify_statement
from .tables import extract_tables, parse_tables

__all__ = [
    'LEXER_SEPARATORS',
    'LEXER_SKIP',
    'lex_text',
    'lex_file',
    'remove_comments',
    'StatementKind',
    'classify_statement',
    'extract_tables',
    'parse_tables',
]

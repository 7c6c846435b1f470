"""
Statement classification based on the first token of a script.
"""

from enum import Enum
from typing import List


class StatementKind(Enum):
    """Kind of SQL statement a script holds"""

    SELECT = "SELECT"
    INSERT = "INSERT"
    UPDATE = "UPDATE"
    DELETE = "DELETE"
    CREATE = "CREATE"
    DROP = "DROP"
    ALTER = "ALTER"
    UNKNOWN = "UNKNOWN"

    @classmethod
    def from_keyword(cls, keyword: str) -> "StatementKind":
        """Map a lowercase leading keyword to its statement kind"""
        return STATEMENT_KEYWORDS.get(keyword, cls.UNKNOWN)


# Exact lowercase keywords; the lexer lowercases every token
STATEMENT_KEYWORDS = {
    "select": StatementKind.SELECT,
    "insert": StatementKind.INSERT,
    "update": StatementKind.UPDATE,
    "delete": StatementKind.DELETE,
    "create": StatementKind.CREATE,
    "drop": StatementKind.DROP,
    "alter": StatementKind.ALTER,
}


def classify_statement(tokens: List[str]) -> StatementKind:
    """Classify a token sequence by its first token"""
    if not tokens:
        return StatementKind.UNKNOWN
    return StatementKind.from_keyword(tokens[0])

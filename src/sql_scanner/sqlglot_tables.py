#!/usr/bin/env python3
"""
SQLGlot-based Table Extractor

Strict counterpart of the lexical extractor. The first statement of a script is
parsed with SQLGlot and the statement kind and table names are read from the
syntax tree instead of token positions.
"""

import logging
from typing import List, Optional

import sqlglot
from sqlglot.errors import ParseError, TokenError
from sqlglot.expressions import Select, Insert, Update, Delete, Create, Drop, Alter, Table, Union

from .statement import StatementKind

SUPPORTED_DIALECTS = ("teradata", "spark", "spark2", "postgres", "mysql", "sqlite")


class SQLGlotTableExtractor:
    """Classifies SQL scripts and extracts their tables with SQLGlot"""

    def __init__(self, dialect: Optional[str] = None):
        """Initialize the extractor

        Args:
            dialect: SQL dialect to read with (None for SQLGlot's default)

        Raises:
            ValueError: If the dialect is not supported
        """
        self.logger = logging.getLogger(__name__)
        self.dialect = self._get_dialect(dialect)

    def _get_dialect(self, dialect: Optional[str]) -> Optional[str]:
        if dialect is None:
            return None

        dialect_lower = dialect.lower()
        if dialect_lower not in SUPPORTED_DIALECTS:
            supported_dialects = ", ".join(SUPPORTED_DIALECTS)
            raise ValueError(f"Unsupported dialect '{dialect}'. Supported dialects: {supported_dialects}")
        return dialect_lower

    def parse(self, sql: str):
        """Parse the first statement of a script, None if it cannot be parsed"""
        if not sql.strip():
            return None

        try:
            expressions = sqlglot.parse(sql, read=self.dialect)
        except (ParseError, TokenError) as e:
            self.logger.warning(f"SQLGlot could not parse statement: {e}")
            return None

        for expression in expressions:
            if expression is not None:
                return expression
        return None

    def _get_statement_kind(self, parsed) -> StatementKind:
        """Determine the statement kind from parsed AST"""
        if isinstance(parsed, (Select, Union)):
            return StatementKind.SELECT
        elif isinstance(parsed, Insert):
            return StatementKind.INSERT
        elif isinstance(parsed, Update):
            return StatementKind.UPDATE
        elif isinstance(parsed, Delete):
            return StatementKind.DELETE
        elif isinstance(parsed, Create):
            return StatementKind.CREATE
        elif isinstance(parsed, Drop):
            return StatementKind.DROP
        elif isinstance(parsed, Alter):
            return StatementKind.ALTER
        return StatementKind.UNKNOWN

    def classify(self, sql: str) -> StatementKind:
        """Classify the first statement of a script"""
        parsed = self.parse(sql)
        if parsed is None:
            return StatementKind.UNKNOWN
        return self._get_statement_kind(parsed)

    def extract_tables(self, sql: str) -> List[str]:
        """
        Extract table names from the first statement of a script.

        SELECT statements report every table they reference. Every other
        statement kind reports its target table.

        Args:
            sql: SQL script text

        Returns:
            Unique lowercased table names in order of appearance
        """
        parsed = self.parse(sql)
        if parsed is None:
            return []

        kind = self._get_statement_kind(parsed)
        if kind == StatementKind.SELECT:
            tables = list(parsed.find_all(Table))
        elif kind == StatementKind.UNKNOWN or not parsed.this:
            tables = []
        else:
            # INSERT INTO t (cols) and CREATE TABLE t (cols) wrap the table in a Schema
            target = parsed.this.find(Table)
            tables = [target] if target is not None else []

        names = []
        for table in tables:
            name = self._get_table_name(table)
            if name and name not in names:
                names.append(name)
        return names

    def _get_table_name(self, table: Table) -> Optional[str]:
        """Get full lowercased table name from Table object"""
        parts = []
        if table.catalog:
            parts.append(table.catalog)
        if table.db:
            parts.append(table.db)
        if table.name:
            parts.append(table.name)

        return '.'.join(parts).lower() if parts else None

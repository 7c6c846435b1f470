#!/usr/bin/env python3
"""
SQL Table Usage Analyzer

This script scans a directory of SQL files, classifies each file by statement
kind, extracts the tables every file references and reports which SELECT files
consume tables written by which INSERT files.

Usage:
    sql-table-usage <directory>
    python -m usage_analyzer.usage <directory> [--export usage.json] [--graph usage.html]

Example:
    sql-table-usage sql_files/
    sql-table-usage sql_files/ --extractor sqlglot --dialect spark --export usage.json
"""

import sys
import argparse
from typing import Dict, List, Optional, Tuple, Union
from dataclasses import dataclass, field
from pathlib import Path
import json
from datetime import datetime
import logging

import sqlparse

from sql_scanner import StatementKind, classify_statement, extract_tables, lex_text, parse_tables, remove_comments
from sql_scanner.sqlglot_tables import SQLGlotTableExtractor, SUPPORTED_DIALECTS

from . import __version__

PACKAGE_NAME = "sql-table-usage"
EXTRACTORS = ("tokens", "regex", "sqlglot")

StatementsMap = Dict[StatementKind, List[str]]
TableMap = Dict[str, List[str]]


@dataclass
class FileAnalysis:
    """Result of scanning one SQL file"""

    file_name: str
    statement_kind: StatementKind
    tokens: List[str]
    tables: List[str]
    sql_statement: str


@dataclass
class TableUsage:
    """A table written by an INSERT file and the SELECT files reading it"""

    table: str
    writer: str
    readers: List[str] = field(default_factory=list)


@dataclass
class UsageReport:
    """Complete usage information for a directory of SQL files"""

    directory: str
    statements_map: StatementsMap
    table_map: TableMap
    usages: List[TableUsage]
    unread_tables: List[str]
    unwritten_tables: List[str]
    files: List[FileAnalysis]
    warnings: List[str]


class SQLUsageAnalyzer:
    """Analyzes SQL files to find which SELECT files read tables written by INSERT files"""

    def __init__(
        self,
        extractor: str = "tokens",
        dialect: Optional[str] = None,
        extension: str = ".sql",
        recursive: bool = False,
        keep_comments: bool = False,
    ) -> None:
        """Initialize the usage analyzer

        Args:
            extractor: Table extraction strategy ('tokens', 'regex' or 'sqlglot')
            dialect: SQL dialect for the sqlglot extractor
            extension: File extension of the SQL scripts to scan
            recursive: Whether to descend into sub-directories
            keep_comments: Lex comments as ordinary text instead of stripping them
        """
        if extractor not in EXTRACTORS:
            raise ValueError(f"Unsupported extractor '{extractor}'. Supported extractors: {', '.join(EXTRACTORS)}")

        self.extractor = extractor
        self.extension = extension if extension.startswith(".") else f".{extension}"
        self.recursive = recursive
        self.keep_comments = keep_comments
        self.sqlglot_extractor = SQLGlotTableExtractor(dialect) if extractor == "sqlglot" else None
        self.logger = logging.getLogger(__name__)

    @staticmethod
    def init_statements_map() -> StatementsMap:
        """Create a statements map with an empty file list for every statement kind"""
        return {kind: [] for kind in StatementKind}

    def analyze_file(self, file_path: Union[str, Path]) -> FileAnalysis:
        """Lex, classify and extract tables from a single SQL file"""
        path = Path(file_path)
        if not path.exists():
            raise FileNotFoundError(f"SQL file not found: {path}")

        self.logger.debug(f"parsing file '{path}'")

        with open(path, "r", encoding="utf-8") as f:
            content = f.read()

        sql_text = content if self.keep_comments else remove_comments(content)
        tokens = lex_text(sql_text)

        if self.sqlglot_extractor is not None:
            statement_kind = self.sqlglot_extractor.classify(sql_text)
            tables = self.sqlglot_extractor.extract_tables(sql_text)
        else:
            statement_kind = classify_statement(tokens)
            if self.extractor == "regex" and statement_kind in (StatementKind.SELECT, StatementKind.DELETE):
                tables = parse_tables(sql_text)
            else:
                tables = extract_tables(tokens, statement_kind)

        self.logger.debug(f"file: '{path}' statement type: '{statement_kind.value}' tables: '{', '.join(tables)}'")

        return FileAnalysis(
            file_name=str(path),
            statement_kind=statement_kind,
            tokens=tokens,
            tables=tables,
            sql_statement=content,
        )

    def find_sql_files(self, directory: Union[str, Path]) -> List[Path]:
        """List the SQL files of a directory, sorted by path"""
        directory_path = Path(directory)

        if not directory_path.exists():
            raise FileNotFoundError(f"Input folder not found: {directory}")
        if not directory_path.is_dir():
            raise NotADirectoryError(f"Input path is not a folder: {directory}")

        pattern = f"*{self.extension}"
        candidates = directory_path.rglob(pattern) if self.recursive else directory_path.glob(pattern)
        return sorted(path for path in candidates if path.is_file())

    def populate_statements_for(
        self,
        directory: Union[str, Path],
        statements_map: StatementsMap,
        table_map: Optional[TableMap] = None,
    ) -> List[FileAnalysis]:
        """Analyze every SQL file of a directory and record it in the lookup maps"""
        analyses = []

        for file_path in self.find_sql_files(directory):
            analysis = self.analyze_file(file_path)
            statements_map.setdefault(analysis.statement_kind, []).append(analysis.file_name)
            if table_map is not None:
                table_map[analysis.file_name] = analysis.tables
            analyses.append(analysis)

        return analyses

    def build_usage_report(
        self, statements_map: StatementsMap, table_map: TableMap
    ) -> Tuple[List[TableUsage], List[str], List[str]]:
        """
        Cross-reference INSERT tables against SELECT tables.

        Args:
            statements_map: Statement kind -> files
            table_map: File -> tables

        Returns:
            Tuple of (usages, tables written but never read, tables read but never written)
        """
        insert_files = statements_map.get(StatementKind.INSERT, [])
        select_files = statements_map.get(StatementKind.SELECT, [])

        usages = []
        written_tables = set()
        read_tables = set()

        for select_file in select_files:
            read_tables.update(table_map.get(select_file, []))

        for insert_file in insert_files:
            for table in table_map.get(insert_file, []):
                written_tables.add(table)
                readers = [
                    select_file for select_file in select_files
                    if table in table_map.get(select_file, [])
                ]
                usages.append(TableUsage(table=table, writer=insert_file, readers=readers))

        unread_tables = sorted(written_tables - read_tables)
        unwritten_tables = sorted(read_tables - written_tables)

        return usages, unread_tables, unwritten_tables

    def analyze_directory(self, directory: Union[str, Path]) -> UsageReport:
        """Scan a directory and build the complete usage report"""
        statements_map = self.init_statements_map()
        table_map: TableMap = {}
        warnings = []

        files = self.populate_statements_for(directory, statements_map, table_map)

        if not files:
            warnings.append(f"No {self.extension} files found in {directory}")

        for analysis in files:
            if analysis.statement_kind == StatementKind.UNKNOWN:
                warnings.append(f"Unknown statement kind in {analysis.file_name}")
            elif not analysis.tables:
                warnings.append(f"No tables found in {analysis.file_name}")

        usages, unread_tables, unwritten_tables = self.build_usage_report(statements_map, table_map)

        for kind, kind_files in statements_map.items():
            self.logger.debug(f"'{kind.value}' len: '{len(kind_files)}' files: '{', '.join(kind_files)}'")

        return UsageReport(
            directory=str(directory),
            statements_map=statements_map,
            table_map=table_map,
            usages=usages,
            unread_tables=unread_tables,
            unwritten_tables=unwritten_tables,
            files=files,
            warnings=warnings,
        )

    def print_usage_report(self, report: UsageReport) -> None:
        """Print a usage report as plain text tables"""
        print("=" * 80)
        print("SQL TABLE USAGE REPORT")
        print(f"Directory: {report.directory}")
        print("=" * 80)

        print("\n📊 SUMMARY:")
        print(f"   • Files: {len(report.files)}")
        print(f"   • Usages: {len(report.usages)}")
        print(f"   • Tables never read: {len(report.unread_tables)}")
        print(f"   • Tables never written: {len(report.unwritten_tables)}")
        print(f"   • Warnings: {len(report.warnings)}")

        print("\n📄 STATEMENTS:")
        self._print_table(
            ["Kind", "Count", "Files"],
            [
                [kind.value, str(len(files)), ", ".join(files)]
                for kind, files in report.statements_map.items()
            ],
        )

        print("\n🔍 TABLES BY FILE:")
        self._print_table(
            ["File", "Tables"],
            [[file_name, ", ".join(tables)] for file_name, tables in report.table_map.items()],
        )

        print("\n🔄 TABLE USAGE:")
        if report.usages:
            self._print_table(
                ["Table", "Written by", "Read by"],
                [
                    [usage.table, usage.writer, ", ".join(usage.readers) or "(no readers)"]
                    for usage in report.usages
                ],
            )
        else:
            print("   (no INSERT tables found)")

        if report.unwritten_tables:
            print("\n📥 TABLES READ BUT NEVER WRITTEN:")
            for table in report.unwritten_tables:
                print(f"   • {table}")

        if report.warnings:
            print("\n⚠️ WARNINGS:")
            for warning in report.warnings:
                print(f"   • {warning}")

    def _print_table(self, headers: List[str], rows: List[List[str]]) -> None:
        widths = [len(header) for header in headers]
        for row in rows:
            for i, cell in enumerate(row):
                widths[i] = max(widths[i], len(cell))

        def format_row(cells: List[str]) -> str:
            return "   " + " | ".join(cell.ljust(widths[i]) for i, cell in enumerate(cells))

        print(format_row(headers))
        print("   " + "-+-".join("-" * width for width in widths))
        for row in rows:
            print(format_row(row))

    def _format_statement(self, sql_statement: str) -> str:
        """Format a SQL statement with sqlparse for the JSON export"""
        try:
            return sqlparse.format(
                sql_statement,
                reindent=True,
                keyword_case='upper',
                strip_comments=False,
                use_space_around_operators=True,
                indent_width=4
            ).strip()
        except Exception:
            # Fallback to original if formatting fails
            return sql_statement.strip()

    def to_dict(self, report: UsageReport) -> Dict:
        """Convert a usage report to JSON-serialisable data"""
        return {
            "directory": report.directory,
            "generated_on": datetime.now().strftime('%Y-%m-%d %H:%M:%S'),
            "extractor": self.extractor,
            "statements": {kind.value: files for kind, files in report.statements_map.items()},
            "tables": report.table_map,
            "usages": [
                {"table": usage.table, "writer": usage.writer, "readers": usage.readers}
                for usage in report.usages
            ],
            "unread_tables": report.unread_tables,
            "unwritten_tables": report.unwritten_tables,
            "files": {
                analysis.file_name: {
                    "statement_kind": analysis.statement_kind.value,
                    "tables": analysis.tables,
                    "statement": self._format_statement(analysis.sql_statement),
                }
                for analysis in report.files
            },
            "warnings": report.warnings,
        }

    def export_to_json(self, report: UsageReport, output_file: Optional[str] = None) -> None:
        """Export a usage report to a JSON file, or print it when no file is given"""
        data = self.to_dict(report)

        if output_file:
            output_path = Path(output_file)
            if output_path.exists():
                output_path.unlink()
            output_path.parent.mkdir(parents=True, exist_ok=True)
            with open(output_path, "w", encoding="utf-8") as f:
                json.dump(data, f, indent=2)
            print(f"\n💾 Usage data exported to: {output_file}")
        else:
            print(json.dumps(data, indent=2))


def setup_logging(verbose: bool = False) -> None:
    """Setup logging configuration."""
    logging.basicConfig(
        level=logging.INFO,
        format='%(asctime)s - %(levelname)s - %(message)s'
    )
    if verbose:
        logging.getLogger().setLevel(logging.DEBUG)


def main() -> None:
    """Main function to run the SQL table usage analyzer"""
    parser = argparse.ArgumentParser(
        description="Report which SELECT scripts read tables written by which INSERT scripts",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Print the usage report for all .sql files in a folder
  sql-table-usage sql_files/

  # Export the report as JSON and render the usage graph
  sql-table-usage sql_files/ --export usage.json --graph usage.html

  # Use SQLGlot instead of the lexical scan
  sql-table-usage sql_files/ --extractor sqlglot --dialect spark
        """,
    )

    parser.add_argument(
        "directory",
        nargs="?",
        default=".",
        help="Folder containing the SQL files (default: current folder)",
    )

    parser.add_argument(
        "--export", help="Export usage data to a JSON file"
    )

    parser.add_argument(
        "--json", action="store_true", help="Print usage data as JSON instead of the formatted report"
    )

    parser.add_argument(
        "--graph", help="Write an interactive HTML usage graph to this file"
    )

    parser.add_argument(
        "--extractor",
        default="tokens",
        choices=EXTRACTORS,
        help="Table extraction strategy (default: tokens)"
    )

    parser.add_argument(
        "--dialect",
        choices=SUPPORTED_DIALECTS,
        help="SQL dialect for the sqlglot extractor"
    )

    parser.add_argument(
        "--extension", default=".sql", help="Extension of the SQL files to scan (default: .sql)"
    )

    parser.add_argument(
        "--recursive", "-r", action="store_true", help="Scan sub-folders as well"
    )

    parser.add_argument(
        "--keep-comments", action="store_true", help="Do not strip SQL comments before lexing"
    )

    parser.add_argument(
        "--verbose", "-v", action="store_true", help="Enable verbose logging"
    )

    args = parser.parse_args()

    setup_logging(args.verbose)
    logger = logging.getLogger(__name__)
    logger.info(f"running '{PACKAGE_NAME}' with version '{__version__}'")

    try:
        analyzer = SQLUsageAnalyzer(
            extractor=args.extractor,
            dialect=args.dialect,
            extension=args.extension,
            recursive=args.recursive,
            keep_comments=args.keep_comments,
        )
        report = analyzer.analyze_directory(args.directory)

        if args.json:
            analyzer.export_to_json(report)
        else:
            analyzer.print_usage_report(report)

        if args.export:
            analyzer.export_to_json(report, args.export)

        if args.graph:
            from .usage_visualizer import UsageVisualizer

            fig = UsageVisualizer().create_usage_visualization(report, args.graph)
            if fig is None:
                print("⚠️ Warning: Nothing to draw, usage graph not written")

    except (FileNotFoundError, NotADirectoryError) as e:
        print(f"❌ Error: {e}")
        sys.exit(1)
    except UnicodeDecodeError as e:
        print(f"❌ Error: SQL file is not valid UTF-8: {e}")
        sys.exit(1)
    except ValueError as e:
        print(f"❌ Error: {e}")
        sys.exit(1)
    except OSError as e:
        print(f"❌ Error reading SQL files: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()

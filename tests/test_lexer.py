#!/usr/bin/env python3
"""
Unit tests for the lexer, comment stripping and statement classifier
"""

import unittest
import tempfile
import shutil
from pathlib import Path
import sys
import os

# Add the src directory to the path so we can import the module
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'src'))

from sql_scanner import (
    LEXER_SEPARATORS,
    LEXER_SKIP,
    StatementKind,
    classify_statement,
    lex_file,
    lex_text,
    remove_comments,
)

DATA_DIR = Path(__file__).parent / "data"


class TestLexer(unittest.TestCase):
    """Test cases for lex_text and lex_file"""

    def setUp(self):
        """Set up test fixtures"""
        self.temp_dir = tempfile.mkdtemp()
        self.temp_path = Path(self.temp_dir)

    def tearDown(self):
        """Clean up test fixtures"""
        shutil.rmtree(self.temp_dir)

    def test_separator_and_skip_sets(self):
        self.assertEqual(set(LEXER_SEPARATORS), {" ", ",", "\n", "\t", ";"})
        self.assertEqual(set(LEXER_SKIP), {"", ",", ";", "\n", "\t"})

    def test_select_with_cols(self):
        """Test lexing the select_with_cols fixture"""
        tokens = lex_file(DATA_DIR / "select_with_cols.sql")

        self.assertEqual(
            tokens,
            ["select", "*", "title", "platforms", "released", "from", "video_games"],
        )
        self.assertEqual(classify_statement(tokens), StatementKind.SELECT)

    def test_insert_vg(self):
        tokens = lex_file(str(DATA_DIR / "insert_vg.sql"))

        self.assertEqual(tokens[:3], ["insert", "into", "video_games"])
        self.assertEqual(classify_statement(tokens), StatementKind.INSERT)

    def test_lex_text_lowercases_and_drops_empty_tokens(self):
        tokens = lex_text("INSERT\tINTO Scores\n\nVALUES (1);;")

        self.assertEqual(tokens, ["insert", "into", "scores", "values", "(1)"])

    def test_lex_text_keeps_non_separator_characters(self):
        """Carriage returns and parentheses are not separators"""
        tokens = lex_text("select a\r\nfrom b.c")

        self.assertEqual(tokens, ["select", "a\r", "from", "b.c"])

    def test_lex_text_empty(self):
        self.assertEqual(lex_text(""), [])
        self.assertEqual(lex_text(" ,;\n\t"), [])

    def test_lex_file_nonexistent(self):
        """Test lexing a non-existent file"""
        with self.assertRaises(FileNotFoundError):
            lex_file(self.temp_path / "missing.sql")

    def test_lex_file_utf8(self):
        sql_file = self.temp_path / "unicode.sql"
        sql_file.write_text("SELECT naïve FROM café;", encoding="utf-8")

        self.assertEqual(lex_file(sql_file), ["select", "naïve", "from", "café"])


class TestRemoveComments(unittest.TestCase):
    """Test cases for remove_comments"""

    def test_line_and_block_comments(self):
        text = "-- header\nSELECT * FROM t; -- trailing\n/* block\n comment */\n"

        self.assertEqual(remove_comments(text), "SELECT * FROM t;")

    def test_inline_block_comment(self):
        self.assertEqual(
            remove_comments("SELECT /* all */ * FROM t"),
            "SELECT   * FROM t",
        )

    def test_block_comment_keeps_words_apart(self):
        tokens = lex_text(remove_comments("SELECT * FROM/*x*/video_games"))

        self.assertEqual(tokens, ["select", "*", "from", "video_games"])

    def test_markers_inside_strings_kept(self):
        sql = "INSERT INTO notes VALUES ('a--b', '/* not a comment */'); -- done"

        self.assertEqual(
            remove_comments(sql),
            "INSERT INTO notes VALUES ('a--b', '/* not a comment */');",
        )

    def test_escaped_quote_in_string(self):
        sql = "SELECT 'it''s -- fine' FROM t"

        self.assertEqual(remove_comments(sql), sql)

    def test_no_comments(self):
        self.assertEqual(remove_comments("SELECT 1\nFROM t"), "SELECT 1\nFROM t")


class TestClassifier(unittest.TestCase):
    """Test cases for classify_statement"""

    def test_all_keywords(self):
        expected = {
            "select": StatementKind.SELECT,
            "insert": StatementKind.INSERT,
            "update": StatementKind.UPDATE,
            "delete": StatementKind.DELETE,
            "create": StatementKind.CREATE,
            "drop": StatementKind.DROP,
            "alter": StatementKind.ALTER,
        }
        for keyword, kind in expected.items():
            with self.subTest(keyword=keyword):
                self.assertEqual(classify_statement([keyword, "x"]), kind)

    def test_only_first_token_counts(self):
        self.assertEqual(classify_statement(["with", "cte", "as", "select"]), StatementKind.UNKNOWN)
        self.assertEqual(classify_statement(["--", "select"]), StatementKind.UNKNOWN)

    def test_empty_tokens(self):
        self.assertEqual(classify_statement([]), StatementKind.UNKNOWN)

    def test_eight_kinds(self):
        self.assertEqual(len(StatementKind), 8)
        self.assertEqual(StatementKind.from_keyword("Merge"), StatementKind.UNKNOWN)
        self.assertEqual(StatementKind.from_keyword("drop"), StatementKind.DROP)

    def test_keywords_match_literally(self):
        """Only the exact lowercase keywords classify"""
        self.assertEqual(classify_statement(["\u017felect"]), StatementKind.UNKNOWN)
        self.assertEqual(classify_statement(["\u0131nsert"]), StatementKind.UNKNOWN)
        self.assertEqual(StatementKind.from_keyword("SELECT"), StatementKind.UNKNOWN)
        self.assertEqual(classify_statement(lex_text("SELECT * FROM t")), StatementKind.SELECT)


if __name__ == '__main__':
    unittest.main()

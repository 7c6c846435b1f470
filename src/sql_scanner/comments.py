"""Comment stripping applied before lexing."""

import re

# String literals are matched first so comment markers inside them survive
_COMMENT_OR_STRING = re.compile(
    r"'(?:[^']|'')*'"
    r'|"[^"]*"'
    r"|/\*.*?\*/"
    r"|--[^\n]*",
    re.DOTALL,
)


def _replace_comment(match: re.Match) -> str:
    text = match.group(0)
    if text.startswith("/*"):
        return " "
    if text.startswith("--"):
        return ""
    return text


def remove_comments(text: str) -> str:
    """
    Remove SQL comments from the text.

    Block comments become a single space so the words around them stay apart.
    Comment markers inside quoted strings are left alone.

    Args:
        text: The text to remove comments from

    Returns:
        Text with comments and blank lines removed
    """
    text = _COMMENT_OR_STRING.sub(_replace_comment, text)

    cleaned_lines = []
    for line in text.split('\n'):
        line = line.rstrip()
        if line.strip():
            cleaned_lines.append(line)

    return '\n'.join(cleaned_lines)

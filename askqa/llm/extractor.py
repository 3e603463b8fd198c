"""
Pull a SQL statement out of a loosely formatted LLM reply.

Rules are tried in order and the first one that matches wins:

1. the first ```sql fenced block
2. a "SQL Query:" style prefix, then the first statement keyword
3. markdown stripped from the whole reply

This is a heuristic, not a parser: prose that happens to contain
"select ..." will be taken at face value.
"""
import re

FENCED_SQL = re.compile(r"```sql(.+?)```", re.DOTALL)

SQL_PATTERNS = [
    re.compile(r"(?:SQL Query:|Revised Query Example:|Revised Query:|Query:)\s*(.+)", re.IGNORECASE | re.DOTALL),
    re.compile(r"\b((?:SELECT|UPDATE|INSERT|DELETE|CREATE|ALTER|DROP)\b.+)", re.IGNORECASE | re.DOTALL),
]

HEADING_LINE = re.compile(r"^#+.*$", re.MULTILINE)
EMPHASIS = re.compile(r"\*\*|\*|__")
BLANK_LINE = re.compile(r"^[ \t\r]*\n", re.MULTILINE)


def extract_sql(raw_text: str) -> str:
    """Return the best-effort SQL statement contained in `raw_text`."""
    if not raw_text:
        return ""

    fenced = FENCED_SQL.search(raw_text)
    if fenced:
        return fenced.group(1).strip()

    for pattern in SQL_PATTERNS:
        match = pattern.search(raw_text)
        if match:
            return match.group(1).strip()

    return strip_markdown(raw_text)


def strip_markdown(text: str) -> str:
    """Drop heading lines, backticks, emphasis markers and blank lines."""
    cleaned = HEADING_LINE.sub("", text)
    cleaned = cleaned.replace("`", "")
    cleaned = EMPHASIS.sub("", cleaned)
    cleaned = BLANK_LINE.sub("", cleaned)
    return cleaned.strip()

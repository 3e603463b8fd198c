import sqlparse
from sqlparse.exceptions import SQLParseError
from askqa.core.logging import get_logger
from typing import Tuple, Optional

logger = get_logger(__name__)


class SQLValidator:
    """Read-only policy for LLM-generated SQL"""

    DANGEROUS_KEYWORDS = {
        'INSERT', 'UPDATE', 'DELETE', 'DROP', 'ALTER', 'CREATE',
        'TRUNCATE', 'GRANT', 'REVOKE', 'EXEC', 'EXECUTE',
        'MERGE', 'CALL', 'COPY', 'LOCK', 'UNLOCK', 'VACUUM'
    }

    ALLOWED_TYPES = {'SELECT'}

    def validate(self, sql: str) -> Tuple[bool, Optional[str]]:
        """Check that `sql` is a single read-only statement

        Returns:
            Tuple[bool, Optional[str]]: (is_valid, error_message)
        """
        if not sql or not sql.strip():
            return False, "SQL query is empty"

        try:
            sql_clean = sqlparse.format(sql, strip_comments=True).strip()
            statements = [s for s in sqlparse.split(sql_clean) if s.strip().rstrip(';').strip()]

            if not statements:
                return False, "SQL query is empty"
            if len(statements) > 1:
                return False, "Multiple SQL statements not allowed"

            parsed = sqlparse.parse(statements[0])[0]
        except SQLParseError as e:
            return False, f"SQL parsing error: {str(e)}"

        # Keyword tokens only: string literals and identifiers are ignored
        for token in parsed.flatten():
            if token.is_keyword and token.normalized in self.DANGEROUS_KEYWORDS:
                return False, f"Dangerous keyword detected: {token.normalized}"

        statement_type = parsed.get_type()
        if statement_type not in self.ALLOWED_TYPES:
            return False, f"Only SELECT queries are allowed (got {statement_type})"

        return True, None

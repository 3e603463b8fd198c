from sqlalchemy.dialects import postgresql
from sqlalchemy.schema import CreateTable

from askqa.db.models import Base


def render_schema_ddl() -> str:
    """Render the sample schema as PostgreSQL CREATE TABLE statements, parents first."""
    dialect = postgresql.dialect()
    statements = []
    for table in Base.metadata.sorted_tables:
        ddl = str(CreateTable(table).compile(dialect=dialect)).strip()
        statements.append(f"{ddl};")
    return "\n\n".join(statements)

import datetime
from decimal import Decimal
from typing import Any, Dict, List, Union

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncConnection

from askqa.core.exceptions import SQLExecutionError
from askqa.core.logging import get_logger

logger = get_logger(__name__)

Scalar = Union[str, int, float, bool, None]
ResultRow = Dict[str, Scalar]


def normalize_value(value: Any) -> Scalar:
    """Map a driver value onto the JSON scalars a result row may hold."""
    if value is None or isinstance(value, (bool, int, float, str)):
        return value
    if isinstance(value, (bytes, bytearray, memoryview)):
        return bytes(value).decode('utf-8', errors='replace')
    if isinstance(value, Decimal):
        # NaN and +/-Infinity have no JSON number form
        if not value.is_finite():
            return str(value)
        if value == value.to_integral_value():
            return int(value)
        return float(value)
    if isinstance(value, (datetime.datetime, datetime.date, datetime.time)):
        return value.isoformat()
    return str(value)


async def execute_sql(conn: AsyncConnection, sql: str, commit: bool = False) -> List[ResultRow]:
    """Run `sql` verbatim and return its rows as ordered column -> value dicts.

    Statements without a result set (DDL, DML) yield an empty list. The SQL is
    neither validated nor restricted here; callers decide what may run.
    """
    logger.info(f"Executing SQL: {sql}")

    # exec_driver_sql skips bind-parameter parsing so ':' and '%' reach the driver untouched
    try:
        result = await conn.exec_driver_sql(sql)
    except SQLAlchemyError as e:
        raise SQLExecutionError(f"failed to execute query: {e}") from e

    rows: List[ResultRow] = []
    if result.returns_rows:
        columns = list(result.keys())
        try:
            for record in result:
                rows.append({col: normalize_value(val) for col, val in zip(columns, record)})
        except SQLAlchemyError as e:
            raise SQLExecutionError(f"failed to iterate result set: {e}") from e

    if commit:
        try:
            await conn.commit()
        except SQLAlchemyError as e:
            raise SQLExecutionError(f"failed to commit: {e}") from e

    logger.info(f"Query returned {len(rows)} rows")
    return rows

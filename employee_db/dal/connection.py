"""Single psycopg3 connection for one CLI invocation.

The session runs in autocommit mode; writes open explicit transaction blocks
with conn.transaction(). Parameters are bound client-side (ClientCursor) so a
multi-row INSERT is not capped by the server's bind-parameter limit.
"""

from typing import Optional

import psycopg

from employee_db.errors import DatabaseConnectionError


# Failures raised while a statement runs. ClientCursor renders values on the
# client, so text that cannot be encoded fails with UnicodeError, not psycopg.Error.
DRIVER_ERRORS = (psycopg.Error, UnicodeError)


def error_reason(exc: BaseException) -> str:
    """First line of a driver error, for one-line diagnostics."""
    text = str(exc).strip()
    return text.splitlines()[0] if text else exc.__class__.__name__


def open_connection(url: str) -> psycopg.Connection:
    """Connect or raise DatabaseConnectionError (no retry)."""
    try:
        return psycopg.connect(url, autocommit=True, cursor_factory=psycopg.ClientCursor)
    except psycopg.Error as exc:
        raise DatabaseConnectionError(error_reason(exc)) from exc


def close_connection(conn: Optional[psycopg.Connection]) -> None:
    """Close the connection (safe to call with None or twice)."""
    if conn is not None and not conn.closed:
        conn.close()

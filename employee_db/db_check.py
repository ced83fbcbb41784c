"""Tiny DB visibility checker.

Prints:
- config source (env vs ini) and masked URL,
- current_database, current_user, current_schema,
- whether 'public.employees' exists,
- employees row count (if exists).

Run with: python -m employee_db.db_check
"""

import sys

import psycopg

from employee_db.config import masked_url, resolve_database
from employee_db.dal import EmployeeStore
from employee_db.dal.schema import TABLE_EXISTS_SQL
from employee_db.errors import EmployeeDBError


def main() -> int:
    try:
        url, src = resolve_database()
        with EmployeeStore(url) as store:
            with store.conn.cursor() as cur:
                cur.execute("SELECT current_database(), current_user, current_schema()")
                db, user, schema = cur.fetchone()
                cur.execute(TABLE_EXISTS_SQL)
                exists = bool(cur.fetchone()[0])
            rows = store.count_rows() if exists else None
    except EmployeeDBError as exc:
        print(f"ERROR: {exc}", file=sys.stderr)
        return exc.kind.exit_code
    except psycopg.Error as exc:
        print(f"ERROR: query failed: {exc}", file=sys.stderr)
        return 1

    print(f"config_source={src}")
    print(f"url={masked_url(url)}")
    print(f"db={db} user={user} schema={schema}")
    print(f"employees_exists={exists}" + (f" rows={rows}" if rows is not None else ""))
    return 0


if __name__ == "__main__":
    sys.exit(main())

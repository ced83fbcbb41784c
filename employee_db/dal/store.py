"""Data access layer for the employees table.

EmployeeStore owns the one connection of the process. Callers never see a
cursor; every driver error is re-raised as the matching EmployeeDBError.
"""

from __future__ import annotations

from typing import Iterable, List, Optional

import psycopg

from employee_db.dal import schema
from employee_db.dal.connection import DRIVER_ERRORS, close_connection, error_reason, open_connection
from employee_db.errors import (
    BatchInsertError,
    DatabaseConnectionError,
    IndexOperationError,
    InsertError,
    QueryError,
    SchemaError,
)
from employee_db.models import Employee, EmployeeRow


class EmployeeStore:
    """All SQL-shaped access to the employees relation."""

    def __init__(self, url: str):
        self.url = url
        self._conn: Optional[psycopg.Connection] = None

    def __enter__(self) -> "EmployeeStore":
        self.connect()
        return self

    def __exit__(self, *exc_info) -> bool:
        self.disconnect()
        return False

    @property
    def conn(self) -> psycopg.Connection:
        """The open connection; raises DatabaseConnectionError before connect()."""
        if self._conn is None:
            raise DatabaseConnectionError("not connected")
        return self._conn

    # -- connection ---------------------------------------------------------

    def connect(self) -> None:
        """Open the connection once; later calls are no-ops."""
        if self._conn is None:
            self._conn = open_connection(self.url)
            print("Successfully connected to database")

    def disconnect(self) -> None:
        """Close the connection if open."""
        close_connection(self._conn)
        self._conn = None

    # -- schema and writes --------------------------------------------------

    def create_schema(self) -> None:
        """Create the employees table if absent (idempotent)."""
        try:
            with self.conn.transaction():
                with self.conn.cursor() as cur:
                    cur.execute(schema.SCHEMA_SQL)
        except DRIVER_ERRORS as exc:
            raise SchemaError(error_reason(exc)) from exc

    def insert_one(self, employee: Employee) -> None:
        """Insert one record in its own transaction."""
        try:
            with self.conn.transaction():
                with self.conn.cursor() as cur:
                    cur.execute(schema.INSERT_SQL, employee.as_params())
        except DRIVER_ERRORS as exc:
            raise InsertError(error_reason(exc)) from exc

    def insert_batch(self, employees: Iterable[Employee]) -> int:
        """Insert all records as one multi-row INSERT in one transaction.

        All-or-nothing: a bad value anywhere rolls back the whole batch.
        An empty batch is a no-op. Returns the number of records sent.
        """
        batch = list(employees)
        if not batch:
            return 0
        query = schema.INSERT_PREFIX + ", ".join([schema.VALUES_ROW] * len(batch))
        params = [value for employee in batch for value in employee.as_params()]
        try:
            with self.conn.transaction():
                with self.conn.cursor() as cur:
                    cur.execute(query, params)
        except DRIVER_ERRORS as exc:
            raise BatchInsertError(f"{len(batch)} records rolled back: {error_reason(exc)}") from exc
        return len(batch)

    # -- reads --------------------------------------------------------------

    def _fetch_rows(self, query: str, params=None) -> List[EmployeeRow]:
        """Run a read query and map each result row to an EmployeeRow."""
        try:
            with self.conn.cursor() as cur:
                cur.execute(query, params)
                return [EmployeeRow.from_db(row) for row in cur.fetchall()]
        except DRIVER_ERRORS as exc:
            raise QueryError(error_reason(exc)) from exc

    def list_all(self) -> List[EmployeeRow]:
        """Distinct (full_name, birth_date) rows with age, sorted by name then date."""
        return self._fetch_rows(schema.LIST_ALL_SQL)

    def find_by_criteria(self, gender: str, surname_prefix: str) -> List[EmployeeRow]:
        """Rows with the given gender whose full_name starts with surname_prefix."""
        params = {"gender": gender, "pattern": schema.like_pattern(surname_prefix)}
        return self._fetch_rows(schema.CRITERIA_SQL, params)

    def count_rows(self) -> int:
        """Total rows in employees, duplicates included."""
        try:
            with self.conn.cursor() as cur:
                cur.execute(schema.COUNT_SQL)
                row = cur.fetchone()
                return int(row[0]) if row else 0
        except DRIVER_ERRORS as exc:
            raise QueryError(error_reason(exc)) from exc

    def explain(self, gender: str, surname_prefix: str) -> str:
        """EXPLAIN ANALYZE output of the criteria query, one plan line per row."""
        params = {"gender": gender, "pattern": schema.like_pattern(surname_prefix)}
        try:
            with self.conn.cursor() as cur:
                cur.execute(schema.EXPLAIN_SQL, params)
                return "\n".join(row[0] for row in cur.fetchall())
        except DRIVER_ERRORS as exc:
            raise QueryError(error_reason(exc)) from exc

    # -- optimization -------------------------------------------------------

    def create_optimization_indexes(
        self, gender: str = schema.TARGET_GENDER, surname_prefix: str = schema.TARGET_PREFIX
    ) -> None:
        """Partial index, covering index, VACUUM ANALYZE, then work_mem.

        Each step commits on its own; a failure leaves earlier steps in place.
        """
        steps = schema.optimization_steps(gender, surname_prefix)
        for number, step in enumerate(steps, 1):
            print(f"  Step {number}: {step.label}...")
            try:
                if step.transactional:
                    with self.conn.transaction():
                        with self.conn.cursor() as cur:
                            cur.execute(step.statement)
                else:
                    with self.conn.cursor() as cur:
                        cur.execute(step.statement)
            except DRIVER_ERRORS as exc:
                raise IndexOperationError(f"step {number} ({step.label}): {error_reason(exc)}") from exc
            print("       done")
        print("Optimization completed!")

    def drop_indexes(self) -> None:
        """Drop every optimization index; absent ones are skipped by IF EXISTS."""
        try:
            with self.conn.cursor() as cur:
                for name in schema.INDEX_NAMES:
                    cur.execute(schema.drop_index_sql(name))
        except DRIVER_ERRORS as exc:
            raise IndexOperationError(error_reason(exc)) from exc
        print("All optimization indexes dropped")

    def clear_cache(self) -> None:
        """DISCARD ALL; best effort, failures are ignored."""
        try:
            with self.conn.cursor() as cur:
                cur.execute(schema.DISCARD_SQL)
        except DRIVER_ERRORS:
            pass

# -*- coding: utf-8 -*-
"""
conftest.py - Test configuration and fixtures for employee_db tests.

Purpose:
  - Replace the real DB with a tiny fake (no network, no real tables)
  - Record every statement, its params and the transaction boundaries
  - Provide a recording stand-in for EmployeeStore for command/workflow tests
"""

from contextlib import contextmanager
import importlib

import psycopg
import pytest

from employee_db.models import EmployeeRow


def sql_text(query) -> str:
    """Plain text for str queries, repr() for psycopg.sql composables."""
    return query if isinstance(query, str) else repr(query)


# =============================================================================
# 1) Tiny Fake DB so tests never touch a real PostgreSQL server
#    - Push the next fetch result(s) in your test.
#    - Code under test calls psycopg.connect() -> we give it a FakeConnection.
# =============================================================================
def _encode_params(params):
    """Encode str values as UTF-8, as ClientCursor does when it renders a query."""
    values = params.values() if isinstance(params, dict) else (params or ())
    for value in values:
        if isinstance(value, str):
            value.encode("utf-8")


class FakeCursor:
    """
    Minimal cursor:
      - records SQL you "execute" (into the shared log as well)
      - returns values you preloaded into queues for fetchone()/fetchall()
      - raises a psycopg error when a statement contains `fail_on`
      - raises UnicodeEncodeError for str params UTF-8 cannot encode
    """

    def __init__(self, log):
        self.log = log
        self.executed = []  # list of (sql, params) the code ran
        self._one_queue = []
        self._all_queue = []
        self.fail_on = None  # substring that makes execute() raise
        self.error = psycopg.DataError("invalid input syntax for type date")

    def execute(self, sql, params=None):
        """Record SQL execution (or fail on request)."""
        text = sql_text(sql)
        if self.fail_on and self.fail_on in text:
            self.log.append(("error", text))
            raise self.error
        try:
            _encode_params(params)
        except UnicodeEncodeError:
            self.log.append(("error", text))
            raise
        self.executed.append((sql, params))
        self.log.append(("execute", text))

    # ---- test helpers (you call these in your tests) ----
    def push_one(self, value):
        self._one_queue.append(value)

    def push_all(self, rows):
        self._all_queue.append(rows)

    def texts(self):
        return [sql_text(sql) for sql, _ in self.executed]

    # ---- what the app code will call ----
    def fetchone(self):
        return self._one_queue.pop(0) if self._one_queue else None

    def fetchall(self):
        return self._all_queue.pop(0) if self._all_queue else []

    def __enter__(self):
        return self

    def __exit__(self, *_):
        return False


class FakeConnection:
    """Very small connection that always returns the same FakeCursor."""

    def __init__(self, cursor: FakeCursor, log):
        self._cursor = cursor
        self.log = log
        self.closed = False

    def cursor(self):
        return self._cursor

    @contextmanager
    def transaction(self):
        self.log.append(("begin", None))
        try:
            yield
        except BaseException:
            self.log.append(("rollback", None))
            raise
        self.log.append(("commit", None))

    def close(self):
        self.closed = True
        self.log.append(("close", None))


@pytest.fixture
def fake_db(monkeypatch):
    """
    Replaces psycopg.connect with a function that returns our FakeConnection.
    Usage in tests:
        cur = fake_db
        cur.push_all([("Foster A B", "1990-01-01", "Male", 30)])
        cur.log            # ordered execute/begin/commit/rollback/close events
        cur.connections    # FakeConnection objects handed out
        cur.connect_calls  # (args, kwargs) of each psycopg.connect call
    """
    log = []
    cur = FakeCursor(log)
    cur.connections = []
    cur.connect_calls = []

    def _fake_connect(*args, **kwargs):
        cur.connect_calls.append((args, kwargs))
        conn = FakeConnection(cur, log)
        cur.connections.append(conn)
        return conn

    psycopg_module = importlib.import_module("psycopg")
    monkeypatch.setattr(psycopg_module, "connect", _fake_connect, raising=True)
    return cur


@pytest.fixture
def store(fake_db):
    """A connected EmployeeStore backed by fake_db."""
    from employee_db.dal import EmployeeStore

    s = EmployeeStore("postgresql://tester@localhost:5432/employees")
    s.connect()
    yield s
    s.disconnect()


# =============================================================================
# 2) Recording stand-in for EmployeeStore (commands + optimization workflow)
# =============================================================================
class RecordingStore:
    """Records method calls in order; criteria queries return preset rows."""

    def __init__(self, rows=None, plan="Seq Scan on employees"):
        self.calls = []
        self.rows = list(rows or [])
        self.plan = plan
        self.inserted = []
        self.batches = []

    def create_schema(self):
        self.calls.append("create_schema")

    def insert_one(self, employee):
        self.calls.append("insert_one")
        self.inserted.append(employee)

    def insert_batch(self, employees):
        self.calls.append("insert_batch")
        batch = list(employees)
        self.batches.append(batch)
        return len(batch)

    def count_rows(self):
        self.calls.append("count_rows")
        return sum(len(b) for b in self.batches)

    def list_all(self):
        self.calls.append("list_all")
        return list(self.rows)

    def find_by_criteria(self, gender, prefix):
        self.calls.append(("find_by_criteria", gender, prefix))
        return list(self.rows)

    def drop_indexes(self):
        self.calls.append("drop_indexes")

    def clear_cache(self):
        self.calls.append("clear_cache")

    def create_optimization_indexes(self, gender="Male", surname_prefix="F"):
        self.calls.append("create_optimization_indexes")

    def explain(self, gender, prefix):
        self.calls.append("explain")
        return self.plan


@pytest.fixture
def recording_store():
    return RecordingStore(rows=[
        EmployeeRow("Fisher John Paul", "1990-05-01", "Male", 35),
        EmployeeRow("Foster Mary Ann", "1985-01-20", "Male", 41),
    ])


@pytest.fixture
def empty_store():
    return RecordingStore()

"""DDL and SQL text for the employees table and its optimization indexes.

Values never get concatenated into SQL: row data goes through placeholders and
the index predicates are composed with psycopg.sql literals.
"""

from __future__ import annotations

from typing import NamedTuple, Tuple

from psycopg import sql

TABLE = "employees"

SCHEMA_SQL = """
CREATE TABLE IF NOT EXISTS employees (
  id SERIAL PRIMARY KEY,
  full_name VARCHAR(255) NOT NULL,
  birth_date DATE NOT NULL,
  gender VARCHAR(10) NOT NULL,
  created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
);
"""

INSERT_SQL = "INSERT INTO employees (full_name, birth_date, gender) VALUES (%s, %s, %s)"
INSERT_PREFIX = "INSERT INTO employees (full_name, birth_date, gender) VALUES "
VALUES_ROW = "(%s, %s, %s)"

# one representative row per (full_name, birth_date)
LIST_ALL_SQL = """
SELECT DISTINCT ON (full_name, birth_date)
       full_name, birth_date, gender,
       EXTRACT(YEAR FROM AGE(birth_date))::int AS age
  FROM employees
 ORDER BY full_name, birth_date
"""

CRITERIA_SQL = """
SELECT full_name, birth_date, gender,
       EXTRACT(YEAR FROM AGE(birth_date))::int AS age
  FROM employees
 WHERE gender = %(gender)s
   AND full_name LIKE %(pattern)s
 ORDER BY full_name
"""

EXPLAIN_SQL = "EXPLAIN ANALYZE " + CRITERIA_SQL

COUNT_SQL = "SELECT COUNT(*) FROM employees"
TABLE_EXISTS_SQL = "SELECT to_regclass('public.employees') IS NOT NULL"
VACUUM_SQL = "VACUUM ANALYZE employees"
WORK_MEM = "256MB"
DISCARD_SQL = "DISCARD ALL"

PARTIAL_INDEX = "idx_employees_male_f_surname"
COVERING_INDEX = "idx_employees_covering"
LEGACY_INDEX = "idx_employees_gender_name"
INDEX_NAMES = (PARTIAL_INDEX, COVERING_INDEX, LEGACY_INDEX)

# the criteria the indexes are built for: Male employees, surname 'F...'
TARGET_GENDER = "Male"
TARGET_PREFIX = "F"


class OptimizationStep(NamedTuple):
    label: str
    statement: sql.Composable
    transactional: bool  # False for statements that refuse to run in a transaction block


def like_pattern(prefix: str) -> str:
    """LIKE pattern for a starts-with match."""
    return prefix + "%"


def prefix_upper_bound(prefix: str) -> str:
    """Smallest string above every string starting with prefix ('F' -> 'G')."""
    if not prefix:
        raise ValueError("prefix must not be empty")
    return prefix[:-1] + chr(ord(prefix[-1]) + 1)


def partial_index_sql(gender: str = TARGET_GENDER, prefix: str = TARGET_PREFIX) -> sql.Composed:
    """Index limited to one gender and a full_name range the prefix query can match."""
    return sql.SQL(
        "CREATE INDEX IF NOT EXISTS {name} ON {table} (full_name, birth_date) "
        "WHERE gender = {gender} AND full_name >= {low} AND full_name < {high}"
    ).format(
        name=sql.Identifier(PARTIAL_INDEX),
        table=sql.Identifier(TABLE),
        gender=sql.Literal(gender),
        low=sql.Literal(prefix),
        high=sql.Literal(prefix_upper_bound(prefix)),
    )


def covering_index_sql(gender: str = TARGET_GENDER) -> sql.Composed:
    """Index holding every column the criteria query reads."""
    return sql.SQL(
        "CREATE INDEX IF NOT EXISTS {name} ON {table} (gender, full_name, birth_date) "
        "WHERE gender = {gender}"
    ).format(
        name=sql.Identifier(COVERING_INDEX),
        table=sql.Identifier(TABLE),
        gender=sql.Literal(gender),
    )


def drop_index_sql(name: str) -> sql.Composed:
    return sql.SQL("DROP INDEX IF EXISTS {}").format(sql.Identifier(name))


def optimization_steps(gender: str = TARGET_GENDER, prefix: str = TARGET_PREFIX) -> Tuple[OptimizationStep, ...]:
    """Ordered steps run by EmployeeStore.create_optimization_indexes()."""
    return (
        OptimizationStep(
            f"Creating partial index for {gender} employees with surname '{prefix}'",
            partial_index_sql(gender, prefix),
            True,
        ),
        OptimizationStep("Creating covering index", covering_index_sql(gender), True),
        OptimizationStep("Running VACUUM ANALYZE on employees", sql.SQL(VACUUM_SQL), False),
        OptimizationStep(
            f"Raising work_mem to {WORK_MEM} for this session",
            sql.SQL("SET work_mem = {}").format(sql.Literal(WORK_MEM)),
            True,
        ),
    )

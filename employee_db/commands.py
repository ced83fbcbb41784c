"""The six CLI operations as tagged command values.

parse_command() validates the mode and its arguments up front, before any
connection exists, and returns exactly one command. execute() runs it.
"""

from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Sequence, Union

from employee_db.dal.schema import TARGET_GENDER, TARGET_PREFIX
from employee_db.errors import ArgumentError
from employee_db.generator import RandomDataGenerator, TargetedDataGenerator
from employee_db.models import Employee
from employee_db.optimize import RULE, THIN_RULE, format_report, run_optimization

RANDOM_FILL_COUNT = 1_000_000
TARGETED_FILL_COUNT = 100
PREVIEW_ROWS = 10


@dataclass(frozen=True)
class CreateSchema:
    description = "Create employee table"


@dataclass(frozen=True)
class InsertEmployee:
    employee: Employee
    description = "Insert employee"


@dataclass(frozen=True)
class ListEmployees:
    description = "Display all employees"


@dataclass(frozen=True)
class FillDatabase:
    random_count: int = RANDOM_FILL_COUNT
    targeted_count: int = TARGETED_FILL_COUNT
    description = "Fill database with test data"


@dataclass(frozen=True)
class QueryEmployees:
    gender: str = TARGET_GENDER
    prefix: str = TARGET_PREFIX
    description = "Query employees by criteria"


@dataclass(frozen=True)
class OptimizeDatabase:
    description = "Optimize database and measure improvement"


Command = Union[CreateSchema, InsertEmployee, ListEmployees, FillDatabase, QueryEmployees, OptimizeDatabase]

INSERT_USAGE = (
    "Mode 2 requires 3 arguments: <full_name> <birth_date> <gender>\n"
    'Example: employees 2 "Ivanov Petr Sergeevich" 2009-07-12 Male'
)


def _checked_text(name: str, value: str) -> str:
    """Return value, or raise ArgumentError if it cannot be sent as UTF-8."""
    try:
        value.encode("utf-8")
    except UnicodeEncodeError as exc:
        # undecodable argv bytes arrive as lone surrogates
        raise ArgumentError(f"{name} is not valid UTF-8 text: {value!r}") from exc
    return value


def parse_command(mode: int, args: Sequence[str]) -> Command:
    """Map mode 1-6 plus positional args to a command, or raise ArgumentError."""
    if mode == 1:
        return CreateSchema()
    if mode == 2:
        if len(args) < 3:
            raise ArgumentError(INSERT_USAGE)
        full_name, birth_date, gender = (
            _checked_text(name, value)
            for name, value in zip(("full_name", "birth_date", "gender"), args)
        )
        return InsertEmployee(Employee(full_name, birth_date, gender))
    if mode == 3:
        return ListEmployees()
    if mode == 4:
        return FillDatabase()
    if mode == 5:
        return QueryEmployees()
    if mode == 6:
        return OptimizeDatabase()
    raise ArgumentError(f"Invalid mode {mode}. Please use mode 1-6.")


# -- runners ---------------------------------------------------------------

def _print_rows(rows) -> None:
    """Print each row as a block followed by a thin rule."""
    for row in rows:
        for line in row.describe():
            print(line)
        print(THIN_RULE)


def _create_schema(command: CreateSchema, store) -> None:
    """Mode 1: create the employees table."""
    print("Creating employee table...")
    store.create_schema()
    print("Table 'employees' created successfully!")


def _insert_employee(command: InsertEmployee, store) -> None:
    """Mode 2: insert one record and echo it back with its age."""
    store.insert_one(command.employee)
    print("Employee added successfully!")
    for line in command.employee.describe():
        print(line)


def _list_employees(command: ListEmployees, store) -> None:
    """Mode 3: print every distinct (name, birth date) pair."""
    print("Displaying all employees (unique by Full Name + Birth Date, sorted by Full Name):")
    print(THIN_RULE)
    rows = store.list_all()
    if not rows:
        print("No employees found in database.")
        return
    print(f"Total employees: {len(rows)}")
    print(THIN_RULE)
    _print_rows(rows)


def _fill_database(command: FillDatabase, store) -> None:
    """Mode 4: insert the random batch, then the targeted batch."""
    print(f"Generating {command.random_count:,} random employees...")
    random_rows = RandomDataGenerator().generate(command.random_count)
    print("Inserting random employees into database...")
    inserted = store.insert_batch(random_rows)
    print(f"Batch insert completed: {inserted:,} employees added")

    print(f"Generating {command.targeted_count:,} targeted employees "
          f"({TARGET_GENDER}, surname starts with '{TARGET_PREFIX}')...")
    targeted_rows = TargetedDataGenerator(TARGET_GENDER, TARGET_PREFIX).generate(command.targeted_count)
    print("Inserting targeted employees into database...")
    inserted += store.insert_batch(targeted_rows)
    print(f"Database filled with {inserted:,} employees! row_count={store.count_rows():,}")


def _query_employees(command: QueryEmployees, store) -> None:
    """Mode 5: timed criteria query with a short preview."""
    print(f"Querying employees: Gender = {command.gender}, Surname starts with '{command.prefix}'")
    print(THIN_RULE)
    start = time.perf_counter()
    rows = store.find_by_criteria(command.gender, command.prefix)
    elapsed_ms = (time.perf_counter() - start) * 1000.0
    print(f"Query completed in {elapsed_ms:.2f} ms")
    print(f"Found {len(rows)} employees matching criteria")
    print(THIN_RULE)
    preview = rows[:PREVIEW_ROWS]
    if preview:
        print(f"Displaying first {len(preview)} results:")
        _print_rows(preview)


def _optimize_database(command: OptimizeDatabase, store) -> None:
    """Mode 6: before/after timing around index creation, then the plan."""
    print("Database Optimization Process")
    print(f"Query criteria: Gender = {TARGET_GENDER}, Surname starts with '{TARGET_PREFIX}'")
    print(RULE)
    report = run_optimization(store)
    for line in format_report(report):
        print(line)
    print("\nQuery plan after optimization:")
    for line in store.explain(TARGET_GENDER, TARGET_PREFIX).splitlines():
        print(f"  {line}")


_RUNNERS = {
    CreateSchema: _create_schema,
    InsertEmployee: _insert_employee,
    ListEmployees: _list_employees,
    FillDatabase: _fill_database,
    QueryEmployees: _query_employees,
    OptimizeDatabase: _optimize_database,
}


def execute(command: Command, store) -> None:
    """Run one command against an open EmployeeStore."""
    runner = _RUNNERS.get(type(command))
    if runner is None:
        raise TypeError(f"unknown command: {command!r}")
    runner(command, store)

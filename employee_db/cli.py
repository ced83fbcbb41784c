"""Entry point: employees <mode> [args...]

Modes:
  1  create employee table
  2  insert employee: employees 2 "Ivanov Petr Sergeevich" 2009-07-12 Male
  3  display all employees (unique by name+date, sorted)
  4  fill database with 1,000,100 test records
  5  query males with surname starting with 'F' (with timing)
  6  optimize database and measure improvement

Failures are caught once here, printed to stderr and turned into exit code 1.
"""

from __future__ import annotations

import argparse
import sys
from typing import List, Optional, Sequence

from employee_db.commands import execute, parse_command
from employee_db.config import resolve_database
from employee_db.dal import EmployeeStore
from employee_db.errors import ArgumentError, EmployeeDBError
from employee_db.optimize import RULE

USAGE_LINES = [
    "Employee Management System - Usage:",
    RULE,
    "Modes:",
    "  1 - Create employee table",
    "      Example: employees 1",
    "  2 - Insert employee",
    '      Example: employees 2 "Ivanov Petr Sergeevich" 2009-07-12 Male',
    "  3 - Display all employees (unique by name+date, sorted)",
    "      Example: employees 3",
    "  4 - Fill database with 1,000,100 test records",
    "      Example: employees 4",
    "  5 - Query males with last name starting with 'F' (with timing)",
    "      Example: employees 5",
    "  6 - Optimize database and measure improvement",
    "      Example: employees 6",
    RULE,
]


class _Parser(argparse.ArgumentParser):
    """ArgumentParser that raises ArgumentError instead of exiting with 2."""

    def error(self, message):
        raise ArgumentError(message)


def build_parser() -> argparse.ArgumentParser:
    """Positional mode plus any number of mode arguments."""
    p = _Parser(prog="employees", description="Employee table manager", add_help=False)
    p.add_argument("mode", type=int, help="operation 1-6")
    p.add_argument("args", nargs="*", help="mode arguments (mode 2: full_name birth_date gender)")
    return p


def print_usage() -> None:
    """Print the usage block to stdout."""
    for line in USAGE_LINES:
        print(line)


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Parse, connect, run one command. Returns the process exit code."""
    argv: List[str] = list(sys.argv[1:] if argv is None else argv)
    try:
        ns = build_parser().parse_args(argv)
        command = parse_command(ns.mode, ns.args)
    except ArgumentError as exc:
        print(f"ERROR: {exc}", file=sys.stderr)
        print_usage()
        return exc.kind.exit_code

    try:
        with EmployeeStore(resolve_database().url) as store:
            print(f"Executing: {command.description}")
            print(RULE)
            execute(command, store)
            print(RULE)
            print("Command completed successfully!")
    except EmployeeDBError as exc:
        print(f"ERROR: {exc}", file=sys.stderr)
        return exc.kind.exit_code
    return 0


if __name__ == "__main__":
    sys.exit(main())

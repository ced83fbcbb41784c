"""Error kinds and exceptions for the employee tool.

Every failure is tagged with an ErrorKind. The CLI catches EmployeeDBError once
at the top and turns the kind into an exit code and a message label.
"""

from __future__ import annotations

import enum


class ErrorKind(enum.Enum):
    """What failed, plus the exit code and label reported for it."""

    CONFIG = ("configuration error", 1)
    CONNECTION = ("connection failed", 1)
    SCHEMA = ("schema error", 1)
    INSERT = ("insert failed", 1)
    BATCH_INSERT = ("batch insert failed", 1)
    QUERY = ("query failed", 1)
    INDEX = ("index operation failed", 1)
    ARGUMENT = ("invalid arguments", 1)

    def __init__(self, label: str, exit_code: int):
        self.label = label
        self.exit_code = exit_code


class EmployeeDBError(Exception):
    """Base error; subclasses pin the kind."""

    kind = ErrorKind.QUERY

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        return f"{self.kind.label}: {self.message}"


class ConfigError(EmployeeDBError):
    kind = ErrorKind.CONFIG


class DatabaseConnectionError(EmployeeDBError):
    """Store unreachable or credentials rejected."""

    kind = ErrorKind.CONNECTION


class SchemaError(EmployeeDBError):
    kind = ErrorKind.SCHEMA


class InsertError(EmployeeDBError):
    kind = ErrorKind.INSERT


class BatchInsertError(EmployeeDBError):
    kind = ErrorKind.BATCH_INSERT


class QueryError(EmployeeDBError):
    kind = ErrorKind.QUERY


class IndexOperationError(EmployeeDBError):
    """Creating, dropping or maintaining optimization indexes failed."""

    kind = ErrorKind.INDEX


class ArgumentError(EmployeeDBError):
    """Bad mode or wrong number of arguments; reported with usage text."""

    kind = ErrorKind.ARGUMENT

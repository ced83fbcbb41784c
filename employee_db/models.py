"""Employee record and query-result row."""

from __future__ import annotations

import sys
import datetime as dt
from dataclasses import dataclass
from typing import List, NamedTuple, Optional

GENDERS = ("Male", "Female")
DATE_FORMAT = "%Y-%m-%d"


def _describe(full_name: str, birth_date: str, gender: str, age: int) -> List[str]:
    return [
        f"Full Name: {full_name}",
        f"Birth Date: {birth_date}",
        f"Gender: {gender}",
        f"Age: {age} years",
    ]


@dataclass(frozen=True)
class Employee:
    """One employee as entered or generated; age is derived, not stored."""

    full_name: str
    birth_date: str  # YYYY-MM-DD
    gender: str

    def age(self, today: Optional[dt.date] = None) -> int:
        """Completed years between birth_date and today.

        An unparsable birth_date yields 0 and a diagnostic on stderr.
        """
        try:
            born = dt.datetime.strptime(self.birth_date, DATE_FORMAT).date()
        except (TypeError, ValueError):
            print(f"ERROR: Failed to parse birth date: {self.birth_date}", file=sys.stderr)
            return 0

        today = today or dt.date.today()
        years = today.year - born.year
        if (today.month, today.day) < (born.month, born.day):
            years -= 1
        return years

    def as_params(self) -> tuple:
        """Values in INSERT column order (full_name, birth_date, gender)."""
        return (self.full_name, self.birth_date, self.gender)

    def describe(self, today: Optional[dt.date] = None) -> List[str]:
        return _describe(self.full_name, self.birth_date, self.gender, self.age(today))


class EmployeeRow(NamedTuple):
    """(full_name, birth_date, gender, age) as returned by the store."""

    full_name: str
    birth_date: str
    gender: str
    age: int

    @classmethod
    def from_db(cls, row) -> "EmployeeRow":
        # DATE columns come back as datetime.date; str() gives YYYY-MM-DD
        full_name, birth_date, gender, age = row
        return cls(full_name, str(birth_date), gender, int(age))

    def describe(self) -> List[str]:
        return _describe(self.full_name, self.birth_date, self.gender, self.age)

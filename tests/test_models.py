"""
Tests for employee_db.models: age derivation and display lines.
"""

import datetime as dt

import pytest

from employee_db.models import Employee, EmployeeRow


@pytest.mark.analysis
@pytest.mark.parametrize(
    "birth, today, expected",
    [
        ("2000-01-01", dt.date(2024, 6, 15), 24),
        ("2000-06-15", dt.date(2024, 6, 15), 24),  # birthday today counts
        ("2000-06-16", dt.date(2024, 6, 15), 23),  # birthday tomorrow does not
        ("2000-12-31", dt.date(2024, 1, 1), 23),
        ("2000-02-29", dt.date(2023, 2, 28), 22),
        ("2000-02-29", dt.date(2023, 3, 1), 23),
    ],
)
def test_age_counts_completed_years(birth, today, expected):
    assert Employee("Foster John Paul", birth, "Male").age(today) == expected


@pytest.mark.analysis
def test_age_of_unparsable_date_is_zero(capsys):
    """Bad dates yield 0 and a diagnostic, never an exception."""
    assert Employee("Foster John Paul", "not-a-date", "Male").age() == 0
    assert "Failed to parse birth date: not-a-date" in capsys.readouterr().err


@pytest.mark.analysis
def test_age_rejects_impossible_calendar_date(capsys):
    assert Employee("Foster John Paul", "2009-13-40", "Male").age(dt.date(2024, 1, 1)) == 0


@pytest.mark.analysis
def test_age_defaults_to_today():
    emp = Employee("Foster John Paul", "1990-01-01", "Male")
    assert emp.age() == dt.date.today().year - 1990


@pytest.mark.analysis
def test_employee_is_immutable():
    emp = Employee("Foster John Paul", "1990-01-01", "Male")
    with pytest.raises(Exception):
        emp.full_name = "Other"


@pytest.mark.analysis
def test_describe_lines():
    emp = Employee("Ivanov Petr Sergeevich", "2009-07-12", "Male")
    assert emp.describe(dt.date(2024, 7, 12)) == [
        "Full Name: Ivanov Petr Sergeevich",
        "Birth Date: 2009-07-12",
        "Gender: Male",
        "Age: 15 years",
    ]


@pytest.mark.analysis
def test_row_from_db_converts_date_and_numeric_age():
    from decimal import Decimal

    row = EmployeeRow.from_db(("Fisher Linda Ann", dt.date(1970, 3, 9), "Female", Decimal("54")))
    assert row == ("Fisher Linda Ann", "1970-03-09", "Female", 54)
    assert row.describe()[-1] == "Age: 54 years"

"""Synthetic employee records for load testing.

Each generator owns a random.Random seeded at construction, so two generators
never share state and a fixed seed gives a repeatable sequence.
"""

from __future__ import annotations

import random
from typing import List, Optional

from employee_db.models import Employee, GENDERS

SURNAMES = (
    "Smith", "Johnson", "Williams", "Brown", "Jones", "Garcia", "Miller", "Davis",
    "Rodriguez", "Martinez", "Hernandez", "Lopez", "Gonzalez", "Wilson", "Anderson",
    "Thomas", "Taylor", "Moore", "Jackson", "Martin", "Lee", "Walker", "Hall",
    "Foster", "Freeman", "Fletcher", "Fisher", "Fitzgerald", "Flanagan", "Floyd",
    "Franklin", "Francis", "Frost", "Fuller", "Ferguson", "Fields", "Flores",
)

FIRST_NAMES = (
    "James", "John", "Robert", "Michael", "William", "David", "Richard", "Joseph",
    "Thomas", "Charles", "Mary", "Patricia", "Jennifer", "Linda", "Elizabeth",
    "Barbara", "Susan", "Jessica", "Sarah", "Karen", "Nancy", "Margaret", "Lisa",
    "Betty", "Dorothy", "Sandra", "Ashley", "Kimberly", "Donna", "Emily",
)

MIDDLE_NAMES = (
    "Alan", "Andrew", "Anthony", "Benjamin", "Brian", "Christopher", "Daniel",
    "Edward", "Frank", "George", "Henry", "Ivan", "Jack", "Kevin", "Lawrence",
    "Mark", "Nathan", "Oliver", "Paul", "Peter", "Quinn", "Raymond", "Samuel",
    "Timothy", "Victor", "Walter", "Xavier", "Zachary", "Ann", "Marie",
)

BIRTH_YEARS = (1950, 2005)
FALLBACK_SURNAME = "Foster"


class RandomDataGenerator:
    """Uniform draws from the name pools, birth years 1950-2005, either gender."""

    def __init__(self, seed: Optional[int] = None):
        self._rng = random.Random(seed)

    def _surname(self) -> str:
        return self._rng.choice(SURNAMES)

    def _gender(self) -> str:
        return self._rng.choice(GENDERS)

    def _name(self) -> str:
        return f"{self._surname()} {self._rng.choice(FIRST_NAMES)} {self._rng.choice(MIDDLE_NAMES)}"

    def _birth_date(self) -> str:
        year = self._rng.randint(*BIRTH_YEARS)
        month = self._rng.randint(1, 12)
        day = self._rng.randint(1, 28)  # valid in every month
        return f"{year:04d}-{month:02d}-{day:02d}"

    def generate(self, count: int) -> List[Employee]:
        """Return count fresh records."""
        return [Employee(self._name(), self._birth_date(), self._gender()) for _ in range(count)]


class TargetedDataGenerator(RandomDataGenerator):
    """Fixed gender and surname initial, e.g. ("Male", "F")."""

    def __init__(self, gender: str, initial: str, seed: Optional[int] = None):
        super().__init__(seed)
        self.gender = gender
        self.initial = initial
        self._surnames = [s for s in SURNAMES if s.startswith(initial)] or [FALLBACK_SURNAME]

    def _surname(self) -> str:
        return self._rng.choice(self._surnames)

    def _gender(self) -> str:
        return self.gender

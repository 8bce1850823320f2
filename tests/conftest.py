"""Fixtures and helpers for distributor tests."""
from __future__ import annotations

from itertools import count
from typing import Callable, List

import pytest

from group_distributor.models import Person


@pytest.fixture
def make_person() -> Callable[..., Person]:
    """Build Person records with sequential ids and names."""
    ids = count(1)

    def _make(age_group: str = "adult", **fields) -> Person:
        pid = fields.pop("id", None)
        if pid is None:
            pid = next(ids)
        fields.setdefault("name", f"Person {pid}")
        return Person(id=pid, age_group=age_group, **fields)

    return _make


@pytest.fixture
def couple(make_person) -> List[Person]:
    husband = make_person("adult", gender="M", married=True, sequence=1, relative_id=2)
    wife = make_person("adult", gender="F", married=True, sequence=2, relative_id=1)
    return [husband, wife]

"""
Data model for the Group Distributor.
"""

from dataclasses import dataclass, field
from typing import List, Optional, Tuple

CHILD = 'child'
YOUNG_CHILD = 'young child'
YOUNG_ADULT = 'young adult'
ADULT = 'adult'
SENIOR = 'senior'
INFANT = 'infant'

# Canonical order, also the default selection order
AGE_GROUPS: Tuple[str, ...] = (CHILD, YOUNG_CHILD, YOUNG_ADULT, ADULT, SENIOR, INFANT)

# Categories whose members can form a spouse pair
SPOUSE_AGE_GROUPS: Tuple[str, ...] = (ADULT, SENIOR)


@dataclass(frozen=True)
class Person:
    """A single roster entry."""
    id: int
    name: str
    age_group: str
    gender: Optional[str] = None
    married: bool = False
    relative_id: Optional[int] = None
    sequence: Optional[int] = None

    @property
    def is_married_adult(self) -> bool:
        return self.married and self.age_group in SPOUSE_AGE_GROUPS


@dataclass
class DistributionConfig:
    """
    Options for one distribution run.

    Args:
        selected_age_groups: Categories to include, in processing order
        num_groups: Number of groups to create
        separate_spouses: Place resolved spouse pairs in different groups
    """
    selected_age_groups: List[str] = field(default_factory=lambda: list(AGE_GROUPS))
    num_groups: int = 2
    separate_spouses: bool = False


Group = List[Person]

"""
Balanced allocation of a roster into groups.

Allocation runs in two phases:

1. Spouse separation (optional): each resolved spouse pair is placed
   first, the two partners in different groups.
2. Balanced fill: every remaining person is placed, one age category
   at a time, into the group holding the fewest members of that category.

Each placement is greedy. Within a single category the counts across
groups differ by at most one, but the total group sizes are not jointly
minimised across categories.
"""

from typing import Dict, List, Optional, Sequence, Set

import numpy as np

from .models import DistributionConfig, Group, Person
from .sorter import GroupSorter
from .spouses import SpouseResolver


class CategoryLoad:
    """
    Per-group member counts for each age category.

    Args:
        num_groups: Number of groups being filled
        age_groups: Categories to track
    """

    def __init__(self, num_groups: int, age_groups: Sequence[str]):
        self.columns: Dict[str, int] = {}
        for age_group in age_groups:
            self.columns.setdefault(age_group, len(self.columns))
        self.counts = np.zeros((num_groups, len(self.columns)), dtype=np.int64)

    def least_loaded(self, age_group: str, exclude: Optional[int] = None) -> int:
        """
        Find the group with the fewest members of a category.

        Args:
            age_group: Category to compare
            exclude: Group index that may not be chosen

        Returns:
            Index of the chosen group; ties go to the lowest index
        """
        column = self.counts[:, self.columns[age_group]]
        if exclude is not None:
            column = column.copy()
            column[exclude] = np.iinfo(column.dtype).max
        return int(np.argmin(column))

    def add(self, group_index: int, age_group: str) -> None:
        self.counts[group_index, self.columns[age_group]] += 1


def filter_roster(roster: Sequence[Person], age_groups: Sequence[str]) -> List[Person]:
    """Restrict a roster to the given categories, keeping roster order."""
    selected = set(age_groups)
    return [person for person in roster if person.age_group in selected]


def allocate(roster: Sequence[Person],
             config: DistributionConfig,
             resolver: Optional[SpouseResolver] = None,
             sorter: Optional[GroupSorter] = None) -> List[Group]:
    """
    Distribute a roster into balanced groups.

    Args:
        roster: People to distribute, in a stable order
        config: Selected categories, group count and spouse option
        resolver: Spouse resolution policy (default: first match)
        sorter: Ordering applied to each finished group (default: by age)

    Returns:
        ``config.num_groups`` groups, or an empty list when there are no
        groups to fill or nobody in the selected categories
    """
    if config.num_groups < 1:
        return []

    people = filter_roster(roster, config.selected_age_groups)
    if not people:
        return []

    resolver = resolver or SpouseResolver()
    sorter = sorter or GroupSorter()

    groups: List[Group] = [[] for _ in range(config.num_groups)]
    load = CategoryLoad(config.num_groups, config.selected_age_groups)
    assigned: Set[int] = set()

    def place(person: Person, group_index: int) -> None:
        groups[group_index].append(person)
        load.add(group_index, person.age_group)
        assigned.add(person.id)

    if config.separate_spouses and config.num_groups >= 2:
        for person in people:
            if not person.is_married_adult or person.id in assigned:
                continue

            spouse = resolver.resolve(person, people)
            if spouse is None or spouse.id in assigned:
                continue

            person_group = load.least_loaded(person.age_group)
            place(person, person_group)
            place(spouse, load.least_loaded(spouse.age_group, exclude=person_group))

    for age_group in load.columns:
        for person in people:
            if person.age_group != age_group or person.id in assigned:
                continue
            place(person, load.least_loaded(age_group))

    return sorter.sort_groups(groups)

"""
Ordering of group members by age priority.
"""

from typing import Dict, List, Sequence

from .models import ADULT, CHILD, INFANT, SENIOR, YOUNG_ADULT, YOUNG_CHILD, Person

# Oldest first
AGE_PRIORITY = (SENIOR, ADULT, YOUNG_ADULT, CHILD, YOUNG_CHILD, INFANT)


class GroupSorter:
    """
    Reorder group members by a ranked table of age categories.

    Args:
        priority: Categories from highest to lowest priority. A category's
            rank is its position in the table plus one; categories missing
            from the table sort after every ranked one.
    """

    def __init__(self, priority: Sequence[str] = AGE_PRIORITY):
        self.ranks: Dict[str, int] = {
            age_group: rank for rank, age_group in enumerate(priority, start=1)
        }
        self._unranked = len(self.ranks) + 1

    def rank(self, age_group: str) -> int:
        return self.ranks.get(age_group, self._unranked)

    def sort(self, group: Sequence[Person]) -> List[Person]:
        """Return a new list of the group's members, stable by rank."""
        return sorted(group, key=lambda person: self.rank(person.age_group))

    def sort_groups(self, groups: Sequence[Sequence[Person]]) -> List[List[Person]]:
        return [self.sort(group) for group in groups]

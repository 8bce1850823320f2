"""
Spouse resolution for the Group Distributor.

A spouse pair is two married adults/seniors of opposite gender linked
through their family identifiers.
"""

from typing import Iterator, Optional, Sequence

from .models import Person


class SpouseResolver:
    """
    Resolve a person's spouse within a roster.

    The default policy returns the first qualifying candidate in roster
    order. When several candidates qualify the result depends on that
    order; rosters with ambiguous family links should be checked before
    distribution.
    """

    def resolve(self, person: Person, roster: Sequence[Person]) -> Optional[Person]:
        """
        Find the spouse of a person.

        Args:
            person: The person whose spouse is wanted
            roster: The people to search, in order

        Returns:
            The first qualifying candidate, or None
        """
        return next(self.candidates(person, roster), None)

    def candidates(self, person: Person, roster: Sequence[Person]) -> Iterator[Person]:
        """Yield every roster entry that qualifies as the person's spouse."""
        if not person.is_married_adult:
            return

        for candidate in roster:
            if candidate.id == person.id:
                continue
            if not candidate.is_married_adult:
                continue
            if self._same_family(person, candidate) and self._opposite_gender(person, candidate):
                yield candidate

    @staticmethod
    def _same_family(person: Person, candidate: Person) -> bool:
        """Check whether two people are linked by their family identifiers."""
        if candidate.relative_id is not None and person.sequence == candidate.relative_id:
            return True
        if person.relative_id is not None and candidate.sequence == person.relative_id:
            return True
        return (person.relative_id is not None
                and person.relative_id == candidate.relative_id)

    @staticmethod
    def _opposite_gender(person: Person, candidate: Person) -> bool:
        if not person.gender or not candidate.gender:
            return False
        return person.gender.strip().lower() != candidate.gender.strip().lower()


class StrictSpouseResolver(SpouseResolver):
    """
    Resolver that only pairs people whose family links are unambiguous.

    A pair is accepted when each partner is the other's only candidate.
    """

    def resolve(self, person: Person, roster: Sequence[Person]) -> Optional[Person]:
        matches = list(self.candidates(person, roster))
        if len(matches) != 1:
            return None
        spouse = matches[0]
        if [p.id for p in self.candidates(spouse, roster)] != [person.id]:
            return None
        return spouse

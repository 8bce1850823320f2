import pandas as pd
from typing import Any, Dict, List, Optional, Sequence

from .allocator import allocate, filter_roster
from .models import AGE_GROUPS, DistributionConfig, Group, Person
from .sorter import GroupSorter
from .spouses import SpouseResolver, StrictSpouseResolver
from .utils import count_by_age_group, load_roster, normalize_age_group


class GroupDistributor:
    """
    Distributes a roster of people into groups with balanced age categories.

    This class handles reading the roster, holding the distribution options,
    running the allocation and reporting or exporting the resulting groups.
    """

    def __init__(self,
                 num_groups: int = 2,
                 selected_age_groups: Optional[Sequence[str]] = None,
                 separate_spouses: bool = False,
                 strict_spouses: bool = False,
                 age_priority: Optional[Sequence[str]] = None
                 ):
        """
        Initialize the distributor with its distribution options.

        Args:
            num_groups: Number of groups to create
            selected_age_groups: Categories to include (default: all)
            separate_spouses: Place married couples in different groups
            strict_spouses: Leave people with more than one possible spouse unpaired
            age_priority: Category order used to sort members within a group
        """
        self.config = DistributionConfig(
            selected_age_groups=[normalize_age_group(ag) for ag in
                                 (AGE_GROUPS if selected_age_groups is None else selected_age_groups)],
            num_groups=num_groups,
            separate_spouses=separate_spouses,
        )
        self.strict_spouses = strict_spouses
        self.sorter = GroupSorter(age_priority) if age_priority else GroupSorter()

        # Data storage
        self.roster: Optional[List[Person]] = None
        self.groups: Optional[List[Group]] = None

    def read_roster_file(self, filename: str) -> None:
        """
        Read the roster from an Excel, CSV or JSON file.

        Args:
            filename: Path to the roster file
        """
        print(f"Reading roster from {filename}...")
        self.set_roster(load_roster(filename))

    def set_roster(self, roster: Sequence[Person]) -> None:
        """Use an already loaded roster."""
        self.roster = list(roster)
        self.groups = None
        print(f"[{len(self.roster)} people, "
              f"{sum(1 for p in self.roster if p.married)} married]")

    def update_config(self, **kwargs) -> None:
        """
        Update distribution options.

        Args:
            **kwargs: Options to update
                     (num_groups, selected_age_groups, separate_spouses, strict_spouses)
        """
        for key, value in kwargs.items():
            if key == 'selected_age_groups':
                self.config.selected_age_groups = [normalize_age_group(ag) for ag in value]
            elif key == 'strict_spouses':
                self.strict_spouses = bool(value)
            elif hasattr(self.config, key):
                setattr(self.config, key, value)
            else:
                print(f"Warning: Unknown option '{key}'")
                continue
            print(f"Updated {key} to {value}")

        # groups from an earlier run no longer match the options
        self.groups = None

    def summarize_roster(self) -> Dict[str, Any]:
        """
        Summarize the loaded roster.

        Returns:
            Dictionary containing summary statistics
        """
        if self.roster is None:
            raise ValueError("No roster loaded. Please run read_roster_file first.")

        selected = filter_roster(self.roster, self.config.selected_age_groups)
        return {
            'total_people': len(self.roster),
            'selected_people': len(selected),
            'married': sum(1 for p in self.roster if p.married),
            'by_age_group': count_by_age_group(self.roster),
        }

    def print_summary(self) -> None:
        """Print a formatted summary of the roster."""
        summary = self.summarize_roster()

        print("\nROSTER SUMMARY")
        print("=" * 50)
        print(f"Total People: {summary['total_people']} ({summary['married']} married)")
        print(f"Selected People: {summary['selected_people']}")

        print("\nPEOPLE BY AGE GROUP")
        print("-" * 50)
        for age_group, count in summary['by_age_group'].items():
            marker = '*' if age_group in self.config.selected_age_groups else ' '
            print(f"{marker} {age_group.capitalize():12} {count}")

    def distribute(self) -> List[Group]:
        """
        Run the distribution with the current options.

        Returns:
            The distributed groups (empty when there is nothing to distribute)
        """
        if self.roster is None:
            raise ValueError("No roster loaded. Please run read_roster_file first.")

        print(f"\nDistributing into {self.config.num_groups} group(s)...")
        if self.config.separate_spouses:
            print("Separating spouses" + (" (strict matching)" if self.strict_spouses else ""))

        resolver = StrictSpouseResolver() if self.strict_spouses else SpouseResolver()
        self.groups = allocate(self.roster, self.config, resolver=resolver, sorter=self.sorter)

        if not self.groups:
            print("Nothing to distribute.")
        else:
            print(f"Distributed {sum(len(g) for g in self.groups)} people.")
        return self.groups

    def balance_report(self) -> pd.DataFrame:
        """
        Count members per group and age category.

        Returns:
            DataFrame indexed by group number with one column per selected
            category and a Total column
        """
        if not self.groups:
            raise ValueError("No groups available. Please run distribute first.")

        columns = list(dict.fromkeys(self.config.selected_age_groups))
        rows = []
        for group in self.groups:
            counts = {age_group: 0 for age_group in columns}
            for person in group:
                counts[person.age_group] += 1
            rows.append(counts)

        report = pd.DataFrame(rows, columns=columns)
        report.index = pd.RangeIndex(1, len(self.groups) + 1, name='Group')
        report['Total'] = report.sum(axis=1)
        return report

    def print_groups(self) -> None:
        """Print the groups in a readable format."""
        if not self.groups:
            print("No groups available.")
            return

        print("\nDISTRIBUTED GROUPS")
        print("=" * 50)
        report = self.balance_report()
        for index, group in enumerate(self.groups, start=1):
            counts = report.loc[index]
            stats = ', '.join(f"{ag.capitalize()} x{int(counts[ag])}"
                              for ag in report.columns[:-1] if counts[ag] > 0)
            print(f"\nGroup {index}: {len(group)} people ({stats})")
            print("-" * 50)
            for person in group:
                print(f"  {person.name:30} {person.age_group.capitalize()}")

    def write_groups_to_file(self, filename: str = 'groups.xlsx') -> None:
        """
        Write the groups to an Excel file.

        Args:
            filename: Output filename
        """
        if not self.groups:
            print("No groups to write.")
            return

        member_data = []
        for index, group in enumerate(self.groups, start=1):
            for position, person in enumerate(group, start=1):
                member_data.append({
                    'Group': index,
                    'Position': position,
                    'Name': person.name,
                    'Age Group': person.age_group,
                    'Gender': person.gender or '',
                    'Married': 'Y' if person.married else 'N',
                })

        with pd.ExcelWriter(filename, engine='openpyxl') as writer:
            pd.DataFrame(member_data).to_excel(writer, sheet_name='Groups', index=False)
            self.balance_report().to_excel(writer, sheet_name='Summary')
        print(f"\nGroups saved to '{filename}'")

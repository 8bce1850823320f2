"""
Utility functions for the Group Distributor.
"""

import pandas as pd
from pathlib import Path
from typing import Dict, List, Optional, Tuple

from .models import AGE_GROUPS, DistributionConfig, Person

# Spellings found in existing roster data
AGE_GROUP_ALIASES = {
    'yong child': 'young child',
    'yong adult': 'young adult',
}

MARRIED_VALUES = {'y', 'yes', 'true', '1'}

# Normalised column key -> Person field
ROSTER_COLUMNS = {
    'id': 'id',
    'name': 'name',
    'agegroup': 'age_group',
    'gender': 'gender',
    'married': 'married',
    'relativeid': 'relative_id',
    'sequence': 'sequence',
}

REQUIRED_ROSTER_COLUMNS = ['name', 'age_group']


def normalize_age_group(value: str) -> str:
    """
    Convert a category label to its canonical spelling.

    Args:
        value: Label as written in the source data

    Returns:
        One of the values in AGE_GROUPS

    Raises:
        ValueError: If the label is not a recognised category
    """
    label = ' '.join(str(value).replace('-', ' ').replace('_', ' ').lower().split())
    label = AGE_GROUP_ALIASES.get(label, label)
    if label not in AGE_GROUPS:
        raise ValueError(f"Invalid age group \"{value}\". "
                         f"Valid options: {', '.join(AGE_GROUPS)}")
    return label


def parse_married(value) -> bool:
    """Interpret a married flag such as 'y', 'N', True or 1."""
    if _is_missing(value):
        return False
    if isinstance(value, (bool, int, float)):
        return bool(value)
    return str(value).strip().lower() in MARRIED_VALUES


def validate_config(config: DistributionConfig) -> Tuple[bool, List[str]]:
    """
    Validate a distribution configuration.

    Returns:
        Tuple of (is_valid, list_of_errors)
    """
    errors = []

    if not config.selected_age_groups:
        errors.append("At least one age group must be selected")
    for age_group in config.selected_age_groups:
        if age_group not in AGE_GROUPS:
            errors.append(f"Unknown age group in selection: {age_group}")

    if config.num_groups < 1:
        errors.append(f"Number of groups must be at least 1 (got {config.num_groups})")

    return len(errors) == 0, errors


def read_roster_table(filename: str) -> pd.DataFrame:
    """
    Read a roster file into a DataFrame with normalised column names.

    Supported formats are Excel (.xlsx), CSV and JSON record lists.
    """
    suffix = Path(filename).suffix.lower()
    if suffix == '.xlsx':
        df = pd.read_excel(filename)
    elif suffix == '.csv':
        df = pd.read_csv(filename)
    elif suffix == '.json':
        df = pd.read_json(filename, orient='records')
    else:
        raise ValueError(f"Unsupported roster file type: {suffix or filename}")

    renamed = {}
    for column in df.columns:
        key = ''.join(ch for ch in str(column).lower() if ch.isalnum())
        if key in ROSTER_COLUMNS:
            renamed[column] = ROSTER_COLUMNS[key]
    return df.rename(columns=renamed)


def load_roster(filename: str) -> List[Person]:
    """
    Load a roster file as Person records in file order.

    Args:
        filename: Path to an Excel, CSV or JSON roster

    Returns:
        List of Person records

    Raises:
        ValueError: On missing columns or an unrecognised age group
    """
    df = read_roster_table(filename)
    return roster_from_dataframe(df)


def roster_from_dataframe(df: pd.DataFrame) -> List[Person]:
    """Build Person records from a DataFrame with normalised column names."""
    missing = [col for col in REQUIRED_ROSTER_COLUMNS if col not in df.columns]
    if missing:
        raise ValueError(f"Roster missing columns: {', '.join(missing)}")

    roster = []
    for row_number, (_, row) in enumerate(df.iterrows(), start=1):
        sequence = _optional_int(row.get('sequence'))
        person_id = _optional_int(row.get('id'))
        if person_id is None:
            person_id = sequence if sequence is not None else row_number

        try:
            age_group = normalize_age_group(row['age_group'])
        except ValueError as e:
            raise ValueError(f"Row {row_number}: {e}") from e

        roster.append(Person(
            id=person_id,
            name=str(row['name']).strip(),
            age_group=age_group,
            gender=_optional_str(row.get('gender')),
            married=parse_married(row.get('married')),
            relative_id=_optional_int(row.get('relative_id')),
            sequence=sequence,
        ))
    return roster


def validate_roster_file(filename: str) -> Tuple[bool, List[str]]:
    """
    Validate that a roster file can be distributed.

    Args:
        filename: Path to the roster file

    Returns:
        Tuple of (is_valid, list_of_errors)
    """
    errors = []

    try:
        df = read_roster_table(filename)

        missing_cols = [col for col in REQUIRED_ROSTER_COLUMNS if col not in df.columns]
        if missing_cols:
            errors.append(f"Roster missing columns: {', '.join(missing_cols)}")
        else:
            for row_number, (_, row) in enumerate(df.iterrows(), start=1):
                if _optional_str(row['name']) is None:
                    errors.append(f"Row {row_number}: Name is required")
                try:
                    normalize_age_group(row['age_group'])
                except ValueError as e:
                    errors.append(f"Row {row_number}: {e}")

            if not errors:
                ids = [person.id for person in roster_from_dataframe(df)]
                duplicates = sorted({pid for pid in ids if ids.count(pid) > 1})
                if duplicates:
                    errors.append(f"Duplicate ids: {', '.join(str(pid) for pid in duplicates)}")

    except FileNotFoundError:
        errors.append(f"File not found: {filename}")
    except Exception as e:
        errors.append(f"Error reading file: {str(e)}")

    return len(errors) == 0, errors


def count_by_age_group(roster: List[Person]) -> Dict[str, int]:
    """Count roster members per age category, in canonical order."""
    counts = {age_group: 0 for age_group in AGE_GROUPS}
    for person in roster:
        counts[person.age_group] = counts.get(person.age_group, 0) + 1
    return counts


def _is_missing(value) -> bool:
    if value is None:
        return True
    try:
        return bool(pd.isna(value))
    except (TypeError, ValueError):
        return False


def _optional_int(value) -> Optional[int]:
    if _is_missing(value) or str(value).strip() == '':
        return None
    return int(float(value))


def _optional_str(value) -> Optional[str]:
    if _is_missing(value):
        return None
    text = str(value).strip()
    return text or None

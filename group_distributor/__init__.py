"""
Group Distributor Package

Spreads a roster of people across a fixed number of groups so that every
age group is balanced, optionally keeping married couples apart.
"""

from .allocator import allocate
from .distributor import GroupDistributor
from .models import AGE_GROUPS, DistributionConfig, Person
from .sorter import AGE_PRIORITY, GroupSorter
from .spouses import SpouseResolver, StrictSpouseResolver
from .utils import (
    load_roster,
    validate_config,
    validate_roster_file
)

__version__ = '1.0.0'

__all__ = [
    'allocate',
    'GroupDistributor',
    'AGE_GROUPS',
    'AGE_PRIORITY',
    'DistributionConfig',
    'GroupSorter',
    'Person',
    'SpouseResolver',
    'StrictSpouseResolver',
    'load_roster',
    'validate_config',
    'validate_roster_file'
]

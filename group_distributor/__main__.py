# group_distributor/__main__.py

"""
Main script for running the Group Distributor.

Usage:
    python -m group_distributor roster.xlsx [options]
"""

import argparse
import sys
from .distributor import GroupDistributor
from .models import AGE_GROUPS
from .utils import validate_config, validate_roster_file


def main(argv=None):
    """Main function to run the distributor from command line."""
    parser = argparse.ArgumentParser(
        description='Group Distributor - Spread people evenly across groups by age group'
    )

    # Required arguments
    parser.add_argument('input_file',
                       help='Roster file (.xlsx, .csv or .json)')

    # Optional arguments
    parser.add_argument('-n', '--groups',
                       type=int,
                       default=2,
                       help='Number of groups (default: 2)')

    parser.add_argument('-a', '--age-groups',
                       nargs='+',
                       default=list(AGE_GROUPS),
                       metavar='AGE_GROUP',
                       help='Age groups to include, in processing order (default: all)')

    parser.add_argument('-o', '--output',
                       default=None,
                       help='Excel file to write the groups to')

    parser.add_argument('--separate-spouses',
                       action='store_true',
                       help='Place married couples in different groups')

    parser.add_argument('--strict-spouses',
                       action='store_true',
                       help='Do not pair people with more than one possible spouse')

    parser.add_argument('--validate-only',
                       action='store_true',
                       help='Only validate the input file without distributing')

    args = parser.parse_args(argv)

    # Validate input file
    print(f"Validating input file: {args.input_file}")
    is_valid, errors = validate_roster_file(args.input_file)

    if not is_valid:
        print("Input file validation failed:")
        for error in errors:
            print(f"  - {error}")
        sys.exit(1)

    print("Input file validation successful.")

    if args.validate_only:
        sys.exit(0)

    try:
        distributor = GroupDistributor(
            num_groups=args.groups,
            selected_age_groups=args.age_groups,
            separate_spouses=args.separate_spouses,
            strict_spouses=args.strict_spouses
        )
    except ValueError as e:
        print(f"Invalid option: {e}")
        sys.exit(1)

    is_valid, errors = validate_config(distributor.config)
    if not is_valid:
        print("Invalid options:")
        for error in errors:
            print(f"  - {error}")
        sys.exit(1)

    try:
        distributor.read_roster_file(args.input_file)
        distributor.print_summary()

        groups = distributor.distribute()

        if groups:
            distributor.print_groups()
            if args.output:
                distributor.write_groups_to_file(args.output)
        else:
            print("\nNo people in the selected age groups.")
            sys.exit(1)

    except Exception as e:
        print(f"\nError during distribution: {str(e)}")
        import traceback
        traceback.print_exc()
        sys.exit(1)


if __name__ == '__main__':
    main()

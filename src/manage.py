"""Storefront database management CLI.

Provides commands to create and drop the database schema and to load or
clear the sample data.

Usage:
    python src/manage.py setup-db         # Create all tables
    python src/manage.py drop-db          # Drop all tables
    python src/manage.py seed             # Replace data with sample records
    python src/manage.py seed --destroy   # Delete all records
"""

import argparse
import sys


def setup_database():
    """Create the database schema for the storefront domain."""
    from storefront.domain import storefront
    from storefront.utils.db import setup_db

    print("Initializing storefront domain...")
    storefront.init()
    print("Creating storefront database schema...")
    setup_db(storefront)
    print("Done.")


def drop_database():
    """Drop the database schema for the storefront domain."""
    from storefront.domain import storefront
    from storefront.utils.db import drop_db

    print("Initializing storefront domain...")
    storefront.init()
    print("Dropping storefront database schema...")
    drop_db(storefront)
    print("Done.")


def seed(destroy=False):
    """Load the sample data, or clear everything when `destroy` is set."""
    from storefront.domain import storefront
    from storefront.seed.loader import destroy_data, import_data

    storefront.init()
    with storefront.domain_context():
        if destroy:
            destroy_data()
            print("Data destroyed!")
        else:
            import_data()
            print("Data imported!")


def main():
    parser = argparse.ArgumentParser(description="Storefront database management")
    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("setup-db", help="Create all database tables")
    subparsers.add_parser("drop-db", help="Drop all database tables")

    seed_parser = subparsers.add_parser("seed", help="Import sample users, categories and products")
    seed_parser.add_argument(
        "--destroy",
        action="store_true",
        help="Delete all records instead of importing",
    )

    args = parser.parse_args()

    if args.command == "setup-db":
        setup_database()
    elif args.command == "drop-db":
        drop_database()
    elif args.command == "seed":
        seed(destroy=args.destroy)
    else:
        parser.print_help()
        sys.exit(1)


if __name__ == "__main__":
    main()

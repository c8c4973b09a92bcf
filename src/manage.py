"""Storefront database management CLI.

Creates and drops the database schema and seeds an empty catalog from a
products JSON document.

Usage:
    python src/manage.py setup-db                   # Create all tables
    python src/manage.py drop-db                    # Drop all tables
    python src/manage.py seed --file products.json  # Seed an empty catalog
"""

import argparse
import json
import sys
from pathlib import Path


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


def seed(path: Path):
    """Load products (and their embedded reviews) into an empty catalog."""
    from storefront.domain import storefront
    from storefront.product.seeding import seed_catalogue

    records = json.loads(path.read_text(encoding="utf-8"))

    storefront.init()
    with storefront.domain_context():
        result = seed_catalogue(records)

    if result.skipped:
        print("Catalog already contains products. Skipping seeding.")
    else:
        print(f"Seeded {result.products} products and {result.reviews} reviews.")


def main():
    parser = argparse.ArgumentParser(description="Storefront database management")
    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("setup-db", help="Create all database tables")
    subparsers.add_parser("drop-db", help="Drop all database tables")

    seed_parser = subparsers.add_parser("seed", help="Seed an empty catalog from a products JSON file")
    seed_parser.add_argument("--file", type=Path, default=Path("products.json"), help="Products JSON document")

    args = parser.parse_args()

    if args.command == "setup-db":
        setup_database()
    elif args.command == "drop-db":
        drop_database()
    elif args.command == "seed":
        seed(args.file)
    else:
        parser.print_help()
        sys.exit(1)


if __name__ == "__main__":
    main()

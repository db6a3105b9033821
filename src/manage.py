"""Shopping database management CLI.

Creates and drops the SQL schema for the shopping domain and loads the demo
catalogue.

Usage:
    python src/manage.py setup-db   # Create all tables
    python src/manage.py drop-db    # Drop all tables
    python src/manage.py seed       # Load demo products, discount codes and a basket
"""

import argparse
import sys


def _initialized_domain():
    from shopping.domain import shopping

    print("Initializing shopping domain...")
    shopping.init()
    return shopping


def setup_database():
    from shopping.utils.db import setup_db

    domain = _initialized_domain()
    providers = setup_db(domain)
    if providers:
        print(f"  Schema ready on: {', '.join(providers)}")
    else:
        print("  No SQL providers configured; nothing to create.")
    print("Done.")


def drop_database():
    from shopping.utils.db import drop_db

    domain = _initialized_domain()
    providers = drop_db(domain)
    if providers:
        print(f"  Schema dropped on: {', '.join(providers)}")
    else:
        print("  No SQL providers configured; nothing to drop.")
    print("Done.")


def seed_database():
    from shopping.utils.seed import seed_catalogue

    domain = _initialized_domain()
    with domain.domain_context():
        added = seed_catalogue()
    print(f"  Seeded {added} products.")
    print("Done.")


def main():
    parser = argparse.ArgumentParser(description="Shopping basket database management")
    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("setup-db", help="Create all database tables")
    subparsers.add_parser("drop-db", help="Drop all database tables")
    subparsers.add_parser("seed", help="Load the demo catalogue")

    args = parser.parse_args()

    if args.command == "setup-db":
        setup_database()
    elif args.command == "drop-db":
        drop_database()
    elif args.command == "seed":
        seed_database()
    else:
        parser.print_help()
        sys.exit(1)


if __name__ == "__main__":
    main()

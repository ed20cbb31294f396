"""Eyewear store database management CLI.

Creates and drops database schemas for the catalogue and ordering domains.
A no-op for the in-memory provider used in development and tests.

Usage:
    python src/manage.py setup-db                      # Create all tables
    python src/manage.py drop-db                       # Drop all tables
    python src/manage.py setup-db --domain ordering    # One domain only
"""

import argparse
import sys

DOMAIN_NAMES = ["catalogue", "ordering"]


def _domains(names=None):
    from catalogue.domain import catalogue
    from ordering.domain import ordering

    all_domains = {"catalogue": catalogue, "ordering": ordering}
    return {name: all_domains[name] for name in (names or DOMAIN_NAMES)}


def setup_databases(domains=None):
    """Create database schemas for the specified (or all) domains."""
    from catalogue.utils.db import setup_db

    for name, domain in _domains(domains).items():
        print(f"Initializing {name} domain...")
        domain.init()
        touched = setup_db(domain)
        print(f"  {name} schema ready ({touched} SQL provider(s)).")

    print("Done.")


def drop_databases(domains=None):
    """Drop database schemas for the specified (or all) domains."""
    from catalogue.utils.db import drop_db

    for name, domain in _domains(domains).items():
        print(f"Initializing {name} domain...")
        domain.init()
        touched = drop_db(domain)
        print(f"  {name} schema dropped ({touched} SQL provider(s)).")

    print("Done.")


def main(argv=None):
    parser = argparse.ArgumentParser(description="Eyewear store database management")
    subparsers = parser.add_subparsers(dest="command", required=True)

    for command, help_text in (("setup-db", "Create all database tables"), ("drop-db", "Drop all database tables")):
        sub = subparsers.add_parser(command, help=help_text)
        sub.add_argument(
            "--domain",
            choices=DOMAIN_NAMES,
            nargs="*",
            help="Specific domain(s) to target (default: all)",
        )

    args = parser.parse_args(argv)

    if args.command == "setup-db":
        setup_databases(args.domain)
    elif args.command == "drop-db":
        drop_databases(args.domain)
    else:
        parser.print_help()
        sys.exit(1)


if __name__ == "__main__":
    main()

"""Lastmile management CLI.

Usage:
    python src/manage.py setup-db
    python src/manage.py drop-db
    python src/manage.py create-user --email ops@example.com --name Ops --role admin
"""

import argparse
import sys

from delivery.access.user import Role


def _domain():
    from delivery.domain import delivery

    delivery.init()
    return delivery


def setup_database():
    from delivery.utils.db import setup_db

    delivery = _domain()
    print("Creating delivery database schema...")
    handled = setup_db(delivery)
    if not handled:
        print("  No relational provider configured; nothing to create.")
    print("Done.")


def drop_database():
    from delivery.utils.db import drop_db

    delivery = _domain()
    print("Dropping delivery database schema...")
    drop_db(delivery)
    print("Done.")


def create_user(email: str, name: str | None, role: str) -> str:
    """Register a user directly with the given role (bootstraps the first admin)."""
    from delivery.access.user import User

    delivery = _domain()
    with delivery.domain_context():
        user = User.register(email=email, name=name, role=Role(role))
        delivery.repository_for(User).add(user)
    print(f"Created {role} {user.email} with id {user.id}")
    return str(user.id)


def main(argv=None):
    parser = argparse.ArgumentParser(description="Lastmile management")
    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("setup-db", help="Create all database tables")
    subparsers.add_parser("drop-db", help="Drop all database tables")

    user_parser = subparsers.add_parser("create-user", help="Create a user with a specific role")
    user_parser.add_argument("--email", required=True)
    user_parser.add_argument("--name")
    user_parser.add_argument("--role", choices=[r.value for r in Role], default=Role.ADMIN.value)

    args = parser.parse_args(argv)

    if args.command == "setup-db":
        setup_database()
    elif args.command == "drop-db":
        drop_database()
    elif args.command == "create-user":
        create_user(args.email, args.name, args.role)
    else:
        parser.print_help()
        sys.exit(1)


if __name__ == "__main__":
    main()

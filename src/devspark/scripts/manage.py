# src/devspark/scripts/manage.py
"""Operator commands for the DevSpark database.

Commands:
    init-db       create all tables in the configured database
    create-user   add a user, optionally with permissions or banned
    issue-token   print a bearer token for an existing user
    sweep         remove posts and comments orphaned by a failed cascade

The sweep is meant to run periodically (for example from cron) so that a
cascade interrupted after its parent delete still converges.
"""

from __future__ import annotations

import argparse
import sys
from collections.abc import Sequence

from sqlalchemy.orm import Session

from devspark.core.permissions import ALL_PERMISSIONS
from devspark.core.security import create_access_token
from devspark.db.session import SessionLocal, create_tables
from devspark.models import User
from devspark.services.cascade import CascadeCoordinator


def create_user(
    db: Session,
    display_name: str,
    permissions: Sequence[str] = (),
    banned: bool = False,
) -> User:
    """Persist a new user.

    Raises:
        ValueError: If a permission is not a known permission token.
    """
    unknown = set(permissions) - ALL_PERMISSIONS
    if unknown:
        raise ValueError(f"Unknown permissions: {', '.join(sorted(unknown))}")
    user = User(display_name=display_name, permissions=sorted(set(permissions)), banned=banned)
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


def issue_token(db: Session, user_id: str) -> str:
    """Return an access token for an existing user.

    Raises:
        LookupError: If the user does not exist.
    """
    if db.get(User, user_id) is None:
        raise LookupError(f"User {user_id} not found")
    return create_access_token(user_id)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="devspark-manage", description=__doc__.splitlines()[0])
    commands = parser.add_subparsers(dest="command", required=True)

    commands.add_parser("init-db", help="Create all database tables")

    user_cmd = commands.add_parser("create-user", help="Create a user")
    user_cmd.add_argument("display_name")
    user_cmd.add_argument(
        "--permission",
        action="append",
        default=[],
        choices=sorted(ALL_PERMISSIONS),
        help="Grant a permission (repeatable)",
    )
    user_cmd.add_argument("--banned", action="store_true", help="Create the user banned")

    token_cmd = commands.add_parser("issue-token", help="Print an access token")
    token_cmd.add_argument("user_id")

    commands.add_parser("sweep", help="Remove orphaned posts and comments")
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    if args.command == "init-db":
        create_tables()
        print("Database initialized.")
        return 0

    db = SessionLocal()
    try:
        if args.command == "create-user":
            user = create_user(db, args.display_name, args.permission, args.banned)
            print(user.id)
        elif args.command == "issue-token":
            try:
                print(issue_token(db, args.user_id))
            except LookupError as exc:
                print(exc, file=sys.stderr)
                return 1
        elif args.command == "sweep":
            report = CascadeCoordinator.for_session(db).sweep_orphans()
            print(
                f"Removed {report.posts} posts, {report.comments} comments, "
                f"{report.scores} scores, {report.tag_links} tag links"
            )
    finally:
        db.close()
    return 0


if __name__ == "__main__":
    sys.exit(main())

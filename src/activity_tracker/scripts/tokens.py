# src/activity_tracker/scripts/tokens.py
"""Issue bearer tokens for existing users.

Accounts are provisioned out of band; this script creates one on request
and prints a token usable against the API.
"""

from __future__ import annotations

import argparse
import sys
from collections.abc import Sequence

from activity_tracker.core.errors import ContentNotFoundError
from activity_tracker.core.security import create_access_token
from activity_tracker.db.session import SessionLocal
from activity_tracker.models import User
from activity_tracker.services.content_service import ContentService


def main(argv: Sequence[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Print an access token for a user")
    group = parser.add_mutually_exclusive_group(required=True)
    group.add_argument("--user-id", type=int, help="Existing user id")
    group.add_argument("--create", metavar="NAME", help="Create a user with this name first")
    parser.add_argument("--expires-minutes", type=int, default=None)
    args = parser.parse_args(argv)

    db = SessionLocal()
    try:
        content = ContentService(db)
        user: User
        if args.create:
            user = content.create_user(args.create)
            db.commit()
            print(f"Created user {user.id} ({user.name})", file=sys.stderr)
        else:
            try:
                user = content.get_user(args.user_id)
            except ContentNotFoundError as exc:
                print(f"[tokens] ERROR: {exc}", file=sys.stderr)
                return 1
        print(create_access_token(user.id, expires_minutes=args.expires_minutes))
    finally:
        db.close()
    return 0


if __name__ == "__main__":
    sys.exit(main())

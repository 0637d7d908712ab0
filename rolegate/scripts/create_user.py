"""
Create a user (e.g. the first admin). Run from project root:
  python -m rolegate.scripts.create_user NAME EMAIL PASSWORD [role]
Example:
  python -m rolegate.scripts.create_user "Site Admin" admin@example.com your-secure-password admin
"""
import argparse
import logging
import sys
import time

from rolegate.core.config import get_settings
from rolegate.core.database import SessionLocal
from rolegate.core.roles import Role, all_roles
from rolegate.core.security import (
    NAME_MAX_LEN,
    PASSWORD_MAX_LEN,
    PASSWORD_MIN_LEN,
    hash_password,
)
from rolegate.services.user_store import EmailAlreadyExistsError, SqlAlchemyUserStore

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Create a Rolegate user (bootstrap the first admin).")
    parser.add_argument("name", help=f"Display name (1-{NAME_MAX_LEN} chars)")
    parser.add_argument("email", help="Email address, used to log in")
    parser.add_argument("password", help=f"Password ({PASSWORD_MIN_LEN}-{PASSWORD_MAX_LEN} chars)")
    parser.add_argument(
        "role",
        nargs="?",
        default=Role.USER.value,
        choices=[r.value for r in all_roles()],
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    logging.Formatter.converter = time.gmtime
    logging.basicConfig(
        level=get_settings().LOG_LEVEL,
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%SZ",
    )
    args = build_parser().parse_args(argv)

    name = args.name.strip()
    email = args.email.strip()
    if not name or len(name) > NAME_MAX_LEN:
        print("Invalid name length.", file=sys.stderr)
        return 1
    if "@" not in email:
        print("Invalid email address.", file=sys.stderr)
        return 1
    if not (PASSWORD_MIN_LEN <= len(args.password) <= PASSWORD_MAX_LEN):
        print(f"Password must be {PASSWORD_MIN_LEN}-{PASSWORD_MAX_LEN} characters.", file=sys.stderr)
        return 1

    db = SessionLocal()
    try:
        store = SqlAlchemyUserStore(db)
        if store.get_by_email(email) is not None:
            print(f"User '{email}' already exists.", file=sys.stderr)
            return 1
        try:
            store.create(
                name=name,
                email=email,
                password_hash=hash_password(args.password),
                role=args.role,
            )
        except EmailAlreadyExistsError as e:
            print(e.message, file=sys.stderr)
            return 1
        print(f"Created user '{email}' with role '{args.role}'.")
        return 0
    finally:
        db.close()


if __name__ == "__main__":
    sys.exit(main())

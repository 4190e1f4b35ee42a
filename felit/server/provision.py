"""Out-of-band administrative commands: create tables and provision users.

Usage:
    felit-admin init-db
    felit-admin adduser <username> <password> [--admin]
"""
import argparse
import sys
from typing import List, Optional

from sqlalchemy.exc import IntegrityError

from .auth import hash_password
from .config import DATABASE_URL
from .database import create_db_engine, create_session_factory, init_db
from .logging_config import configure_logging
from .models import User

logger = configure_logging()

# bcrypt only hashes the first 72 bytes and newer releases reject longer input.
MAX_PASSWORD_BYTES = 72


def add_user(session_factory, username: str, password: str, is_admin: bool = False) -> User:
    """Insert a user; raises IntegrityError when the username is taken."""
    db = session_factory()
    try:
        user = User(username=username, password_hash=hash_password(password), is_admin=is_admin)
        db.add(user)
        db.commit()
        db.refresh(user)
        logger.info("USER_PROVISIONED username=%s user_id=%s admin=%s", user.username, user.id, user.is_admin)
        return user
    except IntegrityError:
        db.rollback()
        raise
    finally:
        db.close()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="felit-admin", description="Felit chat administration")
    parser.add_argument("--database-url", default=DATABASE_URL, help="SQLAlchemy database URL")
    commands = parser.add_subparsers(dest="command", required=True)

    commands.add_parser("init-db", help="create the users and messages tables")

    adduser = commands.add_parser("adduser", help="provision a user")
    adduser.add_argument("username")
    adduser.add_argument("password")
    adduser.add_argument("--admin", action="store_true", help="grant access to the admin view")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    engine = create_db_engine(args.database_url)
    try:
        init_db(engine)
        if args.command == "init-db":
            print(f"Database ready at {args.database_url}")
            return 0

        if not args.username or not args.password:
            print("Username and password must not be empty.", file=sys.stderr)
            return 1
        if len(args.password.encode()) > MAX_PASSWORD_BYTES:
            print(f"Password must be at most {MAX_PASSWORD_BYTES} bytes.", file=sys.stderr)
            return 1
        try:
            user = add_user(create_session_factory(engine), args.username, args.password, args.admin)
        except IntegrityError:
            print(f"Error adding user: username '{args.username}' already exists", file=sys.stderr)
            return 1
        print(f"Added user {user.username} admin={user.is_admin}")
        return 0
    finally:
        engine.dispose()


if __name__ == "__main__":
    sys.exit(main())

"""
Create a user (e.g. first admin). Run from project root:
  python -m fleetdesk.scripts.create_user EMAIL PASSWORD "FULL NAME" [role]
Example:
  python -m fleetdesk.scripts.create_user admin@example.com your-secure-password "Fleet Admin" admin

Missing tables are created first, so this also bootstraps an empty database.
"""
import argparse
import logging
import sys

from pydantic import ValidationError

from fleetdesk.core.database import SessionLocal, create_tables
from fleetdesk.core.errors import DuplicateIdentifierError
from fleetdesk.schemas.users import UserCreate
from fleetdesk.services.users import create_user

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s %(message)s",
    datefmt="%Y-%m-%dT%H:%M:%SZ",
)
logger = logging.getLogger(__name__)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Create a Fleetdesk user.")
    parser.add_argument("email", help="Login email")
    parser.add_argument("password", help="Password (8-128 chars)")
    parser.add_argument("full_name", help="Display name")
    parser.add_argument("role", nargs="?", default="user", choices=["user", "admin"])
    parser.add_argument(
        "--can-view-users",
        action="store_true",
        help="Grant the users page view flag (admins get it by default)",
    )
    args = parser.parse_args(argv)

    try:
        data = UserCreate(
            email=args.email,
            password=args.password,
            full_name=args.full_name,
            role=args.role,
            can_view_users=args.can_view_users or args.role == "admin",
        )
    except ValidationError as e:
        for err in e.errors():
            print(f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}", file=sys.stderr)
        return 1

    create_tables()
    db = SessionLocal()
    try:
        user = create_user(db, data)
    except DuplicateIdentifierError as e:
        print(e.message, file=sys.stderr)
        return 1
    finally:
        db.close()
    logger.info("Created user id=%s email=%s role=%s", user.id, user.email, user.role)
    return 0


if __name__ == "__main__":
    sys.exit(main())

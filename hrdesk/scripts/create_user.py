"""
Create an account from the shell (e.g. the first admin). Run from project root:
  python -m hrdesk.scripts.create_user USERNAME PASSWORD "DISPLAY NAME" [role]
Example:
  python -m hrdesk.scripts.create_user admin your-secure-password "Administrator" admin
"""
import argparse
import logging
import sys

from hrdesk.core.database import SessionLocal
from hrdesk.core.errors import AppError
from hrdesk.models.user import UserRole
from hrdesk.schemas.auth import PASSWORD_MAX_LEN, PASSWORD_MIN_LEN, USERNAME_MAX_LEN
from hrdesk.services.auth import register_user
from hrdesk.services.credential_store import CredentialStore

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s %(message)s",
    datefmt="%Y-%m-%dT%H:%M:%SZ",
)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Create an HR Desk user.")
    parser.add_argument("username", help=f"Username (1-{USERNAME_MAX_LEN} chars)")
    parser.add_argument("password", help=f"Password ({PASSWORD_MIN_LEN}-{PASSWORD_MAX_LEN} chars)")
    parser.add_argument("display_name", help="Human-readable name")
    parser.add_argument(
        "role",
        nargs="?",
        default=UserRole.STANDARD.value,
        choices=[r.value for r in UserRole],
    )
    args = parser.parse_args(argv)

    username = args.username.strip()
    if not username or len(username) > USERNAME_MAX_LEN:
        print("Invalid username length.", file=sys.stderr)
        return 1
    if not (PASSWORD_MIN_LEN <= len(args.password) <= PASSWORD_MAX_LEN):
        print(
            f"Password must be {PASSWORD_MIN_LEN}-{PASSWORD_MAX_LEN} characters.",
            file=sys.stderr,
        )
        return 1

    db = SessionLocal()
    try:
        register_user(
            CredentialStore(db),
            username=username,
            password=args.password,
            display_name=args.display_name,
            role=args.role,
        )
    except AppError as e:
        print(f"Could not create user '{username}': {e.message}", file=sys.stderr)
        return 1
    finally:
        db.close()
    print(f"Created user '{username}' with role '{args.role}'.")
    return 0


if __name__ == "__main__":
    sys.exit(main())

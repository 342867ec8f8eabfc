"""
Create an enabled user directly (e.g. the first admin), skipping e-mail confirmation.
Run from project root:
  python -m docuploader.scripts.create_user EMAIL PASSWORD FIRST_NAME LAST_NAME [role]
Example:
  python -m docuploader.scripts.create_user admin@example.com your-secure-password Ada Admin ROLE_ADMIN
"""
import argparse
import sys

from pydantic import ValidationError

from docuploader.core.database import SessionLocal
from docuploader.core.exceptions import EntityCouldNotBeSavedError
from docuploader.models import Role
from docuploader.schemas.auth_group import AuthGroupCreate
from docuploader.schemas.user import UserCreate
from docuploader.services import auth_groups, users


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Create an enabled Document Uploader user.")
    parser.add_argument("email", help="E-mail, also the username")
    parser.add_argument("password", help="Password (1-128 chars)")
    parser.add_argument("first_name")
    parser.add_argument("last_name")
    parser.add_argument(
        "role",
        nargs="?",
        default=Role.ROLE_USER.value,
        choices=[r.value for r in Role],
    )
    args = parser.parse_args(argv)

    try:
        data = UserCreate(
            email=args.email.strip(),
            password=args.password,
            first_name=args.first_name,
            last_name=args.last_name,
        )
        group = AuthGroupCreate(username=data.email, role=Role(args.role))
    except ValidationError as e:
        for error in e.errors():
            field = ".".join(str(part) for part in error["loc"])
            print(f"Invalid {field}: {error['msg']}", file=sys.stderr)
        return 1
    email = data.email

    db = SessionLocal()
    try:
        user = users.save_user(db, data)
        user.enabled = True
        auth_groups.save_auth_group(db, group)
        db.commit()
        print(f"Created user '{email}' with role '{args.role}'.")
        return 0
    except EntityCouldNotBeSavedError as e:
        db.rollback()
        print(e.message, file=sys.stderr)
        return 1
    finally:
        db.close()


if __name__ == "__main__":
    sys.exit(main())

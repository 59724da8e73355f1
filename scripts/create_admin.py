from __future__ import annotations

import argparse
import secrets
import string
import sys

from waysbucks.config import build_sqlalchemy_db_url, is_admin_email, settings
from waysbucks.database import Base, SessionLocal, engine
from waysbucks.models.user import User
from waysbucks.repositories import UserRepository
from waysbucks.utils.password_hash import hash_password


def _generate_password(length: int = 20) -> str:
    alphabet = string.ascii_letters + string.digits
    return "".join(secrets.choice(alphabet) for _ in range(length))


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        description="Create (or reset) a store admin account. Admin rights come from ADMIN_EMAILS."
    )
    parser.add_argument("--email", required=True, help="Admin user email")
    parser.add_argument("--password", default=None, help="Admin password (generated if omitted)")
    parser.add_argument("--name", default="Admin", help="Display name")
    parser.add_argument("--reset-password", action="store_true", help="Overwrite the password of an existing user")
    args = parser.parse_args(argv)

    if build_sqlalchemy_db_url(settings).startswith("sqlite"):
        Base.metadata.create_all(bind=engine)

    email = args.email.strip().lower()
    password = args.password or _generate_password()

    with SessionLocal() as db:
        users = UserRepository(db)
        user = users.get_by_email(email)
        if user is None:
            user = users.create_user(User(email=email, password=hash_password(password), name=args.name))
            print(f"created user id={user.id} email={email}")
            if args.password is None:
                print(f"generated password: {password}")
        elif args.reset_password:
            user.password = hash_password(password)
            users.update_user(user)
            print(f"password reset for email={email}")
            if args.password is None:
                print(f"generated password: {password}")
        else:
            print(f"user already exists email={email} (password not changed)")

    if not is_admin_email(email):
        sys.stderr.write(
            "WARNING: this account has no admin rights yet. Add it to ADMIN_EMAILS, e.g.\n"
            f"  ADMIN_EMAILS=[\"{email}\"]\n"
        )
    return 0


if __name__ == "__main__":
    raise SystemExit(main())

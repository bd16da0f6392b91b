import argparse

from zorax.core.errors import Conflict
from zorax.db import base  # noqa: F401  ensure models are registered for metadata creation
from zorax.db.session import Base, SessionLocal, engine
from zorax.models.users import Role
from zorax.schemas.users import UserCreate
from zorax.services.user_service import create_user


def create_admin(username, name, password, verbose=True):
    Base.metadata.create_all(bind=engine)
    db = SessionLocal()
    try:
        try:
            create_user(db, UserCreate(username=username, name=name, password=password, role=Role.admin))
        except Conflict:
            if verbose:
                print("User '%s' already exists." % username)
            return False
        if verbose:
            print("Admin '%s' created successfully." % username)
        return True
    finally:
        db.close()


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Create an admin user.")
    parser.add_argument("username", help="The admin's username")
    parser.add_argument("name", help="The admin's display name")
    parser.add_argument("password", help="The admin's password")
    args = parser.parse_args()

    create_admin(args.username, args.name, args.password)

import logging
import uuid
from typing import Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from bloghub.core.errors import ConflictError
from bloghub.core.security import hash_password, verify_password
from bloghub.db.models.user import User
from bloghub.schemas.token import AuthContext


def get_user(db: Session, user_id: uuid.UUID) -> Optional[User]:
    return db.query(User).filter(User.id == user_id).first()


def get_user_by_email(db: Session, email: str) -> Optional[User]:
    return db.query(User).filter(User.email == email).first()


def create_user(db: Session, name: str, email: str, password: str) -> User:
    if get_user_by_email(db, email):
        raise ConflictError("Email already registered")

    new_user = User(
        name=name,
        email=email,
        password_hash=hash_password(password),
    )
    db.add(new_user)
    try:
        db.commit()
    except IntegrityError:
        # lost a race with a concurrent signup for the same email
        db.rollback()
        raise ConflictError("Email already registered")
    db.refresh(new_user)
    logging.info(f"New user registered: {new_user.email}")
    return new_user


def authenticate_user(db: Session, email: str, password: str) -> Optional[User]:
    user = get_user_by_email(db, email)
    if not user or not verify_password(password, user.password_hash):
        return None
    return user


def ensure_local_identity(db: Session, identity: AuthContext) -> User:
    """Make sure a ``users`` row exists for an externally managed identity.

    Posts, comments and likes reference ``users.id``, so an identity whose
    credentials live with an outside provider needs a local projection before
    it can own anything. The row is keyed by the token subject and has no
    password, so it can never be used for a password login.
    """
    user = get_user(db, identity.user_id)
    if user:
        return user

    email = identity.email or f"{identity.user_id}@users.invalid"
    user = User(
        id=identity.user_id,
        name=email.split("@", 1)[0] or "user",
        email=email,
        password_hash=None,
    )
    db.add(user)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        # another request created the same projection first
        user = get_user(db, identity.user_id)
        if user is None:
            raise ConflictError("Email already registered")
        return user
    db.refresh(user)
    logging.info(f"Created local identity projection for {user.id}")
    return user

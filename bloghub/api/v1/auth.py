import logging
from datetime import timedelta
from typing import Optional

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from bloghub.core.auth import get_current_identity
from bloghub.core.config import Settings, get_settings
from bloghub.core.errors import AuthenticationError, NotFoundError, ValidationError
from bloghub.core.security import create_access_token, parse_duration, require_secret
from bloghub.crud import user as crud
from bloghub.db.models.user import User
from bloghub.db.session import get_db
from bloghub.schemas.token import AuthContext
from bloghub.schemas.user import AuthResponse, UserCreate, UserLogin, UserOut


router = APIRouter()


def issue_token(user: User, settings: Settings, expires_delta: Optional[timedelta] = None) -> str:
    return create_access_token(
        user.id,
        user.email,
        settings.jwt_secret,
        expires_delta=expires_delta or parse_duration(settings.jwt_expires_in),
        algorithm=settings.jwt_algorithm,
    )


@router.post("/signup", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
def signup(
    user_in: UserCreate,
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings),
):
    if not user_in.name or not user_in.email or not user_in.password:
        raise ValidationError("Name, email, and password are required.")

    # fail before writing anything if tokens can't be issued
    require_secret(settings.jwt_secret)
    expires_delta = parse_duration(settings.jwt_expires_in)

    user = crud.create_user(db, user_in.name, user_in.email, user_in.password)
    return {"user": user, "token": issue_token(user, settings, expires_delta)}


@router.post("/login", response_model=AuthResponse)
def login(
    credentials: UserLogin,
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings),
):
    if not credentials.email or not credentials.password:
        raise ValidationError("Email and password are required.")

    user = crud.authenticate_user(db, credentials.email, credentials.password)
    if not user:
        logging.info(f"Failed login for {credentials.email}")
        raise AuthenticationError("Invalid credentials.")

    return {"user": user, "token": issue_token(user, settings)}


@router.get("/me", response_model=UserOut)
def get_me(
    identity: AuthContext = Depends(get_current_identity),
    db: Session = Depends(get_db),
):
    user = crud.get_user(db, identity.user_id)
    if user is None:
        raise NotFoundError("User not found")
    return user

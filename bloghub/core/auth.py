import logging
from typing import Optional

from fastapi import Depends, Header
from sqlalchemy.orm import Session

from bloghub.core.config import Settings, get_settings
from bloghub.core.errors import AuthenticationError, ConfigurationError
from bloghub.core.security import verify_token
from bloghub.crud.user import ensure_local_identity
from bloghub.db.session import get_db
from bloghub.schemas.token import AuthContext


def extract_bearer_token(authorization: Optional[str]) -> Optional[str]:
    if not authorization or not authorization.startswith("Bearer "):
        return None
    # an empty token is left for verify_token to reject
    return authorization[len("Bearer "):].strip()


def authenticate(authorization: Optional[str], settings: Settings) -> AuthContext:
    token = extract_bearer_token(authorization)
    if token is None:
        raise AuthenticationError("Missing or malformed Authorization header")
    return verify_token(token, settings.jwt_secret, settings.jwt_algorithm)


def authenticate_optional(authorization: Optional[str], settings: Settings) -> Optional[AuthContext]:
    """Like :func:`authenticate` but any failure just means an anonymous request."""
    token = extract_bearer_token(authorization)
    if token is None:
        return None
    try:
        return verify_token(token, settings.jwt_secret, settings.jwt_algorithm)
    except ConfigurationError:
        logging.warning("Ignoring bearer token: JWT secret not configured")
        return None
    except AuthenticationError:
        return None


def require_auth(
    authorization: Optional[str] = Header(None),
    settings: Settings = Depends(get_settings),
) -> AuthContext:
    return authenticate(authorization, settings)


def optional_auth(
    authorization: Optional[str] = Header(None),
    settings: Settings = Depends(get_settings),
) -> Optional[AuthContext]:
    return authenticate_optional(authorization, settings)


def get_current_identity(
    identity: AuthContext = Depends(require_auth),
    settings: Settings = Depends(get_settings),
    db: Session = Depends(get_db),
) -> AuthContext:
    """Authenticated identity for routes that write rows owned by the caller."""
    if settings.sync_external_identities:
        ensure_local_identity(db, identity)
    return identity

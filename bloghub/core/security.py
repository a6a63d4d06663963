import re
import uuid
from datetime import datetime, timedelta, timezone
from typing import Optional

from jose import jwt, JWTError
from passlib.context import CryptContext

from bloghub.core.errors import AuthenticationError, ConfigurationError
from bloghub.schemas.token import TokenData

ALGORITHM = "HS256"
DEFAULT_EXPIRES_IN = "7d"

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")

_DURATION_RE = re.compile(r"^\s*(\d+)\s*([smhdw]?)\s*$")
_DURATION_UNITS = {
    "": "seconds",
    "s": "seconds",
    "m": "minutes",
    "h": "hours",
    "d": "days",
    "w": "weeks",
}


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: Optional[str]) -> bool:
    # identity projections have no local password
    if not hashed_password:
        return False
    return pwd_context.verify(plain_password, hashed_password)


def parse_duration(value: str) -> timedelta:
    """Parse token lifetimes such as ``"7d"``, ``"12h"``, ``"30m"`` or ``"3600"``."""
    match = _DURATION_RE.match(value or "")
    if not match:
        raise ConfigurationError(f"Invalid token lifetime: {value!r}")
    amount, unit = match.groups()
    return timedelta(**{_DURATION_UNITS[unit]: int(amount)})


def require_secret(secret: Optional[str]) -> str:
    if not secret:
        raise ConfigurationError("JWT secret not configured")
    return secret


def create_access_token(
    user_id: uuid.UUID,
    email: str,
    secret: Optional[str],
    expires_delta: Optional[timedelta] = None,
    algorithm: str = ALGORITHM,
) -> str:
    secret = require_secret(secret)
    now = datetime.now(timezone.utc)
    expire = now + (expires_delta or parse_duration(DEFAULT_EXPIRES_IN))
    to_encode = {
        "sub": str(user_id),
        "email": email,
        "iat": now,
        "exp": expire,
    }
    return jwt.encode(to_encode, secret, algorithm=algorithm)


def verify_token(token: str, secret: Optional[str], algorithm: str = ALGORITHM) -> TokenData:
    secret = require_secret(secret)
    credentials_exception = AuthenticationError("Invalid or expired token")

    try:
        payload = jwt.decode(token, secret, algorithms=[algorithm])
    except JWTError:
        raise credentials_exception

    subject = payload.get("sub")
    if subject is None:
        raise credentials_exception
    try:
        user_id = uuid.UUID(str(subject))
    except ValueError:
        raise credentials_exception

    return TokenData(user_id=user_id, email=payload.get("email"))

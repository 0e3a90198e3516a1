"""Authentication: bearer token verification and principal resolution."""
from datetime import datetime, timedelta

import bcrypt
from fastapi import APIRouter, Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError, jwt
from pydantic import BaseModel
from sqlalchemy.orm import Session

from app.config import get_settings
from app.database import get_db
from app.exceptions import Unauthorized
from app.models.user import User
from app.services.scoping import Principal

router = APIRouter(prefix="/auth", tags=["auth"])
settings = get_settings()

bearer_scheme = HTTPBearer(auto_error=False)

ALGORITHM = "HS256"


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a password against its hash."""
    return bcrypt.checkpw(plain_password.encode('utf-8'), hashed_password.encode('utf-8'))


def get_password_hash(password: str) -> str:
    """Hash a password."""
    return bcrypt.hashpw(password.encode('utf-8'), bcrypt.gensalt()).decode('utf-8')


def create_access_token(data: dict, expires_delta: timedelta | None = None) -> str:
    """Create a JWT access token (used by seeding and tests)."""
    to_encode = data.copy()
    expire = datetime.utcnow() + (expires_delta or timedelta(minutes=settings.access_token_expire_minutes))
    to_encode.update({"exp": expire})
    return jwt.encode(to_encode, settings.secret_key, algorithm=ALGORITHM)


def token_for_user(user: User) -> str:
    """Access token whose subject is the user id."""
    return create_access_token(data={"sub": str(user.id), "username": user.username})


def principal_from_user(user: User) -> Principal:
    return Principal(
        id=user.id,
        username=user.username,
        roles=frozenset(user.roles or []),
        customer_id=user.customer_id,
    )


async def get_current_principal(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    db: Session = Depends(get_db)
) -> Principal:
    """Resolve the caller from the bearer token."""
    if credentials is None:
        raise Unauthorized("JWT Token not found")
    try:
        payload = jwt.decode(credentials.credentials, settings.secret_key, algorithms=[ALGORITHM])
        user_id = int(payload.get("sub"))
    except (JWTError, TypeError, ValueError):
        raise Unauthorized("Invalid JWT Token")

    user = db.get(User, user_id)
    if user is None:
        raise Unauthorized("Invalid JWT Token")
    return principal_from_user(user)


class PrincipalRead(BaseModel):
    """Current principal response."""
    id: int
    username: str
    role: str
    roles: list[str]
    customer_id: int | None = None


@router.get("/me", response_model=PrincipalRead)
async def get_me(principal: Principal = Depends(get_current_principal)):
    """Get current principal info."""
    return PrincipalRead(
        id=principal.id,
        username=principal.username,
        role=principal.role.value,
        roles=sorted(principal.roles),
        customer_id=principal.customer_id,
    )

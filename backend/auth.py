from datetime import datetime, timedelta, timezone
from typing import Optional, Callable
from jose import JWTError, jwt
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.orm import Session

from config import _env, _env_int
from models import User

# JWT settings
SECRET_KEY = _env("JWT_SECRET_KEY", "rooh-dev-secret-change-in-production")
ALGORITHM = "HS256"
ACCESS_TOKEN_EXPIRE_MINUTES = _env_int("ACCESS_TOKEN_EXPIRE_MINUTES", 30 * 24 * 60, 5, 365 * 24 * 60)

security = HTTPBearer()
optional_security = HTTPBearer(auto_error=False)


def create_access_token(data: dict, expires_delta: Optional[timedelta] = None):
    to_encode = data.copy()
    if expires_delta:
        expire = datetime.now(timezone.utc) + expires_delta
    else:
        expire = datetime.now(timezone.utc) + timedelta(minutes=ACCESS_TOKEN_EXPIRE_MINUTES)
    to_encode.update({"exp": expire})
    encoded_jwt = jwt.encode(to_encode, SECRET_KEY, algorithm=ALGORITHM)
    return encoded_jwt


def verify_token(token: str):
    try:
        payload = jwt.decode(token, SECRET_KEY, algorithms=[ALGORITHM])
        return payload
    except JWTError:
        return None


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


def _user_from_token(token: str, db: Session) -> User:
    payload = verify_token(token)
    if payload is None:
        raise _unauthorized("Invalid authentication credentials")

    username: str = payload.get("sub")
    user_id: int = payload.get("user_id")
    if username is None or user_id is None:
        raise _unauthorized("Invalid authentication credentials")

    user = db.query(User).filter(User.id == user_id).first()
    if user is None:
        raise _unauthorized("User not found")
    return user


def get_current_user_factory(get_db_func: Callable):
    """get_current_user dependency factory"""
    def get_current_user(
        credentials: HTTPAuthorizationCredentials = Depends(security),
        db: Session = Depends(get_db_func)
    ) -> User:
        return _user_from_token(credentials.credentials, db)

    return get_current_user


def get_optional_user_factory(get_db_func: Callable):
    """Like get_current_user, but anonymous requests resolve to None."""
    def get_optional_user(
        credentials: Optional[HTTPAuthorizationCredentials] = Depends(optional_security),
        db: Session = Depends(get_db_func)
    ) -> Optional[User]:
        if credentials is None:
            return None
        return _user_from_token(credentials.credentials, db)

    return get_optional_user

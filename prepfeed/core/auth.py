from datetime import datetime, timedelta
from typing import Optional
from jose import JWTError, jwt
from fastapi import Depends
from fastapi.security import OAuth2PasswordBearer
import logging
from .config import settings
from .errors import AuthenticationError

logger = logging.getLogger(__name__)

# Tokens are issued by the upstream identity service; this API only verifies them.
oauth2_scheme = OAuth2PasswordBearer(tokenUrl=f"{settings.API_V1_STR}/token", auto_error=False)

def create_access_token(data: dict, expires_delta: Optional[timedelta] = None) -> str:
    """Create JWT access token."""
    to_encode = data.copy()
    if expires_delta:
        expire = datetime.utcnow() + expires_delta
    else:
        expire = datetime.utcnow() + timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
    to_encode.update({"exp": expire})
    return jwt.encode(to_encode, settings.SECRET_KEY, algorithm=settings.ALGORITHM)

def decode_user_id(token: str) -> str:
    """Return the ``sub`` claim of a valid token or raise AuthenticationError."""
    if settings.TOKEN_DEBUG:
        logger.debug(f"Processing token: {token[:10]}...")

    try:
        # jose checks the exp claim itself
        payload = jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM])
    except JWTError as e:
        logger.warning(f"JWT decode error: {str(e)}")
        raise AuthenticationError()

    user_id = payload.get("sub")
    if not user_id:
        logger.warning("Token missing 'sub' claim")
        raise AuthenticationError()
    return str(user_id)

async def get_current_user_id(token: Optional[str] = Depends(oauth2_scheme)) -> str:
    """Get the current user id from the bearer token."""
    if not token:
        logger.warning("Missing authentication token")
        raise AuthenticationError("Not authenticated")
    return decode_user_id(token)

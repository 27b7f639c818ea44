import logging

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.orm import Session

from interview_prep.database import get_db
from interview_prep.models.user import User
from interview_prep.services.auth import InvalidTokenError, decode_token

logger = logging.getLogger(__name__)

security = HTTPBearer(auto_error=False)


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


async def get_current_user(
    credentials: HTTPAuthorizationCredentials = Depends(security),
    db: Session = Depends(get_db),
) -> User:
    """Resolve the bearer token to a user."""
    if not credentials:
        raise _unauthorized("Not authorized, no token")

    try:
        payload = decode_token(credentials.credentials)
    except InvalidTokenError as e:
        logger.warning("Rejected bearer token: %s", e)
        raise _unauthorized("Not authorized, token failed")

    if payload.get("type") != "access":
        raise _unauthorized("Not authorized, token failed")

    user_id = payload.get("sub")
    if not user_id or not str(user_id).isdigit():
        raise _unauthorized("Not authorized, token failed")

    user = db.query(User).filter(User.id == int(user_id)).first()
    if not user:
        raise _unauthorized("Not authorized, token failed")

    return user

from fastapi import Depends, HTTPException
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError, jwt

from app.core.config import JWT_ALGORITHM, JWT_SECRET

security = HTTPBearer()


class InvalidTokenError(Exception):
    pass


def decode_token(token: str) -> int:
    """Return the user id carried in the ``sub`` claim of a bearer token."""
    try:
        claims = jwt.decode(token, JWT_SECRET, algorithms=[JWT_ALGORITHM])
    except JWTError as exc:
        raise InvalidTokenError(str(exc)) from exc

    subject = claims.get("sub")
    if subject is None or not str(subject).isdigit():
        raise InvalidTokenError("token subject is not a user id")
    return int(subject)


def get_current_user(credentials: HTTPAuthorizationCredentials = Depends(security)) -> int:
    try:
        return decode_token(credentials.credentials)
    except InvalidTokenError:
        raise HTTPException(
            status_code=401,
            detail="Invalid token",
            headers={"WWW-Authenticate": "Bearer"}
        )

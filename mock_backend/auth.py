import time
from typing import Optional

import jwt
from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from .config import settings
from .errors import Forbidden, InvalidRole, InvalidToken, MissingToken

ALGORITHM = "HS256"
ROLES = ("admin", "user")
# every token is issued for the same synthetic identity
SUBJECT = "test_user"

bearer_scheme = HTTPBearer(auto_error=False)


def issue_token(role: Optional[str], now: Optional[int] = None) -> str:
    if role not in ROLES:
        raise InvalidRole()
    issued = int(now if now is not None else time.time())
    exp = issued + settings.token_minutes * 60
    payload = {"sub": SUBJECT, "role": role, "iat": issued, "exp": exp}
    return jwt.encode(payload, settings.jwt_secret, algorithm=ALGORITHM)


def verify_token(token: Optional[str]) -> dict:
    """Decode a bearer token and return its claims.

    Raises MissingToken when no token was presented and InvalidToken when the
    signature is wrong, the token is malformed or it has expired.
    """
    if not token:
        raise MissingToken()
    try:
        return jwt.decode(token, settings.jwt_secret, algorithms=[ALGORITHM])
    except jwt.PyJWTError as e:
        raise InvalidToken() from e


def require_role(claims: dict, role: str) -> dict:
    if claims.get("role") != role:
        raise Forbidden()
    return claims


def current_claims(credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme)) -> dict:
    token = credentials.credentials if credentials else None
    return verify_token(token)


def admin_claims(claims: dict = Depends(current_claims)) -> dict:
    return require_role(claims, "admin")

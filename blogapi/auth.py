import logging
from datetime import datetime, timedelta, timezone
from typing import Optional

from fastapi import Request
from jose import jwt, JWTError
from passlib.context import CryptContext

from .errors import NoToken, InvalidToken

logger = logging.getLogger('blogapi.auth')

TOKEN_COOKIE = 'token'

pwd_ctx = CryptContext(schemes=['bcrypt'], deprecated='auto')


def hash_password(password: str) -> str:
    return pwd_ctx.hash(password)


def verify_password(password: str, hashed_password: str) -> bool:
    try:
        return pwd_ctx.verify(password, hashed_password)
    except ValueError:
        # malformed stored hash
        return False


class TokenService:
    """Issues and verifies signed session tokens carrying {username, id}."""

    def __init__(self, secret: str, algorithm: str = 'HS256', expire_minutes: Optional[int] = None):
        self.secret = secret
        self.algorithm = algorithm
        self.expire_minutes = expire_minutes

    @classmethod
    def from_settings(cls, settings):
        return cls(settings.jwt_secret, settings.jwt_algorithm, settings.access_token_expire_minutes)

    def issue(self, claims: dict, expires_delta: timedelta = None) -> str:
        to_encode = {'username': claims['username'], 'id': claims['id']}
        if expires_delta is None and self.expire_minutes:
            expires_delta = timedelta(minutes=self.expire_minutes)
        if expires_delta:
            to_encode['exp'] = datetime.now(timezone.utc) + expires_delta
        return jwt.encode(to_encode, self.secret, algorithm=self.algorithm)

    def verify(self, token: str) -> Optional[dict]:
        """Return the {username, id} claims, or None for any bad token."""
        try:
            payload = jwt.decode(token, self.secret, algorithms=[self.algorithm])
        except JWTError:
            return None
        if not isinstance(payload, dict):
            return None
        username, user_id = payload.get('username'), payload.get('id')
        if not isinstance(username, str) or not isinstance(user_id, str):
            return None
        return {'username': username, 'id': user_id}


def extract_token(request: Request) -> Optional[str]:
    """Bearer header first, then the token cookie."""
    header = request.headers.get('authorization')
    if header:
        parts = header.split()
        if len(parts) == 2 and parts[0].lower() == 'bearer':
            return parts[1]
        # a header that is present but not a Bearer token is never ignored
        raise InvalidToken('Malformed Authorization header')
    token = request.cookies.get(TOKEN_COOKIE)
    return token or None


def get_current_user(request: Request) -> dict:
    token = extract_token(request)
    if not token:
        raise NoToken()
    claims = request.app.state.tokens.verify(token)
    if claims is None:
        logger.warning({'msg': 'invalid_token', 'path': request.url.path})
        raise InvalidToken()
    return claims

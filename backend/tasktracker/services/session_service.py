"""Session token issuing and verification.

Sessions are stateless signed JWTs carrying ``{email, role}``. Callers only
talk to ``session_store``; swapping in a store that also consults a
revocation list means replacing that object, not touching the routers.
"""

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Callable, Optional

from jose import JWTError, jwt

from tasktracker.config import settings
from tasktracker.utils.errors import AuthError


@dataclass(frozen=True)
class SessionClaims:
    email: str
    role: str


class SessionStore:
    def issue(self, email: str, role: str) -> str:
        raise NotImplementedError

    def verify(self, token: str) -> SessionClaims:
        raise NotImplementedError


class JwtSessionStore(SessionStore):
    def __init__(
        self,
        secret: Optional[str] = None,
        algorithm: Optional[str] = None,
        max_age_seconds: Optional[int] = None,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        # None means "read from settings at call time"
        self._secret = secret
        self._algorithm = algorithm
        self._max_age_seconds = max_age_seconds
        self._clock = clock or (lambda: datetime.now(timezone.utc))

    @property
    def secret(self) -> str:
        return self._secret or settings.SECRET_KEY

    @property
    def algorithm(self) -> str:
        return self._algorithm or settings.JWT_ALGORITHM

    @property
    def max_age_seconds(self) -> int:
        return self._max_age_seconds or settings.token_max_age_seconds

    def issue(self, email: str, role: str) -> str:
        now = self._clock()
        payload = {
            "email": email,
            "role": role,
            "iat": now,
            "exp": now + timedelta(seconds=self.max_age_seconds),
        }
        return jwt.encode(payload, self.secret, algorithm=self.algorithm)

    def verify(self, token: str) -> SessionClaims:
        if not token:
            raise AuthError("Not authenticated")
        try:
            payload = jwt.decode(token, self.secret, algorithms=[self.algorithm])
        except JWTError:
            raise AuthError("Invalid or expired token")
        email = payload.get("email")
        role = payload.get("role")
        if not email or not role:
            raise AuthError("Invalid token payload")
        return SessionClaims(email=email, role=role)


session_store: SessionStore = JwtSessionStore()


def issue_token(email: str, role: str) -> str:
    return session_store.issue(email, role)


def verify_token(token: str) -> SessionClaims:
    return session_store.verify(token)

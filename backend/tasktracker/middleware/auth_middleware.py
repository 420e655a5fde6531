from typing import Optional

from fastapi import Depends, Request
from sqlalchemy.orm import Session

from tasktracker.config import settings
from tasktracker.database import get_db
from tasktracker.models.user import User
from tasktracker.services.session_service import SessionClaims, verify_token
from tasktracker.utils.errors import AppError, AuthError, ForbiddenError
from tasktracker.utils.helpers import normalize_email


def extract_token(request: Request) -> Optional[str]:
    # explicit Authorization header wins over the browser cookie
    authorization = request.headers.get("Authorization") or ""
    scheme, _, credentials = authorization.partition(" ")
    if scheme.lower() == "bearer" and credentials.strip():
        return credentials.strip()
    return request.cookies.get(settings.AUTH_COOKIE_NAME)


def get_current_claims(request: Request) -> SessionClaims:
    token = extract_token(request)
    if not token:
        raise AuthError("Not authenticated")
    return verify_token(token)


def get_current_user(
    claims: SessionClaims = Depends(get_current_claims),
    db: Session = Depends(get_db),
) -> User:
    user = db.query(User).filter(User.email == normalize_email(claims.email)).first()
    if not user:
        raise AuthError("User not found")
    return user


def require_roles(*roles: str):
    def checker(current_user: User = Depends(get_current_user)) -> User:
        if current_user.role not in roles:
            raise ForbiddenError(f"Requires role: {', '.join(roles)}")
        return current_user
    return checker


def get_optional_user(request: Request, db: Session = Depends(get_db)) -> Optional[User]:
    """Resolve the caller or ``None``; a bad or expired token counts as anonymous."""
    token = extract_token(request)
    if not token:
        return None
    try:
        claims = verify_token(token)
    except AppError:
        return None
    return db.query(User).filter(User.email == normalize_email(claims.email)).first()

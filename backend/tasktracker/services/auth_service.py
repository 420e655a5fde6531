"""Auth Service domain layer. Encapsulates credential checks, registration and account maintenance."""

import logging
import re
from typing import Tuple

import bcrypt
from sqlalchemy.orm import Session

from tasktracker.config import settings
from tasktracker.models.project import Project, ProjectAssignment
from tasktracker.models.task import TaskAssignment
from tasktracker.models.user import User
from tasktracker.schemas.user import RegisterRequest, UserUpdateRequest
from tasktracker.services import task_service
from tasktracker.services.session_service import issue_token
from tasktracker.utils.errors import AuthError, ConflictError, ForbiddenError, NotFoundError, ValidationError
from tasktracker.utils.helpers import normalize_email, utcnow
from tasktracker.utils.permissions import Role, is_admin

logger = logging.getLogger(__name__)

PIN_PATTERN = re.compile(r"^\d{4}$")


def hash_secret(plain: str) -> str:
    salt = bcrypt.gensalt(rounds=settings.BCRYPT_ROUNDS)
    return bcrypt.hashpw(plain.encode("utf-8"), salt).decode("utf-8")


def verify_secret(plain: str, hashed: str) -> bool:
    if not plain or not hashed:
        return False
    try:
        return bcrypt.checkpw(plain.encode("utf-8"), hashed.encode("utf-8"))
    except ValueError:
        # malformed stored hash
        return False


def _normalize_role_or_raise(role: str) -> str:
    parsed = Role.parse(role)
    if parsed is None:
        raise ValidationError(f"Invalid role: {role}")
    return parsed.value


def _validate_pin_or_raise(pin: str) -> str:
    text = (pin or "").strip()
    if not PIN_PATTERN.match(text):
        raise ValidationError("PIN must be exactly 4 digits")
    return text


def get_user_by_email(db: Session, email: str):
    return db.query(User).filter(User.email == normalize_email(email)).first()


def _rotate_login(db: Session, user: User) -> User:
    user.last_login = user.recent_login
    user.recent_login = utcnow()
    db.commit()
    db.refresh(user)
    return user


def authenticate(db: Session, email: str, password: str) -> Tuple[str, User]:
    user = get_user_by_email(db, email)
    if not user:
        raise NotFoundError("Email does not exist!", status_code=409)
    if not verify_secret(password, user.password):
        logger.info("[auth] password mismatch for user_id=%s", user.user_id)
        raise AuthError("Password does not match!")
    token = issue_token(user.email, user.role)
    return token, _rotate_login(db, user)


def authenticate_by_pin(db: Session, email: str, pin: str) -> Tuple[str, User]:
    pin = _validate_pin_or_raise(pin)
    user = get_user_by_email(db, email)
    if not user:
        raise NotFoundError("Email does not exist!", status_code=409)
    if not user.pin:
        raise AuthError("PIN login is not set up for this account")
    if not verify_secret(pin, user.pin):
        logger.info("[auth] pin mismatch for user_id=%s", user.user_id)
        raise AuthError("PIN does not match!")
    token = issue_token(user.email, user.role)
    return token, _rotate_login(db, user)


def register_user(db: Session, data: RegisterRequest) -> User:
    email = normalize_email(data.email)
    if not email:
        raise ValidationError("Email is required")
    role = _normalize_role_or_raise(data.role)

    if get_user_by_email(db, email):
        raise ConflictError("User already registered", status_code=403)

    user = User(
        name=data.name.strip(),
        phone=data.phone,
        email=email,
        password=hash_secret(data.password),
        role=role,
    )
    db.add(user)
    db.flush()

    # every new portal user joins all existing projects
    project_ids = [row[0] for row in db.query(Project.project_id).all()]
    for project_id in project_ids:
        db.add(ProjectAssignment(project_id=project_id, user_id=user.user_id))

    db.commit()
    db.refresh(user)
    logger.info("[auth] registered user_id=%s role=%s projects=%d", user.user_id, role, len(project_ids))
    return user


def update_user(db: Session, user_id: int, data: UserUpdateRequest, current_user: User) -> User:
    if not is_admin(current_user.role) and current_user.user_id != user_id:
        raise ForbiddenError("You can only update your own profile")

    email = normalize_email(data.email)
    existing = get_user_by_email(db, email)
    if not existing:
        raise NotFoundError("User is not registered yet!", status_code=409)

    user = db.get(User, user_id)
    if not user:
        raise NotFoundError("Portal account is not created yet!", status_code=409)
    if existing.user_id != user.user_id:
        raise ConflictError("Email is already used by another account")

    role = _normalize_role_or_raise(data.role)
    if role != user.role and not is_admin(current_user.role):
        raise ForbiddenError("Only an admin can change roles")

    user.name = data.name.strip()
    user.phone = data.phone
    user.email = email
    user.role = role
    user.password = hash_secret(data.password)
    if data.pin:
        user.pin = hash_secret(_validate_pin_or_raise(data.pin))

    db.commit()
    db.refresh(user)
    return user


def delete_user(db: Session, user_id: int, current_user: User):
    user = db.get(User, user_id)
    if not user:
        raise NotFoundError("Portal account is not created yet!", status_code=409)
    if user.user_id == current_user.user_id:
        raise ValidationError("You cannot delete your own account")

    affected = task_service.sequential_task_ids(db, TaskAssignment.user_id == user_id)
    db.delete(user)
    db.flush()
    task_service.resequence_tasks(db, affected)
    db.commit()
    logger.info("[auth] deleted user_id=%s by user_id=%s", user_id, current_user.user_id)

"""User Service domain layer for portal user listing and lookup."""

from typing import List, Optional

from sqlalchemy.orm import Session

from tasktracker.models.user import User
from tasktracker.utils.errors import ForbiddenError, NotFoundError, ValidationError
from tasktracker.utils.permissions import Role, can_act_for_user


def list_users(db: Session, role: Optional[str] = None) -> List[User]:
    q = db.query(User)
    if role:
        parsed = Role.parse(role)
        if parsed is None:
            raise ValidationError(f"Invalid role: {role}")
        q = q.filter(User.role == parsed.value)
    return q.order_by(User.user_id).all()


def get_user(db: Session, user_id: int, current_user: User) -> User:
    if not can_act_for_user(current_user.role, current_user.user_id, user_id):
        raise ForbiddenError("You can only view your own profile")
    user = db.get(User, user_id)
    if not user:
        raise NotFoundError("User not found")
    return user

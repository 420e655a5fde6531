"""Auth API router. Sign-in sets the session cookie; everything else delegates to auth_service."""

from fastapi import APIRouter, BackgroundTasks, Depends, Response, status
from sqlalchemy.orm import Session

from tasktracker.config import settings
from tasktracker.database import get_db
from tasktracker.middleware.auth_middleware import get_current_user, require_roles
from tasktracker.models.user import User
from tasktracker.schemas.user import (
    LoginRequest, PinLoginRequest, RegisterRequest, SignInResponse, UserMessageOut, UserOut, UserUpdateRequest,
)
from tasktracker.services import auth_service, mail_service
from tasktracker.utils.permissions import ADMIN

router = APIRouter(prefix="/auth", tags=["auth"])


def _set_session_cookie(response: Response, token: str):
    response.set_cookie(
        key=settings.AUTH_COOKIE_NAME,
        value=token,
        max_age=settings.token_max_age_seconds,
        path="/",
        httponly=True,
        secure=settings.COOKIE_SECURE,
        samesite="strict",
    )


@router.post("/register", response_model=UserMessageOut, status_code=status.HTTP_201_CREATED)
def register(data: RegisterRequest, background_tasks: BackgroundTasks, db: Session = Depends(get_db)):
    user = auth_service.register_user(db, data)
    background_tasks.add_task(
        mail_service.send_welcome_email, user.name, user.email, user.role, user.phone or "", data.password,
    )
    return UserMessageOut(user=UserOut.model_validate(user), message="User registered successfully")


@router.post("/sign-in", response_model=SignInResponse)
def sign_in(data: LoginRequest, response: Response, db: Session = Depends(get_db)):
    token, user = auth_service.authenticate(db, data.email, data.password)
    _set_session_cookie(response, token)
    return SignInResponse(user_role=user.role, message="Signed in successfully")


@router.post("/sign-in-pin", response_model=SignInResponse)
def sign_in_pin(data: PinLoginRequest, response: Response, db: Session = Depends(get_db)):
    token, user = auth_service.authenticate_by_pin(db, data.email, data.pin)
    _set_session_cookie(response, token)
    return SignInResponse(user_role=user.role, message="Signed in successfully")


@router.post("/sign-out")
def sign_out(response: Response):
    response.delete_cookie(
        key=settings.AUTH_COOKIE_NAME,
        path="/",
        httponly=True,
        secure=settings.COOKIE_SECURE,
        samesite="strict",
    )
    return {"message": "Signed out"}


@router.get("/me", response_model=UserOut)
def me(current_user: User = Depends(get_current_user)):
    return current_user


@router.put("/update/{user_id}", response_model=UserMessageOut, status_code=status.HTTP_201_CREATED)
def update_user(
    user_id: int,
    data: UserUpdateRequest,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    user = auth_service.update_user(db, user_id, data, current_user)
    return UserMessageOut(user=UserOut.model_validate(user), message="User updated successfully")


@router.delete("/update/{user_id}", status_code=status.HTTP_201_CREATED)
def delete_user(
    user_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_roles(ADMIN)),
):
    auth_service.delete_user(db, user_id, current_user)
    return {"message": "User deleted successfully"}

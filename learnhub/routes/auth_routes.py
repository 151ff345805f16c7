from fastapi import APIRouter, Depends, Request, status, Body
from sqlalchemy.orm import Session
import logging

from learnhub.core.database import get_db
from learnhub.core.dependencies import get_current_user, get_settings
from learnhub.core.errors import AuthRejection, ForbiddenError, NotAuthenticatedError, ValidationConflictError
from learnhub.core.security import hash_password, verify_password, login_session, logout_session
from learnhub.crud.user_crud import (
    create_user,
    get_user_by_username,
    get_user_by_referral_code,
)
from learnhub.models.enums import UserRole
from learnhub.models.user_model import User
from learnhub.schemas.base_schema import MessageResponse
from learnhub.schemas.user_schema import (
    UserRegister,
    UserLogin,
    UserDisplay,
    UserCreateInternal,
)
from learnhub.services import rewards_service

logger = logging.getLogger(__name__)
router = APIRouter(tags=["Authentication"])


@router.post("/register", response_model=UserDisplay, status_code=status.HTTP_201_CREATED)
def register_user(
    request: Request,
    payload: UserRegister = Body(...),
    db: Session = Depends(get_db),
    settings = Depends(get_settings)
):
    """
    Register a new account and start a session for it.

    Optionally, a referral code can be provided; its owner is credited the
    sign-up bonus.
    """
    logger.info(f"Registration attempt for username '{payload.username}' as {payload.role.value}.")

    if payload.role == UserRole.ADMIN and not settings.ALLOW_ADMIN_SIGNUP:
        logger.warning(f"Rejected self-registration as admin for '{payload.username}'.")
        raise ForbiddenError("Admin accounts cannot be self-registered", reason=AuthRejection.FORBIDDEN_ROLE)

    if get_user_by_username(db, payload.username):
        logger.warning(f"Registration failed: username '{payload.username}' already exists.")
        raise ValidationConflictError("Username already exists")

    referrer = None
    if payload.referral_code:
        referrer = get_user_by_referral_code(db, payload.referral_code)
        if not referrer:
            logger.warning(f"Referral code '{payload.referral_code}' not found.")
            raise ValidationConflictError(f"Invalid referral code: {payload.referral_code}")
        logger.info(f"User referred by: {referrer.username} (ID: {referrer.id}) using code: {payload.referral_code}")

    db_user = create_user(db, UserCreateInternal(
        username=payload.username,
        password_hash=hash_password(payload.password),
        role=payload.role,
        email=payload.email,
        referred_by=referrer.referral_code if referrer else None,
    ))

    if referrer:
        rewards_service.apply_signup_referral(db, db_user, referrer, settings)

    login_session(request, db_user.id)
    logger.info(f"User '{db_user.username}' (ID: {db_user.id}) registered and logged in.")
    return db_user


@router.post("/login", response_model=UserDisplay)
def login_user(
    request: Request,
    payload: UserLogin = Body(...),
    db: Session = Depends(get_db)
):
    """
    Verify username and password and start a cookie session.
    """
    user = get_user_by_username(db, payload.username)
    if not user or not verify_password(payload.password, user.password_hash):
        logger.warning(f"Failed login attempt for username '{payload.username}'.")
        raise NotAuthenticatedError("Invalid username or password")

    login_session(request, user.id)
    logger.info(f"User '{user.username}' (ID: {user.id}) logged in.")
    return user


@router.post("/logout", response_model=MessageResponse)
def logout_user(request: Request):
    """
    End the current session. Succeeds even without a session.
    """
    logout_session(request)
    return MessageResponse(message="Logged out")


@router.get("/user", response_model=UserDisplay)
async def read_current_user(current_user: User = Depends(get_current_user)):
    """
    Get the currently authenticated user's profile.
    """
    return current_user

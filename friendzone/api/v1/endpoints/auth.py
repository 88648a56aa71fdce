"""Authentication endpoints (the identity provider)."""

import logging

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.security import OAuth2PasswordRequestForm
from sqlalchemy.orm import Session

from friendzone.api.deps import get_caller_db, get_current_active_user, get_db
from friendzone.core.exceptions import InvalidCredentialsException, NotFoundException
from friendzone.core.policies import bind_caller
from friendzone.core.security import create_access_token
from friendzone.crud import crud_profile, crud_user
from friendzone.models.user import User
from friendzone.schemas.profile import ProfileResponse
from friendzone.schemas.user import TokenResponse, UserRegister

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/auth",
    tags=["Authentication"],
)


@router.post(
    "/register",
    response_model=TokenResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Register new account",
)
def register(
    user_in: UserRegister,
    db: Session = Depends(get_db),
) -> TokenResponse:
    """
    Register a new account and its profile.

    The profile is inserted as the new identity, so it passes the same
    "caller id equals row id" policy as any later profile write.

    Raises:
        HTTPException: 400 if email or username is already taken
    """
    if crud_user.get_by_email(db, user_in.email):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Email already registered",
        )
    if crud_profile.get_by_username(db, user_in.username):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Username already taken",
        )

    try:
        user = crud_user.create_user(db, email=user_in.email, password=user_in.password)
    except Exception:
        db.rollback()
        raise

    bind_caller(db, user.id)
    profile = crud_profile.create(
        db,
        obj_in={
            "id": user.id,
            "username": user_in.username,
            "full_name": user_in.full_name,
        },
    )
    logger.info(f"[AUTH] Registered user id={user.id} username={profile.username}")

    return TokenResponse(
        access_token=create_access_token(user.id),
        profile=ProfileResponse.model_validate(profile),
    )


@router.post(
    "/login",
    response_model=TokenResponse,
    status_code=status.HTTP_200_OK,
    summary="Login",
)
def login(
    form_data: OAuth2PasswordRequestForm = Depends(),
    db: Session = Depends(get_db),
) -> TokenResponse:
    """
    Login with email and password.

    OAuth2 compatible endpoint: the ``username`` form field carries the email.

    Raises:
        HTTPException: 401 if credentials invalid
    """
    user = crud_user.authenticate(db, email=form_data.username, password=form_data.password)
    if not user:
        logger.warning("[AUTH] Failed login attempt")
        raise InvalidCredentialsException()

    if not user.is_active:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="User account is inactive",
        )

    return TokenResponse(access_token=create_access_token(user.id))


@router.get(
    "/me",
    response_model=ProfileResponse,
    status_code=status.HTTP_200_OK,
    summary="Get current profile",
)
def me(
    current_user: User = Depends(get_current_active_user),
    db: Session = Depends(get_caller_db),
) -> ProfileResponse:
    profile = crud_profile.get(db, current_user.id)
    if not profile:
        raise NotFoundException("Profile not found")
    return ProfileResponse.model_validate(profile)

import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials
from sqlalchemy.orm import Session

from blog_api.config.database import get_db
from blog_api.config.settings import ACCESS_TOKEN_EXPIRE_MINUTES
from blog_api.core.auth import (
    verify_password,
    get_password_hash,
    create_user_token,
    get_current_user,
    optional_security,
    resolve_user,
)
from blog_api.core.permissions import validate_role
from blog_api.models.user import User, UserRole
from blog_api.schemas.auth import (
    SignupRequest,
    SignupResponse,
    LoginRequest,
    LoginResponse,
    RefreshTokenResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post(
    "/signup", response_model=SignupResponse, status_code=status.HTTP_201_CREATED
)
async def signup(
    signup_data: SignupRequest,
    db: Session = Depends(get_db),
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(optional_security),
):
    """
    Register a new account. Anyone may create a plain user; admin and
    superadmin accounts can only be created by a signed-in superadmin.
    """
    role = signup_data.role or UserRole.USER.value
    if not validate_role(role):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail="Invalid role specified"
        )

    # A bearer token only matters when an elevated role is requested
    if role != UserRole.USER.value:
        requester = resolve_user(credentials.credentials, db) if credentials else None
        if requester is None or not requester.is_superadmin:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="Unauthorized: Only superadmins can create admin accounts",
            )

    if User.get_by_email(db, signup_data.email):
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="User with this email already exists",
        )

    user = User(
        email=signup_data.email,
        password=get_password_hash(signup_data.password),
        role=role,
        display_name=signup_data.display_name or "",
        photo_url=signup_data.photo_url or "",
    )
    db.add(user)
    db.commit()
    db.refresh(user)

    logger.info("User created: uid=%s email=%s role=%s", user.uid, user.email, role)

    return SignupResponse(
        uid=user.uid, email=user.email, role=user.role, isDisabled=user.is_disabled
    )


@router.post("/login", response_model=LoginResponse)
async def login(login_data: LoginRequest, db: Session = Depends(get_db)):
    """
    Login endpoint - authenticate with email and password
    """
    user = User.get_by_email(db, login_data.email)

    if not user or not verify_password(login_data.password, user.password):
        logger.warning("Login failed: invalid credentials for %s", login_data.email)
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid email or password"
        )

    if user.is_disabled:
        logger.warning("Login failed: account disabled for %s", login_data.email)
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Account has been disabled. Please contact administrator.",
        )

    logger.info("Login successful for %s", user.email)

    return LoginResponse(
        access_token=create_user_token(user),
        token_type="bearer",
        expires_in=ACCESS_TOKEN_EXPIRE_MINUTES * 60,  # seconds
        user=user.to_dict(),
    )


@router.post("/refresh", response_model=RefreshTokenResponse)
async def refresh_token(current_user: User = Depends(get_current_user)):
    """
    Refresh access token using current valid token
    """
    return RefreshTokenResponse(
        access_token=create_user_token(current_user),
        token_type="bearer",
        expires_in=ACCESS_TOKEN_EXPIRE_MINUTES * 60,
    )


@router.get("/me")
async def get_current_user_info(current_user: User = Depends(get_current_user)):
    return current_user.to_dict()

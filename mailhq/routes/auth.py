"""
Authentication routes for login, register, and token management.
"""
from fastapi import APIRouter, Depends, HTTPException, status, Request
from fastapi.security import OAuth2PasswordRequestForm
from sqlalchemy.orm import Session

from ..database import get_db, store_guard
from ..models.user import User
from ..schemas.auth import UserCreate, UserLogin, UserResponse, TokenResponse, RefreshRequest
from ..auth import (
    verify_password,
    get_password_hash,
    create_tokens,
    get_required_user,
    refresh_access_token,
)
from ..config import get_settings
from ..limiter import limiter
from ..logging_config import api_logger

settings = get_settings()

router = APIRouter(prefix="/api/auth", tags=["auth"])


def _authenticate(db: Session, email: str, password: str) -> TokenResponse:
    user = db.query(User).filter(User.email == email.lower()).first()
    if not user or not user.is_active or not verify_password(password, user.hashed_password):
        api_logger.warning("Failed login", email=email)
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid email or password",
            headers={"WWW-Authenticate": "Bearer"},
        )

    access_token, refresh_token = create_tokens(user.id)
    return TokenResponse(access_token=access_token, refresh_token=refresh_token)


@router.post("/register", response_model=UserResponse, status_code=201)
@limiter.limit(settings.register_rate_limit)
def register(request: Request, user_data: UserCreate, db: Session = Depends(get_db)):
    """Register a new operator account."""
    email = str(user_data.email).lower()
    existing = db.query(User).filter(User.email == email).first()
    if existing:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Email already registered"
        )

    user = User(
        email=email,
        hashed_password=get_password_hash(user_data.password),
        display_name=user_data.display_name or email.split("@")[0],
    )
    with store_guard(db, "register user"):
        db.add(user)
        db.commit()
        db.refresh(user)
    return user


@router.post("/login", response_model=TokenResponse)
@limiter.limit(settings.login_rate_limit)
def login(request: Request, form_data: OAuth2PasswordRequestForm = Depends(), db: Session = Depends(get_db)):
    """Login with OAuth2 form (username/password)."""
    return _authenticate(db, form_data.username, form_data.password)


@router.post("/login/json", response_model=TokenResponse)
@limiter.limit(settings.login_rate_limit)
def login_json(request: Request, credentials: UserLogin, db: Session = Depends(get_db)):
    """Login with JSON body (email/password)."""
    return _authenticate(db, str(credentials.email), credentials.password)


@router.post("/refresh", response_model=TokenResponse)
@limiter.limit("10/minute")
def refresh_tokens(request: Request, refresh_request: RefreshRequest, db: Session = Depends(get_db)):
    """Get new access and refresh tokens using a valid refresh token."""
    tokens = refresh_access_token(refresh_request.refresh_token, db)
    if not tokens:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or expired refresh token",
        )

    access_token, refresh_token = tokens
    return TokenResponse(access_token=access_token, refresh_token=refresh_token)


@router.get("/me", response_model=UserResponse)
def get_me(current_user: User = Depends(get_required_user)):
    """Get current authenticated user."""
    return current_user


@router.post("/logout")
def logout(current_user: User = Depends(get_required_user)):
    """
    Logout the current user.

    Tokens are stateless; the client discards them.
    """
    return {"message": "Successfully logged out"}

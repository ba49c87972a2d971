"""
Registration, login, and profile endpoints.
"""
import logging
from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.security import OAuth2PasswordRequestForm
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.core.auth_dependency import get_db, get_current_user_obj
from app.core.logging_config import sanitize_log_data
from app.core.security import hash_password, verify_password, create_token_for_user
from app.db.models.user import User, UserProfile
from app.db.session import store_operation
from app.schemas.auth import (
    RegisterRequest,
    LoginRequest,
    TokenResponse,
    UserWithProfileResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Auth"])


def authenticate(db: Session, email: str, password: str) -> User:
    """Return the user for valid credentials, else raise 401."""
    with store_operation(db, "authenticate"):
        user = db.query(User).filter(User.email == email.lower()).first()

    if not user or not verify_password(password, user.password_hash):
        logger.warning("Login failed: invalid credentials")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid email or password",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return user


@router.post("/auth/register", status_code=status.HTTP_201_CREATED)
def register(payload: RegisterRequest, db: Session = Depends(get_db)):
    """
    Create a job seeker or employer account and return a token for it.

    Returns 409 if the email is already registered.
    """
    logger.debug(f"Registration request: {sanitize_log_data(payload.model_dump())}")
    email = payload.email.lower()

    with store_operation(db, "register user"):
        existing_user = db.query(User).filter(User.email == email).first()
        if existing_user:
            raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Email already registered")

        user = User(
            name=payload.name,
            email=email,
            password_hash=hash_password(payload.password),
            role=payload.role,
        )
        user.profile = UserProfile()
        db.add(user)
        try:
            db.commit()
        except IntegrityError:
            db.rollback()
            raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Email already registered")
        db.refresh(user)

    logger.info(f"User registered: user_id={user.id}, role={user.role}")

    return {
        "message": "User created successfully",
        "user_id": user.id,
        "access_token": create_token_for_user(user),
        "token_type": "bearer",
    }


@router.post("/auth/login", response_model=TokenResponse)
def login(payload: LoginRequest, db: Session = Depends(get_db)):
    user = authenticate(db, payload.email, payload.password)
    logger.info(f"User logged in: user_id={user.id}")
    return TokenResponse(access_token=create_token_for_user(user))


# Swagger's "Authorize" button posts an OAuth2 password form here
@router.post("/auth/token", response_model=TokenResponse)
def login_form(
    form_data: OAuth2PasswordRequestForm = Depends(),
    db: Session = Depends(get_db)
):
    # Swagger sends "username", but we treat it as email
    user = authenticate(db, form_data.username, form_data.password)
    return TokenResponse(access_token=create_token_for_user(user))


@router.get("/profile")
def get_profile(user: User = Depends(get_current_user_obj)):
    return {"user": UserWithProfileResponse.model_validate(user)}

from typing import Optional
from fastapi import Depends
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy.orm import Session
from app.core.errors import NotFound
from app.core.principal import Principal
from app.core.security import verify
from app.db.session import SessionLocal, store_operation
from app.db.models.user import User

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/auth/token")
optional_oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/auth/token", auto_error=False)


def get_db():
    """Database session dependency. One session per request."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def get_current_principal(token: str = Depends(oauth2_scheme)) -> Principal:
    """Resolve the bearer token into a Principal. Raises AuthenticationError."""
    return verify(token)


def get_optional_principal(token: Optional[str] = Depends(optional_oauth2_scheme)) -> Optional[Principal]:
    """Principal for a bearer token if one was sent. A bad token is still rejected."""
    if token is None:
        return None
    return verify(token)


def get_current_user_obj(
    principal: Principal = Depends(get_current_principal),
    db: Session = Depends(get_db)
) -> User:
    """Get current User object from JWT token."""
    with store_operation(db, "load current user"):
        user = db.query(User).filter(User.id == principal.subject_id).first()
    if not user:
        raise NotFound("User not found")
    return user

"""
Script to promote an account to admin, creating it if needed.

Admins cannot self-register, so this is how the first one is provisioned.
Run: python -m scripts.make_user_admin admin@example.com [password]
"""
import sys
import os
import logging

# Add parent directory to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from sqlalchemy.exc import SQLAlchemyError

from app.db.session import SessionLocal
from app.db.models.user import User, UserProfile
from app.core.principal import Role
from app.core.security import hash_password

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


def make_user_admin(email: str, password: str = None, session_factory=SessionLocal) -> bool:
    """Create or update a user so their role is admin."""
    db = session_factory()
    try:
        user = db.query(User).filter(User.email == email.lower()).first()
        
        if not user:
            if not password:
                logger.error(f"User {email} not found and no password provided. Cannot create user.")
                return False
            
            logger.info(f"Creating new admin user: {email}")
            user = User(
                email=email.lower(),
                name="Administrator",
                password_hash=hash_password(password),
                role=Role.ADMIN.value,
            )
            user.profile = UserProfile()
            db.add(user)
        else:
            logger.info(f"Found existing user: {email} (ID: {user.id}, role: {user.role})")
            user.role = Role.ADMIN.value
        
        db.commit()
        logger.info(f"User {email} is now an admin; existing tokens keep their old role until re-login")
        return True
        
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Error updating user: {e}", exc_info=True)
        return False
    finally:
        db.close()


if __name__ == "__main__":
    if len(sys.argv) < 2:
        print("Usage: python -m scripts.make_user_admin <email> [password]")
        sys.exit(2)
    
    email = sys.argv[1]
    password = sys.argv[2] if len(sys.argv) > 2 else None
    
    if make_user_admin(email, password):
        print(f"\n[SUCCESS] User {email} is now an admin")
    else:
        print(f"\n[ERROR] Failed to promote user {email}")
        sys.exit(1)

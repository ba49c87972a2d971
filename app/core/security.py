import logging
import bcrypt
from passlib.context import CryptContext
from datetime import datetime, timedelta, timezone
from jose import jwt, JWTError
from app.core.config import SECRET_KEY, ALGORITHM, ACCESS_TOKEN_EXPIRE_MINUTES, STORE_INT_MAX
from app.core.errors import AuthenticationError
from app.core.principal import Principal, Role

logger = logging.getLogger(__name__)

# passlib is kept for verifying hashes bcrypt.checkpw cannot parse
try:
    pwd_context = CryptContext(
        schemes=["bcrypt"],
        deprecated="auto",
    )
    logger.debug("Password context initialized")
except Exception as e:
    logger.warning(f"Failed to initialize passlib context: {e}, using bcrypt directly")
    pwd_context = None

BCRYPT_MAX_BYTES = 72


def _truncate_password(password: str) -> bytes:
    """Encode and cut to bcrypt's 72-byte limit without splitting a UTF-8 character."""
    password_bytes = password.encode('utf-8')
    if len(password_bytes) <= BCRYPT_MAX_BYTES:
        return password_bytes
    logger.warning("Password exceeds 72 bytes, truncating before hashing")
    return password_bytes[:BCRYPT_MAX_BYTES].decode('utf-8', errors='ignore').encode('utf-8')


def hash_password(password: str) -> str:
    """
    Hash a password using bcrypt.

    Args:
        password: Plain text password

    Returns:
        Hashed password string (bcrypt format compatible with passlib)

    Raises:
        ValueError: If password cannot be hashed
    """
    try:
        return bcrypt.hashpw(_truncate_password(password), bcrypt.gensalt()).decode('utf-8')
    except (ValueError, TypeError) as e:
        logger.error(f"Password hashing failed: {e}")
        raise ValueError("Invalid password") from e


def verify_password(password: str, hashed: str) -> bool:
    """
    Verify a password against its hash.

    Returns:
        True if password matches hash, False otherwise
    """
    if not hashed:
        return False
    try:
        return bcrypt.checkpw(_truncate_password(password), hashed.encode('utf-8'))
    except (ValueError, TypeError):
        if pwd_context:
            try:
                return pwd_context.verify(password, hashed)
            except (ValueError, TypeError):
                return False
        return False


def create_access_token(data: dict, expires_delta: timedelta = None):
    to_encode = data.copy()
    expire = datetime.now(timezone.utc) + (expires_delta or timedelta(minutes=ACCESS_TOKEN_EXPIRE_MINUTES))
    to_encode.update({"exp": expire})
    return jwt.encode(to_encode, SECRET_KEY, algorithm=ALGORITHM)


def create_token_for_user(user) -> str:
    """Issue a bearer token carrying the user's id and role."""
    return create_access_token({"sub": str(user.id), "role": user.role})


def verify(token: str) -> Principal:
    """
    Resolve a bearer token into a Principal.

    Raises:
        AuthenticationError: token is malformed, expired, or carries an unknown role
    """
    try:
        payload = jwt.decode(token, SECRET_KEY, algorithms=[ALGORITHM])
    except JWTError as e:
        logger.debug(f"Token rejected: {e}")
        raise AuthenticationError("Invalid token") from e

    subject = payload.get("sub")
    role = payload.get("role")
    if subject is None or role is None:
        raise AuthenticationError("Invalid token")

    try:
        principal = Principal(subject_id=int(subject), role=Role(role))
    except (TypeError, ValueError) as e:
        raise AuthenticationError("Invalid token") from e

    if not 1 <= principal.subject_id <= STORE_INT_MAX:
        raise AuthenticationError("Invalid token")
    return principal

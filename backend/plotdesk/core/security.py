from datetime import datetime, timedelta
from typing import Optional, Dict, Any
from jose import ExpiredSignatureError, JWTError, jwt
import bcrypt

from plotdesk.core.config import settings
from plotdesk.core.logging_config import logger
from plotdesk.schemas.auth import AuthUser


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify password"""
    # Bcrypt has a 72 byte limit - truncate password if necessary
    password_bytes = plain_password.encode('utf-8')[:72]
    try:
        return bcrypt.checkpw(password_bytes, hashed_password.encode('utf-8'))
    except ValueError:
        # Stored value is not a bcrypt hash
        return False


def get_password_hash(password: str) -> str:
    """Hash password with configurable rounds (BCRYPT_ROUNDS in .env)"""
    password_bytes = password.encode('utf-8')[:72]
    hashed = bcrypt.hashpw(password_bytes, bcrypt.gensalt(rounds=settings.BCRYPT_ROUNDS))
    return hashed.decode('utf-8')


def create_access_token(data: Dict[str, Any], expires_delta: Optional[timedelta] = None) -> str:
    """Create JWT access token"""
    to_encode = data.copy()

    if expires_delta:
        expire = datetime.utcnow() + expires_delta
    else:
        expire = datetime.utcnow() + timedelta(days=settings.ACCESS_TOKEN_EXPIRE_DAYS)

    to_encode.update({"exp": expire, "type": "access"})
    return jwt.encode(to_encode, settings.JWT_SECRET_KEY, algorithm=settings.JWT_ALGORITHM)


def decode_token(token: str) -> Optional[Dict[str, Any]]:
    """Decode JWT token, None when invalid or expired"""
    try:
        return jwt.decode(token, settings.JWT_SECRET_KEY, algorithms=[settings.JWT_ALGORITHM])
    except ExpiredSignatureError:
        logger.info("Token expired")
    except JWTError:
        logger.info("Invalid token")
    return None


class AuthService:
    """
    Session tokens for authenticated identities.

    mint() signs a time-limited token carrying id, email and role;
    verify() turns a bearer token back into the identity or None.
    """

    def mint(self, identity: AuthUser, expires_delta: Optional[timedelta] = None) -> str:
        return create_access_token(
            {"sub": identity.id, "email": identity.email, "role": identity.role.value},
            expires_delta=expires_delta,
        )

    def verify(self, token: str) -> Optional[AuthUser]:
        payload = decode_token(token)
        if payload is None or payload.get("type") != "access":
            return None

        try:
            return AuthUser(id=payload["sub"], email=payload["email"], role=payload["role"])
        except (KeyError, ValueError):
            return None


auth_service = AuthService()

from datetime import datetime, timedelta
from typing import Optional, Dict, Any
from jose import jwt, JWTError
from passlib.context import CryptContext
import uuid

from mini_jira.core import get_settings

# Get application settings
settings = get_settings()

# Password hashing context
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")

REFRESH_TOKEN_TYPE = "refresh"


class SecurityService:
    """Password hashing and signed token issue/verification"""

    @staticmethod
    def create_password_hash(password: str) -> str:
        """Create a hashed password"""
        return pwd_context.hash(password)

    @staticmethod
    def verify_password(plain_password: str, hashed_password: str) -> bool:
        """Verify a password against its hash"""
        return pwd_context.verify(plain_password, hashed_password)

    @staticmethod
    def build_claims(user) -> Dict[str, Any]:
        """Identity claims carried by both token kinds"""
        return {
            "sub": str(user.id),
            "email": user.email,
            "role": user.role.value if hasattr(user.role, "value") else user.role,
        }

    @staticmethod
    def _encode(claims: Dict[str, Any], expires_delta: timedelta) -> str:
        now = datetime.utcnow()
        to_encode = claims.copy()
        to_encode.update({
            "iat": now,
            "exp": now + expires_delta,
            "iss": settings.JWT_ISSUER,
            "aud": settings.JWT_AUDIENCE,
        })
        return jwt.encode(to_encode, settings.SECRET_KEY, algorithm=settings.ALGORITHM)

    @staticmethod
    def create_access_token(
        data: Dict[str, Any],
        expires_delta: Optional[timedelta] = None
    ) -> str:
        """Create a short-lived access token. Access tokens carry no type claim"""
        to_encode = {k: v for k, v in data.items() if k != "type"}
        if expires_delta is None:
            expires_delta = timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
        return SecurityService._encode(to_encode, expires_delta)

    @staticmethod
    def create_refresh_token(
        data: Dict[str, Any],
        expires_delta: Optional[timedelta] = None
    ) -> str:
        """Create a long-lived refresh token marked with type=refresh"""
        to_encode = data.copy()
        to_encode.update({"type": REFRESH_TOKEN_TYPE, "jti": str(uuid.uuid4())})
        if expires_delta is None:
            expires_delta = timedelta(days=settings.REFRESH_TOKEN_EXPIRE_DAYS)
        return SecurityService._encode(to_encode, expires_delta)

    @staticmethod
    def create_tokens(user) -> Dict[str, str]:
        """Create an access/refresh pair for a user"""
        claims = SecurityService.build_claims(user)
        return {
            "token": SecurityService.create_access_token(claims),
            "refresh_token": SecurityService.create_refresh_token(claims),
        }

    @staticmethod
    def _decode(token: str) -> Optional[Dict[str, Any]]:
        # Signature, exp, iss and aud are all enforced by jose
        try:
            return jwt.decode(
                token,
                settings.SECRET_KEY,
                algorithms=[settings.ALGORITHM],
                audience=settings.JWT_AUDIENCE,
                issuer=settings.JWT_ISSUER,
            )
        except JWTError:
            return None

    @staticmethod
    def verify_token(token: str) -> Optional[Dict[str, Any]]:
        """Verify an access token; refresh tokens are rejected"""
        payload = SecurityService._decode(token)
        if not payload or "type" in payload:
            return None
        if payload.get("sub") is None:
            return None
        return payload

    @staticmethod
    def verify_refresh_token(token: str) -> Optional[Dict[str, Any]]:
        """Verify a refresh token; access tokens are rejected"""
        payload = SecurityService._decode(token)
        if not payload or payload.get("type") != REFRESH_TOKEN_TYPE:
            return None
        if payload.get("sub") is None:
            return None
        return payload

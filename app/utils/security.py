import logging
from datetime import datetime, timedelta, timezone

from jose import JWTError, ExpiredSignatureError, jwt

from app.config import settings
from app.schemas.auth import VerifiedIdentity
from app.utils.exceptions import TokenExpiredException, UnauthorizedException

logger = logging.getLogger(__name__)


# ─── Identity Tokens ──────────────────────────────────────────────────────────
def create_identity_token(email: str, uid: str, expires_minutes: int | None = None) -> str:
    """
    Sign an identity token for (email, uid).
    Payload: sub (uid), email, exp, plus aud/iss when configured.
    """
    minutes = settings.ACCESS_TOKEN_EXPIRE_MINUTES if expires_minutes is None else expires_minutes
    expire = datetime.now(timezone.utc) + timedelta(minutes=minutes)
    payload = {
        "sub": uid,
        "email": email,
        "exp": expire,
    }
    if settings.TOKEN_AUDIENCE:
        payload["aud"] = settings.TOKEN_AUDIENCE
    if settings.TOKEN_ISSUER:
        payload["iss"] = settings.TOKEN_ISSUER
    return jwt.encode(payload, settings.SECRET_KEY, algorithm=settings.ALGORITHM)


def verify_identity_token(token: str) -> VerifiedIdentity:
    """
    Decode and validate an identity token.
    Raises 401 if invalid or missing claims, 401 (TOKEN_EXPIRED) if expired.
    """
    try:
        payload = jwt.decode(
            token,
            settings.SECRET_KEY,
            algorithms=[settings.ALGORITHM],
            audience=settings.TOKEN_AUDIENCE or None,
            issuer=settings.TOKEN_ISSUER or None,
            options={"verify_aud": bool(settings.TOKEN_AUDIENCE)},
        )
    except ExpiredSignatureError:
        logger.warning("Token verification failed: token expired")
        raise TokenExpiredException()
    except JWTError as e:
        logger.warning(f"Token verification failed: {e}")
        raise UnauthorizedException()

    email = payload.get("email")
    uid = payload.get("sub")
    if not email or not uid:
        logger.warning("Token verification failed: missing email or sub claim")
        raise UnauthorizedException()

    return VerifiedIdentity(email=email, uid=str(uid))

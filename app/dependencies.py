from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials

from app.schemas.auth import VerifiedIdentity
from app.utils.security import verify_identity_token
from app.utils.exceptions import UnauthorizedException

# Bearer token extractor
bearer_scheme = HTTPBearer(auto_error=False)


# ─── Verified Identity ────────────────────────────────────────────────────────
def get_verified_identity(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
) -> VerifiedIdentity:
    """
    Validate the Bearer token and return the caller's verified identity.
    Raises 401 if the header is missing, not a Bearer token, invalid or expired.

    Usage:
        @router.post("/vehicles")
        def create(identity: VerifiedIdentity = Depends(get_verified_identity)):
            ...
    """
    if not credentials:
        raise UnauthorizedException()

    return verify_identity_token(credentials.credentials)

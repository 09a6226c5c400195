"""
JWT verification and FastAPI dependencies for authentication and contest authorization.

Tokens are issued by the external identity provider; this module only verifies
them and reads the subject (`sub`) plus the optional `name` / `email` claims.
"""
import logging
import uuid
from datetime import datetime, timedelta, timezone

import jwt
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.core.config import settings
from app.core.database import get_db
from app.core.permissions import Permission, has_permission
from app.models.user import User

logger = logging.getLogger(__name__)
bearer_scheme = HTTPBearer(auto_error=False)

ACCESS_TOKEN_EXPIRE_MINUTES = 480  # 8 hours


def create_access_token(
    subject: str,
    nombre: str | None = None,
    email: str | None = None,
    expires_minutes: int = ACCESS_TOKEN_EXPIRE_MINUTES,
) -> str:
    """Issue a token the way the identity provider does (seeding and tests)."""
    now = datetime.now(timezone.utc)
    payload = {
        "sub": subject,
        "name": nombre,
        "email": email,
        "iat": now,
        "exp": now + timedelta(minutes=expires_minutes),
    }
    if settings.JWT_AUDIENCE:
        payload["aud"] = settings.JWT_AUDIENCE
    if settings.JWT_ISSUER:
        payload["iss"] = settings.JWT_ISSUER
    return jwt.encode(payload, settings.SECRET_KEY, algorithm=settings.JWT_ALGORITHM)


def decode_token(token: str) -> dict:
    try:
        return jwt.decode(
            token,
            settings.SECRET_KEY,
            algorithms=[settings.JWT_ALGORITHM],
            audience=settings.JWT_AUDIENCE,
            issuer=settings.JWT_ISSUER,
            options={"verify_aud": settings.JWT_AUDIENCE is not None},
        )
    except jwt.ExpiredSignatureError:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Token expired")
    except jwt.InvalidTokenError:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid token")


def _provision_user(db: Session, subject: str, claims: dict) -> User:
    user = User(id=subject, nombre=claims.get("name"), email=claims.get("email"))
    db.add(user)
    try:
        db.commit()
    except IntegrityError:
        # Another request provisioned the same subject first
        db.rollback()
        return db.get(User, subject)
    db.refresh(user)
    logger.info("Provisioned user '%s' from identity token", subject)
    return user


# ── Dependencies ───────────────────────────────────────────────────────────

def get_current_user(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    db: Session = Depends(get_db),
) -> User:
    """Validates the bearer token and returns the User for its subject."""
    if not credentials:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Not authenticated")

    data = decode_token(credentials.credentials)
    subject = data.get("sub")
    if not subject:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid token")

    user = db.get(User, subject)
    if user is None:
        return _provision_user(db, subject, data)
    if not user.activo:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="User inactive")
    return user


def get_optional_user(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    db: Session = Depends(get_db),
) -> User | None:
    """Like get_current_user, but an unusable token on a public route is treated as anonymous."""
    if not credentials:
        return None
    try:
        return get_current_user(credentials, db)
    except HTTPException as exc:
        logger.info("Ignoring unusable credentials on optional auth: %s", exc.detail)
        return None


def require_contest_permission(permission: Permission):
    """
    Returns a FastAPI dependency that authenticates the caller and checks that they
    hold `permission` on the contest named by the `contest_id` path parameter.

    Usage:
        @router.put("/contests/{contest_id}")
        def update(..., user: User = Depends(require_contest_permission(Permission.MANAGE_CONTEST)))
    """

    def _checker(
        contest_id: uuid.UUID,
        current_user: User = Depends(get_current_user),
        db: Session = Depends(get_db),
    ) -> User:
        if not has_permission(db, current_user.id, contest_id, permission):
            logger.info(
                "User '%s' denied %s on contest %s", current_user.id, permission.value, contest_id
            )
            raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Forbidden")
        return current_user

    return _checker

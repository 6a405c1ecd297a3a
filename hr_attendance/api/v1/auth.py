"""
Authentication endpoints
"""
import logging

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from hr_attendance.core.deps import get_db
from hr_attendance.core.security import verify_password, create_access_token
from hr_attendance.models.user import User
from hr_attendance.schemas.auth import LoginRequest, TokenResponse
from hr_attendance.services.audit_service import log_audit

router = APIRouter()
_log = logging.getLogger(__name__)


@router.post("/login", response_model=TokenResponse)
async def login(
    login_data: LoginRequest,
    db: Session = Depends(get_db)
):
    """
    Authenticate by email and password and return a JWT.

    Rejects inactive or trashed accounts. The token subject is the business user id.
    """
    user = db.query(User).filter(User.email == login_data.email.strip().lower()).first()

    if not user or not user.password_hash or not verify_password(login_data.password, user.password_hash):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid email or password"
        )

    if not user.is_usable:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Account is inactive"
        )

    access_token = create_access_token(data={"sub": user.user_id, "role": user.role})

    log_audit(
        db=db,
        actor_id=user.user_id,
        action="AUTH_LOGIN_SUCCESS",
        entity_type="auth",
        meta={"email": user.email, "role": user.role},
    )
    db.commit()
    _log.info("login: user_id=%s", user.user_id)

    return TokenResponse(access_token=access_token, token_type="bearer")

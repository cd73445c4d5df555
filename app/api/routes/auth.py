# app/api/routes/auth.py
from typing import Optional

from fastapi import APIRouter, Depends

from app.db.models.user import User
from app.schemas.user import MeResponse, UserResponse
from app.core.security import caller_is_admin, get_caller_email, get_optional_user

router = APIRouter(prefix="/auth", tags=["auth"])


@router.get("/me", response_model=MeResponse)
def me(
    viewer: Optional[User] = Depends(get_optional_user),
    caller_email: Optional[str] = Depends(get_caller_email),
):
    # sign-in itself happens at the external auth provider
    return MeResponse(
        user=UserResponse.model_validate(viewer) if viewer else None,
        is_admin=caller_is_admin(caller_email),
    )

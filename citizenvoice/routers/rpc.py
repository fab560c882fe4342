"""Remote procedures callable by clients."""
from __future__ import annotations

from fastapi import APIRouter, Depends

from ..models import User
from ..security.policies import is_admin
from ..services import get_optional_user

router = APIRouter(prefix="/rpc", tags=["rpc"])


@router.post("/is_admin", response_model=bool)
async def is_admin_endpoint(current_user: User | None = Depends(get_optional_user)) -> bool:
    return is_admin(current_user)


__all__ = ["router"]

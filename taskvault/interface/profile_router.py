"""Profile routes for the authenticated user."""

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from taskvault.domain.update_models import ProfileUpdate
from taskvault.interface.auth_gate import AuthContext, require_user
from taskvault.interface.responses import success
from taskvault.services import user_service


router = APIRouter(prefix="/profile", tags=["profile"])


@router.get("")
async def get_profile(auth: AuthContext = Depends(require_user)) -> JSONResponse:
    user = await user_service.get_public_user(user_id=auth.user_id)
    return success(data=user.model_dump(by_alias=True))


@router.put("")
async def put_profile(body: ProfileUpdate, auth: AuthContext = Depends(require_user)) -> JSONResponse:
    """Replace name and email; both are validated again in full."""
    user = await user_service.update_profile(user_id=auth.user_id, name=body.name, email=body.email)
    return success(data=user.model_dump(by_alias=True))

from fastapi import APIRouter, Depends, File, UploadFile
from sqlalchemy.ext.asyncio import AsyncSession

from backoffice.auth.dependencies import current_user
from backoffice.auth.models import UserOut
from backoffice.common.models import to_out
from backoffice.common.utils import success_response
from backoffice.db.dependencies import get_session
from backoffice.schema.full_schema import Users
from backoffice.user.models import ProfileUpdateIn
from backoffice.user.services import get_profile, update_profile, update_profile_photo

user_router = APIRouter()


@user_router.get("/profile")
async def read_profile(user: Users = Depends(current_user), session: AsyncSession = Depends(get_session)):
    return success_response(await get_profile(session, user))


@user_router.put("/profile")
async def write_profile(payload: ProfileUpdateIn, user: Users = Depends(current_user),
                        session: AsyncSession = Depends(get_session)):
    return success_response(await update_profile(session, user, payload))


@user_router.post("/profile/photo")
async def upload_photo(photo: UploadFile = File(...), user: Users = Depends(current_user),
                       session: AsyncSession = Depends(get_session)):
    user = await update_profile_photo(session, user, photo)
    return success_response({"message": "Profile photo updated", "user": to_out(UserOut, user)})

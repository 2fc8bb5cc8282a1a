from fastapi import UploadFile

from backoffice.auth.models import UserOut
from backoffice.auth.utils import require_text
from backoffice.common.logging_setup import get_logger
from backoffice.common.models import to_out
from backoffice.common.utils import now
from backoffice.kyc.constants import PERSONAL_FIELDS
from backoffice.kyc.models import PersonalKycOut
from backoffice.kyc.services import apply_personal_fields, get_personal
from backoffice.schema.full_schema import Users
from backoffice.stores.models import StoreSummaryOut
from backoffice.stores.repository import store_by_user
from backoffice.uploads import services as uploads
from backoffice.user.models import ProfileUpdateIn

logger = get_logger("backoffice.user")


async def get_profile(session, user: Users) -> dict:
    kyc = await get_personal(session, user.id)
    store = await store_by_user(session, user.id)
    return {
        "user": to_out(UserOut, user),
        "kyc": to_out(PersonalKycOut, kyc) if kyc else None,
        "store": to_out(StoreSummaryOut, store) if store else None,
    }


async def update_profile(session, user: Users, payload: ProfileUpdateIn) -> dict:
    updates = payload.model_dump(exclude_unset=True)

    if "first_name" in updates:
        user.first_name = require_text(updates["first_name"], "First name")
    if "last_name" in updates:
        user.last_name = require_text(updates["last_name"], "Last name")
    if "phone" in updates:
        user.phone = updates["phone"]
    user.full_name = f"{user.first_name} {user.last_name}"
    user.updated_at = now()

    kyc_fields = {k: v for k, v in updates.items() if k in PERSONAL_FIELDS}
    if kyc_fields:
        await apply_personal_fields(session, user.id, kyc_fields)

    await session.commit()
    logger.info("user.profile_updated", extra={"user_id": user.id, "fields": sorted(updates)})
    return await get_profile(session, user)


async def update_profile_photo(session, user: Users, photo: UploadFile) -> Users:
    user.profile_photo_url = await uploads.upload_image(photo, folder="profile-photos")
    user.updated_at = now()
    await session.commit()
    logger.info("user.photo_updated", extra={"user_id": user.id})
    return user

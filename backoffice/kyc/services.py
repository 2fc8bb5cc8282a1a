from typing import Iterable, List, Optional

from sqlalchemy import delete, select
from starlette.datastructures import FormData, UploadFile

from backoffice.common.custom_exceptions import BadRequestError, NotFoundError
from backoffice.common.utils import now
from backoffice.kyc.constants import PERSONAL_FIELDS, SUBMIT_REQUIRED_FIELDS, logger
from backoffice.kyc.models import BusinessKycIn, KycDocumentIn, PepIn
from backoffice.schema.full_schema import (BusinessKyc, KycDocument, KycDocumentType, KycStatus, Pep,
                                           UserKycProfile)
from backoffice.uploads import services as uploads
from backoffice.uploads.constants import KYC_UPLOAD_FIELDS


async def get_personal(session, user_id: int) -> Optional[UserKycProfile]:
    res = await session.execute(select(UserKycProfile).where(UserKycProfile.user_id == user_id))
    return res.scalar_one_or_none()


async def apply_personal_fields(session, user_id: int, fields: dict) -> UserKycProfile:
    """Create or update the personal profile without committing.

    A new profile starts IN_PROGRESS; an existing one only moves forward from
    NOT_STARTED, so SUBMITTED/APPROVED/REJECTED are never reset by an edit.
    """
    fields = {k: v for k, v in fields.items() if k in PERSONAL_FIELDS}
    profile = await get_personal(session, user_id)
    if profile is None:
        profile = UserKycProfile(user_id=user_id, status=KycStatus.IN_PROGRESS, **fields)
        session.add(profile)
        return profile

    for field, value in fields.items():
        setattr(profile, field, value)
    if profile.status == KycStatus.NOT_STARTED:
        profile.status = KycStatus.IN_PROGRESS
    profile.updated_at = now()
    return profile


async def upsert_personal(session, user_id: int, fields: dict) -> UserKycProfile:
    profile = await apply_personal_fields(session, user_id, fields)
    await session.commit()
    logger.info("kyc.personal_saved", extra={"user_id": user_id, "status": profile.status.value})
    return profile


async def get_business(session, user_id: int) -> Optional[BusinessKyc]:
    res = await session.execute(select(BusinessKyc).where(BusinessKyc.user_id == user_id))
    return res.scalar_one_or_none()


async def upsert_business(session, user_id: int, payload: BusinessKycIn) -> BusinessKyc:
    values = payload.model_dump(exclude_unset=True)
    name = (values.get("business_name") or "").strip()
    if not name:
        raise BadRequestError("Business name is required")
    values["business_name"] = name

    business = await get_business(session, user_id)
    if business is None:
        business = BusinessKyc(user_id=user_id, **values)
        session.add(business)
    else:
        for field, value in values.items():
            setattr(business, field, value)
        business.updated_at = now()

    await session.commit()
    logger.info("kyc.business_saved", extra={"user_id": user_id})
    return business


async def list_documents(session, user_id: int) -> List[KycDocument]:
    stmt = select(KycDocument).where(KycDocument.user_id == user_id).order_by(KycDocument.id)
    return (await session.execute(stmt)).scalars().all()


async def _replace_documents(session, user_id: int, documents: Iterable[tuple]) -> List[KycDocument]:
    documents = list(documents)
    types = {doc_type for doc_type, _ in documents}

    # only the types present in this batch are replaced, the rest stay
    await session.execute(
        delete(KycDocument).where(KycDocument.user_id == user_id, KycDocument.type.in_(types))
    )
    session.add_all([KycDocument(user_id=user_id, type=doc_type, url=url) for doc_type, url in documents])
    await session.commit()

    logger.info("kyc.documents_saved", extra={"user_id": user_id, "types": sorted(t.value for t in types)})
    return await list_documents(session, user_id)


async def save_documents(session, user_id: int, documents: List[KycDocumentIn]) -> List[KycDocument]:
    if not documents:
        raise BadRequestError("At least one document is required")
    return await _replace_documents(session, user_id, [(d.type, d.url) for d in documents])


async def upload_documents(session, user_id: int, form: FormData) -> List[KycDocument]:
    files = [(field, value) for field, value in form.multi_items() if isinstance(value, UploadFile)]
    if not files:
        raise BadRequestError("No files uploaded")

    uploaded = []
    for field, file in files:
        doc_type = KYC_UPLOAD_FIELDS.get(field)
        if doc_type is None:
            logger.debug("kyc.upload.unknown_field", extra={"field": field})
            continue
        url = await uploads.upload_document(file, folder=f"kyc/{user_id}")
        uploaded.append((KycDocumentType(doc_type), url))

    if not uploaded:
        raise BadRequestError("No valid documents uploaded")
    return await _replace_documents(session, user_id, uploaded)


async def list_peps(session, user_id: int) -> List[Pep]:
    stmt = select(Pep).where(Pep.user_id == user_id).order_by(Pep.id)
    return (await session.execute(stmt)).scalars().all()


async def save_peps(session, user_id: int, peps: List[PepIn]) -> List[Pep]:
    await session.execute(delete(Pep).where(Pep.user_id == user_id))
    session.add_all([Pep(user_id=user_id, **p.model_dump()) for p in peps])
    await session.commit()
    logger.info("kyc.peps_saved", extra={"user_id": user_id, "count": len(peps)})
    return await list_peps(session, user_id)


async def submit_kyc(session, user_id: int) -> UserKycProfile:
    profile = await get_personal(session, user_id)
    if profile is None:
        raise NotFoundError("Personal KYC profile not found")
    if any(not getattr(profile, f) for f in SUBMIT_REQUIRED_FIELDS):
        raise BadRequestError("Personal KYC information is incomplete")

    profile.status = KycStatus.SUBMITTED
    profile.submitted_at = now()
    await session.commit()
    logger.info("kyc.submitted", extra={"user_id": user_id})
    return profile

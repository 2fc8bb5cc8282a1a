from fastapi import APIRouter, Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from backoffice.auth.dependencies import current_user
from backoffice.common.models import to_out, to_out_list
from backoffice.common.utils import success_response
from backoffice.db.dependencies import get_session
from backoffice.kyc.models import (BusinessKycIn, BusinessKycOut, KycDocumentOut, KycDocumentsIn, PepOut,
                                   PepsIn, PersonalKycIn, PersonalKycOut)
from backoffice.kyc.services import (get_business, get_personal, list_documents, list_peps, save_documents,
                                     save_peps, submit_kyc, upload_documents, upsert_business,
                                     upsert_personal)
from backoffice.schema.full_schema import Users

kyc_router = APIRouter()


@kyc_router.get("/personal")
async def read_personal(user: Users = Depends(current_user), session: AsyncSession = Depends(get_session)):
    profile = await get_personal(session, user.id)
    return success_response({"profile": to_out(PersonalKycOut, profile) if profile else None})


@kyc_router.put("/personal")
async def write_personal(payload: PersonalKycIn, user: Users = Depends(current_user),
                         session: AsyncSession = Depends(get_session)):
    profile = await upsert_personal(session, user.id, payload.model_dump(exclude_unset=True))
    return success_response({"message": "Personal KYC saved", "profile": to_out(PersonalKycOut, profile)})


@kyc_router.get("/business")
async def read_business(user: Users = Depends(current_user), session: AsyncSession = Depends(get_session)):
    business = await get_business(session, user.id)
    return success_response({"business": to_out(BusinessKycOut, business) if business else None})


@kyc_router.put("/business")
async def write_business(payload: BusinessKycIn, user: Users = Depends(current_user),
                         session: AsyncSession = Depends(get_session)):
    business = await upsert_business(session, user.id, payload)
    return success_response({"message": "Business KYC saved", "business": to_out(BusinessKycOut, business)})


@kyc_router.get("/documents")
async def read_documents(user: Users = Depends(current_user), session: AsyncSession = Depends(get_session)):
    return success_response({"documents": to_out_list(KycDocumentOut, await list_documents(session, user.id))})


@kyc_router.put("/documents")
async def write_documents(payload: KycDocumentsIn, user: Users = Depends(current_user),
                          session: AsyncSession = Depends(get_session)):
    documents = await save_documents(session, user.id, payload.documents)
    return success_response({"message": "KYC documents saved", "documents": to_out_list(KycDocumentOut, documents)})


@kyc_router.post("/documents/upload")
async def upload(request: Request, user: Users = Depends(current_user),
                 session: AsyncSession = Depends(get_session)):
    form = await request.form()
    documents = await upload_documents(session, user.id, form)
    return success_response({"message": "KYC documents uploaded", "documents": to_out_list(KycDocumentOut, documents)})


@kyc_router.get("/peps")
async def read_peps(user: Users = Depends(current_user), session: AsyncSession = Depends(get_session)):
    return success_response({"peps": to_out_list(PepOut, await list_peps(session, user.id))})


@kyc_router.put("/peps")
async def write_peps(payload: PepsIn, user: Users = Depends(current_user),
                     session: AsyncSession = Depends(get_session)):
    peps = await save_peps(session, user.id, payload.peps)
    return success_response({"message": "PEPs saved", "peps": to_out_list(PepOut, peps)})


@kyc_router.post("/submit")
async def submit(user: Users = Depends(current_user), session: AsyncSession = Depends(get_session)):
    profile = await submit_kyc(session, user.id)
    return success_response({"message": "KYC submitted for approval", "profile": to_out(PersonalKycOut, profile)})

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from backoffice.auth.constants import logger
from backoffice.auth.dependencies import current_user
from backoffice.auth.models import (EmailCodeIn, EmailIn, LoginIn, RefreshIn, RegisterIn,
                                    ResetPasswordIn, SetPasswordIn)
from backoffice.auth.services import (forgot_user_password, login_user, logout_user, refresh_user_token,
                                      register_user, resend_user_verification, reset_user_password,
                                      set_user_password, verify_user_email, verify_user_reset_code)
from backoffice.common.utils import success_response
from backoffice.db.dependencies import get_session
from backoffice.schema.full_schema import Users

auth_router = APIRouter()


@auth_router.post("/register", status_code=status.HTTP_201_CREATED)
async def register(payload: RegisterIn, session: AsyncSession = Depends(get_session)):
    logger.info("signup.attempt", extra={"email": payload.email})
    user = await register_user(session, payload)
    return success_response(
        {"message": "Registration successful. Please check your email for the verification code.",
         "userId": user.id},
        status_code=status.HTTP_201_CREATED,
    )


@auth_router.post("/verify-email")
async def verify_email(payload: EmailCodeIn, session: AsyncSession = Depends(get_session)):
    result = await verify_user_email(session, payload.email, payload.code)
    return success_response({"message": "Email verified successfully", **result})


@auth_router.post("/resend-verification")
async def resend_verification(payload: EmailIn, session: AsyncSession = Depends(get_session)):
    await resend_user_verification(session, payload.email)
    return success_response({"message": "Verification code sent"})


@auth_router.post("/login")
async def login(payload: LoginIn, session: AsyncSession = Depends(get_session)):
    logger.info("login.attempt", extra={"email": payload.email})
    result = await login_user(session, payload.email, payload.password)
    return success_response({"message": "Login successful", **result})


@auth_router.post("/refresh-token")
async def refresh(payload: RefreshIn, session: AsyncSession = Depends(get_session)):
    access = await refresh_user_token(session, payload.refresh_token)
    return success_response({"accessToken": access})


@auth_router.post("/forgot-password")
async def forgot_password(payload: EmailIn, session: AsyncSession = Depends(get_session)):
    await forgot_user_password(session, payload.email)
    return success_response({"message": "Password reset code sent"})


@auth_router.post("/verify-reset-code")
async def verify_reset_code(payload: EmailCodeIn, session: AsyncSession = Depends(get_session)):
    await verify_user_reset_code(session, payload.email, payload.code)
    return success_response({"message": "Reset code is valid"})


@auth_router.post("/reset-password")
async def reset_password(payload: ResetPasswordIn, session: AsyncSession = Depends(get_session)):
    await reset_user_password(session, payload.email, payload.code, payload.new_password)
    return success_response({"message": "Password reset successful"})


@auth_router.post("/logout")
async def logout(user: Users = Depends(current_user), session: AsyncSession = Depends(get_session)):
    await logout_user(session, user.id)
    return success_response({"message": "Logged out successfully"})


@auth_router.post("/set-password")
async def set_password(payload: SetPasswordIn, user: Users = Depends(current_user),
                       session: AsyncSession = Depends(get_session)):
    await set_user_password(session, user, payload.new_password)
    return success_response({"message": "Password updated successfully"})

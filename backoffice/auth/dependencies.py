from fastapi import Depends, Request
from fastapi.security import HTTPBearer

from backoffice.auth import USER_SCOPE
from backoffice.auth.repository import user_by_id
from backoffice.auth.utils import claim_id, decode_access_token
from backoffice.common.custom_exceptions import UnauthorizedError
from backoffice.db.dependencies import get_session
from backoffice.schema.full_schema import Users


class Authentication(HTTPBearer):
    """Bearer token check for one principal scope; returns the decoded claims."""

    def __init__(self, scope: str):
        super().__init__(auto_error=False)
        self.scope = scope

    async def __call__(self, request: Request) -> dict:
        auth_creds = await super().__call__(request)
        if auth_creds is None:
            raise UnauthorizedError("Authentication required")

        claims = decode_access_token(auth_creds.credentials)
        if not claims or claim_id(claims) is None or claims.get("scope") != self.scope:
            raise UnauthorizedError("Invalid or expired token provided.")
        return claims


user_auth = Authentication(USER_SCOPE)


async def current_user(claims: dict = Depends(user_auth), session=Depends(get_session)) -> Users:
    user = await user_by_id(session, claim_id(claims))
    if user is None:
        raise UnauthorizedError("User not found")
    return user

from typing import Optional

from dependency_injector.wiring import Provide, inject
from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from src.platform.config.di import Container
from src.platform.exception.exceptions import AuthenticationError
from src.service.marketplace.app.interface.i_identity_verifier import IIdentityVerifier
from src.service.marketplace.app.interface.i_user_query_repo import IUserQueryRepo
from src.service.marketplace.domain.entity.user_entity import UserEntity


# auto_error=False so a missing header surfaces as our 401, not FastAPI's 403
bearer_scheme = HTTPBearer(auto_error=False)


@inject
async def get_current_email(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    identity_verifier: IIdentityVerifier = Depends(Provide[Container.identity_verifier]),
) -> str:
    """Verified subject email (no user record required)"""
    if credentials is None or not credentials.credentials:
        raise AuthenticationError('Unauthorized Access!')
    return await identity_verifier.verify(token=credentials.credentials)


@inject
async def get_current_user(
    email: str = Depends(get_current_email),
    user_query_repo: IUserQueryRepo = Depends(Provide[Container.user_query_repo]),
) -> Optional[UserEntity]:
    """Stored user for the verified email, looked up on every request (None when not registered)"""
    return await user_query_repo.get_by_email(email)

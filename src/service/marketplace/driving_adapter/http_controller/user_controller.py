from fastapi import APIRouter, Depends, status

from src.platform.logging.loguru_io import Logger
from src.service.marketplace.app.command.upsert_user_use_case import UpsertUserUseCase
from src.service.marketplace.app.query.user_query_use_case import UserQueryUseCase
from src.service.marketplace.driving_adapter.http_controller.auth.identity_auth import (
    get_current_email,
)
from src.service.marketplace.driving_adapter.http_controller.schema.user_schema import (
    UpsertUserRequest,
    UserResponse,
    UserRoleResponse,
)


router = APIRouter()


@router.post('', response_model=UserResponse, status_code=status.HTTP_200_OK)
@Logger.io
async def upsert_user(
    request: UpsertUserRequest,
    use_case: UpsertUserUseCase = Depends(UpsertUserUseCase.depends),
) -> UserResponse:
    user = await use_case.upsert(email=request.email, name=request.name, photo_url=request.photo_url)
    return UserResponse.model_validate(user)


@router.get('/role', response_model=UserRoleResponse)
@Logger.io
async def get_role(
    email: str = Depends(get_current_email),
    use_case: UserQueryUseCase = Depends(UserQueryUseCase.depends),
) -> UserRoleResponse:
    user = await use_case.get_profile(email=email)
    return UserRoleResponse(role=user.role.value)


@router.get('/profile', response_model=UserResponse)
@Logger.io
async def get_profile(
    email: str = Depends(get_current_email),
    use_case: UserQueryUseCase = Depends(UserQueryUseCase.depends),
) -> UserResponse:
    user = await use_case.get_profile(email=email)
    return UserResponse.model_validate(user)

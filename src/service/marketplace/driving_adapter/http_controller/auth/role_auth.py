from typing import Optional

from fastapi import Depends
from opentelemetry import trace

from src.platform.exception.exceptions import ForbiddenError
from src.service.marketplace.domain.entity.user_entity import UserEntity, UserRole
from src.service.marketplace.driving_adapter.http_controller.auth.identity_auth import (
    get_current_user as get_stored_user,
)


class RoleAuthStrategy:
    @staticmethod
    def is_customer(user: UserEntity) -> bool:
        return user.role == UserRole.CUSTOMER

    @staticmethod
    def is_vendor(user: UserEntity) -> bool:
        return user.role == UserRole.VENDOR

    @staticmethod
    def is_admin(user: UserEntity) -> bool:
        return user.role == UserRole.ADMIN


async def require_user(
    current_user: Optional[UserEntity] = Depends(get_stored_user),
) -> UserEntity:
    if current_user is None:
        raise ForbiddenError('No role assigned to this account')
    return current_user


async def require_vendor(current_user: UserEntity = Depends(require_user)) -> UserEntity:
    tracer = trace.get_tracer(__name__)
    with tracer.start_as_current_span(
        'auth.require_vendor',
        attributes={'user.email': current_user.email, 'user.role': current_user.role.value},
    ):
        if not RoleAuthStrategy.is_vendor(current_user):
            raise ForbiddenError('Vendor only Actions!')
        return current_user


async def require_admin(current_user: UserEntity = Depends(require_user)) -> UserEntity:
    if not RoleAuthStrategy.is_admin(current_user):
        raise ForbiddenError('Admin only Actions!')
    return current_user

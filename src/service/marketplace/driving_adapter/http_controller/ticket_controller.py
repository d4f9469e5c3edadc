from typing import List

from fastapi import APIRouter, Depends, status

from src.platform.logging.loguru_io import Logger
from src.platform.types import UtilsUUID7
from src.service.marketplace.app.command.create_ticket_use_case import CreateTicketUseCase
from src.service.marketplace.app.command.delete_ticket_use_case import DeleteTicketUseCase
from src.service.marketplace.app.command.update_ticket_use_case import UpdateTicketUseCase
from src.service.marketplace.app.query.ticket_catalog_use_case import TicketCatalogUseCase
from src.service.marketplace.domain.entity.user_entity import UserEntity
from src.service.marketplace.driving_adapter.http_controller.auth.role_auth import require_vendor
from src.service.marketplace.driving_adapter.http_controller.schema.ticket_schema import (
    TicketCreateRequest,
    TicketResponse,
    TicketUpdateRequest,
)


router = APIRouter()


# Static paths first so they are not captured by /{ticket_id}


@router.get('/all', response_model=List[TicketResponse])
@Logger.io
async def list_tickets(
    use_case: TicketCatalogUseCase = Depends(TicketCatalogUseCase.depends),
) -> List[TicketResponse]:
    return [TicketResponse.model_validate(t) for t in await use_case.list_public()]


@router.get('/latest', response_model=List[TicketResponse])
@Logger.io
async def list_latest_tickets(
    use_case: TicketCatalogUseCase = Depends(TicketCatalogUseCase.depends),
) -> List[TicketResponse]:
    return [TicketResponse.model_validate(t) for t in await use_case.list_latest()]


@router.get('/advertised-home', response_model=List[TicketResponse])
@Logger.io
async def list_advertised_tickets(
    use_case: TicketCatalogUseCase = Depends(TicketCatalogUseCase.depends),
) -> List[TicketResponse]:
    return [TicketResponse.model_validate(t) for t in await use_case.list_advertised()]


@router.get('/{ticket_id}', response_model=TicketResponse)
@Logger.io
async def get_ticket(
    ticket_id: UtilsUUID7,
    use_case: TicketCatalogUseCase = Depends(TicketCatalogUseCase.depends),
) -> TicketResponse:
    return TicketResponse.model_validate(await use_case.get_public(ticket_id=ticket_id))


@router.post('', response_model=TicketResponse, status_code=status.HTTP_201_CREATED)
@Logger.io
async def create_ticket(
    request: TicketCreateRequest,
    current_user: UserEntity = Depends(require_vendor),
    use_case: CreateTicketUseCase = Depends(CreateTicketUseCase.depends),
) -> TicketResponse:
    ticket = await use_case.create_ticket(vendor_email=current_user.email, **request.model_dump())
    return TicketResponse.model_validate(ticket)


@router.patch('/{ticket_id}', response_model=TicketResponse)
@Logger.io
async def update_ticket(
    ticket_id: UtilsUUID7,
    request: TicketUpdateRequest,
    current_user: UserEntity = Depends(require_vendor),
    use_case: UpdateTicketUseCase = Depends(UpdateTicketUseCase.depends),
) -> TicketResponse:
    ticket = await use_case.update_ticket(
        ticket_id=ticket_id,
        vendor_email=current_user.email,
        changes=request.model_dump(exclude_unset=True),
    )
    return TicketResponse.model_validate(ticket)


@router.delete('/{ticket_id}')
@Logger.io
async def delete_ticket(
    ticket_id: UtilsUUID7,
    current_user: UserEntity = Depends(require_vendor),
    use_case: DeleteTicketUseCase = Depends(DeleteTicketUseCase.depends),
) -> dict[str, str]:
    await use_case.delete_ticket(ticket_id=ticket_id, vendor_email=current_user.email)
    return {'message': 'Ticket deleted'}

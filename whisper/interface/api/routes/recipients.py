"""Recipient routes."""

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter

from whisper.application.usecase.account import (
    ListRecipientsResponse,
    ListRecipientsUseCase,
)

router = APIRouter(prefix="/recipients", tags=["recipients"], route_class=DishkaRoute)


@router.get("", response_model=ListRecipientsResponse)
async def list_recipients(
    list_recipients_use_case: FromDishka[ListRecipientsUseCase],
) -> ListRecipientsResponse:
    """List the admins a private message can be addressed to."""
    return await list_recipients_use_case.execute()

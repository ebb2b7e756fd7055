from typing import List

from fastapi import Depends, Query, status

from app.api import deps
from app.api.router import CustomAPIRouter
from app.api.v1.helpers import get_notification_service
from app.api.v1.helpers.responses import RESP_AUTH_404
from app.models.user import User
from app.schemas.notification import BulkResult, NotificationResponse, UnreadCount
from app.services.notifications.service import NotificationService

router = CustomAPIRouter()


@router.get("/", response_model=List[NotificationResponse])
async def read_notifications(
    skip: int = Query(0, ge=0),
    limit: int = Query(100, ge=1, le=500),
    current_user: User = Depends(deps.get_current_active_user),
    service: NotificationService = Depends(get_notification_service),
):
    """
    The current user's notifications, newest first.
    """
    return await service.list_notifications(current_user.id, skip=skip, limit=limit)


@router.get("/unread", response_model=List[NotificationResponse])
async def read_unread_notifications(
    current_user: User = Depends(deps.get_current_active_user),
    service: NotificationService = Depends(get_notification_service),
):
    return await service.list_unread(current_user.id)


@router.get("/unread/count", response_model=UnreadCount)
async def read_unread_count(
    current_user: User = Depends(deps.get_current_active_user),
    service: NotificationService = Depends(get_notification_service),
):
    return UnreadCount(count=await service.unread_count(current_user.id))


# Static paths are registered before /{notification_id} so they are not
# captured as an id
@router.put("/read-all", response_model=BulkResult)
async def mark_all_notifications_read(
    current_user: User = Depends(deps.get_current_active_user),
    service: NotificationService = Depends(get_notification_service),
):
    return BulkResult(affected=await service.mark_all_as_read(current_user.id))


@router.delete("/read", response_model=BulkResult)
async def delete_read_notifications(
    current_user: User = Depends(deps.get_current_active_user),
    service: NotificationService = Depends(get_notification_service),
):
    return BulkResult(affected=await service.delete_read(current_user.id))


@router.put(
    "/{notification_id}/read",
    response_model=NotificationResponse,
    responses={**RESP_AUTH_404},
)
async def mark_notification_read(
    notification_id: str,
    current_user: User = Depends(deps.get_current_active_user),
    service: NotificationService = Depends(get_notification_service),
):
    return await service.mark_as_read(notification_id, current_user.id)


@router.delete(
    "/{notification_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    responses={**RESP_AUTH_404},
)
async def delete_notification(
    notification_id: str,
    current_user: User = Depends(deps.get_current_active_user),
    service: NotificationService = Depends(get_notification_service),
):
    await service.delete_notification(notification_id, current_user.id)

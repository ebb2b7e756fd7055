from typing import List

from fastapi import BackgroundTasks, Depends, status

from app.api import deps
from app.api.router import CustomAPIRouter
from app.api.v1.helpers import get_invitation_service
from app.api.v1.helpers.responses import RESP_ACCEPT, RESP_AUTH_400_404, RESP_INVITE
from app.models.user import User
from app.schemas.invitation import InvitationCreate, InvitationResponse
from app.services.invitations import InvitationService

router = CustomAPIRouter()


@router.post(
    "/",
    response_model=InvitationResponse,
    status_code=status.HTTP_201_CREATED,
    responses={**RESP_INVITE},
)
async def create_invitation(
    invitation_in: InvitationCreate,
    background_tasks: BackgroundTasks,
    current_user: User = Depends(deps.get_current_active_user),
    service: InvitationService = Depends(get_invitation_service),
):
    """
    Invite a user to a project. Only the project owner can invite.
    The invitation email is sent after the response.
    """
    return await service.invite_user_to_project(
        invitation_in.project_id,
        invitation_in.user_id,
        current_user.id,
        message=invitation_in.message,
        background_tasks=background_tasks,
    )


@router.get("/mine", response_model=List[InvitationResponse])
async def read_my_invitations(
    current_user: User = Depends(deps.get_current_active_user),
    service: InvitationService = Depends(get_invitation_service),
):
    """
    All invitations addressed to the current user, newest first.
    """
    return await service.list_my_invitations(current_user.id)


@router.get("/pending", response_model=List[InvitationResponse])
async def read_pending_invitations(
    current_user: User = Depends(deps.get_current_active_user),
    service: InvitationService = Depends(get_invitation_service),
):
    """
    Invitations the current user can still accept or reject.
    """
    return await service.list_pending_invitations(current_user.id)


@router.post(
    "/{invitation_id}/accept",
    response_model=InvitationResponse,
    responses={**RESP_ACCEPT},
)
async def accept_invitation(
    invitation_id: str,
    current_user: User = Depends(deps.get_current_active_user),
    service: InvitationService = Depends(get_invitation_service),
):
    return await service.accept_invitation(invitation_id, current_user.id)


@router.post(
    "/{invitation_id}/reject",
    response_model=InvitationResponse,
    responses={**RESP_AUTH_400_404},
)
async def reject_invitation(
    invitation_id: str,
    current_user: User = Depends(deps.get_current_active_user),
    service: InvitationService = Depends(get_invitation_service),
):
    return await service.reject_invitation(invitation_id, current_user.id)


@router.delete(
    "/{invitation_id}",
    response_model=InvitationResponse,
    responses={**RESP_AUTH_400_404},
)
async def cancel_invitation(
    invitation_id: str,
    current_user: User = Depends(deps.get_current_active_user),
    service: InvitationService = Depends(get_invitation_service),
):
    """
    Cancel a pending invitation. Only the project owner can cancel.
    """
    return await service.cancel_invitation(invitation_id, current_user.id)

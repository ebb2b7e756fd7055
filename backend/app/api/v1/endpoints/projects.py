from typing import List

from fastapi import Depends, Query, status

from app.api import deps
from app.api.router import CustomAPIRouter
from app.api.v1.helpers import (
    get_invitation_service,
    get_membership_service,
    get_project_service,
)
from app.api.v1.helpers.responses import RESP_AUTH, RESP_AUTH_400_404, RESP_AUTH_404
from app.models.user import User
from app.schemas.invitation import InvitationResponse
from app.schemas.project import MemberAdd, ProjectCreate, ProjectResponse
from app.schemas.user import UserSummary
from app.services.invitations import InvitationService
from app.services.membership import MembershipService
from app.services.projects import ProjectService

router = CustomAPIRouter()


@router.post(
    "/",
    response_model=ProjectResponse,
    status_code=status.HTTP_201_CREATED,
    responses={**RESP_AUTH},
)
async def create_project(
    project_in: ProjectCreate,
    current_user: User = Depends(deps.get_current_active_user),
    service: ProjectService = Depends(get_project_service),
):
    """
    Create a new project. The creator becomes its owner.
    """
    return await service.create_project(
        project_in.name, current_user.id, description=project_in.description
    )


@router.get("/", response_model=List[ProjectResponse])
async def read_projects(
    current_user: User = Depends(deps.get_current_active_user),
    service: ProjectService = Depends(get_project_service),
):
    """
    Projects the current user owns or belongs to.
    """
    return await service.list_projects(current_user.id)


@router.get("/{project_id}", response_model=ProjectResponse, responses={**RESP_AUTH_404})
async def read_project(
    project_id: str,
    current_user: User = Depends(deps.get_current_active_user),
    service: ProjectService = Depends(get_project_service),
):
    return await service.get_project(project_id, current_user.id)


@router.get(
    "/{project_id}/members",
    response_model=List[UserSummary],
    responses={**RESP_AUTH_404},
)
async def read_project_members(
    project_id: str,
    current_user: User = Depends(deps.get_current_active_user),
    service: MembershipService = Depends(get_membership_service),
):
    return await service.list_members(project_id, current_user.id)


@router.post(
    "/{project_id}/members",
    response_model=ProjectResponse,
    responses={**RESP_AUTH_404},
)
async def add_project_member(
    project_id: str,
    member_in: MemberAdd,
    current_user: User = Depends(deps.get_current_active_user),
    service: MembershipService = Depends(get_membership_service),
):
    """
    Add a member directly, without an invitation. Owner only.
    Adding an existing member or the owner changes nothing.
    """
    return await service.add_member(project_id, member_in.user_id, current_user.id)


@router.delete(
    "/{project_id}/members/{user_id}",
    response_model=ProjectResponse,
    responses={**RESP_AUTH_400_404},
)
async def remove_project_member(
    project_id: str,
    user_id: str,
    current_user: User = Depends(deps.get_current_active_user),
    service: MembershipService = Depends(get_membership_service),
):
    """
    Remove a member. Owner only; the owner cannot be removed.
    """
    return await service.remove_member(project_id, user_id, current_user.id)


@router.get(
    "/{project_id}/invitations",
    response_model=List[InvitationResponse],
    responses={**RESP_AUTH_404},
)
async def read_project_invitations(
    project_id: str,
    skip: int = Query(0, ge=0),
    limit: int = Query(100, ge=1, le=500),
    current_user: User = Depends(deps.get_current_active_user),
    service: InvitationService = Depends(get_invitation_service),
):
    """
    All invitations sent for a project. Owner only.
    """
    return await service.list_project_invitations(
        project_id, current_user.id, skip=skip, limit=limit
    )

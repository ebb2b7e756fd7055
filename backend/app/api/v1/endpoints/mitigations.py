from typing import List

from fastapi import BackgroundTasks, Depends, status

from app.api import deps
from app.api.router import CustomAPIRouter
from app.api.v1.helpers import get_mitigation_service
from app.api.v1.helpers.responses import RESP_AUTH_400_404, RESP_AUTH_404
from app.models.user import User
from app.schemas.mitigation import MitigationCreate, MitigationResponse, MitigationUpdate
from app.services.mitigations import MitigationService

router = CustomAPIRouter()


@router.post(
    "/",
    response_model=MitigationResponse,
    status_code=status.HTTP_201_CREATED,
    responses={**RESP_AUTH_400_404},
)
async def create_mitigation(
    mitigation_in: MitigationCreate,
    background_tasks: BackgroundTasks,
    current_user: User = Depends(deps.get_current_active_user),
    service: MitigationService = Depends(get_mitigation_service),
):
    """
    Create a mitigation in a project the current user belongs to.
    A set assignee is notified in-app and by email.
    """
    data = mitigation_in.model_dump(exclude={"project_id"})
    return await service.create_mitigation(
        mitigation_in.project_id, data, current_user.id, background_tasks=background_tasks
    )


@router.get("/assigned", response_model=List[MitigationResponse])
async def read_assigned_mitigations(
    current_user: User = Depends(deps.get_current_active_user),
    service: MitigationService = Depends(get_mitigation_service),
):
    return await service.list_assigned_to_me(current_user.id)


@router.get(
    "/project/{project_id}",
    response_model=List[MitigationResponse],
    responses={**RESP_AUTH_404},
)
async def read_project_mitigations(
    project_id: str,
    current_user: User = Depends(deps.get_current_active_user),
    service: MitigationService = Depends(get_mitigation_service),
):
    return await service.list_for_project(project_id, current_user.id)


@router.get("/{mitigation_id}", response_model=MitigationResponse, responses={**RESP_AUTH_404})
async def read_mitigation(
    mitigation_id: str,
    current_user: User = Depends(deps.get_current_active_user),
    service: MitigationService = Depends(get_mitigation_service),
):
    return await service.get_mitigation(mitigation_id, current_user.id)


@router.put(
    "/{mitigation_id}",
    response_model=MitigationResponse,
    responses={**RESP_AUTH_400_404},
)
async def update_mitigation(
    mitigation_id: str,
    mitigation_in: MitigationUpdate,
    background_tasks: BackgroundTasks,
    current_user: User = Depends(deps.get_current_active_user),
    service: MitigationService = Depends(get_mitigation_service),
):
    """
    Update a mitigation. Changing the assignee notifies the new assignee.
    """
    update_data = mitigation_in.model_dump(exclude_unset=True)
    return await service.update_mitigation(
        mitigation_id, update_data, current_user.id, background_tasks=background_tasks
    )


@router.post(
    "/{mitigation_id}/complete",
    response_model=MitigationResponse,
    responses={**RESP_AUTH_404},
)
async def complete_mitigation(
    mitigation_id: str,
    current_user: User = Depends(deps.get_current_active_user),
    service: MitigationService = Depends(get_mitigation_service),
):
    return await service.complete_mitigation(mitigation_id, current_user.id)


@router.delete(
    "/{mitigation_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    responses={**RESP_AUTH_404},
)
async def delete_mitigation(
    mitigation_id: str,
    current_user: User = Depends(deps.get_current_active_user),
    service: MitigationService = Depends(get_mitigation_service),
):
    await service.delete_mitigation(mitigation_id, current_user.id)

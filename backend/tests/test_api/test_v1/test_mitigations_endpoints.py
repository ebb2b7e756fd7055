"""Tests for mitigation API endpoints."""

import asyncio

from fastapi import BackgroundTasks

from app.models.mitigation import Mitigation
from app.schemas.mitigation import MitigationCreate, MitigationResponse, MitigationUpdate


def _make_mitigation(**kwargs):
    data = {"id": "mit-1", "project_id": "proj-1", "title": "Rotate keys", "created_by": "owner-1"}
    data.update(kwargs)
    return Mitigation(**data)


def test_create_strips_project_id_from_fields(current_user, make_service):
    from app.api.v1.endpoints.mitigations import create_mitigation

    service = make_service(create_mitigation=_make_mitigation())
    bg_tasks = BackgroundTasks()

    asyncio.run(
        create_mitigation(
            mitigation_in=MitigationCreate(project_id="proj-1", title="Rotate keys", assignee="victor"),
            background_tasks=bg_tasks,
            current_user=current_user,
            service=service,
        )
    )

    args, kwargs = service.create_mitigation.call_args
    assert args[0] == "proj-1"
    assert "project_id" not in args[1]
    assert args[1]["assignee"] == "victor"
    assert args[2] == "owner-1"
    assert kwargs["background_tasks"] is bg_tasks


def test_update_sends_only_set_fields(current_user, make_service):
    from app.api.v1.endpoints.mitigations import update_mitigation

    service = make_service(update_mitigation=_make_mitigation(status="ACTIVE"))

    asyncio.run(
        update_mitigation(
            mitigation_id="mit-1",
            mitigation_in=MitigationUpdate(status="ACTIVE"),
            background_tasks=BackgroundTasks(),
            current_user=current_user,
            service=service,
        )
    )

    args, _ = service.update_mitigation.call_args
    assert args[1] == {"status": "ACTIVE"}


def test_complete_and_delete(current_user, make_service):
    from app.api.v1.endpoints.mitigations import complete_mitigation, delete_mitigation

    service = make_service(complete_mitigation=_make_mitigation(status="COMPLETED"), delete_mitigation=None)

    result = asyncio.run(complete_mitigation(mitigation_id="mit-1", current_user=current_user, service=service))
    asyncio.run(delete_mitigation(mitigation_id="mit-1", current_user=current_user, service=service))

    assert result.status == "COMPLETED"
    service.delete_mitigation.assert_awaited_once_with("mit-1", "owner-1")


def test_response_from_document():
    mitigation = _make_mitigation()

    body = MitigationResponse.model_validate(mitigation.model_dump(by_alias=True)).model_dump()

    assert body["id"] == "mit-1"
    assert body["status"] == "PLANNED"

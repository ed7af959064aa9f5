"""
Emergency Control Endpoints.

Operators create kill switches, throttles and AI batteries for a tenant and
engage or disengage them. Every toggle is audited.
"""

from typing import List, Optional

from fastapi import APIRouter, Body, Response, status

from agent_guard.core.database.entities import EmergencyControl
from agent_guard.guard.errors import NotFoundError
from agent_guard.server.schemas import ControlCreate, ControlRead, ControlToggle
from agent_guard.server.services.controls import toggle_control
from agent_guard.server.services.deps import ReposDep

router = APIRouter()


@router.get(
    "/{tenant_id}",
    response_model=List[ControlRead],
    summary="List Controls",
    description="List every emergency control configured for a tenant.",
)
async def list_controls(tenant_id: str, repos: ReposDep) -> List[ControlRead]:
    controls = await repos.controls.list(tenant_id)
    return [ControlRead.model_validate(c) for c in controls]


@router.post(
    "/{tenant_id}",
    response_model=ControlRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create Control",
    description="Create an emergency control. Default config for the type applies when none is given.",
)
async def create_control(tenant_id: str, control_in: ControlCreate, repos: ReposDep) -> ControlRead:
    control = EmergencyControl(
        tenant_id=tenant_id,
        control_type=control_in.control_type.value,
        target_agent_id=control_in.target_agent_id,
        is_engaged=control_in.is_engaged,
        config=control_in.config or {},
        triggered_by="manual" if control_in.is_engaged else None,
    )
    control = await repos.controls.create(control)
    return ControlRead.model_validate(control)


@router.post(
    "/{tenant_id}/{control_id}/engage",
    response_model=ControlRead,
    summary="Engage Control",
    responses={404: {"description": "Control not found"}},
)
async def engage_control(
    tenant_id: str,
    control_id: str,
    repos: ReposDep,
    toggle: Optional[ControlToggle] = Body(None),
) -> ControlRead:
    """
    Engage a control.

    Records who engaged it (``manual`` by default) and writes a high-risk audit record.
    """
    control = await toggle_control(
        repos, tenant_id, control_id, True, triggered_by=toggle.triggered_by if toggle else None
    )
    return ControlRead.model_validate(control)


@router.post(
    "/{tenant_id}/{control_id}/disengage",
    response_model=ControlRead,
    summary="Disengage Control",
    responses={404: {"description": "Control not found"}},
)
async def disengage_control(tenant_id: str, control_id: str, repos: ReposDep) -> ControlRead:
    control = await toggle_control(repos, tenant_id, control_id, False)
    return ControlRead.model_validate(control)


@router.delete(
    "/{tenant_id}/{control_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete Control",
    responses={404: {"description": "Control not found"}},
)
async def delete_control(tenant_id: str, control_id: str, repos: ReposDep) -> Response:
    if not await repos.controls.delete(tenant_id, control_id):
        raise NotFoundError(f"Control {control_id} not found", details={"tenant_id": tenant_id})
    return Response(status_code=status.HTTP_204_NO_CONTENT)

"""
Tool Registry Endpoints.

This module lets operators register the tools agents may call for a tenant,
set their rate limits and switch them off.
"""

from typing import List

from fastapi import APIRouter, Response, status

from agent_guard.core.database.entities import ToolRegistryEntry
from agent_guard.guard.errors import NotFoundError
from agent_guard.server.schemas import ToolCreate, ToolRead, ToolUpdate
from agent_guard.server.services.deps import ReposDep

router = APIRouter()


@router.get(
    "/{tenant_id}",
    response_model=List[ToolRead],
    summary="List Tools",
    description="List the tools registered for a tenant, ordered by name.",
)
async def list_tools(tenant_id: str, repos: ReposDep) -> List[ToolRead]:
    tools = await repos.tools.list(tenant_id)
    return [ToolRead.model_validate(t) for t in tools]


@router.post(
    "/{tenant_id}",
    response_model=ToolRead,
    status_code=status.HTTP_201_CREATED,
    summary="Register Tool",
    responses={409: {"description": "A tool with this name already exists"}},
)
async def create_tool(tenant_id: str, tool_in: ToolCreate, repos: ReposDep) -> ToolRead:
    tool = ToolRegistryEntry(tenant_id=tenant_id, **tool_in.model_dump(mode="json"))
    tool = await repos.tools.create(tool)
    return ToolRead.model_validate(tool)


@router.patch(
    "/{tenant_id}/{tool_id}",
    response_model=ToolRead,
    summary="Update Tool",
    responses={404: {"description": "Tool not found"}, 409: {"description": "Name already taken"}},
)
async def update_tool(tenant_id: str, tool_id: str, tool_in: ToolUpdate, repos: ReposDep) -> ToolRead:
    """
    Update a tool.

    Only the fields present in the body change.
    """
    tool = await repos.tools.update(tenant_id, tool_id, tool_in.model_dump(mode="json", exclude_unset=True))
    if tool is None:
        raise NotFoundError(f"Tool {tool_id} not found", details={"tenant_id": tenant_id})
    return ToolRead.model_validate(tool)


@router.delete(
    "/{tenant_id}/{tool_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete Tool",
    responses={404: {"description": "Tool not found"}},
)
async def delete_tool(tenant_id: str, tool_id: str, repos: ReposDep) -> Response:
    if not await repos.tools.delete(tenant_id, tool_id):
        raise NotFoundError(f"Tool {tool_id} not found", details={"tenant_id": tenant_id})
    return Response(status_code=status.HTTP_204_NO_CONTENT)

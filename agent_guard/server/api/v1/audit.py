"""
Audit Viewer Endpoint.

Read-only access to a tenant's audit trail, newest first.
"""

from typing import List, Optional

from fastapi import APIRouter, Query

from agent_guard.core.models import RiskFlag
from agent_guard.server.schemas import AuditRecordRead
from agent_guard.server.services.deps import ReposDep

router = APIRouter()


@router.get(
    "/{tenant_id}",
    response_model=List[AuditRecordRead],
    summary="List Audit Records",
    description="List a tenant's audit records, optionally filtered by risk flag or agent.",
)
async def list_audit_records(
    tenant_id: str,
    repos: ReposDep,
    risk_flag: Optional[RiskFlag] = Query(None, description="Only records with this risk flag"),
    agent_id: Optional[str] = Query(None, description="Only records of this agent"),
    limit: int = Query(50, ge=1, le=500, description="Maximum number of records"),
) -> List[AuditRecordRead]:
    records = await repos.audit.list(tenant_id, risk_flag=risk_flag, agent_id=agent_id, limit=limit)
    return [AuditRecordRead.model_validate(r) for r in records]

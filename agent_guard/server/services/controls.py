"""
Emergency control service.

Operator toggles are audited like gateway decisions so the trail shows who
stopped or resumed a tenant's agents.
"""

from typing import Optional

from agent_guard.core.database.entities import EmergencyControl
from agent_guard.core.database.repositories import GuardRepoBundle
from agent_guard.core.logging_config import get_logger
from agent_guard.core.models import HumanApproval, RiskFlag
from agent_guard.guard.errors import NotFoundError

logger = get_logger(__name__)


async def toggle_control(
    repos: GuardRepoBundle,
    tenant_id: str,
    control_id: str,
    engaged: bool,
    triggered_by: Optional[str] = None,
) -> EmergencyControl:
    """
    Engage or disengage a control and write the matching audit record.

    Raises:
        NotFoundError: The control does not exist for the tenant
    """
    control = await repos.controls.set_engaged(tenant_id, control_id, engaged, triggered_by=triggered_by)
    if control is None:
        raise NotFoundError(f"Control {control_id} not found", details={"tenant_id": tenant_id})

    await repos.audit.append(
        tenant_id=tenant_id,
        action="Emergency control ENGAGED" if engaged else "Emergency control disengaged",
        risk_flag=RiskFlag.high if engaged else RiskFlag.none,
        human_approval=HumanApproval.approved,
        payload={"control_id": control_id},
    )
    logger.warning(
        f"Emergency control {control.control_type} {'engaged' if engaged else 'disengaged'} "
        f"for tenant {tenant_id} by {control.triggered_by or triggered_by or 'manual'}"
    )
    return control

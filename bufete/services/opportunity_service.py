# bufete/services/opportunity_service.py
import logging
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from fastapi import HTTPException

from bufete.models.common import OpportunityStatus, Priority
from bufete.models.display import OPPORTUNITY_STATUS_META, PRIORITY_META, meta_dict
from bufete.models.opportunity import Activity, OpportunityCreate, OpportunityInDB
from bufete.repositories import clients_repo
from bufete.repositories import opportunities_repo as repo
from bufete.services import matter_service
from bufete.services.opportunity_lifecycle import apply_transition, next_states
from bufete.utils.formatting import format_currency
from bufete.utils.mongo_helpers import fix_mongo_id, to_mongo
from bufete.utils.pagination import paginate

logger = logging.getLogger(__name__)

ACTION_FOR_STATUS = {
    OpportunityStatus.PROSPECT: "Opportunity created",
    OpportunityStatus.CONSULTATION: "Initial consultation started",
    OpportunityStatus.ACTIVE: "Proposal accepted",
    OpportunityStatus.WON: "Opportunity won",
    OpportunityStatus.LOST: "Opportunity lost",
}


def present(doc: Dict[str, Any]) -> Dict[str, Any]:
    out = fix_mongo_id(doc)
    status = OpportunityStatus(out.get("status") or OpportunityStatus.PROSPECT)
    priority = Priority(out.get("priority") or Priority.MEDIUM)
    out["status_meta"] = meta_dict(OPPORTUNITY_STATUS_META[status])
    out["priority_meta"] = meta_dict(PRIORITY_META[priority])
    out["value_label"] = format_currency(out.get("value"))
    out["next_states"] = [str(s) for s in next_states(status)]
    return out


async def create(payload: OpportunityCreate, actor: dict) -> Dict[str, Any]:
    client_name = None
    if payload.client_id:
        client = await clients_repo.find_by_id(payload.client_id)
        if not client:
            raise HTTPException(400, "Cliente no existe")
        client_name = client.get("company") or client["name"]

    opp = OpportunityInDB(
        **payload.model_dump(),
        client_name=client_name,
        created_by=actor["id"],
        activities=[Activity(
            action=ACTION_FOR_STATUS[OpportunityStatus.PROSPECT],
            status=OpportunityStatus.PROSPECT,
            by_user_id=actor["id"], by_user_name=actor["full_name"],
        )],
    )
    doc = to_mongo(opp)
    await repo.insert(doc)
    logger.info("Oportunidad %s creada por %s", opp.id, actor["id"])
    return present(doc)


async def get(opportunity_id: str) -> Dict[str, Any]:
    doc = await repo.find_by_id(opportunity_id)
    if not doc:
        raise HTTPException(404, "Oportunidad no encontrada")
    return present(doc)


async def transition(opportunity_id: str, to_status: OpportunityStatus, actor: dict) -> Dict[str, Any]:
    doc = await repo.find_by_id(opportunity_id)
    if not doc:
        raise HTTPException(404, "Oportunidad no encontrada")

    result = apply_transition(doc["status"], to_status)
    now = datetime.now(timezone.utc)
    fields: Dict[str, Any] = {"status": str(result.new_status), "updated_at": now}
    activity = Activity(
        date=now, action=ACTION_FOR_STATUS[result.new_status], status=result.new_status,
        by_user_id=actor["id"], by_user_name=actor["full_name"],
    )

    matter = None
    if result.should_create_matter:
        matter = await matter_service.create_from_opportunity(doc)
        fields["matter_id"] = matter["id"]

    await repo.update_by_id(opportunity_id, fields, activity=to_mongo(activity))
    logger.info("Oportunidad %s: %s → %s (por %s)", opportunity_id, doc["status"], result.new_status, actor["id"])
    return {"opportunity": present(await repo.find_by_id(opportunity_id)), "matter": matter}


async def list_opportunities(q: Optional[str], status: Optional[OpportunityStatus], page: int, page_size: int) -> Dict[str, Any]:
    st = str(status) if status else None
    total = await repo.count(q, st)
    window = paginate(total, page, page_size)
    items = await repo.search(q, st, window.skip, window.limit)
    totals = await repo.totals(q, st)
    return {
        "items": [present(d) for d in items],
        **window.model_dump(),
        "total_value": totals["total_value"],
        "total_value_label": format_currency(totals["total_value"]),
        "active_count": totals["active_count"],
    }


def status_catalog() -> list:
    """Flujo completo de estados con su presentación y salidas legales."""
    return [
        {"status": str(s), **meta_dict(OPPORTUNITY_STATUS_META[s]), "next_states": [str(n) for n in next_states(s)]}
        for s in OpportunityStatus
    ]

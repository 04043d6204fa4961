# bufete/services/metrics_service.py
from __future__ import annotations
from datetime import date, timedelta
from typing import Any, Dict

from bufete.models.common import MatterStatus, OpportunityStatus, OPEN_STATES
from bufete.repositories import clients_repo, documents_repo, matters_repo, opportunities_repo
from bufete.utils.formatting import format_currency


async def dashboard(now: date, window_days: int) -> Dict[str, Any]:
    by_status = await opportunities_repo.count_by_status()
    # todos los estados presentes aunque no haya oportunidades en alguno
    opportunities_by_status = {str(s): int(by_status.get(str(s), 0)) for s in OpportunityStatus}

    pipeline_value = await opportunities_repo.sum_value([str(s) for s in OPEN_STATES])
    won_value = await opportunities_repo.sum_value([str(OpportunityStatus.WON)])

    today_iso = now.isoformat()
    until_iso = (now + timedelta(days=window_days)).isoformat()

    return {
        "total_clients": await clients_repo.count(),
        "opportunities_by_status": opportunities_by_status,
        "open_opportunities": sum(opportunities_by_status[str(s)] for s in OPEN_STATES),
        "pipeline_value": pipeline_value,
        "pipeline_value_label": format_currency(pipeline_value),
        "won_value": won_value,
        "won_value_label": format_currency(won_value),
        "active_matters": await matters_repo.count(str(MatterStatus.ACTIVE)),
        "documents_expired": await documents_repo.count_expired(today_iso),
        "documents_expiring_soon": await documents_repo.count_expiring_between(today_iso, until_iso),
        "as_of": now.isoformat(),
    }

# bufete/services/document_service.py
import logging
from datetime import date, datetime, timedelta, timezone
from typing import Any, Dict, List

from fastapi import HTTPException

from bufete.models.common import ExpiryStatus
from bufete.models.display import EXPIRY_STATUS_META, meta_dict
from bufete.models.document import DocumentCreate, DocumentInDB
from bufete.repositories import clients_repo
from bufete.repositories import documents_repo as repo
from bufete.services.document_expiry import classify
from bufete.utils.formatting import format_file_size
from bufete.utils.mongo_helpers import fix_mongo_id, to_mongo

logger = logging.getLogger(__name__)


def today() -> date:
    return datetime.now(timezone.utc).date()


def _parse_date(value) -> date | None:
    if value is None or isinstance(value, date):
        return value
    return date.fromisoformat(str(value)[:10])


def present(doc: Dict[str, Any], now: date, window_days: int) -> Dict[str, Any]:
    out = fix_mongo_id(doc)
    status = classify(_parse_date(out.get("expiration_date")), now, window_days)
    # derivado: no se persiste
    out["expiry"] = {"status": str(status), **meta_dict(EXPIRY_STATUS_META[status])}
    out["file_size_label"] = format_file_size(out.get("file_size") or 0)
    return out


async def register(client_id: str, payload: DocumentCreate, actor: dict, now: date, window_days: int) -> Dict[str, Any]:
    if not await clients_repo.find_by_id(client_id):
        raise HTTPException(404, "Cliente no encontrado")
    doc = DocumentInDB(client_id=client_id, uploaded_by=actor["id"], **payload.model_dump())
    data = to_mongo(doc)
    await repo.insert(data)
    logger.info("Documento %s registrado para el cliente %s", doc.id, client_id)
    return present(data, now, window_days)


async def list_for_client(client_id: str, now: date, window_days: int) -> List[Dict[str, Any]]:
    if not await clients_repo.find_by_id(client_id):
        raise HTTPException(404, "Cliente no encontrado")
    return [present(d, now, window_days) for d in await repo.list_by_client(client_id)]


async def delete(document_id: str) -> None:
    if not await repo.find_by_id(document_id):
        raise HTTPException(404, "Documento no encontrado")
    await repo.delete(document_id)
    logger.info("Documento %s eliminado", document_id)


async def expiring(now: date, window_days: int) -> Dict[str, Any]:
    """Documentos vencidos y por vencer; los totales no dependen del límite del listado."""
    today_iso = now.isoformat()
    until_iso = (now + timedelta(days=window_days)).isoformat()
    expired = await repo.list_expired(today_iso)
    soon = await repo.list_expiring_between(today_iso, until_iso)
    return {
        str(ExpiryStatus.EXPIRED): [present(d, now, window_days) for d in expired],
        str(ExpiryStatus.EXPIRING_SOON): [present(d, now, window_days) for d in soon],
        "expired_total": await repo.count_expired(today_iso),
        "expiring_soon_total": await repo.count_expiring_between(today_iso, until_iso),
    }

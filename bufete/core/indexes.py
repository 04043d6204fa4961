# bufete/core/indexes.py
import logging
from bufete.core.db import get_db
from bufete.models.common import TASK_STATUS_SYNONYMS

logger = logging.getLogger(__name__)

async def ensure_core_indexes(db):
    await db.clients.create_index([("id", 1)], unique=True)
    await db.clients.create_index([("created_at", -1)])
    await db.clients.create_index([("name", 1)])

    await db.opportunities.create_index([("id", 1)], unique=True)
    await db.opportunities.create_index([("created_at", -1)])
    await db.opportunities.create_index([("status", 1)])
    await db.opportunities.create_index([("client_id", 1)])

    await db.matters.create_index([("id", 1)], unique=True)
    await db.matters.create_index([("status", 1)])
    await db.matters.create_index([("opportunity_id", 1)])

    await db.tasks.create_index([("id", 1)], unique=True)
    await db.tasks.create_index([("matter_id", 1)])

    # registros de tiempo
    await db.time_entries.create_index([("task_id", 1)])
    await db.time_entries.create_index([("entry_date", -1)])

    await db.documents.create_index([("id", 1)], unique=True)
    await db.documents.create_index([("client_id", 1), ("created_at", -1)])
    await db.documents.create_index([("expiration_date", 1)])

async def migrate_task_statuses(db):
    # datos cargados a mano con las etiquetas de pantalla en vez del código
    for k, v in TASK_STATUS_SYNONYMS.items():
        res = await db.tasks.update_many({"status": k}, {"$set": {"status": v}})
        if res.modified_count:
            logger.info("migrate_task_statuses: %s → %s (%d tareas)", k, v, res.modified_count)
    await db.tasks.update_many({"actual_hours": {"$exists": False}}, {"$set": {"actual_hours": 0.0}})

async def startup_tasks():
    db = get_db()
    try:
        await ensure_core_indexes(db)
        await migrate_task_statuses(db)
    except Exception as e:
        logger.exception("Error en startup_tasks: %s", e)

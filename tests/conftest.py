import copy
import os

import pytest
from fastapi.testclient import TestClient

# Configura las variables requeridas antes de importar el backend.
os.environ.setdefault("MONGO_URL", "mongodb://localhost:27017/test")
os.environ.setdefault("DB_NAME", "test_db")
os.environ.setdefault("SECRET_KEY", "test-secret-key-with-at-least-32-bytes")

from bufete.repositories import (  # noqa: E402
    clients_repo, documents_repo, matters_repo, opportunities_repo, worklogs_repo,
)

ACTOR = {"id": "u-1", "full_name": "María García"}


def _match(value, q):
    return bool(q) and q.lower() in str(value or "").lower()


class MemoryStore:
    """Colecciones en memoria con la misma interfaz que los repositorios Motor."""

    def __init__(self):
        self.clients = {}
        self.opportunities = {}
        self.matters = {}
        self.tasks = {}
        self.time_entries = []
        self.documents = {}

    def install(self, monkeypatch):
        s = self

        # --- clientes ---
        def _clients(q):
            return [c for c in s.clients.values()
                    if not q or any(_match(c.get(f), q) for f in ("name", "company", "email"))]

        async def c_insert(doc): s.clients[doc["id"]] = copy.deepcopy(doc)
        async def c_find(cid): return copy.deepcopy(s.clients.get(cid))
        async def c_search(q, skip, limit): return copy.deepcopy(_clients(q)[skip:skip + limit])
        async def c_count(q=None): return len(_clients(q))

        monkeypatch.setattr(clients_repo, "insert", c_insert)
        monkeypatch.setattr(clients_repo, "find_by_id", c_find)
        monkeypatch.setattr(clients_repo, "search", c_search)
        monkeypatch.setattr(clients_repo, "count", c_count)

        # --- oportunidades ---
        def _opps(q, status):
            out = list(s.opportunities.values())
            if status:
                out = [o for o in out if o["status"] == status]
            if q:
                out = [o for o in out if any(_match(o.get(f), q) for f in ("title", "client_name", "practice_area"))]
            return out

        async def o_insert(doc): s.opportunities[doc["id"]] = copy.deepcopy(doc)
        async def o_find(oid): return copy.deepcopy(s.opportunities.get(oid))

        async def o_update(oid, fields, activity=None):
            doc = s.opportunities[oid]
            doc.update(copy.deepcopy(fields))
            if activity:
                doc.setdefault("activities", []).append(copy.deepcopy(activity))

        async def o_search(q, status, skip, limit): return copy.deepcopy(_opps(q, status)[skip:skip + limit])
        async def o_count(q=None, status=None): return len(_opps(q, status))

        async def o_totals(q=None, status=None):
            items = _opps(q, status)
            return {"total_value": float(sum(o.get("value") or 0 for o in items)),
                    "active_count": sum(1 for o in items if o["status"] == "active")}

        async def o_by_status():
            out = {}
            for o in s.opportunities.values():
                out[o["status"]] = out.get(o["status"], 0) + 1
            return out

        async def o_sum_value(statuses):
            return float(sum(o.get("value") or 0 for o in s.opportunities.values() if o["status"] in statuses))

        async def o_by_client(cid): return sum(1 for o in s.opportunities.values() if o.get("client_id") == cid)

        monkeypatch.setattr(opportunities_repo, "insert", o_insert)
        monkeypatch.setattr(opportunities_repo, "find_by_id", o_find)
        monkeypatch.setattr(opportunities_repo, "update_by_id", o_update)
        monkeypatch.setattr(opportunities_repo, "search", o_search)
        monkeypatch.setattr(opportunities_repo, "count", o_count)
        monkeypatch.setattr(opportunities_repo, "totals", o_totals)
        monkeypatch.setattr(opportunities_repo, "count_by_status", o_by_status)
        monkeypatch.setattr(opportunities_repo, "sum_value", o_sum_value)
        monkeypatch.setattr(opportunities_repo, "count_by_client", o_by_client)

        # --- asuntos y tareas ---
        async def m_insert(doc): s.matters[doc["id"]] = copy.deepcopy(doc)
        async def m_find(mid): return copy.deepcopy(s.matters.get(mid))

        async def m_list(status=None, limit=500):
            return copy.deepcopy([m for m in s.matters.values() if not status or m["status"] == status][:limit])

        async def m_count(status=None): return sum(1 for m in s.matters.values() if not status or m["status"] == status)
        async def t_insert(doc): s.tasks[doc["id"]] = copy.deepcopy(doc)
        async def t_find(tid): return copy.deepcopy(s.tasks.get(tid))
        async def t_list(ids): return copy.deepcopy([t for t in s.tasks.values() if t["matter_id"] in ids])
        async def t_update(tid, fields): s.tasks[tid].update(copy.deepcopy(fields))

        async def t_add_hours(tid, hours):
            s.tasks[tid]["actual_hours"] = s.tasks[tid].get("actual_hours", 0) + float(hours)

        async def m_by_opp(oid):
            return copy.deepcopy(next((m for m in s.matters.values() if m.get("opportunity_id") == oid), None))

        monkeypatch.setattr(matters_repo, "insert", m_insert)
        monkeypatch.setattr(matters_repo, "find_by_id", m_find)
        monkeypatch.setattr(matters_repo, "list_all", m_list)
        monkeypatch.setattr(matters_repo, "count", m_count)
        monkeypatch.setattr(matters_repo, "insert_task", t_insert)
        monkeypatch.setattr(matters_repo, "find_task", t_find)
        monkeypatch.setattr(matters_repo, "list_tasks", t_list)
        monkeypatch.setattr(matters_repo, "update_task", t_update)
        monkeypatch.setattr(matters_repo, "add_task_hours", t_add_hours)
        monkeypatch.setattr(matters_repo, "find_by_opportunity", m_by_opp)

        # --- registros de tiempo ---
        async def w_create(entry):
            s.time_entries.append(copy.deepcopy(entry))
            return entry

        async def w_list(tid, limit=200): return copy.deepcopy([e for e in s.time_entries if e["task_id"] == tid][:limit])
        async def w_sum(tid): return float(sum(e["hours_spent"] for e in s.time_entries if e["task_id"] == tid))

        monkeypatch.setattr(worklogs_repo, "create", w_create)
        monkeypatch.setattr(worklogs_repo, "list_by_task", w_list)
        monkeypatch.setattr(worklogs_repo, "sum_hours_by_task", w_sum)

        # --- documentos ---
        async def d_insert(doc): s.documents[doc["id"]] = copy.deepcopy(doc)
        async def d_find(did): return copy.deepcopy(s.documents.get(did))
        async def d_delete(did): s.documents.pop(did, None)

        async def d_by_client(cid, limit=500):
            return copy.deepcopy([d for d in s.documents.values() if d["client_id"] == cid][:limit])

        def _expired(now):
            return [d for d in s.documents.values() if d.get("expiration_date") and d["expiration_date"] < now]

        def _expiring(now, until):
            return [d for d in s.documents.values()
                    if d.get("expiration_date") and now <= d["expiration_date"] < until]

        def _sorted(items, limit):
            return copy.deepcopy(sorted(items, key=lambda d: d["expiration_date"])[:limit])

        async def d_expired(now, limit=500): return _sorted(_expired(now), limit)
        async def d_expiring(now, until, limit=500): return _sorted(_expiring(now, until), limit)
        async def d_count_expired(now): return len(_expired(now))
        async def d_count_expiring(now, until): return len(_expiring(now, until))

        async def d_count(cid): return sum(1 for d in s.documents.values() if d["client_id"] == cid)

        monkeypatch.setattr(documents_repo, "insert", d_insert)
        monkeypatch.setattr(documents_repo, "find_by_id", d_find)
        monkeypatch.setattr(documents_repo, "delete", d_delete)
        monkeypatch.setattr(documents_repo, "list_by_client", d_by_client)
        monkeypatch.setattr(documents_repo, "list_expired", d_expired)
        monkeypatch.setattr(documents_repo, "list_expiring_between", d_expiring)
        monkeypatch.setattr(documents_repo, "count_expired", d_count_expired)
        monkeypatch.setattr(documents_repo, "count_expiring_between", d_count_expiring)
        monkeypatch.setattr(documents_repo, "count_by_client", d_count)


@pytest.fixture()
def store(monkeypatch):
    s = MemoryStore()
    s.install(monkeypatch)
    return s


@pytest.fixture()
def api(store, monkeypatch):
    from bufete.api.deps import get_current_user
    from bufete.core.rate_limit import limiter
    from bufete.main import app

    monkeypatch.setattr(limiter, "enabled", False)
    app.dependency_overrides[get_current_user] = lambda: ACTOR
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()

import pytest

from bufete.repositories import worklogs_repo


@pytest.fixture()
def matter(store):
    store.matters["m1"] = {
        "id": "m1", "name": "Corporate Restructuring - ABC Corp", "status": "active",
        "client_name": "ABC Corp", "start_date": "2024-01-15", "target_completion_date": "2024-03-15",
        # valores guardados desfasados: nunca deben usarse
        "task_count": 99, "completed_tasks": 99, "total_hours": 999.0,
    }
    return store.matters["m1"]


def _add_task(api, title, **extra):
    r = api.post("/api/matters/m1/tasks", json={"title": title, **extra})
    assert r.status_code == 201, r.text
    return r.json()


def test_blank_task_title_is_rejected(api, matter):
    r = api.post("/api/matters/m1/tasks", json={"title": "   "})
    assert r.status_code == 422
    assert r.json()["detail"] == "El título de la tarea es requerido"


def test_task_on_missing_matter(api, store):
    assert api.post("/api/matters/nope/tasks", json={"title": "x"}).status_code == 404


def test_new_task_defaults(api, matter):
    task = _add_task(api, "Revisar documentación existente", estimated_hours=8)
    assert task["status"] == "pending"
    assert task["priority"] == "medium"
    assert task["actual_hours"] == 0
    assert task["status_meta"]["label"] == "Pendiente"


def test_detail_recomputes_summary(api, matter):
    t1 = _add_task(api, "Revisar documentación existente")
    _add_task(api, "Preparar nuevos estatutos")
    _add_task(api, "Presentación ante registro mercantil")

    r = api.post(f"/api/matters/tasks/{t1['id']}/status", json={"status": "completed"})
    assert r.status_code == 200
    assert r.json()["status_meta"]["label"] == "Completada"

    detail = api.get("/api/matters/m1").json()
    assert detail["task_count"] == 3
    assert detail["completed_tasks"] == 1
    assert detail["progress_percent"] == 33
    assert detail["total_hours"] == 0
    assert len(detail["tasks"]) == 3
    assert detail["status_meta"]["label"] == "Activo"


def test_task_status_is_free_reassignment(api, matter):
    t = _add_task(api, "x")
    for status in ("review", "pending", "cancelled", "in_progress"):
        r = api.post(f"/api/matters/tasks/{t['id']}/status", json={"status": status})
        assert r.status_code == 200
        assert r.json()["status"] == status
    assert api.post(f"/api/matters/tasks/{t['id']}/status", json={"status": "done"}).status_code == 422


def test_log_time_accumulates(api, matter, store):
    t = _add_task(api, "Preparar nuevos estatutos")
    store.tasks[t["id"]]["actual_hours"] = 4.5

    r = api.post(f"/api/matters/tasks/{t['id']}/worklogs", json={"hours_spent": 2.5, "description": "Redacción"})
    assert r.status_code == 200, r.text
    body = r.json()
    assert body["task"]["actual_hours"] == 7.0
    assert body["time_entry"]["user_name"] == "María García"
    assert body["worklog_total_hours"] == 2.5
    assert store.tasks[t["id"]]["actual_hours"] == 7.0

    detail = api.get("/api/matters/m1").json()
    assert detail["total_hours"] == 7.0


def test_concurrent_logs_are_not_lost(api, matter, store, monkeypatch):
    t = _add_task(api, "Due diligence")
    create_entry = worklogs_repo.create

    async def create_with_concurrent_log(entry):
        # otra petición suma 3 h entre la lectura de la tarea y la escritura
        store.tasks[t["id"]]["actual_hours"] += 3
        return await create_entry(entry)

    monkeypatch.setattr(worklogs_repo, "create", create_with_concurrent_log)
    r = api.post(f"/api/matters/tasks/{t['id']}/worklogs", json={"hours_spent": 2})
    assert r.status_code == 200, r.text
    assert store.tasks[t["id"]]["actual_hours"] == 5
    assert r.json()["task"]["actual_hours"] == 5


def test_log_time_with_explicit_author(api, matter):
    t = _add_task(api, "x")
    r = api.post(f"/api/matters/tasks/{t['id']}/worklogs", json={"hours_spent": 1, "user_name": "Carlos López"})
    assert r.json()["time_entry"]["user_name"] == "Carlos López"

    listing = api.get(f"/api/matters/tasks/{t['id']}/worklogs").json()
    assert listing["total_hours"] == 1.0
    assert [e["user_name"] for e in listing["items"]] == ["Carlos López"]


@pytest.mark.parametrize("hours", [-1, 0])
def test_log_time_rejects_non_positive_hours(api, matter, store, hours):
    t = _add_task(api, "x")
    r = api.post(f"/api/matters/tasks/{t['id']}/worklogs", json={"hours_spent": hours})
    assert r.status_code == 422
    assert "horas" in r.json()["detail"]
    assert store.time_entries == []
    assert store.tasks[t["id"]]["actual_hours"] == 0


def test_log_time_rejects_infinite_hours(api, matter, store):
    t = _add_task(api, "x")
    r = api.post(
        f"/api/matters/tasks/{t['id']}/worklogs",
        content=b'{"hours_spent": 1e400}', headers={"Content-Type": "application/json"},
    )
    assert r.status_code == 422
    assert store.time_entries == []
    assert store.tasks[t["id"]]["actual_hours"] == 0
    # el asunto sigue siendo legible
    assert api.get("/api/matters/m1").json()["total_hours"] == 0


def test_log_time_on_missing_task(api, store):
    r = api.post("/api/matters/tasks/nope/worklogs", json={"hours_spent": 1})
    assert r.status_code == 404


def test_legacy_status_labels_are_normalized(api, matter, store):
    store.tasks["t-old"] = {"id": "t-old", "matter_id": "m1", "title": "Importada", "status": "Completada", "actual_hours": 3}
    detail = api.get("/api/matters/m1").json()
    assert detail["completed_tasks"] == 1
    assert detail["tasks"][0]["status"] == "completed"


def test_list_matters_with_progress(api, matter, store):
    store.matters["m2"] = {"id": "m2", "name": "Contract Review - XYZ Ltd", "status": "on_hold", "start_date": "2024-01-20"}
    t = _add_task(api, "x")
    api.post(f"/api/matters/tasks/{t['id']}/status", json={"status": "completed"})

    items = {m["id"]: m for m in api.get("/api/matters").json()["items"]}
    assert items["m1"]["progress_percent"] == 100
    assert items["m2"]["progress_percent"] == 0
    assert items["m2"]["status_meta"]["label"] == "En Pausa"

    only_active = api.get("/api/matters", params={"status": "active"}).json()["items"]
    assert [m["id"] for m in only_active] == ["m1"]

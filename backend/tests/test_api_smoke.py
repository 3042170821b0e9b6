import os
import uuid


def get_client():
    # Use in-memory sqlite for tests
    os.environ.setdefault("DATABASE_URL", "sqlite+pysqlite:///:memory:")
    # Import after env is set so engine is created with sqlite
    from grecko.main import app  # noqa: WPS433
    from fastapi.testclient import TestClient  # noqa: WPS433
    return TestClient(app)


def login(client):
    headers = {"X-User-Id": f"user-{uuid.uuid4().hex[:8]}"}
    r = client.post("/session", headers=headers)
    assert r.status_code == 200, r.text
    return headers


def test_root_ok():
    client = get_client()
    r = client.get("/")
    assert r.status_code == 200
    data = r.json()
    assert "message" in data


def test_missing_user_header_is_401():
    client = get_client()
    assert client.get("/goals").status_code == 401


def test_goals_require_open_session():
    client = get_client()
    r = client.get("/goals", headers={"X-User-Id": "never-logged-in"})
    assert r.status_code == 401


def test_new_session_has_defaults():
    client = get_client()
    headers = login(client)
    r = client.get("/goals", headers=headers)
    assert r.status_code == 200
    goals = r.json()
    assert goals["current_gpa"] == 0
    assert goals["target_gpa"] == 4.0
    assert goals["required_gpa"] == "---"
    assert goals["reachability"] is None


def test_edit_goals_and_persist():
    client = get_client()
    headers = login(client)
    r = client.patch(
        "/goals",
        headers=headers,
        json={"current_gpa": 3.8, "target_gpa": 3.5, "courses_taken": 5, "total_courses": 8},
    )
    assert r.status_code == 200, r.text
    goals = r.json()
    assert goals["courses_remaining"] == 3
    assert goals["required_gpa"] == "3.00"
    assert goals["reachability"] == "easy"

    # a fresh session reads the saved row back
    client.delete("/session", headers=headers)
    r = client.post("/session", headers=headers)
    assert r.json()["required_gpa"] == "3.00"


def test_negative_course_count_rejected():
    client = get_client()
    headers = login(client)
    r = client.patch("/goals", headers=headers, json={"courses_taken": -1})
    assert r.status_code == 422


def test_required_query():
    client = get_client()
    r = client.get(
        "/goals/required",
        params={"current_gpa": 3.0, "target_gpa": 4.0, "courses_taken": 2, "courses_remaining": 2},
    )
    assert r.status_code == 200
    assert r.json() == {"required_gpa": "5.00", "reachability": "unreachable"}


def test_calculate_preview_does_not_change_goals():
    client = get_client()
    headers = login(client)
    r = client.post(
        "/gpa/calculate",
        headers=headers,
        json={"courses": [{"name": "Math", "grade": 4.0}, {"name": "Art", "grade": 2.0}]},
    )
    assert r.status_code == 200
    assert r.json()["gpa"] == "3.00"
    assert r.json()["course_count"] == 2
    assert client.get("/goals", headers=headers).json()["current_gpa"] == 0


def test_apply_gpa_updates_goals_and_history():
    client = get_client()
    headers = login(client)
    client.patch("/goals", headers=headers, json={"total_courses": 10})

    r = client.post(
        "/gpa/apply",
        headers=headers,
        json={"courses": [{"name": "A", "grade": 4.0}, {"name": "B", "grade": 3.0}, {"name": "C", "grade": 3.5}]},
    )
    assert r.status_code == 200, r.text
    body = r.json()
    assert body["goals"]["current_gpa"] == 3.5
    assert body["goals"]["courses_taken"] == 3
    assert body["goals"]["required_gpa"] == "4.21"
    assert body["goals"]["reachability"] == "unreachable"
    assert body["snapshot"]["label"].startswith("Calc ")

    trend = client.get("/gpa/history", headers=headers).json()
    assert [p["value"] for p in trend] == [3.5]

    stored = client.get("/gpa/history/stored", headers=headers).json()
    assert len(stored) == 1
    assert stored[0]["label"] == body["snapshot"]["label"]


def test_history_trend_and_duplicates():
    client = get_client()
    headers = login(client)

    start = client.get("/gpa/history", headers=headers).json()
    assert start == [{"label": "Start", "value": 0.0, "created_at": None}]

    for _ in range(2):
        r = client.post("/gpa/history", headers=headers, json={"label": "Year 1 Fall", "gpa": 3.1})
        assert r.status_code == 200
    client.post("/gpa/history", headers=headers, json={"label": "Year 1 Spring", "gpa": 3.3})

    trend = client.get("/gpa/history", headers=headers).json()
    assert [p["label"] for p in trend] == ["Year 1 Fall", "Year 1 Fall", "Year 1 Spring"]
    stored = client.get("/gpa/history/stored", headers=headers).json()
    assert [p["value"] for p in stored] == [3.1, 3.1, 3.3]


def test_failed_save_is_reported_not_rolled_back(monkeypatch):
    from grecko.core.errors import PersistenceError
    from grecko.main import app

    client = get_client()
    headers = login(client)

    class RejectingStore:
        def upsert_goal_state(self, user_id, state):
            raise PersistenceError("upsert_goal_state", user_id)

        def append_history_entry(self, user_id, label, value):
            raise PersistenceError("append_history_entry", user_id)

    monkeypatch.setattr(app.state, "store", RejectingStore())

    r = client.patch("/goals", headers=headers, json={"target_gpa": 3.9, "total_courses": 4})
    assert r.status_code == 200
    assert client.get("/goals", headers=headers).json()["target_gpa"] == 3.9

    notes = client.get("/goals/notifications", headers=headers).json()
    assert len(notes) == 1
    assert client.get("/goals/notifications", headers=headers).json() == []


def test_non_finite_numbers_rejected():
    client = get_client()
    headers = login(client)

    for bad in ("NaN", "Infinity", "-Infinity"):
        r = client.patch(
            "/goals",
            headers=headers,
            json={"current_gpa": bad, "courses_taken": 2, "total_courses": 4},
        )
        assert r.status_code == 422, r.text
        r = client.patch("/goals", headers=headers, json={"target_gpa": bad})
        assert r.status_code == 422, r.text

        courses = {"courses": [{"name": "Math", "grade": bad}]}
        assert client.post("/gpa/calculate", headers=headers, json=courses).status_code == 422
        assert client.post("/gpa/apply", headers=headers, json=courses).status_code == 422

        r = client.post("/gpa/history", headers=headers, json={"label": "Fall", "gpa": bad})
        assert r.status_code == 422, r.text

        r = client.get(
            "/goals/required",
            params={"current_gpa": bad, "target_gpa": 3.0, "courses_taken": 2, "courses_remaining": 2},
        )
        assert r.status_code == 422, r.text

    # nothing leaked into the session or the store
    goals = client.get("/goals", headers=headers).json()
    assert goals["current_gpa"] == 0
    assert goals["target_gpa"] == 4.0
    assert client.get("/gpa/history/stored", headers=headers).json() == []
    assert client.get("/goals/notifications", headers=headers).json() == []

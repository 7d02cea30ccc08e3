"""API tests using FastAPI TestClient."""
import uuid

import pytest
from fastapi.testclient import TestClient

ADMIN_EMAIL = "superadmin@example.com"
ADMIN_PASSWORD = "admin"


@pytest.fixture(scope="module")
def client():
    from academy.main import app
    return TestClient(app)


def _login(client, email, password):
    resp = client.post("/auth/login", json={"email": email, "password": password})
    assert resp.status_code == 200
    # Tests authenticate with explicit Bearer headers; the cookie would otherwise win
    client.cookies.clear()
    return {"Authorization": f"Bearer {resp.json()['token']}"}


@pytest.fixture(scope="module")
def admin_headers(client):
    return _login(client, ADMIN_EMAIL, ADMIN_PASSWORD)


@pytest.fixture
def student_headers(client):
    email = f"student-{uuid.uuid4().hex[:8]}@example.com"
    resp = client.post(
        "/auth/register",
        json={"email": email, "password": "password123", "display_name": "Student"},
    )
    assert resp.status_code == 201
    return _login(client, email, "password123")


def _course_body(**overrides):
    body = {
        "title": f"FamilySearch Memories {uuid.uuid4().hex[:8]}",
        "description": "Upload and manage family photos",
        "duration_minutes": 30,
        "template_id": "quick-tutorial",
        "items": [],
    }
    body.update(overrides)
    return body


# ------------------------------------------------------------------
# Health
# ------------------------------------------------------------------
def test_health(client):
    resp = client.get("/health")
    assert resp.status_code == 200
    assert resp.json() == {"status": "ok"}


def test_root(client):
    assert client.get("/").json() == {"message": "FamilyHistoryAcademy Server"}


# ------------------------------------------------------------------
# Auth
# ------------------------------------------------------------------
def test_login_success_sets_cookie(client):
    resp = client.post("/auth/login", json={"email": ADMIN_EMAIL, "password": ADMIN_PASSWORD})
    assert resp.status_code == 200
    data = resp.json()
    assert "token" in data
    assert data["user"]["email"] == ADMIN_EMAIL
    assert data["user"]["role"] == "super_admin"
    assert "fhjwt" in resp.cookies

    # the cookie alone authenticates
    profile = client.get("/auth/profile")
    assert profile.status_code == 200
    client.cookies.clear()


def test_login_bad_password(client):
    resp = client.post("/auth/login", json={"email": ADMIN_EMAIL, "password": "wrongpassword"})
    assert resp.status_code == 401


def test_get_profile(client, admin_headers):
    resp = client.get("/auth/profile", headers=admin_headers)
    assert resp.status_code == 200
    assert resp.json()["email"] == ADMIN_EMAIL


def test_profile_requires_auth(client):
    assert client.get("/auth/profile").status_code == 401


def test_invalid_token(client):
    resp = client.get("/auth/profile", headers={"Authorization": "Bearer not-a-jwt"})
    assert resp.status_code == 401


def test_register_duplicate_email(client):
    body = {"email": f"dup-{uuid.uuid4().hex[:8]}@example.com", "password": "password123", "display_name": "Dup"}
    assert client.post("/auth/register", json=body).status_code == 201
    assert client.post("/auth/register", json=body).status_code == 409


def test_register_short_password(client):
    body = {"email": f"short-{uuid.uuid4().hex[:8]}@example.com", "password": "short", "display_name": "S"}
    resp = client.post("/auth/register", json=body)
    assert resp.status_code == 400
    assert resp.json()["detail"]["fields"] == ["password"]


def test_registered_user_is_student(client, student_headers):
    assert client.get("/auth/profile", headers=student_headers).json()["role"] == "student"


# ------------------------------------------------------------------
# Dashboard access
# ------------------------------------------------------------------
def test_dashboard_for_super_admin(client, admin_headers):
    resp = client.get("/admin/dashboard", headers=admin_headers)
    assert resp.status_code == 200
    data = resp.json()
    assert data["access_granted"] is True
    assert data["tabs"] == ["users", "courses", "badges"]
    assert data["capabilities"]["can_manage_admins"] is True


def test_dashboard_denied_for_student(client, student_headers):
    resp = client.get("/admin/dashboard", headers=student_headers)
    assert resp.status_code == 200
    data = resp.json()
    assert data["access_granted"] is False
    assert data["tabs"] == []
    assert "restricted to administrators" in data["message"]


def test_student_cannot_open_tabs_or_author(client, student_headers):
    assert client.get("/admin/dashboard/courses", headers=student_headers).status_code == 403
    assert client.post("/admin/courses", json=_course_body(), headers=student_headers).status_code == 403
    assert client.get("/admin/templates", headers=student_headers).status_code == 403


def test_unknown_tab(client, admin_headers):
    assert client.get("/admin/dashboard/settings", headers=admin_headers).status_code == 400


def test_templates(client, admin_headers):
    resp = client.get("/admin/templates", headers=admin_headers)
    assert resp.status_code == 200
    assert [t["id"] for t in resp.json()] == ["basic-video", "comprehensive", "quick-tutorial"]


# ------------------------------------------------------------------
# Course authoring
# ------------------------------------------------------------------
def test_preview_reports_missing_fields(client, admin_headers):
    resp = client.post("/admin/courses/preview", json={"title": "Only a title"}, headers=admin_headers)
    assert resp.status_code == 200
    data = resp.json()
    assert data["state"] == "editing"
    assert data["completion"] == 25
    assert data["can_save"] is False
    assert data["missing"] == ["description", "items"]


def test_create_unready_course_is_rejected(client, admin_headers):
    resp = client.post("/admin/courses", json=_course_body(template_id=None), headers=admin_headers)
    assert resp.status_code == 400
    assert resp.json()["detail"]["fields"] == ["items"]


def test_unknown_template(client, admin_headers):
    resp = client.post("/admin/courses", json=_course_body(template_id="nope"), headers=admin_headers)
    assert resp.status_code == 404


def test_create_draft_course_hidden_from_learners(client, admin_headers):
    resp = client.post("/admin/courses", json=_course_body(), headers=admin_headers)
    assert resp.status_code == 201
    course = resp.json()
    assert course["status"] == "draft"
    assert [lesson["title"] for lesson in course["lessons"]] == ["Tutorial Video", "Practice Exercise"]

    assert client.get(f"/courses/{course['slug']}").status_code == 404
    assert course["slug"] not in [c["slug"] for c in client.get("/courses").json()]

    published = client.post(f"/admin/courses/{course['id']}/publish", headers=admin_headers)
    assert published.status_code == 200
    assert client.get(f"/courses/{course['slug']}").status_code == 200
    assert client.post(f"/admin/courses/{course['id']}/publish", headers=admin_headers).status_code == 409


def test_quiz_answers_hidden_from_learners(client, admin_headers):
    quiz = {
        "kind": "quiz",
        "title": "Check",
        "questions": [{"text": "Pick C", "options": ["a", "b", "c", "d"], "correct_answer": 2}],
    }
    body = _course_body(template_id=None, items=[quiz], publish=True)
    created = client.post("/admin/courses", json=body, headers=admin_headers).json()
    assert created["lessons"][0]["questions"][0]["correct_answer"] == 2

    public = client.get(f"/courses/{created['slug']}").json()
    question = public["lessons"][0]["questions"][0]
    assert "correct_answer" not in question
    assert question["options"] == ["a", "b", "c", "d"]


def test_item_with_foreign_field_is_rejected(client, admin_headers):
    item = {"kind": "reading", "title": "Read", "video_url": "https://example.com/v"}
    resp = client.post("/admin/courses", json=_course_body(items=[item]), headers=admin_headers)
    assert resp.status_code == 400
    assert resp.json()["detail"]["fields"] == ["video_url"]


def test_duplicate_course_title_conflicts(client, admin_headers):
    body = _course_body()
    assert client.post("/admin/courses", json=body, headers=admin_headers).status_code == 201
    assert client.post("/admin/courses", json=body, headers=admin_headers).status_code == 409


# ------------------------------------------------------------------
# Badges and progress
# ------------------------------------------------------------------
def test_badge_requires_published_course(client, admin_headers):
    draft = client.post("/admin/courses", json=_course_body(), headers=admin_headers).json()
    badge = {"title": "Nope", "description": "d", "course_ids": [draft["id"]]}
    resp = client.post("/admin/badges", json=badge, headers=admin_headers)
    assert resp.status_code == 400
    assert resp.json()["detail"]["fields"] == [draft["id"]]


def test_completing_course_awards_badge(client, admin_headers, student_headers):
    course = client.post("/admin/courses", json=_course_body(publish=True), headers=admin_headers).json()
    badge_body = {
        "title": f"Tutorial Finisher {uuid.uuid4().hex[:8]}",
        "description": "Finished the tutorial",
        "color": "from-emerald-500 to-emerald-600",
        "course_ids": [course["id"]],
        "publish": True,
    }
    badge = client.post("/admin/badges", json=badge_body, headers=admin_headers)
    assert badge.status_code == 201
    badge = badge.json()
    assert badge["status"] == "published"
    assert badge["key"].startswith("tutorial-finisher")

    for lesson in course["lessons"]:
        resp = client.post(
            f"/courses/{course['id']}/lessons/{lesson['id']}/complete", headers=student_headers
        )
        assert resp.status_code == 200
    assert resp.json()["is_course_completed"] is True

    mine = client.get("/me/badges", headers=student_headers).json()
    assert [b["id"] for b in mine] == [badge["id"]]

    progress = client.get("/progress", headers=student_headers).json()
    assert progress["summary"]["courses_completed"] == 1
    assert progress["summary"]["badges_earned"] == 1
    assert progress["summary"]["total_progress"] == 100


def test_complete_unknown_lesson(client, admin_headers, student_headers):
    course = client.post("/admin/courses", json=_course_body(publish=True), headers=admin_headers).json()
    resp = client.post(f"/courses/{course['id']}/lessons/missing/complete", headers=student_headers)
    assert resp.status_code == 404


def test_badge_missing_fields(client, admin_headers):
    resp = client.post("/admin/badges", json={"title": "Lonely"}, headers=admin_headers)
    assert resp.status_code == 400
    assert resp.json()["detail"]["fields"] == ["description", "course_ids"]


# ------------------------------------------------------------------
# Accounts
# ------------------------------------------------------------------
def test_super_admin_creates_admin_account(client, admin_headers):
    email = f"admin-{uuid.uuid4().hex[:8]}@example.com"
    body = {"email": email, "password": "password123", "display_name": "Admin", "role": "admin"}
    resp = client.post("/admin/users", json=body, headers=admin_headers)
    assert resp.status_code == 201
    assert resp.json()["role"] == "admin"

    admin = _login(client, email, "password123")
    other = {**body, "email": f"x-{uuid.uuid4().hex[:8]}@example.com"}
    assert client.post("/admin/users", json=other, headers=admin).status_code == 403
    data = client.get("/admin/dashboard/users", headers=admin).json()
    assert data["data"]["can_manage_admins"] is False

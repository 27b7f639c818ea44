from interview_prep.models.question import Question

SESSION_PAYLOAD = {
    "role": "Backend Engineer",
    "experience": "3 years",
    "topicsToFocus": "Node.js,MongoDB",
}

TWO_QUESTIONS = [
    {"question": "What is the event loop?", "answer": "A scheduler for callbacks."},
    {"question": "What is an index?", "answer": "A lookup structure.", "notes": "review"},
]


def _create_session(client, headers, **overrides):
    payload = {**SESSION_PAYLOAD, **overrides}
    r = client.post("/api/v1/sessions/create", json=payload, headers=headers)
    assert r.status_code == 201, r.text
    return r.json()["session"]


def test_create_session_without_questions(client, auth_headers):
    r = client.post("/api/v1/sessions/create", json=SESSION_PAYLOAD, headers=auth_headers)
    assert r.status_code == 201
    body = r.json()
    assert body["success"] is True
    session = body["session"]
    assert session["questions"] == []
    assert session["role"] == "Backend Engineer"
    assert session["topicsToFocus"] == "Node.js,MongoDB"


def test_add_questions_then_fetch_in_display_order(client, auth_headers):
    session = _create_session(client, auth_headers)

    r = client.post(
        "/api/v1/questions/add",
        json={"sessionId": session["id"], "questions": TWO_QUESTIONS},
        headers=auth_headers,
    )
    assert r.status_code == 201
    created = r.json()
    assert [q["question"] for q in created] == [q["question"] for q in TWO_QUESTIONS]
    assert all(q["isPinned"] is False for q in created)
    assert created[1]["notes"] == "review"

    r = client.get(f"/api/v1/sessions/{session['id']}", headers=auth_headers)
    assert r.status_code == 200
    fetched = r.json()["questions"]
    assert [q["id"] for q in fetched] == [q["id"] for q in created]


def test_pinned_questions_come_first(client, auth_headers):
    session = _create_session(client, auth_headers, questions=TWO_QUESTIONS)
    first, second = session["questions"]

    r = client.patch(f"/api/v1/questions/{second['id']}/pin", headers=auth_headers)
    assert r.status_code == 200
    assert r.json()["success"] is True
    assert r.json()["question"]["isPinned"] is True

    r = client.get(f"/api/v1/sessions/{session['id']}", headers=auth_headers)
    assert [q["id"] for q in r.json()["questions"]] == [second["id"], first["id"]]

    # toggling again unpins
    r = client.patch(f"/api/v1/questions/{second['id']}/pin", headers=auth_headers)
    assert r.json()["question"]["isPinned"] is False


def test_update_note(client, auth_headers):
    session = _create_session(client, auth_headers, questions=TWO_QUESTIONS[:1])
    question_id = session["questions"][0]["id"]

    r = client.post(
        f"/api/v1/questions/{question_id}/note",
        json={"note": "Mention libuv"},
        headers=auth_headers,
    )
    assert r.status_code == 200
    assert r.json()["question"]["notes"] == "Mention libuv"

    r = client.post(f"/api/v1/questions/{question_id}/note", json={}, headers=auth_headers)
    assert r.json()["question"]["notes"] == ""


def test_my_sessions_newest_first_with_pagination(client, auth_headers, register_user):
    first = _create_session(client, auth_headers, role="First")
    second = _create_session(client, auth_headers, role="Second")
    _, other_headers = register_user(email="other@prepmail.io")
    _create_session(client, other_headers, role="Not mine")

    r = client.get("/api/v1/sessions/my-sessions", headers=auth_headers)
    assert r.status_code == 200
    assert [s["id"] for s in r.json()] == [second["id"], first["id"]]

    r = client.get("/api/v1/sessions/my-sessions?limit=1&offset=1", headers=auth_headers)
    assert [s["id"] for s in r.json()] == [first["id"]]


def test_create_session_validation(client, auth_headers):
    r = client.post(
        "/api/v1/sessions/create",
        json={"role": "", "experience": "1 year", "topicsToFocus": "SQL"},
        headers=auth_headers,
    )
    assert r.status_code == 400

    r = client.post(
        "/api/v1/sessions/create",
        json={**SESSION_PAYLOAD, "questions": "not a list"},
        headers=auth_headers,
    )
    assert r.status_code == 400


def test_session_endpoints_require_auth(client):
    assert client.get("/api/v1/sessions/my-sessions").status_code == 401
    assert client.post("/api/v1/sessions/create", json=SESSION_PAYLOAD).status_code == 401


def test_missing_session_and_question_are_404(client, auth_headers):
    r = client.get("/api/v1/sessions/999", headers=auth_headers)
    assert r.status_code == 404
    assert r.json() == {"message": "Session not found"}

    r = client.patch("/api/v1/questions/999/pin", headers=auth_headers)
    assert r.status_code == 404
    assert r.json() == {"message": "Question not found"}

    r = client.post(
        "/api/v1/questions/add",
        json={"sessionId": 999, "questions": TWO_QUESTIONS},
        headers=auth_headers,
    )
    assert r.status_code == 404


def test_other_users_cannot_touch_session_or_questions(client, register_user, db):
    _, owner = register_user(email="owner@prepmail.io")
    _, intruder = register_user(email="intruder@prepmail.io")
    session = _create_session(client, owner, questions=TWO_QUESTIONS)
    question_id = session["questions"][0]["id"]

    assert client.get(f"/api/v1/sessions/{session['id']}", headers=intruder).status_code == 403
    assert client.delete(f"/api/v1/sessions/{session['id']}", headers=intruder).status_code == 403
    assert client.get(f"/api/v1/questions/{question_id}", headers=intruder).status_code == 403
    assert client.patch(f"/api/v1/questions/{question_id}/pin", headers=intruder).status_code == 403
    r = client.post(
        f"/api/v1/questions/{question_id}/note",
        json={"note": "mine now"},
        headers=intruder,
    )
    assert r.status_code == 403
    assert r.json() == {"message": "Unauthorized"}
    r = client.post(
        "/api/v1/questions/add",
        json={"sessionId": session["id"], "questions": TWO_QUESTIONS},
        headers=intruder,
    )
    assert r.status_code == 403

    question = db.get(Question, question_id)
    assert question.is_pinned is False
    assert question.notes is None
    assert db.query(Question).count() == 2


def test_delete_session_removes_its_questions(client, auth_headers, db):
    session = _create_session(client, auth_headers, questions=TWO_QUESTIONS)
    keep = _create_session(client, auth_headers, questions=TWO_QUESTIONS[:1])
    question_ids = [q["id"] for q in session["questions"]]

    r = client.delete(f"/api/v1/sessions/{session['id']}", headers=auth_headers)
    assert r.status_code == 200
    assert r.json() == {"message": "Session deleted successfully"}

    for question_id in question_ids:
        r = client.get(f"/api/v1/questions/{question_id}", headers=auth_headers)
        assert r.status_code == 404
    assert client.get(f"/api/v1/sessions/{session['id']}", headers=auth_headers).status_code == 404

    assert db.query(Question).filter(Question.session_id == session["id"]).count() == 0
    r = client.get(f"/api/v1/sessions/{keep['id']}", headers=auth_headers)
    assert len(r.json()["questions"]) == 1

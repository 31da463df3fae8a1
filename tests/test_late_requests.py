from conftest import AFTER_DUE

REASON = "Family emergency, was hospitalized"


def request_late(client, headers, assignment_id, reason=REASON):
    return client.post(
        f"/assignments/{assignment_id}/late-requests",
        headers=headers,
        json={"reason": reason},
    )


def respond(client, headers, request_id, decision, message=None):
    return client.post(
        f"/late-requests/{request_id}/respond",
        headers=headers,
        json={"decision": decision, "teacher_response": message},
    )


def test_approved_request_unlocks_late_submission(client, clock, student, teacher, seed):
    clock.advance_to(AFTER_DUE)
    aid = seed["assignment_id"]

    r = request_late(client, student, aid)
    assert r.status_code == 201, r.text
    req = r.json()
    assert req["status"] == "PENDING"
    assert req["responded_at"] is None

    r = client.get(f"/assignments/{aid}/late-requests/me/approval", headers=student)
    assert r.json()["approved"] is False

    r = respond(client, teacher, req["id"], "APPROVED", "Get well soon")
    assert r.status_code == 200, r.text
    assert r.json()["status"] == "APPROVED"
    assert r.json()["teacher_response"] == "Get well soon"
    assert r.json()["responded_at"] is not None

    r = client.get(f"/assignments/{aid}/late-requests/me/approval", headers=student)
    assert r.json()["approved"] is True

    r = client.post(
        f"/assignments/{aid}/submissions",
        headers=student,
        json={"submission_text": "late but approved"},
    )
    assert r.status_code == 201, r.text
    assert r.json()["is_late"] is True

    # approval is good for exactly one submission
    r = client.post(
        f"/assignments/{aid}/submissions",
        headers=student,
        json={"submission_text": "again"},
    )
    assert r.status_code == 409
    assert r.json()["kind"] == "already_submitted"


def test_rejected_request_is_terminal(client, clock, student, teacher, seed):
    clock.advance_to(AFTER_DUE)
    aid = seed["assignment_id"]

    req = request_late(client, student, aid).json()
    r = respond(client, teacher, req["id"], "REJECTED", "Deadline was announced early")
    assert r.status_code == 200
    assert r.json()["status"] == "REJECTED"

    r = client.post(f"/assignments/{aid}/submissions", headers=student, json={"submission_text": "x"})
    assert r.status_code == 409
    assert r.json()["kind"] == "late_without_approval"

    # one chance only
    r = request_late(client, student, aid, "Asking again with a new reason")
    assert r.status_code == 409
    assert r.json()["kind"] == "duplicate_late_request"


def test_second_request_while_pending_conflicts(client, clock, student, seed):
    clock.advance_to(AFTER_DUE)
    assert request_late(client, student, seed["assignment_id"]).status_code == 201

    r = request_late(client, student, seed["assignment_id"])
    assert r.status_code == 409
    assert r.json()["kind"] == "duplicate_late_request"


def test_responding_twice_is_rejected(client, clock, student, teacher, seed):
    clock.advance_to(AFTER_DUE)
    req = request_late(client, student, seed["assignment_id"]).json()

    assert respond(client, teacher, req["id"], "APPROVED").status_code == 200
    r = respond(client, teacher, req["id"], "REJECTED")
    assert r.status_code == 409
    assert r.json()["kind"] == "already_responded"

    r = respond(client, teacher, req["id"], "PENDING")
    assert r.status_code == 409
    assert r.json()["kind"] == "already_responded"


def test_pending_is_not_a_valid_decision(client, clock, student, teacher, seed):
    clock.advance_to(AFTER_DUE)
    req = request_late(client, student, seed["assignment_id"]).json()

    r = respond(client, teacher, req["id"], "PENDING")
    assert r.status_code == 400


def test_only_class_teacher_can_respond(client, clock, student, other_teacher, seed):
    clock.advance_to(AFTER_DUE)
    req = request_late(client, student, seed["assignment_id"]).json()

    r = respond(client, other_teacher, req["id"], "APPROVED")
    assert r.status_code == 403

    r = respond(client, student, req["id"], "APPROVED")
    assert r.status_code == 403


def test_request_before_due_date_conflicts(client, student, seed):
    r = request_late(client, student, seed["assignment_id"])
    assert r.status_code == 409
    assert r.json()["kind"] == "conflict"


def test_request_after_submitting_conflicts(client, clock, student, seed):
    aid = seed["assignment_id"]
    client.post(f"/assignments/{aid}/submissions", headers=student, json={"submission_text": "done"})

    clock.advance_to(AFTER_DUE)
    r = request_late(client, student, aid)
    assert r.status_code == 409
    assert r.json()["kind"] == "already_submitted"


def test_reason_length_bounds(client, clock, student, seed):
    clock.advance_to(AFTER_DUE)
    aid = seed["assignment_id"]

    r = request_late(client, student, aid, "too short")
    assert r.status_code == 400

    r = request_late(client, student, aid, "x" * 501)
    assert r.status_code == 400

    # padding does not count towards the minimum
    r = request_late(client, student, aid, "   sick     ")
    assert r.status_code == 400

    r = request_late(client, student, aid, "x" * 500)
    assert r.status_code == 201


def test_teacher_lists_requests_for_own_classes(client, clock, student, teacher, other_teacher, seed):
    clock.advance_to(AFTER_DUE)
    req = request_late(client, student, seed["assignment_id"]).json()

    r = client.get("/late-requests/pending", headers=teacher)
    assert [x["id"] for x in r.json()] == [req["id"]]
    pending = r.json()[0]
    assert pending["student_name"] == "Student One"
    assert pending["student_email"] == "student1@example.com"
    assert pending["assignment_title"] == "HW1"
    assert client.get("/late-requests/pending", headers=other_teacher).json() == []

    respond(client, teacher, req["id"], "APPROVED")
    assert client.get("/late-requests/pending", headers=teacher).json() == []
    assert [x["status"] for x in client.get("/late-requests", headers=teacher).json()] == ["APPROVED"]


def test_my_request_not_found(client, student, seed):
    r = client.get(f"/assignments/{seed['assignment_id']}/late-requests/me", headers=student)
    assert r.status_code == 404

def make_submission(client, student, assignment_id) -> int:
    r = client.post(
        f"/assignments/{assignment_id}/submissions",
        headers=student,
        json={"submission_text": "my answers"},
    )
    assert r.status_code == 201, r.text
    return r.json()["id"]


def grade(client, headers, submission_id, marks, feedback=None):
    return client.patch(
        f"/submissions/{submission_id}/grade",
        headers=headers,
        json={"marks_obtained": marks, "feedback": feedback},
    )


def test_grading_sets_status_and_marks(client, student, teacher, seed):
    sid = make_submission(client, student, seed["assignment_id"])

    r = grade(client, teacher, sid, 8, "Good work")
    assert r.status_code == 200, r.text
    body = r.json()
    assert body["status"] == "GRADED"
    assert body["marks_obtained"] == 8
    assert body["feedback"] == "Good work"
    assert body["graded_at"] is not None

    report = client.get("/grades/me", headers=student).json()
    assert len(report) == 1
    assert report[0]["total_marks"] == 10
    assert report[0]["percentage"] == 80.0


def test_regrading_overwrites(client, student, teacher, seed):
    sid = make_submission(client, student, seed["assignment_id"])

    grade(client, teacher, sid, 4, "Needs work")
    r = grade(client, teacher, sid, 9)
    assert r.status_code == 200
    assert r.json()["marks_obtained"] == 9
    assert r.json()["feedback"] is None
    assert r.json()["status"] == "GRADED"

    subs = client.get(f"/assignments/{seed['assignment_id']}/submissions", headers=teacher).json()
    assert len(subs) == 1
    assert subs[0]["marks_obtained"] == 9


def test_marks_above_total_are_rejected(client, student, teacher, seed):
    sid = make_submission(client, student, seed["assignment_id"])

    r = grade(client, teacher, sid, 15)
    assert r.status_code == 400
    assert r.json()["kind"] == "marks_out_of_range"

    mine = client.get(f"/assignments/{seed['assignment_id']}/submissions/me", headers=student).json()
    assert mine["status"] == "SUBMITTED"
    assert mine["marks_obtained"] is None


def test_negative_marks_are_rejected(client, student, teacher, seed):
    sid = make_submission(client, student, seed["assignment_id"])
    r = grade(client, teacher, sid, -1)
    assert r.status_code == 400


def test_boundary_marks_are_accepted(client, student, teacher, seed):
    sid = make_submission(client, student, seed["assignment_id"])
    assert grade(client, teacher, sid, 0).status_code == 200
    assert grade(client, teacher, sid, 10).status_code == 200


def test_only_class_teacher_can_grade(client, student, other_teacher, seed):
    sid = make_submission(client, student, seed["assignment_id"])
    assert grade(client, other_teacher, sid, 5).status_code == 403
    assert grade(client, student, sid, 5).status_code == 403


def test_unknown_submission(client, teacher):
    r = grade(client, teacher, 999999, 5)
    assert r.status_code == 404

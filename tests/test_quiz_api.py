DEMO = {"x-license-key": "SNQUIZ-2024-DEMO"}


def test_validate_license(test_client):
    r = test_client.post("/v1/license/validate", json={"key": "SNQUIZ-2024-DEMO"})
    assert r.status_code == 200
    assert r.json() == {"valid": True}

    r = test_client.post("/v1/license/validate", json={"key": "NOPE"})
    assert r.json() == {"valid": False}


def test_missing_or_bad_license_is_401(test_client):
    assert test_client.get("/v1/progress").status_code == 401
    r = test_client.get("/v1/progress", headers={"x-license-key": "NOPE"})
    assert r.status_code == 401
    assert "detail" in r.json()


def test_session_flow(test_client):
    r = test_client.put("/v1/sessions/S1", json={"question_ids": [101, 102, 103]}, headers=DEMO)
    assert r.status_code == 200, r.text
    s = r.json()
    assert s["current_question_index"] == 0 and s["answered_questions"] == []

    r = test_client.post("/v1/sessions/S1/answer", json={"question_id": 101, "is_correct": True}, headers=DEMO)
    assert r.status_code == 200
    assert r.json()["score"] == 1

    r = test_client.post("/v1/sessions/S1/answer", json={"question_id": 103, "is_correct": False}, headers=DEMO)
    assert r.json()["current_question_index"] == 2

    # rejouer 101 -> 409, pas de double comptage
    r = test_client.post("/v1/sessions/S1/answer", json={"question_id": 101, "is_correct": True}, headers=DEMO)
    assert r.status_code == 409

    # question hors session -> 422
    r = test_client.post("/v1/sessions/S1/answer", json={"question_id": 999, "is_correct": True}, headers=DEMO)
    assert r.status_code == 422

    r = test_client.get("/v1/sessions/S1", headers=DEMO)
    assert r.status_code == 200
    s = r.json()
    assert (s["current_question_index"], s["score"]) == (2, 1)
    assert sorted(s["answered_questions"]) == [101, 103]
    assert s["is_complete"] is False

    r = test_client.patch("/v1/sessions/S1/time", json={"time_remaining": 30}, headers=DEMO)
    assert r.json()["time_remaining"] == 30

    r = test_client.post("/v1/sessions/S1/finish", headers=DEMO)
    assert r.status_code == 200
    p = r.json()
    assert (p["score"], p["total_questions"], p["percentage"], p["attempts"]) == (1, 3, 33, 1)

    assert test_client.get("/v1/sessions/S1", headers=DEMO).status_code == 404
    items = test_client.get("/v1/progress", headers=DEMO).json()["items"]
    assert [i["section_id"] for i in items] == ["S1"]


def test_abandon_session(test_client):
    test_client.put("/v1/sessions/S2", json={"question_ids": [1]}, headers=DEMO)
    assert len(test_client.get("/v1/sessions", headers=DEMO).json()["items"]) == 1

    r = test_client.delete("/v1/sessions/S2", headers=DEMO)
    assert r.status_code == 204
    assert test_client.delete("/v1/sessions/S2", headers=DEMO).status_code == 404


def test_progress_endpoint_merges(test_client):
    for score in (5, 9, 3):
        r = test_client.post("/v1/progress/S1", json={"score": score, "total_questions": 10}, headers=DEMO)
        assert r.status_code == 200, r.text

    p = test_client.get("/v1/progress/S1", headers=DEMO).json()
    assert p["best_score"] == 9
    assert p["attempts"] == 3
    assert p["percentage"] == 30

    r = test_client.post("/v1/progress/S1", json={"score": -1, "total_questions": 10}, headers=DEMO)
    assert r.status_code == 422


def test_bookmarks_and_wrong_answers(test_client):
    assert test_client.put("/v1/bookmarks/5", headers=DEMO).status_code == 200
    assert test_client.put("/v1/bookmarks/5", headers=DEMO).status_code == 200
    assert test_client.get("/v1/bookmarks", headers=DEMO).json() == {"question_ids": [5]}

    r = test_client.delete("/v1/bookmarks/5", headers=DEMO)
    assert r.json()["removed"] is True
    assert test_client.get("/v1/bookmarks", headers=DEMO).json() == {"question_ids": []}

    for _ in range(3):
        r = test_client.post("/v1/wrong-answers/8", headers=DEMO)
    assert r.json()["wrong_count"] == 3
    items = test_client.get("/v1/wrong-answers", headers=DEMO).json()["items"]
    assert items[0]["question_id"] == 8

"""
人才端接口：档案、职位筛选、直接滑动、已投递列表，以及服务端滑卡牌堆。
"""
import pytest

from jobswipe.api.store import get_store
from jobswipe.jobs.schemas import JobCreate


def _post_job(client, headers, **kw):
    body = {"title": "Backend Engineer", "description": "Build APIs", "job_type": "remote",
            "experience_required": 3, "location": "Remote", "skills_required": ["Python"]}
    body.update(kw)
    r = client.post("/v1/company/jobs", json=body, headers=headers)
    assert r.status_code == 201, r.text
    return r.json()


@pytest.fixture
def company(register):
    return register("company", "Acme")


@pytest.fixture
def talent(register):
    return register("talent", "Grace")


# ----- 档案 -----


def test_profile_update(client, talent):
    _, headers = talent
    r = client.put("/v1/talent/profile", json={"skills": ["Python", " ", "Go "], "experience_years": 4},
                   headers=headers)
    assert r.status_code == 200
    data = r.json()
    assert data["skills"] == ["Python", "Go"]
    assert data["experience_years"] == 4
    assert data["full_name"] == "Grace"


# ----- 职位列表 -----


def test_jobs_filtered_and_swiped_excluded(client, company, talent):
    _, ch = company
    _, th = talent
    py = _post_job(client, ch, title="Python Dev")
    _post_job(client, ch, title="Frontend Dev", job_type="onsite", skills_required=["React"],
              location="Berlin", experience_required=8)

    r = client.get("/v1/talent/jobs", headers=th)
    assert r.json()["total"] == 2

    r = client.get("/v1/talent/jobs?job_type=remote&max_experience=5&skills=pyth", headers=th)
    assert [j["id"] for j in r.json()["jobs"]] == [py["id"]]
    assert r.json()["jobs"][0]["company"]["company_name"] == "Acme"

    r = client.get("/v1/talent/jobs?job_type=all&location=berl", headers=th)
    assert [j["title"] for j in r.json()["jobs"]] == ["Frontend Dev"]

    client.post("/v1/talent/swipes", json={"job_id": py["id"], "direction": "left"}, headers=th)
    r = client.get("/v1/talent/jobs", headers=th)
    assert [j["title"] for j in r.json()["jobs"]] == ["Frontend Dev"]


def test_jobs_invalid_filter_400(client, talent):
    _, th = talent
    r = client.get("/v1/talent/jobs?job_type=underwater", headers=th)
    assert r.status_code == 400


def test_inactive_jobs_hidden(client, company, talent):
    _, ch = company
    _, th = talent
    _post_job(client, ch, is_active=False)
    assert client.get("/v1/talent/jobs", headers=th).json()["total"] == 0


# ----- 滑动与投递 -----


def test_right_swipe_notifies_company(client, company, talent):
    company_id, ch = company
    talent_id, th = talent
    job = _post_job(client, ch)

    r = client.post("/v1/talent/swipes", json={"job_id": job["id"], "direction": "right"}, headers=th)
    assert r.status_code == 200
    assert r.json()["application_status"] == "pending"

    notes = client.get("/v1/notifications", headers=ch).json()
    assert notes["unread_count"] == 1
    n = notes["notifications"][0]
    assert n["type"] == "application_received"
    assert n["message"] == "A candidate has applied to Backend Engineer"
    assert n["related_talent_id"] == talent_id

    apps = client.get("/v1/talent/applications", headers=th).json()
    assert [a["job_id"] for a in apps] == [job["id"]]
    assert apps[0]["job"]["company"]["company_name"] == "Acme"


def test_left_swipe_is_not_an_application(client, company, talent):
    _, ch = company
    _, th = talent
    job = _post_job(client, ch)
    client.post("/v1/talent/swipes", json={"job_id": job["id"], "direction": "left"}, headers=th)
    assert client.get("/v1/talent/applications", headers=th).json() == []
    assert client.get("/v1/notifications", headers=ch).json()["unread_count"] == 0


def test_swipe_unknown_job_404(client, talent):
    _, th = talent
    r = client.post("/v1/talent/swipes", json={"job_id": "nope", "direction": "right"}, headers=th)
    assert r.status_code == 404


# ----- 牌堆 -----


@pytest.fixture
def deck(client, company, talent):
    """公司发布 3 个职位（A 最早、C 最新），人才建牌堆。"""
    _, ch = company
    _, th = talent
    jobs = [_post_job(client, ch, title=t) for t in ("A", "B", "C")]
    r = client.post("/v1/talent/deck", json={}, headers=th)
    assert r.status_code == 200
    return th, ch, {j["title"]: j["id"] for j in jobs}, r.json()


def test_deck_starts_at_newest(deck):
    _, _, _, view = deck
    assert view["current"]["title"] == "C"
    assert view["next"]["title"] == "B"
    assert view["position"] == 1
    assert view["total"] == 3
    assert view["can_undo"] is False


def test_deck_requires_reset_first(client, talent):
    _, th = talent
    assert client.get("/v1/talent/deck", headers=th).status_code == 404


def test_deck_commit_undo_recommit(client, deck):
    th, ch, ids, _ = deck
    r = client.post("/v1/talent/deck/commit", json={"direction": "apply"}, headers=th).json()
    assert r["decision"] == {"candidate_id": ids["C"], "direction": "accept"}
    assert r["deck"]["current"]["title"] == "B"
    assert r["deck"]["last_exit_x"] == 1000.0

    r = client.post("/v1/talent/deck/undo", headers=th).json()
    assert r["moved"] is True
    assert r["deck"]["current"]["title"] == "C"

    r = client.post("/v1/talent/deck/commit", json={"direction": "pass"}, headers=th).json()
    assert r["decision"]["direction"] == "reject"
    assert r["deck"]["position"] == 2

    # 最新一次决定覆盖之前的投递
    swipes = get_store().list_swipes(job_ids=[ids["C"]])
    assert len(swipes) == 1
    assert swipes[0].direction == "left"
    assert client.get("/v1/talent/applications", headers=th).json() == []
    # 第一次右滑产生的通知不会撤回
    assert client.get("/v1/notifications", headers=ch).json()["unread_count"] == 1


def test_deck_gesture_threshold(client, deck):
    th, _, ids, _ = deck
    client.post("/v1/talent/deck/gesture", json={"phase": "begin"}, headers=th)
    r = client.post("/v1/talent/deck/gesture", json={"phase": "update", "delta_x": 50}, headers=th).json()
    assert r["deck"]["gesture"]["delta_x"] == 50
    assert r["deck"]["gesture"]["crossed"] is False

    r = client.post("/v1/talent/deck/gesture", json={"phase": "end"}, headers=th).json()
    assert r["decision"] is None
    assert r["deck"]["gesture"]["delta_x"] == 0
    assert r["deck"]["current"]["title"] == "C"

    client.post("/v1/talent/deck/gesture", json={"phase": "begin"}, headers=th)
    client.post("/v1/talent/deck/gesture", json={"phase": "update", "delta_x": -150}, headers=th)
    r = client.post("/v1/talent/deck/gesture", json={"phase": "end"}, headers=th).json()
    assert r["decision"] == {"candidate_id": ids["C"], "direction": "reject"}
    assert r["deck"]["current"]["title"] == "B"


def test_deck_update_requires_delta(client, deck):
    th, *_ = deck
    r = client.post("/v1/talent/deck/gesture", json={"phase": "update"}, headers=th)
    assert r.status_code == 400


def test_deck_exhausted_commit_409(client, deck):
    th, *_ = deck
    for _ in range(3):
        client.post("/v1/talent/deck/commit", json={"direction": "pass"}, headers=th)
    view = client.get("/v1/talent/deck", headers=th).json()
    assert view["exhausted"] is True
    assert view["current"] is None
    assert view["position"] == 3
    r = client.post("/v1/talent/deck/commit", json={"direction": "apply"}, headers=th)
    assert r.status_code == 409
    assert r.json()["detail"]["code"] == "deck_exhausted"
    # 已看完仍可回看上一张
    assert client.post("/v1/talent/deck/undo", headers=th).json()["moved"] is True


def test_deck_reset_applies_filters_and_excludes_swiped(client, deck):
    th, _, ids, _ = deck
    client.post("/v1/talent/deck/commit", json={"direction": "pass"}, headers=th)
    r = client.post("/v1/talent/deck", json={"job_type": "all"}, headers=th).json()
    assert r["total"] == 2
    assert r["position"] == 1
    assert r["current"]["id"] == ids["B"]

    r = client.post("/v1/talent/deck", json={"skills": "cobol"}, headers=th).json()
    assert r["total"] == 0
    assert r["exhausted"] is True


def test_deck_sink_failure_advances_with_error(client, deck):
    th, ch, ids, _ = deck
    client.delete(f"/v1/company/jobs/{ids['C']}", headers=ch)
    r = client.post("/v1/talent/deck/commit", json={"direction": "apply"}, headers=th)
    assert r.status_code == 200
    data = r.json()
    assert data["error"]
    assert data["decision"] is None
    assert data["deck"]["current"]["title"] == "B"


def test_deck_with_mock_source_does_not_persist(client, talent, monkeypatch):
    _, th = talent
    monkeypatch.setenv("JOBSWIPE_JOB_SOURCE", "mock")
    view = client.post("/v1/talent/deck", json={}, headers=th).json()
    assert view["total"] == 10
    r = client.post("/v1/talent/deck/commit", json={"direction": "apply"}, headers=th).json()
    assert r["error"] is None
    assert r["decision"]["direction"] == "accept"
    assert get_store().list_swipes() == []


def test_deck_threshold_from_config(client, company, talent, monkeypatch):
    _, ch = company
    _, th = talent
    _post_job(client, ch)
    monkeypatch.setenv("JOBSWIPE_SWIPE_THRESHOLD", "40")
    assert client.post("/v1/talent/deck", json={}, headers=th).json()["threshold"] == 40
    client.post("/v1/talent/deck/gesture", json={"phase": "update", "delta_x": 45}, headers=th)
    r = client.post("/v1/talent/deck/gesture", json={"phase": "end"}, headers=th).json()
    assert r["decision"]["direction"] == "accept"


def test_null_job_update_keeps_listing_and_deck_working(client, company, talent):
    _, ch = company
    _, th = talent
    job = _post_job(client, ch, experience_required=2)
    client.put(f"/v1/company/jobs/{job['id']}",
               json={"experience_required": None, "skills_required": None, "title": None}, headers=ch)

    r = client.get("/v1/talent/jobs?max_experience=5&skills=pyth", headers=th)
    assert r.status_code == 200
    assert [j["id"] for j in r.json()["jobs"]] == [job["id"]]

    r = client.post("/v1/talent/deck", json={"skills": "py"}, headers=th)
    assert r.status_code == 200
    assert r.json()["current"]["title"] == "Backend Engineer"


def test_profile_update_ignores_null_skills(client, talent):
    _, th = talent
    client.put("/v1/talent/profile", json={"skills": ["Go"]}, headers=th)
    r = client.put("/v1/talent/profile", json={"skills": None, "bio": "hi"}, headers=th)
    assert r.status_code == 200
    assert r.json()["skills"] == ["Go"]
    assert r.json()["bio"] == "hi"


def test_deck_gesture_on_exhausted_deck_409(client, talent):
    _, th = talent
    client.post("/v1/talent/deck", json={}, headers=th)
    r = client.post("/v1/talent/deck/gesture", json={"phase": "begin"}, headers=th)
    assert r.status_code == 409
    assert r.json()["detail"]["code"] == "deck_exhausted"


def test_logout_drops_deck(client, company, talent):
    _, ch = company
    _post_job(client, ch)
    register_body = {"email": "deck@example.com", "password": "secret123", "confirm_password": "secret123",
                     "role": "talent", "full_name": "Deck"}
    token = client.post("/v1/auth/register", json=register_body).json()["token"]
    headers = {"Authorization": f"Bearer {token}"}
    assert client.post("/v1/talent/deck", json={}, headers=headers).status_code == 200

    client.post("/v1/auth/logout", headers=headers)
    token = client.post("/v1/auth/login", json={"email": "deck@example.com", "password": "secret123"}).json()["token"]
    headers = {"Authorization": f"Bearer {token}"}
    r = client.get("/v1/talent/deck", headers=headers)
    assert r.status_code == 404
    assert r.json()["detail"]["code"] == "deck_not_found"


def test_right_swipe_notification_uses_job_from_same_write(company, talent):
    company_id, _ = company
    talent_id, _ = talent
    store = get_store()
    job = store.create_job(company_id, JobCreate(title="Ops", description="d"))
    swipe, snapshot, created = store.record_swipe(talent_id, job.id, "right")
    assert created is True
    assert snapshot.id == job.id
    assert snapshot.company_id == company_id
    _, _, created = store.record_swipe(talent_id, job.id, "left")
    assert created is False

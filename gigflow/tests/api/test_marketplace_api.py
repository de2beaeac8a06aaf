import logging
import uuid
from decimal import Decimal

from gigflow.core.logging import RequestIdFilter
from gigflow.db.session import build_engine, build_session_factory
from gigflow.db.store import EntityStore
from gigflow.policies.rbac import Principal
from gigflow.services.auth_service import AuthService


def register(client, name, password="pass123"):
    email = f"{name}-{uuid.uuid4().hex[:6]}@example.com"
    r = client.post("/api/auth/register", json={"name": name, "email": email, "password": password})
    assert r.status_code == 201, r.text
    return email


def login(client, email, password="pass123") -> dict:
    r = client.post("/api/auth/login", json={"email": email, "password": password})
    assert r.status_code == 200, r.text
    # keep tests on explicit bearer tokens
    client.cookies.clear()
    return {"Authorization": f"Bearer {r.json()['accessToken']}"}


def new_user(client, name):
    return login(client, register(client, name))


def test_health_pings_store_and_echoes_request_id(client):
    r = client.get("/api/health", headers={"X-Request-Id": "rid-123"})
    assert r.status_code == 200
    assert r.json() == {"status": "ok", "database": "ok", "requestId": "rid-123"}
    assert r.headers["X-Request-Id"] == "rid-123"


def test_health_reports_unreachable_store(client, settings):
    dead = build_engine(settings.model_copy(update={"database_url": "sqlite:////nonexistent-dir/gigflow.db"}))
    client.app.state.store = EntityStore(build_session_factory(dead))
    try:
        r = client.get("/api/health")
    finally:
        dead.dispose()
    assert r.status_code == 503
    assert r.json()["database"] == "unavailable"
    assert r.headers["Retry-After"] == "1"


def test_end_to_end_hiring_flow(client):
    owner = new_user(client, "owner")
    f1 = new_user(client, "f1")
    f2 = new_user(client, "f2")

    r = client.post(
        "/api/gigs",
        json={"title": "Landing page", "description": "Static site", "budget": 500},
        headers=owner,
    )
    assert r.status_code == 201, r.text
    gig = r.json()
    assert gig["status"] == "Open"
    assert Decimal(str(gig["budget"])) == Decimal("500")

    listed = client.get("/api/gigs").json()
    assert gig["id"] in [g["id"] for g in listed]

    b1 = client.post("/api/bids", json={"gigId": gig["id"], "message": "I can do it"}, headers=f1)
    b2 = client.post("/api/bids", json={"gigId": gig["id"], "message": "Me too"}, headers=f2)
    assert b1.status_code == b2.status_code == 201
    b1, b2 = b1.json(), b2.json()
    assert b1["status"] == b2["status"] == "Pending"
    assert b1["freelancerName"] == "f1"

    hire = client.put(f"/api/bids/hire/{b1['id']}", headers=owner)
    assert hire.status_code == 200, hire.text
    assert hire.json()["gigId"] == gig["id"]
    assert hire.json()["hiredBidId"] == b1["id"]

    bids = {b["id"]: b["status"] for b in client.get(f"/api/bids/{gig['id']}", headers=owner).json()}
    assert bids == {b1["id"]: "Hired", b2["id"]: "Rejected"}

    assert client.get(f"/api/gigs/{gig['id']}").json()["status"] == "Assigned"
    assert gig["id"] not in [g["id"] for g in client.get("/api/gigs").json()]

    again = client.put(f"/api/bids/hire/{b2['id']}", headers=owner)
    assert again.status_code == 409
    assert again.json()["detail"]["error"] == "conflict"

    late = client.post("/api/bids", json={"gigId": gig["id"], "message": "Late"}, headers=f2)
    assert late.status_code == 409


def test_only_owner_can_hire_or_list_bids(client):
    owner = new_user(client, "owner")
    freelancer = new_user(client, "freelancer")

    gig = client.post("/api/gigs", json={"title": "Copywriting", "budget": 50}, headers=owner).json()
    bid = client.post("/api/bids", json={"gigId": gig["id"], "message": "Hi"}, headers=freelancer).json()

    assert client.put(f"/api/bids/hire/{bid['id']}", headers=freelancer).status_code == 403
    assert client.get(f"/api/bids/{gig['id']}", headers=freelancer).status_code == 403

    bids = client.get(f"/api/bids/{gig['id']}", headers=owner).json()
    assert [b["status"] for b in bids] == ["Pending"]


def test_unknown_ids_are_404(client):
    user = new_user(client, "someone")
    assert client.put(f"/api/bids/hire/{uuid.uuid4()}", headers=user).status_code == 404
    assert client.get(f"/api/gigs/{uuid.uuid4()}").status_code == 404
    r = client.post("/api/bids", json={"gigId": str(uuid.uuid4()), "message": "Hi"}, headers=user)
    assert r.status_code == 404


def test_invalid_creation_input_is_400(client):
    user = new_user(client, "poster")
    r = client.post("/api/gigs", json={"title": " ", "budget": 10}, headers=user)
    assert r.status_code == 400
    assert r.json()["detail"]["reason"] == "empty_title"

    r = client.post("/api/gigs", json={"title": "Ok", "budget": -5}, headers=user)
    assert r.status_code == 400
    assert r.json()["detail"]["reason"] == "negative_budget"


def test_authenticated_routes_require_identity(client):
    assert client.post("/api/gigs", json={"title": "x", "budget": 1}).status_code == 401
    assert client.put(f"/api/bids/hire/{uuid.uuid4()}").status_code == 401
    assert client.get(
        f"/api/bids/{uuid.uuid4()}", headers={"Authorization": "Bearer not-a-jwt"}
    ).status_code == 401


def test_login_cookie_authenticates_requests(client):
    email = register(client, "cookie")
    r = client.post("/api/auth/login", json={"email": email, "password": "pass123"})
    assert r.status_code == 200
    assert "token" in r.cookies

    me = client.get("/api/auth/me")
    assert me.status_code == 200
    assert me.json()["displayName"] == "cookie"

    client.post("/api/auth/logout")
    client.cookies.clear()
    assert client.get("/api/auth/me").status_code == 401


def test_register_and_login_failures(client):
    email = register(client, "dup")
    r = client.post("/api/auth/register", json={"name": "dup2", "email": email, "password": "x"})
    assert r.status_code == 409

    assert client.post("/api/auth/login", json={"email": email, "password": "wrong"}).status_code == 401
    assert client.post(
        "/api/auth/login", json={"email": "nobody@example.com", "password": "pass123"}
    ).status_code == 401


def test_token_for_deleted_user_is_404_not_500(client, settings):
    owner = new_user(client, "owner")
    gig = client.post("/api/gigs", json={"title": "Logo", "budget": 20}, headers=owner).json()

    token = AuthService(client.app.state.store, settings).issue_token(Principal(uuid.uuid4(), "ghost"))
    ghost = {"Authorization": f"Bearer {token}"}

    r = client.post("/api/gigs", json={"title": "Haunted", "budget": 1}, headers=ghost)
    assert r.status_code == 404, r.text
    assert r.json()["detail"]["reason"] == "user_not_found"

    r = client.post("/api/bids", json={"gigId": gig["id"], "message": "boo"}, headers=ghost)
    assert r.status_code == 404, r.text
    assert r.json()["detail"]["reason"] == "user_not_found"

    assert client.get(f"/api/bids/{gig['id']}", headers=owner).json() == []


def test_responses_use_camel_case_keys(client):
    owner = new_user(client, "owner")
    freelancer = new_user(client, "freelancer")

    gig = client.post("/api/gigs", json={"title": "Icons", "budget": 15}, headers=owner).json()
    assert {"ownerId", "createdAt"} <= set(gig)
    assert "owner_id" not in gig

    bid = client.post("/api/bids", json={"gigId": gig["id"], "message": "Hi"}, headers=freelancer).json()
    assert {"gigId", "freelancerId", "freelancerName", "createdAt"} <= set(bid)

    hire = client.put(f"/api/bids/hire/{bid['id']}", headers=owner).json()
    assert set(hire) == {"message", "gigId", "hiredBidId", "rejectedCount"}


def test_hire_logs_carry_request_id(client):
    owner = new_user(client, "owner")
    freelancer = new_user(client, "freelancer")
    gig = client.post("/api/gigs", json={"title": "Audit", "budget": 80}, headers=owner).json()
    bid = client.post("/api/bids", json={"gigId": gig["id"], "message": "Hi"}, headers=freelancer).json()

    records = []

    class Capture(logging.Handler):
        def emit(self, record):
            records.append(record)

    handler = Capture()
    handler.addFilter(RequestIdFilter())
    hire_logger = logging.getLogger("gigflow.services.hiring_service")
    hire_logger.addHandler(handler)
    previous = hire_logger.level
    hire_logger.setLevel(logging.INFO)
    try:
        ok = client.put(f"/api/bids/hire/{bid['id']}", headers={**owner, "X-Request-Id": "hire-1"})
        again = client.put(f"/api/bids/hire/{bid['id']}", headers={**owner, "X-Request-Id": "hire-2"})
    finally:
        hire_logger.removeHandler(handler)
        hire_logger.setLevel(previous)

    assert ok.status_code == 200
    assert again.status_code == 409
    by_rid = {r.request_id: r.getMessage() for r in records}
    assert "hire-1" in by_rid and "hired" in by_rid["hire-1"]
    assert "conflict" in by_rid["hire-2"]

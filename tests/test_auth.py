from fastapi.testclient import TestClient

from conftest import login
from felit.server.auth import hash_password, verify_password
from felit.server.sessions import SessionStore


def _sessions(app):
    return app.state.sessions


def test_login_with_form_redirects_and_records_admin_flag(app, client):
    resp = login(client, "root", "root-password")
    assert resp.status_code == 303
    assert resp.headers["location"] == "/"
    assert len(_sessions(app)) == 1
    (user,) = _sessions(app)._sessions.values()
    assert user.username == "root"
    assert user.is_admin is True


def test_login_with_json_body(app, client):
    resp = client.post(
        "/login", json={"username": "alice", "password": "alice-password"}, follow_redirects=False
    )
    assert resp.status_code == 303
    (user,) = _sessions(app)._sessions.values()
    assert user.username == "alice"
    assert user.is_admin is False


def test_wrong_password_and_unknown_user_look_the_same(app, client):
    bad_password = login(client, "alice", "nope")
    unknown = login(client, "mallory", "alice-password")
    for resp in (bad_password, unknown):
        assert resp.status_code == 401
        assert resp.text == "Invalid username/password"
    assert len(_sessions(app)) == 0
    assert client.get("/messages").status_code == 401


def test_username_is_case_sensitive(client):
    assert login(client, "Alice", "alice-password").status_code == 401


def test_missing_fields_are_unauthorized(app, client):
    resp = client.post("/login", json={"username": "alice"}, follow_redirects=False)
    assert resp.status_code == 401
    resp = client.post("/login", content=b"not json", headers={"content-type": "application/json"})
    assert resp.status_code == 401
    assert len(_sessions(app)) == 0


def test_logout_ends_session(app, alice):
    assert alice.get("/messages").status_code == 200
    resp = alice.post("/logout", follow_redirects=False)
    assert resp.status_code == 303
    assert resp.headers["location"] == "/login.html"
    assert alice.get("/messages").status_code == 401
    assert len(_sessions(app)) == 0


def test_replayed_cookie_after_logout_is_rejected(app, alice):
    cookie = alice.cookies.get("felit_session")
    assert cookie
    alice.post("/logout", follow_redirects=False)

    with TestClient(app) as replay:
        replay.cookies.set("felit_session", cookie)
        assert replay.get("/messages").status_code == 401


def test_tampered_cookie_is_rejected(app):
    with TestClient(app) as client:
        client.cookies.set("felit_session", "forged.value.signature")
        assert client.get("/messages").status_code == 401


def test_relogin_replaces_previous_session(app, alice):
    assert login(alice, "alice", "alice-password").status_code == 303
    assert len(_sessions(app)) == 1


def test_index_redirects_anonymous_to_login_page(client):
    resp = client.get("/", follow_redirects=False)
    assert resp.status_code == 303
    assert resp.headers["location"] == "/login.html"


def test_index_serves_chat_page_when_logged_in(alice):
    resp = alice.get("/")
    assert resp.status_code == 200
    assert 'id="chat"' in resp.text


def test_login_page_and_health_are_public(client):
    assert client.get("/login.html").status_code == 200
    resp = client.get("/.well-known/health")
    assert resp.status_code == 200
    assert resp.json() == {"status": "ok"}


def test_password_hashing_roundtrip():
    hashed = hash_password("s3cret", rounds=4)
    assert hashed != "s3cret"
    assert verify_password("s3cret", hashed)
    assert not verify_password("other", hashed)
    assert not verify_password("s3cret", "not-a-bcrypt-hash")


def test_session_store_entry_follows_login(app, alice):
    (session_id,) = _sessions(app)._sessions.keys()
    assert _sessions(app).get(session_id).username == "alice"


def test_abandoned_logins_do_not_accumulate(app):
    now = [0.0]
    app.state.sessions = SessionStore(max_age=30, clock=lambda: now[0])
    for _ in range(20):
        with TestClient(app) as browser:
            assert login(browser, "alice", "alice-password").status_code == 303
    assert len(app.state.sessions) == 20

    now[0] += 31
    with TestClient(app) as browser:
        assert login(browser, "alice", "alice-password").status_code == 303
        assert browser.get("/messages").status_code == 200
    assert len(app.state.sessions) == 1


def test_expired_session_is_unauthorized(app, alice):
    now = [0.0]
    app.state.sessions = SessionStore(max_age=30, clock=lambda: now[0])
    assert login(alice, "alice", "alice-password").status_code == 303
    assert alice.get("/messages").status_code == 200
    now[0] += 30
    assert alice.get("/messages").status_code == 401
    assert len(app.state.sessions) == 0


def test_overlong_password_is_rejected_not_crashing(client):
    assert login(client, "alice", "x" * 100).status_code == 401

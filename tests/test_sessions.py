from felit.server.sessions import SessionStore, SessionUser


def test_create_and_get():
    store = SessionStore()
    session_id = store.create(7, "alice", 0)
    assert store.get(session_id) == SessionUser(user_id=7, username="alice", is_admin=False)
    assert len(store) == 1


def test_session_ids_are_unique():
    store = SessionStore()
    ids = {store.create(1, "alice", False) for _ in range(50)}
    assert len(ids) == 50


def test_unknown_or_missing_ids():
    store = SessionStore()
    assert store.get(None) is None
    assert store.get("") is None
    assert store.get("nope") is None
    assert store.discard(None) is None


def test_discard_forgets_session():
    store = SessionStore()
    session_id = store.create(1, "root", True)
    assert store.discard(session_id).is_admin is True
    assert store.get(session_id) is None
    assert len(store) == 0


class FakeClock:
    def __init__(self):
        self.now = 1000.0

    def __call__(self):
        return self.now


def test_expired_entry_is_treated_as_missing():
    clock = FakeClock()
    store = SessionStore(max_age=60, clock=clock)
    session_id = store.create(1, "alice", False)
    clock.now += 59
    assert store.get(session_id) is not None
    clock.now += 1
    assert store.get(session_id) is None
    assert len(store) == 0


def test_create_prunes_abandoned_sessions():
    clock = FakeClock()
    store = SessionStore(max_age=60, clock=clock)
    for _ in range(20):
        store.create(1, "alice", False)
    assert len(store) == 20

    clock.now += 61
    fresh = store.create(1, "alice", False)
    assert len(store) == 1
    assert store.get(fresh).username == "alice"


def test_no_max_age_keeps_entries():
    clock = FakeClock()
    store = SessionStore(clock=clock)
    session_id = store.create(1, "alice", False)
    clock.now += 10 ** 9
    assert store.prune() == 0
    assert store.get(session_id) is not None

import threading

from chatapp.realtime import Presence, NEW_MESSAGE_EVENT, ONLINE_USERS_EVENT

from conftest import build_app


def _signup(client, email, name):
    resp = client.post(
        "/api/auth/signup",
        json={"full_name": name, "email": email, "password": "secret123"},
    )
    return resp.get_json()["user_id"]


def _events(sio_client, name):
    return [e["args"][0] for e in sio_client.get_received() if e["name"] == name]


def test_presence_tracks_multiple_sockets_per_user():
    p = Presence()
    p.add("u1", "s1")
    p.add("u1", "s2")
    p.add("u2", "s3")
    assert p.online_user_ids() == ["u1", "u2"]
    assert p.sids_for("u1") == ["s1", "s2"]

    assert p.remove("s1") == "u1"
    assert p.online_user_ids() == ["u1", "u2"]
    assert p.remove("s2") == "u1"
    assert p.online_user_ids() == ["u2"]
    assert p.sids_for("u1") == []
    assert p.remove("unknown") is None


def test_presence_is_thread_safe():
    p = Presence()

    def churn(n):
        for i in range(200):
            sid = f"{n}-{i}"
            p.add(f"user{n}", sid)
            p.remove(sid)

    threads = [threading.Thread(target=churn, args=(n,)) for n in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()
    assert p.online_user_ids() == []


def test_anonymous_socket_is_refused():
    app = build_app()
    socketio = app.extensions["socketio"]
    sio = socketio.test_client(app)
    assert not sio.is_connected()
    assert app.extensions["presence"].online_user_ids() == []


def test_connect_and_disconnect_broadcast_online_users():
    app = build_app()
    socketio = app.extensions["socketio"]
    http = app.test_client()
    user_id = _signup(http, "ada@example.com", "Ada")

    sio = socketio.test_client(app, flask_test_client=http)
    assert sio.is_connected()
    assert _events(sio, ONLINE_USERS_EVENT)[-1] == [user_id]
    assert app.extensions["presence"].online_user_ids() == [user_id]

    sio.disconnect()
    assert app.extensions["presence"].online_user_ids() == []


def test_new_message_is_pushed_to_receiver_sockets():
    app = build_app()
    socketio = app.extensions["socketio"]
    alice, bob = app.test_client(), app.test_client()
    alice_id = _signup(alice, "alice@example.com", "Alice")
    bob_id = _signup(bob, "bob@example.com", "Bob")

    bob_tab1 = socketio.test_client(app, flask_test_client=bob)
    bob_tab2 = socketio.test_client(app, flask_test_client=bob)
    alice_sock = socketio.test_client(app, flask_test_client=alice)
    for s in (bob_tab1, bob_tab2, alice_sock):
        s.get_received()

    resp = alice.post(f"/api/messages/send/{bob_id}", json={"text": "ping"})
    assert resp.status_code == 201

    for tab in (bob_tab1, bob_tab2):
        pushed = _events(tab, NEW_MESSAGE_EVENT)
        assert len(pushed) == 1
        assert pushed[0]["sender_id"] == alice_id
        assert pushed[0]["text"] == "ping"
    assert _events(alice_sock, NEW_MESSAGE_EVENT) == []

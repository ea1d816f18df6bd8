"""DeliveryBridge 테스트."""

from talksync.events import NEW_MESSAGE, NOTIFICATION_NEW, SESSION_ACCEPTED, SESSION_REQUESTED


def test_deliver_to_online_user_passes_payload_unchanged(bridge, registry, make_connection):
    c2 = make_connection("c2", user_id="u2")
    registry.register("u2", c2)
    payload = {"senderId": "u1", "receiverId": "u2", "text": "안녕하세요", "seen": False}

    assert bridge.deliver_if_online("u2", "newMessage", payload) is True
    assert c2.sent == [("newMessage", payload)]
    assert c2.sent[0][1] is payload


def test_deliver_to_offline_user_is_noop(bridge, registry, make_connection):
    c1 = make_connection("c1", user_id="u1")
    registry.register("u1", c1)

    assert bridge.deliver_if_online("u2", "newMessage", {"text": "hi"}) is False
    assert bridge.deliver_if_online("", "newMessage", {"text": "hi"}) is False
    assert c1.sent == []


def test_deliver_with_non_string_user_id_is_noop(bridge, registry, make_connection):
    c1 = make_connection("c1", user_id="u1")
    registry.register("u1", c1)

    assert bridge.deliver_if_online({"id": "u1"}, "newMessage", {}) is False
    assert bridge.deliver_if_online(["u1"], "newMessage", {}) is False
    assert bridge.deliver_if_online(None, "newMessage", {}) is False
    assert c1.sent == []


def test_deliver_to_closed_connection_reports_not_delivered(bridge, registry, make_connection):
    c1 = make_connection("c1", user_id="u1")
    registry.register("u1", c1)
    c1.close()

    assert bridge.deliver_if_online("u1", "newMessage", {}) is False


def test_named_helpers_use_wire_event_names(bridge, registry, make_connection):
    c1 = make_connection("c1", user_id="u1")
    registry.register("u1", c1)
    session = {"fromUserId": "u2", "toUserId": "u1", "status": "pending"}

    bridge.notify_new_message("u1", {"text": "hello"})
    bridge.notify_session_requested("u1", "s-1", session)
    bridge.notify_session_accepted("u1", "s-1", {**session, "status": "accepted"})
    bridge.notify_notification("u1", {"title": "공지"})

    assert [event for event, _ in c1.sent] == [
        NEW_MESSAGE, SESSION_REQUESTED, SESSION_ACCEPTED, NOTIFICATION_NEW,
    ]
    assert c1.events(SESSION_REQUESTED) == [{"sessionId": "s-1", "session": session}]
    assert c1.events(SESSION_ACCEPTED)[0]["session"]["status"] == "accepted"
    assert NOTIFICATION_NEW == "notification:new"

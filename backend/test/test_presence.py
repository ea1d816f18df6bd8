"""PresenceBroadcaster / ConnectionHub 테스트."""

from talksync.events import GET_ONLINE_USERS


def test_announce_reaches_every_connection(hub, broadcaster, make_connection):
    anonymous = make_connection("anon")
    c1 = make_connection("c1", user_id="u1")
    hub.add(anonymous)
    hub.add(c1)

    queued = broadcaster.announce(["u1"])

    assert queued == 2
    assert anonymous.events(GET_ONLINE_USERS) == [["u1"]]
    assert c1.events(GET_ONLINE_USERS) == [["u1"]]


def test_registry_mutation_triggers_exactly_one_announcement(hub, registry, broadcaster, make_connection):
    c1 = make_connection("c1", user_id="u1")
    c2 = make_connection("c2", user_id="u2")
    hub.add(c1)
    registry.register("u1", c1)
    hub.add(c2)
    registry.register("u2", c2)

    assert c1.events(GET_ONLINE_USERS) == [["u1"], ["u1", "u2"]]
    assert c2.events(GET_ONLINE_USERS) == [["u1", "u2"]]

    hub.discard(c2)
    registry.unregister("u2", c2)

    assert c1.events(GET_ONLINE_USERS)[-1] == ["u1"]
    assert len(c1.events(GET_ONLINE_USERS)) == 3
    assert len(c2.events(GET_ONLINE_USERS)) == 1


def test_dead_connection_does_not_stall_others(hub, broadcaster, make_connection):
    dead = make_connection("dead")
    dead.close()
    alive = make_connection("alive")
    hub.add(dead)
    hub.add(alive)

    queued = broadcaster.announce(["u1", "u2"])

    assert queued == 1
    assert dead.sent == []
    assert alive.events(GET_ONLINE_USERS) == [["u1", "u2"]]


def test_announce_with_no_connections(broadcaster):
    assert broadcaster.announce([]) == 0


def test_hub_membership(hub, make_connection):
    c1, c2 = make_connection("c1"), make_connection("c2")
    hub.add(c1)
    hub.add(c2)

    assert c1 in hub
    assert len(hub) == 2
    assert list(hub) == [c1, c2]

    hub.discard(c1)
    hub.discard(c1)

    assert c1 not in hub
    assert list(hub) == [c2]


def test_hub_close_all(hub, make_connection):
    c1, c2 = make_connection("c1"), make_connection("c2")
    hub.add(c1)
    hub.add(c2)

    assert hub.close_all() == 2
    assert c1.closed and c2.closed
    assert len(hub) == 0
